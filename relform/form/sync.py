"""Synchronizers reacting to user edits.

Field reactions run in the order of ``FIELD_REACTIONS`` and always before
the form-level reactions registered on the form, so anything derived from
department/division never sees a stale division.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from relform.form.release_form import ReleaseForm

__all__ = ["FIELD_REACTIONS", "FieldReaction", "sync_divisions", "sync_time_to_date"]

logger = logging.getLogger(__name__)

FieldReaction = Callable[["ReleaseForm", object, object], None]


def sync_divisions(form: ReleaseForm, previous: object, department: object) -> None:
    """Repopulate division choices after a department change.

    A division that is not offered by the new department is cleared.
    """
    if department == previous or not isinstance(department, str):
        return

    form.divisions = form.catalog.divisions_for(department)
    if department and department not in form.catalog:
        logger.debug("unknown department %r, no divisions offered", department)

    if form.state.division and form.state.division not in form.divisions:
        logger.debug("clearing division %r (not in %r)", form.state.division, department)
        form.set_value("division", "", emit=False)


def sync_time_to_date(form: ReleaseForm, previous: object, new_date: object) -> None:
    """Move the chosen time of day onto the newly picked date.

    Hour and minute are kept. With no time chosen yet the time stays empty.
    The write does not count as a user edit.
    """
    if not isinstance(new_date, date):
        return

    current = form.state.scheduled_time.time
    if current is None:
        return

    moved = current.replace(
        year=new_date.year,
        month=new_date.month,
        day=new_date.day,
        second=0,
        microsecond=0,
    )
    form.set_value("scheduled_time.time", moved, emit=False)


FIELD_REACTIONS: tuple[tuple[str, FieldReaction], ...] = (
    ("department", sync_divisions),
    ("scheduled_time.date", sync_time_to_date),
)
