"""The release-request form: state, interaction flags and reactions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from relform.core.result import Err, Ok, Result
from relform.form.catalog import DEFAULT_CATALOG, DepartmentCatalog
from relform.form.controls import build_tree, iter_paths
from relform.form.model import FormState, get_value, with_value
from relform.form.sync import FIELD_REACTIONS
from relform.form.validation import FormErrors, validate
from relform.form.variants import RELEASE, FormVariant

__all__ = ["FormReaction", "ReleaseForm"]

logger = logging.getLogger(__name__)

FormReaction = Callable[["ReleaseForm"], None]

_REQUEST_NUMBERS = "request_numbers"


class ReleaseForm:
    """Holds the current ``FormState`` and everything the UI asks about it.

    User edits go through ``set_value``; it records the path as dirty and
    runs the field synchronizers followed by any form-level reactions
    passed in ``on_change``.
    """

    def __init__(
        self,
        *,
        variant: FormVariant = RELEASE,
        catalog: DepartmentCatalog = DEFAULT_CATALOG,
        on_change: tuple[FormReaction, ...] = (),
    ) -> None:
        self.variant = variant
        self.catalog = catalog
        self.state = FormState()
        self.divisions: tuple[str, ...] = ()
        self.touched: set[str] = set()
        self.dirty: set[str] = set()
        self._on_change = on_change

    @property
    def departments(self) -> tuple[str, ...]:
        return self.catalog.department_names()

    def get(self, path: str) -> object:
        return get_value(self.state, path)

    def set_value(self, path: str, value: object, *, emit: bool = True) -> None:
        """Write ``value`` at ``path``.

        With ``emit=False`` the write is silent: not marked dirty and no
        reactions run. Synchronizers use this for their own writes.

        Raises:
            KeyError: ``path`` does not name a form control.
        """
        previous = get_value(self.state, path)
        self.state = with_value(self.state, path, value)
        if not emit:
            return

        self.dirty.add(path)
        self._run_field_reactions(path, previous, value)
        self._notify()

    def _run_field_reactions(self, path: str, previous: object, value: object) -> None:
        for watched, reaction in FIELD_REACTIONS:
            if watched == path:
                reaction(self, previous, value)

    def _notify(self) -> None:
        for on_change in self._on_change:
            on_change(self)

    def touch(self, path: str) -> None:
        self.touched.add(path)

    # Request numbers

    def add_request_number(self, value: str = "") -> None:
        self.state = replace(self.state, request_numbers=(*self.state.request_numbers, value))

    def remove_request_number(self, index: int) -> None:
        """Remove one entry; the last remaining entry is never removed."""
        numbers = self.state.request_numbers
        if len(numbers) <= 1 or not 0 <= index < len(numbers):
            return
        self.state = replace(
            self.state, request_numbers=numbers[:index] + numbers[index + 1 :]
        )
        self.touched = _reindex(self.touched, index)
        self.dirty = _reindex(self.dirty, index)

    # Validation

    def errors(self) -> FormErrors:
        return validate(self.state, variant=self.variant, catalog=self.catalog)

    def is_valid(self) -> bool:
        return not self.errors()

    def is_field_invalid(self, path: str) -> bool:
        """True when ``path`` (or, for a group, any control below it) breaks a
        rule and the user has interacted with it.
        """
        prefix = f"{path}."
        broken = any(key == path or key.startswith(prefix) for key in self.errors())
        return broken and (path in self.touched or path in self.dirty)

    def mark_all_touched(self) -> None:
        """Flag every field, group, list and list entry as touched and dirty."""
        for path in iter_paths(build_tree(self.state)):
            self.touched.add(path)
            self.dirty.add(path)

    def submit(self) -> Result[FormState, FormErrors]:
        """Return the state if valid; otherwise reveal every error."""
        errors = self.errors()
        if errors:
            self.mark_all_touched()
            return Err(errors)
        return Ok(self.state)

    # Bulk updates

    def load(self, state: FormState) -> None:
        """Replace the whole state, as when opening a saved or demo form.

        Department goes first so its divisions are known before the rest
        of the values are applied. Form-level reactions run once, after
        the whole state is in place.
        """
        self.reset()
        self.set_value("department", state.department, emit=False)
        self._run_field_reactions("department", "", state.department)

        division = state.division
        if division and division not in self.divisions:
            logger.warning(
                "division %r is not offered by department %r; cleared",
                division,
                state.department,
            )
            division = ""

        numbers = state.request_numbers or ("",)
        self.state = replace(
            state,
            department=self.state.department,
            division=division,
            request_numbers=numbers,
        )
        self._notify()

    def reset(self) -> None:
        self.state = FormState()
        self.divisions = ()
        self.touched.clear()
        self.dirty.clear()


def _reindex(paths: set[str], removed: int) -> set[str]:
    """Shift request-number flags after removing entry ``removed``."""
    out: set[str] = set()
    prefix = f"{_REQUEST_NUMBERS}."
    for path in paths:
        if not path.startswith(prefix):
            out.add(path)
            continue
        head, _, rest = path[len(prefix) :].partition(".")
        index = int(head)
        if index == removed:
            continue
        if index > removed:
            index -= 1
        out.add(f"{prefix}{index}" + (f".{rest}" if rest else ""))
    return out
