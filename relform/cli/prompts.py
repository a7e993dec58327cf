"""Interactive form entry.

Prompts are injected so the flow can be driven from tests without a
terminal. Every answer goes through ``ReleaseForm.set_value`` so the
department and date synchronizers run exactly as they do for any other
edit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import fields
from datetime import date, datetime

from relform.form.labels import label_for
from relform.form.model import SINGLE_SELECT_CHOICES, Choice, DeliverableFlags, VersionTypeFlags
from relform.form.release_form import ReleaseForm
from relform.output.console import ConsoleProtocol, Style

__all__ = ["Ask", "Confirm", "fill_fields", "fill_form"]

Ask = Callable[[str, str], str]
Confirm = Callable[[str, bool], bool]

_TEXT_BEFORE_SCHEDULE = ("change_number", "system_name")
_TEXT_AFTER_SCHEDULE = ("primary_system_code", "secondary_system_code", "change_subject")
_TEXT_TAIL = ("others",)
_LOCATION_TEXT = ("project_path", "affected_systems", "impact_areas")
_APPLICANT = ("applicant.employee_id", "applicant.extension")


def fill_form(form: ReleaseForm, *, ask: Ask, confirm: Confirm, console: ConsoleProtocol) -> None:
    """Walk every control of the form in display order."""
    for path in SINGLE_SELECT_CHOICES:
        _ask_choice(form, path, SINGLE_SELECT_CHOICES[path], ask=ask, console=console)

    for path in _TEXT_BEFORE_SCHEDULE:
        if path == "change_number" and not form.variant.show_change_number:
            continue
        _ask_text(form, path, ask=ask)

    _ask_date(form, ask=ask, console=console)
    _ask_time(form, ask=ask, console=console)

    for path in _TEXT_AFTER_SCHEDULE:
        _ask_text(form, path, ask=ask)

    console.header(label_for("version_types"))
    _ask_flags(form, "version_types", VersionTypeFlags, confirm=confirm)

    _ask_request_numbers(form, ask=ask)

    console.header(label_for("deliverables"))
    _ask_flags(form, "deliverables", DeliverableFlags, confirm=confirm)
    for path in _TEXT_TAIL:
        _ask_text(form, path, ask=ask)

    _ask_department(form, ask=ask, console=console)
    _ask_division(form, ask=ask, console=console)
    for path in (*_LOCATION_TEXT, *_APPLICANT):
        _ask_text(form, path, ask=ask)


def fill_fields(
    form: ReleaseForm,
    paths: Iterable[str],
    *,
    ask: Ask,
    confirm: Confirm,
    console: ConsoleProtocol,
) -> None:
    """Re-prompt only ``paths`` (the fields that failed validation)."""
    for path in paths:
        head, _, rest = path.partition(".")
        if path in SINGLE_SELECT_CHOICES:
            _ask_choice(form, path, SINGLE_SELECT_CHOICES[path], ask=ask, console=console)
        elif path == "scheduled_time.date":
            _ask_date(form, ask=ask, console=console)
        elif path == "scheduled_time.time":
            _ask_time(form, ask=ask, console=console)
        elif path == "version_types":
            _ask_flags(form, "version_types", VersionTypeFlags, confirm=confirm)
        elif head == "request_numbers" and rest.isdigit():
            _ask_text(form, path, ask=ask)
        elif path == "request_numbers":
            _ask_request_numbers(form, ask=ask)
        elif path == "department":
            _ask_department(form, ask=ask, console=console)
        elif path == "division":
            _ask_division(form, ask=ask, console=console)
        else:
            _ask_text(form, path, ask=ask)


def _ask_text(form: ReleaseForm, path: str, *, ask: Ask) -> None:
    current = form.get(path)
    answer = ask(label_for(path, form.variant), current if isinstance(current, str) else "")
    form.touch(path)
    form.set_value(path, answer.strip())


def _ask_choice(
    form: ReleaseForm,
    path: str,
    choices: tuple[Choice, ...],
    *,
    ask: Ask,
    console: ConsoleProtocol,
) -> None:
    options = ", ".join(f"{c.value} ({c.label})" for c in choices)
    current = form.get(path)
    while True:
        answer = ask(f"{label_for(path)} [{options}]", current if isinstance(current, str) else "")
        value = _match_choice(answer.strip(), choices)
        if value is not None:
            form.touch(path)
            form.set_value(path, value)
            return
        console.warning(f"choose one of: {options}")


def _match_choice(answer: str, choices: tuple[Choice, ...]) -> str | None:
    for choice in choices:
        if answer in (choice.value, choice.label):
            return choice.value
    if answer.isdigit() and 1 <= int(answer) <= len(choices):
        return choices[int(answer) - 1].value
    return None


def _ask_date(form: ReleaseForm, *, ask: Ask, console: ConsoleProtocol) -> None:
    current = form.state.scheduled_time.date
    while True:
        answer = ask(
            f"{label_for('scheduled_time.date')} [YYYY-MM-DD]",
            current.isoformat() if current else "",
        ).strip()
        try:
            value = date.fromisoformat(answer)
        except ValueError:
            console.warning(f"not a date: {answer!r}")
            continue
        form.touch("scheduled_time.date")
        form.set_value("scheduled_time.date", value)
        return


def _ask_time(form: ReleaseForm, *, ask: Ask, console: ConsoleProtocol) -> None:
    scheduled = form.state.scheduled_time
    while True:
        answer = ask(
            f"{label_for('scheduled_time.time')} [HH:MM]",
            scheduled.time.strftime("%H:%M") if scheduled.time else "",
        ).strip()
        try:
            parsed = datetime.strptime(answer, "%H:%M")
        except ValueError:
            console.warning(f"not a time: {answer!r}")
            continue
        on = scheduled.date or date.today()
        value = datetime(on.year, on.month, on.day, parsed.hour, parsed.minute)
        form.touch("scheduled_time.time")
        form.set_value("scheduled_time.time", value)
        return


def _ask_flags(form: ReleaseForm, group: str, cls: type, *, confirm: Confirm) -> None:
    for f in fields(cls):
        path = f"{group}.{f.name}"
        current = form.get(path)
        answer = confirm(_flag_label(f.name), bool(current))
        form.touch(path)
        form.set_value(path, answer)
    form.touch(group)


def _flag_label(name: str) -> str:
    return name.replace("_", " ").capitalize()


def _ask_request_numbers(form: ReleaseForm, *, ask: Ask) -> None:
    """Ask for entries until a blank answer; at least one entry is kept."""
    existing = [n for n in form.state.request_numbers if n.strip()]
    for _ in range(len(form.state.request_numbers) - 1):
        form.remove_request_number(len(form.state.request_numbers) - 1)
    form.set_value("request_numbers.0", "")

    index = 0
    while True:
        default = existing[index] if index < len(existing) else ""
        answer = ask(f"Request number #{index + 1} (blank to finish)", default).strip()
        if not answer:
            break
        if index > 0:
            form.add_request_number()
        form.touch(f"request_numbers.{index}")
        form.set_value(f"request_numbers.{index}", answer)
        index += 1
    form.touch("request_numbers")


def _ask_department(form: ReleaseForm, *, ask: Ask, console: ConsoleProtocol) -> None:
    names = form.departments
    for i, name in enumerate(names, start=1):
        console.print(f"  {i}. {name}", Style.DIM)
    value = _ask_listed(label_for("department"), names, form.state.department, ask=ask, console=console)
    form.touch("department")
    form.set_value("department", value)


def _ask_division(form: ReleaseForm, *, ask: Ask, console: ConsoleProtocol) -> None:
    names = form.divisions
    if not names:
        return
    for i, name in enumerate(names, start=1):
        console.print(f"  {i}. {name}", Style.DIM)
    value = _ask_listed(label_for("division"), names, form.state.division, ask=ask, console=console)
    form.touch("division")
    form.set_value("division", value)


def _ask_listed(
    label: str,
    names: tuple[str, ...],
    current: str,
    *,
    ask: Ask,
    console: ConsoleProtocol,
) -> str:
    while True:
        answer = ask(label, current).strip()
        if answer in names:
            return answer
        if answer.isdigit() and 1 <= int(answer) <= len(names):
            return names[int(answer) - 1]
        console.warning(f"choose a number between 1 and {len(names)}")
