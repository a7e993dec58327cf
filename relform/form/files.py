"""Form files: a saved form as JSON (or hand-written TOML).

Keys follow the ``FormState`` field names::

    {
      "schema": 1,
      "risk_level": "low",
      "scheduled_time": {"date": "2025-01-20", "time": "14:30"},
      "request_numbers": ["TEST202402001"],
      "version_types": {"normal_version": true},
      ...
    }

Unknown keys are ignored so files written by newer versions still load.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from datetime import date, datetime, time
from pathlib import Path

from relform.core.result import Err, Ok, Result
from relform.core.structured import StrDict, as_str_dict, get_bool, get_list, get_table, get_text
from relform.form.model import (
    Applicant,
    DeliverableFlags,
    FormState,
    ScheduledTime,
    VersionTypeFlags,
)
from relform.platform.files import atomic_write_text

__all__ = [
    "FORM_SCHEMA",
    "FormFileError",
    "form_state_from_dict",
    "form_state_to_dict",
    "load_form_file",
    "write_form_file",
]

FORM_SCHEMA = 1

# Free-text and single-select fields stored as plain strings.
_TEXT_FIELDS = (
    "risk_level",
    "type",
    "version_type",
    "change_number",
    "system_name",
    "primary_system_code",
    "secondary_system_code",
    "change_subject",
    "others",
    "department",
    "division",
    "project_path",
    "affected_systems",
    "impact_areas",
)


@dataclass(frozen=True, slots=True)
class FormFileError:
    message: str
    path: Path | None = None
    hint: str | None = None


def _parse_date(raw: object) -> date | None:
    """Accept ``YYYY-MM-DD`` text or a native TOML date."""
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise TypeError("'scheduled_time.date' must be a date")
    return date.fromisoformat(raw.strip()[:10])


def _parse_time(raw: object, on: date | None) -> datetime | None:
    """Accept ``HH:MM``, an ISO datetime, or native TOML time/datetime values."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, time):
        return datetime.combine(on or date.today(), raw)
    if raw is None or raw == "":
        return None
    if not isinstance(raw, str):
        raise TypeError("'scheduled_time.time' must be a time")
    text = raw.strip()
    if "T" in text or " " in text:
        return datetime.fromisoformat(text)
    return datetime.combine(on or date.today(), time.fromisoformat(text))


def _table(data: StrDict, key: str) -> StrDict:
    """Nested table at ``key``; empty when missing.

    Raises:
        TypeError: The key is present but does not hold a table.
    """
    table = get_table(data, key)
    if table is None:
        if key in data:
            raise TypeError(f"'{key}' must be a table")
        return {}
    return table


def _flags[T](cls: type[T], table: StrDict | None) -> T:
    table = table or {}
    return cls(**{f.name: get_bool(table, f.name) for f in fields(cls)})  # type: ignore[arg-type]


def form_state_from_dict(data: StrDict) -> FormState:
    """Build a ``FormState`` from parsed file data.

    Raises:
        TypeError: A value has the wrong type.
        ValueError: A date or time cannot be parsed.
    """
    scheduled = _table(data, "scheduled_time")
    day = _parse_date(scheduled.get("date"))
    at = _parse_time(scheduled.get("time"), day)

    numbers_obj = get_list(data, "request_numbers")
    if numbers_obj is None and "request_numbers" in data:
        raise TypeError("'request_numbers' must be a list")
    numbers: list[str] = []
    for item in numbers_obj or []:
        if not isinstance(item, str):
            raise TypeError("'request_numbers' entries must be strings")
        numbers.append(item)

    applicant = _table(data, "applicant")

    return FormState(
        **{name: get_text(data, name) for name in _TEXT_FIELDS},
        scheduled_time=ScheduledTime(date=day, time=at),
        version_types=_flags(VersionTypeFlags, _table(data, "version_types")),
        deliverables=_flags(DeliverableFlags, _table(data, "deliverables")),
        request_numbers=tuple(numbers) or ("",),
        applicant=Applicant(
            employee_id=get_text(applicant, "employee_id"),
            extension=get_text(applicant, "extension"),
        ),
    )


def form_state_to_dict(state: FormState) -> dict[str, object]:
    payload: dict[str, object] = {"schema": FORM_SCHEMA}
    payload.update({name: getattr(state, name) for name in _TEXT_FIELDS})
    scheduled = state.scheduled_time
    payload["scheduled_time"] = {
        "date": scheduled.date.isoformat() if scheduled.date else "",
        "time": scheduled.time.strftime("%H:%M") if scheduled.time else "",
    }
    payload["version_types"] = asdict(state.version_types)
    payload["deliverables"] = asdict(state.deliverables)
    payload["request_numbers"] = list(state.request_numbers)
    payload["applicant"] = asdict(state.applicant)
    return payload


def _read(path: Path) -> Result[object, FormFileError]:
    try:
        raw = path.read_bytes()
    except OSError as e:
        return Err(FormFileError(f"failed to read form file: {e}", path=path))

    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        return Err(FormFileError(f"form file is not UTF-8: {e}", path=path))

    if path.suffix.lower() == ".toml":
        import tomllib

        try:
            return Ok(tomllib.loads(text))
        except tomllib.TOMLDecodeError as e:
            return Err(FormFileError(f"invalid TOML in form file: {e}", path=path))

    try:
        return Ok(json.loads(text))
    except json.JSONDecodeError as e:
        return Err(
            FormFileError(
                f"invalid JSON in form file: {e}",
                path=path,
                hint="use a .toml extension for TOML form files",
            )
        )


def load_form_file(path: Path) -> Result[FormState, FormFileError]:
    """Read a form file (``.json`` or ``.toml``)."""
    parsed = _read(path)
    if isinstance(parsed, Err):
        return parsed

    data = as_str_dict(parsed.value)
    if data is None:
        return Err(FormFileError("form file root must be an object/table", path=path))

    schema = data.get("schema", FORM_SCHEMA)
    if schema != FORM_SCHEMA:
        return Err(FormFileError(f"unsupported form file schema: {schema}", path=path))

    try:
        return Ok(form_state_from_dict(data))
    except (TypeError, ValueError) as e:
        return Err(FormFileError(f"invalid form file: {e}", path=path))


def write_form_file(path: Path, state: FormState) -> Result[Path, FormFileError]:
    text = json.dumps(form_state_to_dict(state), ensure_ascii=False, indent=2) + "\n"
    try:
        atomic_write_text(path, text, encoding="utf-8")
    except OSError as e:
        return Err(FormFileError(f"failed to write form file: {e}", path=path))
    return Ok(path)
