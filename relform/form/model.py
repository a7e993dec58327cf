"""Release-request form state.

``FormState`` is immutable; edits produce a new state through
``with_value`` so the form can compare previous and next values when it
dispatches synchronizers.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass, replace
from datetime import date, datetime
from typing import Literal

__all__ = [
    "Applicant",
    "Choice",
    "DeliverableFlags",
    "FormState",
    "RiskLevel",
    "ScheduledTime",
    "DevelopmentType",
    "VersionTypeFlags",
    "VersionType",
    "RISK_LEVELS",
    "DEVELOPMENT_TYPES",
    "VERSION_TYPES",
    "SINGLE_SELECT_CHOICES",
    "get_value",
    "with_value",
]

RiskLevel = Literal["high", "medium", "low"]
DevelopmentType = Literal["self", "outsource"]
VersionType = Literal["regular", "nonRegular", "emergency"]


@dataclass(frozen=True, slots=True)
class Choice:
    value: str
    label: str


RISK_LEVELS: tuple[Choice, ...] = (
    Choice("high", "高"),
    Choice("medium", "中"),
    Choice("low", "低"),
)
DEVELOPMENT_TYPES: tuple[Choice, ...] = (
    Choice("self", "自行開發"),
    Choice("outsource", "委外開發"),
)
VERSION_TYPES: tuple[Choice, ...] = (
    Choice("regular", "定期換版"),
    Choice("nonRegular", "不定期換版"),
    Choice("emergency", "緊急換版"),
)

# Field path -> allowed options for the single-select fields.
SINGLE_SELECT_CHOICES: dict[str, tuple[Choice, ...]] = {
    "risk_level": RISK_LEVELS,
    "type": DEVELOPMENT_TYPES,
    "version_type": VERSION_TYPES,
}


@dataclass(frozen=True, slots=True)
class ScheduledTime:
    """Scheduled change window.

    ``time`` is a full datetime: only its hour and minute are meaningful,
    its date portion follows ``date`` (see ``sync.sync_time_to_date``).
    """

    date: date | None = None
    time: datetime | None = None


@dataclass(frozen=True, slots=True)
class VersionTypeFlags:
    normal_version: bool = False
    new_system: bool = False
    major_change: bool = False
    database_change: bool = False

    def any_selected(self) -> bool:
        return any(getattr(self, f.name) for f in fields(self))


@dataclass(frozen=True, slots=True)
class DeliverableFlags:
    requirement_spec: bool = False
    feasibility_report: bool = False
    source_code_report: bool = False
    security_check_form: bool = False
    system_change_notice: bool = False
    program_function: bool = False
    version_notice: bool = False
    integration_test: bool = False
    user_test: bool = False
    code_comparison: bool = False
    version_logs: bool = False
    mandatory_test_list: bool = False
    source_inspection: bool = False


@dataclass(frozen=True, slots=True)
class Applicant:
    employee_id: str = ""
    extension: str = ""


@dataclass(frozen=True, slots=True)
class FormState:
    risk_level: str = ""
    type: str = ""
    version_type: str = ""
    change_number: str = ""
    system_name: str = ""
    scheduled_time: ScheduledTime = field(default_factory=ScheduledTime)
    primary_system_code: str = ""
    secondary_system_code: str = ""
    change_subject: str = ""
    version_types: VersionTypeFlags = field(default_factory=VersionTypeFlags)
    request_numbers: tuple[str, ...] = ("",)
    deliverables: DeliverableFlags = field(default_factory=DeliverableFlags)
    others: str = ""
    department: str = ""
    division: str = ""
    project_path: str = ""
    affected_systems: str = ""
    impact_areas: str = ""
    applicant: Applicant = field(default_factory=Applicant)


def get_value(obj: object, path: str) -> object:
    """Read the value at a dotted ``path`` (``request_numbers.1``).

    Raises:
        KeyError: ``path`` does not name a field of the form.
    """
    current = obj
    for part in path.split("."):
        if isinstance(current, tuple):
            try:
                current = current[int(part)]
            except (ValueError, IndexError):
                raise KeyError(path) from None
        elif is_dataclass(current) and part in {f.name for f in fields(current)}:
            current = getattr(current, part)
        else:
            raise KeyError(path)
    return current


def with_value[T](obj: T, path: str, value: object) -> T:
    """Return a copy of ``obj`` with ``path`` set to ``value``.

    Raises:
        KeyError: ``path`` does not name a field of the form.
    """
    head, _, rest = path.partition(".")

    if isinstance(obj, tuple):
        try:
            index = int(head)
            items = list(obj)
            items[index] = with_value(items[index], rest, value) if rest else value
        except (ValueError, IndexError):
            raise KeyError(path) from None
        return tuple(items)  # type: ignore[return-value]

    if not is_dataclass(obj) or head not in {f.name for f in fields(obj)}:
        raise KeyError(path)
    current = getattr(obj, head)
    new = with_value(current, rest, value) if rest else value
    return replace(obj, **{head: new})  # type: ignore[type-var]
