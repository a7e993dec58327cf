"""Form state → flat placeholder dictionary for the Word template.

The mapper is pure and total: given any ``FormState`` it returns a value
for every key in ``PLACEHOLDER_KEYS``. Making sure required values are
present is validation's job, not the mapper's.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import PurePosixPath, PureWindowsPath

from relform.core.config import Config, PathFlavor
from relform.form.model import FormState, ScheduledTime

__all__ = [
    "DELIVERABLE_KEYS",
    "DocumentFields",
    "MappingContext",
    "PLACEHOLDER_KEYS",
    "SINGLE_SELECT_KEYS",
    "TEXT_KEYS",
    "TIME_KEYS",
    "VERSION_TYPE_KEYS",
    "compose_file_path",
    "document_filename",
    "map_document_fields",
    "time_parts",
]

DocumentFields = dict[str, str]

# Form field -> option value -> placeholder key.
SINGLE_SELECT_KEYS: Mapping[str, Mapping[str, str]] = {
    "risk_level": {
        "high": "riskLevelHigh",
        "medium": "riskLevelMedium",
        "low": "riskLevelLow",
    },
    "type": {
        "self": "typeSelf",
        "outsource": "typeOutsource",
    },
    "version_type": {
        "regular": "versionTypeRegular",
        "nonRegular": "versionTypeNonRegular",
        "emergency": "versionTypeEmergency",
    },
}

VERSION_TYPE_KEYS: Mapping[str, str] = {
    "normal_version": "normalVersion",
    "new_system": "newSystem",
    "major_change": "majorChange",
    "database_change": "databaseChange",
}

DELIVERABLE_KEYS: Mapping[str, str] = {
    "requirement_spec": "requirementSpec",
    "feasibility_report": "feasibilityReport",
    "source_code_report": "sourceCodeReport",
    "security_check_form": "securityCheckForm",
    "system_change_notice": "systemChangeNotice",
    "program_function": "programFunction",
    "version_notice": "versionNotice",
    "integration_test": "integrationTest",
    "user_test": "userTest",
    "code_comparison": "codeComparison",
    "version_logs": "versionLogs",
    "mandatory_test_list": "mandatoryTestList",
    "source_inspection": "sourceInspection",
}

# Copied through unchanged. Dotted paths point into nested groups.
TEXT_KEYS: Mapping[str, str] = {
    "change_number": "changeNumber",
    "system_name": "systemName",
    "primary_system_code": "primarySystemCode",
    "secondary_system_code": "secondarySystemCode",
    "change_subject": "changeSubject",
    "others": "others",
    "affected_systems": "affectedSystems",
    "impact_areas": "impactAreas",
    "applicant.employee_id": "employeeId",
    "applicant.extension": "extension",
}

TIME_KEYS: tuple[str, ...] = ("year", "month", "day", "hour", "minute")

PLACEHOLDER_KEYS: frozenset[str] = frozenset(
    [key for options in SINGLE_SELECT_KEYS.values() for key in options.values()]
    + list(VERSION_TYPE_KEYS.values())
    + list(DELIVERABLE_KEYS.values())
    + list(TEXT_KEYS.values())
    + list(TIME_KEYS)
    + ["requestNumbers", "filePath"]
)


@dataclass(frozen=True, slots=True)
class MappingContext:
    """Everything the mapping needs besides the form itself."""

    base_path: str
    flavor: PathFlavor
    year: int
    selected: str = "■"
    unselected: str = "□"

    @classmethod
    def from_config(cls, config: Config, *, year: int) -> MappingContext:
        return cls(
            base_path=config.paths.base,
            flavor=config.paths.flavor,
            year=year,
            selected=config.glyphs.selected,
            unselected=config.glyphs.unselected,
        )

    def glyph(self, checked: bool) -> str:
        return self.selected if checked else self.unselected


def time_parts(scheduled: ScheduledTime) -> dict[str, str]:
    """Year/month/day from the date, hour/minute from the time; zero padded."""
    d, t = scheduled.date, scheduled.time
    return {
        "year": f"{d.year:04d}" if d else "",
        "month": f"{d.month:02d}" if d else "",
        "day": f"{d.day:02d}" if d else "",
        "hour": f"{t.hour:02d}" if t else "",
        "minute": f"{t.minute:02d}" if t else "",
    }


def compose_file_path(
    ctx: MappingContext, *, department: str, division: str, project_path: str
) -> str:
    """``<base>/<year>/<department>/<division>/<project_path>`` in the target flavor.

    Empty segments are skipped.
    """
    flavor = PureWindowsPath if ctx.flavor == "windows" else PurePosixPath
    # An anchored fragment would replace the base, so only its tail is kept.
    fragment = flavor(project_path.strip())
    tail = fragment.parts[1:] if fragment.anchor else fragment.parts
    return str(flavor(ctx.base_path, str(ctx.year), department, division, *tail))


def _get(state: FormState, dotted: str) -> str:
    value: object = state
    for part in dotted.split("."):
        value = getattr(value, part)
    return value if isinstance(value, str) else ""


def map_document_fields(state: FormState, ctx: MappingContext) -> DocumentFields:
    checkboxes: DocumentFields = {}
    for name, options in SINGLE_SELECT_KEYS.items():
        chosen = getattr(state, name)
        for option, key in options.items():
            checkboxes[key] = ctx.glyph(chosen == option)
    for name, key in VERSION_TYPE_KEYS.items():
        checkboxes[key] = ctx.glyph(bool(getattr(state.version_types, name)))
    for name, key in DELIVERABLE_KEYS.items():
        checkboxes[key] = ctx.glyph(bool(getattr(state.deliverables, name)))

    text: DocumentFields = {key: _get(state, name) for name, key in TEXT_KEYS.items()}
    text["requestNumbers"] = ", ".join(n for n in state.request_numbers if n.strip())
    text["filePath"] = compose_file_path(
        ctx,
        department=state.department,
        division=state.division,
        project_path=state.project_path,
    )

    return {**checkboxes, **time_parts(state.scheduled_time), **text}


def document_filename(title: str, scheduled: ScheduledTime, *, extension: str = "docx") -> str:
    """``0 - <title>_<YYYYMMDDHHmm>.<ext>`` from the scheduled date/time."""
    p = time_parts(scheduled)
    stamp = f"{p['year']}{p['month']}{p['day']}{p['hour']}{p['minute']}"
    return f"0 - {title}_{stamp}.{extension}"
