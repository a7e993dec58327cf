"""Validation rules for the release-request form.

Validation never raises: ``validate`` returns a mapping from field path to
the rule that field breaks. An empty mapping means the form may be
submitted.
"""

from __future__ import annotations

from typing import Literal

from relform.form.catalog import DEFAULT_CATALOG, DepartmentCatalog
from relform.form.model import SINGLE_SELECT_CHOICES, FormState, get_value
from relform.form.variants import RELEASE, FormVariant

__all__ = ["FormErrors", "Rule", "REQUIRED_FIELDS", "RULE_MESSAGES", "validate"]

Rule = Literal[
    "required",
    "at_least_one_required",
    "at_least_one",
    "invalid_choice",
    "unknown_division",
]

FormErrors = dict[str, Rule]

REQUIRED_FIELDS: tuple[str, ...] = (
    "risk_level",
    "type",
    "version_type",
    "system_name",
    "scheduled_time.date",
    "scheduled_time.time",
    "primary_system_code",
    "change_subject",
    "department",
    "project_path",
    "affected_systems",
    "impact_areas",
    "applicant.employee_id",
    "applicant.extension",
)

RULE_MESSAGES: dict[Rule, str] = {
    "required": "this field is required",
    "at_least_one_required": "select at least one option",
    "at_least_one": "enter at least one request number",
    "invalid_choice": "not one of the available options",
    "unknown_division": "division does not belong to the selected department",
}


def _is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    return False


def validate(
    state: FormState,
    *,
    variant: FormVariant = RELEASE,
    catalog: DepartmentCatalog = DEFAULT_CATALOG,
) -> FormErrors:
    """Check ``state`` against every form rule."""
    errors: FormErrors = {}

    for path in REQUIRED_FIELDS:
        if _is_empty(get_value(state, path)):
            errors[path] = "required"

    for path, choices in SINGLE_SELECT_CHOICES.items():
        value = get_value(state, path)
        if path not in errors and value not in {c.value for c in choices}:
            errors[path] = "invalid_choice"

    if not state.version_types.any_selected():
        errors["version_types"] = "at_least_one_required"

    if variant.require_each_request_number:
        for i, number in enumerate(state.request_numbers):
            if number == "":
                errors[f"request_numbers.{i}"] = "required"
    if not any(number.strip() for number in state.request_numbers):
        errors["request_numbers"] = "at_least_one"

    # Division is only meaningful once a known department is chosen.
    if state.department and state.department not in catalog:
        errors["department"] = "invalid_choice"
    elif state.department:
        if state.division == "":
            errors["division"] = "required"
        elif not catalog.has_division(state.department, state.division):
            errors["division"] = "unknown_division"

    return errors
