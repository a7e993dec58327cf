"""Form variants.

The release-workflow page and the older welcome page collect the same
data; their differences are captured here as configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["FormVariant", "RELEASE", "WELCOME", "VARIANTS", "get_variant"]


@dataclass(frozen=True, slots=True)
class FormVariant:
    name: str
    title: str
    show_change_number: bool
    # When set, every request-number entry must be filled, not only one.
    require_each_request_number: bool
    project_path_label: str
    submit_label: str


RELEASE = FormVariant(
    name="release",
    title="系統換版申請單",
    show_change_number=True,
    require_each_request_number=True,
    project_path_label="Project path",
    submit_label="Generate document",
)

WELCOME = FormVariant(
    name="welcome",
    title="系統換版申請單",
    show_change_number=False,
    require_each_request_number=False,
    project_path_label="File path",
    submit_label="Download",
)

VARIANTS: dict[str, FormVariant] = {v.name: v for v in (RELEASE, WELCOME)}


def get_variant(name: str) -> FormVariant:
    """Look up a variant by name.

    Raises:
        KeyError: Unknown variant name.
    """
    return VARIANTS[name]
