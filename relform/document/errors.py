"""Errors produced while turning a form into a document."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relform.form.validation import FormErrors

__all__ = [
    "ExportError",
    "GenerationError",
    "RenderError",
    "TemplateFetchError",
    "ValidationFailed",
    "WorkflowBusy",
]


@dataclass(frozen=True, slots=True)
class ValidationFailed:
    """The form has errors the user must fix; nothing was generated."""

    errors: FormErrors
    message: str = "please check the required fields"
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class TemplateFetchError:
    path: Path
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class RenderError:
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class ExportError:
    path: Path
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class WorkflowBusy:
    message: str = "a document is already being generated"
    hint: str | None = None


GenerationError = (
    ValidationFailed | TemplateFetchError | RenderError | ExportError | WorkflowBusy
)
