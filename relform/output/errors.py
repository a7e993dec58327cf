"""Error presentation: console text and exit codes for generation errors."""

from __future__ import annotations

from typing import TYPE_CHECKING

from relform.core.errors import ErrorCode
from relform.document.errors import (
    ExportError,
    GenerationError,
    RenderError,
    TemplateFetchError,
    ValidationFailed,
    WorkflowBusy,
)
from relform.form.labels import label_for
from relform.form.validation import RULE_MESSAGES, FormErrors
from relform.output.console import Style

if TYPE_CHECKING:
    from relform.form.variants import FormVariant
    from relform.output.console import ConsoleProtocol

__all__ = [
    "GENERIC_FAILURE",
    "generation_error_exit_code",
    "print_form_errors",
    "print_generation_error",
]

GENERIC_FAILURE = "document generation failed, please try again"


def print_form_errors(
    errors: FormErrors, console: ConsoleProtocol, *, variant: FormVariant | None = None
) -> None:
    for path, rule in errors.items():
        console.print(f"  {label_for(path, variant)}: {RULE_MESSAGES[rule]}", Style.ERROR)


def print_generation_error(
    error: GenerationError,
    console: ConsoleProtocol,
    *,
    variant: FormVariant | None = None,
) -> None:
    """Print ``error``; environment failures collapse into one generic message."""
    match error:
        case ValidationFailed(errors=errors, message=message):
            console.error(message)
            print_form_errors(errors, console, variant=variant)
        case WorkflowBusy(message=message):
            console.warning(message)
        case TemplateFetchError(hint=hint) | RenderError(hint=hint) | ExportError(hint=hint):
            console.error(GENERIC_FAILURE)
            if hint:
                console.print(f"hint: {hint}", Style.DIM)


def generation_error_exit_code(error: GenerationError) -> int:
    match error:
        case ValidationFailed() | WorkflowBusy():
            return int(ErrorCode.USER_ERROR)
        case TemplateFetchError():
            return int(ErrorCode.ENV_ERROR)
        case RenderError():
            return int(ErrorCode.RENDER_ERROR)
        case ExportError():
            return int(ErrorCode.IO_ERROR)
    return int(ErrorCode.RENDER_ERROR)
