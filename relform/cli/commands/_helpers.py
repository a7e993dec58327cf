"""Shared helpers for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, NoReturn

import typer

from relform.core.errors import ErrorCode
from relform.core.result import Err, Result
from relform.document.exporter import FileExporter
from relform.document.renderer import DocxTemplateRenderer
from relform.document.template import FileTemplateSource
from relform.document.workflow import GenerationWorkflow
from relform.form.files import load_form_file
from relform.form.model import FormState
from relform.output.console import Style

if TYPE_CHECKING:
    from relform.cli.context import CLIContext


def exit_on_error[T, E](
    result: Result[T, E],
    ctx: CLIContext,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> None:
    """Print the error and exit if ``result`` is Err, otherwise return.

    Expects error objects to have 'message' and optional 'hint' attributes.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        hint: str | None = getattr(error, "hint", None)
        ctx.console.error(message)
        if hint:
            ctx.console.print(f"hint: {hint}", Style.DIM)
        raise typer.Exit(code=int(error_code))


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)


def read_form_state(path: Path, ctx: CLIContext) -> FormState:
    result = load_form_file(path)
    exit_on_error(result, ctx, error_code=ErrorCode.USER_ERROR)
    assert not isinstance(result, Err)
    return result.value


def build_workflow(
    ctx: CLIContext, *, out_dir: Path | None, template: Path | None
) -> GenerationWorkflow:
    return GenerationWorkflow(
        config=ctx.config,
        template_source=FileTemplateSource(template or ctx.config.template_path),
        renderer=DocxTemplateRenderer(),
        exporter=FileExporter(out_dir or ctx.config.output_dir),
    )
