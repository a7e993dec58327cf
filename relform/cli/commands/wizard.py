from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from pathlib import Path

import typer

from relform.cli.commands._helpers import (
    build_workflow,
    exit_on_error,
    exit_with_code,
    read_form_state,
)
from relform.cli.context import CLIContext, build_context
from relform.cli.prompts import Ask, Confirm, fill_fields, fill_form
from relform.core.errors import ErrorCode
from relform.core.result import Err
from relform.document.errors import ValidationFailed
from relform.document.mapper import MappingContext, compose_file_path
from relform.document.workflow import GenerationWorkflow
from relform.form.files import write_form_file
from relform.form.release_form import ReleaseForm
from relform.output.console import ConsoleProtocol, Style
from relform.output.errors import generation_error_exit_code, print_generation_error


class PathPreview:
    """Form reaction that echoes the composed file path whenever it changes."""

    def __init__(self, mapping: MappingContext, console: ConsoleProtocol) -> None:
        self._mapping = mapping
        self._console = console
        self.last: str | None = None

    def __call__(self, form: ReleaseForm) -> None:
        state = form.state
        if not state.department:
            return
        path = compose_file_path(
            self._mapping,
            department=state.department,
            division=state.division,
            project_path=state.project_path,
        )
        if path != self.last:
            self.last = path
            self._console.print(f"file path: {path}", Style.DIM)


def wizard(
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory"),
    template: Path | None = typer.Option(None, "--template", "-t", help="Template .docx"),
    variant: str | None = typer.Option(None, "--variant", help="Form variant: release | welcome"),
    start_from: Path | None = typer.Option(None, "--from", help="Pre-fill from a form file"),
    save: Path | None = typer.Option(None, "--save", help="Also save the answers to a form file"),
) -> None:
    """Fill the form interactively, then generate the document."""
    ctx = build_context(variant=variant)
    workflow = build_workflow(ctx, out_dir=out, template=template)
    run_wizard(
        ctx,
        workflow,
        start_from=start_from,
        save=save,
        ask=lambda msg, default: typer.prompt(msg, default=default, show_default=bool(default)),
        confirm=lambda msg, default: typer.confirm(msg, default=default),
    )


def run_wizard(
    ctx: CLIContext,
    workflow: GenerationWorkflow,
    *,
    start_from: Path | None,
    save: Path | None,
    ask: Ask,
    confirm: Confirm,
    clock: Callable[[], datetime] = datetime.now,
) -> None:
    preview = PathPreview(MappingContext.from_config(ctx.config, year=clock().year), ctx.console)
    form = ReleaseForm(variant=ctx.variant, on_change=(preview,))
    if start_from is not None:
        form.load(read_form_state(start_from, ctx))

    ctx.console.header(ctx.config.output.title)
    fill_form(form, ask=ask, confirm=confirm, console=ctx.console)

    while True:
        result = workflow.generate(form)
        if not isinstance(result, Err):
            break
        error = result.error
        print_generation_error(error, ctx.console, variant=ctx.variant)
        if isinstance(error, ValidationFailed) and confirm("Fix these fields now?", True):
            fill_fields(form, list(error.errors), ask=ask, confirm=confirm, console=ctx.console)
            continue
        _save(ctx, form, save)
        exit_with_code(generation_error_exit_code(error))

    _save(ctx, form, save)
    outcome = result.value
    ctx.console.success(f"{ctx.variant.submit_label}: {outcome.path}")


def _save(ctx: CLIContext, form: ReleaseForm, path: Path | None) -> None:
    if path is None:
        return
    written = write_form_file(path, form.state)
    exit_on_error(written, ctx, error_code=ErrorCode.IO_ERROR)
    ctx.console.print(f"saved answers to {path}", Style.DIM)
