from __future__ import annotations

from pathlib import Path

import typer

from relform.cli.commands._helpers import build_workflow, exit_with_code, read_form_state
from relform.cli.context import build_context
from relform.core.result import Err
from relform.form.release_form import ReleaseForm
from relform.output.console import Style
from relform.output.errors import generation_error_exit_code, print_generation_error


def generate(
    form_file: Path = typer.Argument(..., help="Form file (.json or .toml)"),
    out: Path | None = typer.Option(None, "--out", "-o", help="Output directory"),
    template: Path | None = typer.Option(None, "--template", "-t", help="Template .docx"),
    variant: str | None = typer.Option(None, "--variant", help="Form variant: release | welcome"),
) -> None:
    """Fill the Word template from a saved form."""
    ctx = build_context(variant=variant)
    state = read_form_state(form_file, ctx)

    form = ReleaseForm(variant=ctx.variant)
    form.load(state)

    workflow = build_workflow(ctx, out_dir=out, template=template)
    result = workflow.generate(form)
    if isinstance(result, Err):
        print_generation_error(result.error, ctx.console, variant=ctx.variant)
        exit_with_code(generation_error_exit_code(result.error))

    outcome = result.value
    ctx.console.success(f"{ctx.variant.submit_label}: {outcome.path}")
    ctx.console.print(f"file path: {outcome.fields['filePath']}", Style.DIM)
