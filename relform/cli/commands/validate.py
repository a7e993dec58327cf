from __future__ import annotations

from pathlib import Path

import typer

from relform.cli.commands._helpers import read_form_state
from relform.cli.context import build_context
from relform.core.errors import ErrorCode
from relform.form.release_form import ReleaseForm
from relform.output.errors import print_form_errors


def validate(
    form_file: Path = typer.Argument(..., help="Form file (.json or .toml)"),
    variant: str | None = typer.Option(None, "--variant", help="Form variant: release | welcome"),
) -> None:
    """Check a saved form without generating anything."""
    ctx = build_context(variant=variant)
    state = read_form_state(form_file, ctx)

    form = ReleaseForm(variant=ctx.variant)
    form.load(state)

    errors = form.errors()
    if errors:
        ctx.console.error(f"{form_file}: {len(errors)} field(s) need attention")
        print_form_errors(errors, ctx.console, variant=ctx.variant)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    ctx.console.success(f"{form_file}: form is complete")
