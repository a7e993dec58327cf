from __future__ import annotations

from pathlib import Path

import typer

from relform.cli.commands._helpers import exit_on_error
from relform.cli.context import build_context
from relform.core.errors import ErrorCode
from relform.core.result import Err
from relform.form.demo import demo_state
from relform.form.files import write_form_file
from relform.form.model import FormState


def init(
    path: Path = typer.Argument(Path("release-form.json"), help="Form file to create"),
    demo: bool = typer.Option(False, "--demo", help="Pre-fill with sample values"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a blank (or demo) form file to edit by hand."""
    ctx = build_context()

    if path.exists() and not force:
        ctx.console.error(f"{path} already exists")
        ctx.console.print("hint: pass --force to overwrite")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    state = demo_state() if demo else FormState()
    result = write_form_file(path, state)
    exit_on_error(result, ctx, error_code=ErrorCode.IO_ERROR)
    assert not isinstance(result, Err)
    ctx.console.success(f"wrote {result.value}")
