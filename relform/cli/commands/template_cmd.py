from __future__ import annotations

from pathlib import Path

import typer

from relform.cli.commands._helpers import exit_on_error
from relform.cli.context import build_context
from relform.core.errors import ErrorCode
from relform.core.result import Err
from relform.document.starter import build_starter_template


def template(
    path: Path | None = typer.Argument(None, help="Where to write (default: configured template path)"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
) -> None:
    """Write a starter Word template containing every placeholder."""
    ctx = build_context()
    target = path or ctx.config.template_path

    if target.exists() and not force:
        ctx.console.error(f"{target} already exists")
        ctx.console.print("hint: pass --force to overwrite")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    result = build_starter_template(target, title=ctx.config.output.title)
    exit_on_error(result, ctx, error_code=ErrorCode.IO_ERROR)
    assert not isinstance(result, Err)
    ctx.console.success(f"wrote {result.value}")
