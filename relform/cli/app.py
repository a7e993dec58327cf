from __future__ import annotations

import os
from pathlib import Path

import typer

from relform import __version__
from relform.cli.commands.departments import departments
from relform.cli.commands.generate import generate
from relform.cli.commands.init_cmd import init
from relform.cli.commands.template_cmd import template
from relform.cli.commands.validate import validate
from relform.cli.commands.wizard import wizard
from relform.cli.logs import configure_logging
from relform.core.config import CONFIG_ENV_VAR
from relform.core.errors import ErrorCode


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(generate)
app.command()(validate)
app.command()(wizard)
app.command()(init)
app.command()(template)
app.command()(departments)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
    config: Path | None = typer.Option(
        None,
        "--config",
        help="Config file (overrides RELFORM_CONFIG and ./relform.toml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging."),
) -> None:
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    configure_logging(verbose=verbose)

    if config is not None:
        try:
            path = config.expanduser().resolve()
        except OSError as e:
            typer.echo(f"error: invalid --config: {e}", err=True)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))

        if not path.is_file():
            typer.echo(f"error: --config '{path}' does not exist", err=True)
            raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

        os.environ[CONFIG_ENV_VAR] = str(path)


def main() -> None:
    app()
