from __future__ import annotations

from dataclasses import dataclass

import typer

from relform.core.config import Config, discover_config_path, load_config_or_default
from relform.core.errors import ErrorCode
from relform.core.result import Err
from relform.form.variants import FormVariant, get_variant
from relform.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    variant: FormVariant
    console: ConsoleProtocol


def build_context(*, variant: str | None = None) -> CLIContext:
    path = discover_config_path()
    config_result = load_config_or_default(path)
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    config = config_result.value
    name = variant or config.form.variant
    try:
        form_variant = get_variant(name)
    except KeyError:
        typer.echo(f"error: unknown form variant: {name}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(config=config, variant=form_variant, console=RichConsole())
