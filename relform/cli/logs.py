"""Diagnostic logging for the CLI."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "RELFORM_LOG_LEVEL"


def configure_logging(*, verbose: bool) -> None:
    """Send ``relform.*`` records to stderr through Rich.

    ``--verbose`` wins over ``RELFORM_LOG_LEVEL``; the default is WARNING.
    """
    from rich.console import Console
    from rich.logging import RichHandler

    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    logger = logging.getLogger("relform")
    logger.handlers.clear()
    logger.addHandler(
        RichHandler(
            console=Console(stderr=True),
            show_path=verbose,
            rich_tracebacks=True,
            markup=False,
        )
    )
    logger.setLevel(level)
    logger.propagate = False
