from __future__ import annotations

from relform.cli.context import build_context
from relform.form.catalog import DEFAULT_CATALOG
from relform.output.console import Style


def departments() -> None:
    """List departments and the divisions each one offers."""
    ctx = build_context()
    for name in DEFAULT_CATALOG.department_names():
        ctx.console.header(name)
        for division in DEFAULT_CATALOG.divisions_for(name):
            ctx.console.print(f"  {division}", Style.DIM)
