"""Command: list declared collections."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdstudio.commands._base import StudioCommand

if TYPE_CHECKING:
    from mdstudio.commands._context import AppContext


@click.command(
    cls=StudioCommand,
    examples="""\
  mdstudio collections
  mdstudio -v collections
  mdstudio --json collections""",
)
@click.pass_obj
def collections(app: AppContext) -> None:
    """List the collections declared in mdstudio.toml."""
    app.emit(app.content.collections())
