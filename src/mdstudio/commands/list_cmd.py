"""Command: list every entry in a collection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdstudio.commands._base import StudioCommand

if TYPE_CHECKING:
    from mdstudio.commands._context import AppContext


@click.command(
    "list",
    cls=StudioCommand,
    examples="""\
  mdstudio list posts
  mdstudio -q list posts
  mdstudio --json list posts""",
)
@click.argument("collection")
@click.pass_obj
def list_cmd(app: AppContext, collection: str) -> None:
    """Load and list all entries in COLLECTION."""
    app.emit(app.content.list_entries(collection))
