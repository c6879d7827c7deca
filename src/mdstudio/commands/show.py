"""Command: show a single entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdstudio.commands._base import StudioCommand

if TYPE_CHECKING:
    from mdstudio.commands._context import AppContext


@click.command(
    cls=StudioCommand,
    examples="""\
  mdstudio show posts hello-world
  mdstudio show posts hello-world --raw
  mdstudio --json show posts hello-world""",
)
@click.argument("collection")
@click.argument("slug")
@click.option("--raw", is_flag=True, help="Print the re-serialized document.")
@click.pass_obj
def show(app: AppContext, collection: str, slug: str, raw: bool) -> None:
    """Show the entry SLUG from COLLECTION."""
    app.emit(app.content.get_entry(collection, slug, raw=raw))
