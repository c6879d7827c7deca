"""Command: validate every entry against its collection schema."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdstudio.commands._base import StudioCommand

if TYPE_CHECKING:
    from mdstudio.commands._context import AppContext


@click.command(
    cls=StudioCommand,
    examples="""\
  mdstudio check
  mdstudio check posts
  mdstudio --json check""",
)
@click.argument("collection", required=False)
@click.option("--strict", is_flag=True, help="Exit with code 1 when any issue is found.")
@click.pass_obj
def check(app: AppContext, collection: str | None, strict: bool) -> None:
    """Check entries in all collections (or only COLLECTION)."""
    result = app.content.check(collection)
    app.emit(result)
    if strict and result.ok and result.data.get("count"):
        raise SystemExit(1)
