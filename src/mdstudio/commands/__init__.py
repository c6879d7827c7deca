"""Subcommand modules for mdstudio.

Provides register_commands() which uses deferred imports to keep
``mdstudio --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from mdstudio.commands.check import check
    from mdstudio.commands.collections import collections
    from mdstudio.commands.list_cmd import list_cmd
    from mdstudio.commands.show import show

    cli.add_command(collections)
    cli.add_command(list_cmd)
    cli.add_command(show)
    cli.add_command(check)
