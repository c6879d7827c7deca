"""Root CLI group for mdstudio with global flags and command registration."""

from __future__ import annotations

from typing import Any

import click

from mdstudio import __version__
from mdstudio.commands import register_commands
from mdstudio.commands._base import StudioGroup
from mdstudio.commands._context import AppContext
from mdstudio.config.settings import StudioSettings
from mdstudio.domain.errors import ConfigurationError


@click.group(cls=StudioGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="mdstudio")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--lenient", is_flag=True, help="Keep entries whose front matter fails validation.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    lenient: bool,
    config_path: str | None,
) -> None:
    """mdstudio — typed markdown content collections."""
    ctx.ensure_object(dict)
    flags: dict[str, Any] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    # Only override the TOML value when the flag is given.
    if lenient:
        flags["lenient"] = True
    try:
        settings = StudioSettings.from_cli(config_path=config_path, **flags)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
