"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy StudioConfig construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdstudio.domain.errors import StudioError
from mdstudio.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from mdstudio.config.settings import StudioSettings
    from mdstudio.domain.studio import StudioConfig
    from mdstudio.services.content import ContentService
    from mdstudio.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The studio is built lazily on first use so ``--help`` and
    ``--version`` never import schemas or touch credentials.
    """

    def __init__(self, settings: StudioSettings) -> None:
        self.settings = settings
        self._studio: StudioConfig | None = None

        from mdstudio.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def studio(self) -> StudioConfig:
        """The StudioConfig (created lazily on first access)."""
        if self._studio is None:
            from mdstudio.config.loader import load_studio

            try:
                self._studio = load_studio(self.settings)
            except StudioError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._studio

    @property
    def content(self) -> ContentService:
        from mdstudio.services.content import ContentService

        return ContentService(self.studio)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
