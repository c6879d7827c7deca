"""Rich Console factory and theme for mdstudio output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

STUDIO_THEME = Theme(
    {
        "studio.ok": "bold green",
        "studio.error": "bold red",
        "studio.warning": "bold yellow",
        "studio.op": "bold cyan",
        "studio.key": "dim",
        "studio.slug": "bold blue",
        "studio.path": "dim",
        "studio.title": "bold",
        "studio.source.fs": "green",
        "studio.source.remote": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=STUDIO_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
