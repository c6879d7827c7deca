"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from mdstudio.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from mdstudio.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(str(item.get("slug") or item.get("name", "")) for item in items)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    label = Text("OK", style="studio.ok")
    op = Text(f"  {result.op}", style="studio.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    k = Text(f"  {key}: ", style="studio.key")
    if key == "slug":
        v = Text(str(value), style="studio.slug")
    elif key == "path":
        v = Text(str(value), style="studio.path")
    elif key == "title":
        v = Text(str(value), style="studio.title")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="studio.error")
    op = Text(f"  {result.op}", style="studio.op")
    console.print(label, op, Text(" — "), Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Listing renderers ─────────────────────────────────────────────────


def _render_collections(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Name", style="studio.title", no_wrap=True)
    table.add_column("Path", style="studio.path")
    table.add_column("Source")
    if verbose:
        table.add_column("Assets", style="dim")
        table.add_column("Schema", style="dim")

    for item in result.data.get("items", []):
        source = str(item.get("source", ""))
        row = [
            escape(str(item.get("name", ""))),
            escape(str(item.get("path", ""))),
            f"[studio.source.{source}]{source}[/studio.source.{source}]",
        ]
        if verbose:
            row.append(escape(str(item.get("assets_path", ""))))
            row.append(escape(str(item.get("schema") or "")))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', 0)} collections")


def _render_entry_table(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Slug", style="studio.slug", no_wrap=True)
    table.add_column("Title", style="studio.title")
    table.add_column("Read time")
    if verbose:
        table.add_column("Path", style="studio.path")

    for item in items:
        row = [
            escape(str(item.get("slug", ""))),
            escape(str(item.get("title", ""))),
            str(item.get("read_time", "")),
        ]
        if verbose:
            row.append(escape(str(item.get("path", ""))))
        table.add_row(*row)

    console.print(table)
    console.print(f"\n{result.data.get('count', len(items))} entries")


def _render_entry(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    if "text" in d:
        console.print(Text(d["text"]))
        return

    metadata = d.get("metadata", {})
    lines = [f"{key}: {value}" for key, value in metadata.items() if key != "title"]
    if d.get("read_time"):
        lines.append(f"read time: {d['read_time']}")
    if verbose:
        lines.append(f"path: {d.get('path', '')}")

    content = "\n".join(lines)
    body = d.get("content", "")
    if body:
        content += f"\n\n{body.strip()}"

    title = f"{d.get('slug', '?')} — {metadata.get('title', 'Untitled')}"
    console.print(Panel(Text(content), title=escape(title), border_style="dim", expand=False))


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    issues = result.data.get("issues", [])
    if not issues:
        console.print("[studio.ok]OK[/studio.ok]  No issues found.")
        return

    by_collection: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        by_collection.setdefault(str(issue.get("collection", "")), []).append(issue)

    for name, col_issues in by_collection.items():
        console.print(f"\n[bold]{escape(name)}[/bold]")
        for issue in col_issues:
            slug = f" [{issue['slug']}]" if issue.get("slug") else ""
            console.print(
                Text.assemble(("  error", "studio.error"), f"{slug}: {issue.get('message', '')}")
            )

    console.print(f"\n{len(issues)} issues")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "collections": _render_collections,
    "list_entries": _render_entry_table,
    "get": _render_entry,
    "check": _render_check,
}
