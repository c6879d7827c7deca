"""Front-matter parsing and rendering for markdown/MDX documents.

On-disk contract::

    ---
    title: Hello
    tags: [a, b, c]
    ---

    Body text.

Parsing uses ruamel.yaml so any YAML the authors write is accepted.
Rendering emits one ``key: value`` line per key in insertion order,
with sequences as ``[a, b, c]`` flow lists, so a parsed document
re-renders to the same text.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

FRONTMATTER_DELIMITER = "---"

# Characters that end a plain scalar inside a flow collection.
_FLOW_INDICATORS = frozenset(",[]{}")


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader (the YAML object is stateful)."""
    return YAML(typ="safe", pure=True)


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """Split *content* into ``(yaml_block, body)``.

    Expects ``---`` on the first line; the next ``---`` line closes the
    block. One blank line between the closing delimiter and the body is
    treated as part of the delimiter. Handles ``\\r\\n`` line endings.

    Returns ``(None, content)`` when there is no complete block.
    """
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return None, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        return None, content

    yaml_block = "\n".join(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]
    return yaml_block, body


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse front-matter and body from *content*.

    Returns:
        A ``(metadata, body)`` tuple. Documents without a front-matter
        block yield ``({}, content)``.

    Raises:
        ValueError: If the block is not a YAML mapping.
    """
    yaml_block, body = split_frontmatter(content)
    if yaml_block is None:
        return {}, content

    loaded = _new_yaml().load(yaml_block)
    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        msg = f"Front matter must be a mapping, got {type(loaded).__name__}"
        raise ValueError(msg)
    return dict(loaded), body


def _reparses_as(text: str, value: str) -> bool:
    try:
        return bool(_new_yaml().load(f"v: {text}") == {"v": value})
    except YAMLError:
        return False


def _render_string(value: str, *, in_flow: bool) -> str:
    if value and "\n" not in value and _reparses_as(value, value):
        if not (in_flow and any(ch in _FLOW_INDICATORS for ch in value)):
            return value
    return json.dumps(value, ensure_ascii=False)


def render_value(value: Any, *, in_flow: bool = False) -> str:
    """Render a single front-matter value on one line."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_value(v, in_flow=True) for v in value) + "]"
    if isinstance(value, dict):
        pairs = (f"{k}: {render_value(v, in_flow=True)}" for k, v in value.items())
        return "{" + ", ".join(pairs) + "}"
    if isinstance(value, str):
        return _render_string(value, in_flow=in_flow)
    return str(value)


def render_frontmatter(metadata: dict[str, Any], body: str) -> str:
    """Render *metadata* and *body* back into a document.

    Keys keep their insertion order. The block is followed by a blank
    line and then the body, verbatim.
    """
    lines = [FRONTMATTER_DELIMITER]
    lines.extend(f"{key}: {render_value(value)}" for key, value in metadata.items())
    lines.append(FRONTMATTER_DELIMITER)
    lines.append("")
    lines.append(body)
    return "\n".join(lines)
