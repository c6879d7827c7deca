"""Entry — one markdown/MDX document: front-matter metadata plus body.

Lifecycle: constructed (raw text captured) -> ``await load()`` (split,
validate) -> ``metadata`` / ``content`` available. ``load()`` is
idempotent.

Validation failures raise :class:`ValidationError` by default. With
``lenient=True`` the raw metadata is kept, the failure is logged, and
``entry.issues`` / ``entry.validated`` report it.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ruamel.yaml.error import YAMLError

from mdstudio.domain.errors import ValidationError
from mdstudio.domain.frontmatter import parse_frontmatter, render_frontmatter
from mdstudio.domain.validation import Issue, as_validator, run_validator

if TYPE_CHECKING:
    from mdstudio.domain.validation import Validator
    from mdstudio.infrastructure.adapters.base import StorageAdapter

logger = logging.getLogger(__name__)

MetaT = TypeVar("MetaT")

WORDS_PER_MINUTE = 200
_EXTENSION_RE = re.compile(r"\.mdx?$")


def slug_for(path: str | Path) -> str:
    """Last path segment with a trailing ``.md``/``.mdx`` removed."""
    name = PurePosixPath(str(path).replace("\\", "/")).name
    return _EXTENSION_RE.sub("", name)


class Entry(Generic[MetaT]):
    """A single content document.

    Args:
        path: Source location (filesystem path or adapter-relative path).
        schema: Optional metadata validator (see :mod:`mdstudio.domain.validation`).
        raw: File text. Read from *path* on disk when omitted.
        lenient: Keep unvalidated metadata instead of raising on failure.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        schema: Any = None,
        raw: str | None = None,
        lenient: bool = False,
    ) -> None:
        self.path = str(path)
        self._raw = raw if raw is not None else Path(path).read_text(encoding="utf-8")
        self._validator: Validator | None = as_validator(schema)
        self.lenient = lenient
        self._metadata: MetaT | dict[str, Any] | None = None
        self._source_metadata: dict[str, Any] | None = None
        self._content: str | None = None
        self._loaded = False
        self.issues: list[Issue] = []

    @classmethod
    async def from_adapter(
        cls,
        adapter: StorageAdapter,
        path: str,
        *,
        schema: Any = None,
        lenient: bool = False,
    ) -> Entry[MetaT]:
        """Read *path* through *adapter* and construct an entry from it."""
        raw = await adapter.read(path)
        return cls(path, schema=schema, raw=raw, lenient=lenient)

    async def load(self) -> Entry[MetaT]:
        """Split and validate the raw text. Safe to call repeatedly."""
        if self._loaded:
            return self

        try:
            metadata, content = parse_frontmatter(self._raw)
        except (YAMLError, ValueError) as exc:
            issue = Issue(message=f"Malformed front matter: {exc}")
            raise ValidationError(self.path, [issue]) from exc

        self._source_metadata = metadata

        if self._validator is None:
            self._metadata = metadata
        else:
            outcome = await run_validator(self._validator, metadata)
            if outcome.ok:
                self._metadata = outcome.value
            elif self.lenient:
                logger.warning(
                    "Front matter validation failed in %s; keeping raw metadata: %s",
                    self.path,
                    "; ".join(str(issue) for issue in outcome.issues),
                )
                self.issues = list(outcome.issues)
                self._metadata = metadata
            else:
                raise ValidationError(self.path, outcome.issues)

        self._content = content
        self._loaded = True
        return self

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def validated(self) -> bool:
        """True once loaded against a schema without issues."""
        return self._loaded and self._validator is not None and not self.issues

    @property
    def raw(self) -> str:
        return self._raw

    @property
    def metadata(self) -> MetaT:
        return self._metadata  # type: ignore[return-value]

    @property
    def content(self) -> str:
        return self._content or ""

    @property
    def slug(self) -> str:
        return slug_for(self.path)

    @property
    def read_time(self) -> str:
        """Estimated reading time; empty until content has been loaded."""
        if not self._content:
            return ""
        words = len(self._content.split())
        minutes = math.ceil(words / WORDS_PER_MINUTE)
        if minutes <= 1:
            return "1 minute read"
        return f"{minutes} minutes"

    def metadata_dict(self) -> dict[str, Any]:
        """Metadata as a plain dict in source key order.

        Keys come from the parsed front matter in the order they were
        written, with validated values overlaid. Keys the validator does
        not return (e.g. undeclared fields on a pydantic model) keep their
        source value. Fields assigned after loading are appended.
        """
        meta = self._metadata
        if meta is None:
            return {}
        source = self._source_metadata
        if meta is source:
            return dict(meta)
        if hasattr(meta, "model_dump"):
            validated = meta.model_dump(by_alias=True)
            explicit = meta.model_dump(by_alias=True, exclude_unset=True)
        elif isinstance(meta, dict):
            validated = explicit = dict(meta)
        else:
            msg = f"Cannot serialize metadata of type {type(meta).__name__}"
            raise TypeError(msg)
        if source is None:
            return explicit
        merged = {key: validated.get(key, value) for key, value in source.items()}
        for key, value in explicit.items():
            merged.setdefault(key, value)
        return merged

    def __str__(self) -> str:
        if self._metadata is None or self._content is None:
            return self._raw
        return render_frontmatter(self.metadata_dict(), self._content)

    def __repr__(self) -> str:
        return f"Entry(path={self.path!r}, loaded={self._loaded})"
