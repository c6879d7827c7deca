"""Collection — a named, schema-typed set of entries from one location.

``Collection.define()`` is pure: no I/O happens until the slug map is
first requested. The slug map (slug -> location) is built once by
listing the collection's directory through its storage adapter and is
cached for the collection's lifetime.

Storage is selected by ``source``:

- ``"fs"`` (default): an implicit :class:`LocalFilesystemAdapter`
  rooted at *root* (the working directory when omitted).
- ``"remote"``: an explicitly bound adapter, e.g. ``GitHubAdapter``.

INVARIANT: no two files in a collection normalize to the same slug.
Checked when the map is built, not when the collection is defined.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generic, Literal, TypeVar

from mdstudio.domain.entry import Entry, slug_for
from mdstudio.domain.errors import ConfigurationError, DuplicateSlugError, EntryNotFoundError
from mdstudio.domain.validation import as_validator
from mdstudio.infrastructure.adapters.base import normalize_path

if TYPE_CHECKING:
    from mdstudio.config.models import CollectionConfig
    from mdstudio.domain.validation import Validator
    from mdstudio.infrastructure.adapters.base import StorageAdapter

logger = logging.getLogger(__name__)

MetaT = TypeVar("MetaT")

Source = Literal["fs", "remote"]
CONTENT_EXTENSIONS = (".md", ".mdx")
DEFAULT_ASSETS_PATH = "./public"


class Collection(Generic[MetaT]):
    """Slug-indexed set of content entries."""

    def __init__(
        self,
        name: str,
        path: str,
        *,
        schema: Any = None,
        assets_path: str = DEFAULT_ASSETS_PATH,
        skip: bool = False,
        source: Source = "fs",
        adapter: StorageAdapter | None = None,
        root: Path | str | None = None,
        lenient: bool = False,
    ) -> None:
        if source not in ("fs", "remote"):
            msg = f"Collection {name!r}: unknown source {source!r} (expected 'fs' or 'remote')"
            raise ConfigurationError(msg)
        self._name = name
        self._path = path
        self._validator: Validator | None = as_validator(schema)
        self._assets_path = assets_path
        self._skip = skip
        self._source: Source = source
        self._adapter = adapter
        self._root = Path(root) if root is not None else None
        self.lenient = lenient
        self._slug_map: dict[str, str] | None = None

    @classmethod
    def define(cls, name: str, path: str, **kwargs: Any) -> Collection[MetaT]:
        """Declare a collection. Performs no I/O."""
        return cls(name, path, **kwargs)

    @classmethod
    def from_config(
        cls,
        config: CollectionConfig,
        *,
        schema: Any = None,
        adapter: StorageAdapter | None = None,
        root: Path | str | None = None,
        lenient: bool = False,
    ) -> Collection[Any]:
        """Build a collection from its settings-file declaration."""
        return cls(
            config.name,
            config.path,
            schema=schema,
            assets_path=config.assets_path,
            skip=config.skip,
            source=config.source,
            adapter=adapter,
            root=root,
            lenient=lenient,
        )

    # --- Declared attributes ---

    @property
    def name(self) -> str:
        return self._name

    @property
    def path(self) -> str:
        return self._path

    @property
    def schema(self) -> Validator | None:
        return self._validator

    @property
    def assets_path(self) -> str:
        return self._assets_path

    @property
    def skip(self) -> bool:
        return self._skip

    @property
    def source(self) -> Source:
        return self._source

    # --- Storage ---

    @property
    def adapter(self) -> StorageAdapter:
        """The storage adapter this collection reads through."""
        if self._adapter is None:
            if self._source == "remote":
                msg = f"Collection {self._name!r} has source 'remote' but no adapter is bound"
                raise ConfigurationError(msg)
            from mdstudio.infrastructure.adapters.local import LocalFilesystemAdapter

            self._adapter = LocalFilesystemAdapter(self._root or Path.cwd())
        return self._adapter

    @property
    def has_adapter(self) -> bool:
        return self._adapter is not None

    def bind_adapter(self, adapter: StorageAdapter) -> None:
        """Attach *adapter*; the slug map is rebuilt on next access."""
        self._adapter = adapter
        self._slug_map = None

    def _location(self, file_name: str) -> str:
        base = self._path.rstrip("/")
        return f"{base}/{file_name}" if base else file_name

    # --- Lookup ---

    async def get_slug_map(self) -> dict[str, str]:
        """Return the cached slug -> location map, building it on first call.

        Raises:
            DuplicateSlugError: If two files normalize to the same slug.
        """
        if self._slug_map is not None:
            return self._slug_map

        slug_map: dict[str, str] = {}
        for file_name in await self.adapter.list_dir(self._path.rstrip("/")):
            if not file_name.endswith(CONTENT_EXTENSIONS):
                continue
            slug = slug_for(file_name)
            if slug in slug_map:
                raise DuplicateSlugError(self._name, slug)
            slug_map[slug] = self._location(file_name)

        logger.debug("Built slug map for %s: %d entries", self._name, len(slug_map))
        self._slug_map = slug_map
        return slug_map

    async def _load(self, location: str) -> Entry[MetaT]:
        entry: Entry[MetaT] = await Entry.from_adapter(
            self.adapter, location, schema=self._validator, lenient=self.lenient
        )
        return await entry.load()

    async def get_entries(self) -> list[Entry[MetaT]]:
        """Load every entry concurrently; results follow slug-map order."""
        slug_map = await self.get_slug_map()
        return list(await asyncio.gather(*(self._load(loc) for loc in slug_map.values())))

    async def get_entry(self, slug: str) -> Entry[MetaT]:
        """Load the entry for *slug*.

        Raises:
            EntryNotFoundError: If *slug* is not in the collection.
        """
        slug_map = await self.get_slug_map()
        location = slug_map.get(slug)
        if location is None:
            raise EntryNotFoundError(self._name, slug)
        return await self._load(location)

    async def save(self, entry: Entry[Any]) -> bool:
        """Write *entry* back through the adapter and index its slug.

        Raises:
            DuplicateSlugError: If the slug already maps to a different file.
        """
        slug_map = await self.get_slug_map()
        existing = slug_map.get(entry.slug)
        if existing is not None and normalize_path(existing) != normalize_path(entry.path):
            raise DuplicateSlugError(self._name, entry.slug)
        ok = await self.adapter.write(entry.path, str(entry))
        if ok:
            slug_map[entry.slug] = entry.path
        return ok

    def __repr__(self) -> str:
        return f"Collection(name={self._name!r}, path={self._path!r}, source={self._source!r})"
