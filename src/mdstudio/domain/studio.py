"""StudioConfig — registry of named collections."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from mdstudio.domain.errors import CollectionNotFoundError, DuplicateCollectionError

if TYPE_CHECKING:
    from mdstudio.domain.collection import Collection
    from mdstudio.infrastructure.adapters.base import StorageAdapter


class StudioConfig:
    """Name -> Collection mapping, built once.

    Collections flagged ``skip`` are left out. Remote collections with
    no adapter of their own are bound to *remote*.
    """

    def __init__(
        self,
        collections: Iterable[Collection[Any]],
        *,
        remote: StorageAdapter | None = None,
    ) -> None:
        registry: dict[str, Collection[Any]] = {}
        for collection in collections:
            if collection.skip:
                continue
            if collection.name in registry:
                raise DuplicateCollectionError(collection.name)
            if remote is not None and collection.source == "remote" and not collection.has_adapter:
                collection.bind_adapter(remote)
            registry[collection.name] = collection
        self.remote = remote
        self._collections = registry

    @property
    def collections(self) -> Mapping[str, Collection[Any]]:
        """Read-only name-indexed view."""
        return MappingProxyType(self._collections)

    def get_collection(self, name: str) -> Collection[Any]:
        try:
            return self._collections[name]
        except KeyError:
            raise CollectionNotFoundError(name) from None

    def __getitem__(self, name: str) -> Collection[Any]:
        return self.get_collection(name)

    def __contains__(self, name: object) -> bool:
        return name in self._collections

    def __iter__(self) -> Iterator[str]:
        return iter(self._collections)

    def __len__(self) -> int:
        return len(self._collections)


def define_studio_config(
    collections: Iterable[Collection[Any]],
    *,
    remote: StorageAdapter | None = None,
) -> StudioConfig:
    """Build a :class:`StudioConfig`.

    Raises:
        DuplicateCollectionError: If two non-skipped collections share a name.
    """
    return StudioConfig(collections, remote=remote)
