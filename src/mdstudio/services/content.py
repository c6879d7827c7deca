"""ContentService — read-only operations over a StudioConfig.

Four surfaces, each wrapped in one event loop run:
- collections: declared collections and their storage
- list_entries: every entry in a collection, loaded and validated
- get: one entry (structured or re-serialized)
- check: validate every entry, collecting issues instead of aborting

When a targeted collection reads through the studio's remote adapter,
the adapter is connected (branch ensured) before the operation and
disconnected afterwards. Purely local operations never touch the network.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any

from mdstudio.domain.errors import (
    CollectionNotFoundError,
    ConfigurationError,
    DuplicateSlugError,
    EntryNotFoundError,
    NotFoundError,
    StudioError,
    ValidationError,
)
from mdstudio.services.result import ServiceResult

if TYPE_CHECKING:
    from mdstudio.domain.collection import Collection
    from mdstudio.domain.entry import Entry
    from mdstudio.domain.studio import StudioConfig
    from mdstudio.infrastructure.adapters.base import StorageAdapter

logger = logging.getLogger(__name__)

_ERROR_CODES: dict[type[StudioError], str] = {
    CollectionNotFoundError: "COLLECTION_NOT_FOUND",
    EntryNotFoundError: "ENTRY_NOT_FOUND",
    DuplicateSlugError: "DUPLICATE_SLUG",
    NotFoundError: "NOT_FOUND",
    ValidationError: "VALIDATION_FAILED",
    ConfigurationError: "CONFIGURATION_ERROR",
}


def error_code(exc: StudioError) -> str:
    """Map a domain error to its stable result code."""
    for exc_type, code in _ERROR_CODES.items():
        if isinstance(exc, exc_type):
            return code
    return "STUDIO_ERROR"


def _error_detail(exc: StudioError) -> dict[str, Any]:
    detail: dict[str, Any] = {}
    for attr in ("collection", "slug", "path", "name"):
        value = getattr(exc, attr, None)
        if value is not None:
            detail[attr] = str(value)
    issues = getattr(exc, "issues", None)
    if issues:
        detail["issues"] = [str(issue) for issue in issues]
    return detail


def entry_summary(entry: Entry[Any]) -> dict[str, Any]:
    """Compact listing row for an entry."""
    metadata = entry.metadata_dict()
    return {
        "slug": entry.slug,
        "title": metadata.get("title", ""),
        "path": entry.path,
        "read_time": entry.read_time,
    }


class ContentService:
    """Handles collection listing, entry retrieval, and validation sweeps."""

    def __init__(self, studio: StudioConfig) -> None:
        self._studio = studio

    def _remote_for(self, name: str | None) -> StorageAdapter | None:
        """The shared remote adapter, if any targeted collection reads through it."""
        remote = self._studio.remote
        if remote is None:
            return None
        if name is None:
            targets = list(self._studio.collections.values())
        else:
            targets = [self._studio.collections[name]] if name in self._studio else []
        if any(col.has_adapter and col.adapter is remote for col in targets):
            return remote
        return None

    def _run(
        self,
        op: str,
        operation: Callable[[], Awaitable[ServiceResult]],
        *,
        collection: str | None = None,
    ) -> ServiceResult:
        remote = self._remote_for(collection)

        async def wrapped() -> ServiceResult:
            if remote is not None:
                await remote.connect()
            try:
                return await operation()
            finally:
                if remote is not None:
                    await remote.disconnect()

        try:
            return asyncio.run(wrapped())
        except StudioError as exc:
            logger.debug("%s failed", op, exc_info=True)
            return ServiceResult.failure(op, error_code(exc), str(exc), _error_detail(exc))

    # ------------------------------------------------------------------
    # collections
    # ------------------------------------------------------------------

    def collections(self) -> ServiceResult:
        items = [
            {
                "name": col.name,
                "path": col.path,
                "source": col.source,
                "assets_path": col.assets_path,
                "schema": repr(col.schema) if col.schema is not None else None,
            }
            for col in self._studio.collections.values()
        ]
        return ServiceResult(ok=True, op="collections", data={"items": items, "count": len(items)})

    # ------------------------------------------------------------------
    # list_entries
    # ------------------------------------------------------------------

    def list_entries(self, name: str) -> ServiceResult:
        async def operation() -> ServiceResult:
            collection = self._studio.get_collection(name)
            entries = await collection.get_entries()
            items = [entry_summary(entry) for entry in entries]
            return ServiceResult(
                ok=True,
                op="list_entries",
                data={"collection": name, "items": items, "count": len(items)},
                warnings=_lenient_warnings(entries),
            )

        return self._run("list_entries", operation, collection=name)

    # ------------------------------------------------------------------
    # get
    # ------------------------------------------------------------------

    def get_entry(self, name: str, slug: str, *, raw: bool = False) -> ServiceResult:
        async def operation() -> ServiceResult:
            collection = self._studio.get_collection(name)
            entry = await collection.get_entry(slug)
            data: dict[str, Any] = {"collection": name, "slug": entry.slug, "path": entry.path}
            if raw:
                data["text"] = str(entry)
            else:
                data["metadata"] = entry.metadata_dict()
                data["content"] = entry.content
                data["read_time"] = entry.read_time
            return ServiceResult(
                ok=True, op="get", data=data, warnings=_lenient_warnings([entry])
            )

        return self._run("get", operation, collection=name)

    # ------------------------------------------------------------------
    # check
    # ------------------------------------------------------------------

    async def _check_collection(self, collection: Collection[Any]) -> list[dict[str, Any]]:
        issues: list[dict[str, Any]] = []
        try:
            slug_map = await collection.get_slug_map()
        except StudioError as exc:
            return [{"collection": collection.name, "slug": None, "message": str(exc)}]

        for slug in slug_map:
            try:
                entry = await collection.get_entry(slug)
            except ValidationError as exc:
                issues.extend(
                    {"collection": collection.name, "slug": slug, "message": str(issue)}
                    for issue in exc.issues
                )
                continue
            except NotFoundError as exc:
                issues.append({"collection": collection.name, "slug": slug, "message": str(exc)})
                continue
            issues.extend(
                {"collection": collection.name, "slug": slug, "message": str(issue)}
                for issue in entry.issues
            )
        return issues

    def check(self, name: str | None = None) -> ServiceResult:
        async def operation() -> ServiceResult:
            if name is None:
                targets = list(self._studio.collections.values())
            else:
                targets = [self._studio.get_collection(name)]
            issues: list[dict[str, Any]] = []
            for collection in targets:
                issues.extend(await self._check_collection(collection))
            return ServiceResult(
                ok=True,
                op="check",
                data={
                    "collections": [c.name for c in targets],
                    "issues": issues,
                    "count": len(issues),
                    "healthy": not issues,
                },
            )

        return self._run("check", operation, collection=name)


def _lenient_warnings(entries: list[Entry[Any]]) -> list[str]:
    return [
        f"{entry.path}: {issue}"
        for entry in entries
        for issue in entry.issues
    ]
