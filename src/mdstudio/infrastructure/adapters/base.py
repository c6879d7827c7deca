"""StorageAdapter — uniform capability contract over content backends.

A Collection never knows whether its files live on disk or in a remote
repository; it only talks to an object satisfying :class:`StorageAdapter`.
Backends differ in latency and commit granularity, not in observable
semantics. Every operation is a coroutine.

Variants:

- :class:`~mdstudio.infrastructure.adapters.local.LocalFilesystemAdapter`
  (implicit for ``source = "fs"``; writes land immediately).
- :class:`~mdstudio.infrastructure.adapters.github.GitHubAdapter`
  (explicit for ``source = "remote"``; branch-aware, one commit per write).
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


def normalize_path(path: str) -> str:
    """Strip a leading ``./`` before addressing the backend."""
    return path[2:] if path.startswith("./") else path


@runtime_checkable
class StorageAdapter(Protocol):
    """Capability set every storage backend exposes."""

    @property
    def context(self) -> Any: ...

    async def connect(self) -> bool: ...

    async def disconnect(self) -> bool: ...

    async def read(self, path: str) -> str:
        """Return file text. Raises NotFoundError for missing or non-file paths."""
        ...

    async def write(self, path: str, content: str) -> bool: ...

    async def remove(self, path: str) -> bool:
        """Delete a file. Raises NotFoundError for missing or non-file paths."""
        ...

    async def list_dir(self, path: str) -> list[str]:
        """Return the names of the files (not directories) directly under *path*."""
        ...

    async def commit(self, message: str) -> bool: ...

    async def has_pending_changes(self) -> bool: ...
