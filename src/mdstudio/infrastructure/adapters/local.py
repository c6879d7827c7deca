"""Local filesystem storage backend.

Synchronous disk I/O behind the async adapter contract: each call
completes before it returns control, so there is nothing to commit
and never any pending state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from mdstudio.domain.errors import NotFoundError
from mdstudio.infrastructure.adapters.base import normalize_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalContext:
    """Context for the local backend: the directory paths resolve against."""

    root: Path


class LocalFilesystemAdapter:
    """StorageAdapter over a directory tree."""

    def __init__(self, root: Path | str | None = None) -> None:
        self._context = LocalContext(root=Path(root) if root is not None else Path.cwd())

    @property
    def context(self) -> LocalContext:
        return self._context

    def _resolve(self, path: str) -> Path:
        return self._context.root / normalize_path(path)

    async def connect(self) -> bool:
        return self._context.root.is_dir()

    async def disconnect(self) -> bool:
        return True

    async def read(self, path: str) -> str:
        target = self._resolve(path)
        if not target.is_file():
            raise NotFoundError(path)
        return target.read_text(encoding="utf-8")

    async def write(self, path: str, content: str) -> bool:
        target = self._resolve(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return True

    async def remove(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_file():
            raise NotFoundError(path)
        target.unlink()
        return True

    async def list_dir(self, path: str) -> list[str]:
        target = self._resolve(path)
        if not target.is_dir():
            raise NotFoundError(path)
        return sorted(child.name for child in target.iterdir() if child.is_file())

    async def commit(self, message: str) -> bool:
        logger.debug("Local adapter commit is a no-op: %s", message)
        return True

    async def has_pending_changes(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"LocalFilesystemAdapter(root={str(self._context.root)!r})"
