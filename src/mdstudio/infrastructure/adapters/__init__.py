"""Storage adapters implementing :class:`~mdstudio.infrastructure.adapters.base.StorageAdapter`."""

from mdstudio.infrastructure.adapters.base import StorageAdapter, normalize_path
from mdstudio.infrastructure.adapters.github import GitHubAdapter, GitHubAdapterContext
from mdstudio.infrastructure.adapters.local import LocalFilesystemAdapter

__all__ = [
    "GitHubAdapter",
    "GitHubAdapterContext",
    "LocalFilesystemAdapter",
    "StorageAdapter",
    "normalize_path",
]
