"""Error taxonomy for collection, entry, adapter, and secret handling.

Structural errors (duplicate slug, duplicate collection, missing
credential) signal a configuration mistake and are never retried.
Adapter I/O errors propagate to the immediate caller.
"""

from __future__ import annotations

from typing import Any


class StudioError(Exception):
    """Base class for all mdstudio errors."""


class ConfigurationError(StudioError, ValueError):
    """Missing credential, malformed repository identifier, bad settings."""


class InvalidSecretError(StudioError):
    """A SecretBox was revealed after its value was disposed."""

    def __init__(self) -> None:
        super().__init__("Invalid secret: the value has been disposed or was never stored")


class DuplicateSlugError(StudioError):
    """Two files in one collection normalize to the same slug."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(
            f"Duplicate slug {slug!r} found in collection {collection!r}. "
            f"Entries must have unique slugs (e.g. don't keep {slug}.md and "
            f"{slug}.mdx in the same collection)."
        )


class DuplicateCollectionError(StudioError):
    """Two collections in one registry share a name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Duplicate collection name detected: {name!r}. "
            f"Skip unused collections or remove them altogether."
        )


class CollectionNotFoundError(StudioError, KeyError):
    """Lookup of a collection name that is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Collection {self.name!r} is not defined"


class EntryNotFoundError(StudioError, KeyError):
    """Slug lookup miss within a collection."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(slug)

    def __str__(self) -> str:
        return f"Entry with slug {self.slug!r} not found in collection {self.collection!r}"


class NotFoundError(StudioError, FileNotFoundError):
    """Adapter read/remove on a missing or non-file path."""

    def __init__(self, path: str, detail: Any = None) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"File not found: {path}")

    def __str__(self) -> str:
        return f"File not found: {self.path}"


class ValidationError(StudioError):
    """A metadata schema rejected an entry's front-matter."""

    def __init__(self, path: str, issues: list[Any]) -> None:
        self.path = path
        self.issues = list(issues)
        rendered = "; ".join(str(issue) for issue in self.issues)
        super().__init__(f"Front matter validation error in file: {path}: {rendered}")


class MethodNotImplementedError(StudioError, NotImplementedError):
    """A storage backend does not support the requested capability."""

    def __init__(self, adapter: str, method: str) -> None:
        self.adapter = adapter
        self.method = method
        super().__init__(f"{adapter} does not implement {method}()")


class RemoteBackendError(StudioError):
    """Unexpected response from the remote repository API."""

    def __init__(self, method: str, url: str, status_code: int, body: str = "") -> None:
        self.method = method
        self.url = url
        self.status_code = status_code
        self.body = body
        super().__init__(f"{method} {url} failed with HTTP {status_code}")
