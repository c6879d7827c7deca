"""Tests for LocalFilesystemAdapter."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdstudio.domain.errors import NotFoundError
from mdstudio.infrastructure.adapters.base import StorageAdapter, normalize_path
from mdstudio.infrastructure.adapters.local import LocalFilesystemAdapter


@pytest.fixture
def adapter(content_root: Path) -> LocalFilesystemAdapter:
    return LocalFilesystemAdapter(content_root)


def test_satisfies_protocol(adapter: LocalFilesystemAdapter) -> None:
    assert isinstance(adapter, StorageAdapter)


@pytest.mark.parametrize(
    ("given", "expected"),
    [("./content/posts", "content/posts"), ("content", "content"), ("../x", "../x")],
)
def test_normalize_path(given: str, expected: str) -> None:
    assert normalize_path(given) == expected


class TestLocalAdapter:
    async def test_connect(self, adapter: LocalFilesystemAdapter, tmp_path: Path) -> None:
        assert await adapter.connect() is True
        assert await LocalFilesystemAdapter(tmp_path / "missing").connect() is False

    async def test_read(self, adapter: LocalFilesystemAdapter) -> None:
        text = await adapter.read("./content/posts/hello-world.md")
        assert text.startswith("---\ntitle: Hello World")

    async def test_read_missing(self, adapter: LocalFilesystemAdapter) -> None:
        with pytest.raises(NotFoundError) as exc_info:
            await adapter.read("content/posts/nope.md")
        assert isinstance(exc_info.value, FileNotFoundError)

    async def test_read_directory_is_not_found(self, adapter: LocalFilesystemAdapter) -> None:
        with pytest.raises(NotFoundError):
            await adapter.read("content/posts/drafts")

    async def test_write_creates_parents(
        self, adapter: LocalFilesystemAdapter, content_root: Path
    ) -> None:
        assert await adapter.write("content/notes/a/b.md", "hi") is True
        assert (content_root / "content" / "notes" / "a" / "b.md").read_text() == "hi"
        assert await adapter.read("./content/notes/a/b.md") == "hi"

    async def test_remove(self, adapter: LocalFilesystemAdapter, content_root: Path) -> None:
        assert await adapter.remove("content/posts/second.mdx") is True
        assert not (content_root / "content" / "posts" / "second.mdx").exists()
        with pytest.raises(NotFoundError):
            await adapter.remove("content/posts/second.mdx")

    async def test_list_dir_files_only(self, adapter: LocalFilesystemAdapter) -> None:
        assert await adapter.list_dir("./content/posts") == [
            "cover.png",
            "hello-world.md",
            "second.mdx",
        ]

    async def test_list_dir_missing(self, adapter: LocalFilesystemAdapter) -> None:
        with pytest.raises(NotFoundError):
            await adapter.list_dir("content/pages")

    async def test_commit_and_pending(self, adapter: LocalFilesystemAdapter) -> None:
        assert await adapter.commit("msg") is True
        assert await adapter.has_pending_changes() is False
        assert await adapter.disconnect() is True

    def test_context_root(self, adapter: LocalFilesystemAdapter, content_root: Path) -> None:
        assert adapter.context.root == content_root
