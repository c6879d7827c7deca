"""Tests for ContentService."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel

from mdstudio.domain.collection import Collection
from mdstudio.domain.errors import DuplicateSlugError, NotFoundError, StudioError
from mdstudio.domain.secrets import SecretBox
from mdstudio.domain.studio import define_studio_config
from mdstudio.infrastructure.adapters.github import GitHubAdapter
from mdstudio.services.content import ContentService, error_code
from tests.conftest import FakeRemoteBackend


class PostMeta(BaseModel):
    title: str
    tags: list[str] = []
    draft: bool = False


def _service(root: Path, *, lenient: bool = False) -> ContentService:
    posts = Collection.define(
        "posts", "./content/posts", schema=PostMeta, root=root, lenient=lenient
    )
    return ContentService(define_studio_config([posts]))


def _add_invalid_post(root: Path) -> None:
    bad = root / "content" / "posts" / "untitled.md"
    bad.write_text("---\ndraft: true\n---\n\nNo title here\n", encoding="utf-8")


class TestCollections:
    def test_lists_declared(self, content_root: Path) -> None:
        result = _service(content_root).collections()
        assert result.ok
        assert result.data["count"] == 1
        item = result.data["items"][0]
        assert item["name"] == "posts"
        assert item["source"] == "fs"
        assert item["assets_path"] == "./public"
        assert "PostMeta" in item["schema"]


class TestListEntries:
    def test_lists_entries(self, content_root: Path) -> None:
        result = _service(content_root).list_entries("posts")
        assert result.ok
        assert result.data["count"] == 2
        first = result.data["items"][0]
        assert first == {
            "slug": "hello-world",
            "title": "Hello World",
            "path": "./content/posts/hello-world.md",
            "read_time": "1 minute read",
        }

    def test_unknown_collection(self, content_root: Path) -> None:
        result = _service(content_root).list_entries("pages")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "COLLECTION_NOT_FOUND"
        assert result.error.detail == {"name": "pages"}

    def test_invalid_entry_fails_strict(self, content_root: Path) -> None:
        _add_invalid_post(content_root)
        result = _service(content_root).list_entries("posts")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert result.error.detail["issues"] == ["title: Field required"]

    def test_invalid_entry_warns_lenient(self, content_root: Path) -> None:
        _add_invalid_post(content_root)
        result = _service(content_root, lenient=True).list_entries("posts")
        assert result.ok
        assert result.data["count"] == 3
        assert result.warnings == ["./content/posts/untitled.md: title: Field required"]


class TestGetEntry:
    def test_structured(self, content_root: Path) -> None:
        result = _service(content_root).get_entry("posts", "hello-world")
        assert result.ok
        assert result.data["metadata"] == {
            "title": "Hello World",
            "tags": ["intro", "welcome"],
            "draft": False,
        }
        assert result.data["content"] == "Hello from the first post.\n"
        assert result.data["read_time"] == "1 minute read"

    def test_raw_round_trips(self, content_root: Path) -> None:
        result = _service(content_root).get_entry("posts", "hello-world", raw=True)
        source = (content_root / "content" / "posts" / "hello-world.md").read_text()
        assert result.data["text"] == source

    def test_missing_slug(self, content_root: Path) -> None:
        result = _service(content_root).get_entry("posts", "missing")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "ENTRY_NOT_FOUND"
        assert result.error.detail == {"collection": "posts", "slug": "missing"}


class TestCheck:
    def test_healthy(self, content_root: Path) -> None:
        result = _service(content_root).check()
        assert result.ok
        assert result.data["healthy"] is True
        assert result.data["collections"] == ["posts"]

    def test_collects_issues_without_aborting(self, content_root: Path) -> None:
        _add_invalid_post(content_root)
        result = _service(content_root).check("posts")
        assert result.ok
        assert result.data["count"] == 1
        assert result.data["issues"] == [
            {"collection": "posts", "slug": "untitled", "message": "title: Field required"}
        ]

    def test_lenient_issues_still_reported(self, content_root: Path) -> None:
        _add_invalid_post(content_root)
        result = _service(content_root, lenient=True).check()
        assert result.data["count"] == 1

    def test_duplicate_slug_reported(self, content_root: Path) -> None:
        (content_root / "content" / "posts" / "second.md").write_text("x", encoding="utf-8")
        result = _service(content_root).check()
        assert result.data["healthy"] is False
        assert result.data["issues"][0]["slug"] is None
        assert "Duplicate slug 'second'" in result.data["issues"][0]["message"]

    def test_unknown_collection(self, content_root: Path) -> None:
        result = _service(content_root).check("pages")
        assert not result.ok


class TestRemote:
    def test_connects_and_disconnects(self, remote_backend: FakeRemoteBackend) -> None:
        remote = GitHubAdapter(
            "octo/site",
            branch="preview",
            token=SecretBox.from_value("t"),
            backend=remote_backend,
        )
        posts = Collection.define("posts", "content/posts", source="remote", schema=PostMeta)
        service = ContentService(define_studio_config([posts], remote=remote))

        result = service.list_entries("posts")

        assert result.ok
        assert [item["slug"] for item in result.data["items"]] == ["hello-world", "second"]
        assert "preview" in remote_backend.branches
        assert remote_backend.closed


@pytest.mark.parametrize(
    ("exc", "code"),
    [
        (DuplicateSlugError("posts", "a"), "DUPLICATE_SLUG"),
        (NotFoundError("a.md"), "NOT_FOUND"),
        (StudioError("boom"), "STUDIO_ERROR"),
    ],
)
def test_error_code(exc: StudioError, code: str) -> None:
    assert error_code(exc) == code


class TestLocalOnlyWithRemoteConfigured:
    def _service(self, content_root: Path, backend: FakeRemoteBackend) -> ContentService:
        remote = GitHubAdapter(
            "octo/site", branch="preview", token=SecretBox.from_value("t"), backend=backend
        )
        local = Collection.define("posts", "./content/posts", schema=PostMeta, root=content_root)
        hosted = Collection.define("hosted", "content/posts", source="remote")
        return ContentService(define_studio_config([local, hosted], remote=remote))

    def test_local_list_skips_remote(
        self, content_root: Path, remote_backend: FakeRemoteBackend
    ) -> None:
        result = self._service(content_root, remote_backend).list_entries("posts")
        assert result.ok
        assert remote_backend.calls == []
        assert not remote_backend.closed

    def test_local_get_skips_remote(
        self, content_root: Path, remote_backend: FakeRemoteBackend
    ) -> None:
        result = self._service(content_root, remote_backend).get_entry("posts", "hello-world")
        assert result.ok
        assert remote_backend.calls == []

    def test_check_all_connects_for_remote_collection(
        self, content_root: Path, remote_backend: FakeRemoteBackend
    ) -> None:
        result = self._service(content_root, remote_backend).check()
        assert result.ok
        assert "preview" in remote_backend.branches
        assert remote_backend.closed
