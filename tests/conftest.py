"""Shared pytest fixtures and test helpers for mdstudio tests."""

from __future__ import annotations

import base64
import hashlib
import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from mdstudio.infrastructure.github_client import (
    BranchInfo,
    ContentResult,
    RemoteDirEntry,
    RemoteFile,
    RepositoryInfo,
)

POST_HELLO = """\
---
title: Hello World
tags: [intro, welcome]
draft: false
---

Hello from the first post.
"""

POST_SECOND = """\
---
title: Second Post
tags: [news]
draft: true
---

Some more words here.
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    """Temporary project with a ``content/posts`` collection directory."""
    posts = tmp_path / "content" / "posts"
    posts.mkdir(parents=True)
    (posts / "hello-world.md").write_text(POST_HELLO, encoding="utf-8")
    (posts / "second.mdx").write_text(POST_SECOND, encoding="utf-8")
    (posts / "cover.png").write_bytes(b"\x89PNG")
    (posts / "drafts").mkdir()
    return tmp_path


# ---------------------------------------------------------------------------
# In-memory remote repository
# ---------------------------------------------------------------------------


def _blob_sha(text: str) -> str:
    return hashlib.sha1(text.encode("utf-8")).hexdigest()


class FakeRemoteBackend:
    """In-memory stand-in for :class:`RemoteGitBackend`.

    Each branch points at a commit; each commit is a snapshot of
    ``path -> RemoteFile``. Writes and deletes create new commits.
    """

    def __init__(self, default_branch: str = "main", files: dict[str, str] | None = None) -> None:
        self.default_branch = default_branch
        self.commits: dict[str, dict[str, RemoteFile]] = {}
        self.branches: dict[str, str] = {}
        self.calls: list[tuple[str, ...]] = []
        self.closed = False
        self._counter = 0
        tree = {path: self._file(path, text) for path, text in (files or {}).items()}
        self.branches[default_branch] = self._commit(tree)

    @staticmethod
    def _file(path: str, text: str) -> RemoteFile:
        encoded = base64.b64encode(text.encode("utf-8")).decode("ascii")
        return RemoteFile(path=path, content=encoded, sha=_blob_sha(text))

    def _commit(self, tree: dict[str, RemoteFile]) -> str:
        self._counter += 1
        sha = f"commit{self._counter:04d}"
        self.commits[sha] = tree
        return sha

    def tree(self, branch: str) -> dict[str, RemoteFile]:
        return self.commits[self.branches[branch]]

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        self.calls.append(("get_repository", owner, repo))
        return RepositoryInfo(default_branch=self.default_branch)

    async def get_branch(self, owner: str, repo: str, branch: str) -> BranchInfo | None:
        self.calls.append(("get_branch", branch))
        sha = self.branches.get(branch)
        return BranchInfo(name=branch, sha=sha) if sha else None

    async def create_branch(self, owner: str, repo: str, name: str, from_sha: str) -> bool:
        self.calls.append(("create_branch", name, from_sha))
        self.branches[name] = from_sha
        return True

    async def get_content(self, owner: str, repo: str, path: str, ref: str) -> ContentResult:
        self.calls.append(("get_content", path, ref))
        tree = self.tree(ref)
        if path in tree:
            return tree[path]
        prefix = f"{path.rstrip('/')}/" if path else ""
        children: dict[str, RemoteDirEntry] = {}
        for file_path in tree:
            if not file_path.startswith(prefix):
                continue
            name, _, rest = file_path[len(prefix) :].partition("/")
            kind = "dir" if rest else "file"
            children[name] = RemoteDirEntry(name=name, path=f"{prefix}{name}", type=kind)
        if not children:
            return None
        return [children[name] for name in sorted(children)]

    async def put_content(
        self,
        owner: str,
        repo: str,
        path: str,
        content_b64: str,
        message: str,
        branch: str,
        sha: str | None = None,
    ) -> int:
        self.calls.append(("put_content", path, message, branch))
        tree = dict(self.tree(branch))
        created = path not in tree
        text = base64.b64decode(content_b64).decode("utf-8")
        tree[path] = self._file(path, text)
        self.branches[branch] = self._commit(tree)
        return 201 if created else 200

    async def delete_content(
        self,
        owner: str,
        repo: str,
        path: str,
        sha: str,
        message: str,
        branch: str,
    ) -> int:
        self.calls.append(("delete_content", path, sha, branch))
        tree = dict(self.tree(branch))
        if path not in tree or tree[path].sha != sha:
            return 409
        del tree[path]
        self.branches[branch] = self._commit(tree)
        return 200

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def remote_backend() -> FakeRemoteBackend:
    """Repository with default branch ``main`` holding two posts."""
    return FakeRemoteBackend(
        files={
            "content/posts/hello-world.md": POST_HELLO,
            "content/posts/second.mdx": POST_SECOND,
            "README.md": "# repo\n",
        }
    )


SITE_TOML = """\
[[collections]]
name = "posts"
path = "./content/posts"
schema = "tests.schemas:PostMeta"

[[collections]]
name = "archive"
path = "./content/archive"
skip = true
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer shell settings out of config discovery."""
    monkeypatch.delenv("MDSTUDIO_CONFIG", raising=False)
    monkeypatch.delenv("MDSTUDIO_LENIENT", raising=False)


@pytest.fixture
def _isolated_studio(content_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp project with ``mdstudio.toml`` and a posts collection.

    Use via ``@pytest.mark.usefixtures("_isolated_studio")`` on command test
    classes. Tests that need the path can also request ``content_root``.
    """
    (content_root / "mdstudio.toml").write_text(SITE_TOML, encoding="utf-8")
    monkeypatch.chdir(content_root)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handlers installed by ``configure_logging`` during CLI tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    studio = logging.getLogger("mdstudio")
    studio_level = studio.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    studio.setLevel(studio_level)
