"""Remote git storage backend (GitHub).

Branch-aware adapter over a :class:`RemoteGitBackend`. ``connect()``
makes sure the configured branch exists, forking it from the
repository's default branch when absent. Every ``write``/``remove``
is persisted as its own commit by the hosting API, so ``commit()`` is
a deliberate no-op and pending-change tracking is not supported.
"""

from __future__ import annotations

import base64
import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel

from mdstudio.domain.errors import ConfigurationError, MethodNotImplementedError, NotFoundError
from mdstudio.domain.secrets import SecretBox
from mdstudio.infrastructure.adapters.base import normalize_path
from mdstudio.infrastructure.github_client import (
    GitHubRestClient,
    RemoteFile,
    RemoteGitBackend,
)

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_ENV = "GITHUB_TOKEN"
DEFAULT_BRANCH = "main"


class GitHubAdapterContext(BaseModel):
    """Repository coordinates and credentials for :class:`GitHubAdapter`.

    Attributes:
        repo: ``owner/repo``, e.g. ``octocat/Hello-World``.
        branch: Branch all reads and writes target.
        token: API credential; serializes as ``<redacted>``.
    """

    model_config = {"frozen": True}

    repo: str
    branch: str = DEFAULT_BRANCH
    token: SecretBox

    @property
    def owner_and_name(self) -> tuple[str, str]:
        owner, name = self.repo.split("/")
        return owner, name


def _check_repo(repo: str) -> None:
    parts = repo.split("/")
    if len(parts) != 2 or not all(parts):
        msg = (
            f"Invalid repo format: {repo!r}. "
            f"Expected format is 'owner/repo', e.g. 'octocat/Hello-World'."
        )
        raise ConfigurationError(msg)


class GitHubAdapter:
    """StorageAdapter backed by a GitHub repository branch."""

    def __init__(
        self,
        repo: str,
        *,
        branch: str | None = None,
        token: SecretBox[str] | None = None,
        token_env: str = DEFAULT_TOKEN_ENV,
        backend: RemoteGitBackend | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        _check_repo(repo)
        if token is None:
            token = SecretBox.from_env(token_env, os.environ if environ is None else environ)
        self._context = GitHubAdapterContext(
            repo=repo, branch=branch or DEFAULT_BRANCH, token=token
        )
        self._backend: RemoteGitBackend = backend or GitHubRestClient(token)

    @property
    def context(self) -> GitHubAdapterContext:
        return self._context

    async def ensure_branch(self) -> None:
        """Create the configured branch from the default branch if it is missing."""
        owner, repo = self._context.owner_and_name
        branch = self._context.branch
        logger.info("Ensuring branch %s exists in %s", branch, self._context.repo)

        info = await self._backend.get_repository(owner, repo)
        if info.default_branch == branch:
            return

        if await self._backend.get_branch(owner, repo, branch) is not None:
            logger.info("Branch exists: %s", branch)
            return

        base = await self._backend.get_branch(owner, repo, info.default_branch)
        if base is None:
            raise NotFoundError(f"{self._context.repo}@{info.default_branch}")
        logger.info("Branch does not exist, creating %s from %s", branch, info.default_branch)
        await self._backend.create_branch(owner, repo, branch, base.sha)

    async def connect(self) -> bool:
        await self.ensure_branch()
        return True

    async def disconnect(self) -> bool:
        await self._backend.close()
        return True

    async def _get_file(self, path: str) -> RemoteFile:
        owner, repo = self._context.owner_and_name
        result = await self._backend.get_content(
            owner, repo, normalize_path(path), self._context.branch
        )
        if not isinstance(result, RemoteFile):
            raise NotFoundError(path, detail=result)
        return result

    async def read(self, path: str) -> str:
        remote = await self._get_file(path)
        return base64.b64decode(remote.content).decode("utf-8")

    async def write(self, path: str, content: str) -> bool:
        owner, repo = self._context.owner_and_name
        target = normalize_path(path)
        existing = await self._backend.get_content(owner, repo, target, self._context.branch)
        sha = existing.sha if isinstance(existing, RemoteFile) else None
        status = await self._backend.put_content(
            owner,
            repo,
            target,
            base64.b64encode(content.encode("utf-8")).decode("ascii"),
            f"Update {path} via mdstudio GitHub adapter",
            self._context.branch,
            sha=sha,
        )
        return status in (200, 201)

    async def remove(self, path: str) -> bool:
        owner, repo = self._context.owner_and_name
        remote = await self._get_file(path)
        status = await self._backend.delete_content(
            owner,
            repo,
            normalize_path(path),
            remote.sha,
            f"Delete {path} via mdstudio GitHub adapter",
            self._context.branch,
        )
        return status == 200

    async def list_dir(self, path: str) -> list[str]:
        owner, repo = self._context.owner_and_name
        result = await self._backend.get_content(
            owner, repo, normalize_path(path), self._context.branch
        )
        if not isinstance(result, list):
            raise NotFoundError(path, detail=result)
        return sorted(item.name for item in result if item.type == "file")

    async def commit(self, message: str) -> bool:
        logger.info(
            "Commit called with message %r; the GitHub adapter commits on every write", message
        )
        return True

    async def has_pending_changes(self) -> bool:
        raise MethodNotImplementedError(type(self).__name__, "has_pending_changes")

    def __repr__(self) -> str:
        return f"GitHubAdapter(repo={self._context.repo!r}, branch={self._context.branch!r})"
