"""Remote repository RPC boundary and its GitHub REST implementation.

:class:`RemoteGitBackend` is the narrow surface the remote adapter
consumes. :class:`GitHubRestClient` implements it against the GitHub
REST API with an ``httpx.AsyncClient`` created lazily on first use.
Not-found responses are returned as ``None``; any other unexpected
status raises :class:`RemoteBackendError`. Nothing is retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from mdstudio.domain.errors import RemoteBackendError
from mdstudio.domain.secrets import SecretBox

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"


@dataclass(frozen=True)
class RepositoryInfo:
    default_branch: str


@dataclass(frozen=True)
class BranchInfo:
    name: str
    sha: str


@dataclass(frozen=True)
class RemoteFile:
    """A file at a ref. ``content`` is base64 as delivered by the API."""

    path: str
    content: str
    sha: str


@dataclass(frozen=True)
class RemoteDirEntry:
    name: str
    path: str
    type: str


ContentResult = RemoteFile | list[RemoteDirEntry] | None


class RemoteGitBackend(Protocol):
    """Primitives the remote adapter needs from a git hosting API."""

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo: ...

    async def get_branch(self, owner: str, repo: str, branch: str) -> BranchInfo | None: ...

    async def create_branch(self, owner: str, repo: str, name: str, from_sha: str) -> bool: ...

    async def get_content(self, owner: str, repo: str, path: str, ref: str) -> ContentResult: ...

    async def put_content(
        self,
        owner: str,
        repo: str,
        path: str,
        content_b64: str,
        message: str,
        branch: str,
        sha: str | None = None,
    ) -> int: ...

    async def delete_content(
        self,
        owner: str,
        repo: str,
        path: str,
        sha: str,
        message: str,
        branch: str,
    ) -> int: ...

    async def close(self) -> None: ...


class GitHubRestClient:
    """Async GitHub REST client implementing :class:`RemoteGitBackend`."""

    def __init__(
        self,
        token: SecretBox[str] | str,
        *,
        base_url: str = GITHUB_API_URL,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: httpx.Timeout | None = None,
    ) -> None:
        self._token = token if isinstance(token, SecretBox) else SecretBox.from_value(token)
        self.base_url = base_url.rstrip("/")
        self._transport = transport
        self.timeout = timeout or httpx.Timeout(10.0, connect=5.0)
        self._client: httpx.AsyncClient | None = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": GITHUB_API_VERSION,
                    "Authorization": f"Bearer {SecretBox.reveal(self._token)}",
                },
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        response = await self._get_client().request(method, url, **kwargs)
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return response

    @staticmethod
    def _fail(response: httpx.Response) -> RemoteBackendError:
        request = response.request
        return RemoteBackendError(
            request.method, str(request.url), response.status_code, response.text
        )

    @staticmethod
    def _contents_url(owner: str, repo: str, path: str) -> str:
        return f"/repos/{owner}/{repo}/contents/{quote(path, safe='/')}"

    async def get_repository(self, owner: str, repo: str) -> RepositoryInfo:
        response = await self._request("GET", f"/repos/{owner}/{repo}")
        if response.status_code != 200:
            raise self._fail(response)
        return RepositoryInfo(default_branch=response.json()["default_branch"])

    async def get_branch(self, owner: str, repo: str, branch: str) -> BranchInfo | None:
        response = await self._request(
            "GET", f"/repos/{owner}/{repo}/branches/{quote(branch, safe='')}"
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise self._fail(response)
        data = response.json()
        return BranchInfo(name=data["name"], sha=data["commit"]["sha"])

    async def create_branch(self, owner: str, repo: str, name: str, from_sha: str) -> bool:
        response = await self._request(
            "POST",
            f"/repos/{owner}/{repo}/git/refs",
            json={"ref": f"refs/heads/{name}", "sha": from_sha},
        )
        if response.status_code != 201:
            raise self._fail(response)
        return True

    async def get_content(self, owner: str, repo: str, path: str, ref: str) -> ContentResult:
        response = await self._request(
            "GET", self._contents_url(owner, repo, path), params={"ref": ref}
        )
        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise self._fail(response)
        data = response.json()
        if isinstance(data, list):
            return [
                RemoteDirEntry(name=item["name"], path=item["path"], type=item["type"])
                for item in data
            ]
        if data.get("type") != "file":
            return None
        return RemoteFile(path=data["path"], content=data.get("content", ""), sha=data["sha"])

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
        payload: dict[str, Any] = {"message": message, "content": content_b64, "branch": branch}
        if sha is not None:
            payload["sha"] = sha
        response = await self._request("PUT", self._contents_url(owner, repo, path), json=payload)
        return response.status_code

    async def delete_content(
        self,
        owner: str,
        repo: str,
        path: str,
        sha: str,
        message: str,
        branch: str,
    ) -> int:
        response = await self._request(
            "DELETE",
            self._contents_url(owner, repo, path),
            json={"message": message, "sha": sha, "branch": branch},
        )
        return response.status_code

    def __repr__(self) -> str:
        return f"GitHubRestClient(base_url={self.base_url!r}, token={self._token})"
