"""Async client for the GitHub REST API endpoints used by commit-stats."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx

from .. import __version__
from ..exceptions import GitHubAPIError
from .rate_limit import RateLimitMonitor

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"
PER_PAGE = 100
DEFAULT_TIMEOUT = 30.0


class GitHubClient:
    """Thin wrapper over ``httpx.AsyncClient``.

    Each method issues exactly one request and waits for it, so callers
    control ordering and pagination. Use as an async context manager.
    """

    def __init__(
        self,
        token: str,
        base_url: str = GITHUB_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": f"commit-stats/{__version__}",
            },
            timeout=timeout,
            transport=transport,
        )
        self._rate_limit = RateLimitMonitor()

    async def __aenter__(self) -> GitHubClient:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        await self._rate_limit.wait_if_needed()
        logger.debug("GET %s %s", path, params or "")
        response = await self._client.get(path, params=params)
        self._rate_limit.update(response)
        if response.status_code >= 400:
            raise GitHubAPIError(response.status_code, str(response.url), _error_message(response))
        try:
            return response.json()
        except ValueError as exc:
            raise GitHubAPIError(response.status_code, str(response.url), "invalid JSON body") from exc

    async def list_repos(self, account: str, page: int = 1, is_org: bool = False) -> list[dict]:
        """Return one page of the repositories of a user or organization."""
        path = f"/orgs/{account}/repos" if is_org else f"/users/{account}/repos"
        return await self._get(path, params={"page": page, "per_page": PER_PAGE})

    async def get_languages(self, full_name: str) -> dict[str, int]:
        """Return the bytes of code per language of a repository."""
        return await self._get(f"/repos/{full_name}/languages")

    async def list_commits(
        self,
        full_name: str,
        author: str,
        since: str,
        until: str,
        page: int = 1,
    ) -> list[dict]:
        """Return one page of the commits by ``author`` between ``since`` and ``until``."""
        params = {
            "author": author,
            "since": since,
            "until": until,
            "page": page,
            "per_page": PER_PAGE,
        }
        return await self._get(f"/repos/{full_name}/commits", params=params)

    async def get_commit(self, full_name: str, sha: str) -> dict:
        """Return a single commit including its ``stats`` and ``files``."""
        return await self._get(f"/repos/{full_name}/commits/{sha}")


async def paginate(fetch_page: Callable[[int], Awaitable[list]]) -> AsyncIterator[list]:
    """Yield pages from ``fetch_page(1)`` upward until one comes back empty."""
    page = 1
    while batch := await fetch_page(page):
        yield batch
        page += 1


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return body.get("message", "")
    return ""
