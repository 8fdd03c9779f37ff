"""Tests for the repository discovery module."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from commit_stats.discovery import discover_repositories
from commit_stats.exceptions import GitHubAPIError
from commit_stats.github.client import GitHubClient


def _repo(name: str, owner: str = "acme") -> dict:
    return {
        "name": name,
        "full_name": f"{owner}/{name}",
        "description": None,
        "stargazers_count": 3,
        "forks_count": 1,
        "updated_at": "2024-05-01T00:00:00Z",
        "fork": False,
        "default_branch": "main",
    }


def _paged_client(pages: list[list[dict]]) -> AsyncMock:
    client = AsyncMock(spec=GitHubClient)

    async def list_repos(account, page=1, is_org=False):
        return pages[page - 1] if page <= len(pages) else []

    client.list_repos.side_effect = list_repos
    return client


@pytest.mark.asyncio
async def test_discover_stops_on_first_empty_page():
    pages = [[_repo("a"), _repo("b")], [_repo("c")], []]
    client = _paged_client(pages)

    repos = await discover_repositories(client, "alice")

    assert [r.full_name for r in repos] == ["acme/a", "acme/b", "acme/c"]
    # two non-empty pages plus the terminating empty one
    assert client.list_repos.await_count == 3
    assert [c.kwargs["page"] for c in client.list_repos.await_args_list] == [1, 2, 3]


@pytest.mark.asyncio
async def test_discover_empty_account_makes_one_request():
    client = _paged_client([[]])
    repos = await discover_repositories(client, "alice")
    assert repos == []
    assert client.list_repos.await_count == 1


@pytest.mark.asyncio
async def test_discover_user_repos():
    client = _paged_client([[_repo("a")]])
    await discover_repositories(client, "alice")
    first = client.list_repos.await_args_list[0]
    assert first.args == ("alice",)
    assert first.kwargs["is_org"] is False


@pytest.mark.asyncio
async def test_discover_org_takes_precedence():
    client = _paged_client([[_repo("a", owner="waldronlab")]])
    repos = await discover_repositories(client, "alice", org="waldronlab")
    first = client.list_repos.await_args_list[0]
    assert first.args == ("waldronlab",)
    assert first.kwargs["is_org"] is True
    assert repos[0].full_name == "waldronlab/a"


@pytest.mark.asyncio
async def test_discover_maps_repository_fields():
    client = _paged_client([[_repo("a")]])
    repo = (await discover_repositories(client, "alice"))[0]
    assert repo.name == "a"
    assert repo.description is None
    assert repo.stars == 3
    assert repo.forks == 1
    assert repo.last_updated == "2024-05-01T00:00:00Z"
    assert repo.is_fork is False
    assert repo.default_branch == "main"


@pytest.mark.asyncio
async def test_discover_propagates_request_errors():
    client = AsyncMock(spec=GitHubClient)
    client.list_repos.side_effect = GitHubAPIError(404, "https://api.github.com/users/nobody/repos", "Not Found")
    with pytest.raises(GitHubAPIError):
        await discover_repositories(client, "nobody")
