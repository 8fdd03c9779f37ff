"""Repository discovery: list every repository of an account."""

from __future__ import annotations

import logging

from .github.client import GitHubClient, paginate
from .models import RepositoryRef

logger = logging.getLogger(__name__)


async def discover_repositories(
    client: GitHubClient,
    username: str,
    org: str | None = None,
) -> list[RepositoryRef]:
    """Return all repositories of ``org`` if given, otherwise of ``username``.

    Pages are requested in order until the first empty page. Request errors
    propagate to the caller.
    """
    account = org or username
    logger.info("Finding repositories for %s...", account)

    async def fetch_page(page: int) -> list[dict]:
        return await client.list_repos(account, page=page, is_org=org is not None)

    return [
        RepositoryRef.from_api(item)
        async for batch in paginate(fetch_page)
        for item in batch
    ]
