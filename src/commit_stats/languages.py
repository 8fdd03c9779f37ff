"""Language filter: keep repositories containing code in a given language."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

import httpx

from .exceptions import GitHubAPIError
from .github.client import GitHubClient
from .models import FilteredRepository, RepositoryRef

logger = logging.getLogger(__name__)


def language_percentage(breakdown: Mapping[str, int], language: str) -> float | None:
    """Share of ``language`` in a bytes-per-language breakdown, rounded to one decimal.

    Returns ``None`` when the language is absent or has no bytes.
    """
    if language not in breakdown:
        return None
    total = sum(breakdown.values())
    if not breakdown[language] or not total:
        return None
    # a present language never rounds down to 0%
    return max(round(breakdown[language] / total * 100, 1), 0.1)


async def filter_language_repos(
    client: GitHubClient,
    repositories: Sequence[RepositoryRef],
    language: str = "R",
    strict: bool = True,
) -> tuple[list[FilteredRepository], list[str]]:
    """Return the repositories containing ``language`` and the ones that failed.

    With ``strict`` set, a failed language lookup aborts the whole pass.
    Otherwise the repository is logged, skipped and listed as failed.
    """
    logger.info("Identifying %s repositories...", language)
    kept: list[FilteredRepository] = []
    failed: list[str] = []
    for repo in repositories:
        try:
            breakdown = await client.get_languages(repo.full_name)
        except (GitHubAPIError, httpx.HTTPError) as exc:
            if strict:
                raise
            logger.warning("Error fetching languages for %s: %s", repo.full_name, exc)
            failed.append(repo.full_name)
            continue

        percentage = language_percentage(breakdown, language)
        if percentage is not None:
            kept.append(FilteredRepository.from_ref(repo, percentage))

    logger.info("%d of %d repositories contain %s", len(kept), len(repositories), language)
    return kept, failed
