"""Commit collection: commits by one author and their diff statistics."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import httpx

from .exceptions import GitHubAPIError
from .github.client import GitHubClient, paginate
from .models import ChangeStats, CommitRecord, FilteredRepository

logger = logging.getLogger(__name__)

_REQUEST_ERRORS = (GitHubAPIError, httpx.HTTPError)


async def _list_repo_commits(
    client: GitHubClient, full_name: str, author: str, since: str, until: str
) -> list[dict]:
    async def fetch_page(page: int) -> list[dict]:
        return await client.list_commits(full_name, author, since, until, page=page)

    return [commit async for batch in paginate(fetch_page) for commit in batch]


async def fetch_change_stats(client: GitHubClient, full_name: str, sha: str) -> ChangeStats:
    """Diff statistics of one commit, or ``ChangeStats.unavailable()`` if the lookup fails."""
    try:
        detail = await client.get_commit(full_name, sha)
    except _REQUEST_ERRORS as exc:
        logger.debug("Error fetching details of %s@%s: %s", full_name, sha, exc)
        return ChangeStats.unavailable()
    stats = detail.get("stats") or {}
    return ChangeStats(
        additions=stats.get("additions"),
        deletions=stats.get("deletions"),
        files_changed=len(detail.get("files") or []),
    )


def _commit_record(full_name: str, commit: dict, changes: ChangeStats) -> CommitRecord:
    meta = commit.get("commit") or {}
    author = meta.get("author") or {}
    return CommitRecord(
        repository=full_name,
        sha=commit["sha"],
        author=author.get("name", ""),
        date=author.get("date", ""),
        message=meta.get("message", ""),
        changes=changes,
    )


async def collect_commits(
    client: GitHubClient,
    repositories: Sequence[FilteredRepository],
    author: str,
    since: str,
    until: str,
) -> tuple[list[CommitRecord], list[str]]:
    """Collect commits by ``author`` in ``[since, until]`` across ``repositories``.

    Repositories are processed in order and commits keep the order the API
    returns them in. A repository whose commit list cannot be fetched
    contributes no commits and is returned in the failed list; a commit whose
    details cannot be fetched is kept with unavailable statistics.
    """
    logger.info("Fetching commits for %d repositories...", len(repositories))
    records: list[CommitRecord] = []
    failed: list[str] = []
    total = len(repositories)
    for i, repo in enumerate(repositories, 1):
        logger.info("Processing %s (%d/%d)", repo.full_name, i, total)
        try:
            commits = await _list_repo_commits(client, repo.full_name, author, since, until)
        except _REQUEST_ERRORS as exc:
            logger.warning("Error fetching commits for %s: %s", repo.full_name, exc)
            failed.append(repo.full_name)
            continue

        missing = 0
        for commit in commits:
            changes = await fetch_change_stats(client, repo.full_name, commit["sha"])
            if not changes.available:
                missing += 1
            records.append(_commit_record(repo.full_name, commit, changes))

        if missing:
            logger.warning(
                "Statistics unavailable for %d of %d commits in %s",
                missing,
                len(commits),
                repo.full_name,
            )
    return records, failed
