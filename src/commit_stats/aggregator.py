"""Roll collected commits up into per-repository and account-wide statistics."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence

from .models import (
    AccountInfo,
    AccountSummary,
    CommitRecord,
    CommitRow,
    FilteredRepository,
    OverallStats,
    RepositorySummary,
)


def commit_rows(records: Iterable[CommitRecord]) -> list[CommitRow]:
    """Flatten commit records into one table row per commit."""
    return [
        CommitRow(
            repository=r.repository,
            author=r.author,
            date=r.date,
            additions=r.changes.additions,
            deletions=r.changes.deletions,
            files_changed=r.changes.files_changed,
        )
        for r in records
    ]


def sum_available(values: Iterable[int | None]) -> int:
    """Sum ``values``, skipping unavailable (``None``) entries."""
    return sum(v for v in values if v is not None)


def _summarize(repository: str, rows: Sequence[CommitRow]) -> RepositorySummary:
    return RepositorySummary(
        repository=repository,
        total_commits=len(rows),
        unique_authors=len({row.author for row in rows}),
        total_additions=sum_available(row.additions for row in rows),
        total_deletions=sum_available(row.deletions for row in rows),
        total_files_changed=sum_available(row.files_changed for row in rows),
    )


def summarize_repositories(
    rows: Sequence[CommitRow],
    repositories: Sequence[FilteredRepository],
) -> list[RepositorySummary]:
    """One summary per repository, in collection order.

    Repositories without matching commits get an all-zero summary.
    """
    by_repo: dict[str, list[CommitRow]] = defaultdict(list)
    for row in rows:
        by_repo[row.repository].append(row)
    return [_summarize(repo.full_name, by_repo.get(repo.full_name, [])) for repo in repositories]


def overall_stats(
    rows: Sequence[CommitRow],
    repositories: Sequence[FilteredRepository],
) -> OverallStats:
    """Account-wide totals; the repository count comes from ``repositories``."""
    totals = _summarize("", rows)
    return OverallStats(
        total_repositories=len(repositories),
        total_commits=totals.total_commits,
        unique_authors=totals.unique_authors,
        total_additions=totals.total_additions,
        total_deletions=totals.total_deletions,
        total_files_changed=totals.total_files_changed,
    )


def build_account_summary(
    records: Iterable[CommitRecord],
    repositories: Sequence[FilteredRepository],
    account: AccountInfo,
    failed_repos: Iterable[str] = (),
) -> AccountSummary:
    rows = commit_rows(records)
    return AccountSummary(
        account=account,
        repositories=tuple(repositories),
        repository_stats=tuple(summarize_repositories(rows, repositories)),
        commits=tuple(rows),
        overall=overall_stats(rows, repositories),
        failed_repos=tuple(failed_repos),
    )
