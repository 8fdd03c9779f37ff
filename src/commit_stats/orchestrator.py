"""Sequence the collection stages and dispatch the summary to a renderer."""

from __future__ import annotations

import logging
from datetime import date

from .aggregator import build_account_summary
from .collector import collect_commits
from .dates import normalize_window
from .discovery import discover_repositories
from .exceptions import NoRepositoriesFoundError
from .github.client import DEFAULT_TIMEOUT, GitHubClient
from .languages import filter_language_repos
from .models import AccountInfo, AccountSummary
from .renderer import render_csv, render_json, render_report

logger = logging.getLogger(__name__)


async def summarize_account_activity(
    client: GitHubClient,
    username: str,
    start_date: str | date,
    end_date: str | date,
    org: str | None = None,
    language: str = "R",
    strict: bool = True,
) -> AccountSummary:
    """Summarize the commits of ``username`` across the ``language`` repositories of an account.

    Raises NoRepositoriesFoundError when no repository of the account
    contains ``language``.
    """
    since, until = normalize_window(start_date, end_date)

    repos = await discover_repositories(client, username, org=org)
    filtered, failed = await filter_language_repos(client, repos, language=language, strict=strict)
    if not filtered:
        raise NoRepositoriesFoundError(org or username, language)

    records, failed_commits = await collect_commits(client, filtered, username, since, until)
    logger.info("Collected %d commits from %d repositories", len(records), len(filtered))

    account = AccountInfo(username=username, org=org, start=since, end=until, language=language)
    return build_account_summary(records, filtered, account, failed_repos=failed + failed_commits)


async def run(
    username: str,
    token: str,
    start_date: str | date,
    end_date: str | date,
    org: str | None = None,
    language: str = "R",
    output_format: str = "table",
    output_file: str | None = None,
    strict: bool = True,
    timeout: float = DEFAULT_TIMEOUT,
) -> AccountSummary:
    """Main orchestration: collect the activity summary and render it."""
    async with GitHubClient(token, timeout=timeout) as client:
        summary = await summarize_account_activity(
            client,
            username,
            start_date,
            end_date,
            org=org,
            language=language,
            strict=strict,
        )

    if output_format == "json":
        render_json(summary, output_file=output_file)
    elif output_format == "csv":
        render_csv(summary, output_file=output_file)
    else:
        render_report(summary, output_file=output_file)
    return summary
