"""Exception hierarchy for commit-stats."""

from __future__ import annotations


class CommitStatsError(Exception):
    """Base class for all commit-stats errors."""


class GitHubAPIError(CommitStatsError):
    """The GitHub API answered with an error status."""

    def __init__(self, status_code: int, url: str, message: str = "") -> None:
        self.status_code = status_code
        self.url = url
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"GitHub API returned {status_code} for {url}{detail}")


class NoRepositoriesFoundError(CommitStatsError):
    """No repository of the account contains the requested language."""

    def __init__(self, account: str, language: str) -> None:
        self.account = account
        self.language = language
        super().__init__(f"No {language} repositories found in '{account}' account")


class InvalidDateError(CommitStatsError, ValueError):
    """A window bound could not be parsed as a date or timestamp."""
