"""Data models for commit-stats."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

NO_DESCRIPTION = "No description"


@dataclass(frozen=True)
class RepositoryRef:
    full_name: str
    name: str
    description: str | None = None
    stars: int = 0
    forks: int = 0
    last_updated: str | None = None
    is_fork: bool = False
    default_branch: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RepositoryRef:
        """Build a reference from a ``/repos`` listing entry."""
        return cls(
            full_name=data["full_name"],
            name=data["name"],
            description=data.get("description"),
            stars=data.get("stargazers_count", 0),
            forks=data.get("forks_count", 0),
            last_updated=data.get("updated_at"),
            is_fork=data.get("fork", False),
            default_branch=data.get("default_branch"),
        )


@dataclass(frozen=True)
class FilteredRepository:
    repository: RepositoryRef
    percentage: float
    description: str = NO_DESCRIPTION

    @classmethod
    def from_ref(cls, repository: RepositoryRef, percentage: float) -> FilteredRepository:
        return cls(
            repository=repository,
            percentage=percentage,
            description=repository.description or NO_DESCRIPTION,
        )

    @property
    def full_name(self) -> str:
        return self.repository.full_name

    @property
    def name(self) -> str:
        return self.repository.name


@dataclass(frozen=True)
class ChangeStats:
    """Diff statistics of one commit; ``None`` marks a value that could not be fetched."""

    additions: int | None
    deletions: int | None
    files_changed: int | None

    @classmethod
    def unavailable(cls) -> ChangeStats:
        return cls(additions=None, deletions=None, files_changed=None)

    @property
    def available(self) -> bool:
        return None not in (self.additions, self.deletions, self.files_changed)


@dataclass(frozen=True)
class CommitRecord:
    repository: str
    sha: str
    author: str
    date: str
    message: str
    changes: ChangeStats


@dataclass(frozen=True)
class CommitRow:
    repository: str
    author: str
    date: str
    additions: int | None
    deletions: int | None
    files_changed: int | None


@dataclass(frozen=True)
class RepositorySummary:
    repository: str
    total_commits: int
    unique_authors: int
    total_additions: int
    total_deletions: int
    total_files_changed: int


@dataclass(frozen=True)
class OverallStats:
    total_repositories: int
    total_commits: int
    unique_authors: int
    total_additions: int
    total_deletions: int
    total_files_changed: int


@dataclass(frozen=True)
class AccountInfo:
    username: str
    org: str | None
    start: str
    end: str
    language: str = "R"

    @property
    def account(self) -> str:
        return self.org or self.username


@dataclass(frozen=True)
class AccountSummary:
    account: AccountInfo
    repositories: tuple[FilteredRepository, ...]
    repository_stats: tuple[RepositorySummary, ...]
    commits: tuple[CommitRow, ...]
    overall: OverallStats
    failed_repos: tuple[str, ...] = field(default_factory=tuple)
