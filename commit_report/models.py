"""
Data models for the commit report tool.

This module contains the shared data structures used across all modules.
All of them are frozen: once fetched or computed they are never mutated.
"""

import datetime
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CommitInfo:
    """Represents a single commit with its metadata."""
    sha: str
    message: str
    author_name: str
    author_email: str
    date: datetime.date

    @property
    def summary(self) -> str:
        """First line of the commit message."""
        lines = self.message.splitlines()
        return lines[0] if lines else ""


@dataclass(frozen=True)
class RepoMeta:
    """Repository metadata from GitHub."""
    full_name: str
    description: Optional[str]
    url: str
    default_branch: str


@dataclass(frozen=True)
class RepoCommits:
    """De-duplicated commits of one configured repository."""
    repo_name: str
    commits: Tuple[CommitInfo, ...] = ()


@dataclass(frozen=True)
class WeekWindow:
    """
    A Monday-aligned calendar week clipped to the report range.

    Both bounds are inclusive.
    """
    week_number: int
    start_date: datetime.date
    end_date: datetime.date

    @property
    def date_range(self) -> str:
        return f"{self.start_date:%Y-%m-%d} to {self.end_date:%Y-%m-%d}"

    def contains(self, day: datetime.date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class WeeklyRepoCommits:
    """A week together with the repositories that have commits in it."""
    week: WeekWindow
    repos: Tuple[RepoCommits, ...] = ()
