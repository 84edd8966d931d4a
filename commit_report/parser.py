"""
Commit filtering and de-duplication module.

This module removes merge commits from the raw commit lists returned by the
fetcher, orders them by date, and merges the per-branch lists of a repository
into a single list without repeated commits.
"""

import logging
from typing import Iterable, List, Sequence, Set

from .models import CommitInfo

logger = logging.getLogger("commit-report.parser")


class CommitParser:
    """
    Inspect commit messages.

    Merge commits are recognised by the messages GitHub and git write for them.
    """

    MERGE_PREFIXES = (
        "merge pull request",
        "merge branch",
        "merge remote-tracking branch",
    )

    @staticmethod
    def is_merge(message: str) -> bool:
        """Return True if the message, ignoring case, starts like a merge commit."""
        return message.lower().startswith(CommitParser.MERGE_PREFIXES)


def filter_commits(commits: Iterable[CommitInfo]) -> List[CommitInfo]:
    """
    Drop merge commits and sort the rest by date, oldest first.

    The sort is stable, so commits sharing a date keep their input order.

    Args:
        commits: Commits of a single branch, in any order

    Returns:
        New list of non-merge commits in ascending date order
    """
    kept = [c for c in commits if not CommitParser.is_merge(c.message)]
    kept.sort(key=lambda c: c.date)
    return kept


def dedupe_commits(per_branch: Sequence[Sequence[CommitInfo]]) -> List[CommitInfo]:
    """
    Merge the commit lists of several branches of one repository.

    Branches are walked in the given order and a commit is kept only the first
    time its sha shows up. The merged list is not re-sorted: it follows branch
    order first, then each branch's own order.

    Args:
        per_branch: One (already filtered) commit list per configured branch

    Returns:
        Commits with unique shas in first-seen order
    """
    seen: Set[str] = set()
    result: List[CommitInfo] = []
    for commits in per_branch:
        for commit in commits:
            if commit.sha in seen:
                continue
            seen.add(commit.sha)
            result.append(commit)
    logger.debug("Merged %d branch lists into %d unique commits", len(per_branch), len(result))
    return result
