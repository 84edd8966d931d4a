"""
Week partitioning and bucketing.

A report range is cut into Monday-to-Sunday weeks, with the first and last
week clipped to the range, and every commit is placed in the week that
contains its date.
"""

import datetime
from typing import List, Sequence

from .errors import InvalidRangeError
from .models import RepoCommits, WeekWindow, WeeklyRepoCommits

ONE_DAY = datetime.timedelta(days=1)
ONE_WEEK = datetime.timedelta(days=7)


def week_start(day: datetime.date) -> datetime.date:
    """Monday of the week containing ``day``."""
    return day - datetime.timedelta(days=day.weekday())


def partition_weeks(start: datetime.date, end: datetime.date) -> List[WeekWindow]:
    """
    Split the inclusive range [start, end] into numbered calendar weeks.

    Raises:
        InvalidRangeError: If start is after end
    """
    if start > end:
        raise InvalidRangeError(f"Start date {start:%Y-%m-%d} is after end date {end:%Y-%m-%d}")

    weeks: List[WeekWindow] = []
    monday = week_start(start)
    while monday <= end:
        sunday = monday + ONE_WEEK - ONE_DAY
        weeks.append(WeekWindow(
            week_number=len(weeks) + 1,
            start_date=max(monday, start),
            end_date=min(sunday, end),
        ))
        monday += ONE_WEEK
    return weeks


def _check_windows(weeks: Sequence[WeekWindow]) -> None:
    for previous, current in zip(weeks, weeks[1:]):
        if current.start_date != previous.end_date + ONE_DAY:
            raise RuntimeError(
                f"Week {current.week_number} ({current.date_range}) does not directly follow "
                f"week {previous.week_number} ({previous.date_range})"
            )


def bucketize(repo_commits: Sequence[RepoCommits], weeks: Sequence[WeekWindow]) -> List[WeeklyRepoCommits]:
    """
    Group every repository's commits by week.

    Weeks keep their order and repositories keep their configured order.
    Repositories without commits in a week are left out of that week, but a
    week with no commits at all is still returned with an empty ``repos``.
    """
    _check_windows(weeks)

    result: List[WeeklyRepoCommits] = []
    for week in weeks:
        repos = []
        for repo in repo_commits:
            in_week = tuple(c for c in repo.commits if week.contains(c.date))
            if in_week:
                repos.append(RepoCommits(repo_name=repo.repo_name, commits=in_week))
        result.append(WeeklyRepoCommits(week=week, repos=tuple(repos)))
    return result
