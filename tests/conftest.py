from __future__ import annotations

import datetime as dt

import pytest

from commit_report.models import CommitInfo


def make_commit(sha: str, message: str, day: str) -> CommitInfo:
    return CommitInfo(
        sha=sha,
        message=message,
        author_name="Alice",
        author_email="alice@example.com",
        date=dt.date.fromisoformat(day),
    )


@pytest.fixture
def commit():
    return make_commit
