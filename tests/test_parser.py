from __future__ import annotations

import datetime as dt

from commit_report.parser import CommitParser, dedupe_commits, filter_commits


def test_filter_drops_merge_commits_case_insensitively(commit) -> None:
    commits = [
        commit("a", "Merge pull request #12 from alice/feature", "2024-03-01"),
        commit("b", "MERGE BRANCH 'dev' into main", "2024-03-01"),
        commit("c", "Merge remote-tracking branch 'origin/main'", "2024-03-02"),
        commit("d", "feat: add login", "2024-03-02"),
        commit("e", "docs: explain merge branch workflow", "2024-03-03"),
    ]
    assert [c.sha for c in filter_commits(commits)] == ["d", "e"]


def test_filter_sorts_by_date_and_is_stable(commit) -> None:
    commits = [
        commit("late", "fix: late", "2024-03-05"),
        commit("first", "fix: first same day", "2024-03-02"),
        commit("second", "fix: second same day", "2024-03-02"),
        commit("early", "fix: early", "2024-03-01"),
    ]
    result = filter_commits(commits)
    assert [c.sha for c in result] == ["early", "first", "second", "late"]
    assert [c.date for c in result] == sorted(c.date for c in result)


def test_filter_does_not_modify_input(commit) -> None:
    commits = [commit("b", "b", "2024-03-02"), commit("a", "a", "2024-03-01")]
    filter_commits(commits)
    assert [c.sha for c in commits] == ["b", "a"]


def test_dedupe_keeps_first_branch_occurrence(commit) -> None:
    b1 = [commit("x", "one", "2024-03-01"), commit("abc", "shared", "2024-03-04")]
    b2 = [commit("abc", "shared", "2024-03-04"), commit("y", "two", "2024-03-02")]
    result = dedupe_commits([b1, b2])
    assert [c.sha for c in result] == ["x", "abc", "y"]


def test_dedupe_does_not_resort_across_branches(commit) -> None:
    b1 = [commit("late", "late", "2024-03-09")]
    b2 = [commit("early", "early", "2024-03-01")]
    result = dedupe_commits([b1, b2])
    assert [c.date for c in result] == [dt.date(2024, 3, 9), dt.date(2024, 3, 1)]


def test_dedupe_without_branches_is_empty() -> None:
    assert dedupe_commits([]) == []


def test_commit_parser_is_merge(commit) -> None:
    assert commit("a", "feat: add login\n\nlong body", "2024-03-01").summary == "feat: add login"
    assert CommitParser.is_merge("Merge pull request #1")
    assert not CommitParser.is_merge("fix: merge pull request handling")
