from __future__ import annotations

import datetime as dt
from types import SimpleNamespace

import pytest
from github import BadCredentialsException, UnknownObjectException

import commit_report.fetcher as fetcher_mod
from commit_report.errors import AuthenticationError, RepositoryNotFoundError
from commit_report.fetcher import GitHubFetcher


def _api_commit(sha: str, message: str, when: dt.datetime):
    person = SimpleNamespace(name="Alice", email="alice@example.com", date=when)
    return SimpleNamespace(sha=sha, commit=SimpleNamespace(message=message, author=person, committer=person))


class FakePaginated:
    def __init__(self, pages):
        self.pages = pages
        self.requested = []

    def get_page(self, page):
        self.requested.append(page)
        return self.pages[page] if page < len(self.pages) else []


class FakeRepo:
    def __init__(self, pages):
        self.paginated = FakePaginated(pages)
        self.params = None

    def get_commits(self, **params):
        self.params = params
        return self.paginated


class FakeGithub:
    repos: dict = {}
    user = SimpleNamespace(login="alice", type="User")

    def __init__(self, login_or_token=None, per_page=30):
        self.token = login_or_token
        self.per_page = per_page

    def get_repo(self, full_name):
        if full_name not in self.repos:
            raise UnknownObjectException(404, {"message": "Not Found"}, {})
        return self.repos[full_name]

    def get_user(self):
        if self.token == "expired":
            raise BadCredentialsException(401, {"message": "Bad credentials"}, {})
        return self.user


@pytest.fixture
def fake_github(monkeypatch):
    monkeypatch.setattr(fetcher_mod, "Github", FakeGithub)
    FakeGithub.repos = {}
    return FakeGithub


def test_fetch_commits_pages_until_short_page(fake_github) -> None:
    when = dt.datetime(2024, 1, 2, 23, 30, tzinfo=dt.timezone.utc)
    repo = FakeRepo([
        [_api_commit("a", "feat: a", when), _api_commit("b", "Merge branch 'dev'", when)],
        [_api_commit("c", "fix: c\n\nbody", when)],
    ])
    fake_github.repos["octo/app"] = repo

    fetcher = GitHubFetcher(token="tok", per_page=2)
    since = dt.datetime(2024, 1, 1, tzinfo=dt.timezone.utc)
    commits = fetcher.fetch_commits("octo", "app", branch="dev", author="alice", since=since)

    # nothing is filtered at fetch time
    assert [c.sha for c in commits] == ["a", "b", "c"]
    assert commits[2].message == "fix: c\n\nbody"
    assert commits[0].date == dt.date(2024, 1, 2)
    assert commits[0].author_email == "alice@example.com"
    assert repo.paginated.requested == [0, 1]
    assert repo.params == {"sha": "dev", "author": "alice", "since": since}


def test_fetch_commits_stops_on_empty_page(fake_github) -> None:
    when = dt.datetime(2024, 1, 2, tzinfo=dt.timezone.utc)
    repo = FakeRepo([[_api_commit("a", "a", when), _api_commit("b", "b", when)]])
    fake_github.repos["octo/app"] = repo

    commits = GitHubFetcher(per_page=2).fetch_commits("octo", "app")

    assert len(commits) == 2
    assert repo.paginated.requested == [0, 1]
    assert repo.params == {}


def test_fetch_commits_missing_repo(fake_github) -> None:
    with pytest.raises(RepositoryNotFoundError):
        GitHubFetcher(token="tok").fetch_commits("octo", "missing")


def test_verify_auth(fake_github) -> None:
    assert GitHubFetcher(token="tok").verify_auth() == ("alice", "User")
    with pytest.raises(AuthenticationError):
        GitHubFetcher(token="expired").verify_auth()


def test_fetch_repo_meta(fake_github) -> None:
    repo = FakeRepo([])
    repo.full_name = "octo/app"
    repo.description = "Demo app"
    repo.html_url = "https://github.com/octo/app"
    repo.default_branch = "main"
    fake_github.repos["octo/app"] = repo

    meta = GitHubFetcher(token="tok").fetch_repo_meta("octo", "app")

    assert meta.full_name == "octo/app"
    assert meta.default_branch == "main"
    with pytest.raises(RepositoryNotFoundError):
        GitHubFetcher(token="tok").fetch_repo_meta("octo", "missing")


class EndlessEmptyPages:
    def __init__(self):
        self.requested = []

    def get_page(self, page):
        self.requested.append(page)
        if len(self.requested) > 5:
            raise AssertionError("kept paging after an empty page")
        return []


def test_fetch_commits_stops_on_empty_page_with_zero_page_size(fake_github) -> None:
    repo = FakeRepo([])
    repo.paginated = EndlessEmptyPages()
    fake_github.repos["octo/app"] = repo

    assert GitHubFetcher(per_page=0).fetch_commits("octo", "app") == []
    assert repo.paginated.requested == [0]


def test_fetch_commits_skips_commits_without_dates(fake_github) -> None:
    when = dt.datetime(2024, 1, 2, tzinfo=dt.timezone.utc)
    dateless = SimpleNamespace(sha="x", commit=SimpleNamespace(message="fix: x", author=None, committer=None))
    committer_only = SimpleNamespace(
        sha="y",
        commit=SimpleNamespace(message="fix: y", author=None, committer=SimpleNamespace(date=when)),
    )
    fake_github.repos["octo/app"] = FakeRepo([[dateless, committer_only, _api_commit("z", "z", when)]])

    commits = GitHubFetcher(per_page=100).fetch_commits("octo", "app")

    assert [c.sha for c in commits] == ["y", "z"]
    assert commits[0].date == dt.date(2024, 1, 2)
    assert commits[0].author_name == ""
