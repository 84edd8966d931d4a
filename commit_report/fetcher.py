"""
GitHub data fetching module.

This module handles all GitHub API interactions for fetching repository data
and commit history using PyGithub. It returns commits exactly as GitHub lists
them; merge filtering and ordering happen in the parser module.
"""

import datetime
import logging
from typing import Any, Dict, List, Optional, Tuple

import requests
from github import BadCredentialsException, Github, GithubException, UnknownObjectException

from .errors import AuthenticationError, FetchError, RepositoryNotFoundError
from .models import CommitInfo, RepoMeta

# Set up logging
logger = logging.getLogger("commit-report.fetcher")

NOT_FOUND_HINT = (
    "If this is a private repository, make sure that:\n"
    "1. GITHUB_TOKEN is set\n"
    "2. the token has the 'repo' scope\n"
    "3. you have access to the repository\n\n"
    "Create or update a token at https://github.com/settings/tokens"
)


class GitHubFetcher:
    """
    Fetch commits and repository metadata from GitHub using PyGithub.

    Args:
        token: Personal access token (or None for unauthenticated, but rate-limited).
        per_page: Number of commits requested per page (GitHub allows up to 100).
    """

    def __init__(self, token: Optional[str] = None, per_page: int = 100) -> None:
        self.per_page = min(per_page, 100)
        self.authenticated = bool(token)
        if not token:
            logger.warning("No GITHUB_TOKEN provided, only public repositories can be read")
        try:
            if token:
                self._g = Github(login_or_token=token, per_page=self.per_page)
            else:
                self._g = Github(per_page=self.per_page)
            logger.debug("GitHub client initialized (authenticated=%s)", self.authenticated)
        except Exception as e:
            logger.error("Failed to initialize GitHub client: %s", e)
            raise FetchError(f"GitHub client initialization failed: {e}") from e

    def verify_auth(self) -> Tuple[str, str]:
        """
        Check that the token is accepted by GitHub.

        Returns:
            (login, account type) of the authenticated user

        Raises:
            AuthenticationError: If the token is invalid or expired
            FetchError: If the check fails for any other reason
        """
        try:
            user = self._g.get_user()
            login, account_type = user.login, user.type
        except BadCredentialsException as e:
            raise AuthenticationError("Authentication failed: token is invalid or expired") from e
        except (GithubException, requests.RequestException) as e:
            raise FetchError(f"Authentication check failed: {e}") from e

        logger.info("Authenticated as %s (%s)", login, account_type)
        return login, account_type

    def fetch_repo_meta(self, owner: str, repo_name: str) -> RepoMeta:
        """
        Fetch repository metadata from GitHub.

        Raises:
            RepositoryNotFoundError: If the repository cannot be found
            FetchError: If the request fails
        """
        repo = self._get_repo(owner, repo_name)
        meta = RepoMeta(
            full_name=repo.full_name,
            description=repo.description,
            url=repo.html_url,
            default_branch=repo.default_branch,
        )
        logger.info("Fetched metadata for %s", meta.full_name)
        return meta

    def fetch_commits(
        self,
        owner: str,
        repo_name: str,
        branch: Optional[str] = None,
        author: Optional[str] = None,
        since: Optional[datetime.datetime] = None,
        until: Optional[datetime.datetime] = None,
    ) -> List[CommitInfo]:
        """
        Fetch the commit history of one branch.

        Pages are requested one by one until a page comes back shorter than
        ``per_page``.

        Args:
            owner: Repository owner username
            repo_name: Repository name
            branch: Branch name, or None for the default branch
            author: GitHub login or email to filter by
            since: Only commits after this moment
            until: Only commits before this moment

        Returns:
            List of CommitInfo objects in the order GitHub returns them

        Raises:
            RepositoryNotFoundError: If the repository cannot be found
            AuthenticationError: If the token is rejected
            FetchError: If any other request fails
        """
        repo = self._get_repo(owner, repo_name)

        # PyGithub rejects None for optional filters, unset ones must be omitted
        params: Dict[str, Any] = {}
        if branch:
            params["sha"] = branch
        if author:
            params["author"] = author
        if since is not None:
            params["since"] = since
        if until is not None:
            params["until"] = until

        logger.info("Fetching commits from %s/%s (branch=%s)", owner, repo_name, branch or "default")

        result: List[CommitInfo] = []
        page = 0
        try:
            paginated = repo.get_commits(**params)
            while True:
                items = paginated.get_page(page)
                for c in items:
                    commit = self._to_commit_info(c)
                    if commit is not None:
                        result.append(commit)
                if not items or len(items) < self.per_page:
                    break
                page += 1
        except UnknownObjectException as e:
            raise RepositoryNotFoundError(
                f"Repository {owner}/{repo_name} does not exist or is not accessible.\n{NOT_FOUND_HINT}"
            ) from e
        except BadCredentialsException as e:
            raise AuthenticationError("Authentication failed: token is invalid or expired") from e
        except (GithubException, requests.RequestException) as e:
            error_msg = f"Failed to fetch commits for {owner}/{repo_name}: {e}"
            logger.error(error_msg)
            raise FetchError(error_msg) from e

        logger.info("Fetched %d commits from %s/%s in %d page(s)", len(result), owner, repo_name, page + 1)
        return result

    def _get_repo(self, owner: str, repo_name: str):
        try:
            return self._g.get_repo(f"{owner}/{repo_name}")
        except UnknownObjectException as e:
            raise RepositoryNotFoundError(
                f"Repository {owner}/{repo_name} does not exist or is not accessible.\n{NOT_FOUND_HINT}"
            ) from e
        except BadCredentialsException as e:
            raise AuthenticationError("Authentication failed: token is invalid or expired") from e
        except (GithubException, requests.RequestException) as e:
            error_msg = f"Failed to access repository {owner}/{repo_name}: {e}"
            logger.error(error_msg)
            raise FetchError(error_msg) from e

    @staticmethod
    def _to_commit_info(c) -> Optional[CommitInfo]:
        git_commit = c.commit
        author = git_commit.author
        committer = git_commit.committer
        # Fall back to the committer date for commits without author metadata
        if author and author.date:
            when = author.date
        elif committer and committer.date:
            when = committer.date
        else:
            logger.debug("Skipping commit %s without author or committer date", c.sha)
            return None
        return CommitInfo(
            sha=c.sha,
            message=git_commit.message,
            author_name=(author.name if author else None) or "",
            author_email=(author.email if author else None) or "",
            date=when.date(),
        )
