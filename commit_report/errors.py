"""
Exception hierarchy for the commit report tool.

Every error raised on purpose by this package derives from CommitReportError
so the command-line entry point can report it and exit with a non-zero status.
"""

from typing import Optional


class CommitReportError(Exception):
    """Base class for all commit report errors."""


class ConfigError(CommitReportError):
    """Required configuration is missing or cannot be parsed."""


class InvalidRangeError(CommitReportError):
    """The report end date precedes its start date."""


class FetchError(CommitReportError):
    """Commits could not be fetched from GitHub."""


class RepositoryNotFoundError(FetchError):
    """The repository does not exist or the token cannot see it."""


class AuthenticationError(FetchError):
    """The GitHub token is invalid or expired."""


class GenerationError(CommitReportError):
    """The text-generation service did not produce a report."""


class ServiceError(GenerationError):
    """The text-generation service answered with a non-success status."""

    def __init__(self, status_code: int, body: str, message: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message or f"Text-generation API error ({status_code}): {body}")


class MalformedResponseError(GenerationError):
    """The text-generation response has no generated text."""
