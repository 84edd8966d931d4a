"""
Commit Report - generate weekly-grouped progress reports from GitHub commit history.
"""

from .models import CommitInfo, RepoCommits, RepoMeta, WeekWindow, WeeklyRepoCommits
from .config import ReportConfig, RepoSpec, load_config
from .errors import (
    AuthenticationError,
    CommitReportError,
    ConfigError,
    FetchError,
    GenerationError,
    InvalidRangeError,
    MalformedResponseError,
    RepositoryNotFoundError,
    ServiceError,
)
from .fetcher import GitHubFetcher
from .parser import CommitParser, dedupe_commits, filter_commits
from .weeks import bucketize, partition_weeks
from .generator import ReportPromptBuilder
from .summarizer import ReportSummarizer
from .main import main, run

__all__ = [
    'CommitInfo',
    'RepoCommits',
    'RepoMeta',
    'WeekWindow',
    'WeeklyRepoCommits',
    'ReportConfig',
    'RepoSpec',
    'load_config',
    'AuthenticationError',
    'CommitReportError',
    'ConfigError',
    'FetchError',
    'GenerationError',
    'InvalidRangeError',
    'MalformedResponseError',
    'RepositoryNotFoundError',
    'ServiceError',
    'GitHubFetcher',
    'CommitParser',
    'dedupe_commits',
    'filter_commits',
    'bucketize',
    'partition_weeks',
    'ReportPromptBuilder',
    'ReportSummarizer',
    'main',
    'run',
]
