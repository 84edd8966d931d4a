"""
Configuration loading.

Values come from command-line flags first and environment variables second.
A ``.env`` file is merged into the environment with python-dotenv before it
is read, without overriding variables that are already set.
"""

import datetime
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence, Tuple

from dotenv import load_dotenv

from .errors import ConfigError, InvalidRangeError
from .summarizer import DEFAULT_BASE_URL, DEFAULT_MODEL

logger = logging.getLogger("commit-report.config")

DEFAULT_DEPARTMENT = "Front-end - R&D"
DEFAULT_OUTPUT_DIR = ".output"


@dataclass(frozen=True)
class RepoSpec:
    """A repository and the branches to read commits from.

    A branch of ``None`` stands for the repository's default branch.
    """
    owner: str
    name: str
    branches: Tuple[Optional[str], ...] = (None,)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ReportConfig:
    """Everything a report run needs."""
    author: str
    repos: Tuple[RepoSpec, ...]
    start_date: datetime.date
    end_date: datetime.date
    department: str = DEFAULT_DEPARTMENT
    template: Optional[str] = None
    github_token: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    deepseek_base_url: str = DEFAULT_BASE_URL
    deepseek_model: str = DEFAULT_MODEL
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    per_page: int = 100

    @property
    def generation_enabled(self) -> bool:
        return bool(self.deepseek_api_key)


def parse_date(text: str) -> datetime.date:
    """Parse ``YYYY-MM-DD``; a full ISO timestamp is truncated to its date."""
    text = text.strip()
    day = text
    if len(text) > 10 and text[10] in ("T", " "):
        day = text[:10]
    try:
        return datetime.date.fromisoformat(day)
    except ValueError as e:
        raise ConfigError(f"Invalid date {text!r}, expected YYYY-MM-DD") from e


def parse_repo_spec(text: str) -> RepoSpec:
    """
    Parse ``owner/repo`` or ``owner/repo:branch1|branch2``.

    Without a ``:`` the default branch is used. An empty branch list after the
    ``:`` means no branches, which yields no commits for that repository.
    """
    path, sep, branch_text = text.strip().partition(":")
    owner, slash, name = path.partition("/")
    if not slash or not owner or not name or "/" in name:
        raise ConfigError(f"Invalid repository {text!r}, expected owner/repo[:branch|branch]")
    if not sep:
        return RepoSpec(owner=owner, name=name)
    branches = tuple(b.strip() for b in branch_text.split("|") if b.strip())
    return RepoSpec(owner=owner, name=name, branches=branches)


def parse_repos(text: str) -> Tuple[RepoSpec, ...]:
    repos = tuple(parse_repo_spec(item) for item in text.split(",") if item.strip())
    if not repos:
        raise ConfigError("No repositories configured")
    return repos


def _read_template(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read template file {path}: {e}") from e


def load_config(
    overrides: Optional[Mapping[str, Optional[str]]] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[str] = ".env",
) -> ReportConfig:
    """
    Build the report configuration.

    Args:
        overrides: Values given on the command line, keyed like the
            environment variables; ``None`` entries are ignored
        environ: Environment to read; defaults to ``os.environ``
        env_file: ``.env`` file merged into ``os.environ`` when ``environ``
            is not given; ``None`` skips it

    Raises:
        ConfigError: If a required value is missing or unparsable
        InvalidRangeError: If the end date precedes the start date
    """
    if environ is None:
        if env_file and load_dotenv(env_file):
            logger.debug("Loaded environment from %s", env_file)
        environ = os.environ

    values = {k: v for k, v in environ.items()}
    values.update({k: v for k, v in (overrides or {}).items() if v is not None})

    def get(key: str) -> Optional[str]:
        value = values.get(key)
        return value.strip() if value and value.strip() else None

    start_text, end_text = get("REPORT_START"), get("REPORT_END")
    if not (start_text and end_text) and get("REPORT_TIME"):
        times: Sequence[str] = get("REPORT_TIME").split(",")
        if len(times) != 2:
            raise ConfigError("REPORT_TIME must be 'start,end'")
        start_text = start_text or times[0]
        end_text = end_text or times[1]

    missing = [key for key in ("GITHUB_AUTHOR", "GITHUB_REPOS") if not get(key)]
    if not (start_text and end_text):
        missing.append("REPORT_TIME")
    if missing:
        raise ConfigError("Missing required settings: " + ", ".join(missing))

    start_date, end_date = parse_date(start_text), parse_date(end_text)
    if start_date > end_date:
        raise InvalidRangeError(f"Start date {start_date} is after end date {end_date}")

    template_path = get("REPORT_TEMPLATE")
    per_page = get("GITHUB_PER_PAGE") or "100"
    try:
        per_page_value = int(per_page)
    except ValueError as e:
        raise ConfigError(f"Invalid page size {per_page!r}") from e
    if not 1 <= per_page_value <= 100:
        raise ConfigError(f"Page size must be between 1 and 100, got {per_page_value}")

    return ReportConfig(
        author=get("GITHUB_AUTHOR"),
        repos=parse_repos(get("GITHUB_REPOS")),
        start_date=start_date,
        end_date=end_date,
        department=get("DEPARTMENT") or DEFAULT_DEPARTMENT,
        template=_read_template(template_path) if template_path else None,
        github_token=get("GITHUB_TOKEN"),
        deepseek_api_key=get("DEEPSEEK_API_KEY"),
        deepseek_base_url=get("DEEPSEEK_BASE_URL") or DEFAULT_BASE_URL,
        deepseek_model=get("DEEPSEEK_MODEL") or DEFAULT_MODEL,
        output_dir=Path(get("REPORT_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
        per_page=per_page_value,
    )
