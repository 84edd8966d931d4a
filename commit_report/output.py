"""
Console and file output.

``print_commits`` lists what was fetched so it can be checked before (or
without) report generation; ``write_report`` stores the generated report.
"""

import datetime
import logging
from pathlib import Path
from typing import Callable, Sequence

from .models import RepoCommits

logger = logging.getLogger("commit-report.output")


def print_commits(repo_commits: Sequence[RepoCommits], out: Callable[[str], None] = print) -> None:
    """Print one line per commit, grouped by repository."""
    out("Commits:\n")
    for repo in repo_commits:
        out(f"\n【{repo.repo_name}】 ({len(repo.commits)} commits)")
        for index, commit in enumerate(repo.commits, start=1):
            out(f"  {index}.\t{commit.date:%Y-%m-%d}\t{commit.summary}")


def report_filename(start_date: datetime.date) -> str:
    """Reports are named after the month the range starts in, e.g. ``2024-03.md``."""
    return f"{start_date:%Y-%m}.md"


def write_report(report: str, output_dir: Path, start_date: datetime.date) -> Path:
    """
    Write the report under ``output_dir``, creating the directory if needed.

    An existing report for the same month is overwritten.

    Returns:
        Path of the written file
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / report_filename(start_date)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(report)
    logger.info("Wrote report to %s", output_path)
    return output_path
