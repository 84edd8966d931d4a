#!/usr/bin/env python3
"""
Main driver script for the commit report generator.

This script provides the command-line interface and coordinates all modules
to build a weekly-grouped progress report from GitHub commit history.

Usage (example):
    python -m commit_report --author alice --repos octo/app:main|dev --since 2024-03-01 --until 2024-03-31
"""

import argparse
import datetime
import logging
import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .config import ReportConfig, RepoSpec, load_config
from .errors import CommitReportError
from .fetcher import GitHubFetcher
from .generator import ReportPromptBuilder
from .models import RepoCommits
from .output import print_commits, write_report
from .parser import dedupe_commits, filter_commits
from .summarizer import ReportSummarizer
from .weeks import bucketize, partition_weeks

logger = logging.getLogger("commit-report")


def collect_repo_commits(
    fetcher: GitHubFetcher,
    repos: Sequence[RepoSpec],
    author: Optional[str],
    since: datetime.date,
    until: datetime.date,
    out: Callable[[str], None] = print,
) -> List[RepoCommits]:
    """
    Fetch, filter and de-duplicate commits for every configured repository.

    Repositories and their branches are processed in configured order, so the
    branch order decides which copy of a shared commit is kept.
    """
    since_dt = datetime.datetime.combine(since, datetime.time.min, tzinfo=datetime.timezone.utc)
    until_dt = datetime.datetime.combine(until, datetime.time.max, tzinfo=datetime.timezone.utc)

    result: List[RepoCommits] = []
    for repo in repos:
        out(f"  - Fetching commits of {repo.full_name}...")
        per_branch = []
        for branch in repo.branches:
            commits = fetcher.fetch_commits(
                repo.owner,
                repo.name,
                branch=branch,
                author=author,
                since=since_dt,
                until=until_dt,
            )
            per_branch.append(filter_commits(commits))
        merged = dedupe_commits(per_branch)
        result.append(RepoCommits(repo_name=repo.name, commits=tuple(merged)))
        out(f"    found {len(merged)} commits")
    return result


def run(
    config: ReportConfig,
    fetcher: Optional[GitHubFetcher] = None,
    summarizer: Optional[ReportSummarizer] = None,
    out: Callable[[str], None] = print,
) -> Optional[Path]:
    """
    Run one report.

    Commits are always fetched and printed. The report is only generated and
    written when a text-generation key is configured.

    Returns:
        Path of the written report, or None when generation is disabled
    """
    if fetcher is None:
        fetcher = GitHubFetcher(token=config.github_token, per_page=config.per_page)
    if config.github_token:
        fetcher.verify_auth()

    out("\nFetching commits...\n")
    repo_commits = collect_repo_commits(
        fetcher, config.repos, config.author, config.start_date, config.end_date, out=out
    )
    total = sum(len(r.commits) for r in repo_commits)
    out(f"\nFound {total} commits in total\n")
    print_commits(repo_commits, out=out)

    if not config.generation_enabled:
        logger.info("DEEPSEEK_API_KEY not set, skipping report generation")
        out("\nHint: set DEEPSEEK_API_KEY to generate the report automatically")
        return None

    out("\n\nGenerating report...\n")
    weeks = partition_weeks(config.start_date, config.end_date)
    weekly = bucketize(repo_commits, weeks)
    prompt = ReportPromptBuilder().build(
        weekly,
        author=config.author,
        start_date=f"{config.start_date:%Y-%m-%d}",
        end_date=f"{config.end_date:%Y-%m-%d}",
        department=config.department,
        template=config.template,
    )

    if summarizer is None:
        summarizer = ReportSummarizer(
            config.deepseek_api_key,
            base_url=config.deepseek_base_url,
            model=config.deepseek_model,
        )
    report = summarizer.generate(prompt)
    output_path = write_report(report, config.output_dir, config.start_date)

    out("=" * 80)
    out(f"\nReport written to: {output_path}")
    return output_path


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="commit-report",
        description="Generate a weekly-grouped progress report from GitHub commit history.",
    )
    parser.add_argument("--author", "-a", help="Commit author (GitHub login or email) [GITHUB_AUTHOR]")
    parser.add_argument("--repos", "-r", help="Comma separated owner/repo[:branch|branch] list [GITHUB_REPOS]")
    parser.add_argument("--since", help="First day of the report, YYYY-MM-DD [REPORT_TIME]")
    parser.add_argument("--until", help="Last day of the report, YYYY-MM-DD [REPORT_TIME]")
    parser.add_argument("--department", "-d", help="Department shown in the report [DEPARTMENT]")
    parser.add_argument("--template", help="Path of a report template file [REPORT_TEMPLATE]")
    parser.add_argument("--token", "-t", help="GitHub token [GITHUB_TOKEN]")
    parser.add_argument("--output-dir", "-o", help="Directory for generated reports [REPORT_OUTPUT_DIR]")
    parser.add_argument("--per-page", type=int, help="Commits requested per API page (max 100)")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load (default: .env)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main entry point for the commit report generator.

    Returns:
        Process exit status
    """
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    overrides = {
        "GITHUB_AUTHOR": args.author,
        "GITHUB_REPOS": args.repos,
        "REPORT_START": args.since,
        "REPORT_END": args.until,
        "DEPARTMENT": args.department,
        "REPORT_TEMPLATE": args.template,
        "GITHUB_TOKEN": args.token,
        "REPORT_OUTPUT_DIR": args.output_dir,
        "GITHUB_PER_PAGE": str(args.per_page) if args.per_page is not None else None,
    }

    try:
        config = load_config(overrides, env_file=args.env_file)
        logger.info(
            "Starting report for %s (%s to %s, %d repositories)",
            config.author, config.start_date, config.end_date, len(config.repos),
        )
        run(config)
    except KeyboardInterrupt:
        logger.info("Report generation interrupted by user")
        print("\nOperation cancelled by user")
        return 1
    except CommitReportError as e:
        logger.error("Report generation failed: %s", e)
        print(f"Error: {e}")
        return 1
    except Exception as e:
        logger.exception("Report generation failed unexpectedly: %s", e)
        print(f"Error: report generation failed - {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
