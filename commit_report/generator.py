"""
Report Prompt Generation Module

This module contains the ReportPromptBuilder class responsible for turning
week-grouped commits into the instruction text sent to the text-generation
service. It does not call the service itself.
"""

from typing import List, Optional, Sequence

from .models import RepoCommits, WeeklyRepoCommits

NO_COMMITS_MARKER = "No commits this week"

DEFAULT_TEMPLATE = """# Monthly Report

## Overview
A short paragraph summarising the month's work and its main outcomes.

## Weekly Work Summary
#### Week 1
- Project: xxx
  1. ...

## Problems Encountered and Solutions
- Problem: ...
  Solution: ...

## Plan for Next Month
- ...
"""


class ReportPromptBuilder:
    """
    Compose the text-generation prompt from weekly commit data.

    Args:
        default_template: Template used when ``build`` is not given one
    """

    def __init__(self, default_template: str = DEFAULT_TEMPLATE) -> None:
        self.default_template = default_template

    def build(
        self,
        weekly: Sequence[WeeklyRepoCommits],
        author: str,
        start_date: str,
        end_date: str,
        department: str,
        template: Optional[str] = None,
    ) -> str:
        """
        Build the full instruction string.

        Args:
            weekly: Commits grouped by week, in week order
            author: Author the report is written for
            start_date: First day of the report range as shown to the reader
            end_date: Last day of the report range as shown to the reader
            department: Department label printed in the report header
            template: Report skeleton the service must follow

        Returns:
            Prompt text ready to send to the text-generation service
        """
        weekly_text = self.format_weekly_commits(weekly)
        lines: List[str] = []

        lines.append("You are a professional assistant for technical monthly reports. "
                     "Write a professional monthly report from the information below.\n")

        lines.append("## Basic information")
        lines.append(f"- Author: {author}")
        lines.append(f"- Department: {department}")
        lines.append(f"- Period: {start_date} to {end_date}\n")

        lines.append("## Commits grouped by week")
        lines.append("The commits below are already grouped by week and by project; "
                     "you only need to summarise and polish each commit:\n")
        lines.append(weekly_text + "\n")

        lines.append("## Template")
        lines.append((template if template is not None else self.default_template) + "\n")

        lines.append("## Requirements")
        lines.append("1. Follow the template format strictly.")
        lines.append("2. The commits are already grouped by week. You only need to:")
        lines.append("   - keep the existing week and project grouping")
        lines.append("   - summarise each commit in concise professional language, "
                     "highlighting the technical points and business value")
        lines.append("   - never move a commit to another week")
        lines.append("3. Weekly summaries use this format:")
        lines.append("   #### Week 1")
        lines.append("   - Project: xxx")
        lines.append("     1. commit content (polished)")
        lines.append("     2. commit content")
        lines.append("   - Project: yyy")
        lines.append("     1. commit content")
        lines.append(f'4. If a week shows "{NO_COMMITS_MARKER}", keep it as is.')
        lines.append('5. For "Problems Encountered and Solutions", extract and summarise '
                     "the fix/bug related commits.")
        lines.append('6. For "Plan for Next Month", infer a reasonable plan from the current work.')
        lines.append("7. Output only the report, without any explanation or preface.")
        lines.append("8. Keep a professional and concise technical writing style.\n")

        lines.append("Write the report:")
        return "\n".join(lines)

    def format_weekly_commits(self, weekly: Sequence[WeeklyRepoCommits]) -> str:
        """
        Render the week sections of the prompt.

        Each week gets a heading with its number and clipped date range,
        followed by either the no-commit marker or a numbered list of commit
        summaries per project.
        """
        sections = []
        for week_data in weekly:
            heading = f"### Week {week_data.week.week_number} ({week_data.week.date_range})"
            if not week_data.repos:
                sections.append(f"{heading}\n{NO_COMMITS_MARKER}")
                continue
            repos_text = "\n\n".join(self._format_repo(repo) for repo in week_data.repos)
            sections.append(f"{heading}\n{repos_text}")
        return "\n\n".join(sections)

    def _format_repo(self, repo: RepoCommits) -> str:
        lines = [f"- Project: {repo.repo_name}"]
        for index, commit in enumerate(repo.commits, start=1):
            lines.append(f"  {index}. {commit.summary}")
        return "\n".join(lines)
