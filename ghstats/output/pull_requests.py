"""Pull request listings for ReportFormatter."""

import logging
from typing import Dict, List

from .markdown import SEPARATOR, escape, link

# Titles marking work that is not ready for review
SKIPPED_TITLE_MARKERS = ('wip', 'dnm')


def _pr_line(self, number: int, url: str, title: str) -> str:
    return f"{link(f'#{number}', url)} {escape(title)}"


def _render_sections(self, lines_by_repo: Dict[str, List[str]]) -> str:
    sections = []
    for repo, lines in lines_by_repo.items():
        if lines:
            sections.append(f"## {escape(repo)}\n" + '\n'.join(lines))
    return f"\n{SEPARATOR}\n".join(sections)


def render_ptal(self, issues_by_repo: Dict[str, list]) -> str:
    """List pull requests waiting for review, at most max_prs per repository.

    Args:
        issues_by_repo: Search results (IssueRef) grouped by configured repository name

    Returns:
        Escaped markdown, or an empty string if nothing needs review
    """
    lines_by_repo = {}
    for repo, issues in issues_by_repo.items():
        lines = []
        for issue in issues:
            if len(lines) >= self.max_prs:
                break
            title = issue.title.lower()
            if any(marker in title for marker in SKIPPED_TITLE_MARKERS):
                logging.debug(f"Skipping unfinished PR #{issue.number}: {issue.title}")
                continue
            lines.append(self._pr_line(issue.number, issue.html_url, issue.title))
        lines_by_repo[repo] = lines
    return self._render_sections(lines_by_repo)


def render_packages(self, prs_by_repo: Dict[str, list]) -> str:
    """List pull requests touching the configured packages.

    Args:
        prs_by_repo: Already filtered PullRequestSummary lists grouped by repository name

    Returns:
        Escaped markdown, or an empty string if there are none
    """
    lines_by_repo = {
        repo: [self._pr_line(pr.number, pr.html_url, pr.title) for pr in prs]
        for repo, prs in prs_by_repo.items()
    }
    return self._render_sections(lines_by_repo)
