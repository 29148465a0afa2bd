"""Review leaderboard rendering for ReportFormatter."""

from typing import List

from ..analyzer.ranking import RankedEntry
from ..models import ReviewCounters
from .formatter_base import MEDAL, NONE, NO_ACTIVITY_MESSAGE
from .markdown import escape

MEDALS = {1: '🏆', 2: '🥈', 3: '🥉'}


def _plural(count: int, singular: str, plural: str = None) -> str:
    return f"{count} {singular if count == 1 else (plural or singular + 's')}"


def summarize(counters: ReviewCounters) -> str:
    """Human readable list of the non-zero counters, or '' if there are none."""
    pr_comments = counters.review_inline_comments + counters.issue_or_pr_comments
    parts = [
        (counters.approvals, 'LGTM', 'LGTMs'),
        (pr_comments, 'PR comment', 'PR comments'),
        (counters.issue_comments, 'issue comment', 'issue comments'),
        (counters.issues_created, 'issue created', 'issues created'),
        (counters.labels_added, 'label added', 'labels added'),
    ]
    return ', '.join(_plural(count, singular, plural) for count, singular, plural in parts if count)


def _rank_decoration(self, rank: int) -> str:
    if self.decoration == NONE:
        return ''
    if self.decoration == MEDAL and rank in MEDALS:
        return MEDALS[rank]
    return escape(f"#{rank}")


def render_leaderboard(self, ranked: List[RankedEntry]) -> str:
    """Render the top entries of a ranking, one line per user.

    Users without activity are skipped before ranks are assigned.
    """
    lines = []
    for entry in ranked:
        if len(lines) >= self.top_n:
            break
        summary = summarize(entry.counters)
        if not summary:
            continue
        decoration = self._rank_decoration(len(lines) + 1)
        line = f"{escape(entry.user)}: {escape(summary)}"
        lines.append(f"{decoration} {line}" if decoration else line)

    if not lines:
        return NO_ACTIVITY_MESSAGE
    return '\n'.join(lines)
