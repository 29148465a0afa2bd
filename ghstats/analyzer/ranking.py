"""Scoring and ranking of review activity."""

from typing import Dict, List, NamedTuple

from ..models import ReviewCounters

BASE_SCORE = 1.0

# Weight per counted action.
WEIGHTS = {
    'approvals': 2.0,
    'review_inline_comments': 1.0,
    'issue_or_pr_comments': 1.0,
    'issue_comments': 1.0,
    'issues_created': 2.0,
    'labels_added': 0.5,
}


class RankedEntry(NamedTuple):
    user: str
    counters: ReviewCounters
    score: float


def score(counters: ReviewCounters) -> float:
    return BASE_SCORE + sum(getattr(counters, name) * weight for name, weight in WEIGHTS.items())


def rank(counters: Dict[str, ReviewCounters]) -> List[RankedEntry]:
    """Rank users by descending score.

    Equal scores are ordered by login, case-insensitive first and then exact.

    Args:
        counters: Mapping of user login to ReviewCounters

    Returns:
        List of RankedEntry, best first
    """
    entries = [RankedEntry(user, c, score(c)) for user, c in counters.items()]
    return sorted(entries, key=lambda e: (-e.score, e.user.lower(), e.user))
