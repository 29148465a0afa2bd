"""Review activity aggregation engine."""

import logging
from collections import defaultdict
from datetime import timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from ..models import IssueRef, ReviewCounters
from ..timewindow import TimeWindow, split_window
from .policy import FilterPolicy


class ReviewAggregator:
    """Aggregates per-user review activity for a set of issues and pull requests.

    The aggregator owns no state between calls. Each call to aggregate() runs the
    collector passes in a fixed order over the same items and accumulates into
    the counters map it is given (or a new one).
    """

    def __init__(self, policy: FilterPolicy, source):
        """Initialize the aggregator.

        Args:
            policy: Filtering rules and report window
            source: Activity source providing reviews, comments and events
        """
        self.policy = policy
        self.source = source

    def aggregate(self, items: Sequence[IssueRef],
                  counters: Optional[Dict[str, ReviewCounters]] = None) -> Dict[str, ReviewCounters]:
        """Collect review activity for the given issues and pull requests.

        Args:
            items: Issues and pull requests to inspect
            counters: Existing accumulation map to add to (a new one if None)

        Returns:
            Mapping of user login to ReviewCounters
        """
        if counters is None:
            counters = defaultdict(ReviewCounters)

        items = deduplicate(items)
        logging.info(f"Aggregating review activity of {len(items)} issues/PRs in {self.policy.window}")

        collected: Dict[str, ReviewCounters] = defaultdict(ReviewCounters)
        for collect in self.collectors():
            collect(items, collected)

        # Callers may pass a plain dict; merge into it in place
        for user, user_counters in collected.items():
            counters.setdefault(user, ReviewCounters()).merge(user_counters)
        return counters

    def collectors(self):
        """Collector passes in execution order."""
        return [
            self._collect_issue_creates,
            self._collect_pr_approvals,
            self._collect_pr_review_comments,
            self._collect_issue_and_pr_comments,
            self._collect_added_labels,
        ]

    def aggregate_chunked(self, queries: Iterable[str], window: TimeWindow,
                          step: timedelta = timedelta(hours=24)) -> Dict[str, ReviewCounters]:
        """Aggregate a long window as consecutive sub-windows.

        Each sub-window is searched and aggregated on its own so that a single
        search stays below GitHub's result limit; all sub-windows accumulate
        into one counters map.

        Args:
            queries: Issue search queries without a time qualifier
            window: Full report window
            step: Size of each sub-window

        Returns:
            Mapping of user login to ReviewCounters for the whole window
        """
        queries = [q.strip() for q in queries if q.strip()]
        counters: Dict[str, ReviewCounters] = defaultdict(ReviewCounters)

        for chunk in split_window(window, step):
            items: List[IssueRef] = []
            for query in queries:
                items.extend(self.source.search_issues(query, chunk))
            print(f"  {chunk}: {len(items)} issues/PRs")
            chunk_aggregator = ReviewAggregator(self.policy.with_window(chunk), self.source)
            chunk_aggregator.aggregate(items, counters)

        return counters


def deduplicate(items: Iterable[IssueRef]) -> List[IssueRef]:
    """Drop repeated issues returned by overlapping queries, keeping the first."""
    seen = set()
    unique = []
    for item in items:
        if item.key not in seen:
            seen.add(item.key)
            unique.append(item)
    return unique


# Import and attach methods from submodules
from .collectors import (_collect_issue_creates, _collect_pr_approvals, _collect_pr_review_comments,
                         _collect_issue_and_pr_comments, _collect_added_labels, _qualifying_reviews)

# Attach methods to class
ReviewAggregator._collect_issue_creates = _collect_issue_creates
ReviewAggregator._collect_pr_approvals = _collect_pr_approvals
ReviewAggregator._collect_pr_review_comments = _collect_pr_review_comments
ReviewAggregator._collect_issue_and_pr_comments = _collect_issue_and_pr_comments
ReviewAggregator._collect_added_labels = _collect_added_labels
ReviewAggregator._qualifying_reviews = _qualifying_reviews
