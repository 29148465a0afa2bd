"""Shared fixtures and builders for the ghstats tests."""

from datetime import datetime

import pytest

from ghstats.models import Comment, Event, Issue, PullRequest, Review
from ghstats.timewindow import REPORT_TZ, TimeWindow


def at(day: int, hour: int = 12, minute: int = 0) -> datetime:
    """A time in May 2021 in the reporting timezone."""
    return datetime(2021, 5, day, hour, minute, tzinfo=REPORT_TZ)


def make_pr(number: int, author: str = 'alice', created_at: datetime = None) -> PullRequest:
    return PullRequest(owner='tikv', repo='tikv', number=number, title=f'PR {number}',
                       html_url=f'https://github.com/tikv/tikv/pull/{number}',
                       author=author, created_at=created_at or at(1))


def make_issue(number: int, author: str = 'alice', created_at: datetime = None) -> Issue:
    return Issue(owner='tikv', repo='tikv', number=number, title=f'Issue {number}',
                 html_url=f'https://github.com/tikv/tikv/issues/{number}',
                 author=author, created_at=created_at or at(1))


def make_review(review_id: int, author: str, submitted_at: datetime,
                state: str = 'COMMENTED', body: str = '') -> Review:
    return Review(id=review_id, author=author, state=state, body=body, submitted_at=submitted_at)


def make_comment(comment_id: int, author: str, created_at: datetime, body: str = 'nice',
                 updated_at: datetime = None) -> Comment:
    return Comment(id=comment_id, author=author, body=body, created_at=created_at, updated_at=updated_at)


def make_label(actor: str, created_at: datetime, label: str = 'type/bug') -> Event:
    return Event(event='labeled', actor=actor, created_at=created_at, label=label)


class FakeSource:
    """In-memory activity source keyed by issue number."""

    def __init__(self, reviews=None, review_comments=None, comments=None, events=None, search_results=None):
        self.reviews = reviews or {}
        self.review_comments = review_comments or {}
        self.comments = comments or {}
        self.events = events or {}
        self.search_results = search_results or []
        self.searches = []

    def search_issues(self, query, window=None):
        self.searches.append((query, window))
        return list(self.search_results)

    def list_pr_reviews(self, owner, repo, number):
        return list(self.reviews.get(number, []))

    def list_pr_review_comments(self, owner, repo, number, review_id):
        return list(self.review_comments.get((number, review_id), []))

    def list_issue_comments(self, owner, repo, number, since=None):
        # GitHub filters by update time on the server
        return [c for c in self.comments.get(number, []) if since is None or c.active_at >= since]

    def list_issue_events(self, owner, repo, number):
        return list(self.events.get(number, []))


@pytest.fixture
def may_window():
    """May 10 00:00 to May 11 00:00 in the reporting timezone."""
    return TimeWindow(at(10, 0), at(11, 0))
