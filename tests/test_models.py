"""
Unit tests for the activity data models
"""

import pytest
from datetime import datetime, timezone

from ghstats.errors import MalformedInputError
from ghstats.models import (Comment, Event, Issue, PullRequest, PullRequestSummary, Review,
                            ReviewCounters, issue_from_api, parse_timestamp)


def search_item(number=1, pull_request=True, **overrides):
    item = {
        'number': number,
        'title': 'Fix raft log gc',
        'html_url': f'https://github.com/tikv/tikv/pull/{number}',
        'repository_url': 'https://api.github.com/repos/tikv/tikv',
        'user': {'login': 'alice'},
        'created_at': '2021-05-24T13:00:00Z',
    }
    if pull_request:
        item['pull_request'] = {'url': f'https://api.github.com/repos/tikv/tikv/pulls/{number}'}
    item.update(overrides)
    return item


class TestReviewCounters:
    """Test cases for ReviewCounters dataclass."""

    def test_initialization(self):
        counters = ReviewCounters()
        assert counters.approvals == 0
        assert counters.review_inline_comments == 0
        assert counters.issue_or_pr_comments == 0
        assert counters.issue_comments == 0
        assert counters.issues_created == 0
        assert counters.labels_added == 0
        assert counters.is_empty()

    def test_not_empty(self):
        assert not ReviewCounters(labels_added=1).is_empty()

    def test_merge(self):
        counters = ReviewCounters(approvals=1, issue_comments=2)
        merged = counters.merge(ReviewCounters(approvals=2, labels_added=1))

        assert merged is counters
        assert counters == ReviewCounters(approvals=3, issue_comments=2, labels_added=1)


class TestParseTimestamp:
    """Test cases for GitHub timestamp parsing."""

    def test_zulu(self):
        assert parse_timestamp('2021-05-24T13:00:00Z') == datetime(2021, 5, 24, 13, tzinfo=timezone.utc)

    def test_offset(self):
        ts = parse_timestamp('2021-05-24T21:00:00+08:00')
        assert ts == datetime(2021, 5, 24, 13, tzinfo=timezone.utc)

    def test_empty(self):
        assert parse_timestamp(None) is None
        assert parse_timestamp('') is None


class TestIssueFromAPI:
    """Test cases for search results."""

    def test_pull_request(self):
        pr = issue_from_api(search_item(42))

        assert isinstance(pr, PullRequest)
        assert pr.is_pull_request
        assert pr.key == ('tikv', 'tikv', 42)
        assert pr.author == 'alice'
        assert pr.created_at == datetime(2021, 5, 24, 13, tzinfo=timezone.utc)

    def test_issue(self):
        issue = issue_from_api(search_item(7, pull_request=False))

        assert isinstance(issue, Issue)
        assert not issue.is_pull_request

    def test_missing_author(self):
        with pytest.raises(MalformedInputError):
            issue_from_api(search_item(user=None))

    def test_missing_creation_time(self):
        with pytest.raises(MalformedInputError):
            issue_from_api(search_item(created_at=None))

    def test_missing_title_is_tolerated(self):
        assert issue_from_api(search_item(title=None)).title == ''


class TestReviewAndComments:
    """Test cases for reviews, comments and events."""

    def test_review(self):
        review = Review.from_api({
            'id': 9, 'user': {'login': 'bob'}, 'state': 'approved', 'body': None,
            'submitted_at': '2021-05-24T13:00:00Z',
        })
        assert review == Review(9, 'bob', 'APPROVED', '', datetime(2021, 5, 24, 13, tzinfo=timezone.utc))

    def test_pending_review_has_no_submit_time(self):
        review = Review.from_api({'id': 9, 'user': {'login': 'bob'}, 'state': 'PENDING'})
        assert review.submitted_at is None

    def test_comment_active_at(self):
        created = datetime(2021, 5, 24, 13, tzinfo=timezone.utc)
        updated = datetime(2021, 5, 25, 13, tzinfo=timezone.utc)

        assert Comment(1, 'bob', 'hi', created).active_at == created
        assert Comment(1, 'bob', 'hi', created, updated).active_at == updated

    def test_comment_without_user(self):
        with pytest.raises(MalformedInputError):
            Comment.from_api({'id': 1, 'user': {}, 'body': 'hi', 'created_at': '2021-05-24T13:00:00Z'})

    def test_labeled_event(self):
        event = Event.from_api({
            'event': 'labeled', 'actor': {'login': 'carol'}, 'label': {'name': 'type/bug'},
            'created_at': '2021-05-24T13:00:00Z',
        })
        assert event.actor == 'carol'
        assert event.label == 'type/bug'

    def test_labeled_event_requires_actor(self):
        with pytest.raises(MalformedInputError):
            Event.from_api({'event': 'labeled', 'actor': None, 'created_at': '2021-05-24T13:00:00Z'})

    def test_other_event_without_actor(self):
        event = Event.from_api({'event': 'closed', 'actor': None, 'created_at': '2021-05-24T13:00:00Z'})
        assert event.actor is None


class TestPullRequestSummary:
    """Test cases for the pulls listing."""

    def test_from_api(self):
        pr = PullRequestSummary.from_api({
            'number': 3, 'title': 'Add codec', 'html_url': 'https://github.com/tikv/tikv/pull/3',
            'user': {'login': 'dave'}, 'created_at': '2021-05-24T13:00:00Z',
            'base': {'repo': {'full_name': 'tikv/tikv'}},
        })
        assert (pr.owner, pr.repo, pr.number, pr.author) == ('tikv', 'tikv', 3, 'dave')

    def test_missing_base_repo(self):
        with pytest.raises(MalformedInputError):
            PullRequestSummary.from_api({'number': 3, 'user': {'login': 'dave'}})
