"""Collector passes for ReviewAggregator.

Every pass walks the same list of issues and pull requests and adds to its
own counters, so the passes are independent of each other.
"""

import logging
from typing import Dict, List

from ..models import IssueRef, PullRequest, Review, ReviewCounters

APPROVED = 'APPROVED'
LABELED = 'labeled'


def _qualifying_reviews(self, pr: PullRequest) -> List[Review]:
    """Reviews of a PR that count: not filtered, not by the author, submitted in the window."""
    reviews = []
    for review in self.source.list_pr_reviews(pr.owner, pr.repo, pr.number):
        if self.policy.is_user_blocked(review.author):
            continue
        # Self-reviews never count.
        if review.author == pr.author:
            continue
        if not self.policy.within_window(review.submitted_at):
            continue
        reviews.append(review)
    return reviews


def _collect_issue_creates(self, items: List[IssueRef], counters: Dict[str, ReviewCounters]):
    """Count issues (not pull requests) created in the window."""
    for item in items:
        if item.is_pull_request:
            continue
        if self.policy.is_user_blocked(item.author):
            continue
        if self.policy.within_window(item.created_at):
            counters[item.author].issues_created += 1


def _collect_pr_approvals(self, items: List[IssueRef], counters: Dict[str, ReviewCounters]):
    """Count approvals: APPROVED reviews and reviews whose summary is an LGTM."""
    for item in items:
        if not item.is_pull_request:
            continue
        for review in self._qualifying_reviews(item):
            if review.state == APPROVED or self.policy.is_comment_lgtm(review.body):
                counters[review.author].approvals += 1
                logging.debug(f"{review.author} approved {item.owner}/{item.repo}#{item.number}")


def _collect_pr_review_comments(self, items: List[IssueRef], counters: Dict[str, ReviewCounters]):
    """Count inline comments attached to qualifying reviews."""
    for item in items:
        if not item.is_pull_request:
            continue
        for review in self._qualifying_reviews(item):
            comments = self.source.list_pr_review_comments(item.owner, item.repo, item.number, review.id)
            if comments:
                counters[review.author].review_inline_comments += len(comments)


def _collect_issue_and_pr_comments(self, items: List[IssueRef], counters: Dict[str, ReviewCounters]):
    """Count top-level comments; LGTM comments on pull requests count as approvals."""
    window = self.policy.window
    for item in items:
        comments = self.source.list_issue_comments(item.owner, item.repo, item.number, window.start)
        for comment in comments:
            if self.policy.is_user_blocked(comment.author):
                continue
            if comment.author == item.author:
                continue
            if self.policy.is_comment_blocked(comment.body):
                logging.debug(f"Skipping blocked comment {comment.id} by {comment.author}")
                continue
            # One timestamp per comment (last edit, else creation), never "created OR
            # updated in window": a comment must fall in exactly one chunk of a split range.
            if not self.policy.within_window(comment.active_at):
                continue

            user = counters[comment.author]
            if not item.is_pull_request:
                user.issue_comments += 1
            elif self.policy.is_comment_lgtm(comment.body):
                user.approvals += 1
            else:
                user.issue_or_pr_comments += 1


def _collect_added_labels(self, items: List[IssueRef], counters: Dict[str, ReviewCounters]):
    """Count labels added by someone other than the issue's creator."""
    for item in items:
        for event in self.source.list_issue_events(item.owner, item.repo, item.number):
            if event.event != LABELED:
                continue
            if self.policy.is_user_blocked(event.actor) or event.actor == item.author:
                continue
            if self.policy.is_label_blocked(event.label):
                continue
            if self.policy.within_window(event.created_at):
                counters[event.actor].labels_added += 1
