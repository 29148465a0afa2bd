"""Typed access to the GitHub endpoints used by the reports."""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from .api_client import API_URL, GitHubAPIClient
from .models import (Comment, Event, IssueRef, PullRequestSummary, Review,
                     issue_from_api)
from .timewindow import TimeWindow


class GitHubActivitySource:
    """Fetches issues, reviews, comments and events, one request sequence at a time."""

    def __init__(self, client: GitHubAPIClient, api_url: str = API_URL):
        self.client = client
        self.api_url = api_url.rstrip('/')

    def _repo_url(self, owner: str, repo: str) -> str:
        return f"{self.api_url}/repos/{owner}/{repo}"

    def search_issues(self, query: str, window: Optional[TimeWindow] = None) -> List[IssueRef]:
        """Search issues and pull requests.

        Args:
            query: GitHub search query
            window: If given, restrict results to issues updated in the window

        Returns:
            Issues and pull requests matching the query
        """
        query = query.strip()
        if window is not None:
            query += window.search_qualifier()
        logging.info(f"Searching issues: {query}")
        items = self.client.get_paginated(f"{self.api_url}/search/issues", {'q': query}, items_key='items')
        return [issue_from_api(item) for item in items]

    def list_pr_reviews(self, owner: str, repo: str, number: int) -> List[Review]:
        url = f"{self._repo_url(owner, repo)}/pulls/{number}/reviews"
        return [Review.from_api(item) for item in self.client.get_paginated(url)]

    def list_pr_review_comments(self, owner: str, repo: str, number: int, review_id: int) -> List[Comment]:
        url = f"{self._repo_url(owner, repo)}/pulls/{number}/reviews/{review_id}/comments"
        return [Comment.from_api(item) for item in self.client.get_paginated(url)]

    def list_issue_comments(self, owner: str, repo: str, number: int,
                            since: Optional[datetime] = None) -> List[Comment]:
        """List top-level comments, updated at or after `since` when given."""
        url = f"{self._repo_url(owner, repo)}/issues/{number}/comments"
        params = {}
        if since is not None:
            params['since'] = since.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')
        return [Comment.from_api(item) for item in self.client.get_paginated(url, params)]

    def list_issue_events(self, owner: str, repo: str, number: int) -> List[Event]:
        url = f"{self._repo_url(owner, repo)}/issues/{number}/events"
        return [Event.from_api(item) for item in self.client.get_paginated(url)]

    def list_pull_requests(self, owner: str, repo: str, max_pages: Optional[int] = None) -> List[PullRequestSummary]:
        """List pull requests of a repository, newest first."""
        url = f"{self._repo_url(owner, repo)}/pulls"
        params = {'state': 'all', 'sort': 'created', 'direction': 'desc'}
        items = self.client.get_paginated(url, params, max_pages=max_pages)
        return [PullRequestSummary.from_api(item) for item in items]

    def list_pr_files(self, owner: str, repo: str, number: int) -> List[str]:
        """Paths of the files changed by a pull request."""
        url = f"{self._repo_url(owner, repo)}/pulls/{number}/files"
        return [item['filename'] for item in self.client.get_paginated(url)]
