"""GitHub API client for making requests and handling pagination."""

import os
import time
import logging
from typing import Callable, Dict, List, Optional
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import SourceAPIError

API_URL = 'https://api.github.com'
TOKEN_ENV_KEYS = ('GHSTATS_GITHUB_TOKEN', 'GITHUB_TOKEN')


class RateLimitPolicy:
    """Sleeps until the rate limit resets, then lets the caller retry the same request.

    There is no attempt limit; the reset time announced by GitHub bounds the wait.
    """

    def __init__(self, margin: float = 1.0, sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], float] = time.time):
        """Initialize the policy.

        Args:
            margin: Extra seconds to wait past the announced reset time
            sleep: Sleep function (injectable for tests)
            clock: Clock returning epoch seconds (injectable for tests)
        """
        self.margin = margin
        self.sleep = sleep
        self.clock = clock

    @staticmethod
    def is_rate_limited(response: requests.Response) -> bool:
        if response.status_code not in (403, 429):
            return False
        if response.headers.get('Retry-After') is not None:
            return True
        return response.headers.get('X-RateLimit-Remaining') == '0'

    def wait_seconds(self, response: requests.Response) -> float:
        """Seconds to wait before retrying a rate limited response."""
        retry_after = response.headers.get('Retry-After')
        if retry_after is not None:
            try:
                return max(0.0, float(retry_after)) + self.margin
            except ValueError:
                pass
        reset = response.headers.get('X-RateLimit-Reset')
        try:
            return max(0.0, int(reset) - self.clock()) + self.margin
        except (TypeError, ValueError):
            return 60.0 + self.margin

    def wait(self, response: requests.Response):
        seconds = self.wait_seconds(response)
        logging.warning(f"Hit rate limit, sleeping {seconds:.1f}s")
        self.sleep(seconds)


class GitHubAPIClient:
    """Handles GitHub API requests with retry logic and pagination."""

    def __init__(self, token: str = None, retry_policy: RateLimitPolicy = None):
        """Initialize the GitHub API client.

        Args:
            token: GitHub personal access token for authentication
            retry_policy: Policy used when GitHub reports a rate limit
        """
        # Use provided token or fall back to environment variables
        self.token = token or next((os.environ[k] for k in TOKEN_ENV_KEYS if os.environ.get(k)), None)
        self.retry_policy = retry_policy or RateLimitPolicy()
        self.session = requests.Session()

        adapter = HTTPAdapter(
            max_retries=Retry(
                total=3,
                backoff_factor=0.3,
                status_forcelist=[500, 502, 503, 504]
            )
        )
        self.session.mount('https://', adapter)
        self.session.mount('http://', adapter)
        self.session.headers.update({'Accept': 'application/vnd.github.v3+json'})

        if self.token:
            self.session.headers.update({'Authorization': f'token {self.token}'})
            logging.info("Initialized GitHub API client with token")
        else:
            logging.warning("No GitHub token provided. Rate limits will be much lower.")
            logging.warning("Set GHSTATS_GITHUB_TOKEN or github-token in the config file.")

    def get(self, url: str, params: Dict = None) -> requests.Response:
        """Make a single GET request, waiting out rate limits.

        Args:
            url: The API endpoint URL
            params: Query parameters

        Returns:
            Successful response object

        Raises:
            SourceAPIError: If GitHub answers with a non-success status
        """
        while True:
            response = self.session.get(url, params=params)
            if self.retry_policy.is_rate_limited(response):
                self.retry_policy.wait(response)
                continue
            if not response.ok:
                raise SourceAPIError(response.status_code, url, response.text)
            return response

    def get_paginated(self, url: str, params: Dict = None, items_key: str = None,
                      max_pages: Optional[int] = None) -> List[Dict]:
        """Fetch all pages of a paginated GitHub API endpoint.

        Args:
            url: The API endpoint URL
            params: Query parameters
            items_key: Key holding the list in object responses (e.g. 'items' for search)
            max_pages: Stop after this many pages (None = all pages)

        Returns:
            List of all items from all pages
        """
        results = []
        page = 1
        per_page = 100

        params = dict(params or {})
        params['per_page'] = per_page

        while True:
            params['page'] = page
            logging.debug(f"Fetching page {page} from {url}")
            response = self.get(url, params)
            data = response.json()
            if items_key:
                data = data.get(items_key, [])

            if not data:
                break

            results.extend(data)

            if max_pages is not None and page >= max_pages:
                logging.debug(f"Stopping at page limit {max_pages} for {url}")
                break

            # Check if there are more pages
            if 'next' not in response.links:
                break

            page += 1

        logging.debug(f"Fetched {len(results)} total items from {url}")
        return results
