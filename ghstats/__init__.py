"""ghstats - GitHub review statistics reported to Feishu."""

from .models import ReviewCounters, Issue, PullRequest, Review, Comment, Event
from .api_client import GitHubAPIClient, RateLimitPolicy
from .source import GitHubActivitySource
from .analyzer import FilterPolicy, ReviewAggregator, rank
from .output import ReportFormatter
from .feishu import WebhookBot, TitleColor

__all__ = [
    'ReviewCounters',
    'Issue',
    'PullRequest',
    'Review',
    'Comment',
    'Event',
    'GitHubAPIClient',
    'RateLimitPolicy',
    'GitHubActivitySource',
    'FilterPolicy',
    'ReviewAggregator',
    'rank',
    'ReportFormatter',
    'WebhookBot',
    'TitleColor',
]
