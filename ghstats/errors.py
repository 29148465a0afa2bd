"""Exception types raised by ghstats."""


class GhStatsError(Exception):
    """Base class for every error that aborts a report run."""


class ConfigError(GhStatsError):
    """Configuration is missing, unreadable or invalid."""


class TimeWindowError(GhStatsError, ValueError):
    """A custom time window could not be parsed."""


class SourceAPIError(GhStatsError):
    """GitHub answered with a non-success status that is not a rate limit."""

    def __init__(self, status: int, url: str, body: str = ''):
        super().__init__(f"GitHub API error [{status}] {url}: {body}")
        self.status = status
        self.url = url
        self.body = body


class MalformedInputError(GhStatsError):
    """A fetched record lacks a field the aggregation depends on."""


class DeliveryError(GhStatsError):
    """The webhook did not accept the message."""
