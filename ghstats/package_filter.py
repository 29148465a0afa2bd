"""Filtering of pull requests by the package paths they touch."""

import logging
from typing import Iterable, List

# Logins of automation accounts whose pull requests are not listed
DEFAULT_BOT_MARKERS = [
    'ti-chi-bot',
    '[bot]',
]


class PackageFilter:
    """Decides whether a pull request belongs to the configured packages."""

    def __init__(self, packages: List[str] = None, bot_markers: List[str] = None):
        """Initialize the package filter.

        Args:
            packages: Path substrings identifying the packages of interest
            bot_markers: Login substrings identifying bot accounts (uses default if None)
        """
        self.packages = [p for p in (packages or []) if p]
        self.bot_markers = bot_markers if bot_markers is not None else DEFAULT_BOT_MARKERS

    def matches(self, paths: Iterable[str]) -> bool:
        """Check if any changed path contains any configured package.

        Args:
            paths: File paths changed by a pull request

        Returns:
            True if a path matches; always False when no packages are configured
        """
        if not self.packages:
            return False
        for path in paths:
            for package in self.packages:
                if package in path:
                    logging.debug(f"Path {path} matches package {package}")
                    return True
        return False

    def is_bot(self, login: str) -> bool:
        return any(marker in login for marker in self.bot_markers)
