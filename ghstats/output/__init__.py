"""Message rendering for ghstats reports."""

from .formatter_base import ReportFormatter, NO_ACTIVITY_MESSAGE
from .leaderboard import summarize
from . import markdown

__all__ = [
    'ReportFormatter',
    'NO_ACTIVITY_MESSAGE',
    'summarize',
    'markdown',
]
