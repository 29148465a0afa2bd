"""Review activity aggregation and ranking."""

from .policy import FilterPolicy
from .core import ReviewAggregator
from .ranking import RankedEntry, rank, score

__all__ = [
    'FilterPolicy',
    'ReviewAggregator',
    'RankedEntry',
    'rank',
    'score',
]
