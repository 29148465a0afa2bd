"""Filtering rules applied while collecting review activity."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import FrozenSet, Iterable, List, Optional

from ..timewindow import TimeWindow


def unescape_whitespace(text: str) -> str:
    """Turn literal '\\n', '\\r' and '\\t' sequences into real whitespace."""
    return text.replace('\\n', '\n').replace('\\r', '\r').replace('\\t', '\t')


def comment_lines(comment: str) -> List[str]:
    """Split an unescaped comment into stripped lines."""
    comment = unescape_whitespace(comment)
    return [line.strip() for line in comment.split('\n')]


@dataclass(frozen=True)
class FilterPolicy:
    """Immutable per-run filter configuration."""
    window: TimeWindow
    lgtm_patterns: FrozenSet[str] = field(default_factory=frozenset)
    blocked_patterns: FrozenSet[str] = field(default_factory=frozenset)
    allow_users: FrozenSet[str] = field(default_factory=frozenset)
    block_users: FrozenSet[str] = field(default_factory=frozenset)
    blocked_labels: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def build(cls, window: TimeWindow, lgtm_patterns: Iterable[str] = (),
              blocked_patterns: Iterable[str] = (), allow_users: Iterable[str] = (),
              block_users: Iterable[str] = (), blocked_labels: Iterable[str] = ()) -> 'FilterPolicy':
        """Create a policy from plain lists, unescaping LGTM patterns like comment bodies."""
        lgtm = frozenset(unescape_whitespace(p).strip() for p in lgtm_patterns)
        return cls(
            window=window,
            lgtm_patterns=lgtm - {''},
            # Empty patterns would block every comment.
            blocked_patterns=frozenset(p for p in blocked_patterns if p),
            allow_users=frozenset(allow_users),
            block_users=frozenset(block_users),
            blocked_labels=frozenset(blocked_labels),
        )

    def with_window(self, window: TimeWindow) -> 'FilterPolicy':
        return replace(self, window=window)

    def is_user_blocked(self, login: str) -> bool:
        # A non-empty allow list replaces the block list entirely.
        if self.allow_users:
            return login not in self.allow_users
        return login in self.block_users

    def is_comment_blocked(self, comment: str) -> bool:
        if not self.blocked_patterns:
            return False
        return any(
            pattern in line
            for line in comment_lines(comment)
            for pattern in self.blocked_patterns
        )

    def is_comment_lgtm(self, comment: str) -> bool:
        if not self.lgtm_patterns:
            return False
        return any(line in self.lgtm_patterns for line in comment_lines(comment))

    def is_label_blocked(self, label: Optional[str]) -> bool:
        return label is not None and label in self.blocked_labels

    def within_window(self, ts: Optional[datetime]) -> bool:
        return self.window.contains(ts)
