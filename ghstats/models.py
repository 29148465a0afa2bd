"""Data models for GitHub review activity."""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Dict, Optional, Tuple

from .errors import MalformedInputError

GITHUB_TIME_FORMAT = '%Y-%m-%dT%H:%M:%SZ'


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub timestamp into an aware UTC datetime.

    Args:
        value: Timestamp string such as '2021-05-24T13:00:00Z', or None

    Returns:
        Aware datetime in UTC, or None if value is empty
    """
    if not value:
        return None
    try:
        return datetime.strptime(value, GITHUB_TIME_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        # Some endpoints return offsets instead of 'Z'
        parsed = datetime.fromisoformat(value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed


def _require(record: Dict, key: str, kind: str):
    value = record.get(key)
    if value is None:
        raise MalformedInputError(f"{kind} record is missing '{key}': id={record.get('id')}")
    return value


def _login(record: Dict, key: str, kind: str) -> str:
    user = _require(record, key, kind)
    login = user.get('login') if isinstance(user, dict) else None
    if not login:
        raise MalformedInputError(f"{kind} record has no {key}.login: id={record.get('id')}")
    return login


def split_repository_url(repository_url: str) -> Tuple[str, str]:
    """Return (owner, repo) from an API repository URL."""
    parts = repository_url.rstrip('/').split('/')
    if len(parts) < 2:
        raise MalformedInputError(f"Unexpected repository URL: {repository_url}")
    return parts[-2], parts[-1]


@dataclass
class ReviewCounters:
    """Review activity of one user over a report window."""
    approvals: int = 0  # APPROVED reviews and LGTM comments
    review_inline_comments: int = 0
    issue_or_pr_comments: int = 0
    issue_comments: int = 0
    issues_created: int = 0
    labels_added: int = 0

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def merge(self, other: 'ReviewCounters') -> 'ReviewCounters':
        """Add another user's counters into this one and return self."""
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))
        return self


@dataclass(frozen=True)
class IssueRef:
    """An issue search hit; use Issue or PullRequest."""
    owner: str
    repo: str
    number: int
    title: str
    html_url: str
    author: str
    created_at: datetime

    is_pull_request = False

    @property
    def key(self) -> Tuple[str, str, int]:
        return self.owner, self.repo, self.number


@dataclass(frozen=True)
class Issue(IssueRef):
    """A plain issue."""


@dataclass(frozen=True)
class PullRequest(IssueRef):
    """A pull request as returned by the issue search endpoint."""
    is_pull_request = True


def issue_from_api(item: Dict) -> IssueRef:
    """Build an Issue or PullRequest from an issue search item."""
    owner, repo = split_repository_url(_require(item, 'repository_url', 'issue'))
    cls = PullRequest if item.get('pull_request') else Issue
    return cls(
        owner=owner,
        repo=repo,
        number=_require(item, 'number', 'issue'),
        title=item.get('title') or '',
        html_url=item.get('html_url') or '',
        author=_login(item, 'user', 'issue'),
        created_at=parse_timestamp(_require(item, 'created_at', 'issue')),
    )


@dataclass(frozen=True)
class Review:
    """A pull request review."""
    id: int
    author: str
    state: str
    body: str
    submitted_at: Optional[datetime]  # None while the review is pending

    @classmethod
    def from_api(cls, item: Dict) -> 'Review':
        return cls(
            id=_require(item, 'id', 'review'),
            author=_login(item, 'user', 'review'),
            state=(item.get('state') or '').upper(),
            body=item.get('body') or '',
            submitted_at=parse_timestamp(item.get('submitted_at')),
        )


@dataclass(frozen=True)
class Comment:
    """An issue comment or an inline review comment."""
    id: int
    author: str
    body: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    @property
    def active_at(self) -> datetime:
        """Last time the comment was created or edited."""
        return self.updated_at or self.created_at

    @classmethod
    def from_api(cls, item: Dict) -> 'Comment':
        return cls(
            id=_require(item, 'id', 'comment'),
            author=_login(item, 'user', 'comment'),
            body=item.get('body') or '',
            created_at=parse_timestamp(_require(item, 'created_at', 'comment')),
            updated_at=parse_timestamp(item.get('updated_at')),
        )


@dataclass(frozen=True)
class Event:
    """An issue timeline event such as 'labeled'."""
    event: str
    actor: Optional[str]
    created_at: datetime
    label: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict) -> 'Event':
        event = _require(item, 'event', 'event')
        # Only label events need an actor; ghost events elsewhere carry none.
        actor = _login(item, 'actor', 'event') if event == 'labeled' else (item.get('actor') or {}).get('login')
        label = (item.get('label') or {}).get('name')
        return cls(
            event=event,
            actor=actor,
            created_at=parse_timestamp(_require(item, 'created_at', 'event')),
            label=label,
        )


@dataclass(frozen=True)
class PullRequestSummary:
    """A pull request from the repository pulls listing."""
    owner: str
    repo: str
    number: int
    title: str
    html_url: str
    author: str
    created_at: datetime

    @classmethod
    def from_api(cls, item: Dict) -> 'PullRequestSummary':
        base_repo = (item.get('base') or {}).get('repo') or {}
        full_name = base_repo.get('full_name')
        if not full_name:
            raise MalformedInputError(f"pull request has no base.repo.full_name: number={item.get('number')}")
        owner, repo = full_name.split('/', 1)
        return cls(
            owner=owner,
            repo=repo,
            number=_require(item, 'number', 'pull request'),
            title=item.get('title') or '',
            html_url=item.get('html_url') or '',
            author=_login(item, 'user', 'pull request'),
            created_at=parse_timestamp(_require(item, 'created_at', 'pull request')),
        )
