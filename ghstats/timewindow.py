"""Report window resolution in the reporting timezone."""

import calendar
import logging
from datetime import datetime, timedelta, timezone
from typing import Iterator, NamedTuple, Optional

from .errors import TimeWindowError

# Reports are scheduled against UTC+8 office hours.
REPORT_TZ = timezone(timedelta(hours=8))

CUSTOM_TIME_FORMAT = '%Y-%m-%dT%H:%M:%S'
WEEKLY_START_HOUR = 10

DAILY = 'daily'
WEEKLY = 'weekly'
MONTHLY = 'monthly'
KINDS = (DAILY, WEEKLY, MONTHLY)


class TimeWindow(NamedTuple):
    """Half-open interval [start, end) of aware datetimes."""
    start: datetime
    end: datetime

    def contains(self, ts: Optional[datetime]) -> bool:
        """Is ts within [start, end)?"""
        if ts is None:
            return False
        ts = ts.astimezone(REPORT_TZ)
        return self.start <= ts < self.end

    def search_qualifier(self) -> str:
        """Search qualifier restricting results to issues updated in the window."""
        return f" updated:{self.start.isoformat()}..{self.end.isoformat()}"

    def __str__(self) -> str:
        return f"{self.start.isoformat()} - {self.end.isoformat()}"


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(REPORT_TZ)
    if now.tzinfo is None:
        return now.replace(tzinfo=REPORT_TZ)
    return now.astimezone(REPORT_TZ)


def subtract_month(ts: datetime) -> datetime:
    """Same day and time one calendar month earlier, clamped to the month's last day."""
    year, month = (ts.year, ts.month - 1) if ts.month > 1 else (ts.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return ts.replace(year=year, month=month, day=min(ts.day, last_day))


def resolve_window(kind: str, now: Optional[datetime] = None) -> TimeWindow:
    """Compute the report window for a daily, weekly or monthly run.

    Args:
        kind: One of 'daily', 'weekly' or 'monthly'
        now: Current time; defaults to the wall clock in the reporting timezone

    Returns:
        TimeWindow ending at now
    """
    now = _now(now)

    if kind == DAILY:
        # Monday also covers the weekend.
        days = 3 if now.weekday() == 0 else 1
        start = now - timedelta(days=days)
    elif kind == WEEKLY:
        monday = now - timedelta(days=now.weekday())
        start = monday.replace(hour=WEEKLY_START_HOUR, minute=0, second=0, microsecond=0)
        if start >= now:
            start -= timedelta(weeks=1)
    elif kind == MONTHLY:
        start = subtract_month(now)
    else:
        raise TimeWindowError(f"Unknown report kind '{kind}', expected one of {', '.join(KINDS)}")

    window = TimeWindow(start, now)
    logging.debug(f"Resolved {kind} window: {window}")
    return window


def parse_time(text: str) -> datetime:
    """Parse a custom window boundary in the reporting timezone."""
    try:
        return datetime.strptime(text.strip(), CUSTOM_TIME_FORMAT).replace(tzinfo=REPORT_TZ)
    except ValueError as e:
        raise TimeWindowError(f"Invalid time '{text}', expected format YYYY-MM-DDTHH:MM:SS") from e


def parse_window(start_text: str, end_text: str) -> TimeWindow:
    """Build a custom window from two literal timestamps."""
    start = parse_time(start_text)
    end = parse_time(end_text)
    if start >= end:
        raise TimeWindowError(f"Window start {start_text} must be before end {end_text}")
    return TimeWindow(start, end)


def split_window(window: TimeWindow, step: timedelta = timedelta(hours=24)) -> Iterator[TimeWindow]:
    """Yield consecutive sub-windows of at most `step` that tile the window exactly."""
    if step <= timedelta(0):
        raise TimeWindowError(f"Chunk size must be positive, got {step}")
    start = window.start
    while start < window.end:
        end = min(start + step, window.end)
        yield TimeWindow(start, end)
        start = end
