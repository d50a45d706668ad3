from __future__ import annotations
from datetime import datetime, timedelta
from enum import Enum
from typing import Iterable, List, Optional

from sheetview.normalization.rows import Record


class Period(str, Enum):
    ALL = "all"
    TODAY = "today"
    LAST_7_DAYS = "7days"
    LAST_30_DAYS = "month"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Period":
        """Map a query-string value to a Period; anything unknown is ALL."""
        key = (value or "").strip().lower()
        return _ALIASES.get(key, cls.ALL)


_ALIASES = {
    "all": Period.ALL,
    "today": Period.TODAY,
    "7days": Period.LAST_7_DAYS,
    "last-7-days": Period.LAST_7_DAYS,
    "month": Period.LAST_30_DAYS,
    "last-30-days": Period.LAST_30_DAYS,
}

# Fixed windows, not calendar-aligned
_WINDOWS = {
    Period.LAST_7_DAYS: timedelta(days=7),
    Period.LAST_30_DAYS: timedelta(days=30),
}


def _local(now: datetime) -> datetime:
    return now.astimezone()


def cutoff_for(period: Period, now: datetime) -> Optional[datetime]:
    """Earliest timestamp kept for `period`, or None when nothing is cut."""
    now = _local(now)
    if period is Period.TODAY:
        midnight = now.replace(tzinfo=None, hour=0, minute=0, second=0, microsecond=0)
        return midnight.astimezone()
    window = _WINDOWS.get(period)
    if window is None:
        return None
    return now - window


def filter_by_period(records: Iterable[Record], period: Period | str | None, now: datetime) -> List[Record]:
    """Keep records at or after the period's cutoff, preserving order.

    ALL keeps everything, unresolved timestamps included. Any other period
    drops records whose timestamp is unresolved.
    """
    if not isinstance(period, Period):
        period = Period.parse(period)
    since = cutoff_for(period, now)
    if since is None:
        return list(records)
    return [r for r in records if r.resolved and r.timestamp >= since]
