from __future__ import annotations
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple
import re

from dateutil import parser as dateutil_parser

"""
Date/time inference for hand-entered sheet cells.

Sheets hold dates like "15/03/2024", "16-3-2024" or "2024-03-15" next to a
separate, often empty, time column. `resolve` tries a list of strategies in
order and returns the first point in time any of them produces, or None.
Malformed input never raises.
"""

# Fields missing from a free-form date fall back to these
_PARSE_DEFAULT = datetime(2001, 1, 1)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

Strategy = Callable[[str, str], Optional[datetime]]


def _leading_int(text: str) -> Optional[int]:
    m = _LEADING_INT.match(text)
    return int(m.group(1)) if m else None


def _as_local(dt: datetime) -> Optional[datetime]:
    """Attach the host's local zone to naive values; aware values pass through.

    Returns None when the value can't be placed on the timeline, e.g. a
    parsed offset of a day or more.
    """
    try:
        if dt.tzinfo is not None:
            # utcoffset() validates the offset range
            dt.utcoffset()
            return dt
        return dt.astimezone()
    except (OverflowError, OSError, ValueError):
        return None


def calendar_point(year: int, month_index: int, day: int,
                   hour: int = 0, minute: int = 0, second: int = 0) -> Optional[datetime]:
    """Build a local point in time, rolling out-of-range fields over.

    `month_index` is 0-based. Month 12 is January of the next year, day 0 is
    the last day of the previous month, hour 25 is 01:00 the next day.
    Returns None when the result falls outside the representable range.
    """
    year += month_index // 12
    month_index %= 12
    try:
        base = datetime(year, month_index + 1, 1)
        naive = base + timedelta(days=day - 1, hours=hour, minutes=minute, seconds=second)
    except (ValueError, OverflowError):
        return None
    return _as_local(naive)


def parse_time_parts(time_text: str) -> Tuple[int, int, int]:
    """Split "H:M:S" into (hour, minute, second); unparseable parts are 0."""
    if not time_text:
        return 0, 0, 0
    parts = [_leading_int(p) or 0 for p in time_text.split(":")]
    parts += [0] * (3 - len(parts))
    return parts[0], parts[1], parts[2]


def parse_composite(date_text: str, time_text: str) -> Optional[datetime]:
    """Hand "<date> <time>" to the general-purpose date parser."""
    # Bare words like "TBD" would otherwise parse as a timezone name on the default date
    if not any(ch.isdigit() for ch in date_text):
        return None
    composite = f"{date_text} {time_text}".strip()
    try:
        parsed = dateutil_parser.parse(composite, default=_PARSE_DEFAULT)
    except (ValueError, OverflowError, TypeError):
        return None
    return _as_local(parsed)


def parse_delimited(date_text: str, time_text: str) -> Optional[datetime]:
    """Read "dd/mm/yyyy" or "dd-mm-yyyy" positionally (day first)."""
    if "/" in date_text:
        sep = "/"
    elif "-" in date_text:
        sep = "-"
    else:
        return None
    parts = [p.strip() for p in date_text.split(sep)]
    if len(parts) != 3:
        return None
    day, month, year = (_leading_int(p) for p in parts)
    if day is None or month is None or year is None:
        return None
    if 0 <= year <= 99:
        year += 1900
    hour, minute, second = parse_time_parts(time_text)
    return calendar_point(year, month - 1, day, hour, minute, second)


STRATEGIES: Tuple[Strategy, ...] = (parse_composite, parse_delimited)


def resolve(date_text: str, time_text: str = "") -> Optional[datetime]:
    """Resolve a (date, time) cell pair to an aware local datetime, or None.

    An empty date is unresolved; an empty time means midnight. Strategies
    run in order and the first non-None result wins.
    """
    date_text = (date_text or "").strip()
    time_text = (time_text or "").strip()
    if not date_text:
        return None
    for strategy in STRATEGIES:
        result = strategy(date_text, time_text)
        if result is not None:
            return result
    return None
