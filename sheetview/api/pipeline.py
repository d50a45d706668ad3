from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from sheetview.errors import FetchFailed
from sheetview.filtering.period import Period, filter_by_period
from sheetview.normalization.rows import Grid, Record, normalize

logger = logging.getLogger(__name__)

FetchGrid = Callable[[], Grid]

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class RecordsPage:
    headers: List[str] = field(default_factory=list)
    rows: List[Record] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headers": list(self.headers),
            "rows": [r.to_dict() for r in self.rows],
        }


def _newest_first_key(record: Record) -> Tuple[bool, datetime]:
    # Unresolved records rank below every real timestamp
    if not record.resolved:
        return (False, _OLDEST)
    return (True, record.timestamp)


def sort_newest_first(records: List[Record]) -> List[Record]:
    """Stable descending sort by timestamp; unresolved records sink to the end."""
    return sorted(records, key=_newest_first_key, reverse=True)


def fetch(fetch_grid: FetchGrid) -> Grid:
    try:
        return fetch_grid()
    except Exception as e:
        raise FetchFailed(str(e) or e.__class__.__name__) from e


def run(fetch_grid: FetchGrid, period: Optional[Period | str], now: datetime) -> RecordsPage:
    """Fetch the grid, normalize it, keep the requested window, newest first.

    A fault in `fetch_grid` surfaces as FetchFailed; nothing is retried and
    no partial page is returned.
    """
    grid = fetch(fetch_grid)
    normalized = normalize(grid)
    kept = filter_by_period(normalized.records, period, now)
    logger.debug(
        "Normalized %d records, kept %d for period %r",
        len(normalized.records), len(kept), period,
    )
    return RecordsPage(headers=normalized.headers, rows=sort_newest_first(kept))
