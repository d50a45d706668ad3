from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sheetview.normalization.datetimes import resolve

# Header labels are not standardized across sheets; Arabic and English both occur.
DATE_LABELS: Tuple[str, ...] = ("التاريخ", "Date", "date")
DATE_FRAGMENT = "تاريخ"
TIME_LABELS: Tuple[str, ...] = ("الوقت", "Time", "time")
TIME_FRAGMENT = "وقت"

TIMESTAMP_FIELD = "_timestamp"

Grid = Sequence[Sequence[Any]]


@dataclass(frozen=True)
class Record:
    fields: Mapping[str, str]
    timestamp: Optional[datetime] = None

    @property
    def resolved(self) -> bool:
        return self.timestamp is not None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.fields)
        out[TIMESTAMP_FIELD] = self.timestamp.isoformat() if self.timestamp is not None else None
        return out


@dataclass(frozen=True)
class NormalizedGrid:
    headers: List[str] = field(default_factory=list)
    records: List[Record] = field(default_factory=list)


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def field_name(header: str, index: int) -> str:
    return header or f"col{index}"


def find_column(headers: Sequence[str], labels: Sequence[str], fragment: str) -> Optional[str]:
    """Pick the header holding a date or time.

    First header equal to any of `labels`; failing that, the first header
    containing `fragment` (case-insensitive). Left-to-right in both passes.
    """
    for h in headers:
        if h in labels:
            return h
    frag = fragment.casefold()
    for h in headers:
        if frag in h.casefold():
            return h
    return None


def normalize(grid: Grid) -> NormalizedGrid:
    """Turn a header row plus data rows into records with derived timestamps.

    - Empty grid -> no headers, no records
    - Every header column becomes a field; empty headers become col<i>
    - Short rows are padded with empty text
    """
    if not grid:
        return NormalizedGrid()

    headers = [_cell_text(h).strip() for h in grid[0]]
    names = [field_name(h, i) for i, h in enumerate(headers)]
    date_key = find_column(headers, DATE_LABELS, DATE_FRAGMENT)
    time_key = find_column(headers, TIME_LABELS, TIME_FRAGMENT)

    records: List[Record] = []
    for row in grid[1:]:
        values: Dict[str, str] = {}
        # Duplicate names (e.g. a literal "col1" beside an empty header at 1): the later column wins
        for i, name in enumerate(names):
            values[name] = _cell_text(row[i]) if i < len(row) else ""
        date_text = values.get(date_key, "") if date_key else ""
        time_text = values.get(time_key, "") if time_key else ""
        records.append(Record(fields=MappingProxyType(values), timestamp=resolve(date_text, time_text)))
    return NormalizedGrid(headers=headers, records=records)
