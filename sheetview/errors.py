"""Error types raised at the edges of the sheet view.

Per-row anomalies never raise; only configuration and transport faults do.
"""

from __future__ import annotations


class SheetViewError(Exception):
    """Base exception for sheetview failures."""


class ConfigError(SheetViewError):
    """Raised when a required setting is missing at startup."""


class FetchFailed(SheetViewError):
    """Raised when the grid could not be read from the data source."""
