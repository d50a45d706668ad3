from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build

from sheetview.config.env import SheetsConfig, get_sheets_config

"""
Google Sheets v4 range reader.

Only `spreadsheets.values.get` is used. The response body is parsed by
`extract_grid`, which is pure and tested offline against small payloads.
"""

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets.readonly"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


def build_credentials(cfg: SheetsConfig) -> Credentials:
    info = {
        "type": "service_account",
        "client_email": cfg.service_account_email,
        "private_key": cfg.private_key,
        "token_uri": TOKEN_URI,
    }
    return Credentials.from_service_account_info(info, scopes=SCOPES)


def extract_grid(payload: Dict[str, Any]) -> List[List[str]]:
    """Pull the 2-D cell array out of a values.get response.

    A sheet with no data returns no "values" key at all; that is an empty grid.
    """
    values = payload.get("values") or []
    return [[("" if c is None else str(c)) for c in row] for row in values]


class SheetsClient:
    """Reads one configured range. Callable, so it can be passed as a grid fetcher."""

    def __init__(self, cfg: Optional[SheetsConfig] = None, service: Any = None):
        self.cfg = cfg or get_sheets_config()
        self._service = service

    @property
    def service(self) -> Any:
        if self._service is None:
            creds = build_credentials(self.cfg)
            self._service = build("sheets", "v4", credentials=creds, cache_discovery=False)
        return self._service

    def read_grid(self) -> List[List[str]]:
        logger.info("Reading range %s", self.cfg.sheet_range)
        payload = self.service.spreadsheets().values().get(
            spreadsheetId=self.cfg.spreadsheet_id, range=self.cfg.sheet_range
        ).execute()
        return extract_grid(payload)

    def __call__(self) -> List[List[str]]:
        return self.read_grid()
