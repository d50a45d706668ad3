from __future__ import annotations
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from sheetview.errors import ConfigError

load_dotenv()

DEFAULT_RANGE = "Users!A:Z"

_REQUIRED_SHEETS_VARS = ("GOOGLE_SERVICE_ACCOUNT_EMAIL", "GOOGLE_PRIVATE_KEY", "GOOGLE_SHEET_ID")


@dataclass(frozen=True)
class SheetsConfig:
    service_account_email: str
    private_key: str
    spreadsheet_id: str
    sheet_range: str = DEFAULT_RANGE


def get_sheets_config() -> SheetsConfig:
    """Read the service-account credentials and target sheet from the environment.

    Raises ConfigError naming every missing variable.
    """
    missing = [name for name in _REQUIRED_SHEETS_VARS if not os.getenv(name)]
    if missing:
        raise ConfigError(f"Missing required env vars: {', '.join(missing)}")
    # Keys pasted into .env files usually carry literal "\n" sequences
    key = os.environ["GOOGLE_PRIVATE_KEY"].replace("\\n", "\n")
    return SheetsConfig(
        service_account_email=os.environ["GOOGLE_SERVICE_ACCOUNT_EMAIL"],
        private_key=key,
        spreadsheet_id=os.environ["GOOGLE_SHEET_ID"],
        sheet_range=os.getenv("SHEET_RANGE", DEFAULT_RANGE),
    )


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 5000
    log_level: str = "INFO"


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "5000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
