from __future__ import annotations
from datetime import datetime
from typing import Callable
import logging
import sys

from flask import Flask, request, jsonify

from sheetview.api.pipeline import FetchGrid, run
from sheetview.config.env import get_server_config
from sheetview.errors import ConfigError
from sheetview.filtering.period import Period
from sheetview.ingestion.sheets_client import SheetsClient

logger = logging.getLogger(__name__)

# "Error reading the sheet"
FETCH_FAILED_MESSAGE = "خطأ في قراءة الشيت"

app = Flask(__name__)
app.json.ensure_ascii = False

_default_client: SheetsClient | None = None

# Collaborators (overridable via app.config in tests)


def _get_fetch_grid() -> FetchGrid:
    global _default_client
    fetch_grid = app.config.get('FETCH_GRID')
    if fetch_grid is not None:
        return fetch_grid
    if _default_client is None:
        _default_client = SheetsClient()
    return _default_client


def _get_clock() -> Callable[[], datetime]:
    return app.config.get('CLOCK') or (lambda: datetime.now().astimezone())


@app.after_request
def _cors(resp):
    resp.headers['Access-Control-Allow-Origin'] = '*'
    resp.headers['Access-Control-Allow-Methods'] = 'GET,OPTIONS'
    resp.headers['Access-Control-Allow-Headers'] = 'Content-Type'
    return resp


@app.get('/entries')
def get_entries():
    period = Period.parse(request.args.get('period'))
    now = _get_clock()()
    # Any fault in fetch, parse, filter or sort gets the same generic body
    try:
        body = {'success': True, **run(_get_fetch_grid(), period, now).to_dict()}
    except Exception:
        logger.exception("Error /entries")
        return jsonify({'success': False, 'message': FETCH_FAILED_MESSAGE}), 500
    return jsonify(body)


@app.get('/ping')
def ping():
    return jsonify({'success': True, 'now': _get_clock()().isoformat()})


def main():
    global _default_client
    cfg = get_server_config()
    logging.basicConfig(level=cfg.log_level)
    try:
        _default_client = SheetsClient()
    except ConfigError as e:
        logger.error("%s", e)
        sys.exit(1)
    logger.info("Server running on port %d", cfg.port)
    app.run(host=cfg.host, port=cfg.port)


if __name__ == '__main__':
    main()
