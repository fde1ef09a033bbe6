from __future__ import annotations

import logging
from pathlib import Path

import requests

"""Sheet source adapters.

``fetch_sheet_csv`` downloads the CSV export of the production sheet;
``read_sheet_file`` reads a locally saved export. Transport problems surface as
SheetFetchError and are not retried here; the caller decides whether to retry.
"""

__all__ = [
    "SheetFetchError",
    "fetch_sheet_csv",
    "read_sheet_file",
]

logger = logging.getLogger(__name__)


class SheetFetchError(Exception):
    """Raised when the sheet CSV cannot be obtained."""

    def __init__(self, source: str, reason: str, status_code: int | None = None) -> None:
        self.source = source
        self.reason = reason
        self.status_code = status_code
        detail = f"status={status_code} " if status_code is not None else ""
        super().__init__(f"failed to fetch spreadsheet data: {detail}{reason} ({source})")


def fetch_sheet_csv(url: str, timeout: float = 30.0, session: requests.Session | None = None) -> str:
    """GET ``url`` and return the response body as text.

    Raises:
        SheetFetchError: non-2xx status, timeout or connection failure
    """
    http = session or requests.Session()
    logger.debug(f"fetching sheet csv url={url} timeout={timeout}")
    try:
        response = http.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise SheetFetchError(url, str(e), status_code=status) from e
    except requests.Timeout as e:
        raise SheetFetchError(url, f"timeout after {timeout}s") from e
    except requests.RequestException as e:
        raise SheetFetchError(url, f"{type(e).__name__}: {e}") from e
    finally:
        if session is None:
            http.close()

    # Google Sheets の CSV エクスポートは UTF-8
    response.encoding = "utf-8"
    return response.text


def read_sheet_file(path: Path) -> str:
    """Read a saved CSV export (BOM tolerated)."""
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise SheetFetchError(str(path), f"{type(e).__name__}: {e}") from e
