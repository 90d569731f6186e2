"""
Google Sheets tab fetcher

Public sheets are read through the gviz CSV endpoint (no auth). When that
fails and an API key or service account is configured, the Sheets API v4
values endpoint is used instead and its values are rendered back to CSV so
the same parser handles both.
"""
import time
import logging
import threading
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote, urlencode

import requests
from google.auth.exceptions import GoogleAuthError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from ..config.enums import FetchSource
from ..core.errors import SheetFetchError

logger = logging.getLogger(__name__)

SCOPES = ['https://www.googleapis.com/auth/spreadsheets.readonly']
SHEETS_API_RANGE = "A1:AB2000"

def gviz_url(sheet_id: str, tab: str) -> str:
    """CSV export URL of one tab of a public sheet"""
    base = f"https://docs.google.com/spreadsheets/d/{quote(sheet_id, safe='')}/gviz/tq"
    return f"{base}?{urlencode({'tqx': 'out:csv', 'sheet': tab})}"

def values_to_csv(values: List[List]) -> str:
    """Render Sheets API values as CSV text"""
    lines = []
    for row in values:
        cells = []
        for value in row:
            s = "" if value is None else str(value)
            if '"' in s or ',' in s or '\n' in s:
                s = '"' + s.replace('"', '""') + '"'
            cells.append(s)
        lines.append(",".join(cells))
    return "\n".join(lines)

class SheetFetcher:
    """Fetch tab contents as CSV text, with a short-lived cache"""

    def __init__(self, api_key: Optional[str] = None, service_account_file: Optional[str] = None,
                 cache_ttl: int = 60, timeout: int = 30, session: Optional[requests.Session] = None):
        self.api_key = api_key
        self.service_account_file = service_account_file
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.session = session or requests.Session()
        self._cache: Dict[Tuple[str, str], Tuple[float, str]] = {}
        self._lock = threading.Lock()

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key or self.service_account_file)

    def _get_cached(self, sheet_id: str, tab: str) -> Optional[str]:
        with self._lock:
            entry = self._cache.get((sheet_id, tab))
            if entry and time.monotonic() - entry[0] < self.cache_ttl:
                return entry[1]
        return None

    def _store(self, sheet_id: str, tab: str, text: str):
        with self._lock:
            self._cache[(sheet_id, tab)] = (time.monotonic(), text)

    def clear_cache(self):
        with self._lock:
            self._cache.clear()

    def fetch_via_gviz(self, sheet_id: str, tab: str) -> str:
        url = gviz_url(sheet_id, tab)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise SheetFetchError(tab, f'GViz fetch failed for "{tab}": {e}') from e

        if not response.ok:
            raise SheetFetchError(
                tab, f'GViz fetch failed for "{tab}": {response.status_code} {response.reason}'
            )
        return response.text

    def _build_service(self):
        """
        Build a Sheets API client from an API key or a service account

        A fresh client is built per request: clients sit on httplib2, which
        must not be shared between the worker threads fetching tabs.
        """
        if self.service_account_file:
            credentials = Credentials.from_service_account_file(
                self.service_account_file,
                scopes=SCOPES
            )
            return build('sheets', 'v4', credentials=credentials, cache_discovery=False)
        return build('sheets', 'v4', developerKey=self.api_key, cache_discovery=False)

    def fetch_via_sheets_api(self, sheet_id: str, tab: str) -> str:
        try:
            service = self._build_service()
            data = service.spreadsheets().values().get(
                spreadsheetId=sheet_id,
                range=f"{tab}!{SHEETS_API_RANGE}",
                valueRenderOption='FORMATTED_VALUE'
            ).execute()
        except HttpError as e:
            status = getattr(e.resp, 'status', '')
            reason = getattr(e.resp, 'reason', '')
            raise SheetFetchError(tab, f'Sheets API fetch failed for "{tab}": {status} {reason}') from e
        except (GoogleAuthError, HttpLib2Error, OSError, ValueError) as e:
            # Unreadable service account file, bad credentials or transport failure
            raise SheetFetchError(tab, f'Sheets API fetch failed for "{tab}": {e}') from e

        return values_to_csv(data.get('values', []))

    def fetch_tab_csv(self, sheet_id: str, tab: str) -> str:
        """
        Return the tab as CSV text

        Raises:
            SheetFetchError: the tab could not be fetched by any configured method
        """
        cached = self._get_cached(sheet_id, tab)
        if cached is not None:
            logger.debug(f"[{tab}] served from {FetchSource.CACHE.value}")
            return cached

        try:
            text = self.fetch_via_gviz(sheet_id, tab)
            source = FetchSource.GVIZ
        except SheetFetchError as e:
            if not self.has_credentials:
                raise
            logger.warning(f"{e}; retrying through the Sheets API")
            text = self.fetch_via_sheets_api(sheet_id, tab)
            source = FetchSource.SHEETS_API

        logger.info(f"[{tab}] fetched {len(text)} chars via {source.value}")
        self._store(sheet_id, tab, text)
        return text
