"""
Test script for the Google Sheets tab fetcher (no network access)
"""
import sys
from pathlib import Path
from unittest import mock

import requests

# Add the project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from sheet_leaderboard.core.csv_grid import parse_csv
from sheet_leaderboard.core.errors import SheetFetchError
from sheet_leaderboard.fetchers.sheet_fetcher import SheetFetcher, gviz_url, values_to_csv

class FakeResponse:
    def __init__(self, status_code=200, text="", reason="OK"):
        self.status_code = status_code
        self.text = text
        self.reason = reason

    @property
    def ok(self):
        return 200 <= self.status_code < 400

class FakeSession:
    """Stands in for requests.Session and records requested URLs"""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append(url)
        if self.error:
            raise self.error
        return self.response

def test_gviz_url():
    url = gviz_url("sheet123", "Person 1")
    assert url == "https://docs.google.com/spreadsheets/d/sheet123/gviz/tq?tqx=out%3Acsv&sheet=Person+1"

def test_values_to_csv():
    values = [["Name", "Note"], ["A", 'say "hi", ok'], ["B"], []]
    text = values_to_csv(values)
    assert text == 'Name,Note\nA,"say ""hi"", ok"\nB\n'
    assert parse_csv(text) == [["Name", "Note"], ["A", 'say "hi", ok'], ["B"]]

def test_fetch_via_gviz_and_cache():
    session = FakeSession(FakeResponse(text="Realized P/L:,100"))
    fetcher = SheetFetcher(session=session, cache_ttl=60)

    assert fetcher.fetch_tab_csv("sheet", "Tejas") == "Realized P/L:,100"
    assert fetcher.fetch_tab_csv("sheet", "Tejas") == "Realized P/L:,100"
    assert len(session.urls) == 1

    fetcher.clear_cache()
    fetcher.fetch_tab_csv("sheet", "Tejas")
    assert len(session.urls) == 2

def test_cache_disabled():
    session = FakeSession(FakeResponse(text="x"))
    fetcher = SheetFetcher(session=session, cache_ttl=0)
    fetcher.fetch_tab_csv("sheet", "Tejas")
    fetcher.fetch_tab_csv("sheet", "Tejas")
    assert len(session.urls) == 2

def test_gviz_error_without_credentials():
    session = FakeSession(FakeResponse(status_code=404, reason="Not Found"))
    fetcher = SheetFetcher(session=session)
    try:
        fetcher.fetch_tab_csv("sheet", "Gabe")
        raise AssertionError("expected SheetFetchError")
    except SheetFetchError as e:
        assert str(e) == 'GViz fetch failed for "Gabe": 404 Not Found'
        assert e.tab == "Gabe"

def test_gviz_connection_error():
    session = FakeSession(error=requests.ConnectionError("boom"))
    fetcher = SheetFetcher(session=session)
    try:
        fetcher.fetch_tab_csv("sheet", "Gabe")
        raise AssertionError("expected SheetFetchError")
    except SheetFetchError as e:
        assert "boom" in str(e)

def test_sheets_api_fallback():
    session = FakeSession(FakeResponse(status_code=500, reason="Server Error"))
    fetcher = SheetFetcher(api_key="key", session=session)

    with mock.patch("sheet_leaderboard.fetchers.sheet_fetcher.build") as build:
        values_api = build.return_value.spreadsheets.return_value.values.return_value
        values_api.get.return_value.execute.return_value = {
            "values": [["Realized P/L:", "$1,250.00"]]
        }
        text = fetcher.fetch_tab_csv("sheet", "Lucas")

    assert text == 'Realized P/L:,"$1,250.00"'
    build.assert_called_once_with('sheets', 'v4', developerKey="key", cache_discovery=False)
    values_api.get.assert_called_once_with(
        spreadsheetId="sheet",
        range="Lucas!A1:AB2000",
        valueRenderOption='FORMATTED_VALUE'
    )

def test_sheets_api_empty_tab():
    fetcher = SheetFetcher(api_key="key", session=FakeSession(FakeResponse(status_code=403, reason="Forbidden")))
    with mock.patch("sheet_leaderboard.fetchers.sheet_fetcher.build") as build:
        values_api = build.return_value.spreadsheets.return_value.values.return_value
        values_api.get.return_value.execute.return_value = {}
        assert fetcher.fetch_tab_csv("sheet", "Person 2") == ""

def test_sheets_api_client_per_request():
    """Every fallback fetch builds its own client, none is kept on the fetcher"""
    session = FakeSession(FakeResponse(status_code=500, reason="Server Error"))
    fetcher = SheetFetcher(api_key="key", session=session)

    with mock.patch("sheet_leaderboard.fetchers.sheet_fetcher.build") as build:
        values_api = build.return_value.spreadsheets.return_value.values.return_value
        values_api.get.return_value.execute.return_value = {"values": [["x"]]}
        fetcher.fetch_tab_csv("sheet", "Tejas")
        fetcher.fetch_tab_csv("sheet", "Miguel")

    assert build.call_count == 2
    assert not hasattr(fetcher, "service")

def test_sheets_api_transport_errors():
    session = FakeSession(FakeResponse(status_code=500, reason="Server Error"))
    fetcher = SheetFetcher(service_account_file="/nonexistent/sa.json", session=session)
    try:
        fetcher.fetch_tab_csv("sheet", "Gabe")
        raise AssertionError("expected SheetFetchError")
    except SheetFetchError as e:
        assert e.tab == "Gabe"
        assert isinstance(e.__cause__, OSError)

def main():
    """Run all tests"""
    print("Testing Sheet Fetcher")
    print("=" * 50)

    tests = [
        test_gviz_url,
        test_values_to_csv,
        test_fetch_via_gviz_and_cache,
        test_cache_disabled,
        test_gviz_error_without_credentials,
        test_gviz_connection_error,
        test_sheets_api_fallback,
        test_sheets_api_empty_tab,
        test_sheets_api_client_per_request,
        test_sheets_api_transport_errors,
    ]
    for test in tests:
        test()
        print(f"+ {test.__name__}")

    print("All fetcher tests passed")

if __name__ == "__main__":
    main()
