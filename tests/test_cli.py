import json

from google.auth.exceptions import RefreshError

from sheetmap.services import sheets
from sheetmap.services.sheets import SheetsClient


def test_normalize_csv_prints_records(app, tmp_path):
    path = tmp_path / "sheet.csv"
    path.write_text("Location,Lat,Lng,Picture Taken\n123 Main St,40.1,-74.2,Yes\nshort,,,\n", encoding="utf-8")
    result = app.test_cli_runner().invoke(args=["normalize-csv", str(path)])
    assert result.exit_code == 0
    out = json.loads(result.output)
    assert out["detectedHeaders"] is True
    assert out["data"] == [{"address": "123 Main St", "latitude": 40.1, "longitude": -74.2, "visited": "Yes"}]

def test_normalize_csv_empty_file_fails(app, tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")
    result = app.test_cli_runner().invoke(args=["normalize-csv", str(path)])
    assert result.exit_code == 1

def test_fetch_sheet_prints_records(app, monkeypatch):
    monkeypatch.setattr(SheetsClient, "fetch_values", lambda self, sheet_range="Sheet1": [["5 Oak Ave", "10", "20", "No"]])
    result = app.test_cli_runner().invoke(args=["fetch-sheet"])
    assert result.exit_code == 0
    out = json.loads(result.output)
    assert out["detectedHeaders"] is False
    assert out["data"][0]["address"] == "5 Oak Ave"

def test_fetch_sheet_reports_configuration_error(make_app):
    app = make_app(GOOGLE_SHEETS_ID="")
    result = app.test_cli_runner().invoke(args=["fetch-sheet"])
    assert result.exit_code == 1

def _capture_range(monkeypatch):
    seen = {}
    def _fetch(self, sheet_range="Sheet1"):
        seen["range"] = sheet_range
        return [["a", "1", "2"]]
    monkeypatch.setattr(SheetsClient, "fetch_values", _fetch)
    return seen

def test_fetch_sheet_blank_range_uses_default(make_app, monkeypatch):
    seen = _capture_range(monkeypatch)
    result = make_app(GOOGLE_SHEETS_RANGE="   ").test_cli_runner().invoke(args=["fetch-sheet"])
    assert result.exit_code == 0
    assert seen["range"] == "Sheet1"

def test_fetch_sheet_configured_range_is_stripped(make_app, monkeypatch):
    seen = _capture_range(monkeypatch)
    result = make_app(GOOGLE_SHEETS_RANGE=" Pins!A:D ").test_cli_runner().invoke(args=["fetch-sheet"])
    assert result.exit_code == 0
    assert seen["range"] == "Pins!A:D"

def test_fetch_sheet_range_option_wins(app, monkeypatch):
    seen = _capture_range(monkeypatch)
    result = app.test_cli_runner().invoke(args=["fetch-sheet", "--range", "Other!A:B"])
    assert result.exit_code == 0
    assert seen["range"] == "Other!A:B"

def test_fetch_sheet_refresh_error_exits_cleanly(make_app, monkeypatch):
    class _Session:
        def get(self, url, params=None, timeout=None):
            raise RefreshError("invalid_grant: account disabled")
    monkeypatch.setattr(sheets, "_service_account_session", lambda credentials_json: _Session())
    app = make_app(GOOGLE_SHEETS_CREDENTIALS='{"client_email": "x", "private_key": "y"}')
    result = app.test_cli_runner().invoke(args=["fetch-sheet"])
    assert result.exit_code == 1
    assert not isinstance(result.exception, RefreshError)
