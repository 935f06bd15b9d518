# tests/conftest.py
import pytest
from sheetmap import create_app

TEST_CONFIG = {
    "TESTING": True,
    "GOOGLE_MAPS_API_KEY": "maps-test-key",
    "N8N_WEBHOOK_URL": "https://n8n.example.test/webhook/abc",
    "GOOGLE_SHEETS_ID": "sheet-123",
    "GOOGLE_SHEETS_API_KEY": "sheets-test-key",
    "GOOGLE_SHEETS_CREDENTIALS": "",
    "GOOGLE_SHEETS_RANGE": "Sheet1",
}

@pytest.fixture()
def make_app():
    def _make(**overrides):
        return create_app({**TEST_CONFIG, **overrides})
    return _make

@pytest.fixture()
def app(make_app):
    app = make_app()
    with app.app_context():
        yield app

@pytest.fixture()
def client(app):
    return app.test_client()
