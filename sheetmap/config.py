import os
class Config:
    ENV = os.environ.get("FLASK_ENV", "production")
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # Client-facing secrets served by the functions blueprint
    GOOGLE_MAPS_API_KEY = os.environ.get("GOOGLE_MAPS_API_KEY", "")
    N8N_WEBHOOK_URL = os.environ.get("N8N_WEBHOOK_URL", "")

    # Google Sheets
    GOOGLE_SHEETS_ID = os.environ.get("GOOGLE_SHEETS_ID", "")
    GOOGLE_SHEETS_API_KEY = os.environ.get("GOOGLE_SHEETS_API_KEY", "")
    # Service account JSON (as a single string); preferred over the API key
    GOOGLE_SHEETS_CREDENTIALS = os.environ.get("GOOGLE_SHEETS_CREDENTIALS", "")
    # "Sheet1" or "Sheet1!A:D"
    GOOGLE_SHEETS_RANGE = os.environ.get("GOOGLE_SHEETS_RANGE", "Sheet1")
    # seconds; parsed in create_app, bad values fall back to DEFAULT_SHEETS_TIMEOUT
    SHEETS_TIMEOUT = os.environ.get("SHEETS_TIMEOUT", "10")

DEFAULT_SHEETS_TIMEOUT = 10.0

# Keys exposed through SecretProvider
SECRET_KEYS = (
    "GOOGLE_MAPS_API_KEY",
    "N8N_WEBHOOK_URL",
    "GOOGLE_SHEETS_ID",
    "GOOGLE_SHEETS_API_KEY",
    "GOOGLE_SHEETS_CREDENTIALS",
    "GOOGLE_SHEETS_RANGE",
)
