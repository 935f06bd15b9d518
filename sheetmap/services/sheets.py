# sheetmap/services/sheets.py
"""
Minimal Google Sheets v4 values client.

Two auth modes, tried in order:
  1. service account JSON (works with private sheets)
  2. API key (sheet must be shared publicly)
"""
from __future__ import annotations

import json
import logging
import urllib.parse
from typing import Any, Dict, List, Optional

import requests
from google.auth.exceptions import GoogleAuthError
from google.auth.transport.requests import AuthorizedSession
from google.oauth2 import service_account

from sheetmap.errors import ConfigurationMissing, UpstreamFetchFailure
from sheetmap.secret_store import NOT_CONFIGURED, SecretProvider
from sheetmap.types import RawGrid

log = logging.getLogger(__name__)

SHEETS_API = "https://sheets.googleapis.com/v4/spreadsheets"
READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
DEFAULT_RANGE = "Sheet1"


def _service_account_session(credentials_json: str) -> Optional[requests.Session]:
    """Return an authorized session, or None if the JSON is unusable."""
    try:
        info = json.loads(credentials_json)
    except ValueError as e:
        log.error("Failed to parse service account credentials: %s", e)
        return None
    if not isinstance(info, dict) or not (info.get("client_email") and info.get("private_key")):
        log.warning("Service account credentials lack client_email/private_key; ignoring")
        return None
    try:
        creds = service_account.Credentials.from_service_account_info(info, scopes=[READONLY_SCOPE])
    except ValueError as e:
        log.error("Invalid service account credentials: %s", e)
        return None
    return AuthorizedSession(creds)


def _upstream_message(resp: requests.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or f"HTTP {resp.status_code}"
    err = body.get("error") if isinstance(body, dict) else None
    if isinstance(err, dict) and err.get("message"):
        return str(err["message"])
    return f"HTTP {resp.status_code}"


class SheetsClient:
    def __init__(
        self,
        spreadsheet_id: str,
        *,
        session: Optional[requests.Session] = None,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
    ):
        if session is None and not api_key:
            raise ConfigurationMissing(
                "Missing authentication",
                details={"hint": "Set GOOGLE_SHEETS_API_KEY or GOOGLE_SHEETS_CREDENTIALS"},
            )
        self.spreadsheet_id = spreadsheet_id
        self.session = session
        self.api_key = api_key
        self.timeout = timeout

    @property
    def auth_mode(self) -> str:
        return "service_account" if self.session is not None else "api_key"

    @classmethod
    def from_secrets(cls, secrets: SecretProvider, *, timeout: float = 10.0) -> "SheetsClient":
        """Build a client from configured secrets; raises ConfigurationMissing."""
        spreadsheet_id = secrets.get("GOOGLE_SHEETS_ID")
        if spreadsheet_id is NOT_CONFIGURED:
            raise ConfigurationMissing(
                "Missing Google Sheets configuration",
                details={"hint": "Set GOOGLE_SHEETS_ID"},
            )

        session = None
        credentials_json = secrets.get("GOOGLE_SHEETS_CREDENTIALS")
        if credentials_json is not NOT_CONFIGURED:
            session = _service_account_session(str(credentials_json))

        api_key = secrets.get("GOOGLE_SHEETS_API_KEY")
        return cls(
            str(spreadsheet_id),
            session=session,
            api_key=str(api_key) if api_key is not NOT_CONFIGURED else None,
            timeout=timeout,
        )

    def fetch_values(self, sheet_range: str = DEFAULT_RANGE) -> RawGrid:
        """GET spreadsheets.values for ``sheet_range``; a sheet with no values yields []."""
        url = f"{SHEETS_API}/{urllib.parse.quote(self.spreadsheet_id, safe='')}/values/{urllib.parse.quote(sheet_range, safe='')}"
        params: Dict[str, Any] = {}
        try:
            if self.session is not None:
                resp = self.session.get(url, params=params, timeout=self.timeout)
            else:
                params["key"] = self.api_key
                resp = requests.get(url, params=params, timeout=self.timeout)
        except (requests.RequestException, GoogleAuthError) as e:
            # GoogleAuthError: token refresh failed (revoked key, disabled account)
            log.error("Sheets request failed: %s", e)
            raise UpstreamFetchFailure(details={"upstream": str(e)}) from e

        if resp.status_code != 200:
            message = _upstream_message(resp)
            log.error("Sheets returned %s: %s", resp.status_code, message)
            raise UpstreamFetchFailure(details={"upstream": message, "status": resp.status_code})

        try:
            body = resp.json()
        except ValueError as e:
            raise UpstreamFetchFailure(details={"upstream": "invalid JSON from Sheets API"}) from e

        values: List[List[Any]] = body.get("values") or []
        log.debug("fetched %d row(s) from %s (%s)", len(values), sheet_range, self.auth_mode)
        return [[None if c is None else str(c) for c in row] for row in values]
