# sheetmap/blueprints/functions.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import cast

from flask import Blueprint, current_app, jsonify
from flask.typing import ResponseReturnValue

from sheetmap.errors import (
    APIError,
    ConfigurationMissing,
    EmptyGrid,
    InternalError,
)
from sheetmap.secret_store import NOT_CONFIGURED, SecretProvider
from sheetmap.services.normalizer import normalize_rows, records_as_dicts
from sheetmap.services.sheets import DEFAULT_RANGE, SheetsClient

log = logging.getLogger(__name__)

# Mounted where the map client already calls these functions
functions_bp = Blueprint("functions", __name__, url_prefix="/.netlify/functions")


def _secrets() -> SecretProvider:
    secrets = getattr(current_app, "secrets", None)
    if secrets is None:
        raise ConfigurationMissing("secret provider not installed")
    return cast(SecretProvider, secrets)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@functions_bp.get("/get-maps-key")
def get_maps_key() -> ResponseReturnValue:
    try:
        api_key = _secrets().get("GOOGLE_MAPS_API_KEY")
        if api_key is NOT_CONFIGURED:
            raise ConfigurationMissing(
                "Google Maps API key not configured",
                details={"hint": "Set GOOGLE_MAPS_API_KEY in the environment"},
            )
        resp = jsonify({"apiKey": api_key})
    except APIError:
        raise
    except Exception as e:
        log.exception("Error fetching API key")
        raise InternalError("Failed to fetch API key", details={"message": str(e)}) from e

    resp.headers["Cache-Control"] = "private, max-age=3600"
    return resp


@functions_bp.get("/get-n8n-webhook")
def get_n8n_webhook() -> ResponseReturnValue:
    # unset -> null, not an error
    try:
        url = _secrets().get("N8N_WEBHOOK_URL")
        resp = jsonify({"webhookUrl": None if url is NOT_CONFIGURED else url})
    except APIError:
        raise
    except Exception as e:
        log.exception("Error fetching n8n webhook URL")
        raise InternalError("Failed to fetch n8n webhook URL", details={"message": str(e)}) from e

    resp.headers["Cache-Control"] = "no-cache"
    return resp


@functions_bp.post("/update-map")
def update_map() -> ResponseReturnValue:
    secrets = _secrets()
    sheet_range = secrets.get("GOOGLE_SHEETS_RANGE")
    if sheet_range is NOT_CONFIGURED:
        sheet_range = DEFAULT_RANGE

    try:
        client = SheetsClient.from_secrets(secrets, timeout=current_app.config.get("SHEETS_TIMEOUT", 10.0))
        grid = client.fetch_values(str(sheet_range))
    except APIError:
        raise
    except Exception as e:
        log.exception("Error fetching from Google Sheets")
        raise InternalError("Failed to fetch data from Google Sheets", details={"message": str(e)}) from e

    result = normalize_rows(grid)
    if result.empty_grid:
        raise EmptyGrid()

    log.info(
        "update-map: %d record(s) from %d row(s), header=%s",
        len(result.records), len(grid), result.header_detected,
    )
    resp = jsonify({
        "success": True,
        "data": records_as_dicts(result.records),
        "timestamp": _utc_timestamp(),
        "message": "Data fetched successfully from Google Sheets",
        "detectedHeaders": result.header_detected,
    })
    resp.headers["Cache-Control"] = "no-cache"
    return resp
