# sheetmap/errors.py
from __future__ import annotations
from flask import jsonify
from werkzeug.exceptions import MethodNotAllowed as _WerkzeugMethodNotAllowed

class APIError(Exception):
    status_code = 400
    error = "APIError"
    def __init__(self, message: str = "", *, details: dict | None = None, status_code: int | None = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
        self.message = message or self.error
        self.details = details

    def to_response(self):
        payload = {"error": {"type": self.__class__.__name__, "message": self.message}}
        if self.details:
            payload["error"]["details"] = self.details
        return jsonify(payload), self.status_code

class NotFound(APIError):
    status_code = 404
    error = "NotFound"

class MethodNotAllowed(APIError):
    status_code = 405
    error = "Method Not Allowed"

class InternalError(APIError):
    status_code = 500
    error = "InternalError"

class ConfigurationMissing(InternalError):
    """A required key/identifier is not set in the environment."""
    error = "Configuration missing"

class UpstreamFetchFailure(InternalError):
    """Google Sheets rejected or failed the request; no retry is attempted."""
    error = "Failed to fetch data from Google Sheets"

class EmptyGrid(NotFound):
    error = "No data found in spreadsheet"


def register_error_handlers(app):
    # Catch our APIError family
    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        return err.to_response()

    # Routing-level 405s get the same JSON envelope as handler-raised ones
    @app.errorhandler(_WerkzeugMethodNotAllowed)
    def _method_not_allowed(e: _WerkzeugMethodNotAllowed):
        return MethodNotAllowed().to_response()
