# sheetmap/__init__.py
from __future__ import annotations

import uuid
import logging
from contextvars import ContextVar
from typing import Any, Mapping, Optional

from flask import Flask, request
from dotenv import load_dotenv

load_dotenv()

from .config import Config, DEFAULT_SHEETS_TIMEOUT, SECRET_KEYS  # noqa: E402  (reads env populated above)
from .typing_ext import SheetMapFlask
from .errors import register_error_handlers
from .secret_store import SecretProvider

_request_id: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    app = SheetMapFlask(__name__, instance_relative_config=True)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # ---- Logging (dev-friendly)
    _configure_logging(app)
    app.config["SHEETS_TIMEOUT"] = _parse_timeout(app.config.get("SHEETS_TIMEOUT"))

    # ---- Secrets: snapshot once; handlers only read
    app.secrets = SecretProvider.from_config(app.config, SECRET_KEYS)
    register_error_handlers(app)

    @app.before_request
    def _bind_request_id() -> None:
        _request_id.set(request.headers.get("X-Request-ID") or uuid.uuid4().hex)

    # ---- Blueprints
    from .blueprints.functions import functions_bp
    from .blueprints.health import health_bp

    app.register_blueprint(functions_bp)
    app.register_blueprint(health_bp)

    # ---- CLI
    from .cli import register_cli
    register_cli(app)

    return app


def _parse_timeout(raw: Any) -> float:
    """Seconds for Sheets requests; non-numeric or non-positive values use the default."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        logging.getLogger(__name__).warning(
            "SHEETS_TIMEOUT=%r is not a number; using %s", raw, DEFAULT_SHEETS_TIMEOUT
        )
        return DEFAULT_SHEETS_TIMEOUT
    return value if value > 0 else DEFAULT_SHEETS_TIMEOUT


def _configure_logging(app: Flask) -> None:
    """Set a simple, readable log format and DEBUG level in dev."""
    root = logging.getLogger()
    # If gunicorn/uwsgi injects handlers, avoid duplicating
    if not root.handlers:
        handler = logging.StreamHandler()
        fmt = (
            "%(asctime)s %(levelname)s "
            "[rid:%(request_id)s] "
            "%(name)s: %(message)s"
        )
        handler.setFormatter(_RequestIdFormatter(fmt))
        root.addHandler(handler)

    # Level: DEBUG in dev, INFO otherwise
    level = logging.DEBUG if app.config.get("ENV") != "production" else logging.INFO
    root.setLevel(level)
    # google-auth / urllib3 are noisy at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)


class _RequestIdFormatter(logging.Formatter):
    """Inject request-id from contextvars into log records."""
    def format(self, record: logging.LogRecord) -> str:
        rid = _request_id.get()
        # attach attribute for format string
        setattr(record, "request_id", rid or "-")
        return super().format(record)
