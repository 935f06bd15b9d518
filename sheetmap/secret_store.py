# sheetmap/secret_store.py
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Iterable, Mapping, Union


class _NotConfigured:
    """Sentinel returned for keys that are missing or blank."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_CONFIGURED"


NOT_CONFIGURED = _NotConfigured()


class SecretProvider:
    """
    Read-only lookup over a snapshot of configuration values.
    get() never raises for unknown keys; callers decide what "not configured" means.
    """

    def __init__(self, values: Mapping[str, Any]):
        self._values = MappingProxyType(dict(values))

    @classmethod
    def from_config(cls, config: Mapping[str, Any], keys: Iterable[str]) -> "SecretProvider":
        return cls({k: config.get(k) for k in keys})

    def get(self, name: str) -> Union[str, _NotConfigured]:
        raw = self._values.get(name)
        if raw is None:
            return NOT_CONFIGURED
        value = str(raw).strip()
        return value if value else NOT_CONFIGURED

    def is_configured(self, name: str) -> bool:
        return self.get(name) is not NOT_CONFIGURED
