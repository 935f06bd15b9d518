# sheetmap/utils/normalize.py
from __future__ import annotations

import math
import re
from typing import Sequence

from sheetmap.types import Cell

DEFAULT_ADDRESS = ""
DEFAULT_VISITED = "No"
DEFAULT_COORD = 0.0

# sign, digits, optional fraction, optional exponent; ASCII only (no "1_000", no non-Latin digits)
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def cell_at(row: Sequence[Cell], index: int | None) -> Cell:
    """Return the cell at ``index`` or None for unmapped/out-of-range columns."""
    if index is None or index < 0 or index >= len(row):
        return None
    return row[index]


def to_text(cell: Cell, default: str = "") -> str:
    """
    Text field coercion: absent or empty cells take ``default``.
    Whitespace-only text is kept as-is.
    """
    if cell is None:
        return default
    s = str(cell)
    return s if s else default


def to_float(cell: Cell, default: float = DEFAULT_COORD) -> float:
    """
    Numeric field coercion using Python's float() on the trimmed text.

    '40.1' -> 40.1, ' -74.2 ' -> -74.2, '1e3' -> 1000.0
    'N/A', '', None, 'nan', 'inf', '1_000' -> default
    """
    if cell is None:
        return default
    s = str(cell).strip()
    if not s or not _DECIMAL_RE.fullmatch(s):
        return default
    try:
        value = float(s)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(value):
        return default
    return value
