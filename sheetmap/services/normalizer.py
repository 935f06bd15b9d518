# sheetmap/services/normalizer.py
"""
Turn a raw Google Sheets value grid into AddressRecords for the map.

The sheet layout is not fixed. If the first row looks like labels (at least
three of address/lat/long/"picture taken" recognized) it is treated as a
header and used to locate columns; otherwise the grid is read positionally as
Address, Latitude, Longitude, Visited. A data row of coincidental words can be
misread as a header; that heuristic is intentional and pinned by tests.

Nothing in here raises on bad data: short rows are dropped and bad values
fall back to field defaults.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, List, Optional, Sequence

from sheetmap.types import (
    AddressRecord,
    Cell,
    ColumnRoleMap,
    NormalizeResult,
    ROLES,
    RawGrid,
    RawRow,
)
from sheetmap.utils.normalize import (
    DEFAULT_ADDRESS,
    DEFAULT_VISITED,
    cell_at,
    to_float,
    to_text,
)

log = logging.getLogger(__name__)

MIN_ROW_WIDTH = 3
MIN_HEADER_ROLES = 3

# Address, Latitude, Longitude, Visited
POSITIONAL_ROLES: ColumnRoleMap = MappingProxyType({role: i for i, role in enumerate(ROLES)})


def classify_header(cell: Cell) -> Optional[str]:
    """Return the role a header label names, or None. First matching rule wins."""
    original = (cell or "").strip()
    lowered = original.lower()
    if "Address" in original or "address" in lowered or "location" in lowered:
        return "address"
    if "lat" in lowered:
        return "latitude"
    if "long" in lowered or "lng" in lowered:
        return "longitude"
    if "picture taken" in lowered:
        return "visited"
    return None


def detect_header(first_row: RawRow) -> Optional[ColumnRoleMap]:
    """
    Build a ColumnRoleMap from the first row, or None when it is not a header.

    The first column claiming a role keeps it; later columns for the same role
    are ignored.
    """
    mapping: Dict[str, int] = {}
    for index, cell in enumerate(first_row):
        role = classify_header(cell)
        if role is None or role in mapping:
            continue
        mapping[role] = index
    if len(mapping) < MIN_HEADER_ROLES:
        return None
    return MappingProxyType(mapping)


def filter_rows(rows: Sequence[RawRow]) -> List[RawRow]:
    return [row for row in rows if len(row) >= MIN_ROW_WIDTH]


def convert_row(row: RawRow, roles: ColumnRoleMap) -> AddressRecord:
    return AddressRecord(
        address=to_text(cell_at(row, roles.get("address")), DEFAULT_ADDRESS),
        latitude=to_float(cell_at(row, roles.get("latitude"))),
        longitude=to_float(cell_at(row, roles.get("longitude"))),
        visited=to_text(cell_at(row, roles.get("visited")), DEFAULT_VISITED),
    )


def normalize_rows(grid: RawGrid) -> NormalizeResult:
    """
    Normalize a sheet grid. Pure: no I/O, no state kept between calls.

    An empty grid is reported through ``empty_grid`` rather than as a zero
    record result, so callers can answer 404 for "no data in sheet".
    """
    if not grid:
        return NormalizeResult(records=(), header_detected=False, empty_grid=True)

    header = detect_header(grid[0])
    if header is not None:
        roles, data_rows = header, grid[1:]
    else:
        roles, data_rows = POSITIONAL_ROLES, grid

    kept = filter_rows(data_rows)
    dropped = len(data_rows) - len(kept)
    if dropped:
        log.debug("dropped %d row(s) narrower than %d cells", dropped, MIN_ROW_WIDTH)

    records = tuple(convert_row(row, roles) for row in kept)
    return NormalizeResult(records=records, header_detected=header is not None)


def records_as_dicts(records: Sequence[AddressRecord]) -> List[dict]:
    """JSON-ready rows in the shape the map client reads."""
    return [r._asdict() for r in records]
