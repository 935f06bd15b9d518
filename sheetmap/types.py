# sheetmap/types.py
from typing import Mapping, NamedTuple, Optional, Sequence, Tuple

# A spreadsheet cell: text when present, None when the API omitted it.
Cell = Optional[str]
RawRow = Sequence[Cell]
RawGrid = Sequence[RawRow]

ROLES = ("address", "latitude", "longitude", "visited")

# role name -> column index
ColumnRoleMap = Mapping[str, int]


class AddressRecord(NamedTuple):
    address: str
    latitude: float
    longitude: float
    visited: str


class NormalizeResult(NamedTuple):
    records: Tuple[AddressRecord, ...]
    header_detected: bool
    empty_grid: bool = False
