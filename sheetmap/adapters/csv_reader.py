import csv
from typing import List
from sheetmap.types import RawRow

def read_grid_csv(path: str) -> List[RawRow]:
    """Read a sheet exported as CSV into the same grid shape the Sheets API returns."""
    with open(path, newline="", encoding="utf-8-sig") as f:
        rows: List[RawRow] = []
        for r in csv.reader(f):
            # the API omits trailing empty cells; mirror that so width filtering matches
            while r and r[-1] == "":
                r.pop()
            rows.append(r)
        return rows
