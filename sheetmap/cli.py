# sheetmap/cli.py
from __future__ import annotations

import json
from typing import Optional

import click
from flask import Flask

from sheetmap.adapters.csv_reader import read_grid_csv
from sheetmap.errors import APIError
from sheetmap.secret_store import NOT_CONFIGURED
from sheetmap.services.normalizer import normalize_rows, records_as_dicts
from sheetmap.services.sheets import DEFAULT_RANGE, SheetsClient
from sheetmap.types import NormalizeResult


def _dump(result: NormalizeResult) -> str:
    return json.dumps(
        {"detectedHeaders": result.header_detected, "data": records_as_dicts(result.records)},
        indent=2,
    )


def register_cli(app: Flask) -> None:
    @app.cli.command("fetch-sheet")
    @click.option("--range", "sheet_range", default=None, help="Sheet range, e.g. Sheet1!A:D")
    def fetch_sheet_cmd(sheet_range: Optional[str]):
        """Fetch the configured sheet and print the normalized records."""
        secrets = getattr(app, "secrets")
        configured = secrets.get("GOOGLE_SHEETS_RANGE")
        rng = sheet_range or (DEFAULT_RANGE if configured is NOT_CONFIGURED else str(configured))
        try:
            client = SheetsClient.from_secrets(secrets, timeout=app.config.get("SHEETS_TIMEOUT", 10.0))
            grid = client.fetch_values(rng)
        except APIError as e:
            click.echo(f"{e.message}: {e.details or ''}", err=True)
            raise SystemExit(1)
        result = normalize_rows(grid)
        if result.empty_grid:
            click.echo("No data found in spreadsheet", err=True)
            raise SystemExit(1)
        click.echo(_dump(result))

    @app.cli.command("normalize-csv")
    @click.argument("path", type=click.Path(exists=True, dir_okay=False))
    def normalize_csv_cmd(path: str):
        """Normalize a CSV export of the sheet and print the records."""
        result = normalize_rows(read_grid_csv(path))
        if result.empty_grid:
            click.echo("No data found in file", err=True)
            raise SystemExit(1)
        click.echo(_dump(result))
