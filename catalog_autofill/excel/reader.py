from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

"""Bulk, read-only view of the catalog workbook with pandas.

Used by ``--inspect-data`` to print each sheet's header and first records,
and to check up front that the workbook carries every column the autofill
rules read or write. Row 1 is the header; records start on row 2 and rows
whose first column is empty are free slots, not records.
"""

__all__ = [
    "SheetHeaderError",
    "MissingColumnsError",
    "SheetData",
    "read_workbook",
    "normalize_sheet",
]


class SheetHeaderError(Exception):
    """Raised when the header row is missing or empty."""


class MissingColumnsError(Exception):
    """Raised when expected columns are missing in the sheet header."""


@dataclass
class SheetData:
    sheet_name: str
    columns: list[str]
    rows: list[dict[str, Any]]  # column label -> value, free slots excluded


def read_workbook(path: Path, target_sheets: Iterable[str] | None = None) -> dict[str, pd.DataFrame]:
    """Read the workbook returning raw DataFrames keyed by sheet name.

    Parameters
    ----------
    path: workbook path
    target_sheets: restrict to these sheets (None reads every sheet)
    """
    wanted = set(target_sheets) if target_sheets is not None else None
    dfs: dict[str, pd.DataFrame] = {}
    with pd.ExcelFile(path, engine="openpyxl") as xls:
        for name in xls.sheet_names:
            if wanted is not None and str(name) not in wanted:
                continue
            # Header applied later; keep_default_na=False so "NA" stays a string.
            dfs[str(name)] = xls.parse(name, header=None, keep_default_na=False, dtype=object)
    return dfs


def normalize_sheet(
    df: pd.DataFrame,
    sheet_name: str,
    expected_columns: set[str] | None = None,
) -> SheetData:
    """Normalize a raw DataFrame using the first row as header.

    Steps:
    1. Validate the header row exists and is not blank
    2. Validate expected columns subset
    3. Remaining rows with a non-empty first column become records
    """
    if df.shape[0] < 1:
        raise SheetHeaderError(f"sheet '{sheet_name}' lacks a header row")
    columns = ["" if pd.isna(c) else str(c).strip() for c in df.iloc[0].tolist()]
    while columns and columns[-1] == "":
        columns.pop()
    if not columns:
        raise SheetHeaderError(f"sheet '{sheet_name}' has a blank header row")

    if expected_columns is not None:
        missing = expected_columns - set(columns)
        if missing:
            raise MissingColumnsError(f"sheet '{sheet_name}' missing columns: {sorted(missing)}")

    rows: list[dict[str, Any]] = []
    for _, raw in df.iloc[1:].iterrows():
        values = raw.tolist()[: len(columns)]
        first = values[0] if values else ""
        if pd.isna(first) or str(first).strip() == "":
            continue
        rows.append(
            {col: ("" if pd.isna(val) else val) for col, val in zip(columns, values, strict=False) if col}
        )
    return SheetData(sheet_name=sheet_name, columns=columns, rows=rows)
