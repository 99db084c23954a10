from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils.cell import range_boundaries
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from ..errors import NamedRangeNotFoundError, SheetNotFoundError

"""Grid store backed by an openpyxl workbook.

The catalog is a workbook whose sheets all carry a header row in row 1 and
one record per following row, keyed by the value of column 1. This module is
the only place that talks to openpyxl; everything above it sees rectangular
ranges of plain values where an empty cell reads as ``""``.
"""

__all__ = [
    "GridStore",
    "GridSheet",
    "cell_text",
]

logger = logging.getLogger(__name__)

HEADER_ROW = 1

# Hard row limit of the xlsx format.
XLSX_MAX_ROWS = 1_048_576


def _read(value: Any) -> Any:
    return "" if value is None else value


def _write(value: Any) -> Any:
    return None if value == "" else value


def cell_text(value: Any) -> str:
    """Return the text a user would see in a cell for ``value``.

    Integral floats lose their ``.0`` so that ``12.0`` and ``"12"`` compare
    equal; datetimes render as ``dd/mm/yyyy``.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if hasattr(value, "strftime"):
        return value.strftime("%d/%m/%Y")
    return str(value).strip()


class GridSheet:
    """A single worksheet seen as a header-keyed grid."""

    def __init__(self, worksheet: Worksheet, max_rows: int | None = None) -> None:
        self._ws = worksheet
        self._max_rows = max_rows

    @property
    def name(self) -> str:
        return self._ws.title

    @property
    def worksheet(self) -> Worksheet:
        return self._ws

    @property
    def max_row(self) -> int:
        """Last row of the sheet's used range."""
        return self._ws.max_row

    @property
    def capacity(self) -> int:
        """Number of rows the sheet may grow to, header included."""
        return self._max_rows or XLSX_MAX_ROWS

    @property
    def max_column(self) -> int:
        """Last column holding a header label."""
        last = 0
        for idx, value in enumerate(self.header_values(all_columns=True), start=1):
            if value != "":
                last = idx
        return last

    def header_values(self, all_columns: bool = False) -> list[Any]:
        width = self._ws.max_column if all_columns else self.max_column
        if width == 0:
            return []
        return self.get_values(HEADER_ROW, 1, 1, width)[0]

    def get_values(self, row: int, column: int, n_rows: int, n_columns: int) -> list[list[Any]]:
        out: list[list[Any]] = []
        for line in self._ws.iter_rows(
            min_row=row,
            max_row=row + n_rows - 1,
            min_col=column,
            max_col=column + n_columns - 1,
            values_only=True,
        ):
            out.append([_read(v) for v in line])
        return out

    def set_values(self, row: int, column: int, values: list[list[Any]]) -> None:
        for r_off, line in enumerate(values):
            for c_off, value in enumerate(line):
                self._ws.cell(row=row + r_off, column=column + c_off).value = _write(value)

    def italic_flags(self, row: int, n_columns: int) -> list[bool]:
        flags = []
        for col in range(1, n_columns + 1):
            font = self._ws.cell(row=row, column=col).font
            flags.append(bool(font is not None and font.i))
        return flags

    def column_values(self, column: int = 1) -> list[Any]:
        """Values of ``column`` from row 1 to ``max_row``."""
        if self.max_row == 0:
            return []
        return [line[0] for line in self.get_values(1, column, self.max_row, 1)]

    def find_first(self, value: Any, column: int = 1, start_row: int = HEADER_ROW + 1) -> int | None:
        """Return the first row at or after ``start_row`` whose cell equals ``value``."""
        target = cell_text(value)
        if target == "":
            return None
        for idx, cell in enumerate(self.column_values(column), start=1):
            if idx < start_row:
                continue
            if cell_text(cell) == target:
                return idx
        return None


class GridStore:
    """Workbook-level operations: sheet lookup, named ranges, selection, save."""

    def __init__(self, workbook: Workbook, path: Path | None = None, max_rows: int | None = None) -> None:
        self._wb = workbook
        self.path = path
        self.max_rows = max_rows

    @classmethod
    def open(cls, path: Path, max_rows: int | None = None) -> GridStore:
        logger.debug(f"Loading workbook: {path}")
        wb = openpyxl.load_workbook(path)
        return cls(wb, path, max_rows)

    @property
    def workbook(self) -> Workbook:
        return self._wb

    @property
    def sheet_names(self) -> list[str]:
        return list(self._wb.sheetnames)

    def sheet(self, name: str) -> GridSheet:
        if name not in self._wb.sheetnames:
            raise SheetNotFoundError(name)
        return GridSheet(self._wb[name], self.max_rows)

    def find_sheet(self, prefix: str) -> GridSheet | None:
        for name in self._wb.sheetnames:
            if name.startswith(prefix):
                return GridSheet(self._wb[name], self.max_rows)
        return None

    @property
    def active_sheet(self) -> GridSheet:
        return GridSheet(self._wb.active, self.max_rows)

    def activate(self, sheet: GridSheet, row: int | None = None) -> None:
        """Make ``sheet`` the active sheet and optionally select ``A{row}``."""
        for ws in self._wb.worksheets:
            ws.sheet_view.tabSelected = ws is sheet.worksheet
        self._wb.active = self._wb.worksheets.index(sheet.worksheet)
        if row is not None:
            coord = f"A{row}"
            selection = sheet.worksheet.sheet_view.selection[0]
            selection.activeCell = coord
            selection.sqref = coord

    def active_rows(self) -> list[int]:
        """Row numbers covered by the active sheet's selection, in order, without duplicates."""
        ws = self._wb.active
        rows: list[int] = []
        for selection in ws.sheet_view.selection:
            sqref = selection.sqref or selection.activeCell
            if not sqref:
                continue
            for part in str(sqref).split():
                _, min_row, _, max_row = range_boundaries(part)
                if min_row is None or max_row is None:
                    continue
                for r in range(min_row, max_row + 1):
                    if r not in rows:
                        rows.append(r)
        return rows

    def named_range(self, name: str) -> list[list[Any]]:
        defined = self._wb.defined_names.get(name)
        if defined is None:
            raise NamedRangeNotFoundError(name)
        values: list[list[Any]] = []
        for title, coord in defined.destinations:
            ws = self._wb[title]
            min_col, min_row, max_col, max_row = range_boundaries(coord.replace("$", ""))
            values.extend(
                GridSheet(ws).get_values(min_row, min_col, max_row - min_row + 1, max_col - min_col + 1)
            )
        return values

    def named_mapping(self, name: str) -> dict[Any, Any]:
        """Map the first column of a two-column named range to its second column."""
        mapping: dict[Any, Any] = {}
        for line in self.named_range(name):
            if len(line) != 2:
                raise ValueError(f'Cannot map named range "{name}": it must be exactly 2 columns wide.')
            mapping[line[0]] = line[1]
        return mapping

    def save(self, path: Path | None = None) -> Path:
        target = path or self.path
        if target is None:
            raise ValueError("No path to save the workbook to.")
        self._wb.save(target)
        logger.debug(f"Workbook saved: {target}")
        return target
