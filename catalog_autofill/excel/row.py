from __future__ import annotations

from typing import Any

from ..errors import ColumnNotFoundError, LockedColumnError
from .grid import HEADER_ROW, GridSheet

"""Header-keyed row abstraction.

A ``Row`` caches one data row of a sheet together with a snapshot of the
sheet's header row, so columns are addressed by their label. Changes stay in
memory until ``save()`` writes the whole row back in a single call.

Cells in italic are assumed to be auto-generated (formulas spilling from the
header row) and can neither be set nor overwritten: ``save()`` writes them
back blank, except for cells holding their own formula, which are kept.
"""

__all__ = [
    "Row",
]


def _is_formula(value: Any) -> bool:
    return isinstance(value, str) and value.startswith("=")


class Row:
    def __init__(self, sheet: GridSheet, row_number: int) -> None:
        if row_number <= HEADER_ROW:
            raise ValueError("The first row cannot be used. It should be reserved for the header row.")

        self._sheet = sheet
        self.row_number = row_number
        headers = sheet.header_values()
        self._index: dict[Any, int] = {}
        for idx, label in enumerate(headers):
            # first occurrence wins on duplicated labels
            self._index.setdefault(label, idx)
        width = len(headers)
        self._values: list[Any] = sheet.get_values(row_number, 1, 1, width)[0] if width else []
        self._locked: list[bool] = sheet.italic_flags(row_number, width)
        self._dirty = False

    @property
    def sheet_name(self) -> str:
        return self._sheet.name

    @property
    def columns(self) -> list[Any]:
        return list(self._index)

    @property
    def dirty(self) -> bool:
        return self._dirty

    def _column_index(self, column: str) -> int:
        try:
            return self._index[column]
        except KeyError:
            raise ColumnNotFoundError(self._sheet.name, column) from None

    def is_locked(self, column: str) -> bool:
        return self._locked[self._column_index(column)]

    def get(self, column: str) -> Any:
        """Return the cached value of ``column``."""
        return self._values[self._column_index(column)]

    def set(self, column: str, value: Any) -> None:
        """Change the cached value of ``column`` and mark the row dirty."""
        idx = self._column_index(column)
        if self._locked[idx]:
            raise LockedColumnError(self._sheet.name, column)
        self._values[idx] = value
        self._dirty = True

    def set_values(self, *values: Any) -> None:
        """Overwrite the leading cells of the row, ignoring the locked flags."""
        if len(values) > len(self._values):
            raise ValueError("There are more values to set than columns in the row.")
        for idx, value in enumerate(values):
            self._values[idx] = value
        self._dirty = True

    def save(self) -> None:
        """Write the cached values back to the sheet if anything changed."""
        if not self._dirty:
            return
        values = [
            v if not locked or _is_formula(v) else ""
            for v, locked in zip(self._values, self._locked, strict=True)
        ]
        self._sheet.set_values(self.row_number, 1, [values])
        self._dirty = False

    @classmethod
    def find_by_first_column(cls, sheet: GridSheet, value: Any) -> Row | None:
        """Return the first row whose first column matches ``value``, if any."""
        row_number = sheet.find_first(value)
        if row_number is None:
            return None
        return cls(sheet, row_number)

    @classmethod
    def find_first_empty(cls, sheet: GridSheet) -> Row | None:
        """Return the first row whose first column is empty, if the sheet has one.

        Rows holding default values in other columns (checkboxes, styled
        formula cells) still count as empty. Past the used range the sheet
        grows by one row until it reaches its capacity.
        """
        last = min(sheet.max_row, sheet.capacity)
        for idx, value in enumerate(sheet.column_values(1)[:last], start=1):
            if idx <= HEADER_ROW:
                continue
            if value == "":
                return cls(sheet, idx)
        if last < sheet.capacity:
            return cls(sheet, max(last + 1, HEADER_ROW + 1))
        return None

    def __repr__(self) -> str:
        return f"Row(sheet={self._sheet.name!r}, row_number={self.row_number}, dirty={self._dirty})"
