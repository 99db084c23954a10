from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..errors import SheetFullError, SheetNotFoundError
from .grid import GridStore
from .row import Row

"""Rows across several sheets sharing the same first column value."""

__all__ = [
    "MultiSheetRecord",
]

logger = logging.getLogger(__name__)


class MultiSheetRecord:
    """One ``Row`` per sheet, all keyed by ``identity`` in their first column.

    Rows are located by identity or, when the identity is new to a sheet,
    allocated on the first row whose first column is empty. Allocation only
    touches the cache; nothing reaches the workbook before ``save()``.
    """

    def __init__(self, store: GridStore, identity: Any, sheet_names: Sequence[str]) -> None:
        if not sheet_names:
            raise ValueError("At least one sheet name is needed.")

        self.identity = identity
        self.allocated: list[str] = []
        self._rows: dict[str, Row] = {}
        for name in sheet_names:
            sheet = store.sheet(name)
            row = Row.find_by_first_column(sheet, identity)
            if row is None:
                row = Row.find_first_empty(sheet)
                if row is None:
                    raise SheetFullError(name)
                row.set_values(identity)
                self.allocated.append(name)
                logger.debug(f"sku={identity} allocated row {row.row_number} in {name}")
            self._rows[name] = row

    @property
    def sheet_names(self) -> list[str]:
        return list(self._rows)

    def row(self, sheet_name: str) -> Row:
        try:
            return self._rows[sheet_name]
        except KeyError:
            raise SheetNotFoundError(
                sheet_name, f'Sheet "{sheet_name}" was not found in multi sheet row.'
            ) from None

    def get(self, sheet_name: str, column: str) -> Any:
        return self.row(sheet_name).get(column)

    def set(self, sheet_name: str, column: str, value: Any) -> None:
        self.row(sheet_name).set(column, value)

    def save(self) -> None:
        for row in self._rows.values():
            row.save()
