from __future__ import annotations

import logging

from ..errors import RowNotFoundError, SheetNotFoundError
from ..excel.grid import GridSheet, GridStore, cell_text

"""Jump commands: move the workbook's active cell to a record or a sheet."""

__all__ = [
    "jump_to_row",
    "jump_to_sheet",
]

logger = logging.getLogger(__name__)


def jump_to_row(store: GridStore, value: str) -> tuple[GridSheet, int]:
    """Select the first row of the active sheet whose first column is ``value``.

    Raises:
        ValueError: ``value`` is empty
        RowNotFoundError: no row matches
    """
    if value == "":
        raise ValueError("A value to search for is required.")
    sheet = store.active_sheet
    row = sheet.find_first(value)
    if row is None:
        raise RowNotFoundError(sheet.name, value)
    store.activate(sheet, row)
    logger.info(f"Jumped to {sheet.name}!A{row}")
    return sheet, row


def jump_to_sheet(store: GridStore, prefix: str) -> tuple[GridSheet, int | None]:
    """Activate the first sheet whose name starts with ``prefix``.

    When the first row of the current selection has a value in its first
    column and the target sheet has a row with the same value, that row is
    selected as well.

    Raises:
        ValueError: ``prefix`` is empty
        SheetNotFoundError: no sheet name starts with ``prefix``
    """
    if prefix == "":
        raise ValueError("At least part of a sheet name is required.")
    target = store.find_sheet(prefix)
    if target is None:
        raise SheetNotFoundError(prefix, f'Could not find a sheet starting with "{prefix}".')

    source = store.active_sheet
    active_rows = store.active_rows()
    match: int | None = None
    if active_rows:
        text = cell_text(source.get_values(active_rows[0], 1, 1, 1)[0][0])
        if text != "":
            match = target.find_first(text, start_row=1)

    store.activate(target, match)
    logger.info(f"Jumped to {target.name}" + (f"!A{match}" if match else ""))
    return target, match
