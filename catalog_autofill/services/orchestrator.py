from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from ..errors import CatalogError, InvalidIdentityError
from ..excel.grid import GridSheet, GridStore
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import CatalogConfig
from ..models.processing_result import AutofillSummary, ProductResult, ProductStatus
from .product import PRODUCT_TYPE_COLUMN, build_rule_set, open_product, parse_sku, resolve_product_kind
from .progress import ProgressTracker

"""Service orchestration for autofill runs.

For each row of the selection the SKU is read from column 1, the product
kind resolved, the product's rows located (or allocated), the kind's rules
applied and the rows saved. Failures are isolated per product: a data error
is logged and recorded, and the run moves on to the next SKU. Programming
errors (e.g. a rule naming an unknown transform) propagate and abort.

The workbook file is written once, after the whole selection.
"""

__all__ = [
    "ProcessingError",
    "read_selection_identities",
    "autofill_product",
    "autofill_selection",
]

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error preventing a run from starting (nothing selected, ...)."""


def read_selection_identities(
    sheet: GridSheet, rows: Iterable[int]
) -> list[tuple[int, int | InvalidIdentityError]]:
    """Read the SKU in column 1 of each selected row.

    The header row is skipped. Invalid cells are returned as the error
    instead of raising so that the rest of the selection can proceed.
    """
    out: list[tuple[int, int | InvalidIdentityError]] = []
    for row_number in rows:
        if row_number <= 1:
            continue
        value = sheet.get_values(row_number, 1, 1, 1)[0][0]
        try:
            out.append((row_number, parse_sku(value, row_number)))
        except InvalidIdentityError as e:
            out.append((row_number, e))
    return out


def autofill_product(
    store: GridStore,
    sku: Any,
    config: CatalogConfig,
    active_sheet_name: str | None,
    overwrite: bool = False,
    row_number: int = -1,
) -> ProductResult:
    """Resolve, fill and save a single product.

    Raises:
        CatalogError: on any data error; nothing is saved in that case
    """
    kind, guessed = resolve_product_kind(store, sku, config, active_sheet_name)
    record = open_product(store, sku, kind, config)
    if guessed:
        logger.info(f"sku={sku} product type guessed as {kind.value} from sheet {active_sheet_name}")
        record.set(config.sheets.basic, PRODUCT_TYPE_COLUMN, kind.value)

    filled = build_rule_set(kind, store, config).apply(record, overwrite=overwrite)
    changed = bool(filled or guessed or record.allocated)
    record.save()

    for sheet_name, column in filled:
        logger.debug(f"sku={sku} filled {sheet_name}.{column}")
    return ProductResult(
        row_number=row_number,
        sku=sku,
        status=ProductStatus.SAVED if changed else ProductStatus.UNCHANGED,
        filled_fields=filled,
        kind=kind.value,
    )


def autofill_selection(
    store: GridStore,
    config: CatalogConfig,
    rows: Iterable[int] | None = None,
    sheet_name: str | None = None,
    overwrite: bool = False,
    error_log: ErrorLogBuffer | None = None,
) -> AutofillSummary:
    """Autofill every product of a selection.

    Args:
        store: open workbook
        config: run configuration
        rows: selected rows; defaults to the workbook's active selection
        sheet_name: sheet the rows refer to; defaults to the active sheet
        overwrite: regenerate fields that already hold a value
        error_log: buffer receiving one record per failed product

    Raises:
        ProcessingError: nothing usable is selected
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer(config.error_log_dir)
    workbook_name = store.path.name if store.path is not None else "<memory>"

    sheet = store.sheet(sheet_name) if sheet_name else store.active_sheet
    selected = list(rows) if rows is not None else store.active_rows()
    identities = read_selection_identities(sheet, selected)
    if not identities:
        raise ProcessingError(f"No product rows selected in {sheet.name}.")

    logger.info(f"Autofilling {len(identities)} product(s) from {sheet.name} (overwrite={overwrite})")

    results: list[ProductResult] = []
    with ProgressTracker(len(identities)) as progress:
        for row_number, sku in identities:
            progress.start_item(f"row {row_number}")
            try:
                if isinstance(sku, InvalidIdentityError):
                    raise sku
                result = autofill_product(
                    store, sku, config, sheet.name, overwrite=overwrite, row_number=row_number
                )
            except CatalogError as e:
                logger.error(f"row={row_number} {e}")
                error_log.append(
                    ErrorRecord.create(
                        workbook=workbook_name,
                        sheet=e.sheet_name or sheet.name,
                        row=row_number,
                        sku=None if isinstance(sku, InvalidIdentityError) else sku,
                        error_type=e.error_type,
                        message=str(e),
                    )
                )
                result = ProductResult(
                    row_number=row_number,
                    sku=None if isinstance(sku, InvalidIdentityError) else sku,
                    status=ProductStatus.FAILED,
                    error=str(e),
                    error_type=e.error_type,
                )
            else:
                logger.info(
                    f"row={row_number} sku={sku} kind={result.kind} "
                    f"filled={len(result.filled_fields)} status={result.status.value}"
                )
            results.append(result)
            progress.finish_item()
            progress.set_postfix(
                success=sum(1 for r in results if r.ok),
                failed=sum(1 for r in results if not r.ok),
            )

    saved = any(r.status is ProductStatus.SAVED for r in results)
    if saved and store.path is not None:
        store.save()

    log_path = error_log.flush()
    if log_path is not None:
        logger.warning(f"Error log written to {log_path}")

    return AutofillSummary(
        start_time=start_time,
        end_time=datetime.now(UTC),
        results=results,
        workbook_saved=saved and store.path is not None,
    )
