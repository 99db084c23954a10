from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Any

"""ErrorRecord model for the JSON Lines error log.

One record per product that failed during an autofill. ``row`` is the row of
the selection the SKU was read from, or -1 when the failure is not tied to a
row (workbook-level errors). ``sku`` is null when the row held no valid SKU.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        workbook: workbook file name
        sheet: sheet the selection (or the failing lookup) refers to
        row: row number (1-based), -1 when unknown
        sku: product SKU, None when it could not be read
        error_type: error classification in UPPER_SNAKE_CASE
        message: human readable description
    """
    timestamp: str
    workbook: str
    sheet: str
    row: int
    sku: Any
    error_type: str
    message: str

    @staticmethod
    def create(workbook: str, sheet: str, row: int, sku: Any, error_type: str, message: str) -> ErrorRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            workbook=workbook,
            sheet=sheet,
            row=row,
            sku=sku,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
