from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

"""Result models for autofill runs.

``ProductResult`` reports one SKU; ``AutofillSummary`` aggregates a whole
selection and feeds the SUMMARY line and the exit code.
"""

__all__ = [
    "ProductStatus",
    "ProductResult",
    "AutofillSummary",
]


class ProductStatus(Enum):
    """Outcome of one product.

    State transitions: unresolved → type resolved → fields filled → (saved | failed)
    """
    SAVED = "saved"
    UNCHANGED = "unchanged"  # every target already filled
    FAILED = "failed"


@dataclass(frozen=True)
class ProductResult:
    row_number: int  # row of the selection the SKU was read from
    sku: Any  # None when the row held no valid SKU
    status: ProductStatus
    filled_fields: list[tuple[str, str]] = field(default_factory=list)  # (sheet, column)
    kind: str | None = None
    error: str | None = None
    error_type: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not ProductStatus.FAILED


@dataclass(frozen=True)
class AutofillSummary:
    """Aggregated results of an autofill over a selection."""
    start_time: datetime
    end_time: datetime
    results: list[ProductResult] = field(default_factory=list)
    workbook_saved: bool = False

    @property
    def total(self) -> int:
        return len(self.results)

    @property
    def success(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.results if not r.ok)

    @property
    def filled_fields(self) -> int:
        return sum(len(r.filled_fields) for r in self.results)

    @property
    def elapsed_seconds(self) -> float:
        return (self.end_time - self.start_time).total_seconds()
