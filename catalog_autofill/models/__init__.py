"""Domain models for the catalog autofill tool."""

from .config_models import CatalogConfig, SheetNames
from .error_record import ErrorRecord
from .processing_result import AutofillSummary, ProductResult, ProductStatus
from .product_kind import ProductKind, guess_kind, resolve_kind

__all__ = [
    # Configuration models
    "CatalogConfig",
    "SheetNames",
    # Product models
    "ProductKind",
    "guess_kind",
    "resolve_kind",
    # Result models
    "AutofillSummary",
    "ErrorRecord",
    "ProductResult",
    "ProductStatus",
]
