"""catalog-autofill: marketplace listing autofill for a spreadsheet product catalog.

Reads the canonical book attributes of each selected SKU from the catalog
workbook and fills the derived fields (reference, category, barcode,
marketplace title and description) across the product's sheets.
"""

__version__ = "0.3.0"

__all__ = [
    "cli",
    "config",
    "errors",
    "excel",
    "logging",
    "models",
    "services",
]
