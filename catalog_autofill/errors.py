from __future__ import annotations

"""Error taxonomy for the catalog autofill tool.

Data errors (bad selection, missing columns, full sheets, unknown product
types) derive from ``CatalogError``. They are reported to the user and the
batch continues with the next SKU.

``UnknownTransformError`` is a configuration bug in the rule definitions and
deliberately does not derive from ``CatalogError`` so it aborts the command.
"""

__all__ = [
    "CatalogError",
    "InvalidIdentityError",
    "SheetFullError",
    "ColumnNotFoundError",
    "LockedColumnError",
    "SheetNotFoundError",
    "NamedRangeNotFoundError",
    "RowNotFoundError",
    "TypeUndeterminedError",
    "TypeUnsupportedError",
    "UnknownTransformError",
]


class CatalogError(Exception):
    """Base class for user-input and data errors."""

    error_type = "CATALOG_ERROR"
    sheet_name: str | None = None


class InvalidIdentityError(CatalogError):
    error_type = "INVALID_IDENTITY"

    def __init__(self, row_number: int) -> None:
        super().__init__(f"Row {row_number} does not contain a valid SKU in its first column.")
        self.row_number = row_number


class SheetFullError(CatalogError):
    error_type = "SHEET_FULL"

    def __init__(self, sheet_name: str) -> None:
        super().__init__(f"The sheet {sheet_name} is full.")
        self.sheet_name = sheet_name


class ColumnNotFoundError(CatalogError):
    error_type = "COLUMN_NOT_FOUND"

    def __init__(self, sheet_name: str, column: str) -> None:
        super().__init__(f'A column named "{column}" in the sheet {sheet_name} wasn\'t found.')
        self.sheet_name = sheet_name
        self.column = column


class LockedColumnError(CatalogError):
    """Raised when setting a column whose cells are styled as auto-generated."""

    error_type = "LOCKED_COLUMN"

    def __init__(self, sheet_name: str, column: str) -> None:
        super().__init__(f'Cannot change "{column}" in the sheet {sheet_name}: the column is in italic.')
        self.sheet_name = sheet_name
        self.column = column


class SheetNotFoundError(CatalogError):
    error_type = "SHEET_NOT_FOUND"

    def __init__(self, sheet_name: str, message: str | None = None) -> None:
        super().__init__(message or f'Sheet "{sheet_name}" does not exist.')
        self.sheet_name = sheet_name


class NamedRangeNotFoundError(CatalogError):
    error_type = "NAMED_RANGE_NOT_FOUND"

    def __init__(self, name: str) -> None:
        super().__init__(f'Named range "{name}" does not exist in the workbook.')
        self.name = name


class RowNotFoundError(CatalogError):
    error_type = "ROW_NOT_FOUND"

    def __init__(self, sheet_name: str, value: object) -> None:
        super().__init__(
            f'Could not find a row with the value "{value}" in the first column of {sheet_name}.'
        )
        self.sheet_name = sheet_name
        self.value = value


class TypeUndeterminedError(CatalogError):
    error_type = "TYPE_UNDETERMINED"

    def __init__(self, identity: object) -> None:
        super().__init__(
            f"The product type of SKU {identity} is empty and could not be guessed "
            "from the active sheet."
        )
        self.identity = identity


class TypeUnsupportedError(CatalogError):
    error_type = "TYPE_UNSUPPORTED"

    def __init__(self, identity: object, product_type: str) -> None:
        super().__init__(f'The product type "{product_type}" of SKU {identity} is not supported.')
        self.identity = identity
        self.product_type = product_type


class UnknownTransformError(Exception):
    """Raised when an attribute rule names a transform with no implementation."""

    error_type = "UNKNOWN_TRANSFORM"

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown transform {name}.")
        self.name = name
