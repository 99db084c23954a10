from __future__ import annotations

from enum import Enum

from ..errors import TypeUndeterminedError, TypeUnsupportedError
from .config_models import SheetNames

"""ProductKind enum and the mapping from the raw "Tipo de produto" cell.

Each kind has its own source sheet and its own autofill rule set. A product
whose type cell is empty gets its kind guessed from the sheet the user was on
when the command ran.
"""

__all__ = [
    "ProductKind",
    "resolve_kind",
    "guess_kind",
]


class ProductKind(Enum):
    """Supported product kinds, valued by the label used in the type column.

    - PRINTED: printed matter (books, magazines) described in the printed sheet
    """
    PRINTED = "Impresso"

    def source_sheet(self, sheets: SheetNames) -> str:
        return {ProductKind.PRINTED: sheets.printed}[self]


def resolve_kind(raw: object, identity: object) -> ProductKind:
    """Map a declared type to a ProductKind (case and padding insensitive).

    Raises:
        TypeUndeterminedError: ``raw`` is empty
        TypeUnsupportedError: ``raw`` names no supported kind
    """
    text = "" if raw is None else str(raw).strip()
    if text == "":
        raise TypeUndeterminedError(identity)
    for kind in ProductKind:
        if kind.value.casefold() == text.casefold():
            return kind
    raise TypeUnsupportedError(identity, text)


def guess_kind(active_sheet_name: str | None, sheets: SheetNames) -> ProductKind | None:
    """Guess the kind from the active sheet; ``None`` when it is not a source sheet."""
    if not active_sheet_name:
        return None
    for kind in ProductKind:
        if kind.source_sheet(sheets) == active_sheet_name:
            return kind
    return None
