from __future__ import annotations

import logging
import math
import re
from collections.abc import Callable
from datetime import date, datetime
from typing import Any
from urllib.parse import quote
from zoneinfo import ZoneInfo

from ..errors import InvalidIdentityError, TypeUndeterminedError
from ..excel.grid import GridStore, cell_text
from ..excel.record import MultiSheetRecord
from ..excel.row import Row
from ..models.config_models import CatalogConfig
from ..models.product_kind import ProductKind, guess_kind, resolve_kind
from .attributes import AttributeFormatter, parse_csv
from .autofill import AutofillRuleSet
from .text import format_list, uncapitalize

"""Product records and the autofill rules for printed books.

A product spans three sheets sharing its SKU in column 1: the basic sheet
(type, reference, category, barcode), the printed sheet holding the
canonical book attributes, and the marketplace sheet whose title and
description are derived from those attributes.
"""

__all__ = [
    "PRODUCT_TYPE_COLUMN",
    "parse_sku",
    "resolve_product_kind",
    "PrintedRules",
    "build_rule_set",
    "required_columns",
    "open_product",
]

logger = logging.getLogger(__name__)

# Basic sheet
PRODUCT_TYPE_COLUMN = "Tipo de produto"
REFERENCE_COLUMN = "Referência"
CATEGORY_COLUMN = "Categoria"
GTIN_COLUMN = "Cód. de barras (GTIN)"
REGISTRATION_DATE_COLUMN = "Data de cadastro"

# Printed sheet
PRINT_TYPE_COLUMN = "Tipo"
TITLE_COLUMN = "Título: Como na capa"
AUTHORS_COLUMN = "Participantes: Autores"
EDITION_COLUMN = "Edição: N.º"
LANGUAGE_COLUMN = "Idioma"
CLASSIFICATION_COLUMN = "Classificação"
ISBN13_COLUMN = "ISBN-13"
CONDITION_NOTES_COLUMN = "Condição: Outros detalhes"
OTHER_DETAILS_COLUMN = "Outros detalhes"
SYNOPSIS_COLUMN = "Sinopse"
SYNOPSIS_SOURCE_COLUMN = "Sinopse: Fonte"

# Marketplace sheet
LISTING_TITLE_COLUMN = "Título"
LISTING_DESCRIPTION_COLUMN = "Descrição"

# Keys of the boilerplate named range
PART_CONDITION = "Condição"
PART_CHAT = "Chat"
PART_PHOTOS = "Fotos"

REFERENCE_TITLE_LENGTH = 40

CONDITION_ATTRIBUTES = [
    ("Condição: Grifos", "Grifos"),
    ("Condição: Anotações", "Anotações"),
    ("Condição: Manchas", "Manchas"),
    ("Condição: Sujeira", "Sujeira"),
    ("Condição: Machucados", "Machucados"),
]

# (column, label, transforms)
DETAIL_ATTRIBUTES: list[tuple[str, str | None, list[str] | None]] = [
    ("Participantes: Autores", "Autores", ["csv"]),
    ("Participantes: Tradutores", "Tradutores", ["csv"]),
    ("Participantes: Editores", "Editores", ["csv"]),
    ("Participantes: Organizadores", "Organizadores", ["csv"]),
    ("Participantes: Ilustradores", "Ilustradores", ["csv"]),
    ("Título: Secundário (subtítulo)", "Subtítulo", None),
    ("Título: Original (da obra traduzida)", "Título original", None),
    ("Título: Do volume", "Título do volume", None),
    ("Idioma", None, None),
    ("Editora", None, None),
    ("Edição: Ano", None, None),
    ("Edição: N.º", None, None),
    ("Edição: Nome", None, None),
    ("Edição: Local", None, None),
    ("N.º da reimpressão", None, None),
    ("Coleção", None, None),
    ("N.º do volume", None, None),
    ("N.º do tomo", None, None),
    ("ISBN-10", None, None),
    ("ISBN-13", None, None),
    ("Tipo de capa", None, None),
    ("Formato", None, None),
    ("N.º de páginas", None, None),
    ("Dimensões", None, None),
    ("Peso", None, None),
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_sku(value: Any, row_number: int) -> int:
    """Read a SKU the way the catalog stores it: an integer, possibly as text.

    Text is accepted when it starts with an integer (``"12 (caixa 3)"`` is SKU
    12). Anything else raises InvalidIdentityError for ``row_number``.
    """
    if isinstance(value, bool):
        raise InvalidIdentityError(row_number)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value):
            return int(value)
        raise InvalidIdentityError(row_number)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))
    raise InvalidIdentityError(row_number)


def resolve_product_kind(
    store: GridStore,
    sku: Any,
    config: CatalogConfig,
    active_sheet_name: str | None,
) -> tuple[ProductKind, bool]:
    """Resolve the kind of ``sku`` without touching the workbook.

    Returns:
        (kind, guessed) where ``guessed`` tells the type cell was empty and
        the kind came from the active sheet.
    """
    row = Row.find_by_first_column(store.sheet(config.sheets.basic), sku)
    declared = row.get(PRODUCT_TYPE_COLUMN) if row is not None else ""
    if cell_text(declared) != "":
        return resolve_kind(declared, sku), False
    kind = guess_kind(active_sheet_name, config.sheets)
    if kind is None:
        raise TypeUndeterminedError(sku)
    return kind, True


class PrintedRules:
    """Generators deriving the listing fields of a printed product."""

    def __init__(self, config: CatalogConfig, load_parts: Callable[[], dict[Any, Any]] | None = None) -> None:
        self._config = config
        self._sheets = config.sheets
        self._load_parts = load_parts
        self._parts: dict[Any, Any] | None = None

    # -- helpers ---------------------------------------------------------

    def _printed(self, record: MultiSheetRecord, column: str) -> str:
        return cell_text(record.get(self._sheets.printed, column))

    def _authors(self, record: MultiSheetRecord) -> list[str]:
        return parse_csv(self._printed(record, AUTHORS_COLUMN))

    def _part(self, key: str) -> str:
        if self._parts is None:
            self._parts = self._load_parts() if self._load_parts is not None else {}
        return cell_text(self._parts.get(key, ""))

    # -- basic sheet -----------------------------------------------------

    def reference(self, record: MultiSheetRecord) -> str | None:
        title = self._printed(record, TITLE_COLUMN)
        if title == "":
            return None
        query = title[:REFERENCE_TITLE_LENGTH]
        authors = self._authors(record)
        if authors:
            query += " " + authors[0]
        # same escaping as JavaScript's encodeURIComponent
        return self._config.reference_search_url + quote(query, safe="-_.!~*'()")

    def category(self, record: MultiSheetRecord) -> str | None:
        first = self._printed(record, CLASSIFICATION_COLUMN).split(";")[0].strip()
        return first or None

    def gtin(self, record: MultiSheetRecord) -> Any:
        value = record.get(self._sheets.printed, ISBN13_COLUMN)
        return None if value == "" else value

    def registration_date(self, record: MultiSheetRecord) -> date:
        return datetime.now(ZoneInfo(self._config.timezone)).date()

    # -- marketplace sheet -----------------------------------------------

    def listing_title(self, record: MultiSheetRecord) -> str | None:
        parts = [self._printed(record, PRINT_TYPE_COLUMN), self._printed(record, TITLE_COLUMN)]

        authors = self._authors(record)
        if authors:
            parts.append("de " + format_list(authors))

        edition = self._printed(record, EDITION_COLUMN)
        if edition != "":
            parts.append(edition + "ª edição")

        language = self._printed(record, LANGUAGE_COLUMN)
        if language != "" and language.casefold() != self._config.default_language.casefold():
            parts.append("em " + language)

        return " ".join(p for p in parts if p != "") or None

    def listing_description(self, record: MultiSheetRecord) -> str:
        parts = [
            self._part(PART_CONDITION),
            self.condition_block(record),
            self.details_formatter().format(record),
            self._printed(record, OTHER_DETAILS_COLUMN),
            self._part(PART_CHAT),
            self._part(PART_PHOTOS),
            self.synopsis_block(record),
        ]
        return "\n\n".join(p for p in parts if p != "")

    def condition_formatter(self) -> AttributeFormatter:
        formatter = AttributeFormatter(
            default_sheet=self._sheets.printed,
            default_transforms=["uncapitalize", "truncateSentence"],
        )
        for column, label in CONDITION_ATTRIBUTES:
            formatter.add(column, label)
        return formatter

    def details_formatter(self) -> AttributeFormatter:
        formatter = AttributeFormatter(default_sheet=self._sheets.printed)
        for column, label, transforms in DETAIL_ATTRIBUTES:
            formatter.add(column, label, transforms)
        return formatter

    def condition_block(self, record: MultiSheetRecord) -> str:
        attributes = self.condition_formatter().format(record)
        notes = self._printed(record, CONDITION_NOTES_COLUMN)
        if attributes == "":
            if notes == "":
                return ""
            return "Descrição da condição: " + uncapitalize(notes)
        block = "Descrição da condição:\n" + attributes
        if notes != "":
            block += "\n\n" + notes
        return block

    def synopsis_block(self, record: MultiSheetRecord) -> str:
        synopsis = self._printed(record, SYNOPSIS_COLUMN)
        if synopsis == "":
            return ""
        block = "Sinopse: " + synopsis
        source = self._printed(record, SYNOPSIS_SOURCE_COLUMN)
        if source != "":
            block += "\n\nFonte da sinopse: " + source
        return block

    def rule_set(self) -> AutofillRuleSet:
        basic, shopee = self._sheets.basic, self._sheets.shopee
        return (
            AutofillRuleSet()
            .add(basic, REFERENCE_COLUMN, self.reference)
            .add(basic, CATEGORY_COLUMN, self.category)
            .add(basic, GTIN_COLUMN, self.gtin)
            .add(basic, REGISTRATION_DATE_COLUMN, self.registration_date)
            .add(shopee, LISTING_TITLE_COLUMN, self.listing_title)
            .add(shopee, LISTING_DESCRIPTION_COLUMN, self.listing_description)
        )


_RULES = {
    ProductKind.PRINTED: PrintedRules,
}


def build_rule_set(kind: ProductKind, store: GridStore, config: CatalogConfig) -> AutofillRuleSet:
    return _RULES[kind](config, lambda: store.named_mapping(config.description_parts_range)).rule_set()


def required_columns(kind: ProductKind, config: CatalogConfig) -> dict[str, set[str]]:
    """Columns each sheet must carry for ``kind``'s rules, keyed by sheet name."""
    sheets = config.sheets
    source = kind.source_sheet(sheets)
    required: dict[str, set[str]] = {sheets.basic: {PRODUCT_TYPE_COLUMN}, source: set(), sheets.shopee: set()}
    for sheet, column in _RULES[kind](config).rule_set().targets:
        required[sheet].add(column)
    required[source].update(
        {
            PRINT_TYPE_COLUMN,
            TITLE_COLUMN,
            CLASSIFICATION_COLUMN,
            CONDITION_NOTES_COLUMN,
            OTHER_DETAILS_COLUMN,
            SYNOPSIS_COLUMN,
            SYNOPSIS_SOURCE_COLUMN,
        }
    )
    required[source].update(column for column, _ in CONDITION_ATTRIBUTES)
    required[source].update(column for column, _, _ in DETAIL_ATTRIBUTES)
    return required


def open_product(store: GridStore, sku: Any, kind: ProductKind, config: CatalogConfig) -> MultiSheetRecord:
    """Locate or allocate the rows of ``sku`` in every sheet of its kind."""
    sheets = config.sheets
    return MultiSheetRecord(store, sku, [sheets.basic, kind.source_sheet(sheets), sheets.shopee])
