from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

"""Config dataclasses for the catalog autofill tool.

Built by ``catalog_autofill.config.loader.load_config`` from the YAML file
once it passed schema validation; defaults here mirror the schema defaults.
"""

__all__ = [
    "SheetNames",
    "CatalogConfig",
]


@dataclass(frozen=True)
class SheetNames:
    """Names of the sheets taking part in a product record."""
    basic: str = "Básico"  # SKU, product type, reference, category, GTIN
    printed: str = "Impressos"  # canonical book attributes
    shopee: str = "Shopee"  # marketplace listing

    @property
    def all(self) -> list[str]:
        return [self.basic, self.printed, self.shopee]


@dataclass(frozen=True)
class CatalogConfig:
    """Root configuration object for a run."""
    workbook: Path  # catalog .xlsx
    sheets: SheetNames = field(default_factory=SheetNames)
    description_parts_range: str = "DescriçãoShopeePartes"  # 2-column named range of boilerplate
    default_language: str = "Português"  # omitted from listing titles
    reference_search_url: str = "https://www.estantevirtual.com.br/busca?q="
    timezone: str = "UTC"  # for registration dates
    error_log_dir: Path = Path("./logs")
    max_rows: int | None = None  # sheet capacity; None means the xlsx limit
