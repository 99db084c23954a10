#!/usr/bin/env python3
"""Sample catalog generation script.

Writes a catalog workbook carrying every column the autofill rules read or
write, a few printed products and the description boilerplate named range.
Useful to try the CLI without a real catalog:

    python scripts/make_sample_workbook.py --output data/catalogo.xlsx
    catalog-autofill autofill --rows 2-4
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.styles import Font
from openpyxl.workbook.defined_name import DefinedName

from catalog_autofill.models.config_models import CatalogConfig
from catalog_autofill.models.product_kind import ProductKind
from catalog_autofill.services.product import required_columns

PARTS = [
    ("Condição", "Livro usado, em bom estado de conservação."),
    ("Chat", "Ficou com alguma dúvida? Mande uma mensagem pelo chat."),
    ("Fotos", "As fotos são do próprio exemplar à venda."),
]

BOOKS: list[dict[str, Any]] = [
    {
        "SKU": 101,
        "Tipo": "Livro",
        "Título: Como na capa": "Dom Casmurro",
        "Participantes: Autores": "Machado de Assis",
        "Idioma": "Português",
        "Editora": "Ática",
        "Edição: N.º": 3,
        "ISBN-13": "9788508133218",
        "Classificação": "Literatura brasileira; Romance",
        "Condição: Grifos": "Não.",
        "Condição: Manchas": "Poucas, na capa.",
        "Sinopse": "Bentinho relembra sua vida e o ciúme de Capitu.",
        "Sinopse: Fonte": "Editora",
    },
    {
        "SKU": 102,
        "Tipo": "Livro",
        "Título: Como na capa": "Good Omens",
        "Participantes: Autores": "Terry Pratchett; Neil Gaiman",
        "Idioma": "Inglês",
        "Editora": "Corgi",
        "Classificação": "Ficção; Fantasia",
        "Condição: Outros detalhes": "Páginas amareladas pelo tempo.",
    },
    {
        "SKU": 103,
        "Tipo": "Revista",
        "Título: Como na capa": "Superinteressante",
        "N.º do volume": 12,
        "Classificação": "Ciência",
    },
]

# Auto-generated columns, styled in italic so the tool never writes them.
LOCKED = {
    "basic": ["Preço sugerido"],
    "printed": ["Título normalizado"],
    "shopee": ["Caracteres"],
}


def _headers(required: set[str], leading: list[str], locked: list[str]) -> list[str]:
    rest = sorted(required - set(leading))
    return ["SKU"] + [c for c in leading if c != "SKU"] + rest + locked


def build_workbook(output: Path, capacity: int) -> Path:
    """Create the sample workbook at ``output`` and return its path."""
    config = CatalogConfig(workbook=output)
    sheets = config.sheets
    required = required_columns(ProductKind.PRINTED, config)

    layout = {
        sheets.basic: (_headers(required[sheets.basic], ["Tipo de produto"], LOCKED["basic"]), []),
        sheets.printed: (
            _headers(required[sheets.printed], ["Tipo", "Título: Como na capa"], LOCKED["printed"]),
            BOOKS,
        ),
        sheets.shopee: (_headers(required[sheets.shopee], ["Título"], LOCKED["shopee"]), []),
    }

    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, (headers, records) in layout.items():
        ws = wb.create_sheet(name)
        ws.append(headers)
        ws.freeze_panes = "B2"
        for row in range(2, capacity + 2):
            for col, label in enumerate(headers, start=1):
                if label in LOCKED["basic"] + LOCKED["printed"] + LOCKED["shopee"]:
                    ws.cell(row=row, column=col).font = Font(italic=True)
        for offset, record in enumerate(records):
            for label, value in record.items():
                ws.cell(row=2 + offset, column=headers.index(label) + 1).value = value

    texts = wb.create_sheet("Textos")
    for key, value in PARTS:
        texts.append([key, value])
    dn = DefinedName(config.description_parts_range, attr_text=f"Textos!$A$1:$B${len(PARTS)}")
    wb.defined_names[dn.name] = dn

    printed = wb[sheets.printed]
    wb.active = wb.sheetnames.index(sheets.printed)
    for ws in wb.worksheets:
        ws.sheet_view.tabSelected = ws is printed
    selection = printed.sheet_view.selection[0]
    selection.activeCell = "A2"
    selection.sqref = f"A2:A{len(BOOKS) + 1}"

    output.parent.mkdir(parents=True, exist_ok=True)
    wb.save(output)
    return output


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a sample catalog workbook")
    parser.add_argument("--output", "-o", type=Path, default=Path("data/catalogo.xlsx"), help="Output .xlsx path")
    parser.add_argument("--capacity", type=int, default=50, help="Rows available per sheet")
    args = parser.parse_args()

    if args.capacity < len(BOOKS):
        print(f"Error: capacity must be at least {len(BOOKS)}", file=sys.stderr)
        return 1

    path = build_workbook(args.output, args.capacity)
    print(f"Generated: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
