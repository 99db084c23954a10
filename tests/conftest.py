# Shared pytest fixtures: catalog workbooks built with openpyxl
from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any

import openpyxl
import pytest
from openpyxl.styles import Font
from openpyxl.workbook.defined_name import DefinedName

from catalog_autofill.excel.grid import GridStore
from catalog_autofill.logging.init import reset_logging

BASIC_HEADERS = [
    "SKU",
    "Tipo de produto",
    "Referência",
    "Categoria",
    "Cód. de barras (GTIN)",
    "Data de cadastro",
    "Preço sugerido",  # italic: filled by a formula
]

PRINTED_HEADERS = [
    "SKU",
    "Tipo",
    "Título: Como na capa",
    "Título: Secundário (subtítulo)",
    "Título: Original (da obra traduzida)",
    "Título: Do volume",
    "Participantes: Autores",
    "Participantes: Tradutores",
    "Participantes: Editores",
    "Participantes: Organizadores",
    "Participantes: Ilustradores",
    "Idioma",
    "Editora",
    "Edição: Ano",
    "Edição: N.º",
    "Edição: Nome",
    "Edição: Local",
    "N.º da reimpressão",
    "Coleção",
    "N.º do volume",
    "N.º do tomo",
    "ISBN-10",
    "ISBN-13",
    "Tipo de capa",
    "Formato",
    "N.º de páginas",
    "Dimensões",
    "Peso",
    "Classificação",
    "Condição: Grifos",
    "Condição: Anotações",
    "Condição: Manchas",
    "Condição: Sujeira",
    "Condição: Machucados",
    "Condição: Outros detalhes",
    "Outros detalhes",
    "Sinopse",
    "Sinopse: Fonte",
    "Título normalizado",  # italic
]

SHOPEE_HEADERS = ["SKU", "Título", "Descrição", "Caracteres"]  # "Caracteres" italic

PARTS = {
    "Condição": "Livro usado.",
    "Chat": "Dúvidas? Chame no chat.",
    "Fotos": "As fotos são do próprio exemplar.",
}

DOM_CASMURRO: dict[str, Any] = {
    "SKU": 1,
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
    "Condição: Outros detalhes": "Lombada levemente gasta.",
    "Sinopse": "Bentinho e Capitu.",
    "Sinopse: Fonte": "Editora",
}


def _fill_sheet(ws, headers: list[str], rows: list[dict[str, Any]], capacity: int) -> None:
    ws.append(headers)
    locked_col = len(headers)
    for r in range(2, capacity + 2):
        # styled cells keep the empty capacity rows in the saved file
        ws.cell(row=r, column=locked_col).font = Font(italic=True)
    for offset, values in enumerate(rows):
        for label, value in values.items():
            ws.cell(row=2 + offset, column=headers.index(label) + 1).value = value


def build_catalog(
    path: Path,
    *,
    printed: list[dict[str, Any]] | None = None,
    basic: list[dict[str, Any]] | None = None,
    shopee: list[dict[str, Any]] | None = None,
    capacity: int = 5,
    parts: dict[str, str] | None = PARTS,
    active: str = "Impressos",
    selection: str | None = "A2",
) -> Path:
    """Write a catalog workbook with the three product sheets and the boilerplate range."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    _fill_sheet(wb.create_sheet("Básico"), BASIC_HEADERS, basic or [], capacity)
    _fill_sheet(wb.create_sheet("Impressos"), PRINTED_HEADERS, printed or [], capacity)
    _fill_sheet(wb.create_sheet("Shopee"), SHOPEE_HEADERS, shopee or [], capacity)

    texts = wb.create_sheet("Textos")
    if parts is not None:
        for key, value in parts.items():
            texts.append([key, value])
        dn = DefinedName("DescriçãoShopeePartes", attr_text=f"Textos!$A$1:$B${len(parts)}")
        wb.defined_names[dn.name] = dn

    for ws in wb.worksheets:
        ws.sheet_view.tabSelected = ws.title == active
    wb.active = wb.sheetnames.index(active)
    if selection is not None:
        sel = wb[active].sheet_view.selection[0]
        sel.activeCell = selection.split(":")[0]
        sel.sqref = selection
    wb.save(path)
    return path


def read_cell(path: Path, sheet: str, row: int, column: str) -> Any:
    wb = openpyxl.load_workbook(path)
    ws = wb[sheet]
    headers = [c.value for c in ws[1]]
    return ws.cell(row=row, column=headers.index(column) + 1).value


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("CATALOG_WORKBOOK", raising=False)
        yield p


@pytest.fixture()
def catalog_path(temp_workdir: Path) -> Path:
    return build_catalog(temp_workdir / "data" / "catalogo.xlsx", printed=[DOM_CASMURRO])


@pytest.fixture()
def store(catalog_path: Path) -> GridStore:
    return GridStore.open(catalog_path)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/catalogo.xlsx
sheets:
  basic: Básico
  printed: Impressos
  shopee: Shopee
description_parts_range: DescriçãoShopeePartes
default_language: Português
reference_search_url: "https://www.estantevirtual.com.br/busca?q="
timezone: UTC
error_log_dir: ./logs
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "catalog.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def make_catalog(temp_workdir: Path):
    """Factory building a catalog workbook under the temporary data directory."""
    def _make(name: str = "catalogo.xlsx", **kwargs: Any) -> Path:
        return build_catalog(temp_workdir / "data" / name, **kwargs)
    return _make


@pytest.fixture()
def dom_casmurro() -> dict[str, Any]:
    return dict(DOM_CASMURRO)


@pytest.fixture()
def cell():
    """Read a cell of a saved workbook by sheet, row and header label."""
    return read_cell
