from __future__ import annotations

import pytest

from catalog_autofill.errors import RowNotFoundError, SheetNotFoundError
from catalog_autofill.excel.grid import GridStore
from catalog_autofill.services.navigation import jump_to_row, jump_to_sheet


def test_jump_to_row_selects_matching_row(make_catalog, dom_casmurro):
    store = GridStore.open(make_catalog(printed=[{"SKU": 5}, dom_casmurro], selection="A2"))
    sheet, row = jump_to_row(store, "1")
    assert (sheet.name, row) == ("Impressos", 3)
    assert store.active_rows() == [3]


def test_jump_to_row_missing(store: GridStore):
    with pytest.raises(RowNotFoundError, match='"404"'):
        jump_to_row(store, "404")
    with pytest.raises(ValueError):
        jump_to_row(store, "")


def test_jump_to_sheet_follows_selected_record(make_catalog, dom_casmurro):
    store = GridStore.open(make_catalog(printed=[dom_casmurro], shopee=[{"SKU": 8}, {"SKU": 1}]))
    sheet, row = jump_to_sheet(store, "Sho")
    assert (sheet.name, row) == ("Shopee", 3)
    assert store.active_sheet.name == "Shopee"
    assert store.active_rows() == [3]


def test_jump_to_sheet_without_matching_record(store: GridStore):
    sheet, row = jump_to_sheet(store, "Sho")
    assert sheet.name == "Shopee"
    assert row is None
    assert store.active_sheet.name == "Shopee"


def test_jump_to_sheet_first_prefix_match(store: GridStore):
    store.workbook.create_sheet("Impressos (arquivo)")
    sheet, _ = jump_to_sheet(store, "Impressos")
    assert sheet.name == "Impressos"


def test_jump_to_sheet_errors(store: GridStore):
    with pytest.raises(SheetNotFoundError, match='starting with "Rev"'):
        jump_to_sheet(store, "Rev")
    with pytest.raises(ValueError):
        jump_to_sheet(store, "")
