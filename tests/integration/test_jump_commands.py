from __future__ import annotations

from catalog_autofill.cli import main as cli_main
from catalog_autofill.excel.grid import GridStore

"""Integration: jump commands persist the new active cell in the workbook."""


def test_jump_to_row(write_config, make_catalog, dom_casmurro, capsys):
    path = make_catalog(printed=[{"SKU": 7}, dom_casmurro])
    assert cli_main(["jump-to-row", "1"]) == 0
    assert "INFO Jumped to Impressos!A3" in capsys.readouterr().out
    assert GridStore.open(path).active_rows() == [3]


def test_jump_to_row_not_found(write_config, catalog_path, capsys):
    assert cli_main(["jump-to-row", "99"]) == 1
    assert 'ERROR jump-to-row: Could not find a row with the value "99"' in capsys.readouterr().out


def test_jump_to_sheet(write_config, make_catalog, dom_casmurro, capsys):
    path = make_catalog(printed=[dom_casmurro], shopee=[{"SKU": 4}, {"SKU": 1}])
    assert cli_main(["jump-to-sheet", "Sho"]) == 0
    assert "INFO Jumped to Shopee!A3" in capsys.readouterr().out
    store = GridStore.open(path)
    assert store.active_sheet.name == "Shopee"
    assert store.active_rows() == [3]


def test_jump_to_sheet_not_found(write_config, catalog_path, capsys):
    assert cli_main(["jump-to-sheet", "Revistas"]) == 1
    assert 'ERROR jump-to-sheet: Could not find a sheet starting with "Revistas".' in capsys.readouterr().out
