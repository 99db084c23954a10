from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from catalog_autofill.errors import InvalidIdentityError, TypeUndeterminedError, TypeUnsupportedError
from catalog_autofill.excel.grid import GridStore
from catalog_autofill.models.config_models import CatalogConfig, SheetNames
from catalog_autofill.models.product_kind import ProductKind, guess_kind, resolve_kind
from catalog_autofill.services.product import (
    PrintedRules,
    build_rule_set,
    open_product,
    parse_sku,
    required_columns,
    resolve_product_kind,
)
from catalog_autofill.services.text import BULLET

SEARCH = "https://www.estantevirtual.com.br/busca?q="


@pytest.fixture()
def config(catalog_path) -> CatalogConfig:
    return CatalogConfig(workbook=catalog_path)


def _record(make_catalog, book, config=None):
    store = GridStore.open(make_catalog(printed=[book]))
    config = config or CatalogConfig(workbook=store.path)
    return store, open_product(store, book["SKU"], ProductKind.PRINTED, config)


def _rules(store, config=None):
    config = config or CatalogConfig(workbook=store.path)
    return PrintedRules(config, lambda: store.named_mapping(config.description_parts_range))


@pytest.mark.parametrize(
    "value, expected",
    [(12, 12), (12.0, 12), (12.9, 12), ("12", 12), (" 12 (caixa 3)", 12), ("-4", -4)],
)
def test_parse_sku_accepts_leading_integer(value, expected):
    assert parse_sku(value, 2) == expected


@pytest.mark.parametrize("value", ["", "abc", None, True, float("nan"), float("inf")])
def test_parse_sku_rejects(value):
    with pytest.raises(InvalidIdentityError, match="Row 5"):
        parse_sku(value, 5)


def test_resolve_kind():
    assert resolve_kind(" impresso ", 1) is ProductKind.PRINTED
    with pytest.raises(TypeUndeterminedError):
        resolve_kind("", 1)
    with pytest.raises(TypeUnsupportedError, match='"Vinil"'):
        resolve_kind("Vinil", 1)


def test_guess_kind_from_source_sheet():
    sheets = SheetNames()
    assert guess_kind("Impressos", sheets) is ProductKind.PRINTED
    assert guess_kind("Básico", sheets) is None
    assert guess_kind(None, sheets) is None


def test_resolve_product_kind_declared_wins(make_catalog, dom_casmurro):
    store = GridStore.open(make_catalog(printed=[dom_casmurro], basic=[{"SKU": 1, "Tipo de produto": "Impresso"}]))
    config = CatalogConfig(workbook=store.path)
    assert resolve_product_kind(store, 1, config, "Shopee") == (ProductKind.PRINTED, False)


def test_resolve_product_kind_guesses_when_empty(store: GridStore, config):
    assert resolve_product_kind(store, 1, config, "Impressos") == (ProductKind.PRINTED, True)
    # nothing was written
    assert store.sheet("Básico").get_values(2, 1, 1, 2) == [["", ""]]
    with pytest.raises(TypeUndeterminedError):
        resolve_product_kind(store, 1, config, "Shopee")


def test_resolve_product_kind_unsupported(make_catalog):
    store = GridStore.open(make_catalog(basic=[{"SKU": 3, "Tipo de produto": "Vinil"}]))
    with pytest.raises(TypeUnsupportedError):
        resolve_product_kind(store, 3, CatalogConfig(workbook=store.path), "Impressos")


def test_reference(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    assert _rules(store).reference(record) == SEARCH + "Dom%20Casmurro%20Machado%20de%20Assis"


def test_reference_truncates_title_and_uses_first_author(make_catalog, dom_casmurro):
    dom_casmurro["Título: Como na capa"] = "A" * 50
    dom_casmurro["Participantes: Autores"] = "Ana; Bia"
    store, record = _record(make_catalog, dom_casmurro)
    assert _rules(store).reference(record) == SEARCH + "A" * 40 + "%20Ana"


def test_reference_without_title(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4, "Participantes: Autores": "Ana"})
    assert _rules(store).reference(record) is None


def test_category_is_first_classification(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    assert _rules(store).category(record) == "Literatura brasileira"


def test_category_empty(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4, "Classificação": " ; Romance"})
    assert _rules(store).category(record) is None


def test_gtin_copies_isbn13(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    assert _rules(store).gtin(record) == "9788508133218"


def test_registration_date_uses_configured_timezone(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    config = CatalogConfig(workbook=store.path, timezone="America/Sao_Paulo")
    value = _rules(store, config).registration_date(record)
    assert isinstance(value, date)
    assert value == datetime.now(ZoneInfo("America/Sao_Paulo")).date()


def test_listing_title(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    assert _rules(store).listing_title(record) == "Livro Dom Casmurro de Machado de Assis 3ª edição"


def test_listing_title_names_foreign_language_and_all_authors(make_catalog):
    book = {
        "SKU": 9,
        "Tipo": "Livro",
        "Título: Como na capa": "Good Omens",
        "Participantes: Autores": "Terry Pratchett; Neil Gaiman",
        "Idioma": "Inglês",
    }
    store, record = _record(make_catalog, book)
    assert _rules(store).listing_title(record) == "Livro Good Omens de Terry Pratchett e Neil Gaiman em Inglês"


def test_listing_title_without_title(make_catalog):
    book = {"SKU": 4, "Tipo": "Livro", "Participantes: Autores": "Machado de Assis", "Edição: N.º": 2}
    store, record = _record(make_catalog, book)
    assert _rules(store).listing_title(record) == "Livro de Machado de Assis 2ª edição"


def test_listing_title_with_nothing_to_join(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4})
    assert _rules(store).listing_title(record) is None


def test_listing_description(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    expected = (
        "Livro usado.\n\n"
        "Descrição da condição:\n"
        f"{BULLET}Grifos: não;\n"
        f"{BULLET}Manchas: poucas, na capa.\n\n"
        "Lombada levemente gasta.\n\n"
        f"{BULLET}Autores: Machado de Assis;\n"
        f"{BULLET}Idioma: Português;\n"
        f"{BULLET}Editora: Ática;\n"
        f"{BULLET}Edição: N.º: 3;\n"
        f"{BULLET}ISBN-13: 9788508133218.\n\n"
        "Dúvidas? Chame no chat.\n\n"
        "As fotos são do próprio exemplar.\n\n"
        "Sinopse: Bentinho e Capitu.\n\n"
        "Fonte da sinopse: Editora"
    )
    assert _rules(store).listing_description(record) == expected


def test_condition_block_with_notes_only(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4, "Condição: Outros detalhes": "Capa rasgada."})
    assert _rules(store).condition_block(record) == "Descrição da condição: capa rasgada."


def test_description_of_bare_product_is_boilerplate(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4})
    assert _rules(store).listing_description(record) == (
        "Livro usado.\n\nDúvidas? Chame no chat.\n\nAs fotos são do próprio exemplar."
    )


def test_synopsis_without_source(make_catalog):
    store, record = _record(make_catalog, {"SKU": 4, "Sinopse": "Uma história."})
    assert _rules(store).synopsis_block(record) == "Sinopse: Uma história."


def test_parts_are_loaded_once(make_catalog, dom_casmurro):
    store, record = _record(make_catalog, dom_casmurro)
    calls = []

    def load():
        calls.append(1)
        return store.named_mapping("DescriçãoShopeePartes")

    rules = PrintedRules(CatalogConfig(workbook=store.path), load)
    rules.listing_description(record)
    rules.listing_description(record)
    assert calls == [1]


def test_rule_set_targets(config):
    store = GridStore.open(config.workbook)
    rules = build_rule_set(ProductKind.PRINTED, store, config)
    assert rules.targets == [
        ("Básico", "Referência"),
        ("Básico", "Categoria"),
        ("Básico", "Cód. de barras (GTIN)"),
        ("Básico", "Data de cadastro"),
        ("Shopee", "Título"),
        ("Shopee", "Descrição"),
    ]


def test_required_columns_cover_targets_and_sources(config):
    required = required_columns(ProductKind.PRINTED, config)
    assert set(required) == {"Básico", "Impressos", "Shopee"}
    assert {"Tipo de produto", "Referência", "Data de cadastro"} <= required["Básico"]
    assert {"Título", "Descrição"} == required["Shopee"]
    assert {"Título: Como na capa", "ISBN-13", "Sinopse: Fonte"} <= required["Impressos"]
