from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import CatalogConfig, SheetNames

"""Config loader.

Responsibilities:
- Load the YAML config (default ``config/catalog.yml``)
- Validate it against the bundled JSON schema
- Apply defaults for optional keys
- Let ``CATALOG_WORKBOOK`` (environment or ``.env``) override ``workbook``

Relative paths are resolved against the current working directory.
"""

__all__ = [
    "ConfigError",
    "DEFAULT_CONFIG_PATH",
    "WORKBOOK_ENV",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/catalog.yml")
WORKBOOK_ENV = "CATALOG_WORKBOOK"


class ConfigError(Exception):
    pass


def _validate_config_schema(data: Any) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: the schema file is missing or invalid, or the data
            violates it (missing workbook, unknown keys, wrong types)
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")
    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> CatalogConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e

    _validate_config_schema(data)

    defaults = CatalogConfig(workbook=Path(data["workbook"]))
    tz = data.get("timezone", defaults.timezone)
    try:
        ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigError(f"unknown timezone: {tz}") from e

    workbook = os.getenv(WORKBOOK_ENV) or data["workbook"]
    sheets_raw = data.get("sheets", {})
    default_sheets = SheetNames()
    sheets = SheetNames(
        basic=sheets_raw.get("basic", default_sheets.basic),
        printed=sheets_raw.get("printed", default_sheets.printed),
        shopee=sheets_raw.get("shopee", default_sheets.shopee),
    )
    if len(set(sheets.all)) != len(sheets.all):
        raise ConfigError(f"sheet names must be distinct: {sheets.all}")

    return CatalogConfig(
        workbook=Path(workbook),
        sheets=sheets,
        description_parts_range=data.get("description_parts_range", defaults.description_parts_range),
        default_language=data.get("default_language", defaults.default_language),
        reference_search_url=data.get("reference_search_url", defaults.reference_search_url),
        timezone=tz,
        error_log_dir=Path(data.get("error_log_dir", str(defaults.error_log_dir))),
        max_rows=data.get("max_rows", defaults.max_rows),
    )
