from __future__ import annotations

import argparse
import sys
import zipfile
from pathlib import Path

from dotenv import load_dotenv
from openpyxl.utils.exceptions import InvalidFileException

from catalog_autofill.config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from catalog_autofill.errors import CatalogError
from catalog_autofill.excel.grid import GridStore
from catalog_autofill.logging.init import log_summary, setup_logging
from catalog_autofill.models.config_models import CatalogConfig
from catalog_autofill.models.product_kind import ProductKind
from catalog_autofill.services.navigation import jump_to_row, jump_to_sheet
from catalog_autofill.services.orchestrator import ProcessingError, autofill_selection
from catalog_autofill.services.product import required_columns
from catalog_autofill.services.summary import render_summary_line

"""CLI entrypoint.

Commands:
- ``jump-to-row VALUE``: select the row of the active sheet holding VALUE
- ``jump-to-sheet PREFIX``: activate the first sheet starting with PREFIX,
  following the selected record when the sheet has it
- ``autofill``: fill the listing fields of the selected products

Every outcome is reported as labeled log lines on stdout.
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env so that CATALOG_WORKBOOK can point at another workbook."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def parse_rows(text: str) -> list[int]:
    """Parse ``"2,5-7"`` into ``[2, 5, 6, 7]``.

    Raises:
        argparse.ArgumentTypeError: malformed ranges or row numbers below 1
    """
    rows: list[int] = []
    for part in text.split(","):
        part = part.strip()
        if not part:
            continue
        first, sep, last = part.partition("-")
        try:
            start = int(first)
            end = int(last) if sep else start
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid row range: {part!r}") from None
        if start < 1 or end < start:
            raise argparse.ArgumentTypeError(f"invalid row range: {part!r}")
        for r in range(start, end + 1):
            if r not in rows:
                rows.append(r)
    if not rows:
        raise argparse.ArgumentTypeError("no rows given")
    return rows


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="catalog-autofill", description="Product catalog spreadsheet autofill")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config file")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print sheet headers & first rows then exit")
    sub = p.add_subparsers(dest="command")

    row = sub.add_parser("jump-to-row", help="Select the row whose first column holds a value")
    row.add_argument("value")

    sheet = sub.add_parser("jump-to-sheet", help="Activate the first sheet starting with a prefix")
    sheet.add_argument("prefix")

    fill = sub.add_parser("autofill", help="Fill the listing fields of the selected products")
    fill.add_argument("--sheet", help="Sheet the rows refer to (default: active sheet)")
    fill.add_argument(
        "--rows", type=parse_rows, help="Rows such as '2,5-7' (default: active selection)"
    )
    fill.add_argument("--overwrite", action="store_true", help="Regenerate fields that already have a value")
    return p.parse_args(argv)


def _inspect_data(cfg: CatalogConfig) -> int:
    from catalog_autofill.excel.reader import MissingColumnsError, SheetHeaderError, normalize_sheet, read_workbook

    required: dict[str, set[str]] = {}
    for kind in ProductKind:
        for name, columns in required_columns(kind, cfg).items():
            required.setdefault(name, set()).update(columns)

    print(f"FILE: {cfg.workbook.name}")
    raw = read_workbook(cfg.workbook)
    code = EXIT_SUCCESS_ALL
    for name in cfg.sheets.all:
        if name not in raw:
            print(f"  SHEET: {name} error=missing sheet")
            code = EXIT_FATAL
    for sname, df in raw.items():
        try:
            sd = normalize_sheet(df, sname, expected_columns=required.get(sname))
        except (SheetHeaderError, MissingColumnsError) as e:
            print(f"  SHEET: {sname} error={e}")
            if sname in required:
                code = EXIT_FATAL
            continue
        print(f"  SHEET: {sname} cols={sd.columns} records={len(sd.rows)}")
        safe_rows = []
        for r in sd.rows[:3]:
            safe_rows.append({k: (v.isoformat() if hasattr(v, "isoformat") else v) for k, v in r.items()})
        print("    sample_rows=", safe_rows)
    return code


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an empty list must not fall back to sys.argv (pytest args)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    if args.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)
    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if not cfg.workbook.exists():
        logger.error(f"workbook not found: {cfg.workbook}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    if args.command is None:
        logger.error("no command given (jump-to-row, jump-to-sheet or autofill)")
        return EXIT_FATAL

    try:
        store = GridStore.open(cfg.workbook, max_rows=cfg.max_rows)
    except (InvalidFileException, zipfile.BadZipFile, OSError) as e:
        logger.error(f"workbook: cannot open {cfg.workbook}: {e}")
        return EXIT_FATAL

    logger.info(f"Workbook: {cfg.workbook}")

    if args.command in ("jump-to-row", "jump-to-sheet"):
        try:
            if args.command == "jump-to-row":
                jump_to_row(store, args.value)
            else:
                jump_to_sheet(store, args.prefix)
        except (CatalogError, ValueError) as e:
            logger.error(f"{args.command}: {e}")
            return EXIT_FATAL
        store.save()
        return EXIT_SUCCESS_ALL

    try:
        summary = autofill_selection(
            store,
            cfg,
            rows=args.rows,
            sheet_name=args.sheet,
            overwrite=args.overwrite,
        )
    except (ProcessingError, CatalogError) as e:
        logger.error(f"autofill: {e}")
        return EXIT_FATAL

    # log_summary adds the "SUMMARY " prefix itself
    log_summary(render_summary_line(summary)[len("SUMMARY "):])

    if summary.failed > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
