from __future__ import annotations

__all__ = ["main"]


def main(argv: list[str] | None = None) -> int:
    # Imported lazily so ``python -m catalog_autofill.cli`` does not import __main__ twice.
    from .__main__ import main as _main

    return _main(argv)
