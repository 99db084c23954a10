from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..excel.record import MultiSheetRecord

"""Autofill rule set.

An autofill rule pairs a target field (sheet, column) with a generator that
derives its value from the rest of the record. Generators return ``None``
when their sources are empty, in which case nothing is written.
"""

__all__ = [
    "Generator",
    "AutofillRule",
    "AutofillRuleSet",
]

logger = logging.getLogger(__name__)

Generator = Callable[[MultiSheetRecord], Any]


@dataclass(frozen=True)
class AutofillRule:
    sheet: str
    column: str
    generator: Generator


class AutofillRuleSet:
    def __init__(self) -> None:
        self._rules: list[AutofillRule] = []

    @property
    def rules(self) -> tuple[AutofillRule, ...]:
        return tuple(self._rules)

    @property
    def targets(self) -> list[tuple[str, str]]:
        return [(r.sheet, r.column) for r in self._rules]

    def add(self, sheet: str, column: str, generator: Generator) -> AutofillRuleSet:
        self._rules.append(AutofillRule(sheet=sheet, column=column, generator=generator))
        return self

    def apply(self, record: MultiSheetRecord, overwrite: bool = False) -> list[tuple[str, str]]:
        """Fill the record's target fields.

        Only empty targets are generated unless ``overwrite`` is set. Rules
        run in declaration order, so a generator sees the values written by
        the rules before it.

        Returns:
            The (sheet, column) targets that were written.
        """
        written: list[tuple[str, str]] = []
        for rule in self._rules:
            if record.get(rule.sheet, rule.column) != "" and not overwrite:
                continue
            value = rule.generator(record)
            if value is None:
                logger.debug(f"sku={record.identity} {rule.sheet}.{rule.column}: no source value, skipped")
                continue
            record.set(rule.sheet, rule.column, value)
            written.append((rule.sheet, rule.column))
        return written
