from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol

from ..errors import UnknownTransformError
from ..excel.grid import cell_text
from .text import format_bullet_list, format_list, remove_suffix, truncate_sentence, uncapitalize

"""Attribute formatter: renders record fields as a labeled bullet list.

Rules are declared once, in order, and ``format(record)`` turns every
non-empty field into a ``label: value`` line after running the rule's
transform chain on it.

Example:
    >>> formatter = (
    ...     AttributeFormatter(default_sheet="Impressos")
    ...     .add("Idioma")
    ...     .add("Participantes: Autores", "Autores", ["csv"])
    ... )
    >>> formatter.format(product)  # doctest: +SKIP
    '\\u2001• Autores: Ana e Bia.'
"""

__all__ = [
    "AttributeRule",
    "AttributeFormatter",
    "TRANSFORMS",
    "parse_csv",
    "format_csv",
]

# Marker left by the catalogers when a participant list was cut short.
CSV_CONTINUATION = "; ..."


class RecordReader(Protocol):
    def get(self, sheet_name: str, column: str) -> Any: ...


def parse_csv(text: str) -> list[str]:
    """Split a semicolon separated cell into its non-empty, stripped items."""
    items = remove_suffix(text, CSV_CONTINUATION).split(";")
    return [item.strip() for item in items if item.strip()]


def format_csv(text: str) -> str:
    return format_list(parse_csv(text))


TRANSFORMS: dict[str, Callable[[str], str]] = {
    "csv": format_csv,
    "uncapitalize": uncapitalize,
    "truncateSentence": truncate_sentence,
}


@dataclass(frozen=True)
class AttributeRule:
    sheet: str
    column: str
    label: str
    transforms: tuple[str, ...] = ()


class AttributeFormatter:
    """Ordered attribute rules sharing a default sheet and transform chain."""

    def __init__(self, default_sheet: str | None = None, default_transforms: Iterable[str] = ()) -> None:
        self.default_sheet = default_sheet
        self.default_transforms = tuple(default_transforms)
        for name in self.default_transforms:
            _lookup_transform(name)
        self._rules: list[AttributeRule] = []

    @property
    def rules(self) -> tuple[AttributeRule, ...]:
        return tuple(self._rules)

    def add(
        self,
        column: str,
        label: str | None = None,
        transforms: Iterable[str] | None = None,
        sheet: str | None = None,
    ) -> AttributeFormatter:
        sheet = sheet or self.default_sheet
        if not sheet:
            raise ValueError(f'No sheet given for attribute "{column}" and no default sheet set.')
        chain = self.default_transforms if transforms is None else tuple(transforms)
        for name in chain:
            _lookup_transform(name)
        self._rules.append(AttributeRule(sheet=sheet, column=column, label=label or column, transforms=chain))
        return self

    def format(self, record: RecordReader) -> str:
        lines: list[str] = []
        for rule in self._rules:
            value = record.get(rule.sheet, rule.column)
            if value == "" or value is None:
                continue
            text = cell_text(value)
            for name in rule.transforms:
                text = _lookup_transform(name)(text)
            if text == "":
                continue
            lines.append(f"{rule.label}: {text}")
        return format_bullet_list(lines)


def _lookup_transform(name: str) -> Callable[[str], str]:
    try:
        return TRANSFORMS[name]
    except KeyError:
        raise UnknownTransformError(name) from None
