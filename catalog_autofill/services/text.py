from __future__ import annotations

from collections.abc import Sequence

"""Text helpers used to render marketplace copy in Brazilian Portuguese."""

__all__ = [
    "BULLET",
    "format_bullet_list",
    "format_list",
    "uncapitalize",
    "remove_suffix",
    "truncate_sentence",
]

# EM QUAD followed by a bullet; marketplaces collapse leading ASCII spaces.
BULLET = "\u2001• "

_CONJUNCTION = " e "


def format_bullet_list(
    items: Sequence[str],
    prefix: str = BULLET,
    item_end: str = ";",
    last_item_end: str = ".",
) -> str:
    """Return ``items`` as a bulleted block, one item per line.

    Every item but the last ends with ``item_end``; the last ends with
    ``last_item_end``. An empty sequence renders as an empty string.

    >>> format_bullet_list(["apples", "oranges"])
    '\\u2001• apples;\\n\\u2001• oranges.'
    """
    if not items:
        return ""
    return prefix + (item_end + "\n" + prefix).join(items) + last_item_end


def format_list(items: Sequence[str]) -> str:
    """Join ``items`` as a pt-BR conjunction list (``a, b e c``)."""
    if not items:
        return ""
    if len(items) == 1:
        return items[0]
    return ", ".join(items[:-1]) + _CONJUNCTION + items[-1]


def uncapitalize(text: str) -> str:
    return text[:1].lower() + text[1:]


def remove_suffix(text: str, suffix: str) -> str:
    if suffix and text.endswith(suffix):
        return text[: len(text) - len(suffix)]
    return text


def truncate_sentence(text: str) -> str:
    """Strip one trailing period so the text can be embedded in a list item."""
    return remove_suffix(text, ".")
