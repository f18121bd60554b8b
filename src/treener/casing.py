"""
Locale-aware lowercasing.

``str.lower`` maps "I" to "i" and "İ" to "i" plus a combining dot, which is
wrong for Turkic languages where I/ı and İ/i are distinct letter pairs.
Those locales get an explicit translation table applied before the generic
fold.
"""

from __future__ import annotations

_TURKIC_LOWER = str.maketrans({"I": "ı", "İ": "i"})

# Locales whose dotted/dotless i pairs need special handling.
_LOWER_TABLES: dict[str, dict[int, str]] = {
    "tr": _TURKIC_LOWER,
    "az": _TURKIC_LOWER,
}


def _language(locale: str) -> str:
    # "tr_TR", "tr-TR" and "TR" all select the Turkish table.
    return locale.replace("-", "_").split("_", 1)[0].lower()


def lower(word: str, locale: str = "tr") -> str:
    """Lowercase *word* using the casing rules of *locale*."""
    table = _LOWER_TABLES.get(_language(locale))
    if table is not None:
        word = word.translate(table)
    return word.lower()


def supported_locales() -> list[str]:
    """Locales with a dedicated lowercasing table."""
    return sorted(_LOWER_TABLES)
