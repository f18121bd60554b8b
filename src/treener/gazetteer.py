"""
Gazetteers: per-category sets of known entity surface forms.

A gazetteer file holds one entry per line. Entries are normalized with the
locale lowercasing from ``casing.py`` on load, so lookups take a word that
has been normalized the same way. Turkish attaches case suffixes with an
apostrophe (``Ankara'dan``), so a lookup that misses on the full word is
retried on the part before the first apostrophe.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .casing import lower
from .models import NamedEntityType

logger = logging.getLogger(__name__)

# Apostrophe variants seen in treebank text.
_APOSTROPHES = ("'", "’")

# File name expected for each category inside a gazetteer directory.
GAZETTEER_FILES: dict[NamedEntityType, str] = {
    NamedEntityType.PERSON: "gazetteer-person.txt",
    NamedEntityType.LOCATION: "gazetteer-location.txt",
    NamedEntityType.ORGANIZATION: "gazetteer-organization.txt",
}


class GazetteerLoadError(Exception):
    """Raised when a gazetteer file cannot be decoded."""


def _strip_suffix(word: str) -> str | None:
    """Return the stem before the first apostrophe, or None if there is none."""
    positions = [word.find(mark) for mark in _APOSTROPHES if mark in word]
    if not positions:
        return None
    return word[:min(positions)]


class Gazetteer:
    """A named, read-only set of normalized words."""

    def __init__(self, name: str, words: Iterable[str] = (), locale: str = "tr") -> None:
        self.name = name
        self.locale = locale
        self._words = frozenset(
            lower(word.strip(), locale) for word in words if word.strip()
        )

    def __len__(self) -> int:
        return len(self._words)

    def __repr__(self) -> str:
        return f"Gazetteer(name={self.name!r}, size={len(self._words)})"

    def contains(self, word: str) -> bool:
        """
        Return True if *word* (already normalized) is in the gazetteer.

        Falls back to the stem before an apostrophe, so "ankara'dan"
        matches an "ankara" entry.
        """
        if word in self._words:
            return True
        stem = _strip_suffix(word)
        return bool(stem) and stem in self._words


class Gazetteers:
    """The gazetteers for every category, keyed by entity type."""

    def __init__(self, gazetteers: dict[NamedEntityType, Gazetteer] | None = None) -> None:
        self._by_category: dict[NamedEntityType, Gazetteer] = dict(gazetteers or {})

    def __repr__(self) -> str:
        return f"Gazetteers({list(self._by_category.values())!r})"

    def get(self, category: NamedEntityType) -> Gazetteer | None:
        return self._by_category.get(category)

    def contains(self, category: NamedEntityType, word: str) -> bool:
        """Membership test; categories without a gazetteer never match."""
        gazetteer = self._by_category.get(category)
        if gazetteer is None:
            return False
        return gazetteer.contains(word)

    @classmethod
    def from_words(
        cls,
        words: dict[NamedEntityType, Iterable[str]],
        locale: str = "tr",
    ) -> Gazetteers:
        """Build gazetteers from in-memory word lists."""
        return cls({
            category: Gazetteer(category.value, entries, locale=locale)
            for category, entries in words.items()
        })


def load_gazetteer(
    file_path: str | Path,
    category: NamedEntityType,
    locale: str = "tr",
) -> Gazetteer:
    """
    Load a gazetteer file (UTF-8, one entry per line).

    Raises:
        FileNotFoundError: If the file does not exist.
        GazetteerLoadError: If the file is not valid UTF-8.
    """
    path = Path(file_path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except UnicodeDecodeError as exc:
        raise GazetteerLoadError(f"Gazetteer file is not valid UTF-8: {path}") from exc
    gazetteer = Gazetteer(category.value, lines, locale=locale)
    logger.info("Loaded %s gazetteer with %d entries from %s.", category.value, len(gazetteer), path)
    return gazetteer


def load_gazetteers(directory: str | Path | None, locale: str = "tr") -> Gazetteers:
    """
    Load every category gazetteer found in *directory*.

    Missing files produce an empty gazetteer for that category and a
    warning. Passing None returns empty gazetteers.
    """
    loaded: dict[NamedEntityType, Gazetteer] = {}
    base = Path(directory) if directory is not None else None
    for category, file_name in GAZETTEER_FILES.items():
        if base is not None and (base / file_name).is_file():
            loaded[category] = load_gazetteer(base / file_name, category, locale=locale)
            continue
        if base is not None:
            logger.warning("No %s gazetteer at %s; using an empty one.", category.value, base / file_name)
        loaded[category] = Gazetteer(category.value, locale=locale)
    return Gazetteers(loaded)
