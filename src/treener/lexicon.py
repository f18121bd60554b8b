"""
Rule-based lexical triggers for Turkish named entities.

Each predicate takes a word that has already been lowercased with the
Turkish casing table and answers whether it is a trigger for one category:
an honorific ("bay", "bayan"), an organization suffix ("inc.", "a.ş."),
a money expression ("dolar", "TL'den", "$") or a time expression
("Pazartesi'den", "saat", "14:30").

Currency stems are matched by prefix, so "dolardan" is recognized. Short
abbreviations ("tl", "yen") only match on their own or followed by an
apostrophe suffix to avoid hitting ordinary words that merely start with
the same letters. Time words match bare, with an apostrophe suffix
("ocak'ta") or with a case or plural ending ("saatte"); derived words such
as "pazarlama" and "martı" do not.
"""

from __future__ import annotations

import re

from .models import LexicalPredicates

_HONORIFICS = frozenset({"bay", "bayan"})

# Organization suffix tokens as they appear after tokenization.
_ORGANIZATION_SUFFIXES = frozenset({
    "corp", "corp.", "inc", "inc.", "co", "co.", "ltd", "ltd.",
    "a.ş", "a.ş.", "şti", "şti.", "llc", "plc",
})

# Currency words that take suffixes directly ("dolardan", "liralık").
_MONEY_STEMS = (
    "dolar", "sterlin", "paunt", "ruble", "frank", "lira", "avro", "euro",
    "kuruş",
)

# Currency abbreviations: bare or apostrophe-suffixed only ("tl", "tl'den").
_MONEY_ABBREVIATIONS = ("tl", "ytl", "usd", "eur", "yen", "mark", "ons", "sent", "cent")

_MONEY_RE = re.compile(
    r"^(?:"
    r"(?:" + "|".join(_MONEY_STEMS) + r")\w*(?:['’]\w*)?"
    r"|(?:" + "|".join(_MONEY_ABBREVIATIONS) + r")(?:['’]\w*)?"
    r")$"
)

_CURRENCY_SYMBOLS = ("$", "€", "£", "₺")

_DAYS = ("pazartesi", "salı", "çarşamba", "perşembe", "cuma", "cumartesi", "pazar")
_MONTHS = (
    "ocak", "şubat", "mart", "nisan", "mayıs", "haziran", "temmuz",
    "ağustos", "eylül", "ekim", "kasım", "aralık",
)
_TIME_UNITS = ("saat", "dakika", "saniye")
_DAY_PARTS = ("sabah", "öğle", "akşam", "gece")

_TIME_WORDS = _DAYS + _MONTHS + _TIME_UNITS + _DAY_PARTS

# Case and plural endings a time word takes without an apostrophe
# ("saatte", "dakikadan", "akşamları"). Closed so that derived words
# ("pazarlama", "martı", "aralıklı") stay out.
_TIME_ENDINGS = (
    "da", "de", "ta", "te", "dan", "den", "tan", "ten",
    "lar", "ler", "ları", "leri",
)

_TIME_WORD_RE = re.compile(
    r"^(?:" + "|".join(_TIME_WORDS) + r")"
    r"(?:['’]\w*|" + "|".join(_TIME_ENDINGS) + r")?$"
)

# 9:30, 14.30, 14:30:15, optionally followed by an apostrophe suffix.
_CLOCK_RE = re.compile(r"^\d{1,2}[:.]\d{2}(?:[:.]\d{2})?(?:['’]\w*)?$")

# Years 1900-2099 only with an apostrophe suffix ("1990'da"); a bare
# four digit number is as likely a count ("2000 kişi").
_YEAR_RE = re.compile(r"^(?:19|20)\d{2}['’]\w+$")


def is_honorific(word: str) -> bool:
    return word in _HONORIFICS


def is_organization(word: str) -> bool:
    return word in _ORGANIZATION_SUFFIXES


def is_money(word: str) -> bool:
    """True for currency words, currency abbreviations and symbol amounts."""
    if any(symbol in word for symbol in _CURRENCY_SYMBOLS):
        return True
    return bool(_MONEY_RE.match(word))


def is_time(word: str) -> bool:
    """True for day, month, time-unit and day-part words, clock times and suffixed years."""
    return bool(_TIME_WORD_RE.match(word) or _CLOCK_RE.match(word) or _YEAR_RE.match(word))


def turkish_predicates() -> LexicalPredicates:
    """The default Turkish trigger set."""
    return LexicalPredicates(
        is_honorific=is_honorific,
        is_organization=is_organization,
        is_money=is_money,
        is_time=is_time,
    )
