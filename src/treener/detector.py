"""
Per-category named-entity detectors over the ordered leaves of a parse tree.

Five detectors make up an auto-NER run:

- ``PersonDetector``: honorific under a proper-noun constituent, or a PERSON
  gazetteer hit.
- ``LocationDetector``: LOCATION gazetteer hit.
- ``OrganizationDetector``: organization suffix, or an ORGANIZATION
  gazetteer hit.
- ``MoneyDetector``: money trigger word, extended backward over the
  contiguous run of numeral leaves in front of it ("90 TL'den").
- ``TimeDetector``: time trigger word, extended backward onto at most one
  numeral leaf ("3 saat").

All of them write labels through ``label_if_absent`` so a leaf keeps the
first label it receives. Numeral leaves are recognized by the category tag
of their parent constituent, not by inspecting the word.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable

from .casing import lower
from .gazetteer import Gazetteers
from .models import LexicalPredicates, NamedEntityType, NerConfig
from .tree import ParseNode

logger = logging.getLogger(__name__)

WordPredicate = Callable[[str], bool]


def label_if_absent(node: ParseNode, category: NamedEntityType, ner_layer: str = "ner") -> bool:
    """
    Label *node* with *category* unless it already carries a label.

    Returns True if the label was written.
    """
    if node.has_layer(ner_layer):
        return False
    node.set_layer(ner_layer, category.value)
    return True


class CategoryDetector(ABC):
    """
    One detection pass for one category.

    Subclasses implement ``detect``, which receives the leaves of a tree in
    surface order, labels the ones it recognizes, and returns how many
    labels it wrote.
    """

    category: NamedEntityType

    def __init__(self, config: NerConfig | None = None) -> None:
        self.config = config or NerConfig()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(category={self.category.value})"

    @abstractmethod
    def detect(self, leaves: list[ParseNode]) -> int:
        """Label the recognized leaves and return the number of labels written."""

    def normalized_word(self, node: ParseNode) -> str:
        return lower(node.get_layer(self.config.word_layer) or "", self.config.locale)

    def is_labeled(self, node: ParseNode) -> bool:
        return node.has_layer(self.config.ner_layer)

    def label(self, node: ParseNode) -> bool:
        return label_if_absent(node, self.category, self.config.ner_layer)

    def has_numeral_parent(self, node: ParseNode) -> bool:
        # A parentless leaf compares as None and never counts as a numeral.
        return node.parent_tag() == self.config.numeral_tag


# ---------------------------------------------------------------------------
# Lookup detectors: trigger word and/or gazetteer, no propagation
# ---------------------------------------------------------------------------

class LookupDetector(CategoryDetector):
    """
    Labels leaves whose word matches a lexical trigger or the category
    gazetteer.

    The trigger and the gazetteer are checked independently; either one is
    enough. When ``trigger_parent_tag`` is set, the trigger only counts if
    the leaf's parent carries that tag. The gazetteer check has no such
    requirement.
    """

    def __init__(
        self,
        category: NamedEntityType,
        gazetteers: Gazetteers,
        trigger: WordPredicate | None = None,
        trigger_parent_tag: str | None = None,
        config: NerConfig | None = None,
    ) -> None:
        super().__init__(config)
        self.category = category
        self.gazetteers = gazetteers
        self.trigger = trigger
        self.trigger_parent_tag = trigger_parent_tag

    def _trigger_matches(self, node: ParseNode, word: str) -> bool:
        if self.trigger is None or not self.trigger(word):
            return False
        if self.trigger_parent_tag is None:
            return True
        return node.parent_tag() == self.trigger_parent_tag

    def detect(self, leaves: list[ParseNode]) -> int:
        assigned = 0
        for node in leaves:
            if self.is_labeled(node):
                continue
            word = self.normalized_word(node)
            if self._trigger_matches(node, word) and self.label(node):
                assigned += 1
            if self.gazetteers.contains(self.category, word) and self.label(node):
                assigned += 1
        logger.debug("%s pass labeled %d leaf(s).", self.category.value, assigned)
        return assigned


class PersonDetector(LookupDetector):
    """Honorifics ("bay", "bayan") under a proper-noun constituent, plus the PERSON gazetteer."""

    def __init__(
        self,
        gazetteers: Gazetteers,
        is_honorific: WordPredicate,
        config: NerConfig | None = None,
    ) -> None:
        config = config or NerConfig()
        super().__init__(
            NamedEntityType.PERSON,
            gazetteers,
            trigger=is_honorific,
            trigger_parent_tag=config.proper_noun_tag,
            config=config,
        )


class LocationDetector(LookupDetector):
    """LOCATION gazetteer membership only."""

    def __init__(self, gazetteers: Gazetteers, config: NerConfig | None = None) -> None:
        super().__init__(NamedEntityType.LOCATION, gazetteers, config=config)


class OrganizationDetector(LookupDetector):
    """Organization suffixes ("inc.", "a.ş.") plus the ORGANIZATION gazetteer."""

    def __init__(
        self,
        gazetteers: Gazetteers,
        is_organization: WordPredicate,
        config: NerConfig | None = None,
    ) -> None:
        super().__init__(
            NamedEntityType.ORGANIZATION,
            gazetteers,
            trigger=is_organization,
            config=config,
        )


# ---------------------------------------------------------------------------
# Propagating detectors: trigger word, then backward over numeral leaves
# ---------------------------------------------------------------------------

class PropagatingDetector(CategoryDetector):
    """
    Labels trigger leaves and the numeral leaves immediately before them.

    After labeling the trigger at index i, the leaves i-1, i-2, ... are
    visited while their parent carries the numeral tag, up to
    ``max_lookback`` leaves (None means no limit). The walk stops at the
    first leaf whose parent is not a numeral constituent, including a leaf
    with no parent at all. Leaves already labeled are passed over without
    being relabeled.
    """

    max_lookback: int | None = None

    def __init__(self, trigger: WordPredicate, config: NerConfig | None = None) -> None:
        super().__init__(config)
        self.trigger = trigger

    def _propagate(self, leaves: list[ParseNode], index: int) -> int:
        assigned = 0
        steps = 0
        j = index - 1
        while j >= 0:
            if self.max_lookback is not None and steps >= self.max_lookback:
                break
            previous = leaves[j]
            if not self.has_numeral_parent(previous):
                break
            if self.label(previous):
                assigned += 1
            steps += 1
            j -= 1
        return assigned

    def detect(self, leaves: list[ParseNode]) -> int:
        assigned = 0
        for i, node in enumerate(leaves):
            if self.is_labeled(node):
                continue
            if not self.trigger(self.normalized_word(node)):
                continue
            if self.label(node):
                assigned += 1
            assigned += self._propagate(leaves, i)
        logger.debug("%s pass labeled %d leaf(s).", self.category.value, assigned)
        return assigned


class MoneyDetector(PropagatingDetector):
    """Money words, extended over every contiguous numeral leaf before them."""

    category = NamedEntityType.MONEY
    max_lookback = None


class TimeDetector(PropagatingDetector):
    """Time words, extended onto the single numeral leaf right before them."""

    category = NamedEntityType.TIME
    max_lookback = 1


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------

def build_detectors(
    gazetteers: Gazetteers,
    predicates: LexicalPredicates,
    config: NerConfig | None = None,
) -> tuple[CategoryDetector, ...]:
    """
    Return the five detectors in priority order.

    The order is Person, Location, Organization, Money, Time. A leaf that
    several detectors would accept keeps the label of the earliest one.
    """
    config = config or NerConfig()
    return (
        PersonDetector(gazetteers, predicates.is_honorific, config=config),
        LocationDetector(gazetteers, config=config),
        OrganizationDetector(gazetteers, predicates.is_organization, config=config),
        MoneyDetector(predicates.is_money, config=config),
        TimeDetector(predicates.is_time, config=config),
    )
