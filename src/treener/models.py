"""
Pydantic models for TreeNER configuration and results.

All data structures shared between the detectors, the orchestrator and the
CLI are defined here. The parse tree itself lives in ``tree.py`` because its
nodes carry parent back-references that do not fit a value model.
"""

from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---

class NamedEntityType(str, Enum):
    PERSON = "PERSON"
    LOCATION = "LOCATION"
    ORGANIZATION = "ORGANIZATION"
    MONEY = "MONEY"
    TIME = "TIME"
    NONE = "NONE"


# --- Configuration ---

class NerConfig(BaseModel):
    """Configuration for an auto-NER run over one language view of a tree."""
    word_layer: str = "turkish"  # layer holding the surface word
    ner_layer: str = "ner"
    locale: str = "tr"  # casing table used for normalization
    proper_noun_tag: str = "NNP"
    numeral_tag: str = "CD"
    empty_tag: str = "-NONE-"  # empty-element constituents are never labeled


class LexicalPredicates(BaseModel):
    """
    The rule-based trigger tests, one per category.

    Each predicate receives an already-normalized (lowercased) word.
    """
    model_config = ConfigDict(frozen=True)

    is_honorific: Callable[[str], bool]
    is_organization: Callable[[str], bool]
    is_money: Callable[[str], bool]
    is_time: Callable[[str], bool]


# --- Results ---

class LeafLabel(BaseModel):
    """A single leaf and the label it ended up with."""
    index: int = Field(ge=0)
    word: str
    label: str  # the raw ner layer value, normally a NamedEntityType value


class NerReport(BaseModel):
    """Result returned after labeling a tree."""
    assigned: dict[NamedEntityType, int] = {}  # labels written by each pass
    labels: list[LeafLabel] = []
    source: str | None = None  # tree file path, when the tree came from disk

    def entities(self) -> list[LeafLabel]:
        """Leaves labeled with anything other than NONE."""
        return [leaf for leaf in self.labels if leaf.label != NamedEntityType.NONE]
