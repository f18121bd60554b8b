"""
TreeNER: rule-based named-entity annotation of parse tree leaves.

Labels each leaf as PERSON, LOCATION, ORGANIZATION, MONEY, TIME or NONE
using gazetteers, lexical triggers and numeral propagation.
"""

__version__ = "0.1.0"

from .auto_ner import TreeAutoNer, turkish_auto_ner
from .gazetteer import Gazetteer, GazetteerLoadError, Gazetteers, load_gazetteers
from .models import (
    LeafLabel,
    LexicalPredicates,
    NamedEntityType,
    NerConfig,
    NerReport,
)
from .tree import ParseNode, ParseTree, StructuralError

__all__ = [
    "Gazetteer",
    "GazetteerLoadError",
    "Gazetteers",
    "LeafLabel",
    "LexicalPredicates",
    "NamedEntityType",
    "NerConfig",
    "NerReport",
    "ParseNode",
    "ParseTree",
    "StructuralError",
    "TreeAutoNer",
    "load_gazetteers",
    "turkish_auto_ner",
]
