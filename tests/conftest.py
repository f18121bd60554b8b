"""
Shared pytest fixtures for all TreeNER tests.

Provides builders for flat test sentences (one preterminal per word),
small in-memory gazetteers, and tree files on disk.
"""

from pathlib import Path

import pytest

from treener.gazetteer import Gazetteers
from treener.models import NamedEntityType
from treener.tree import ParseNode, ParseTree
from treener.tree_io import format_tree

# ---------------------------------------------------------------------------
# The example sentence, one (preterminal tag, word) pair per leaf
# ---------------------------------------------------------------------------

THY_SENTENCE = [
    ("NNP", "Türk"),
    ("NNP", "Hava"),
    ("NNP", "Yolları"),
    ("DT", "bu"),
    ("NNP", "Pazartesi'den"),
    ("IN", "itibaren"),
    ("NNP", "İstanbul"),
    ("NNP", "Ankara"),
    ("NN", "güzergahı"),
    ("IN", "için"),
    ("JJ", "indirimli"),
    ("NNS", "satışlarını"),
    ("CD", "90"),
    ("NN", "TL'den"),
    ("VB", "başlatacağını"),
    ("VBD", "açıkladı"),
]

THY_EXPECTED = [
    "ORGANIZATION", "ORGANIZATION", "ORGANIZATION", "NONE", "TIME", "NONE",
    "LOCATION", "LOCATION", "NONE", "NONE", "NONE", "NONE", "MONEY", "MONEY",
    "NONE", "NONE",
]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def build_sentence(tokens: list[tuple[str, str]], view: str = "turkish") -> ParseTree:
    """Build ``(S (TAG {view=word}) ...)`` with one preterminal per token."""
    root = ParseNode(tag="S")
    for tag, word in tokens:
        preterminal = root.add_child(ParseNode(tag=tag))
        preterminal.add_child(ParseNode(layers={view: word}))
    return ParseTree(root)


def ner_labels(tree: ParseTree, view: str = "turkish") -> list[str | None]:
    """The ner layer of every word leaf, in surface order."""
    return [
        node.get_layer("ner")
        for node in tree.root.iter_nodes()
        if node.is_leaf() and node.has_layer(view)
    ]


# ---------------------------------------------------------------------------
# Pytest fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_sentence():
    """Factory fixture returning ``build_sentence``."""
    return build_sentence


@pytest.fixture
def labels_of():
    """Factory fixture returning ``ner_labels``."""
    return ner_labels


@pytest.fixture
def gazetteers():
    """Small gazetteers covering the example sentence."""
    return Gazetteers.from_words({
        NamedEntityType.PERSON: ["Ahmet", "Ayşe", "Atatürk"],
        NamedEntityType.LOCATION: ["İstanbul", "Ankara", "İzmir"],
        NamedEntityType.ORGANIZATION: ["Türk", "Hava", "Yolları", "İMKB"],
    })


@pytest.fixture
def thy_tree():
    """The example sentence as an in-memory tree."""
    return build_sentence(THY_SENTENCE)


@pytest.fixture
def gazetteer_dir(tmp_path) -> Path:
    """A gazetteer directory on disk matching the ``gazetteers`` fixture."""
    directory = tmp_path / "gazetteers"
    directory.mkdir()
    (directory / "gazetteer-person.txt").write_text("Ahmet\nAyşe\nAtatürk\n", encoding="utf-8")
    (directory / "gazetteer-location.txt").write_text("İstanbul\nAnkara\nİzmir\n", encoding="utf-8")
    (directory / "gazetteer-organization.txt").write_text(
        "Türk\nHava\nYolları\nİMKB\n", encoding="utf-8",
    )
    return directory


@pytest.fixture
def thy_tree_file(tmp_path) -> Path:
    """The example sentence written as a layered tree file."""
    path = tmp_path / "0001.train"
    path.write_text(format_tree(build_sentence(THY_SENTENCE).root) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def thy_expected() -> list[str]:
    """Expected labels for the example sentence, in surface order."""
    return list(THY_EXPECTED)
