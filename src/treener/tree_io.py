"""
Reading and writing layered bracketed parse trees.

Tree files hold one tree per file in the treebank bracket notation, with
each leaf written as a run of ``{layer=value}`` pairs:

    (S (NP (NNP {turkish=Türk}{english=Turkish})) (VP (VBD {turkish=açıkladı})))

A leaf written as a plain word (``(NNP John)``) is stored under a default
layer. ``save_tree`` is the persistence step used after auto-NER: it writes
the tree, including any new ``ner`` layer values, back to its source file.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path

from .tree import ParseNode, ParseTree, StructuralError, collect_nodes, is_leaf_node

logger = logging.getLogger(__name__)

_LAYER_RE = re.compile(r"\{([^={}]+)=([^{}]*)\}")


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class TreeLoadError(Exception):
    """Raised when a tree file cannot be loaded."""

    def __init__(self, message: str, position: int | None = None) -> None:
        if position is not None:
            message = f"{message} (at character {position})"
        super().__init__(message)
        self.position = position


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

class _TreeParser:
    """Recursive-descent parser over the bracket notation."""

    def __init__(self, text: str, default_layer: str) -> None:
        self.text = text
        self.pos = 0
        self.default_layer = default_layer

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.text) and self.text[self.pos].isspace():
            self.pos += 1

    def _peek(self) -> str:
        if self.pos >= len(self.text):
            raise TreeLoadError("Unexpected end of tree", self.pos)
        return self.text[self.pos]

    def parse(self) -> ParseNode:
        self._skip_whitespace()
        if self.pos >= len(self.text):
            raise TreeLoadError("Tree text is empty")
        root = self._parse_node()
        self._skip_whitespace()
        if self.pos != len(self.text):
            raise TreeLoadError("Unexpected text after the root constituent", self.pos)
        return root

    def _parse_node(self) -> ParseNode:
        if self._peek() != "(":
            raise TreeLoadError("Expected '('", self.pos)
        self.pos += 1
        start = self.pos
        while self.pos < len(self.text) and not self.text[self.pos].isspace() \
                and self.text[self.pos] not in "()":
            self.pos += 1
        node = ParseNode(tag=self.text[start:self.pos])

        while True:
            self._skip_whitespace()
            char = self._peek()
            if char == ")":
                self.pos += 1
                return node
            if char == "(":
                node.add_child(self._parse_node())
            else:
                node.add_child(self._parse_leaf())

    def _parse_leaf(self) -> ParseNode:
        start = self.pos
        depth = 0
        while True:
            char = self._peek()
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
            elif depth == 0 and char in "()":
                break
            self.pos += 1
        raw = self.text[start:self.pos].strip()
        return ParseNode(layers=self._parse_layers(raw, start))

    def _parse_layers(self, raw: str, start: int) -> dict[str, str]:
        if not raw.startswith("{"):
            if "{" in raw or "}" in raw:
                raise TreeLoadError("Malformed leaf layer data", start)
            return {self.default_layer: raw}
        layers: dict[str, str] = {}
        end = 0
        for match in _LAYER_RE.finditer(raw):
            if raw[end:match.start()].strip():
                raise TreeLoadError("Malformed leaf layer data", start + end)
            layers[match.group(1).strip()] = match.group(2)
            end = match.end()
        if raw[end:].strip() or not layers:
            raise TreeLoadError("Malformed leaf layer data", start + end)
        return layers


def parse_tree(text: str, default_layer: str = "english") -> ParseNode:
    """
    Parse bracketed tree text and return the root node.

    Raises:
        TreeLoadError: If the brackets are unbalanced or a leaf's layer data
            is malformed.
    """
    return _TreeParser(text, default_layer).parse()


def load_tree(file_path: str | Path, default_layer: str = "english") -> ParseTree:
    """
    Load a tree file.

    Raises:
        FileNotFoundError: If the file does not exist.
        TreeLoadError: If the file does not hold a single well-formed tree.
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Tree file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise TreeLoadError(f"Tree file is not valid UTF-8: {path}") from exc
    try:
        root = parse_tree(text, default_layer=default_layer)
    except TreeLoadError as exc:
        raise TreeLoadError(f"{path}: {exc}") from exc
    return ParseTree(root, file_path=path)


def iter_tree_files(directory: str | Path, pattern: str = "*") -> Iterator[Path]:
    """Yield the tree files of a treebank directory in sorted order."""
    base = Path(directory)
    if not base.is_dir():
        raise FileNotFoundError(f"Treebank directory not found: {base}")
    for path in sorted(base.glob(pattern)):
        if path.is_file() and not path.name.startswith("."):
            yield path


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------

def format_leaf(node: ParseNode) -> str:
    """
    Render a leaf as its ``{layer=value}`` pairs.

    Raises:
        StructuralError: If a layer name or value holds a brace, or a name
            holds ``=``, which the bracket notation cannot represent.
    """
    for name, value in node.layers.items():
        if any(mark in name for mark in "{}=") or any(mark in value for mark in "{}"):
            raise StructuralError(f"Layer '{name}={value}' cannot be written in bracket notation.")
    return "".join(f"{{{name}={value}}}" for name, value in node.layers.items())


def format_tree(node: ParseNode) -> str:
    """Render *node* and its subtree in bracket notation."""
    if node.is_leaf() and node.layers:
        return format_leaf(node)
    parts = [format_tree(child) for child in node.children]
    inner = " ".join([node.tag or ""] + parts) if parts else (node.tag or "")
    return f"({inner})"


def save_tree(tree: ParseTree, file_path: str | Path | None = None) -> Path:
    """
    Write *tree* to *file_path*, or back to the file it was loaded from.

    Raises:
        ValueError: If no destination is given and the tree has no source file.
        StructuralError: If a leaf layer cannot be written; the file is left untouched.
        OSError: If the file cannot be written.
    """
    destination = Path(file_path) if file_path is not None else tree.file_path
    if destination is None:
        raise ValueError("Tree has no source file; pass an explicit destination.")
    text = format_tree(tree.root) + "\n"
    destination.write_text(text, encoding="utf-8")
    logger.debug("Saved tree to %s.", destination)
    return destination


def format_labels(
    tree: ParseTree,
    view: str = "turkish",
    ner_layer: str = "ner",
    empty_tag: str = "-NONE-",
) -> str:
    """Render the leaves of *view* as ``word/LABEL`` tokens ("?" when unlabeled)."""
    leaves = collect_nodes(tree.root, is_leaf_node(view, empty_tag))
    return " ".join(
        f"{leaf.get_layer(view)}/{leaf.get_layer(ner_layer) or '?'}" for leaf in leaves
    )
