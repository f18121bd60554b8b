"""
In-memory parse trees with layered leaf data.

Internal nodes carry a syntactic category tag (``NP``, ``NNP``, ``CD`` ...).
Leaves carry a layer map keyed by view name: the surface word for each
language (``turkish``, ``english``) and annotation layers such as ``ner``.
Every node except the root holds a back-reference to its parent.

``collect_nodes`` is the traversal used by the detectors: a depth-first,
left-to-right walk that returns the nodes satisfying a condition in surface
order. It only reads structure, so it can be called again on a tree whose
labels have changed in between.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

NodeCondition = Callable[["ParseNode"], bool]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class StructuralError(ValueError):
    """Raised when an operation does not fit the shape of the tree."""


# ---------------------------------------------------------------------------
# Nodes
# ---------------------------------------------------------------------------

class ParseNode:
    """A constituent of a parse tree."""

    def __init__(
        self,
        tag: str | None = None,
        layers: dict[str, str] | None = None,
    ) -> None:
        self.tag = tag
        self.layers: dict[str, str] = dict(layers or {})
        self.parent: ParseNode | None = None
        self.children: list[ParseNode] = []

    def __repr__(self) -> str:
        if self.is_leaf():
            return f"ParseNode(layers={self.layers!r})"
        return f"ParseNode(tag={self.tag!r}, children={len(self.children)})"

    def add_child(self, child: ParseNode) -> ParseNode:
        """Append *child* and point its parent reference at this node."""
        if self.layers:
            raise StructuralError("Leaf nodes carrying layer data cannot have children.")
        if child.parent is not None:
            raise StructuralError("Node already belongs to another parent.")
        child.parent = self
        self.children.append(child)
        return child

    def is_leaf(self) -> bool:
        return not self.children

    def parent_tag(self) -> str | None:
        """Category tag of the parent, or None for a parentless node."""
        if self.parent is None:
            return None
        return self.parent.tag

    # --- layer access ---

    def has_layer(self, view: str) -> bool:
        return view in self.layers

    def get_layer(self, view: str) -> str | None:
        return self.layers.get(view)

    def set_layer(self, view: str, value: str) -> None:
        if not self.is_leaf():
            raise StructuralError(
                f"Cannot set layer '{view}' on internal node '{self.tag}'."
            )
        self.layers[view] = value

    def iter_nodes(self) -> Iterator[ParseNode]:
        """Yield this node and its descendants in depth-first, left-to-right order."""
        stack: list[ParseNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class ParseTree:
    """A parse tree and, when it was read from disk, the file it came from."""

    def __init__(self, root: ParseNode, file_path: str | Path | None = None) -> None:
        self.root = root
        self.file_path = Path(file_path) if file_path is not None else None

    def __repr__(self) -> str:
        return f"ParseTree(root={self.root!r}, file_path={self.file_path!r})"

    def leaf_count(self) -> int:
        return sum(1 for node in self.root.iter_nodes() if node.is_leaf())


# ---------------------------------------------------------------------------
# Leaf collection
# ---------------------------------------------------------------------------

def collect_nodes(root: ParseNode, condition: NodeCondition) -> list[ParseNode]:
    """
    Return every node under *root* (inclusive) that satisfies *condition*.

    Nodes are returned in depth-first, left-to-right order, which for leaf
    conditions equals the surface order of the sentence.
    """
    return [node for node in root.iter_nodes() if condition(node)]


def is_leaf() -> NodeCondition:
    """Condition accepting every terminal node."""
    return lambda node: node.is_leaf()


def is_leaf_node(view: str, empty_tag: str = "-NONE-") -> NodeCondition:
    """
    Condition accepting leaves that carry a word for *view*.

    Leaves under an empty-element constituent (traces, dropped pronouns)
    are skipped. A leaf without a parent is accepted.
    """
    def condition(node: ParseNode) -> bool:
        if not node.is_leaf() or not node.has_layer(view):
            return False
        return node.parent_tag() != empty_tag

    return condition
