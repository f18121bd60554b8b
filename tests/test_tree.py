"""
Tests for treener.tree: node structure, layer access, and leaf collection.
"""

import pytest

from treener.tree import (
    ParseNode,
    ParseTree,
    StructuralError,
    collect_nodes,
    is_leaf,
    is_leaf_node,
)


def _np(*words: str) -> ParseNode:
    np = ParseNode(tag="NP")
    for word in words:
        np.add_child(ParseNode(tag="NN")).add_child(ParseNode(layers={"turkish": word}))
    return np


class TestParseNode:

    def test_add_child_sets_parent(self):
        parent = ParseNode(tag="NP")
        child = parent.add_child(ParseNode(tag="NN"))
        assert child.parent is parent
        assert parent.children == [child]
        assert child.parent_tag() == "NP"

    def test_root_has_no_parent_tag(self):
        assert ParseNode(tag="S").parent_tag() is None

    def test_leaf_with_layers_cannot_have_children(self):
        leaf = ParseNode(layers={"turkish": "ev"})
        with pytest.raises(StructuralError):
            leaf.add_child(ParseNode(tag="NN"))

    def test_child_cannot_be_reparented(self):
        child = ParseNode(tag="NN")
        ParseNode(tag="NP").add_child(child)
        with pytest.raises(StructuralError):
            ParseNode(tag="VP").add_child(child)

    def test_set_layer_on_internal_node_raises(self):
        with pytest.raises(StructuralError, match="internal node 'NP'"):
            _np("ev").set_layer("ner", "NONE")

    def test_layers(self):
        leaf = ParseNode(layers={"turkish": "ev", "english": "house"})
        assert leaf.has_layer("english")
        assert leaf.get_layer("turkish") == "ev"
        assert leaf.get_layer("ner") is None
        leaf.set_layer("ner", "NONE")
        assert leaf.get_layer("ner") == "NONE"


class TestCollectNodes:

    def test_surface_order(self):
        root = ParseNode(tag="S")
        root.add_child(_np("büyük", "ev"))
        vp = root.add_child(ParseNode(tag="VP"))
        vp.add_child(_np("kapı"))
        vp.add_child(ParseNode(tag="VBD")).add_child(ParseNode(layers={"turkish": "açtı"}))
        leaves = collect_nodes(root, is_leaf_node("turkish"))
        assert [leaf.get_layer("turkish") for leaf in leaves] == ["büyük", "ev", "kapı", "açtı"]

    def test_condition_filters_view(self):
        root = ParseNode(tag="S")
        root.add_child(ParseNode(tag="NN")).add_child(ParseNode(layers={"english": "house"}))
        root.add_child(ParseNode(tag="NN")).add_child(ParseNode(layers={"turkish": "ev"}))
        assert len(collect_nodes(root, is_leaf_node("turkish"))) == 1
        assert len(collect_nodes(root, is_leaf())) == 2

    def test_empty_elements_skipped(self):
        root = ParseNode(tag="S")
        root.add_child(ParseNode(tag="-NONE-")).add_child(ParseNode(layers={"turkish": "*0*"}))
        assert collect_nodes(root, is_leaf_node("turkish")) == []
        assert len(collect_nodes(root, is_leaf_node("turkish", empty_tag="-EMPTY-"))) == 1

    def test_parentless_leaf_accepted(self):
        leaf = ParseNode(layers={"turkish": "ev"})
        assert collect_nodes(leaf, is_leaf_node("turkish")) == [leaf]

    def test_repeated_collection_sees_same_nodes(self):
        root = _np("bir", "iki")
        first = collect_nodes(root, is_leaf_node("turkish"))
        first[0].set_layer("ner", "NONE")
        second = collect_nodes(root, is_leaf_node("turkish"))
        assert second == first
        assert second[0].get_layer("ner") == "NONE"


class TestParseTree:

    def test_leaf_count(self):
        assert ParseTree(_np("a", "b", "c")).leaf_count() == 3

    def test_file_path_is_path(self, tmp_path):
        tree = ParseTree(_np("a"), file_path=str(tmp_path / "t.txt"))
        assert tree.file_path == tmp_path / "t.txt"
