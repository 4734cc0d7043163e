"""
Tree / TreeBuilder / Labelled Tree 單元測試
"""

import copy
import pickle
import sys
from pathlib import Path

import pytest

# 添加專案根目錄到路徑
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from pqgrams.similarity.labelled_tree import (
    FILLER,
    Filler,
    LabelledTree,
    count_nodes,
    is_filler,
    label_sort_key,
    tree_key
)
from pqgrams.similarity.tree import Tree, TreeBuilder, render_tree, tree_to_bracket


class TestFiller:

    def test_singleton(self):
        assert Filler() is FILLER
        assert copy.copy(FILLER) is FILLER
        assert copy.deepcopy(FILLER) is FILLER

    def test_pickle_keeps_identity(self):
        assert pickle.loads(pickle.dumps(FILLER)) is FILLER

    def test_not_equal_to_real_labels(self):
        for label in ("*", "", None, 0, "FILLER"):
            assert FILLER != label
            assert not is_filler(label)
        assert is_filler(FILLER)

    def test_sorts_before_labels(self):
        labels = ["b", FILLER, "a"]
        assert sorted(labels, key=label_sort_key) == [FILLER, "a", "b"]


class TestTree:

    def test_bracket_representation(self):
        tree = Tree("a", [Tree("b"), Tree("c", [Tree("d")])])
        assert repr(tree) == "{a{b}{c{d}}}"
        assert tree_to_bracket(tree) == "{a{b}{c{d}}}"

    def test_add_node_chains(self):
        tree = Tree("a").add_node(Tree("b")).add_node(Tree("c"))
        assert [child.label for child in tree.children] == ["b", "c"]
        assert not tree.is_leaf()
        assert tree.children[0].is_leaf()

    def test_structural_equality(self):
        assert Tree("a", [Tree("b")]) == Tree("a", [Tree("b")])
        assert Tree("a", [Tree("b")]) != Tree("a", [Tree("c")])
        assert Tree("a", [Tree("b"), Tree("c")]) != Tree("a", [Tree("c"), Tree("b")])

    def test_satisfies_protocol(self):
        assert isinstance(Tree("a"), LabelledTree)
        assert not isinstance("a", LabelledTree)

    def test_count_nodes_and_key(self):
        tree = Tree("a", [Tree("b"), Tree("c", [Tree("d")])])
        assert count_nodes(tree) == 4
        assert count_nodes(None) == 0
        assert tree_key(tree) == ("a", (("b", ()), ("c", (("d", ()),))))
        assert tree_key(tree) == tree_key(copy.deepcopy(tree))

    def test_render_tree(self):
        tree = Tree("add", [Tree("x"), Tree("mul", [Tree("x"), Tree("y")])])
        assert render_tree(tree) == [
            "└── add",
            "    ├── x",
            "    └── mul",
            "        ├── x",
            "        └── y",
        ]


class TestTreeBuilder:

    def test_build_nested(self):
        tree = (TreeBuilder("a")
                .push("a").leaf("e").leaf("b").pop()
                .leaf("b")
                .leaf("c")
                .build())
        assert repr(tree) == "{a{a{e}{b}}{b}{c}}"

    def test_cursor_depth(self):
        builder = TreeBuilder("root")
        assert builder.depth == 0
        builder.push("x").push("y")
        assert builder.depth == 2
        assert builder.current.label == "y"
        builder.pop()
        assert builder.current.label == "x"

    def test_add_subtree(self):
        subtree = Tree("s", [Tree("t")])
        tree = TreeBuilder("r").leaf("a").add_subtree(subtree).build()
        assert repr(tree) == "{r{a}{s{t}}}"

    def test_build_without_closing(self):
        """build() 不需要先 pop 回根節點"""
        tree = TreeBuilder("r").push("a").push("b").build()
        assert repr(tree) == "{r{a{b}}}"

    def test_pop_root_raises(self):
        with pytest.raises(ValueError, match="root"):
            TreeBuilder("r").pop()
