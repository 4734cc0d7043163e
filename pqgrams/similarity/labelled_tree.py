"""
Labelled Tree 抽象

PQ-Gram 演算法只依賴兩個能力：節點標籤 (label) 與有序子節點 (children)。
任何具有這兩個屬性的物件都可以直接計算 profile，不需要繼承任何基類。

Filler 是邊界補位用的哨兵值，位於所有真實標籤的值域之外，
因此字串 "*" 仍可作為合法的真實標籤使用。
"""

from typing import Any, Hashable, Protocol, Sequence, runtime_checkable


class Filler:
    """Sentinel label used to pad ancestor and sibling windows."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "FILLER"

    def __eq__(self, other):
        return isinstance(other, Filler)

    def __hash__(self):
        return hash(Filler)

    def __reduce__(self):
        # pickle 時還原為同一個模組層級單例
        return "FILLER"


FILLER = Filler()


def is_filler(label: Any) -> bool:
    """判斷標籤是否為 Filler"""
    return isinstance(label, Filler)


def label_sort_key(label: Any) -> tuple:
    """
    排序鍵：Filler 排在所有真實標籤之前

    Args:
        label: 真實標籤或 FILLER

    Returns:
        tuple: 可比較的排序鍵
    """
    if is_filler(label):
        return (0,)
    return (1, label)


@runtime_checkable
class LabelledTree(Protocol):
    """
    Capability contract for anything that can be PQ-Grammed.

    A conforming object exposes ``label`` (a hashable value) and ``children``
    (an ordered, finite sequence of conforming objects; empty for a leaf).
    The structure must be a strict tree: shared or cyclic references are not
    detected and make the traversal recurse without bound.
    """

    label: Hashable
    children: Sequence["LabelledTree"]


def tree_key(tree: LabelledTree) -> tuple:
    """
    產生樹的結構鍵 (label, (child_key, ...))

    兩棵樹的結構鍵相等若且唯若它們的形狀與標籤完全相同，
    可作為快取或去重的 key。
    """
    return (tree.label, tuple(tree_key(child) for child in tree.children))


def count_nodes(tree: LabelledTree) -> int:
    """Count total nodes in a tree."""
    if tree is None:
        return 0
    return 1 + sum(count_nodes(child) for child in tree.children)
