"""
外部樹格式轉換

目前支援 DEAP 的 PrimitiveTree（前序排列的 Primitive / Terminal 列表）。
"""

from typing import Any, Optional

from deap import gp

from .labelled_tree import LabelledTree
from .tree import Tree


def deap_to_tree(individual) -> Optional[Tree]:
    """
    將 DEAP Individual 轉換為 Tree

    Args:
        individual: DEAP Individual (PrimitiveTree)

    Returns:
        Tree: 轉換後的樹，空的 individual 回傳 None
    """
    if not individual:
        return None

    # 從尾端往前掃描，用堆疊組合子樹
    stack = []

    for node in reversed(individual):
        if isinstance(node, gp.Primitive):
            children = [stack.pop() for _ in range(node.arity)]
            stack.append(Tree(node.name, children))

        elif isinstance(node, gp.Terminal):
            stack.append(Tree(str(node.value)))

        else:
            raise TypeError(f"不支援的節點類型: {type(node)}")

    if len(stack) != 1:
        raise ValueError(f"Malformed PrimitiveTree: {len(stack)} roots after conversion")

    return stack[0]


def as_labelled_tree(obj: Any) -> LabelledTree:
    """
    Return ``obj`` when it already exposes label/children, convert DEAP
    PrimitiveTrees, reject everything else.

    Raises:
        ValueError: empty PrimitiveTree
        TypeError: unsupported type
    """
    if isinstance(obj, gp.PrimitiveTree):
        if not obj:
            raise ValueError("Cannot convert an empty PrimitiveTree")
        return deap_to_tree(obj)
    if isinstance(obj, LabelledTree):
        return obj
    raise TypeError(f"不支援的類型: {type(obj)}")
