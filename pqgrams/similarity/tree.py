"""
Generic Tree 與 TreeBuilder

提供一個最簡單的有序標籤樹實作，以及逐步建構樹的 builder，
主要用於測試與簡單情境。外部格式（DEAP、DOM 等）請透過 adapter 轉換。
"""

from typing import Any, Hashable, List, Optional

from .labelled_tree import LabelledTree


class Tree:
    """樹節點的統一表示"""

    def __init__(self, label: Hashable, children: Optional[List['Tree']] = None):
        """
        初始化樹節點

        Args:
            label: 節點標籤
            children: 子節點列表
        """
        self.label = label
        self.children = children if children is not None else []

    def add_node(self, child: 'Tree') -> 'Tree':
        """
        Append a child and return self, so nested trees can be written
        inline: ``Tree("a").add_node(Tree("b")).add_node(Tree("c"))``.
        """
        self.children.append(child)
        return self

    def is_leaf(self) -> bool:
        return not self.children

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Tree):
            return NotImplemented
        return self.label == other.label and self.children == other.children

    __hash__ = None

    def __repr__(self):
        return tree_to_bracket(self)


class TreeBuilder:
    """
    逐步建構 Tree 的 builder

    以游標 (cursor) 記錄目前所在節點：
    - leaf(label): 在目前節點下新增葉節點，不移動游標
    - push(label): 新增子節點並進入該節點
    - pop(): 回到父節點
    - build(): 回傳根節點

    Example:
        tree = (TreeBuilder("a")
                .push("a").leaf("e").leaf("b").pop()
                .leaf("b")
                .leaf("c")
                .build())
    """

    def __init__(self, root_label: Hashable):
        self._root = Tree(root_label)
        self._path: List[Tree] = [self._root]

    @property
    def current(self) -> Tree:
        return self._path[-1]

    @property
    def depth(self) -> int:
        """游標深度，根節點為 0"""
        return len(self._path) - 1

    def leaf(self, label: Hashable) -> 'TreeBuilder':
        self.current.add_node(Tree(label))
        return self

    def push(self, label: Hashable) -> 'TreeBuilder':
        child = Tree(label)
        self.current.add_node(child)
        self._path.append(child)
        return self

    def pop(self) -> 'TreeBuilder':
        if len(self._path) == 1:
            raise ValueError("Cannot pop above the root node")
        self._path.pop()
        return self

    def add_subtree(self, tree: Tree) -> 'TreeBuilder':
        """Attach an already built tree under the current node."""
        self.current.add_node(tree)
        return self

    def build(self) -> Tree:
        return self._root


def tree_to_bracket(node: LabelledTree) -> str:
    """
    將樹轉換為括號表示法，例如 {a{b}{c}}

    Args:
        node: 樹節點

    Returns:
        str: 括號表示法字符串
    """
    children_str = "".join(tree_to_bracket(child) for child in node.children)
    return f"{{{node.label}{children_str}}}"


def render_tree(node: LabelledTree, prefix: str = "", is_last: bool = True) -> List[str]:
    """
    以樹狀圖形式輸出樹結構

    Args:
        node: 樹節點
        prefix: 前綴字符串
        is_last: 是否為最後一個子節點

    Returns:
        List[str]: 每一行的文字
    """
    connector = "└── " if is_last else "├── "
    lines = [f"{prefix}{connector}{node.label}"]

    child_prefix = prefix + ("    " if is_last else "│   ")
    children = list(node.children)
    for i, child in enumerate(children):
        lines.extend(render_tree(child, child_prefix, i == len(children) - 1))
    return lines
