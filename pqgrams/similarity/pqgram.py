"""
PQ-Gram Profile 抽取

基於 Augsten 等人提出的 pq-gram 定義：對每個節點，將其自身與 p-1 個最近祖先
的標籤，和子節點序列上長度 q 的滑動視窗組合成一個 pq-gram。
視窗在邊界處以 Filler 補位。

- 葉節點產生 1 個 pq-gram（兄弟視窗全為 Filler）
- 有 k 個子節點的節點產生 k + q - 1 個 pq-gram

參考文獻:
    Augsten, N., Böhlen, M., & Gamper, J. (2005). Approximate matching of
    hierarchical data using pq-grams. VLDB 2005, 301-312.
"""

import logging
import numbers
from collections import deque
from typing import Iterable, List

from .exceptions import InvalidConfiguration
from .labelled_tree import FILLER, LabelledTree
from .profile import PQGram, Profile

logger = logging.getLogger(__name__)


def validate_configuration(p, q) -> None:
    """
    檢查 p、q 是否為 >= 1 的整數（接受 numpy 整數，拒絕 bool）

    Raises:
        InvalidConfiguration: p 或 q 不合法
    """
    for value in (p, q):
        if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
            raise InvalidConfiguration(p, q)


class PQGramExtractor:
    """
    PQ-Gram 抽取器

    Attributes:
        p: 祖先視窗長度（含節點本身）
        q: 兄弟視窗長度
        sort: 是否以標準順序儲存 profile
    """

    def __init__(self, p: int = 2, q: int = 3, sort: bool = False):
        validate_configuration(p, q)
        # deque(maxlen=...) 只接受內建 int
        self.p = int(p)
        self.q = int(q)
        self.sort = sort

    @property
    def configuration(self):
        return (self.p, self.q)

    def extract(self, tree: LabelledTree) -> Profile:
        """
        計算一棵樹的 PQ-Gram profile

        Args:
            tree: 任何符合 LabelledTree 的樹

        Returns:
            Profile: 該樹在 (p, q) 下的 profile
        """
        ancestors = deque([FILLER] * self.p, maxlen=self.p)
        grams: List[PQGram] = []
        self._profile_subtree(tree, ancestors, grams)

        if self.sort:
            grams.sort(key=PQGram.sort_key)

        logger.debug("Extracted %d pq-grams (p=%d, q=%d)", len(grams), self.p, self.q)
        return Profile(grams, self.p, self.q)

    def extract_many(self, trees: Iterable[LabelledTree]) -> List[Profile]:
        return [self.extract(tree) for tree in trees]

    def _profile_subtree(self, node: LabelledTree, ancestors: deque, grams: List[PQGram]):
        """
        前序遍歷的遞迴輔助函數

        ancestors 由呼叫者提供一份屬於此路徑的副本，這裡可以直接修改。
        """
        ancestors.append(node.label)
        siblings = deque([FILLER] * self.q, maxlen=self.q)

        children = node.children
        if not children:
            grams.append(PQGram(tuple(ancestors), tuple(siblings)))
            return

        for child in children:
            siblings.append(child.label)
            grams.append(PQGram(tuple(ancestors), tuple(siblings)))
            self._profile_subtree(child, ancestors.copy(), grams)

        for _ in range(self.q - 1):
            siblings.append(FILLER)
            grams.append(PQGram(tuple(ancestors), tuple(siblings)))


def pqgram_profile(tree: LabelledTree, p: int = 2, q: int = 3, sort: bool = False) -> Profile:
    """
    計算一棵樹的 PQ-Gram profile（便捷函數）

    Args:
        tree: 任何符合 LabelledTree 的樹
        p: 祖先視窗長度
        q: 兄弟視窗長度
        sort: 是否排序

    Returns:
        Profile
    """
    return PQGramExtractor(p, q, sort=sort).extract(tree)


def expected_profile_size(tree: LabelledTree, q: int) -> int:
    """
    Number of pq-grams a tree yields: 1 per leaf, k + q - 1 per node with
    k children. Independent of p.
    """
    validate_configuration(1, q)
    children = tree.children
    if not children:
        return 1
    return len(children) + q - 1 + sum(expected_profile_size(child, q) for child in children)
