"""
PQ-Gram Distance

以兩個 profile 的多重集合交集估計樹的編輯距離：

    distance = 1 - 2 * |P1 ∩ P2| / (|P1| + |P2|)

|P1| + |P2| 為 bag 的總和（bag union），因此距離落在 [0, 1]，
0 代表 profile 完全相同。這是近似值，不是真正的樹編輯距離。

參考文獻:
    Augsten, N., Böhlen, M., & Gamper, J. (2005). Approximate matching of
    hierarchical data using pq-grams. VLDB 2005.
"""

import logging
from typing import Callable, Optional, Tuple

from .adapters import as_labelled_tree
from .cache import ProfileCache
from .labelled_tree import LabelledTree
from .pqgram import PQGramExtractor
from .profile import PQGram, Profile

logger = logging.getLogger(__name__)

GramSimilarity = Callable[[PQGram, PQGram], Tuple[float, int]]


def default_gram_similarity(left: PQGram, right: PQGram) -> Tuple[float, int]:
    """
    預設的 gram 比較函數

    相同的 gram 回傳 (1.0, 0)，不同則回傳 (0.0, -1 或 1)，
    ordering 指出哪一邊應該前進。沒有中間值。
    """
    left_key = left.sort_key()
    right_key = right.sort_key()
    if left_key == right_key:
        return 1.0, 0
    return 0.0, (-1 if left_key < right_key else 1)


def profile_intersection(left: Profile,
                         right: Profile,
                         gram_similarity: Optional[GramSimilarity] = None) -> float:
    """
    以合併走訪 (merge walk) 計算兩個已排序 profile 的交集

    Args:
        left: 第一個 profile
        right: 第二個 profile
        gram_similarity: f(g1, g2) -> (closeness, ordering)
            closeness 介於 [0, 1]；ordering < 0 前進 left，> 0 前進 right，0 兩邊都前進

    Returns:
        float: 交集大小，不超過 min(|left|, |right|)
    """
    left.check_compatible(right)
    gram_similarity = gram_similarity or default_gram_similarity

    left_grams = left.sorted_grams()
    right_grams = right.sorted_grams()

    intersection = 0.0
    i = j = 0
    while i < len(left_grams) and j < len(right_grams):
        closeness, ordering = gram_similarity(left_grams[i], right_grams[j])
        intersection += min(max(closeness, 0.0), 1.0)
        if ordering == 0:
            i += 1
            j += 1
        elif ordering < 0:
            i += 1
        else:
            j += 1

    # 只前進一邊的步驟也會計分，因此上限取較小的 profile
    return min(intersection, float(min(len(left_grams), len(right_grams))))


def _normalized(intersection: float, left: Profile, right: Profile) -> float:
    total = len(left) + len(right)
    if total == 0:
        logger.debug("Both profiles are empty, distance defined as 0")
        return 0.0
    return 1.0 - 2.0 * intersection / total


def pqgram_distance(left: Profile, right: Profile) -> float:
    """
    Normalized pq-gram distance in [0, 1].

    Raises:
        ConfigurationMismatch: profiles built with different (p, q)
    """
    return _normalized(left.intersection_size(right), left, right)


def pqgram_distance_with_fn(left: Profile,
                            right: Profile,
                            gram_similarity: GramSimilarity) -> float:
    """
    Normalized distance where ``gram_similarity`` scores how close two grams
    are. With ``default_gram_similarity`` this equals ``pqgram_distance``.
    """
    intersection = profile_intersection(left, right, gram_similarity)
    return _normalized(intersection, left, right)


def pqgram_edit_distance(left: Profile, right: Profile) -> int:
    """Unnormalized approximation: |P1| + |P2| - 2|P1 ∩ P2|."""
    return left.symmetric_difference_size(right)


def pqgram_similarity(left: Profile, right: Profile) -> float:
    return 1.0 - pqgram_distance(left, right)


class PQGramDistance:
    """
    PQ-Gram 距離計算器

    直接接受兩棵樹，內部抽取 profile 後比較。

    Attributes:
        extractor: PQGramExtractor
        cache: 可選的 ProfileCache（必須與 extractor 設定相同）
    """

    def __init__(self, p: int = 2, q: int = 3, cache: Optional[ProfileCache] = None):
        """
        初始化距離計算器

        Args:
            p: 祖先視窗長度
            q: 兄弟視窗長度
            cache: 可選的 profile 快取
        """
        self.extractor = PQGramExtractor(p, q)
        if cache is not None and cache.configuration != self.extractor.configuration:
            raise ValueError(
                f"Cache configuration {cache.configuration} does not match "
                f"(p, q)={self.extractor.configuration}"
            )
        self.cache = cache

    @property
    def p(self) -> int:
        return self.extractor.p

    @property
    def q(self) -> int:
        return self.extractor.q

    def profile(self, tree: LabelledTree) -> Profile:
        if self.cache is not None:
            return self.cache.extract(tree)
        return self.extractor.extract(tree)

    def compute(self, tree1: LabelledTree, tree2: LabelledTree) -> float:
        """
        計算兩棵樹之間的 pq-gram 距離

        Returns:
            float: 距離 [0, 1]
        """
        return pqgram_distance(self.profile(tree1), self.profile(tree2))

    def compute_similarity(self, tree1: LabelledTree, tree2: LabelledTree) -> float:
        """
        計算兩棵樹的相似度（0-1之間，越大越相似）
        """
        return 1.0 - self.compute(tree1, tree2)

    def compute_edit_distance(self, tree1: LabelledTree, tree2: LabelledTree) -> int:
        return pqgram_edit_distance(self.profile(tree1), self.profile(tree2))


# 便捷函數
def compute_pqgram_distance(tree1, tree2, p: int = 2, q: int = 3) -> float:
    """
    計算兩棵樹（LabelledTree 或 DEAP Individual）的 pq-gram 距離

    Returns:
        float: 距離 [0, 1]
    """
    scorer = PQGramDistance(p, q)
    return scorer.compute(as_labelled_tree(tree1), as_labelled_tree(tree2))


def compute_pqgram_similarity(tree1, tree2, p: int = 2, q: int = 3) -> float:
    """
    計算兩棵樹（LabelledTree 或 DEAP Individual）的相似度

    Returns:
        float: 相似度 [0, 1]
    """
    scorer = PQGramDistance(p, q)
    return scorer.compute_similarity(as_labelled_tree(tree1), as_labelled_tree(tree2))
