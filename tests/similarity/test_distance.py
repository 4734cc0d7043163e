"""
PQ-Gram Distance 單元測試
"""

import random
import sys
from pathlib import Path

import pytest

# 添加專案根目錄到路徑
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from pqgrams.similarity.cache import ProfileCache
from pqgrams.similarity.distance import (
    PQGramDistance,
    default_gram_similarity,
    profile_intersection,
    pqgram_distance,
    pqgram_distance_with_fn,
    pqgram_edit_distance,
    pqgram_similarity
)
from pqgrams.similarity.exceptions import ConfigurationMismatch
from pqgrams.similarity.pqgram import PQGramExtractor, pqgram_profile
from pqgrams.similarity.profile import Profile
from pqgrams.similarity.tree import Tree


def build_known_tree(last_label: str = "c") -> Tree:
    return (Tree("a")
            .add_node(Tree("a")
                      .add_node(Tree("e"))
                      .add_node(Tree("b")))
            .add_node(Tree("b"))
            .add_node(Tree(last_label)))


def build_random_tree(rng, max_depth: int) -> Tree:
    node = Tree(rng.choice("abcde"))
    if max_depth > 0:
        for _ in range(rng.randint(0, 3)):
            node.add_node(build_random_tree(rng, max_depth - 1))
    return node


def test_identical_trees():
    """測試相同樹的距離為 0"""
    prof1 = pqgram_profile(build_known_tree(), 2, 3)
    prof2 = pqgram_profile(build_known_tree(), 2, 3)

    distance = pqgram_distance(prof1, prof2)

    print(f"測試 1: 相同的樹")
    print(f"  距離: {distance}")

    assert distance == 0.0, f"相同的樹距離應該為 0，但得到 {distance}"
    assert pqgram_similarity(prof1, prof2) == 1.0
    assert pqgram_edit_distance(prof1, prof2) == 0


def test_known_distance():
    """測試已知範例：最後一個葉節點 c -> x，距離約 0.31"""
    prof1 = pqgram_profile(build_known_tree("c"), 2, 3)
    prof3 = pqgram_profile(build_known_tree("x"), 2, 3)

    distance = pqgram_distance(prof1, prof3)

    assert round(distance, 2) == 0.31, f"距離應該約為 0.31，但得到 {distance}"
    assert distance == pytest.approx(1 - 2 * 9 / 26)
    assert pqgram_edit_distance(prof1, prof3) == 8


def test_known_distance_when_sorted():
    prof1 = pqgram_profile(build_known_tree("c"), 2, 3, sort=True)
    prof3 = pqgram_profile(build_known_tree("x"), 2, 3, sort=True)
    assert round(pqgram_distance(prof1, prof3), 2) == 0.31


def test_single_leaf_change_is_local():
    """測試只改一個葉節點時，只有碰到該葉節點的 gram 會改變"""
    prof1 = pqgram_profile(build_known_tree("c"), 2, 3)
    prof3 = pqgram_profile(build_known_tree("x"), 2, 3)

    # 碰到 c 的 gram: 3 個父節點視窗 + 1 個 c 自己的 gram
    touching = sum(1 for row in prof1.flatten("*") if "c" in row)
    assert touching == 4
    assert prof1.intersection_size(prof3) == len(prof1) - touching


def test_completely_different_trees():
    """測試完全不同的樹距離為 1"""
    prof1 = pqgram_profile(Tree("a", [Tree("b")]), 2, 3)
    prof2 = pqgram_profile(Tree("x", [Tree("y", [Tree("z")])]), 2, 3)
    assert pqgram_distance(prof1, prof2) == 1.0
    assert pqgram_similarity(prof1, prof2) == 0.0


def test_symmetry_and_range():
    """測試距離對稱且落在 [0, 1]"""
    rng = random.Random(11)
    trees = [build_random_tree(rng, 3) for _ in range(20)]
    profiles = [pqgram_profile(t, 2, 2) for t in trees]

    for a in profiles:
        assert pqgram_distance(a, a) == 0.0
        for b in profiles:
            d_ab = pqgram_distance(a, b)
            assert d_ab == pqgram_distance(b, a)
            assert 0.0 <= d_ab <= 1.0


def test_both_empty_profiles():
    """兩個空 profile 的距離定義為 0"""
    assert pqgram_distance(Profile([], 2, 3), Profile([], 2, 3)) == 0.0


def test_mismatched_configuration_rejected():
    tree = build_known_tree()
    with pytest.raises(ConfigurationMismatch):
        pqgram_distance(pqgram_profile(tree, 2, 3), pqgram_profile(tree, 3, 3))
    with pytest.raises(ConfigurationMismatch):
        profile_intersection(pqgram_profile(tree, 2, 3), pqgram_profile(tree, 2, 2))


class TestDistanceWithFunction:

    def test_default_function_matches_counter_intersection(self):
        rng = random.Random(3)
        for _ in range(30):
            a = pqgram_profile(build_random_tree(rng, 3), 2, 3)
            b = pqgram_profile(build_random_tree(rng, 3), 2, 3)
            assert profile_intersection(a, b) == a.intersection_size(b)
            assert pqgram_distance_with_fn(a, b, default_gram_similarity) == \
                pytest.approx(pqgram_distance(a, b))

    def test_default_gram_similarity(self):
        profile = pqgram_profile(build_known_tree(), 2, 3, sort=True)
        first, second = profile.sorted_grams()[:2]
        assert default_gram_similarity(first, first) == (1.0, 0)
        assert default_gram_similarity(first, second) == (0.0, -1)
        assert default_gram_similarity(second, first) == (0.0, 1)

    def test_custom_function_partial_credit(self):
        """自訂函數：只要祖先相同就給 0.5 分"""
        def ancestors_only(left, right):
            closeness, ordering = default_gram_similarity(left, right)
            if ordering != 0 and left.ancestors == right.ancestors:
                return 0.5, ordering
            return closeness, ordering

        prof1 = pqgram_profile(build_known_tree("c"), 2, 3)
        prof3 = pqgram_profile(build_known_tree("x"), 2, 3)
        exact = pqgram_distance(prof1, prof3)
        relaxed = pqgram_distance_with_fn(prof1, prof3, ancestors_only)
        assert relaxed < exact
        assert 0.0 <= relaxed <= 1.0

    def test_generous_function_stays_in_range(self):
        """對不同的 gram 也給滿分時，距離仍須落在 [0, 1]"""
        def always_close(left, right):
            _, ordering = default_gram_similarity(left, right)
            return 1.0, ordering

        prof1 = pqgram_profile(Tree("a", [Tree("b"), Tree("c")]), 2, 2)
        prof2 = pqgram_profile(Tree("x", [Tree("y"), Tree("z")]), 2, 2)
        distance = pqgram_distance_with_fn(prof1, prof2, always_close)
        assert distance == pytest.approx(0.0)
        assert 0.0 <= distance <= 1.0
        assert profile_intersection(prof1, prof2, always_close) <= min(len(prof1), len(prof2))

    def test_out_of_range_closeness_is_clamped(self):
        """closeness 超出 [0, 1] 時會被截斷"""
        def wild(left, right):
            _, ordering = default_gram_similarity(left, right)
            return (5.0 if ordering == 0 else -3.0), ordering

        rng = random.Random(11)
        for _ in range(20):
            a = pqgram_profile(build_random_tree(rng, 3), 2, 3)
            b = pqgram_profile(build_random_tree(rng, 3), 2, 3)
            assert 0.0 <= pqgram_distance_with_fn(a, b, wild) <= 1.0


class TestPQGramDistance:

    def test_compute(self):
        scorer = PQGramDistance(p=2, q=3)
        distance = scorer.compute(build_known_tree("c"), build_known_tree("x"))
        similarity = scorer.compute_similarity(build_known_tree("c"), build_known_tree("x"))

        assert round(distance, 2) == 0.31
        assert similarity == pytest.approx(1 - distance)
        assert scorer.compute_edit_distance(build_known_tree("c"), build_known_tree("x")) == 8
        assert (scorer.p, scorer.q) == (2, 3)

    def test_compute_with_cache(self):
        cache = ProfileCache(PQGramExtractor(2, 3))
        scorer = PQGramDistance(2, 3, cache=cache)
        tree = build_known_tree()

        assert scorer.compute(tree, build_known_tree()) == 0.0
        assert cache.hits == 1
        assert cache.misses == 1

    def test_cache_configuration_must_match(self):
        cache = ProfileCache(PQGramExtractor(3, 3))
        with pytest.raises(ValueError, match="does not match"):
            PQGramDistance(2, 3, cache=cache)
