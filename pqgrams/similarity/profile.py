"""
PQ-Gram Profile

A profile is the bag (multiset) of all PQ-Grams of one tree under one
(p, q) configuration. Profiles built with different configurations are not
comparable and every binary operation rejects them.
"""

from collections import Counter
from typing import Any, Dict, Hashable, Iterable, Iterator, List, NamedTuple, Tuple

from .exceptions import ConfigurationMismatch
from .labelled_tree import is_filler, label_sort_key


class PQGram(NamedTuple):
    """
    單一 PQ-Gram

    Attributes:
        ancestors: 長度 p，最後一個是錨點節點本身，前面是最近的 p-1 個祖先
        siblings: 長度 q，子節點滑動視窗
    """
    ancestors: Tuple[Hashable, ...]
    siblings: Tuple[Hashable, ...]

    def concat(self, filler_as: Any = "*") -> Tuple[Any, ...]:
        """
        Flatten ancestors + siblings into one tuple, replacing Filler with
        ``filler_as``. By convention string profiles use "*" as in the paper.
        """
        return tuple(
            filler_as if is_filler(label) else label
            for label in self.ancestors + self.siblings
        )

    def sort_key(self) -> tuple:
        return tuple(label_sort_key(label) for label in self.ancestors + self.siblings)


class Profile:
    """
    PQ-Gram 多重集合

    Attributes:
        p: 祖先視窗長度（含節點本身）
        q: 兄弟視窗長度
    """

    def __init__(self, grams: Iterable[PQGram], p: int, q: int):
        self.p = p
        self.q = q
        self._grams: List[PQGram] = list(grams)
        self._counts: Counter = Counter(self._grams)

    @property
    def configuration(self) -> Tuple[int, int]:
        return (self.p, self.q)

    @property
    def size(self) -> int:
        return len(self._grams)

    def __len__(self) -> int:
        return len(self._grams)

    def __iter__(self) -> Iterator[PQGram]:
        return iter(self._grams)

    def __contains__(self, gram) -> bool:
        return gram in self._counts

    def count(self, gram: PQGram) -> int:
        return self._counts.get(gram, 0)

    def counts(self) -> Dict[PQGram, int]:
        return dict(self._counts)

    @property
    def grams(self) -> List[PQGram]:
        return list(self._grams)

    def sorted_grams(self) -> List[PQGram]:
        """回傳依標準順序排序的 PQ-Gram（Filler 排最前）"""
        return sorted(self._grams, key=PQGram.sort_key)

    def flatten(self, filler_as: Any = "*") -> List[Tuple[Any, ...]]:
        return [gram.concat(filler_as) for gram in self._grams]

    def is_compatible(self, other: 'Profile') -> bool:
        return self.configuration == other.configuration

    def check_compatible(self, other: 'Profile') -> None:
        if not self.is_compatible(other):
            raise ConfigurationMismatch(self.configuration, other.configuration)

    def intersection_size(self, other: 'Profile') -> int:
        """Σ min(count_in_self, count_in_other) over distinct grams."""
        self.check_compatible(other)
        smaller, larger = sorted((self._counts, other._counts), key=len)
        return sum(min(n, larger[gram]) for gram, n in smaller.items() if gram in larger)

    def union_size(self, other: 'Profile') -> int:
        return len(self) + len(other) - self.intersection_size(other)

    def symmetric_difference_size(self, other: 'Profile') -> int:
        return len(self) + len(other) - 2 * self.intersection_size(other)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Profile):
            return NotImplemented
        return self.configuration == other.configuration and self._counts == other._counts

    def __hash__(self) -> int:
        return hash((self.p, self.q, frozenset(self._counts.items())))

    def __repr__(self):
        return f"Profile(p={self.p}, q={self.q}, size={len(self)}, distinct={len(self._counts)})"


def flatten_profile(profile: Profile, filler_as: Any = "*") -> List[Tuple[Any, ...]]:
    """
    PQ-Grams are nested (ancestors, siblings) pairs, but are usually consumed
    as flat rows of constant length p + q.
    """
    return profile.flatten(filler_as)
