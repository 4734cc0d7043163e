"""
Profile 快取

以樹的結構鍵 (tree_key) 作為 key 的 LRU 快取。相同形狀與標籤的樹
一定得到相同的 profile，所以快取不會改變任何可觀察的輸出。
適用於族群中大量重複個體的情境。
"""

import logging
from collections import OrderedDict
from typing import Optional

from .labelled_tree import LabelledTree, tree_key
from .pqgram import PQGramExtractor
from .profile import Profile

logger = logging.getLogger(__name__)


class ProfileCache:
    """
    LRU cache of whole-tree profiles for one extractor configuration.

    Attributes:
        extractor: PQGramExtractor used on cache misses
        maxsize: maximum number of cached profiles
        hits: number of lookups served from the cache
        misses: number of lookups that ran the extractor
    """

    def __init__(self, extractor: Optional[PQGramExtractor] = None, maxsize: int = 128):
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self.extractor = extractor or PQGramExtractor()
        self.maxsize = maxsize
        self.hits = 0
        self.misses = 0
        self._cache: "OrderedDict[tuple, Profile]" = OrderedDict()

    @property
    def configuration(self):
        return self.extractor.configuration

    def extract(self, tree: LabelledTree) -> Profile:
        key = tree_key(tree)
        if key in self._cache:
            self.hits += 1
            self._cache.move_to_end(key)
            return self._cache[key]

        self.misses += 1
        profile = self.extractor.extract(tree)
        self._cache[key] = profile
        if len(self._cache) > self.maxsize:
            self._cache.popitem(last=False)
        return profile

    def clear(self):
        """Clear the cache. Call this between different populations."""
        logger.debug("Clearing profile cache (hits=%d, misses=%d)", self.hits, self.misses)
        self._cache.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._cache)
