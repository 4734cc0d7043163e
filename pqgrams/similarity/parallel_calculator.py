"""
並行 PQ-Gram 距離矩陣計算

每棵樹只抽取一次 profile，再以 multiprocessing 計算所有配對的距離。
profile 抽取彼此獨立，不需要任何同步。
"""

import logging
from functools import partial
from multiprocessing import Pool, cpu_count
from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from tqdm import tqdm

from .adapters import as_labelled_tree
from .cache import ProfileCache
from .distance import pqgram_distance
from .pqgram import PQGramExtractor
from .profile import Profile

logger = logging.getLogger(__name__)


def _compute_distance_batch(pairs: List[Tuple[int, int]],
                            profiles: List[Profile]) -> List[Tuple[int, int, float]]:
    """
    計算一批配對的距離（worker 函數）

    Args:
        pairs: 配對列表 [(i, j), ...]
        profiles: Profile 列表

    Returns:
        List[Tuple[int, int, float]]: [(i, j, distance), ...]
    """
    return [(i, j, pqgram_distance(profiles[i], profiles[j])) for i, j in pairs]


class ParallelPQGramDistanceMatrix:
    """
    並行 pq-gram 距離矩陣計算器

    Attributes:
        population: 族群（LabelledTree 或 DEAP Individual 列表）
        extractor: PQGramExtractor
        profiles: 每個個體的 profile（compute 之後才有）
        matrix: 相似度矩陣 (numpy array)，相似度 = 1 - 距離
        distance_matrix: 距離矩陣 (numpy array)
        n_workers: 並行 worker 數量
    """

    def __init__(self,
                 population: Sequence,
                 p: int = 2,
                 q: int = 3,
                 n_workers: Optional[int] = None,
                 cache: Optional[ProfileCache] = None):
        """
        初始化並行距離矩陣計算器

        Args:
            population: 族群列表
            p: 祖先視窗長度
            q: 兄弟視窗長度
            n_workers: 並行 worker 數量（None = cpu_count()，1 = 不開 process）
            cache: 可選的 profile 快取，族群中有重複個體時可省去重複抽取
        """
        self.population = list(population)
        self.n = len(self.population)
        self.extractor = PQGramExtractor(p, q)
        if cache is not None and cache.configuration != self.extractor.configuration:
            raise ValueError(
                f"Cache configuration {cache.configuration} does not match "
                f"(p, q)={self.extractor.configuration}"
            )
        self.cache = cache

        if n_workers is None:
            self.n_workers = cpu_count()
        else:
            self.n_workers = max(1, min(n_workers, cpu_count()))

        self.profiles: Optional[List[Profile]] = None
        self.matrix = None
        self.distance_matrix = None

    def _generate_pairs(self) -> List[Tuple[int, int]]:
        """生成所有需要計算的配對（上三角）"""
        return [(i, j) for i in range(self.n) for j in range(i + 1, self.n)]

    def _split_pairs(self, pairs: List[Tuple[int, int]]) -> List[List[Tuple[int, int]]]:
        """將配對分配到各 worker"""
        if not pairs:
            return []
        chunk_size = (len(pairs) + self.n_workers - 1) // self.n_workers
        return [pairs[i:i + chunk_size] for i in range(0, len(pairs), chunk_size)]

    def _extract_profiles(self) -> List[Profile]:
        trees = [as_labelled_tree(ind) for ind in self.population]
        if self.cache is not None:
            return [self.cache.extract(tree) for tree in trees]
        return self.extractor.extract_many(trees)

    def compute(self, show_progress: bool = True) -> np.ndarray:
        """
        並行計算相似度矩陣

        Args:
            show_progress: 是否顯示進度條

        Returns:
            np.ndarray: 相似度矩陣 (n x n)
        """
        self.distance_matrix = np.zeros((self.n, self.n))
        self.matrix = np.ones((self.n, self.n))

        self.profiles = self._extract_profiles()

        pairs = self._generate_pairs()
        pair_chunks = self._split_pairs(pairs)
        logger.info("Computing pq-gram distances for %d trees (%d pairs, %d workers)",
                    self.n, len(pairs), self.n_workers)

        worker_func = partial(_compute_distance_batch, profiles=self.profiles)
        pbar = tqdm(total=len(pairs), desc="pq-gram distances", disable=not show_progress)

        if self.n_workers == 1:
            for chunk in pair_chunks:
                self._fill(worker_func(chunk), pbar)
        else:
            with Pool(processes=self.n_workers) as pool:
                for batch_results in pool.imap_unordered(worker_func, pair_chunks):
                    self._fill(batch_results, pbar)

        pbar.close()
        return self.matrix

    def _fill(self, batch_results: List[Tuple[int, int, float]], pbar: tqdm):
        for i, j, distance in batch_results:
            self.distance_matrix[i][j] = distance
            self.distance_matrix[j][i] = distance
            self.matrix[i][j] = 1.0 - distance
            self.matrix[j][i] = 1.0 - distance
        pbar.update(len(batch_results))

    def _require_computed(self):
        if self.matrix is None:
            raise ValueError("Call compute() before querying the matrix")

    def get_similarity(self, i: int, j: int) -> float:
        self._require_computed()
        return float(self.matrix[i][j])

    def get_distance(self, i: int, j: int) -> float:
        self._require_computed()
        return float(self.distance_matrix[i][j])

    def get_average_similarity(self) -> float:
        """
        獲取平均相似度（不包括對角線）

        Returns:
            float: 平均相似度
        """
        self._require_computed()
        if self.n < 2:
            return 1.0
        mask = ~np.eye(self.n, dtype=bool)
        return float(np.mean(self.matrix[mask]))

    def get_diversity_score(self) -> float:
        """多樣性分數（1 - 平均相似度）"""
        return 1.0 - self.get_average_similarity()

    def get_statistics(self) -> dict:
        """
        獲取距離統計資訊

        Returns:
            dict: mean / std / min / max 與 diversity_score
        """
        self._require_computed()
        if self.n < 2:
            return {'mean': 0.0, 'std': 0.0, 'min': 0.0, 'max': 0.0, 'diversity_score': 0.0}

        distances = self.distance_matrix[np.triu_indices(self.n, k=1)]
        return {
            'mean': float(np.mean(distances)),
            'std': float(np.std(distances)),
            'min': float(np.min(distances)),
            'max': float(np.max(distances)),
            'diversity_score': self.get_diversity_score()
        }

    def _ranked_pairs(self, reverse: bool) -> List[Tuple[int, int, float]]:
        pairs = [(i, j, float(self.matrix[i][j]))
                 for i in range(self.n) for j in range(i + 1, self.n)]
        pairs.sort(key=lambda x: x[2], reverse=reverse)
        return pairs

    def get_most_similar_pairs(self, top_k: int = 10) -> List[Tuple[int, int, float]]:
        """
        獲取最相似的 k 對個體

        Returns:
            List[Tuple[int, int, float]]: [(i, j, similarity), ...]
        """
        self._require_computed()
        return self._ranked_pairs(reverse=True)[:top_k]

    def get_most_dissimilar_pairs(self, top_k: int = 10) -> List[Tuple[int, int, float]]:
        """
        獲取最不相似的 k 對個體

        Returns:
            List[Tuple[int, int, float]]: [(i, j, similarity), ...]
        """
        self._require_computed()
        return self._ranked_pairs(reverse=False)[:top_k]

    def to_dataframe(self, labels: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """Distance matrix as a labelled DataFrame."""
        self._require_computed()
        if labels is None:
            labels = [str(i) for i in range(self.n)]
        if len(labels) != self.n:
            raise ValueError(f"Expected {self.n} labels, got {len(labels)}")
        return pd.DataFrame(self.distance_matrix, index=list(labels), columns=list(labels))
