"""
Distance Visualization Module

提供 pq-gram 距離矩陣的視覺化工具
"""

from pathlib import Path
from typing import Optional, Union

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns


def _finish(save_path: Optional[Union[str, Path]], dpi: int):
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
        print(f"✓ 圖表已儲存: {save_path}")
    else:
        plt.show()
    plt.close()


def _upper_triangle(distance_matrix: np.ndarray) -> np.ndarray:
    n = distance_matrix.shape[0]
    return distance_matrix[np.triu_indices(n, k=1)]


def plot_distance_heatmap(
    distance_matrix: np.ndarray,
    save_path: Optional[Union[str, Path]] = None,
    title: str = 'PQ-Gram Distance Matrix',
    figsize: tuple = (12, 10),
    dpi: int = 300
):
    """
    繪製距離矩陣熱圖

    Args:
        distance_matrix: n x n 距離矩陣
        save_path: 儲存路徑（如果為 None，則顯示圖表）
        title: 圖表標題
        figsize: 圖表大小
        dpi: 圖片解析度
    """
    distances = _upper_triangle(distance_matrix)
    avg_dist = float(np.mean(distances)) if distances.size else 0.0

    fig, ax = plt.subplots(figsize=figsize)
    sns.heatmap(distance_matrix,
                cmap='YlOrRd',
                vmin=0, vmax=1,
                square=True,
                cbar_kws={'label': 'distance'},
                ax=ax)

    ax.set_title(f'{title}\nmean distance: {avg_dist:.4f}', fontsize=14, fontweight='bold')
    ax.set_xlabel('tree index', fontsize=12)
    ax.set_ylabel('tree index', fontsize=12)

    _finish(save_path, dpi)


def plot_distance_distribution(
    distance_matrix: np.ndarray,
    save_path: Optional[Union[str, Path]] = None,
    bins: int = 30,
    figsize: tuple = (10, 6),
    dpi: int = 300
):
    """
    繪製配對距離分布直方圖（只取上三角）

    Args:
        distance_matrix: n x n 距離矩陣
        save_path: 儲存路徑
        bins: 直方圖分箱數
        figsize: 圖表大小
        dpi: 圖片解析度
    """
    distances = _upper_triangle(distance_matrix)

    fig, ax = plt.subplots(figsize=figsize)
    ax.hist(distances, bins=bins, range=(0, 1), color='#2E86AB', alpha=0.8, edgecolor='white')

    if distances.size:
        mean = float(np.mean(distances))
        ax.axvline(mean, color='#A23B72', linestyle='--', linewidth=2, label=f'mean = {mean:.4f}')
        ax.legend(loc='best')

    ax.set_xlabel('pq-gram distance', fontsize=12)
    ax.set_ylabel('pairs', fontsize=12)
    ax.set_title('PQ-Gram Distance Distribution', fontsize=14, fontweight='bold')
    ax.grid(True, alpha=0.3)

    _finish(save_path, dpi)
