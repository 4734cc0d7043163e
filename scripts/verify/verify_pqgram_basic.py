"""
PQ-Gram Similarity 演示腳本

展示三組實驗：
0. 完全相同的兩棵樹（基準）
1. 相似個體：只有一個葉節點不同
2. 不相似個體：結構與標籤都不同
"""

import sys
from pathlib import Path

# 添加專案根目錄到路徑
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from pqgrams.similarity import (
    Tree,
    count_nodes,
    pqgram_distance,
    pqgram_edit_distance,
    pqgram_profile,
    render_tree
)

P, Q = 2, 3


def print_header(title):
    """打印標題"""
    print("\n" + "=" * 80)
    print(f"  {title}")
    print("=" * 80)


def interpret_distance(distance):
    """解釋距離分數"""
    if distance <= 0.1:
        return "🟢 非常相似 (Very Similar)"
    elif distance <= 0.4:
        return "🟢 相似 (Similar)"
    elif distance <= 0.7:
        return "🟡 中等相似 (Moderately Similar)"
    return "🔴 非常不同 (Very Different)"


def show_tree(name, tree):
    print(f"\n📊 {name}:")
    print(f"  括號表示: {tree}")
    print(f"  節點數: {count_nodes(tree)}")
    print("  樹狀圖:")
    for line in render_tree(tree, "  "):
        print(line)


def compare(tree_a, tree_b):
    prof_a = pqgram_profile(tree_a, P, Q, sort=True)
    prof_b = pqgram_profile(tree_b, P, Q, sort=True)
    distance = pqgram_distance(prof_a, prof_b)

    print(f"\n📈 PQ-Gram 分析 (p={P}, q={Q}):")
    print(f"  Profile 大小: {len(prof_a)} / {len(prof_b)}")
    print(f"  交集大小: {prof_a.intersection_size(prof_b)}")
    print(f"  近似編輯距離: {pqgram_edit_distance(prof_a, prof_b)}")
    print(f"  正規化距離: {distance:.4f}")
    print(f"  相似程度: {interpret_distance(distance)}")
    return distance


def experiment_identical_trees():
    """實驗 0: 完全相同的兩棵樹（作為基準）"""
    print_header("實驗 0: 完全相同的樹（基準測試）")

    tree_a = Tree("add", [Tree("x"), Tree("y")])
    tree_b = Tree("add", [Tree("x"), Tree("y")])
    show_tree("Tree A & Tree B (完全相同)", tree_a)

    distance = compare(tree_a, tree_b)
    assert distance == 0.0


def experiment_similar_trees():
    """實驗 1: 只有一個葉節點不同"""
    print_header("實驗 1: 相似個體測試")

    tree_a = Tree("add", [Tree("mul", [Tree("x"), Tree("y")]), Tree("x")])
    tree_b = Tree("add", [Tree("mul", [Tree("x"), Tree("y")]), Tree("y")])
    show_tree("Tree A", tree_a)
    show_tree("Tree B", tree_b)

    distance = compare(tree_a, tree_b)
    print("\n💡 只有碰到被修改葉節點的 pq-gram 會改變，其餘 profile 保持不變")
    assert 0.0 < distance < 0.5


def experiment_dissimilar_trees():
    """實驗 2: 不相似的兩棵樹"""
    print_header("實驗 2: 不相似個體測試")

    tree_a = Tree("add", [Tree("x"), Tree("y")])
    tree_b = Tree("mul", [
        Tree("div", [Tree("x"), Tree("sub", [Tree("y"), Tree("x")])]),
        Tree("gt", [Tree("x"), Tree("y")])
    ])
    show_tree("Tree A (簡單樹)", tree_a)
    show_tree("Tree B (複雜樹)", tree_b)

    distance = compare(tree_a, tree_b)
    assert distance > 0.7


def main():
    """主函數"""
    print("\n" + "🌳" * 40)
    print("  PQ-Gram 演示：以 profile 交集估計樹的編輯距離")
    print("🌳" * 40)

    experiment_identical_trees()
    experiment_similar_trees()
    experiment_dissimilar_trees()

    print_header("總結")
    print("\n📊 距離公式: distance = 1 - 2 |P1 ∩ P2| / (|P1| + |P2|)")
    print("\n🎯 驗收結果:")
    print("  1. ✅ 完全相同的樹：距離 = 0")
    print("  2. ✅ 相似的樹：距離 < 0.5")
    print("  3. ✅ 不相似的樹：距離 > 0.7")
    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()
