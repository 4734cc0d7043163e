"""
Main Entry Point for the PQ-Gram Tree Similarity Project

Computes pq-gram profiles and distances for small demo trees, for two DEAP
expressions, or for a randomly generated DEAP population.

Usage:
    python main.py demo [-p 2] [-q 3]
    python main.py compare --expr "add(x, y)" --expr "add(x, mul(x, y))"
    python main.py matrix --population 50 --max-depth 4 [--heatmap matrix.png]

Example:
    python main.py --config configs/default_config.json matrix --population 100 --workers 4
"""
import argparse
import random
import sys
from pathlib import Path

from deap import gp

from pqgrams.similarity import (
    PQGramDistance,
    ParallelPQGramDistanceMatrix,
    ProfileCache,
    PQGramExtractor,
    TreeBuilder,
    deap_to_tree,
    plot_distance_heatmap,
    pqgram_profile,
    pqgram_distance,
    render_tree,
    tree_to_bracket,
    validate_configuration
)
from pqgrams.utils.config import load_config, setup_logging


def setup_pset() -> gp.PrimitiveSet:
    """Primitive set used to parse and generate demo expressions."""
    pset = gp.PrimitiveSet("MAIN", arity=2)
    pset.addPrimitive(lambda x, y: x + y, 2, name="add")
    pset.addPrimitive(lambda x, y: x - y, 2, name="sub")
    pset.addPrimitive(lambda x, y: x * y, 2, name="mul")
    pset.addPrimitive(lambda x, y: x / y if y != 0 else 1, 2, name="div")
    pset.renameArguments(ARG0='x', ARG1='y')
    return pset


def build_demo_trees():
    """The two example trees from the pq-gram paper walk-through."""
    tree1 = (TreeBuilder("a")
             .push("a").leaf("e").leaf("b").pop()
             .leaf("b")
             .leaf("c")
             .build())
    tree2 = (TreeBuilder("a")
             .push("a").leaf("e").leaf("b").pop()
             .leaf("b")
             .leaf("x")
             .build())
    return tree1, tree2


def make_cache(config):
    """ProfileCache for the configured (p, q), or None when disabled."""
    if not config['cache']['enabled']:
        return None
    extractor = PQGramExtractor(config['pqgram']['p'], config['pqgram']['q'])
    return ProfileCache(extractor, maxsize=config['cache']['maxsize'])


def make_scorer(config) -> PQGramDistance:
    return PQGramDistance(config['pqgram']['p'], config['pqgram']['q'], cache=make_cache(config))


def run_demo(config):
    p, q = config['pqgram']['p'], config['pqgram']['q']
    tree1, tree2 = build_demo_trees()

    for name, tree in (("Tree 1", tree1), ("Tree 2", tree2)):
        print(f"\n{name}: {tree_to_bracket(tree)}")
        print("\n".join(render_tree(tree)))

    prof1 = pqgram_profile(tree1, p, q, sort=True)
    prof2 = pqgram_profile(tree2, p, q, sort=True)

    print(f"\nProfile of Tree 1 (p={p}, q={q}, {len(prof1)} grams):")
    for row in prof1.flatten("*"):
        print("  " + " ".join(str(label) for label in row))

    print(f"\nDistance: {pqgram_distance(prof1, prof2):.4f}")


def run_compare(config, expressions):
    if len(expressions) != 2:
        raise SystemExit("compare needs exactly two --expr arguments")

    pset = setup_pset()
    trees = [deap_to_tree(gp.PrimitiveTree.from_string(expr, pset)) for expr in expressions]
    scorer = make_scorer(config)

    for expr, tree in zip(expressions, trees):
        print(f"{expr}")
        print(f"  bracket: {tree_to_bracket(tree)}")
        print(f"  pq-grams: {len(scorer.profile(tree))}")

    print(f"\nDistance:      {scorer.compute(trees[0], trees[1]):.4f}")
    print(f"Similarity:    {scorer.compute_similarity(trees[0], trees[1]):.4f}")
    print(f"Edit distance: {scorer.compute_edit_distance(trees[0], trees[1])}")


def run_matrix(config, population_size, max_depth, seed, heatmap):
    random.seed(seed)
    pset = setup_pset()
    population = [gp.PrimitiveTree(gp.genHalfAndHalf(pset, min_=1, max_=max_depth))
                  for _ in range(population_size)]

    p, q = config['pqgram']['p'], config['pqgram']['q']
    calculator = ParallelPQGramDistanceMatrix(
        population, p=p, q=q,
        n_workers=config['parallel']['n_workers'],
        cache=make_cache(config)
    )
    calculator.compute(show_progress=config['parallel']['show_progress'])

    stats = calculator.get_statistics()
    print(f"\nPopulation: {population_size} trees (p={p}, q={q})")
    for key, value in stats.items():
        print(f"  {key:<16} {value:.4f}")

    print("\nMost similar pairs:")
    for i, j, similarity in calculator.get_most_similar_pairs(top_k=5):
        print(f"  ({i}, {j})  {similarity:.4f}")

    if heatmap:
        plot_distance_heatmap(calculator.distance_matrix, save_path=heatmap)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="PQ-Gram tree similarity")
    parser.add_argument('--config', type=str, default=None, help="JSON config file")
    parser.add_argument('-p', type=int, default=None, help="ancestor window length")
    parser.add_argument('-q', type=int, default=None, help="sibling window length")
    parser.add_argument('--workers', type=int, default=None, help="worker processes")
    parser.add_argument('--log-level', type=str, default=None)

    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('demo', help="profile the example trees")

    compare = subparsers.add_parser('compare', help="compare two DEAP expressions")
    compare.add_argument('--expr', action='append', default=[], required=True)

    matrix = subparsers.add_parser('matrix', help="distance matrix of a random population")
    matrix.add_argument('--population', type=int, default=50)
    matrix.add_argument('--max-depth', type=int, default=4)
    matrix.add_argument('--seed', type=int, default=42)
    matrix.add_argument('--heatmap', type=str, default=None, help="save heatmap to this path")

    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    config = load_config(args.config)

    # 命令列參數覆蓋設定檔
    if args.p is not None:
        config['pqgram']['p'] = args.p
    if args.q is not None:
        config['pqgram']['q'] = args.q
    if args.workers is not None:
        config['parallel']['n_workers'] = args.workers
    if args.log_level is not None:
        config['logging']['level'] = args.log_level

    validate_configuration(config['pqgram']['p'], config['pqgram']['q'])
    setup_logging(config['logging']['level'])

    if args.command == 'demo':
        run_demo(config)
    elif args.command == 'compare':
        run_compare(config, args.expr)
    elif args.command == 'matrix':
        if args.heatmap:
            Path(args.heatmap).parent.mkdir(parents=True, exist_ok=True)
        run_matrix(config, args.population, args.max_depth, args.seed, args.heatmap)
    return 0


if __name__ == "__main__":
    sys.exit(main())
