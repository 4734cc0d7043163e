"""
PQ-Gram Similarity Module

This module computes PQ-Gram profiles of labelled ordered trees and uses them
to estimate how similar two trees are, without pairwise tree alignment.

Components:
- LabelledTree: capability contract (label + ordered children)
- Tree / TreeBuilder: generic tree and incremental builder
- PQGramExtractor: traversal producing the pq-gram profile of a tree
- Profile: multiset of pq-grams for one (p, q) configuration
- PQGramDistance: normalized pq-gram distance between trees
- ProfileCache: optional LRU cache of profiles
- ParallelPQGramDistanceMatrix: pairwise distances for a population

Usage:
    from pqgrams.similarity import Tree, pqgram_profile, pqgram_distance

    tree1 = Tree("a").add_node(Tree("b")).add_node(Tree("c"))
    tree2 = Tree("a").add_node(Tree("b")).add_node(Tree("d"))

    prof1 = pqgram_profile(tree1, p=2, q=3)
    prof2 = pqgram_profile(tree2, p=2, q=3)
    distance = pqgram_distance(prof1, prof2)

    # DEAP individuals work directly
    from pqgrams.similarity import compute_pqgram_distance
    distance = compute_pqgram_distance(individual1, individual2)
"""

__version__ = '0.1.0'

from .exceptions import (
    PQGramError,
    InvalidConfiguration,
    ConfigurationMismatch
)

from .labelled_tree import (
    FILLER,
    Filler,
    LabelledTree,
    is_filler,
    tree_key,
    count_nodes
)

from .tree import (
    Tree,
    TreeBuilder,
    tree_to_bracket,
    render_tree
)

from .profile import (
    PQGram,
    Profile,
    flatten_profile
)

from .pqgram import (
    PQGramExtractor,
    pqgram_profile,
    expected_profile_size,
    validate_configuration
)

from .distance import (
    PQGramDistance,
    default_gram_similarity,
    profile_intersection,
    pqgram_distance,
    pqgram_distance_with_fn,
    pqgram_edit_distance,
    pqgram_similarity,
    compute_pqgram_distance,
    compute_pqgram_similarity
)

from .adapters import deap_to_tree, as_labelled_tree
from .cache import ProfileCache
from .parallel_calculator import ParallelPQGramDistanceMatrix
from .visualizer import plot_distance_heatmap, plot_distance_distribution

__all__ = [
    # Errors
    'PQGramError',
    'InvalidConfiguration',
    'ConfigurationMismatch',
    # Tree abstraction
    'FILLER',
    'Filler',
    'LabelledTree',
    'is_filler',
    'tree_key',
    'count_nodes',
    'Tree',
    'TreeBuilder',
    'tree_to_bracket',
    'render_tree',
    # Profiles
    'PQGram',
    'Profile',
    'flatten_profile',
    'PQGramExtractor',
    'pqgram_profile',
    'expected_profile_size',
    'validate_configuration',
    # Distance
    'PQGramDistance',
    'default_gram_similarity',
    'profile_intersection',
    'pqgram_distance',
    'pqgram_distance_with_fn',
    'pqgram_edit_distance',
    'pqgram_similarity',
    'compute_pqgram_distance',
    'compute_pqgram_similarity',
    # Adapters / cache
    'deap_to_tree',
    'as_labelled_tree',
    'ProfileCache',
    # Population
    'ParallelPQGramDistanceMatrix',
    'plot_distance_heatmap',
    'plot_distance_distribution',
]
