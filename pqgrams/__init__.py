"""
PQ-Gram tree similarity.

Approximate tree edit distance through pq-gram profiles of labelled
ordered trees. See ``pqgrams.similarity`` for the public API.
"""

__version__ = '0.1.0'
