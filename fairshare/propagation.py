"""
Score Propagator.

Walks the tree once, handing each node's length down to its leaves in
equal shares:

    Leaf  → emit (curr + leaf.length, leaf.name)
    Node  → recurse into every child with curr + node.length / leaf_count(node)

A leaf's final value is therefore the sum, over every ancestor edge on its
root-to-leaf path, of that edge's length divided by the number of leaves
sharing it, plus its own length.

Nothing is validated here. A childless Node divides by zero and yields
inf, -inf or NaN; since no leaf descends from it, that value is never
emitted. NaN checks happen in the aggregator.
"""

from __future__ import annotations

import math
from typing import Iterator, Optional

from .domain import Leaf, Node, Tree
from .sizes import SizeIndex


def divide_length(length: float, count: int) -> float:
    """
    Per-leaf share of an edge, with IEEE semantics for a zero divisor.
    """
    if count == 0:
        if math.isnan(length) or length == 0.0:
            return math.nan
        return math.copysign(math.inf, length)
    return length / count


def walk(
    tree: Tree,
    curr: float = 0.0,
    sizes: Optional[SizeIndex] = None,
) -> Iterator[tuple[float, str]]:
    """
    Lazily yield one (raw_score, name) pair per leaf under tree.

    Order is depth-first, left to right. Pass a SizeIndex built for the
    same tree to avoid recounting leaves at every level.

    Args:
        tree: Subtree to walk
        curr: Value accumulated from the ancestors of tree
        sizes: Optional precomputed leaf counts
    """
    if sizes is None:
        sizes = SizeIndex.build(tree)

    if isinstance(tree, Leaf):
        yield (curr + tree.length, tree.name)
        return

    inherited = curr + divide_length(tree.length, sizes[tree])
    for child in tree.children:
        yield from walk(child, inherited, sizes)


def edge_shares(
    tree: Tree,
    sizes: Optional[SizeIndex] = None,
) -> Iterator[tuple[Node, float]]:
    """
    Yield (node, share) for every internal node in pre-order, where share
    is the part of node.length each descendant leaf receives.
    """
    if sizes is None:
        sizes = SizeIndex.build(tree)

    if isinstance(tree, Node):
        yield (tree, divide_length(tree.length, sizes[tree]))
        for child in tree.children:
            yield from edge_shares(child, sizes)
