"""
Size Annotator.

Leaf count of a subtree: 1 for a Leaf, the sum of its children's counts
for a Node, and therefore 0 for a childless Node.

leaf_count() is the direct definition. Calling it at every step of a walk
costs O(n^2) on deep, unbalanced trees, so the propagator works from a
SizeIndex instead, which computes every count in a single post-order pass.
"""

from __future__ import annotations

from typing import Iterator

from .domain import Leaf, Node, Tree


def leaf_count(tree: Tree) -> int:
    """Number of leaves reachable from tree."""
    if isinstance(tree, Leaf):
        return 1
    return sum(leaf_count(child) for child in tree.children)


class SizeIndex:
    """
    Memoized leaf counts for every node of one tree.

    Nodes are keyed by identity, not equality: two structurally equal
    subtrees in different places are still distinct nodes.
    """

    def __init__(self) -> None:
        self._counts: dict[int, int] = {}
        # Holds the nodes so their ids stay valid for the index's lifetime
        self._nodes: list[Tree] = []

    @classmethod
    def build(cls, tree: Tree) -> SizeIndex:
        index = cls()
        index._annotate(tree)
        return index

    def _annotate(self, tree: Tree) -> int:
        if isinstance(tree, Leaf):
            count = 1
        else:
            count = sum(self._annotate(child) for child in tree.children)
        self._counts[id(tree)] = count
        self._nodes.append(tree)
        return count

    def count(self, tree: Tree) -> int:
        """
        Leaf count of a node belonging to the indexed tree.

        Raises:
            KeyError: If tree is not part of the indexed tree
        """
        return self._counts[id(tree)]

    def __getitem__(self, tree: Tree) -> int:
        return self.count(tree)

    def __contains__(self, tree: object) -> bool:
        return id(tree) in self._counts

    def __len__(self) -> int:
        return len(self._counts)


# =============================================================================
# TREE STATISTICS
# =============================================================================

def iter_nodes(tree: Tree) -> Iterator[Tree]:
    """Pre-order iteration over every node and leaf."""
    yield tree
    if isinstance(tree, Node):
        for child in tree.children:
            yield from iter_nodes(child)


def node_count(tree: Tree) -> int:
    """Number of internal nodes."""
    return sum(1 for node in iter_nodes(tree) if isinstance(node, Node))


def total_length(tree: Tree) -> float:
    """Sum of every edge length in the tree, the root's own length included."""
    return sum(node.length for node in iter_nodes(tree))
