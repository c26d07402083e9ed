# fairshare — fair-proportion distinctness ranking for weighted trees

"""
Rank the leaves of a weighted tree by their fair share of branch length.

Each edge's length is split equally among every leaf descending through
it; a leaf's score is the sum of its shares along the root-to-leaf path.
"""

import logging

from .domain import DomainError, Leaf, Node, ParseError, ScoringError, Tree
from .ranking import OrderedScoreSet, RankedScore
from .solver import solve, solve_file, solve_tree

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DomainError",
    "Leaf",
    "Node",
    "OrderedScoreSet",
    "ParseError",
    "RankedScore",
    "ScoringError",
    "Tree",
    "solve",
    "solve_file",
    "solve_tree",
]
