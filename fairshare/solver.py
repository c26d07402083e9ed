"""
Pipeline Orchestrator.

Ties the four stages together into a single synchronous call:

    1. Tree Loader       — JSON text → Tree
    2. Size Annotator    — Tree → per-subtree leaf counts
    3. Score Propagator  — Tree → (raw_score, name) per leaf
    4. Result Aggregator — pairs → OrderedScoreSet

Either the full ranked set is returned or an error is raised.
No configuration. No persistence.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from .domain import ParseError, Tree
from .loader import parse_tree
from .propagation import walk
from .ranking import OrderedScoreSet, collect
from .sizes import SizeIndex


logger = logging.getLogger(__name__)


def solve_tree(tree: Tree) -> OrderedScoreSet:
    """
    Rank the leaves of an already-loaded tree.

    Raises:
        DomainError: If any leaf's score is NaN
    """
    sizes = SizeIndex.build(tree)
    logger.debug("Annotated %d nodes, %d leaves", len(sizes), sizes[tree])
    return collect(walk(tree, 0.0, sizes))


def solve(json_text: str) -> OrderedScoreSet:
    """
    Rank the leaves of the tree described by json_text.

    This is the main entry point.

    Raises:
        ParseError: If the text is not valid JSON or has the wrong shape
        DomainError: If any leaf's score is NaN
    """
    return solve_tree(parse_tree(json_text))


def load_tree_file(path: Union[str, Path]) -> Tree:
    """
    Read a UTF-8 JSON file and load the tree it describes.

    Raises:
        ParseError: If the file cannot be read or decoded, or as for parse_tree()
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"cannot read {path}: {e}") from e

    logger.debug("Read %d characters from %s", len(text), path)
    return parse_tree(text)


def solve_file(path: Union[str, Path]) -> OrderedScoreSet:
    """
    Read a UTF-8 JSON file and rank its leaves.

    Raises:
        ParseError: If the file cannot be read, or as for solve()
        DomainError: As for solve()
    """
    return solve_tree(load_tree_file(path))
