"""
Core Domain Objects for the fair-proportion ranker.

A tree is a closed set of two variants, both immutable once loaded:

    Node  — an internal node with an ordered tuple of children
    Leaf  — a named tip

Both carry the length of the edge above them. Lengths are taken as
supplied: negative values are legal input and propagate algebraically.

Errors raised anywhere in the pipeline are defined here as well, so
callers only need one import to handle every failure mode.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union


# =============================================================================
# ERRORS
# =============================================================================

class ScoringError(Exception):
    """Base class for every failure surfaced by the scoring pipeline."""


class ParseError(ScoringError):
    """
    Raised when input is not valid JSON or does not match the node/leaf shape.

    No partial tree is ever returned alongside this error.
    """

    def __init__(self, reason: str, path: Optional[str] = None):
        self.reason = reason
        self.path = path
        if path:
            super().__init__(f"{reason} (at {path})")
        else:
            super().__init__(reason)


class DomainError(ScoringError):
    """Raised when a leaf's computed score is not a well-defined number."""

    def __init__(self, name: str, score: float):
        self.name = name
        self.score = score
        super().__init__(
            f"score {score!r} for leaf '{name}' is not a representable number"
        )


# =============================================================================
# TREE
# =============================================================================

@dataclass(frozen=True)
class Leaf:
    """
    A tip of the tree.

    Names are labels only; nothing requires them to be unique.
    """
    name: str
    length: float = 0.0


@dataclass(frozen=True)
class Node:
    """
    An internal node.

    Well-formed input gives every node at least one child, but a childless
    node is representable: its leaf count is 0 and its share of length
    is never inherited by anything.
    """
    children: tuple[Tree, ...] = field(default_factory=tuple)
    length: float = 0.0


Tree = Union[Node, Leaf]

