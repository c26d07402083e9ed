"""
Result Aggregator.

Collects every (raw_score, name) pair produced by the propagator into an
OrderedScoreSet, a binary max-heap that hands entries back highest first.

Ordering is a strict total order on (score, name). Scores compare
numerically; equal scores fall back to the name, and since the whole key
runs in the same direction the HIGHER name is extracted first: with two
leaves "A" and "B" at 5.0, "B" comes out before "A".

A NaN score has no place in a total order, so RankedScore refuses to be
constructed from one and the whole collection fails with DomainError.
Infinite scores are ordered normally.
"""

from __future__ import annotations

import heapq
import logging
import math
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from .domain import DomainError


logger = logging.getLogger(__name__)


# =============================================================================
# RANKED SCORE
# =============================================================================

@dataclass(frozen=True, order=True)
class RankedScore:
    """
    A leaf's final score, guaranteed not to be NaN.

    Field order is the comparison key: score first, then name.
    """
    score: float
    name: str

    def __post_init__(self):
        if math.isnan(self.score):
            raise DomainError(self.name, self.score)

    def to_record(self) -> dict:
        return {"name": self.name, "score": self.score}


class _MaxHeapItem:
    """Inverts RankedScore ordering so heapq's min-heap pops the maximum."""

    __slots__ = ("entry",)

    def __init__(self, entry: RankedScore):
        self.entry = entry

    def __lt__(self, other: _MaxHeapItem) -> bool:
        return other.entry < self.entry


# =============================================================================
# ORDERED SCORE SET
# =============================================================================

class OrderedScoreSet:
    """
    Priority structure over RankedScore entries.

    pop() removes and returns the highest remaining entry in O(log n).
    drain() repeats that until empty, giving a fully descending
    enumeration. sorted_entries() and top() leave the set untouched.
    """

    def __init__(self, entries: Optional[Iterable[RankedScore]] = None):
        self._heap: list[_MaxHeapItem] = [
            _MaxHeapItem(entry) for entry in (entries or ())
        ]
        heapq.heapify(self._heap)

    def push(self, entry: RankedScore) -> None:
        heapq.heappush(self._heap, _MaxHeapItem(entry))

    def pop(self) -> RankedScore:
        """
        Remove and return the highest entry.

        Raises:
            IndexError: If the set is empty
        """
        if not self._heap:
            raise IndexError("pop from empty OrderedScoreSet")
        return heapq.heappop(self._heap).entry

    def peek(self) -> RankedScore:
        """
        Return the highest entry without removing it.

        Raises:
            IndexError: If the set is empty
        """
        if not self._heap:
            raise IndexError("peek into empty OrderedScoreSet")
        return self._heap[0].entry

    def drain(self) -> Iterator[RankedScore]:
        """Pop entries highest first until the set is empty."""
        while self._heap:
            yield self.pop()

    def sorted_entries(self) -> list[RankedScore]:
        """All entries highest first, without consuming the set."""
        return sorted((item.entry for item in self._heap), reverse=True)

    def top(self, n: int) -> list[RankedScore]:
        """The n highest entries, without consuming the set."""
        return heapq.nlargest(n, (item.entry for item in self._heap))

    def to_records(self) -> list[dict]:
        """Entries highest first as plain dicts, for JSON output."""
        return [entry.to_record() for entry in self.sorted_entries()]

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __repr__(self) -> str:
        return f"OrderedScoreSet({len(self._heap)} entries)"


# =============================================================================
# AGGREGATION
# =============================================================================

def collect(pairs: Iterable[tuple[float, str]]) -> OrderedScoreSet:
    """
    Consume the full (raw_score, name) sequence into an OrderedScoreSet.

    Raises:
        DomainError: On the first NaN score; nothing is returned
    """
    entries = [RankedScore(score=score, name=name) for score, name in pairs]
    logger.debug("Collected %d scores", len(entries))
    return OrderedScoreSet(entries)
