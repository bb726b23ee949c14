"""Min-priority frontier for the road search."""

import heapq
import itertools
from typing import Generic, List, Tuple, TypeVar

T = TypeVar("T")


class Frontier(Generic[T]):
    """
    Binary heap of items keyed by float priority.

    Updating an item pushes a new entry and leaves the old one in the heap.
    The search skips those stale entries when it pops a cell it has already
    finalized; the frontier itself does not track them. Equal priorities pop
    in insertion order so results are deterministic.
    """

    def __init__(self):
        self._heap: List[Tuple[float, int, T]] = []
        self._counter = itertools.count()

    def insert_or_update(self, item: T, priority: float) -> None:
        heapq.heappush(self._heap, (priority, next(self._counter), item))

    def pop_min(self) -> T:
        """Remove and return the lowest-priority item. Raises IndexError when empty."""
        if not self._heap:
            raise IndexError("pop from an empty frontier")
        _, _, item = heapq.heappop(self._heap)
        return item

    def peek_priority(self) -> float:
        if not self._heap:
            raise IndexError("peek into an empty frontier")
        return self._heap[0][0]

    def is_empty(self) -> bool:
        return not self._heap

    def __len__(self) -> int:
        return len(self._heap)
