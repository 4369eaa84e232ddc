"""Min-priority queue used by the path search.

Entries are ordered by priority, then by heuristic (lower first), then by push
order, so equal-cost frontiers always expand in the same sequence. Updating
an item's priority invalidates its old heap entry lazily instead of
re-heapifying.
"""

from __future__ import annotations

import heapq
from dataclasses import dataclass, field
from typing import Generic, Hashable, TypeVar

from ...core.exceptions import InvariantViolationError


T = TypeVar("T", bound=Hashable)


@dataclass
class QueueEntry(Generic[T]):
    """A heap entry for one item."""
    priority: int
    heuristic: int
    sequence_id: int
    item: T = field(compare=False)
    removed: bool = False

    def __lt__(self, other: "QueueEntry[T]") -> bool:
        """Define ordering for heap queue.

        Primary: priority (lower first)
        Secondary: heuristic (closer to the goal first)
        Tertiary: sequence_id (first pushed first)
        """
        return ((self.priority, self.heuristic, self.sequence_id) <
                (other.priority, other.heuristic, other.sequence_id))


class PriorityQueue(Generic[T]):
    """Binary heap keyed by item with in-place priority updates."""

    def __init__(self):
        self._heap: list[QueueEntry[T]] = []
        self._entries: dict[T, QueueEntry[T]] = {}
        self._sequence_counter = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __contains__(self, item: T) -> bool:
        return item in self._entries

    def contains(self, item: T) -> bool:
        return item in self._entries

    def enqueue(self, item: T, priority: int, heuristic: int = 0) -> None:
        """Add an item that is not already queued."""
        if item in self._entries:
            raise InvariantViolationError(f"{item!r} is already queued")
        self._push(item, priority, heuristic)

    def enqueue_or_update(self, item: T, priority: int, heuristic: int = 0) -> None:
        """Add an item, or replace the priority of one that is already queued."""
        existing = self._entries.pop(item, None)
        if existing is not None:
            existing.removed = True
        self._push(item, priority, heuristic)

    def dequeue(self) -> T:
        """Remove and return the item with the lowest priority.

        Raises:
            InvariantViolationError: if the queue is empty
        """
        while self._heap:
            entry = heapq.heappop(self._heap)
            if entry.removed:
                continue
            del self._entries[entry.item]
            return entry.item
        raise InvariantViolationError("Dequeue from an empty priority queue")

    def _push(self, item: T, priority: int, heuristic: int) -> None:
        entry = QueueEntry(priority, heuristic, self._sequence_counter, item)
        self._sequence_counter += 1
        self._entries[item] = entry
        heapq.heappush(self._heap, entry)
