from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Iterator, List, Optional

from .errors import EmptyQueue
from .models import ProcessRecord

OrderKey = Callable[[ProcessRecord], int]


def by_arrival(record: ProcessRecord) -> int:
    return record.arrival_time


def fifo(record: ProcessRecord) -> int:
    # Constant key: a stable sort leaves insertion order untouched.
    return 0


def by_remaining(record: ProcessRecord) -> int:
    return record.remaining_time


class OrderedQueue:
    """
    A queue of ProcessRecords ordered by a pluggable key.

    push() always appends; the order key is only applied by reorder(), which
    uses Python's stable sort so equal keys keep their insertion order. FCFS
    relies on that to serve simultaneous arrivals in input order, and SJF to
    break burst ties by admission order.
    """

    def __init__(self, order: OrderKey = fifo, name: str = "queue") -> None:
        self.order = order
        self.name = name
        self._items: Deque[ProcessRecord] = deque()

    def push(self, record: ProcessRecord) -> None:
        self._items.append(record)

    def pop_front(self) -> ProcessRecord:
        if not self._items:
            raise EmptyQueue(f"pop_front on empty {self.name}")
        return self._items.popleft()

    def peek_front(self) -> ProcessRecord:
        if not self._items:
            raise EmptyQueue(f"peek_front on empty {self.name}")
        return self._items[0]

    def is_empty(self) -> bool:
        return not self._items

    def reorder(self, order: Optional[OrderKey] = None) -> None:
        key = order if order is not None else self.order
        self._items = deque(sorted(self._items, key=key))

    def pids(self) -> List[int]:
        return [r.pid for r in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ProcessRecord]:
        return iter(self._items)

    def __repr__(self) -> str:
        return f"OrderedQueue({self.name}, order={self.order.__name__}, pids={self.pids()})"
