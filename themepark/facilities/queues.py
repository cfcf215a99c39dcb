# themepark/facilities/queues.py
from __future__ import annotations
import threading
from collections import deque #add at the tail, pop from the head
from typing import Deque, List, Optional


class RideQueue:
    """
    Thread-safe single-lane FIFO waiting line for a ride.

    Visitors join via:     q.enqueue(visitor)
    Operator pulls one:    q.dequeue()
    A cycle boards:        q.get_batch_for_boarding(capacity)
    """

    def __init__(self):
        self._lock = threading.Lock() #protects the deque
        self._q: Deque = deque()

    # ----------------------- Query helpers -----------------------

    def size(self) -> int:
        with self._lock:
            return len(self._q)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._q

    def snapshot(self) -> List:
        """Visitors currently waiting, head first."""
        with self._lock:
            return list(self._q)

    # ----------------------- Core operations -----------------------

    def enqueue(self, obj) -> bool:
        """Add obj to the tail of the line. Returns False only if obj is None."""
        if obj is None:
            return False
        with self._lock:
            self._q.append(obj)
            return True

    def dequeue(self) -> Optional[object]:
        """Pop the head of the line; None if nobody is waiting."""
        with self._lock:
            if self._q:
                return self._q.popleft()
            return None

    # ----------------------- Ride boarding -----------------------

    def get_batch_for_boarding(self, capacity: int) -> List:
        """
        Pop up to `capacity` visitors from the head, keeping arrival order.
        Non-blocking; returns empty list if nothing to board.
        """
        if capacity <= 0:
            return []

        with self._lock:
            taken = []
            while len(taken) < capacity and self._q:
                taken.append(self._q.popleft())
            return taken
