# themepark/facilities/ride.py
import threading
from datetime import date
from typing import List, Optional

from themepark.core import HistoryAdd
from themepark.facilities import history_io
from themepark.facilities.cycle import CycleExecutor, CycleReport
from themepark.facilities.ordering import sort_visitors
from themepark.facilities.queues import RideQueue
from themepark.visitors.base import Employee, Visitor


class Ride:
    """
    One amusement ride: a FIFO waiting line, the history of visitors who rode,
    an optional operator and the number of completed cycles.

    Every mutating call holds the ride lock, so queue, history and cycle count
    always change together.
    """

    DEFAULT_CAPACITY = 2

    def __init__(self, name: str, max_capacity: int, operator: Optional[Employee] = None,
                 metrics=None):
        self._name = name
        # fallback to 2 seats when the requested capacity is not usable
        self._max_capacity = max_capacity if max_capacity is not None and max_capacity >= 1 \
            else self.DEFAULT_CAPACITY
        self._operator = operator
        self.metrics = metrics
        self.queue = RideQueue()
        self._history: List[Visitor] = []
        self._cycle_count = 0
        self._executor = CycleExecutor()
        self.last_import_report: Optional[history_io.ImportReport] = None

        # reentrant: a cycle calls add_to_history while holding it
        self._lock = threading.RLock()

    # ---- read-only state ----
    @property
    def name(self) -> str:
        return self._name

    @property
    def max_capacity(self) -> int:
        return self._max_capacity

    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    @property
    def operator(self) -> Optional[Employee]:
        return self._operator

    @operator.setter
    def operator(self, employee: Optional[Employee]):
        self.assign_operator(employee)

    def assign_operator(self, employee: Optional[Employee]):
        with self._lock:
            self._operator = employee
        if employee is None:
            print(f"{self.name} no longer has an operator")
        else:
            print(f"{employee.name} now operates {self.name}")

    # ---- metrics plumbing ----
    def _record(self, method: str, *args):
        if not self.metrics:
            return
        try:
            getattr(self.metrics, method)(self.name, *args)
        except (OSError, ValueError) as e:
            print(f"⚠️ Could not record {method} for {self.name}: {e}")

    # ---- queue ----
    def enqueue(self, visitor: Optional[Visitor]) -> bool:
        if visitor is None:
            print("Error: Cannot add null visitor to queue")
            return False
        with self._lock:
            self.queue.enqueue(visitor)
            length = self.queue.size()
        print(f"Success: {visitor.name} added to queue for {self.name}")
        self._record("record_queue_join", visitor, length)
        return True

    def dequeue_front(self) -> Optional[Visitor]:
        """Remove and return the visitor at the head of the line (None if empty)."""
        with self._lock:
            visitor = self.queue.dequeue()
            length = self.queue.size()
        if visitor is None:
            print("Error: Queue is empty, cannot remove visitor")
            return None
        print(f"Success: {visitor.name} removed from queue")
        self._record("record_queue_leave", visitor, length)
        return visitor

    def queue_size(self) -> int:
        return self.queue.size()

    def queue_snapshot(self) -> List[Visitor]:
        return self.queue.snapshot()

    def print_queue(self):
        waiting = self.queue_snapshot()
        print(f"\nQueue for {self.name} (size: {len(waiting)}):")
        if not waiting:
            print("  No visitors in queue")
            return
        for index, v in enumerate(waiting, start=1):
            print(f"{index}. {v.describe()}")

    # ---- history ----
    def in_history(self, visitor: Optional[Visitor]) -> bool:
        """True when an entry with the same ticket id is recorded; None-safe on both sides."""
        if visitor is None:
            return False
        with self._lock:
            for v in self._history:
                if v is not None and v.ticket_id is not None and v.ticket_id == visitor.ticket_id:
                    return True
        return False

    def add_to_history(self, visitor: Optional[Visitor]) -> HistoryAdd:
        if visitor is None:
            print("Error: Cannot add null visitor to history")
            return HistoryAdd.REJECTED
        with self._lock:
            if self.in_history(visitor):
                print(f"{visitor.name} is already in history")
                return HistoryAdd.ALREADY_PRESENT
            self._history.append(visitor)
        print(f"Added {visitor.name} to history")
        return HistoryAdd.ADDED

    def history_size(self) -> int:
        with self._lock:
            return len(self._history)

    def history_snapshot(self) -> List[Visitor]:
        with self._lock:
            return list(self._history)

    def sort_history(self) -> bool:
        with self._lock:
            if not self._history:
                print(f"Error: Cannot sort empty ride history for {self.name}")
                return False
            sort_visitors(self._history)
        print(f"Success: Ride history for {self.name} sorted")
        return True

    def print_history(self):
        entries = self.history_snapshot()
        print(f"\nRide History for {self.name}:")
        if not entries:
            print("  No visitors in history")
            return
        for index, v in enumerate(entries, start=1):
            print(f"{index}. {v.describe()}")

    # ---- cycles ----
    def run_one_cycle(self) -> Optional[CycleReport]:
        """Board up to max_capacity visitors; None when the cycle is rejected."""
        with self._lock:
            return self._executor.execute(self)

    def _complete_cycle(self) -> int:
        with self._lock:
            self._cycle_count += 1
            return self._cycle_count

    # ---- history files ----
    def export_history(self, out_dir: str = ".", today: date = None) -> Optional[str]:
        entries = self.history_snapshot()
        path = history_io.export_history(self.name, entries, out_dir=out_dir, today=today)
        if path is not None:
            self._record("record_export", len(entries), path)
        return path

    def import_history(self, path) -> int:
        """
        Append the valid records of `path` to history and return how many were added.
        Ticket ids are not checked against existing history here.
        The full outcome (skips, error) is kept in last_import_report.
        """
        report = history_io.read_history(path)
        self.last_import_report = report
        if report.error is not None:
            return 0

        with self._lock:
            self._history.extend(report.visitors)
            size = len(self._history)

        print("\n=== Import Completed ===")
        print(f"Total lines processed (excluding header): {report.lines_processed}")
        print(f"Successfully imported visitors: {report.imported}")
        print(f"Skipped invalid/empty lines: {report.skipped}")
        print(f"Updated ride history size: {size}")
        self._record("record_import", report.imported, report.skipped, report.source)
        return report.imported
