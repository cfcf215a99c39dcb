# themepark/facilities/cycle.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from themepark.core import HistoryAdd


@dataclass
class CycleReport:
    ride_name: str
    cycle_number: int                               # ride.cycle_count after this cycle
    boarded: List = field(default_factory=list)     # visitors in boarding (FIFO) order
    newly_recorded: int = 0                         # boarded visitors that were not yet in history
    remaining: int = 0                              # queue length after boarding

    @property
    def boarded_count(self) -> int:
        return len(self.boarded)


class CycleExecutor:
    """
    Runs one boarding cycle on a Ride.

      1. reject if no operator is assigned
      2. reject if nobody is waiting
      3. take min(max_capacity, queue length) visitors from the head of the queue
      4. add each of them to history (already-recorded tickets are not duplicated)
      5. bump the ride's cycle count

    A rejected cycle changes nothing and returns None.
    The caller (Ride.run_one_cycle) holds the ride lock for the whole call.
    """

    def execute(self, ride) -> Optional[CycleReport]:
        print(f"\n=== Starting One Cycle of {ride.name} ===")

        if ride.operator is None:
            return self._reject(ride, "No operator assigned!")
        if ride.queue.is_empty():
            return self._reject(ride, "No visitors in queue!")

        to_board = min(ride.max_capacity, ride.queue.size())
        batch = ride.queue.get_batch_for_boarding(to_board)
        upcoming_cycle = ride.cycle_count + 1

        boarded = []
        for visitor in batch:
            boarded.append(visitor)
            print(f"Boarded: {visitor.name} (Ticket ID: {visitor.ticket_id})")
            ride._record("record_board", upcoming_cycle, visitor)

        operator = ride.operator
        print(f"\n{ride.name} is running! Enjoy the ride, visitors!")
        print(f"Operator: {operator.name} (Specialization: {operator.ride_specialization})")

        newly_recorded = 0
        for visitor in boarded:
            if ride.add_to_history(visitor) is HistoryAdd.ADDED:
                newly_recorded += 1

        cycle_number = ride._complete_cycle()
        report = CycleReport(
            ride_name=ride.name,
            cycle_number=cycle_number,
            boarded=boarded,
            newly_recorded=newly_recorded,
            remaining=ride.queue.size(),
        )

        print(f"\n=== Cycle {cycle_number} Completed For {ride.name} ===")
        print(f"Total visitors boarded this cycle: {report.boarded_count}")
        print(f"Total cycles run: {cycle_number}")
        print(f"Remaining visitors in queue: {report.remaining}")
        ride._record("record_cycle", cycle_number, report.boarded_count, report.remaining)
        return report

    def _reject(self, ride, reason: str) -> None:
        print(f"Error: Cannot run {ride.name} - {reason}")
        ride._record("record_cycle_rejected", reason)
        return None
