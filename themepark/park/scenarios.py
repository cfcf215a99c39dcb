# themepark/park/scenarios.py
"""
Scripted ride scenarios.

Each scenario builds its own Ride from the `scenarios.<key>` block of the config,
drives it through one feature (queue, history, sorting, cycles, export, import)
and returns the ride so callers and tests can inspect the final state.
run_all() chains them; the import scenario reads whatever file the export
scenario produced.
"""
import os
from datetime import date
from typing import Optional

from themepark.core import Ids
from themepark.facilities.ride import Ride
from themepark.park.arrival import VisitorGenerator
from themepark.visitors.base import Employee, Visitor


def build_operator(op_cfg: Optional[dict]) -> Optional[Employee]:
    if not op_cfg:
        return None
    return Employee(
        op_cfg["name"],
        op_cfg.get("age", 30),
        op_cfg.get("contact", ""),
        op_cfg.get("employee_id"),
        op_cfg.get("specialization"),
    )


def build_ride(ride_cfg: dict, metrics=None) -> Ride:
    """Ride from a {'name', 'capacity', 'operator'?} mapping."""
    return Ride(
        ride_cfg["name"],
        ride_cfg.get("capacity", Ride.DEFAULT_CAPACITY),
        operator=build_operator(ride_cfg.get("operator")),
        metrics=metrics,
    )


def _banner(title: str):
    print(f"\n=== {title} ===")


# ---------- queue ----------
def queue_management(cfg: dict, metrics=None) -> Ride:
    """Five visitors join, the first two leave again."""
    _banner("Queue Management")
    ride = build_ride(cfg["scenarios"]["queue_management"], metrics)

    for visitor in [
        Visitor("Alice Brown", 18, "555-5678", "TICKET002", "2025-11-21"),
        Visitor("Bob Wilson", 22, "555-9012", "TICKET003", "2025-11-21"),
        Visitor("Charlie Davis", 30, "555-3456", "TICKET004", "2025-11-21"),
        Visitor("Diana Evans", 25, "555-7890", "TICKET005", "2025-11-21"),
        Visitor("Ethan Foster", 19, "555-2345", "TICKET006", "2025-11-21"),
    ]:
        ride.enqueue(visitor)
    ride.print_queue()

    print("\n--- After Removing 2 Visitors ---")
    ride.dequeue_front()
    ride.dequeue_front()
    ride.print_queue()
    return ride


# ---------- history ----------
def ride_history(cfg: dict, metrics=None) -> Ride:
    """Five unique visitors recorded directly, then a duplicate check."""
    _banner("Ride History")
    ride = build_ride(cfg["scenarios"]["ride_history"], metrics)

    visitors = [
        Visitor("Frank Green", 28, "555-6789", "TICKET007", "2025-11-22"),
        Visitor("Grace Hall", 33, "555-0123", "TICKET008", "2025-11-22"),
        Visitor("Henry Hughes", 24, "555-4567", "TICKET009", "2025-11-22"),
        Visitor("Ivy Jones", 29, "555-8901", "TICKET010", "2025-11-22"),
        Visitor("Jack King", 31, "555-2345", "TICKET011", "2025-11-22"),
    ]
    for visitor in visitors:
        ride.add_to_history(visitor)

    print(f"Is {visitors[0].name} already in history? {ride.in_history(visitors[0])}")
    ride.add_to_history(visitors[0])
    print(f"Total visitors in history: {ride.history_size()}")
    ride.print_history()
    return ride


def sorted_history(cfg: dict, metrics=None) -> Ride:
    """Mixed visit dates so both sort keys get exercised."""
    _banner("Sorted Ride History")
    ride = build_ride(cfg["scenarios"]["sorted_history"], metrics)

    for visitor in [
        Visitor("Luna Moore", 22, "555-1111", "TICKET012", "2025-11-23"),
        Visitor("Mason Nelson", 45, "555-2222", "TICKET013", "2025-11-22"),
        Visitor("Nora Ortiz", 30, "555-3333", "TICKET014", "2025-11-23"),
        Visitor("Oscar Perez", 35, "555-4444", "TICKET015", "2025-11-23"),
        Visitor("Penelope Quinn", 28, "555-5555", "TICKET016", "2025-11-21"),
    ]:
        ride.add_to_history(visitor)

    print("\n--- Before Sorting ---")
    ride.print_history()
    ride.sort_history()
    print("\n--- After Sorting ---")
    ride.print_history()
    return ride


# ---------- cycles ----------
def ride_cycle(cfg: dict, metrics=None) -> Ride:
    """Six visitors, capacity four: two cycles empty the queue."""
    _banner("Ride Cycle")
    ride = build_ride(cfg["scenarios"]["ride_cycle"], metrics)

    for visitor in [
        Visitor("Quinn Reed", 25, "555-7777", "TICKET017", "2025-11-24"),
        Visitor("Ryan Scott", 27, "555-8888", "TICKET018", "2025-11-24"),
        Visitor("Stella Taylor", 23, "555-9999", "TICKET019", "2025-11-24"),
        Visitor("Tyler Walker", 30, "555-0000", "TICKET020", "2025-11-24"),
        Visitor("Uma Young", 26, "555-1111", "TICKET021", "2025-11-24"),
        Visitor("Victor Zhang", 29, "555-2234", "TICKET022", "2025-11-24"),
    ]:
        ride.enqueue(visitor)

    print("\n--- Initial Queue ---")
    ride.print_queue()

    ride.run_one_cycle()
    print("\n--- After First Cycle ---")
    ride.print_queue()
    ride.print_history()

    ride.run_one_cycle()
    print("\n--- After Second Cycle ---")
    ride.print_queue()
    ride.print_history()
    print(f"\nTotal cycles run: {ride.cycle_count}")
    return ride


def rush_hour(cfg: dict, metrics=None) -> Ride:
    """Generated crowd; cycles run until the line is empty."""
    _banner("Rush Hour")
    ride = build_ride(cfg["scenarios"]["rush_hour"], metrics)
    a_cfg = cfg["arrival"]
    generator = VisitorGenerator(
        ids=Ids(prefix="RUSH"),
        total_visitors=a_cfg["total_visitors"],
        curve_points=a_cfg["curve_points"],
        start_date=a_cfg["start_date"],
        age_range=a_cfg.get("age_range", (5, 75)),
        seed=a_cfg.get("seed"),
    )
    for visitor in generator.generate():
        ride.enqueue(visitor)

    while ride.queue_size() > 0:
        if ride.run_one_cycle() is None:
            break

    ride.sort_history()
    ride.print_history()
    return ride


# ---------- history files ----------
def export_history(cfg: dict, metrics=None, today: date = None):
    """Returns (ride, exported path or None)."""
    _banner("Export Ride History")
    ride = build_ride(cfg["scenarios"]["export_history"], metrics)

    for visitor in [
        Visitor("Olivia Martinez", 24, "555-5555", "TICKET023", "2025-11-25"),
        Visitor("Liam Anderson", 31, "555-6666", "TICKET024", "2025-11-25"),
        Visitor("Emma Thomas", 27, "555-7777", "TICKET025", "2025-11-26"),
        Visitor("Noah Hernandez", 29, "555-8888", "TICKET026", "2025-11-26"),
        Visitor("Ava Moore", 22, "555-9999", "TICKET027", "2025-11-26"),
    ]:
        ride.add_to_history(visitor)

    ride.sort_history()
    out_dir = cfg["output"]["export_dir"]
    os.makedirs(out_dir, exist_ok=True)
    path = ride.export_history(out_dir=out_dir, today=today)
    print(f"\nExport Result: {'Success' if path else 'Failed'}")
    return ride, path


def import_history(cfg: dict, path, metrics=None) -> Ride:
    _banner("Import Ride History")
    ride = build_ride(cfg["scenarios"]["import_history"], metrics)

    imported = ride.import_history(path)
    if imported > 0:
        print(f"Total imported visitors: {ride.history_size()}")
        ride.sort_history()
        print("--- Imported Ride History ---")
        ride.print_history()
    return ride


def run_all(cfg: dict, metrics=None, today: date = None) -> dict:
    """Run every scenario in order; returns {scenario key: ride}."""
    rides = {
        "queue_management": queue_management(cfg, metrics),
        "ride_history": ride_history(cfg, metrics),
        "sorted_history": sorted_history(cfg, metrics),
        "ride_cycle": ride_cycle(cfg, metrics),
        "rush_hour": rush_hour(cfg, metrics),
    }
    export_ride, path = export_history(cfg, metrics, today=today)
    rides["export_history"] = export_ride
    rides["import_history"] = import_history(cfg, path, metrics)
    return rides
