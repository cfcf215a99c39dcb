import csv
import io
import os
import threading
from collections import defaultdict
from datetime import datetime

import matplotlib
matplotlib.use('Agg')  # Non-interactive backend
import matplotlib.pyplot as plt

FIELDNAMES = [
    "timestamp",
    "event",
    # common fields
    "ride_name",
    "cycle",
    "visitor_name",
    "ticket_id",
    "count",
    "reason",
]


class MetricsRecorder:
    """
    Thread-safe CSV logger for ride events.
    Rides call record_* methods; a recorder can be shared by several rides.
    """

    def __init__(self, out_dir: str = "results", filename: str = "ride_events.csv"):
        self.out_dir = out_dir
        self.filename = filename
        self._path = os.path.join(out_dir, filename)
        os.makedirs(out_dir, exist_ok=True)

        # Create file with header if new/empty
        self._lock = threading.Lock()
        new_file = not os.path.exists(self._path) or os.path.getsize(self._path) == 0
        self._fh = open(self._path, "a", newline="", encoding="utf-8")
        self._writer = csv.DictWriter(self._fh, fieldnames=FIELDNAMES)
        if new_file:
            self._writer.writeheader()
            self._fh.flush()
        # rows before this byte offset belong to earlier runs
        self._run_offset = os.path.getsize(self._path)

    @property
    def path(self) -> str:
        return self._path

    # ---------- low-level write ----------
    def _write(self, row: dict):
        row.setdefault("timestamp", datetime.now().isoformat(timespec="seconds"))
        with self._lock:
            self._writer.writerow(row)
            self._fh.flush()

    # ---------- queue ----------
    def record_queue_join(self, ride_name: str, visitor, queue_length: int):
        self._write({
            "event": "queue_join",
            "ride_name": ride_name,
            "visitor_name": visitor.name,
            "ticket_id": visitor.ticket_id,
            "count": queue_length,
        })

    def record_queue_leave(self, ride_name: str, visitor, queue_length: int):
        self._write({
            "event": "queue_leave",
            "ride_name": ride_name,
            "visitor_name": visitor.name,
            "ticket_id": visitor.ticket_id,
            "count": queue_length,
        })

    # ---------- ride cycles ----------
    def record_board(self, ride_name: str, cycle: int, visitor):
        self._write({
            "event": "ride_board",
            "ride_name": ride_name,
            "cycle": cycle,
            "visitor_name": visitor.name,
            "ticket_id": visitor.ticket_id,
        })

    def record_cycle(self, ride_name: str, cycle: int, boarded: int, remaining: int):
        self._write({
            "event": "cycle_complete",
            "ride_name": ride_name,
            "cycle": cycle,
            "count": boarded,
            "reason": f"remaining={remaining}",
        })

    def record_cycle_rejected(self, ride_name: str, reason: str):
        self._write({
            "event": "cycle_rejected",
            "ride_name": ride_name,
            "reason": reason,
        })

    # ---------- history files ----------
    def record_export(self, ride_name: str, count: int, path: str):
        self._write({
            "event": "history_export",
            "ride_name": ride_name,
            "count": count,
            "reason": path,
        })

    def record_import(self, ride_name: str, imported: int, skipped: int, path: str):
        self._write({
            "event": "history_import",
            "ride_name": ride_name,
            "count": imported,
            "reason": f"skipped={skipped} source={path}",
        })

    # ---------- cleanup ----------
    def close(self):
        with self._lock:
            try:
                self._fh.flush()
            finally:
                self._fh.close()

    # ---------- visualization ----------
    def generate_boarding_graph(self, include_rides=None):
        """
        Plot visitors boarded per cycle for every ride recorded by this recorder.
        Rows appended to the same file by earlier runs are left out.
        Returns the PNG path, or None when there is nothing to draw.
        """
        boarded = defaultdict(dict)

        try:
            with open(self._path, 'rb') as f:
                f.seek(self._run_offset)
                text = f.read().decode('utf-8')
            reader = csv.DictReader(io.StringIO(text, newline=''), fieldnames=FIELDNAMES)
            for row in reader:
                if row['event'] != 'cycle_complete':
                    continue
                ride_name = row.get('ride_name', '')
                if include_rides is not None and ride_name not in include_rides:
                    continue
                boarded[ride_name][int(row['cycle'])] = int(row['count'])
        except (OSError, KeyError, ValueError) as e:
            print(f"⚠️  Error reading metrics for graph: {e}")
            return None

        if not boarded:
            print("⚠️  No cycle data available for graphing")
            return None

        plt.figure(figsize=(10, 5))

        for ride_name, per_cycle in sorted(boarded.items()):
            cycles = sorted(per_cycle.keys())
            counts = [per_cycle[c] for c in cycles]
            plt.plot(cycles, counts, marker='o', label=ride_name, linewidth=1.5, alpha=0.8)

        plt.xlabel('Cycle', fontsize=12)
        plt.ylabel('Visitors boarded', fontsize=12)
        plt.title('Visitors Boarded per Ride Cycle', fontsize=14, fontweight='bold')
        plt.legend(loc='upper right', fontsize=9)
        plt.grid(True, alpha=0.3)
        plt.tight_layout()

        graph_path = os.path.join(self.out_dir, 'boarding_graph.png')
        plt.savefig(graph_path, dpi=150)
        plt.close()

        print(f"📊 Boarding graph saved to: {graph_path}")
        return graph_path
