#!/usr/bin/env python3
"""
Main entry point for the ride operations demo.
Loads configuration, runs every ride scenario and renders the boarding graph.
"""

import sys

from themepark.config import load_config
from themepark.metrics_recorder import MetricsRecorder
from themepark.park import scenarios


def main(config_path: str = "Config/park.yaml"):
    """Run all scenarios against the given configuration file."""
    print("🎢 Starting Ride Operations Demo...")

    # Load configuration
    cfg = load_config(config_path)
    metrics = MetricsRecorder(out_dir=cfg["output"]["results_dir"])

    print("📊 Setup complete:")
    print(f"  - {len(cfg['scenarios'])} scenarios")
    print(f"  - Exports go to: {cfg['output']['export_dir']}")
    print(f"  - Event log: {metrics.path}")

    try:
        rides = scenarios.run_all(cfg, metrics)
    finally:
        metrics.close()

    print("\n" + "="*60)
    print("Generating boarding visualization...")
    metrics.generate_boarding_graph(include_rides=[r.name for r in rides.values()])
    print("="*60)
    print("✅ Demo complete!")
    for key, ride in rides.items():
        print(f"  {key:<18} {ride.name:<20} cycles={ride.cycle_count} "
              f"history={ride.history_size()} queue={ride.queue_size()}")
    print("="*60 + "\n")
    return rides


if __name__ == "__main__":
    main(*sys.argv[1:2])
