# themepark/config.py
"""
YAML configuration for the ride demo.

load_config() reads Config/park.yaml (or any given path) with yaml.safe_load and
lays it over DEFAULT_CONFIG, so a file only needs the keys it wants to change.
"""
import copy

import yaml

DEFAULT_CONFIG = {
    "output": {
        "results_dir": "results",
        "export_dir": ".",
    },
    "arrival": {
        "total_visitors": 10,
        "seed": None,
        "age_range": [5, 75],
        "start_date": "2025-11-21",
        "curve_points": [{"day": 0, "mean": 1.0}],
    },
    "scenarios": {
        "queue_management": {"name": "Splash Mountain", "capacity": 3,
                             "operator": {"name": "Mike Johnson", "specialization": "Water Ride"}},
        "ride_history": {"name": "Speed Demon", "capacity": 4},
        "sorted_history": {"name": "Giant Ferris Wheel", "capacity": 6},
        "ride_cycle": {"name": "Velocity X", "capacity": 4,
                       "operator": {"name": "Sarah Lee", "specialization": "Roller Coaster"}},
        "export_history": {"name": "Giant Ferris Wheel", "capacity": 6,
                           "operator": {"name": "David Clark", "specialization": "Ferris Wheel"}},
        "import_history": {"name": "Merry-Go-Round", "capacity": 8,
                           "operator": {"name": "Sophia Wilson", "specialization": "Carousel"}},
        "rush_hour": {"name": "Thunder Coaster", "capacity": 5,
                      "operator": {"name": "Omar Reyes", "specialization": "Roller Coaster"}},
    },
}


def _merge(base: dict, override: dict) -> dict:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def load_config(path: str = None) -> dict:
    """
    Return the merged configuration.
    A missing file or invalid YAML raises (OSError / yaml.YAMLError): nothing can run without it.
    """
    cfg = copy.deepcopy(DEFAULT_CONFIG)
    if path is None:
        return cfg

    with open(path, encoding="utf-8") as f:
        loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"{path}: top level of the config must be a mapping")
    return _merge(cfg, loaded)
