"""
Shared pytest fixtures for the ride tests.
"""

import pytest

from themepark.config import load_config
from themepark.facilities.ride import Ride
from themepark.metrics_recorder import MetricsRecorder
from themepark.visitors.base import Employee, Visitor


@pytest.fixture
def operator():
    return Employee("Sarah Lee", 32, "555-6666", "EMP003", "Roller Coaster")


@pytest.fixture
def make_visitor():
    """
    Build visitors with sensible defaults:
        make_visitor("T1")
        make_visitor("T2", name="Bob", age=40, visit_date="2025-11-22")
    """
    def _make(ticket_id, name=None, age=30, contact="555-0000", visit_date="2025-11-24"):
        return Visitor(name or f"Visitor {ticket_id}", age, contact, ticket_id, visit_date)
    return _make


@pytest.fixture
def ride(operator):
    return Ride("Velocity X", 4, operator)


@pytest.fixture
def metrics(tmp_path):
    recorder = MetricsRecorder(out_dir=str(tmp_path / "results"))
    yield recorder
    if not recorder._fh.closed:
        recorder.close()


@pytest.fixture
def cfg(tmp_path):
    """Default configuration with exports redirected into the test's tmp dir."""
    config = load_config()
    config["output"]["export_dir"] = str(tmp_path / "exports")
    config["output"]["results_dir"] = str(tmp_path / "results")
    return config
