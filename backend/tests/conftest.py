"""
Pytest fixtures for host simulator tests.
"""
import pytest
import random
import sys
import os
from datetime import datetime, timezone

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config_schema import SimulatorConfig
from hosts_simulator import HostsSimulator


T0 = datetime(2019, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeMeasurement:
    """Measurement with fixed fields whose clock moves on tick."""

    def __init__(self, name, fields, timestamp=T0):
        self.name = name
        self.fields = fields
        self.timestamp = timestamp
        self.ticks = []

    def to_point(self, point):
        point.measurement_name = self.name
        point.timestamp = self.timestamp
        for key, value in self.fields.items():
            point.append_field(key, value)

    def tick(self, duration):
        self.ticks.append(duration)
        self.timestamp += duration


@pytest.fixture
def start():
    return T0


@pytest.fixture
def rng():
    """Seeded random source so host pools are reproducible."""
    return random.Random(1234)


@pytest.fixture
def minimal_config():
    """Minimal valid simulator configuration."""
    return {
        "host_count": 4,
        "scrape_interval_seconds": 2,
        "start": T0,
        "seed": 42,
    }


@pytest.fixture
def minimal_simulator_config(minimal_config):
    return SimulatorConfig(**minimal_config)


@pytest.fixture
def small_simulator(start, rng):
    """Four hosts over a two second interval."""
    return HostsSimulator(host_count=4, scrape_interval_seconds=2, start=start, rng=rng)


@pytest.fixture
def fake_measurement_factory():
    return FakeMeasurement
