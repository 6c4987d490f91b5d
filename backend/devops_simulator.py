"""
Simulated devops hosts: identity tags plus a set of measurements whose fields
random-walk forward as simulated time advances.

Field shapes follow what a telegraf-style host agent reports (cpu, diskio,
disk, kernel, mem, net). Each measurement keeps its own clock, starting at the
host's epoch and moved forward by ``tick``.
"""
import random
from datetime import datetime, timedelta
from typing import Any, Iterator, List, Optional, Tuple

from distributions import (
    ClampedRandomWalkDistribution,
    ConstantDistribution,
    MonotonicRandomWalkDistribution,
    NormalDistribution,
)
from point import Point

GIB = 1024 * 1024 * 1024

# Order matters: it is the label order on every emitted series.
MACHINE_TAG_KEYS = (
    "hostname",
    "region",
    "datacenter",
    "rack",
    "os",
    "arch",
    "team",
    "service",
    "service_version",
    "service_environment",
)

REGION_DATACENTERS = {
    "us-east-1": ["us-east-1a", "us-east-1b", "us-east-1c", "us-east-1e"],
    "us-west-1": ["us-west-1a", "us-west-1b"],
    "us-west-2": ["us-west-2a", "us-west-2b", "us-west-2c"],
    "eu-west-1": ["eu-west-1a", "eu-west-1b", "eu-west-1c"],
    "eu-central-1": ["eu-central-1a", "eu-central-1b"],
    "ap-southeast-1": ["ap-southeast-1a", "ap-southeast-1b"],
    "ap-southeast-2": ["ap-southeast-2a", "ap-southeast-2b"],
    "ap-northeast-1": ["ap-northeast-1a", "ap-northeast-1c"],
    "sa-east-1": ["sa-east-1a", "sa-east-1b", "sa-east-1c"],
}

RACK_CHOICES = [str(i) for i in range(100)]
OS_CHOICES = ["Ubuntu16.10", "Ubuntu16.04LTS", "Ubuntu15.10"]
ARCH_CHOICES = ["x64", "x86"]
TEAM_CHOICES = ["SF", "NYC", "LON", "CHI"]
SERVICE_CHOICES = [str(i) for i in range(20)]
SERVICE_VERSION_CHOICES = ["0", "1"]
SERVICE_ENVIRONMENT_CHOICES = ["production", "staging", "test"]


class SimulatedMeasurement:
    """
    Base class for a host measurement.

    Subclasses register their distributions in ``self.distributions`` and
    yield their current ``(field, value)`` pairs from ``_fields``.
    """

    name = ""

    def __init__(self, start: datetime, rng: random.Random):
        self.timestamp = start
        self.rng = rng
        self.distributions: List[Any] = []

    def _track(self, distribution):
        self.distributions.append(distribution)
        return distribution

    def _normal(self, mean: float, stddev: float) -> NormalDistribution:
        return NormalDistribution(mean, stddev, rng=self.rng)

    def _fields(self) -> Iterator[Tuple[str, Any]]:
        raise NotImplementedError

    def tick(self, duration: timedelta) -> None:
        self.timestamp += duration
        for distribution in self.distributions:
            distribution.advance()

    def to_point(self, point: Point) -> None:
        point.measurement_name = self.name
        point.timestamp = self.timestamp
        for key, value in self._fields():
            point.append_field(key, value)


class CPUMeasurement(SimulatedMeasurement):
    name = "cpu"

    FIELD_KEYS = (
        "usage_user",
        "usage_system",
        "usage_idle",
        "usage_nice",
        "usage_iowait",
        "usage_irq",
        "usage_softirq",
        "usage_steal",
        "usage_guest",
        "usage_guest_nice",
    )

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        self.usage = {
            key: self._track(ClampedRandomWalkDistribution(0.0, 100.0, self._normal(0.0, 1.0), rng.random() * 100.0))
            for key in self.FIELD_KEYS
        }

    def _fields(self):
        for key in self.FIELD_KEYS:
            yield key, float(self.usage[key].get())


class DiskIOMeasurement(SimulatedMeasurement):
    name = "diskio"

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        self.counters = {
            "reads": self._track(MonotonicRandomWalkDistribution(self._normal(50, 1), rng.randint(1_000_000, 50_000_000))),
            "writes": self._track(MonotonicRandomWalkDistribution(self._normal(50, 1), rng.randint(1_000_000, 50_000_000))),
            "read_bytes": self._track(MonotonicRandomWalkDistribution(self._normal(1_000_000, 10_000), rng.randint(1_000_000_000, 100_000_000_000))),
            "write_bytes": self._track(MonotonicRandomWalkDistribution(self._normal(1_000_000, 10_000), rng.randint(1_000_000_000, 100_000_000_000))),
            "read_time": self._track(MonotonicRandomWalkDistribution(self._normal(100, 5), rng.randint(0, 10_000_000))),
            "write_time": self._track(MonotonicRandomWalkDistribution(self._normal(100, 5), rng.randint(0, 10_000_000))),
            "io_time": self._track(MonotonicRandomWalkDistribution(self._normal(200, 10), rng.randint(0, 10_000_000))),
        }

    def _fields(self):
        for key, counter in self.counters.items():
            yield key, int(counter.get())


class DiskMeasurement(SimulatedMeasurement):
    name = "disk"

    INODES_TOTAL = 32_768_000

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        self.total = rng.choice([100, 200, 500]) * GIB
        self.used = self._track(ClampedRandomWalkDistribution(
            0, self.total, self._normal(0, 50_000_000), self.total * rng.uniform(0.3, 0.7),
        ))
        self.inodes_used = self._track(ClampedRandomWalkDistribution(
            0, self.INODES_TOTAL, self._normal(0, 100), rng.randint(100_000, 1_000_000),
        ))

    def _fields(self):
        used = int(self.used.get())
        inodes_used = int(self.inodes_used.get())
        yield "total", self.total
        yield "free", self.total - used
        yield "used", used
        yield "used_percent", int(100 * used / self.total)
        yield "inodes_total", self.INODES_TOTAL
        yield "inodes_free", self.INODES_TOTAL - inodes_used
        yield "inodes_used", inodes_used


class KernelMeasurement(SimulatedMeasurement):
    name = "kernel"

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        uptime_seconds = rng.randint(3600, 90 * 24 * 3600)
        self.boot_time = self._track(ConstantDistribution(int(start.timestamp()) - uptime_seconds))
        self.counters = {
            "interrupts": self._track(MonotonicRandomWalkDistribution(self._normal(5, 1), rng.randint(0, 100_000_000))),
            "context_switches": self._track(MonotonicRandomWalkDistribution(self._normal(5, 1), rng.randint(0, 100_000_000))),
            "processes_forked": self._track(MonotonicRandomWalkDistribution(self._normal(5, 1), rng.randint(0, 1_000_000))),
            "disk_pages_in": self._track(MonotonicRandomWalkDistribution(self._normal(5, 1), rng.randint(0, 10_000_000))),
            "disk_pages_out": self._track(MonotonicRandomWalkDistribution(self._normal(5, 1), rng.randint(0, 10_000_000))),
        }

    def _fields(self):
        yield "boot_time", int(self.boot_time.get())
        for key, counter in self.counters.items():
            yield key, int(counter.get())


class MemMeasurement(SimulatedMeasurement):
    name = "mem"

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        self.total = rng.choice([8, 12, 16]) * GIB
        # Percentages; upper bounds keep used + cached + buffered <= 100.
        self.used_percent = self._track(ClampedRandomWalkDistribution(0.0, 70.0, self._normal(0.0, 1.0), rng.uniform(40.0, 60.0)))
        self.cached_percent = self._track(ClampedRandomWalkDistribution(15.0, 25.0, self._normal(0.0, 0.5), rng.uniform(15.0, 25.0)))
        self.buffered_percent = self._track(ClampedRandomWalkDistribution(2.0, 5.0, self._normal(0.0, 0.1), rng.uniform(2.0, 5.0)))

    def _fields(self):
        used = int(self.total * self.used_percent.get() / 100)
        cached = int(self.total * self.cached_percent.get() / 100)
        buffered = int(self.total * self.buffered_percent.get() / 100)
        free = self.total - used - cached - buffered
        available = free + cached + buffered
        yield "total", self.total
        yield "available", available
        yield "used", used
        yield "free", free
        yield "cached", cached
        yield "buffered", buffered
        yield "used_percent", float(self.used_percent.get())
        yield "available_percent", 100.0 * available / self.total
        yield "buffered_percent", float(self.buffered_percent.get())


class NetMeasurement(SimulatedMeasurement):
    name = "net"

    def __init__(self, start: datetime, rng: random.Random):
        super().__init__(start, rng)
        self.counters = {
            "bytes_sent": self._track(MonotonicRandomWalkDistribution(self._normal(5_000_000, 100_000), rng.randint(10_000_000_000, 1_000_000_000_000))),
            "bytes_recv": self._track(MonotonicRandomWalkDistribution(self._normal(5_000_000, 100_000), rng.randint(10_000_000_000, 1_000_000_000_000))),
            "packets_sent": self._track(MonotonicRandomWalkDistribution(self._normal(5_000, 100), rng.randint(1_000_000, 1_000_000_000))),
            "packets_recv": self._track(MonotonicRandomWalkDistribution(self._normal(5_000, 100), rng.randint(1_000_000, 1_000_000_000))),
            "err_in": self._track(MonotonicRandomWalkDistribution(self._normal(0, 1), 0)),
            "err_out": self._track(MonotonicRandomWalkDistribution(self._normal(0, 1), 0)),
            "drop_in": self._track(MonotonicRandomWalkDistribution(self._normal(0, 1), 0)),
            "drop_out": self._track(MonotonicRandomWalkDistribution(self._normal(0, 1), 0)),
        }

    def _fields(self):
        for key, counter in self.counters.items():
            yield key, int(counter.get())


MEASUREMENT_TYPES = (
    CPUMeasurement,
    DiskIOMeasurement,
    DiskMeasurement,
    KernelMeasurement,
    MemMeasurement,
    NetMeasurement,
)


class Host:
    """A simulated machine: ten identity tags and its measurements."""

    def __init__(
        self,
        name: str,
        region: str,
        datacenter: str,
        rack: str,
        os: str,
        arch: str,
        team: str,
        service: str,
        service_version: str,
        service_environment: str,
        simulated_measurements: Optional[List[SimulatedMeasurement]] = None,
    ):
        self.name = name
        self.region = region
        self.datacenter = datacenter
        self.rack = rack
        self.os = os
        self.arch = arch
        self.team = team
        self.service = service
        self.service_version = service_version
        self.service_environment = service_environment
        self.simulated_measurements = simulated_measurements or []

    @classmethod
    def new(cls, seed1: int, seed2: int, start: datetime, rng: Optional[random.Random] = None) -> "Host":
        """
        Create a host with randomly chosen tags whose measurements start at ``start``.

        Seeds are not checked for uniqueness; two hosts may share a name.
        """
        rng = rng or random.Random()
        region = rng.choice(list(REGION_DATACENTERS))

        return cls(
            name=f"host_{seed1 + seed2}",
            region=region,
            datacenter=rng.choice(REGION_DATACENTERS[region]),
            rack=rng.choice(RACK_CHOICES),
            os=rng.choice(OS_CHOICES),
            arch=rng.choice(ARCH_CHOICES),
            team=rng.choice(TEAM_CHOICES),
            service=rng.choice(SERVICE_CHOICES),
            service_version=rng.choice(SERVICE_VERSION_CHOICES),
            service_environment=rng.choice(SERVICE_ENVIRONMENT_CHOICES),
            simulated_measurements=[measurement_type(start, rng) for measurement_type in MEASUREMENT_TYPES],
        )

    def tag_values(self) -> Tuple[str, ...]:
        """Identity values in MACHINE_TAG_KEYS order."""
        return (
            self.name,
            self.region,
            self.datacenter,
            self.rack,
            self.os,
            self.arch,
            self.team,
            self.service,
            self.service_version,
            self.service_environment,
        )

    def tick_all(self, duration: timedelta) -> None:
        for measurement in self.simulated_measurements:
            measurement.tick(duration)
