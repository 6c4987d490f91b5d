"""
Host fleet simulator that spreads hosts across the seconds of a scrape interval
and turns each due host's measurements into remote-write time series.
"""
import logging
import random
from datetime import datetime, timedelta
from typing import Dict, List, Optional

from config_schema import SimulatorConfig
from devops_simulator import Host, MACHINE_TAG_KEYS
from point import coerce_field_value, make_usable_point
from remote_write import Label, Sample, TimeSeries, METRIC_NAME_LABEL, MEASUREMENT_LABEL

logger = logging.getLogger(__name__)


class HostsSimulator:
    """
    Owns a pool of simulated hosts bucketed by scrape offset.

    Host ``j`` reports at offset ``j % scrape_interval_seconds`` and its clock
    starts ``offset`` seconds after ``start``. Hosts are mutated on every
    ``generate`` call, so a simulator must not be shared between threads; to
    parallelise, give each worker its own simulator.
    """

    def __init__(
        self,
        host_count: int,
        scrape_interval_seconds: int,
        start: datetime,
        rng: Optional[random.Random] = None,
    ):
        if host_count <= 0:
            raise ValueError(f"host_count must be positive, got {host_count}")
        if scrape_interval_seconds <= 0:
            raise ValueError(f"scrape_interval_seconds must be positive, got {scrape_interval_seconds}")

        self.rng = rng or random.Random()
        self._host_count = host_count
        self._scrape_interval_seconds = scrape_interval_seconds

        self._hosts: Dict[int, List[Host]] = {offset: [] for offset in range(scrape_interval_seconds)}

        for i in range(host_count):
            offset = i % scrape_interval_seconds
            host_start = start + timedelta(seconds=offset)
            self._hosts[offset].append(
                Host.new(self.rng.getrandbits(63), self.rng.getrandbits(63), host_start, rng=self.rng)
            )

        logger.info(
            f"Built host pool: {host_count} hosts across {scrape_interval_seconds} offsets "
            f"(~{host_count // scrape_interval_seconds} per offset), start={start.isoformat()}"
        )

    @classmethod
    def from_config(cls, config: SimulatorConfig, rng: Optional[random.Random] = None) -> "HostsSimulator":
        if rng is None and config.seed is not None:
            rng = random.Random(config.seed)
        return cls(config.host_count, config.scrape_interval_seconds, config.start, rng=rng)

    @property
    def host_count(self) -> int:
        return self._host_count

    @property
    def scrape_interval_seconds(self) -> int:
        return self._scrape_interval_seconds

    def hosts_at(self, offset_seconds: int) -> Optional[List[Host]]:
        return self._hosts.get(offset_seconds)

    def bucket_sizes(self) -> List[int]:
        return [len(self._hosts[offset]) for offset in range(self._scrape_interval_seconds)]

    def generate(self, offset_seconds: int) -> Optional[List[TimeSeries]]:
        """
        Emit the series due at ``offset_seconds`` and advance those hosts.

        Returns None when the offset lies outside the scrape interval and an
        empty list when the offset's bucket holds no hosts. Not idempotent:
        each call moves the bucket's hosts one scrape interval forward.

        Raises:
            UnsupportedFieldValueError: a measurement produced a field value
                that is not an int, int64 or float.
        """
        hosts = self._hosts.get(offset_seconds)
        if hosts is None:
            return None

        interval = timedelta(seconds=self._scrape_interval_seconds)
        all_series: List[TimeSeries] = []

        for host in hosts:
            host_labels = [Label(name=key, value=value) for key, value in zip(MACHINE_TAG_KEYS, host.tag_values())]

            for measurement in host.simulated_measurements:
                p = make_usable_point()
                measurement.to_point(p)
                timestamp = int(p.timestamp.timestamp())

                for field_name, field_value in zip(p.field_keys, p.field_values):
                    value = coerce_field_value(field_name, field_value)

                    labels = list(host_labels)
                    labels.append(Label(name=MEASUREMENT_LABEL, value=field_name))
                    labels.append(Label(name=METRIC_NAME_LABEL, value=p.measurement_name))

                    all_series.append(TimeSeries(labels=labels, samples=[Sample(value=value, timestamp=timestamp)]))

            host.tick_all(interval)

        logger.debug(f"Offset {offset_seconds}: {len(hosts)} hosts, {len(all_series)} series")
        return all_series
