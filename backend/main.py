"""
Dry-run driver: builds a host pool from the environment and cycles through
every offset of the scrape interval, logging how many series each offset emits.
Nothing is sent anywhere.
"""
import os
import sys
import logging
from typing import Iterator, List, Tuple

from pydantic import ValidationError

from config_schema import SimulatorConfig
from hosts_simulator import HostsSimulator
from remote_write import TimeSeries, count_samples

logger = logging.getLogger(__name__)


def run_intervals(simulator: HostsSimulator, intervals: int) -> Iterator[Tuple[int, List[TimeSeries]]]:
    """Yield ``(offset, series)`` for every offset, ``intervals`` times over."""
    for _ in range(intervals):
        for offset in range(simulator.scrape_interval_seconds):
            yield offset, simulator.generate(offset)


def main() -> int:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulatorConfig.from_env()
    except ValidationError as e:
        logger.error(f"Invalid simulator configuration: {e}")
        return 1

    intervals = int(os.getenv("INTERVALS", "1"))
    simulator = HostsSimulator.from_config(config)

    total = 0
    for offset, series in run_intervals(simulator, intervals):
        sample_count = count_samples(series)
        total += sample_count
        logger.info(f"offset={offset} series={len(series)} samples={sample_count}")

    logger.info(f"Generated {total} samples from {config.host_count} hosts over {intervals} interval(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
