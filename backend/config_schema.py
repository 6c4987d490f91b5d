import os
from typing import Optional
from datetime import datetime, timezone

from dotenv import load_dotenv
from pydantic import BaseModel, Field


def _now_utc() -> datetime:
    return datetime.now(timezone.utc).replace(microsecond=0)


class SimulatorConfig(BaseModel):
    """Run configuration for the host fleet simulator."""
    host_count: int = Field(100, gt=0, description="Number of simulated hosts in the fleet.")
    scrape_interval_seconds: int = Field(10, gt=0, description="Seconds over which the fleet's reports are spread.")
    start: datetime = Field(default_factory=_now_utc, description="Simulated epoch of the first bucket.")
    seed: Optional[int] = Field(None, description="Seed for the random source (None = unseeded).")

    @classmethod
    def from_env(cls) -> "SimulatorConfig":
        """Build a config from environment variables, loading a .env file if present."""
        load_dotenv()

        values = {}
        if os.getenv("HOST_COUNT"):
            values["host_count"] = os.getenv("HOST_COUNT")
        if os.getenv("SCRAPE_INTERVAL_SECONDS"):
            values["scrape_interval_seconds"] = os.getenv("SCRAPE_INTERVAL_SECONDS")
        if os.getenv("START_TIME"):
            values["start"] = os.getenv("START_TIME")
        if os.getenv("RANDOM_SEED"):
            values["seed"] = os.getenv("RANDOM_SEED")

        return cls(**values)
