"""
Time series output types shaped after the Prometheus remote-write message.

The generator hands these to a transport; the transport decides on protobuf
framing and compression. ``encode_write_request`` gives the same logical
structure as plain dicts, ready for JSON.
"""
from typing import Any, Dict, Iterable, List
from dataclasses import dataclass, field

METRIC_NAME_LABEL = "__name__"
MEASUREMENT_LABEL = "measurement"


@dataclass(frozen=True)
class Label:
    name: str
    value: str


@dataclass
class Sample:
    value: float
    timestamp: int  # Unix seconds


@dataclass
class TimeSeries:
    labels: List[Label] = field(default_factory=list)
    samples: List[Sample] = field(default_factory=list)

    def label_map(self) -> Dict[str, str]:
        return {label.name: label.value for label in self.labels}


def encode_write_request(series: Iterable[TimeSeries]) -> Dict[str, Any]:
    """Encode time series into a remote-write shaped payload."""
    return {
        "timeseries": [
            {
                "labels": [{"name": label.name, "value": label.value} for label in ts.labels],
                "samples": [{"value": sample.value, "timestamp": sample.timestamp} for sample in ts.samples],
            }
            for ts in series
        ]
    }


def count_samples(series: Iterable[TimeSeries]) -> int:
    return sum(len(ts.samples) for ts in series)
