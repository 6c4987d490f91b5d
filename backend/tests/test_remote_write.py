"""
Tests for remote-write output types and payload encoding.
"""
import json
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from remote_write import Label, Sample, TimeSeries, count_samples, encode_write_request


def _series(name, value):
    return TimeSeries(
        labels=[Label("hostname", "host_1"), Label("__name__", name)],
        samples=[Sample(value=value, timestamp=1559390400)],
    )


class TestEncodeWriteRequest:
    """Tests for encode_write_request."""

    def test_payload_structure(self):
        payload = encode_write_request([_series("cpu", 1.5)])
        assert payload == {
            "timeseries": [{
                "labels": [
                    {"name": "hostname", "value": "host_1"},
                    {"name": "__name__", "value": "cpu"},
                ],
                "samples": [{"value": 1.5, "timestamp": 1559390400}],
            }]
        }

    def test_empty(self):
        assert encode_write_request([]) == {"timeseries": []}

    def test_json_serialisable(self, small_simulator):
        payload = encode_write_request(small_simulator.generate(0))
        decoded = json.loads(json.dumps(payload))
        assert len(decoded["timeseries"]) == len(payload["timeseries"])


class TestTimeSeries:
    def test_label_map(self):
        assert _series("mem", 2.0).label_map() == {"hostname": "host_1", "__name__": "mem"}

    def test_count_samples(self):
        assert count_samples([_series("cpu", 1.0), _series("mem", 2.0)]) == 2
        assert count_samples([]) == 0
