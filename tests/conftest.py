import io

import pytest


def make_entry(timestamp="2024-01-15T10:30:00.000Z", method="POST", **extra):
    entry = {
        "timestamp": timestamp,
        "method": method,
        "answer_code": "200",
        "url": "/1/indexes/products/batch",
        "index": "products",
    }
    if method is None:
        del entry["method"]
    entry.update(extra)
    return entry


class FakeIndexClient:
    """Stands in for AlgoliaClient: scripted record counts and log batches."""

    def __init__(self, counts=None, batches=None):
        self.counts = list(counts or [])
        self.batches = list(batches or [])
        self.count_calls = 0
        self.fetch_calls = 0

    def count_records(self):
        self.count_calls += 1
        if len(self.counts) > 1:
            return self.counts.pop(0)
        return self.counts[0]

    def fetch_logs(self):
        self.fetch_calls += 1
        if len(self.batches) > 1:
            return self.batches.pop(0)
        return self.batches[0] if self.batches else []


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def fake_client():
    return FakeIndexClient


@pytest.fixture
def make_monitor(out):
    """Build a Monitor that writes to the out buffer and never really sleeps."""
    from index_monitor.monitor import Monitor

    def build(client, config, **kwargs):
        kwargs.setdefault("out", out)
        kwargs.setdefault("sleep", lambda seconds: None)
        return Monitor(client, config, **kwargs)

    return build
