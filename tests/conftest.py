"""Shared test fixtures for all test modules."""

from collections.abc import Callable

import pytest

from memtss.adapters.storage.in_memory import InMemoryStorage
from memtss.core.models import Metric, Sample


@pytest.fixture
def storage() -> InMemoryStorage:
    """Fixture providing an empty in-memory storage."""
    return InMemoryStorage()


@pytest.fixture
def metric_a() -> Metric:
    """Metric for host a, measured in milliseconds."""
    return Metric.from_tags({"host": "a", "unit": "ms"})


@pytest.fixture
def metric_b() -> Metric:
    """Metric for host b, measured in milliseconds."""
    return Metric.from_tags({"host": "b", "unit": "ms"})


@pytest.fixture
def make_samples() -> Callable[..., list[Sample]]:
    """Factory fixture creating one sample per timestamp for a metric.

    Usage:
        def test_something(make_samples, metric_a):
            samples = make_samples(metric_a, 10, 20)
    """

    def _make(metric: Metric, *times: float) -> list[Sample]:
        return [Sample(metric=metric, time=t, value=t * 2.0) for t in times]

    return _make
