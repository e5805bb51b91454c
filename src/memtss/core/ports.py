"""Port interface for time series storage adapters.

This protocol defines the contract that storage adapters must implement.
Callers depend only on this interface, not on a concrete implementation.
"""

from collections.abc import Iterable
from typing import Protocol, runtime_checkable

from memtss.core.models import Metric, Sample, TagMatcher, TimeSeriesFetchRequest


@runtime_checkable
class TimeSeriesStoragePort(Protocol):
    """Port for time series storage operations.

    Adapters implementing this protocol store samples keyed by metric,
    discover metrics by tag matchers and fetch raw samples by time range.
    Examples: InMemoryStorage.
    """

    def store(self, samples: Iterable[Sample]) -> None:
        """Append samples to the series of their metrics."""
        ...

    def find_metrics(self, matchers: Iterable[TagMatcher]) -> list[Metric]:
        """Find metrics matched by all of the given tag matchers.

        Args:
            matchers: At least one tag matcher. Every matcher must be
                satisfied by some tag of a metric for it to be returned.

        Returns:
            Matching metrics in no particular order.
        """
        ...

    def get_timeseries(self, request: TimeSeriesFetchRequest) -> list[Sample]:
        """Fetch the samples of one metric within a time window.

        Args:
            request: Metric, exclusive start and end bounds and aggregation.

        Returns:
            Samples with start < time < end, in insertion order.
        """
        ...

    def delete(self, metric: Metric) -> None:
        """Remove the whole series of a metric."""
        ...
