"""In-memory time series storage adapter."""

import logging
import threading
from collections import deque
from collections.abc import Iterable

from memtss.core.exceptions import UnsupportedOperationError
from memtss.core.matching import matches_metric
from memtss.core.metrics import Meter
from memtss.core.models import (
    Aggregation,
    Metric,
    Sample,
    TagMatcher,
    TimeSeriesFetchRequest,
)

logger = logging.getLogger(__name__)


class Series:
    """Append-only sequence of samples belonging to one metric.

    Appends from several threads are safe. Readers get a snapshot in
    insertion order; an append racing a read may or may not be included.
    """

    def __init__(self) -> None:
        self._samples: deque[Sample] = deque()
        self._lock = threading.Lock()

    def append(self, sample: Sample) -> None:
        """Append a sample to the series."""
        with self._lock:
            self._samples.append(sample)

    def snapshot(self) -> list[Sample]:
        """Return the samples appended so far, in insertion order."""
        with self._lock:
            return list(self._samples)

    def __len__(self) -> int:
        with self._lock:
            return len(self._samples)


class InMemoryStorage:
    """In-memory implementation of TimeSeriesStoragePort.

    Keeps one Series per metric in a dict. Volatile and unbounded:
    everything is lost when the storage is released. Suitable for
    testing and evaluation, not for production.

    Nothing locks the metric map. The series of a new metric is created
    with an atomic insert-if-absent, so concurrent writers of the same new
    metric share a single Series while unrelated metrics never wait on
    each other.

    Args:
        meter: Counter marked with the number of samples written.
            Defaults to a fresh meter named "samplesWritten".
    """

    def __init__(self, meter: Meter | None = None) -> None:
        self._data: dict[Metric, Series] = {}
        self._samples_written = meter or Meter("samplesWritten")

    @property
    def samples_written(self) -> Meter:
        """Meter counting every sample passed to store()."""
        return self._samples_written

    def _get_or_create_series(self, metric: Metric) -> Series:
        """Return the series for metric, creating it exactly once."""
        series = self._data.get(metric)
        if series is not None:
            return series
        # setdefault inserts atomically; every racing writer gets the winner.
        created = Series()
        series = self._data.setdefault(metric, created)
        if series is created:
            logger.debug("Created series for metric %s", metric.key)
        return series

    def store(self, samples: Iterable[Sample]) -> None:
        """Append samples to the series of their metrics.

        Raises:
            ValueError: If samples is None.
        """
        if samples is None:
            raise ValueError("samples must not be None")
        batch = list(samples)
        for sample in batch:
            self._get_or_create_series(sample.metric).append(sample)
        try:
            self._samples_written.mark(len(batch))
        except Exception:
            logger.warning(
                "Failed to mark %s with %d samples",
                self._samples_written.name,
                len(batch),
                exc_info=True,
            )

    def find_metrics(self, matchers: Iterable[TagMatcher]) -> list[Metric]:
        """Find every known metric matched by all of the given tag matchers.

        Each matcher must be satisfied by at least one intrinsic or meta
        tag. The result reflects the metrics known at some point during
        the call and is in no particular order.

        Raises:
            ValueError: If matchers is None or empty.
        """
        if matchers is None:
            raise ValueError("matchers must not be None")
        matchers = list(matchers)
        if not matchers:
            raise ValueError("We expect at least one TagMatcher but none was given.")
        return [
            metric
            for metric in self._snapshot_metrics()
            if matches_metric(matchers, metric)
        ]

    def list_all_metrics(self) -> frozenset[Metric]:
        """Return every metric that currently has a series."""
        return frozenset(self._snapshot_metrics())

    def _snapshot_metrics(self) -> list[Metric]:
        # list(dict) copies the keys in one step, so concurrent inserts
        # and deletes cannot break the iteration.
        return list(self._data)

    def supports_aggregation(self, aggregation: Aggregation) -> bool:
        """Return True if get_timeseries() accepts the aggregation."""
        return aggregation is Aggregation.NONE

    def get_timeseries(self, request: TimeSeriesFetchRequest) -> list[Sample]:
        """Fetch the samples of one metric within a time window.

        Both bounds are exclusive. Samples come back in insertion order,
        not sorted by time. An unknown metric yields an empty list.

        Raises:
            ValueError: If request is None.
            UnsupportedOperationError: If an aggregation other than NONE
                is requested.
        """
        if request is None:
            raise ValueError("request must not be None")
        if not self.supports_aggregation(request.aggregation):
            raise UnsupportedOperationError(
                f"Aggregation {request.aggregation} is not supported."
            )
        series = self._data.get(request.metric)
        if series is None:
            return []
        return [
            sample
            for sample in series.snapshot()
            if request.start < sample.time < request.end
        ]

    def delete(self, metric: Metric) -> None:
        """Remove the whole series of a metric. Unknown metrics are ignored.

        Raises:
            ValueError: If metric is None.
        """
        if metric is None:
            raise ValueError("metric must not be None")
        if self._data.pop(metric, None) is not None:
            logger.debug("Deleted series for metric %s", metric.key)
