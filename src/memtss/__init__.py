"""memtss: a volatile in-memory time series storage engine."""

from memtss.adapters.storage import InMemoryStorage, Series
from memtss.core.exceptions import UnsupportedOperationError
from memtss.core.matching import matches_metric, matches_tag
from memtss.core.metrics import Meter, counter
from memtss.core.models import (
    Aggregation,
    MatchType,
    Metric,
    Sample,
    Tag,
    TagMatcher,
    TimeSeriesFetchRequest,
)
from memtss.core.ports import TimeSeriesStoragePort

__all__ = [
    "Aggregation",
    "InMemoryStorage",
    "MatchType",
    "Meter",
    "Metric",
    "Sample",
    "Series",
    "Tag",
    "TagMatcher",
    "TimeSeriesFetchRequest",
    "TimeSeriesStoragePort",
    "UnsupportedOperationError",
    "counter",
    "matches_metric",
    "matches_tag",
]
