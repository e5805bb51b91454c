"""BDD step definitions for series storage features."""

import re
from dataclasses import dataclass, field

import pytest
from pytest_bdd import given, parsers, then, when

from memtss.adapters.storage.in_memory import InMemoryStorage
from memtss.core.models import (
    MatchType,
    Metric,
    Sample,
    TagMatcher,
    TimeSeriesFetchRequest,
)


@dataclass
class StorageScenarioContext:
    """Shared state between steps in a storage scenario."""

    storage: InMemoryStorage = field(default_factory=InMemoryStorage)
    found: list[Metric] = field(default_factory=list)
    fetched: list[Sample] = field(default_factory=list)


def parse_metric(tags: str) -> Metric:
    """Build a metric from "key=value,key=value" notation."""
    pairs = (pair.split("=", 1) for pair in tags.split(","))
    return Metric.from_tags({key.strip(): value.strip() for key, value in pairs})


def parse_times(times: str) -> list[float]:
    """Parse a comma-separated list of timestamps."""
    return [float(t) for t in times.split(",")]


@pytest.fixture
def ctx() -> StorageScenarioContext:
    """Fresh scenario context for each test."""
    return StorageScenarioContext()


# === Given ===
@given("an empty in-memory storage")
def given_empty_storage(ctx: StorageScenarioContext) -> None:
    ctx.storage = InMemoryStorage()


@given(parsers.parse('samples for metric "{tags}" at times {times}'))
def given_samples(ctx: StorageScenarioContext, tags: str, times: str) -> None:
    metric = parse_metric(tags)
    ctx.storage.store(
        [Sample(metric=metric, time=t, value=1.0) for t in parse_times(times)]
    )


# === When ===
@when(parsers.parse('metrics are searched with "{key}" {match_type} "{value}"'))
def when_metrics_searched(
    ctx: StorageScenarioContext, key: str, match_type: str, value: str
) -> None:
    matcher = TagMatcher(key=key, value=value, type=MatchType[match_type])
    ctx.found = ctx.storage.find_metrics([matcher])


@when(parsers.parse('the series of "{tags}" is fetched between {start:g} and {end:g}'))
def when_series_fetched(
    ctx: StorageScenarioContext, tags: str, start: float, end: float
) -> None:
    request = TimeSeriesFetchRequest(metric=parse_metric(tags), start=start, end=end)
    ctx.fetched = ctx.storage.get_timeseries(request)


@when(parsers.parse('the metric "{tags}" is deleted'))
def when_metric_deleted(ctx: StorageScenarioContext, tags: str) -> None:
    ctx.storage.delete(parse_metric(tags))


# === Then ===
@then(parsers.parse("the found metrics are {metrics}"))
def then_found_metrics(ctx: StorageScenarioContext, metrics: str) -> None:
    names = re.findall(r'"([^"]*)"', metrics)
    expected = sorted(parse_metric(tags).key for tags in names)
    assert sorted(m.key for m in ctx.found) == expected


@then("no metrics are found")
def then_no_metrics(ctx: StorageScenarioContext) -> None:
    assert ctx.found == []


@then(parsers.parse("the fetched sample times are {times}"))
def then_fetched_times(ctx: StorageScenarioContext, times: str) -> None:
    assert [s.time for s in ctx.fetched] == parse_times(times)


@then("no samples are fetched")
def then_no_samples(ctx: StorageScenarioContext) -> None:
    assert ctx.fetched == []


@then(parsers.parse("{n:d} samples have been written"))
def then_samples_written(ctx: StorageScenarioContext, n: int) -> None:
    assert ctx.storage.samples_written.count == n
