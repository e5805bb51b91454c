"""Core domain models for time series data."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class Tag:
    """A single key/value pair attached to a metric.

    Attributes:
        key: Tag name (e.g., host).
        value: Tag value. Never None.
    """

    key: str
    value: str

    def __post_init__(self) -> None:
        if self.value is None:
            raise ValueError(f"Tag {self.key!r} must have a value")

    def __str__(self) -> str:
        return f"{self.key}={self.value}"


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace(",", "\\,").replace("=", "\\=")


def _join_tags(tags: frozenset[Tag]) -> str:
    return ",".join(sorted(f"{_escape(t.key)}={_escape(t.value)}" for t in tags))


@dataclass(frozen=True)
class Metric:
    """Immutable identity of a time series.

    Identity (equality and hash) is defined by the intrinsic tags alone.
    Meta tags describe the metric and are searchable, but two metrics with
    the same intrinsic tags are the same series whatever their meta tags.

    Attributes:
        intrinsic_tags: Tags that identify the metric.
        meta_tags: Descriptive tags, searchable but not identity-bearing.
    """

    intrinsic_tags: frozenset[Tag]
    meta_tags: frozenset[Tag] = field(default_factory=frozenset, compare=False)

    def __post_init__(self) -> None:
        # Accept any iterable of tags; identity must not depend on order.
        object.__setattr__(self, "intrinsic_tags", frozenset(self.intrinsic_tags))
        object.__setattr__(self, "meta_tags", frozenset(self.meta_tags))
        if not self.intrinsic_tags:
            raise ValueError("Metric requires at least one intrinsic tag")

    @classmethod
    def from_tags(
        cls,
        intrinsic: Mapping[str, str],
        meta: Mapping[str, str] | None = None,
    ) -> "Metric":
        """Create a metric from plain key/value mappings.

        Args:
            intrinsic: Identity tags, e.g. {"name": "cpu", "host": "a"}.
            meta: Optional descriptive tags.

        Returns:
            Metric with the given tags.
        """
        return cls(
            intrinsic_tags=frozenset(Tag(k, v) for k, v in intrinsic.items()),
            meta_tags=frozenset(Tag(k, v) for k, v in (meta or {}).items()),
        )

    @property
    def searchable_tags(self) -> frozenset[Tag]:
        """Intrinsic and meta tags combined, used for matching only."""
        return self.intrinsic_tags | self.meta_tags

    @property
    def key(self) -> str:
        """Stable string form of the identity, e.g. "host=a,unit=ms".

        Backslashes, commas and equals signs inside keys and values are
        escaped with a backslash, so distinct identities give distinct keys.
        """
        return _join_tags(self.intrinsic_tags)

    def first_tag_by_key(self, key: str) -> Tag | None:
        """Return a tag with the given key, preferring intrinsic tags."""
        for tags in (self.intrinsic_tags, self.meta_tags):
            for tag in sorted(tags, key=str):
                if tag.key == key:
                    return tag
        return None

    def __str__(self) -> str:
        if not self.meta_tags:
            return self.key
        meta = _join_tags(self.meta_tags)
        return f"{self.key} [{meta}]"


@dataclass(frozen=True)
class Sample:
    """A single measurement of a metric.

    Attributes:
        metric: The metric this sample belongs to.
        time: Unix timestamp in seconds.
        value: The measured value.
    """

    metric: Metric
    time: float
    value: float


class MatchType(Enum):
    """How a TagMatcher compares its value to a tag value."""

    EQUALS = "EQUALS"
    NOT_EQUALS = "NOT_EQUALS"
    EQUALS_REGEX = "EQUALS_REGEX"
    NOT_EQUALS_REGEX = "NOT_EQUALS_REGEX"


_REGEX_TYPES = frozenset({MatchType.EQUALS_REGEX, MatchType.NOT_EQUALS_REGEX})


@dataclass(frozen=True)
class TagMatcher:
    """Predicate over a single tag used for metric discovery.

    Attributes:
        key: Tag key the matcher applies to.
        value: Literal value, or a regular expression for regex types.
        type: Comparison to perform.
        pattern: Compiled value for regex types, None otherwise.
    """

    key: str
    value: str
    type: MatchType = MatchType.EQUALS
    pattern: re.Pattern[str] | None = field(
        init=False, default=None, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.type in _REGEX_TYPES:
            try:
                object.__setattr__(self, "pattern", re.compile(self.value))
            except re.error as e:
                raise ValueError(
                    f"Invalid regular expression {self.value!r} for tag {self.key!r}"
                ) from e


class Aggregation(Enum):
    """Query-time summarization modes. Only NONE is supported by storage."""

    NONE = "NONE"
    AVERAGE = "AVERAGE"
    MIN = "MIN"
    MAX = "MAX"


@dataclass(frozen=True)
class TimeSeriesFetchRequest:
    """Request for the raw samples of one metric within a time window.

    Attributes:
        metric: The metric to fetch.
        start: Exclusive lower bound, Unix timestamp in seconds.
        end: Exclusive upper bound, Unix timestamp in seconds.
        aggregation: Summarization mode. Storage only accepts NONE.
    """

    metric: Metric
    start: float
    end: float
    aggregation: Aggregation = Aggregation.NONE
