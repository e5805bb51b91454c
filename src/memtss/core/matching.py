"""Tag matcher evaluation for metric discovery."""

from collections.abc import Iterable

from memtss.core.exceptions import UnsupportedOperationError
from memtss.core.models import MatchType, Metric, Tag, TagMatcher


def matches_tag(matcher: TagMatcher, tag: Tag) -> bool:
    """Return True if the tag satisfies the matcher.

    A tag with a different key never matches, whatever the match type.
    Regex types require the whole tag value to match the pattern.

    Raises:
        UnsupportedOperationError: If the matcher type is not a MatchType.
    """
    if matcher.key != tag.key:
        return False

    if matcher.type is MatchType.EQUALS:
        return tag.value == matcher.value
    if matcher.type is MatchType.NOT_EQUALS:
        return tag.value != matcher.value
    if matcher.type is MatchType.EQUALS_REGEX:
        assert matcher.pattern is not None
        return matcher.pattern.fullmatch(tag.value) is not None
    if matcher.type is MatchType.NOT_EQUALS_REGEX:
        assert matcher.pattern is not None
        return matcher.pattern.fullmatch(tag.value) is None
    raise UnsupportedOperationError(f"Unsupported tag matcher type: {matcher.type!r}")


def matches_metric(matchers: Iterable[TagMatcher], metric: Metric) -> bool:
    """Return True if every matcher is satisfied by at least one tag.

    Tags are taken from the metric's searchable set (intrinsic and meta).
    An empty matcher collection matches every metric.
    """
    tags = metric.searchable_tags
    return all(any(matches_tag(matcher, tag) for tag in tags) for matcher in matchers)
