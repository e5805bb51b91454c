"""Counter helper and meter for counting storage writes."""

import threading
import time
from collections.abc import Callable

from memtss.core.models import Metric, Sample


def counter(
    name: str,
    value: float = 1.0,
    tags: dict[str, str] | None = None,
) -> Sample:
    """Create a counter sample.

    Args:
        name: Metric name (e.g., "samples_written_total")
        value: Counter value (default: 1.0)
        tags: Optional intrinsic tags besides the name

    Returns:
        Sample with current timestamp
    """
    return Sample(
        metric=Metric.from_tags({**(tags or {}), "name": name}),
        time=time.time(),
        value=value,
    )


class Meter:
    """Thread-safe, monotonically increasing event counter.

    The storage engine marks its meter on every write; exporting the
    count is left to the host application, e.g. via to_sample().

    Args:
        name: Name of the counted event (e.g., "samplesWritten").
        clock: Monotonic clock used for rate calculation.
    """

    def __init__(
        self, name: str, clock: Callable[[], float] = time.monotonic
    ) -> None:
        self.name = name
        self._clock = clock
        self._started = clock()
        self._count = 0
        self._lock = threading.Lock()

    def mark(self, n: int = 1) -> None:
        """Record n events.

        Raises:
            ValueError: If n is negative.
        """
        if n < 0:
            raise ValueError(f"Meter {self.name!r} cannot be marked with {n}")
        with self._lock:
            self._count += n

    @property
    def count(self) -> int:
        """Total number of events recorded."""
        return self._count

    def mean_rate(self) -> float:
        """Events per second since the meter was created."""
        elapsed = self._clock() - self._started
        if elapsed <= 0:
            return 0.0
        return self._count / elapsed

    def to_sample(self) -> Sample:
        """Current count as a counter sample named after the meter."""
        return counter(self.name, value=float(self._count))
