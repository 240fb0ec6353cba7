"""Episode identifier generation.

Identifiers are millisecond timestamps. In strict mode the generator never
hands out an id it has already seen, so two episodes created within the same
millisecond (or after the clock stepped backwards) still get distinct ids.
"""

import threading
import time
from collections.abc import Iterable


def current_millis() -> int:
    """Milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Timestamp-based id source.

    Example:
        >>> ids = IdGenerator()
        >>> first = ids.next_id()
        >>> ids.next_id() > first
        True
    """

    def __init__(self, monotonic: bool = True, clock=current_millis) -> None:
        """Initialize the generator.

        Args:
            monotonic: Guarantee strictly increasing ids
            clock: Zero-argument callable returning milliseconds
        """
        self.monotonic = monotonic
        self._clock = clock
        self._last = 0
        self._lock = threading.Lock()

    def next_id(self) -> int:
        """Return a fresh id."""
        return self.reserve(1)[0]

    def reserve(self, count: int) -> list[int]:
        """Return ``count`` consecutive ids starting at the current time.

        Used for import batches: each entry gets ``now + position``.
        """
        if count < 0:
            raise ValueError("count must be non-negative")
        if count == 0:
            return []

        with self._lock:
            start = self._clock()
            if self.monotonic:
                start = max(start, self._last + 1)
                self._last = start + count - 1
            return list(range(start, start + count))

    def observe(self, ids: Iterable[int]) -> None:
        """Advance past ids that already exist (e.g. loaded from disk)."""
        with self._lock:
            for value in ids:
                if value > self._last:
                    self._last = value
