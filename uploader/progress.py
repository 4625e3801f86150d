"""Thread-safe completion counter shared by upload workers."""

import threading
from typing import Callable, Optional


class ProgressCounter:
    """Counts successfully transmitted chunks."""

    def __init__(self, total: int):
        self.total = total
        self._value = 0
        self._lock = threading.Lock()

    def increment(self, report: Optional[Callable[[int, int], None]] = None) -> int:
        """
        Atomically add one and return the new count.

        Args:
            report: Called with (count, total) while the lock is held, so
                reports reach it in increasing order

        Returns:
            The count after this increment
        """
        with self._lock:
            self._value += 1
            if report:
                report(self._value, self.total)
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value
