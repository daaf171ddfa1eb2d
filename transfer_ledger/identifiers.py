"""
Transaction identifier allocation
"""

import threading


class IdentifierAllocator:
    """
    Issues unique, monotonically increasing integer ids starting from 0

    Thread-safe: every integer is handed out at most once no matter how many
    threads call next() concurrently.
    """

    def __init__(self, start: int = 0):
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        """Return an id strictly greater than every id returned before"""
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def advance_past(self, value: int) -> None:
        """Make sure later ids are greater than an externally supplied one"""
        with self._lock:
            if value >= self._next:
                self._next = value + 1

    def peek(self) -> int:
        """Value the next call to next() would return"""
        with self._lock:
            return self._next
