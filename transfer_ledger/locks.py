"""
Per-Key Locking Module

Exclusive locks keyed by account id. Operations touching several accounts
acquire the locks in ascending key order so two transfers over the same pair
can never wait on each other in a cycle.

A key's lock only lives while some thread holds or waits for it; the
registry drops it on the last release, so ids that never name an account
leave nothing behind.
"""

import threading
from contextlib import contextmanager
from typing import Dict, Hashable, Iterator, List, Tuple


class _KeyLock:
    """A lock plus the number of threads holding or waiting for it"""

    __slots__ = ("lock", "users")

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class KeyedLockManager:
    """Hands out one lock per key and acquires groups of keys in a fixed order"""

    def __init__(self):
        self._locks: Dict[Hashable, _KeyLock] = {}
        self._registry_lock = threading.Lock()

    def _checkout(self, key: Hashable) -> _KeyLock:
        with self._registry_lock:
            entry = self._locks.get(key)
            if entry is None:
                entry = _KeyLock()
                self._locks[key] = entry
            entry.users += 1
            return entry

    def _checkin(self, key: Hashable, entry: _KeyLock) -> None:
        with self._registry_lock:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[key]

    def is_locked(self, key: Hashable) -> bool:
        """Check if some thread currently holds the key"""
        with self._registry_lock:
            entry = self._locks.get(key)
            return entry is not None and entry.lock.locked()

    @staticmethod
    def ordered(keys) -> List[Hashable]:
        """De-duplicate and sort keys into acquisition order"""
        return sorted(set(keys))

    @contextmanager
    def acquire(self, *keys: Hashable) -> Iterator[List[Hashable]]:
        """
        Hold the locks of all given keys for the duration of the block

        Keys are de-duplicated (a transfer from an account to itself takes one
        lock) and acquired lowest first. Locks are released in reverse order
        even if the block raises.
        """
        ordered = self.ordered(keys)
        entries: List[Tuple[Hashable, _KeyLock]] = []
        acquired: List[threading.Lock] = []
        try:
            for key in ordered:
                entry = self._checkout(key)
                entries.append((key, entry))
                entry.lock.acquire()
                acquired.append(entry.lock)
            yield ordered
        finally:
            for lock in reversed(acquired):
                lock.release()
            for key, entry in reversed(entries):
                self._checkin(key, entry)

    def __len__(self) -> int:
        """Number of keys currently held or waited on"""
        with self._registry_lock:
            return len(self._locks)
