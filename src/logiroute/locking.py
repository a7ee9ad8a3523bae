"""Keyed mutual exclusion for read-check-mutate-write sequences.

Two assignments against the same vehicle must not both pass the capacity
guard before either has written its load back. Callers hold the keys of every
entity they are about to mutate for the whole command, including the commit of
its unit of work. Keys are always acquired in sorted order, so overlapping
requests cannot deadlock.

The locks are re-entrant per thread, so they only exclude callers running on
different threads. Blocking HTTP endpoints that take them are plain functions,
which FastAPI runs on its worker threadpool.
"""

import threading
from collections.abc import Iterator
from contextlib import contextmanager


class KeyedLocks:
    """A registry of re-entrant locks created on first use per key."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.RLock] = {}

    def _lock_for(self, key: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
            return lock

    @contextmanager
    def hold(self, *keys: str) -> Iterator[None]:
        acquired = []
        try:
            for key in sorted(set(keys)):
                lock = self._lock_for(key)
                lock.acquire()
                acquired.append(lock)
            yield
        finally:
            for lock in reversed(acquired):
                lock.release()


_locks = KeyedLocks()


def vehicle_key(vehicle_id) -> str:
    return f"vehicle:{vehicle_id}"


def package_key(package_id) -> str:
    return f"package:{package_id}"


def route_key(route_id) -> str:
    return f"route:{route_id}"


def plate_key(license_plate) -> str:
    return f"plate:{license_plate}"


def hold(*keys: str):
    """Hold the process-wide locks for ``keys``."""
    return _locks.hold(*keys)
