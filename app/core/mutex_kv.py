"""
Keyed mutual exclusion for local resources.

Optimistic concurrency on the store's version field is defeated if this
process issues two overlapping writes for the same resource. MutexKV hands out
one lock per resource id so those operations run one at a time, while
operations on different resources still run in parallel.

Example usage:
    from app.core.mutex_kv import custom_object_locks

    with custom_object_locks.hold(resource_id):
        # read the live version, then write with it
        ...
"""
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Generator

logger = logging.getLogger(__name__)


class MutexKV:
    """
    Process-wide table of locks keyed by resource id.

    Locks are created lazily on first use and are never removed; the table
    lives as long as the process.
    """

    def __init__(self):
        """Initialize an empty lock table."""
        # Guards creation of entries in _locks, not the critical sections
        self._table_lock = threading.Lock()
        # resource id -> lock
        self._locks: Dict[str, threading.Lock] = {}

    def _get(self, key: str) -> threading.Lock:
        with self._table_lock:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    def lock(self, key: str) -> None:
        """
        Acquire the lock for a key, blocking until it is free.

        Args:
            key: The resource id to lock
        """
        logger.debug(f"[MutexKV] Locking {key!r}")
        self._get(key).acquire()
        logger.debug(f"[MutexKV] Locked {key!r}")

    def unlock(self, key: str) -> None:
        """
        Release the lock for a key.

        Args:
            key: The resource id to unlock

        Raises:
            RuntimeError: If the key is not currently locked
        """
        self._get(key).release()
        logger.debug(f"[MutexKV] Unlocked {key!r}")

    @contextmanager
    def hold(self, key: str) -> Generator[None, None, None]:
        """Hold the lock for a key for the duration of a with block."""
        self.lock(key)
        try:
            yield
        finally:
            self.unlock(key)


# Global lock table for custom object resources, created at import
custom_object_locks = MutexKV()
