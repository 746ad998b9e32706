"""Named critical sections keyed by document namespace."""

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class NamespaceLocks:
    """
    One reentrant lock per namespace string.

    Usage:
        locks = NamespaceLocks()
        with locks.hold("https://example.org/doc1"):
            ...  # released on every exit path
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: Dict[str, threading.RLock] = {}

    def _lock_for(self, namespace: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(namespace)
            if lock is None:
                lock = threading.RLock()
                self._locks[namespace] = lock
            return lock

    @contextmanager
    def hold(self, namespace: str) -> Iterator[None]:
        lock = self._lock_for(namespace)
        with lock:
            yield
