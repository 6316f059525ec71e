"""Resource locks guarding products, carts and orders.

Defines the contract every lock adapter implements plus the in-process
adapter used by a single API worker. Locks are taken before a UnitOfWork opens
and released after it commits or rolls back, so a lock covers the whole
read-check-write-commit window of an operation.

Keys are plain strings (``product:<id>``, ``cart:<id>``, ``order:<id>``).
Acquisition is always in sorted key order; two operations needing overlapping
keys therefore never wait on each other in a cycle.
"""

import os
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

import structlog

from grocery.errors import Unavailable

logger = structlog.get_logger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


def lock_timeout() -> float:
    """Seconds an operation may wait for its locks (``LOCK_TIMEOUT_SECONDS``)."""
    return float(os.getenv("LOCK_TIMEOUT_SECONDS", DEFAULT_LOCK_TIMEOUT))


def product_key(product_id) -> str:
    return f"product:{product_id}"


def cart_key(cart_id) -> str:
    return f"cart:{cart_id}"


def order_key(order_id) -> str:
    return f"order:{order_id}"


class LockManager(ABC):
    """Abstract lock manager interface."""

    @abstractmethod
    def hold(self, keys: Iterable[str], timeout: float) -> Iterator[None]:
        """Context manager holding every key for the duration of the block.

        Raises ``Unavailable`` if the keys cannot all be acquired within
        ``timeout`` seconds. Nothing stays locked after a failed acquisition.
        """
        ...


class _LockEntry:
    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class InProcessLockManager(LockManager):
    """Per-key ``threading.Lock`` table, shared by every thread of one process.

    An entry lives only while some thread holds or waits on its key; the last
    one out removes it.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _LockEntry] = {}
        self._table_lock = threading.Lock()

    def _checkout(self, key: str) -> threading.Lock:
        with self._table_lock:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _LockEntry()
            entry.users += 1
            return entry.lock

    def _checkin(self, key: str) -> None:
        with self._table_lock:
            entry = self._entries[key]
            entry.users -= 1
            if entry.users == 0:
                del self._entries[key]

    def is_locked(self, key: str) -> bool:
        with self._table_lock:
            entry = self._entries.get(key)
        return entry is not None and entry.lock.locked()

    def tracked_keys(self) -> list[str]:
        """Keys currently held or waited on."""
        with self._table_lock:
            return sorted(self._entries)

    @contextmanager
    def hold(self, keys: Iterable[str], timeout: float) -> Iterator[None]:
        ordered = sorted(set(keys))
        deadline = time.monotonic() + timeout
        acquired: list[tuple[str, threading.Lock]] = []
        try:
            for key in ordered:
                lock = self._checkout(key)
                remaining = max(deadline - time.monotonic(), 0.0)
                if not lock.acquire(timeout=remaining):
                    self._checkin(key)
                    logger.warning("lock_timeout", resource=key, timeout=timeout)
                    raise Unavailable(key, timeout)
                acquired.append((key, lock))
            yield
        finally:
            for key, lock in reversed(acquired):
                lock.release()
                self._checkin(key)


_current_lock_manager: LockManager | None = None


def get_lock_manager() -> LockManager:
    """Return the active lock manager. Defaults to InProcessLockManager."""
    global _current_lock_manager
    if _current_lock_manager is None:
        _current_lock_manager = InProcessLockManager()
    return _current_lock_manager


def set_lock_manager(manager: LockManager) -> None:
    """Override the active lock manager (useful for tests)."""
    global _current_lock_manager
    _current_lock_manager = manager


def reset_lock_manager() -> None:
    global _current_lock_manager
    _current_lock_manager = None
