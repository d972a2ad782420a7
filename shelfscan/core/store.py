"""Key-value store abstraction shared by the detection cache and the rate limiter.

The orchestrator only talks to ``KeyValueStore``; ``InMemoryStore`` serves a
single process, and a networked store with atomic increment/expire semantics
can be dropped in without touching the callers.
"""

import heapq
import threading
import time
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the live value for ``key`` or ``None``."""

    @abstractmethod
    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        """Store ``value``; entries with a TTL disappear once it elapses."""

    @abstractmethod
    def incr(self, key: str, *, ttl_seconds: float) -> int:
        """Atomically increment a counter and return the new value.

        A missing or expired counter starts again at 1 with a fresh TTL; the
        TTL of a live counter is left unchanged.
        """

    @abstractmethod
    def ttl(self, key: str) -> float | None:
        """Seconds until ``key`` expires, or ``None`` when missing or persistent."""

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemoryStore(KeyValueStore):
    """Process-local store; expired entries are swept on every write."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[Any, float | None]] = {}
        self._expiries: list[tuple[float, str]] = []

    def _purge_expired(self, now: float) -> None:
        while self._expiries and self._expiries[0][0] <= now:
            expires_at, key = heapq.heappop(self._expiries)
            entry = self._entries.get(key)
            # Skip heap items left behind by a later write to the same key.
            if entry is not None and entry[1] == expires_at:
                del self._entries[key]

    def _store_entry(self, key: str, value: Any, expires_at: float | None) -> None:
        self._entries[key] = (value, expires_at)
        if expires_at is not None:
            heapq.heappush(self._expiries, (expires_at, key))

    def _live_entry(self, key: str, now: float) -> tuple[Any, float | None] | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and now >= expires_at:
            del self._entries[key]
            return None
        return entry

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._live_entry(key, self._clock())
            return None if entry is None else entry[0]

    def set(self, key: str, value: Any, *, ttl_seconds: float | None = None) -> None:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            self._store_entry(key, value, None if ttl_seconds is None else now + ttl_seconds)

    def incr(self, key: str, *, ttl_seconds: float) -> int:
        with self._lock:
            now = self._clock()
            self._purge_expired(now)
            entry = self._live_entry(key, now)
            if entry is None:
                self._store_entry(key, 1, now + ttl_seconds)
                return 1
            count, expires_at = entry
            count = int(count) + 1
            self._entries[key] = (count, expires_at)
            return count

    def ttl(self, key: str) -> float | None:
        with self._lock:
            now = self._clock()
            entry = self._live_entry(key, now)
            if entry is None or entry[1] is None:
                return None
            return max(0.0, entry[1] - now)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["InMemoryStore", "KeyValueStore"]
