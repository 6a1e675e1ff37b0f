"""Bounded in-memory LRU cache with hit/miss accounting."""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Generic, TypeVar

from apimdx.cache.stats import CacheStats
from apimdx.errors.exceptions import ConfigurationError

V = TypeVar("V")


class LRUCache(Generic[V]):
    """String-keyed LRU cache with a fixed entry capacity.

    A disabled cache always misses and never stores. All access to the
    map and the counters goes through one lock.
    """

    def __init__(self, max_size: int, enabled: bool = True) -> None:
        if max_size < 1:
            raise ConfigurationError(
                f"Cache capacity must be at least 1, got {max_size}",
                option="max_size",
            )
        self._store: OrderedDict[str, V] = OrderedDict()
        self._max_size = max_size
        self._enabled = enabled
        self._hits = 0
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> V | None:
        with self._lock:
            if not self._enabled or key not in self._store:
                self._misses += 1
                return None
            # Move to end (most recently used)
            self._store.move_to_end(key)
            self._hits += 1
            return self._store[key]

    def set(self, key: str, value: V) -> None:
        if not self._enabled:
            return
        with self._lock:
            if key in self._store:
                self._store.move_to_end(key)
            elif len(self._store) >= self._max_size:
                self._store.popitem(last=False)
            self._store[key] = value

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._store),
                capacity=self._max_size,
                hits=self._hits,
                misses=self._misses,
                enabled=self._enabled,
            )

    def keys(self) -> list[str]:
        """Keys from least to most recently used."""
        with self._lock:
            return list(self._store)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._store

    def __len__(self) -> int:
        return len(self._store)
