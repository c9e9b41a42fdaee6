"""In-process implementations of the storage protocols.

Used with STORAGE_BACKEND=memory and in tests. Each worker process has its
own instances, so state is not shared between uvicorn workers.
"""

import threading
import time
from collections.abc import Callable

from cached_kv.entities import CachedResponseEntity, RateLimitDecisionEntity


class InMemoryKVStore:
    """Dict-backed key-value store. Satisfies the KVStore protocol."""

    def __init__(self, list_limit: int = 1000) -> None:
        self._data: dict[str, str] = {}
        self._list_limit = list_limit
        self._lock = threading.Lock()

    def list_keys(self) -> list[str]:
        with self._lock:
            return sorted(self._data)[: self._list_limit]

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def put(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value

    def health_check(self) -> bool:
        return True

    @property
    def list_limit(self) -> int:
        return self._list_limit


class InMemoryResponseCache:
    """TTL dict of response snapshots. Satisfies the ResponseCache protocol."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._store: dict[str, tuple[float, CachedResponseEntity]] = {}
        self._clock = clock
        self._lock = threading.Lock()

    def match(self, identity: str) -> CachedResponseEntity | None:
        with self._lock:
            if identity in self._store:
                expires_at, entry = self._store[identity]
                if self._clock() < expires_at:
                    return entry
                del self._store[identity]
        return None

    def put(self, identity: str, entry: CachedResponseEntity, ttl: int) -> None:
        with self._lock:
            self._store[identity] = (self._clock() + ttl, entry)

    def clear(self) -> None:
        with self._lock:
            self._store.clear()


class InMemoryRateLimiter:
    """Fixed window counters per key. Satisfies the RateLimiter protocol."""

    def __init__(
        self,
        limit: int = 10,
        period: int = 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._limit = limit
        self._period = period
        self._clock = clock
        self._counters: dict[str, tuple[int, int]] = {}
        self._lock = threading.Lock()

    def limit(self, key: str) -> RateLimitDecisionEntity:
        window = int(self._clock() // self._period)
        with self._lock:
            counted_window, count = self._counters.get(key, (window, 0))
            if counted_window != window:
                count = 0
            count += 1
            self._counters[key] = (window, count)

        return RateLimitDecisionEntity(
            key=key,
            success=count <= self._limit,
            count=count,
            limit=self._limit,
        )
