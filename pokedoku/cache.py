"""Thread-safe TTL cache shared by the lookup service."""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional, Tuple

from . import config
from .models import CacheStats

logger = logging.getLogger(__name__)

NAMESPACES = ("species", "evolution", "names")


class TTLCache:
    """Namespaced key/value store whose entries expire after a fixed TTL.

    Every read and write happens under a single lock. Expired entries are
    dropped when they are read and, once a namespace reaches its size limit,
    before a new entry is stored. If the namespace is still full the oldest
    entry is evicted.

    Args:
        ttl_seconds: Lifetime of an entry.
        max_entries: Maximum entries per namespace.
        clock: Monotonic time source (injectable for tests).
    """

    def __init__(
        self,
        ttl_seconds: float = config.CACHE_TTL_SECONDS,
        max_entries: int = config.CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._stores: Dict[str, Dict[str, Tuple[float, Any]]] = {ns: {} for ns in NAMESPACES}

    def _store(self, namespace: str) -> Dict[str, Tuple[float, Any]]:
        if namespace not in self._stores:
            raise ValueError(f"Unknown cache namespace '{namespace}'")
        return self._stores[namespace]

    def get(self, namespace: str, key: str) -> Optional[Any]:
        """Return the cached value, or ``None`` when missing or expired."""
        with self._lock:
            store = self._store(namespace)
            entry = store.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at > self.ttl_seconds:
                del store[key]
                return None
            return value

    def has(self, namespace: str, key: str) -> bool:
        return self.get(namespace, key) is not None

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Store a value, evicting stale or old entries when the namespace is full."""
        with self._lock:
            store = self._store(namespace)
            if key not in store and len(store) >= self.max_entries:
                self._evict_expired(store)
                if len(store) >= self.max_entries:
                    oldest = min(store, key=lambda k: store[k][0])
                    del store[oldest]
                    logger.debug("Cache namespace %s full; evicted %s", namespace, oldest)
            store[key] = (self._clock(), value)

    def _evict_expired(self, store: Dict[str, Tuple[float, Any]]) -> int:
        now = self._clock()
        expired = [k for k, (stored_at, _) in store.items() if now - stored_at > self.ttl_seconds]
        for key in expired:
            del store[key]
        return len(expired)

    def cleanup(self) -> int:
        """Drop every expired entry; returns the number removed."""
        with self._lock:
            removed = sum(self._evict_expired(store) for store in self._stores.values())
        if removed:
            logger.info("Cache cleanup removed %d expired entries", removed)
        return removed

    def stats(self) -> CacheStats:
        with self._lock:
            counts = {ns: len(store) for ns, store in self._stores.items()}
        return CacheStats(total_entries=sum(counts.values()), **counts)

    def clear(self) -> None:
        with self._lock:
            for store in self._stores.values():
                store.clear()
        logger.info("Cache cleared")
