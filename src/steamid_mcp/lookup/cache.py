"""TTL-based async cache for lookup-service responses.

Profiles change slowly and vanity names almost never, so repeated lookups of
the same identifier are served from memory.
"""

import asyncio
import hashlib
import json
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any


class CacheCategory(Enum):
    """Cache categories with associated TTLs (in seconds)."""

    PROFILE = 300  # 5 minutes
    VANITY = 3600  # 1 hour

    DEFAULT = 300


@dataclass
class CacheEntry:
    """A cached response with expiration time."""

    value: Any
    expires_at: float


class TTLCache:
    """Async-safe TTL cache for lookup responses."""

    def __init__(self, default_ttl: int = 300, max_size: int = 1000):
        """
        Initialize the cache.

        Args:
            default_ttl: TTL in seconds for entries without an explicit TTL.
            max_size: Number of entries at which expired ones are purged.
        """
        self._cache: dict[str, CacheEntry] = {}
        self._default_ttl = default_ttl
        self._max_size = max_size
        self._lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @staticmethod
    def _make_key(namespace: str, params: dict[str, Any] | None = None) -> str:
        """SHA256 of the namespace plus sorted params."""
        key_data = {"namespace": namespace, "params": params or {}}
        key_str = json.dumps(key_data, sort_keys=True)
        return hashlib.sha256(key_str.encode()).hexdigest()

    async def get(
        self, namespace: str, params: dict[str, Any] | None = None
    ) -> tuple[bool, Any]:
        """
        Get a cached value if it exists and hasn't expired.

        Returns:
            Tuple of (hit, value).
        """
        key = self._make_key(namespace, params)

        async with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                self._misses += 1
                return False, None

            if time.monotonic() > entry.expires_at:
                del self._cache[key]
                self._misses += 1
                return False, None

            self._hits += 1
            return True, entry.value

    async def set(
        self,
        namespace: str,
        params: dict[str, Any] | None,
        value: Any,
        ttl: int | None = None,
    ) -> None:
        key = self._make_key(namespace, params)
        ttl = ttl if ttl is not None else self._default_ttl
        expires_at = time.monotonic() + ttl

        async with self._lock:
            if len(self._cache) >= self._max_size:
                self._purge_expired()
                # Still full: drop the entry closest to expiry
                if len(self._cache) >= self._max_size:
                    oldest = min(self._cache, key=lambda k: self._cache[k].expires_at)
                    del self._cache[oldest]

            self._cache[key] = CacheEntry(value=value, expires_at=expires_at)

    async def clear(self) -> int:
        """
        Clear all entries from the cache.

        Returns:
            Number of entries removed.
        """
        async with self._lock:
            count = len(self._cache)
            self._cache.clear()
            return count

    def _purge_expired(self) -> int:
        """Remove expired entries. Caller must hold the lock."""
        now = time.monotonic()
        expired_keys = [k for k, v in self._cache.items() if now > v.expires_at]
        for key in expired_keys:
            del self._cache[key]
        return len(expired_keys)

    @property
    def stats(self) -> dict[str, int | float]:
        total = self._hits + self._misses
        return {
            "size": len(self._cache),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total else 0.0,
        }
