# common/cache/in_memory_cache.py

"""
In-process cache with TTL expiry and LRU eviction.
"""

import asyncio
import time
from collections import OrderedDict
from typing import Any, Optional, Tuple

from .cache_interface import CacheInterface, CacheStats


class InMemoryCache(CacheInterface):
    """Async-safe in-memory cache"""

    def __init__(
        self,
        max_size: int = 1000,
        default_ttl: Optional[int] = 300,
        key_prefix: str = "",
    ):
        """
        Initialize in-memory cache

        Args:
            max_size: Maximum entries before LRU eviction
            default_ttl: Default time to live in seconds (None = no expiry)
            key_prefix: Prefix applied to every key
        """
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self.default_ttl = default_ttl
        self.key_prefix = key_prefix
        # key -> (value, expires_at or None)
        self._store: "OrderedDict[str, Tuple[Any, Optional[float]]]" = OrderedDict()
        self._lock = asyncio.Lock()
        self._stats = CacheStats()

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def _is_expired(self, expires_at: Optional[float]) -> bool:
        return expires_at is not None and expires_at <= time.monotonic()

    async def get(self, key: str) -> Optional[Any]:
        full_key = self._key(key)
        async with self._lock:
            entry = self._store.get(full_key)
            if entry is None:
                self._stats.misses += 1
                return None
            value, expires_at = entry
            if self._is_expired(expires_at):
                del self._store[full_key]
                self._stats.misses += 1
                self._stats.current_size = len(self._store)
                return None
            self._store.move_to_end(full_key)
            self._stats.hits += 1
            return value

    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        full_key = self._key(key)
        ttl = self.default_ttl if ttl is None else ttl
        expires_at = time.monotonic() + ttl if ttl else None
        async with self._lock:
            if full_key in self._store:
                self._store.move_to_end(full_key)
            self._store[full_key] = (value, expires_at)
            while len(self._store) > self.max_size:
                self._store.popitem(last=False)
                self._stats.evictions += 1
            self._stats.sets += 1
            self._stats.current_size = len(self._store)
        return True

    async def delete(self, key: str) -> bool:
        full_key = self._key(key)
        async with self._lock:
            if full_key not in self._store:
                return False
            del self._store[full_key]
            self._stats.deletes += 1
            self._stats.current_size = len(self._store)
            return True

    async def exists(self, key: str) -> bool:
        return await self.get(key) is not None

    async def clear(self) -> bool:
        async with self._lock:
            self._store.clear()
            self._stats.current_size = 0
        return True

    def get_stats(self) -> CacheStats:
        return self._stats.model_copy()
