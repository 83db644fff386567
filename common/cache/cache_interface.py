# common/cache/cache_interface.py

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class CacheStatus(str, Enum):
    """Cache health states"""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"


class CacheStats(BaseModel):
    """Runtime statistics for a cache instance"""

    hits: int = Field(0, description="Successful lookups")
    misses: int = Field(0, description="Lookups that found nothing")
    sets: int = Field(0, description="Stored entries")
    deletes: int = Field(0, description="Removed entries")
    evictions: int = Field(0, description="Entries evicted for capacity")
    current_size: int = Field(0, description="Entries currently stored")
    status: CacheStatus = Field(CacheStatus.HEALTHY)

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0


class CacheInterface(ABC):
    """Abstract async cache"""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """
        Get a value

        Args:
            key: Cache key

        Returns:
            Stored value or None when missing/expired
        """
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """
        Store a value

        Args:
            key: Cache key
            value: Value to store
            ttl: Time to live in seconds (None uses the default)

        Returns:
            True if stored
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def clear(self) -> bool:
        pass

    @abstractmethod
    def get_stats(self) -> CacheStats:
        pass
