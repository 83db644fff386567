# common/cache/cache_factory.py

from enum import Enum
from typing import Any, Dict

from .cache_interface import CacheInterface
from .in_memory_cache import InMemoryCache


class CacheType(Enum):
    """Available cache backends"""

    MEMORY = "memory"


class CacheFactory:
    """Factory returning named cache singletons"""

    _instances: Dict[str, CacheInterface] = {}

    @classmethod
    def get_cache(
        cls, name: str, cache_type: CacheType = CacheType.MEMORY, **kwargs: Any
    ) -> CacheInterface:
        """
        Get or create a named cache

        Args:
            name: Cache name (cache key for the instance)
            cache_type: Backend to use
            **kwargs: Backend specific options

        Returns:
            CacheInterface instance
        """
        if name not in cls._instances:
            cls._instances[name] = cls.create_cache(cache_type, **kwargs)
        return cls._instances[name]

    @classmethod
    def create_cache(
        cls, cache_type: CacheType = CacheType.MEMORY, **kwargs: Any
    ) -> CacheInterface:
        """Create a cache instance that is not registered by name"""
        if cache_type == CacheType.MEMORY:
            return InMemoryCache(**kwargs)
        raise ValueError(f"Unsupported cache type: {cache_type}")

    @classmethod
    def clear_instances(cls) -> None:
        cls._instances.clear()
