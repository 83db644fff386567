"""
Portfolio Common Module

Shared logging and caching utilities for the portfolio service.

Usage:
    from common.logger import LoggerFactory
    from common.cache import CacheFactory
"""

__version__ = "0.1.0"

from .cache import CacheFactory, CacheType
from .logger import LoggerFactory, LoggerType, LogLevel

__all__ = [
    "__version__",
    "LoggerFactory",
    "LoggerType",
    "LogLevel",
    "CacheFactory",
    "CacheType",
]
