"""Verdict caching - interchangeable in-memory and Redis backends"""

from .base import Cache
from .memory import MemoryCache, CacheEntry, DELETE_EXPIRED_INTERVAL
from .redis_cache import RedisCache, format_bool, parse_bool

__all__ = [
    'Cache',
    'MemoryCache',
    'CacheEntry',
    'DELETE_EXPIRED_INTERVAL',
    'RedisCache',
    'format_bool',
    'parse_bool'
]
