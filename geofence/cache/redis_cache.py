"""
Redis Verdict Cache
===================

Stores verdicts in Redis so several processes can share lookups. Redis
returns nothing for a missing key and stores ``False`` ambiguously, so
verdicts are written as the strings ``"true"`` / ``"false"`` and parsed back
on read.
"""

import logging
import math
from typing import Optional, Tuple

import redis
from redis.exceptions import RedisError

from ..config import RedisOptions
from ..exceptions import CacheError
from .base import Cache

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {'1', 't', 'T', 'TRUE', 'true', 'True'}
_FALSE_STRINGS = {'0', 'f', 'F', 'FALSE', 'false', 'False'}


def format_bool(value: bool) -> str:
    """Canonical text form of a verdict"""
    return 'true' if value else 'false'


def parse_bool(text: str) -> bool:
    """Parse a stored verdict, raising ValueError for anything unrecognised"""
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ValueError(f"invalid boolean string: {text!r}")


class RedisCache(Cache):
    """Redis backed verdict cache; a ``ttl`` of zero or less never expires"""

    def __init__(self, options: RedisOptions, ttl: float, client: Optional[redis.Redis] = None):
        self.options = options
        self.ttl = ttl
        self.redis_client = client or redis.Redis(
            host=options.host,
            port=options.port,
            password=options.password,
            db=options.db,
            decode_responses=True,
            socket_timeout=options.socket_timeout,
            socket_connect_timeout=options.socket_connect_timeout,
        )
        logger.info(f"Redis verdict cache configured for {options.host}:{options.port}/{options.db}")

    def get(self, key: str) -> Tuple[bool, bool]:
        try:
            raw = self.redis_client.get(key)
        except RedisError as e:
            raise CacheError(f"redis get failed: {e}", key=key, backend='redis') from e
        except UnicodeDecodeError as e:
            # decode_responses=True fails on bytes that are not utf-8
            raise CacheError(f"corrupt verdict stored under key: {e}", key=key, backend='redis') from e

        # Key not in redis
        if raw is None:
            return False, False

        if isinstance(raw, bytes):
            raw = raw.decode('utf-8', errors='replace')
        try:
            return parse_bool(raw), True
        except ValueError as e:
            raise CacheError(f"corrupt verdict stored under key: {e}", key=key, backend='redis') from e

    def set(self, key: str, value: bool) -> None:
        # Non-positive or infinite TTLs are stored without expiry
        px = int(self.ttl * 1000) if 0 < self.ttl and math.isfinite(self.ttl) else None
        # Sub-millisecond TTLs would be rejected by redis
        if px is not None and px < 1:
            px = 1
        try:
            self.redis_client.set(key, format_bool(value), px=px)
        except RedisError as e:
            raise CacheError(f"redis set failed: {e}", key=key, backend='redis') from e

    def close(self) -> None:
        try:
            self.redis_client.close()
            logger.info("Redis connection closed")
        except RedisError as e:
            raise CacheError(f"error closing redis connection: {e}", backend='redis') from e
