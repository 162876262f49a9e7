"""In-process verdict cache with per-entry TTL and a periodic expiry sweep"""

import logging
import threading
import time
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .base import Cache

logger = logging.getLogger(__name__)

# Sweep interval is fixed and independent of the per-entry TTL
DELETE_EXPIRED_INTERVAL = 10 * 60


@dataclass
class CacheEntry:
    """Cached verdict with its expiration instant (None = never expires)"""
    value: bool
    created_at: float = field(default_factory=time.monotonic)
    expires_at: Optional[float] = None

    def is_expired(self, now: Optional[float] = None) -> bool:
        if self.expires_at is None:
            return False
        if now is None:
            now = time.monotonic()
        return now >= self.expires_at


class MemoryCache(Cache):
    """Thread-safe in-memory verdict cache.

    Entries expire ``ttl`` seconds after they are set; a ``ttl`` of zero or
    less keeps entries until the process exits. Expired entries are dropped
    lazily on ``get`` and by a background sweep every ``cleanup_interval``
    seconds. The sweep runs on daemon timer threads and stops on ``close``.
    """

    def __init__(self, ttl: float, cleanup_interval: float = DELETE_EXPIRED_INTERVAL):
        self.ttl = ttl
        self.cleanup_interval = cleanup_interval
        self.storage: Dict[str, CacheEntry] = {}
        self.lock = threading.RLock()
        self.cleanup_timer: Optional[threading.Timer] = None
        self._closed = False
        self._start_background_cleanup()

    def get(self, key: str) -> Tuple[bool, bool]:
        with self.lock:
            entry = self.storage.get(key)
            if entry is None:
                return False, False
            if entry.is_expired(time.monotonic()):
                del self.storage[key]
                return False, False
            return entry.value, True

    def set(self, key: str, value: bool) -> None:
        now = time.monotonic()
        expires_at = now + self.ttl if self.ttl > 0 else None
        with self.lock:
            self.storage[key] = CacheEntry(value=bool(value), created_at=now, expires_at=expires_at)

    def cleanup_expired(self) -> int:
        """Remove all expired entries, return count removed"""
        now = time.monotonic()
        with self.lock:
            expired_keys = [key for key, entry in self.storage.items() if entry.is_expired(now)]
            for key in expired_keys:
                del self.storage[key]
        return len(expired_keys)

    def size(self) -> int:
        with self.lock:
            return len(self.storage)

    def close(self) -> None:
        """Stop the background sweep"""
        with self.lock:
            self._closed = True
            if self.cleanup_timer:
                self.cleanup_timer.cancel()
                self.cleanup_timer = None

    def _start_background_cleanup(self):
        with self.lock:
            if self._closed:
                return
            if self.cleanup_timer:
                self.cleanup_timer.cancel()
            self.cleanup_timer = threading.Timer(self.cleanup_interval, self._background_cleanup)
            self.cleanup_timer.daemon = True
            self.cleanup_timer.start()

    def _background_cleanup(self):
        try:
            removed = self.cleanup_expired()
            if removed:
                logger.debug(f"Background cleanup removed {removed} expired verdicts")
        finally:
            # Reschedule
            self._start_background_cleanup()
