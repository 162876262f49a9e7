"""Verdict cache contract shared by all backends"""

from abc import ABC, abstractmethod
from typing import Tuple


class Cache(ABC):
    """Stores the boolean "is near" verdict per IP address.

    ``get`` returns ``(value, found)``; ``found=False`` means nothing is
    cached for the key and is not an error. Backend failures raise
    :class:`~geofence.exceptions.CacheError` from either operation.
    Get followed by set is not atomic; racing writers are last-writer-wins.
    """

    @abstractmethod
    def get(self, key: str) -> Tuple[bool, bool]:
        """Return ``(value, found)`` for key"""

    @abstractmethod
    def set(self, key: str, value: bool) -> None:
        """Store value under key using the backend's configured TTL"""

    def close(self) -> None:
        """Release backend resources"""
