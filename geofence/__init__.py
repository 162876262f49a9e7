__version__ = "1.0.0"

from .config import GeofenceConfig, RedisOptions, ProximityMode, ConfigManager, load_config
from .engine import Geofence
from .exceptions import (
    GeofenceError, InvalidAddressError, ConfigurationError, ProviderError, CacheError
)
from .cache import Cache, MemoryCache, RedisCache
from .geo import GeoIPClient, GeoLookupResult, AnchorLocation
from .validators import validate_ip_address, is_private_or_loopback

__all__ = [
    "Geofence", "GeofenceConfig", "RedisOptions", "ProximityMode",
    "ConfigManager", "load_config",
    "GeofenceError", "InvalidAddressError", "ConfigurationError",
    "ProviderError", "CacheError",
    "Cache", "MemoryCache", "RedisCache",
    "GeoIPClient", "GeoLookupResult", "AnchorLocation",
    "validate_ip_address", "is_private_or_loopback"
]
