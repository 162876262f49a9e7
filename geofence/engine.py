"""Geofence Engine

Decides whether an IP address is located near a fixed anchor. Verdicts are
memoized per address in the configured cache backend, so each address costs
at most one provider lookup per TTL window.
"""

import logging
from typing import Optional

from .cache import Cache, MemoryCache, RedisCache
from .config import GeofenceConfig, ProximityMode
from .geo.client import GeoIPClient, GeoLookupResult
from .geo.proximity import AnchorLocation, is_same_bucket, is_within_radius
from .validators import is_private_or_loopback, validate_ip_address

logger = logging.getLogger(__name__)


class Geofence:
    """Proximity checks against an anchor resolved once at construction"""

    def __init__(self, config: GeofenceConfig, geo_client: Optional[GeoIPClient] = None,
                 cache: Optional[Cache] = None):
        config.validate()
        self.config = config
        self._owns_client = geo_client is None
        self.geo_client = geo_client or GeoIPClient(
            token=config.token,
            base_url=config.provider_url,
            timeout=config.request_timeout,
        )

        # An empty address geofences this host's public IP
        try:
            anchor = self.geo_client.lookup(config.ip_address)
        except Exception:
            if self._owns_client:
                self.geo_client.close()
            raise
        self._anchor = AnchorLocation(latitude=anchor.latitude, longitude=anchor.longitude)
        logger.info(f"Geofence anchored at ({anchor.latitude}, {anchor.longitude}) "
                    f"for {config.ip_address or 'this host'}")

        self.cache = cache if cache is not None else self._create_cache(config)

    @staticmethod
    def _create_cache(config: GeofenceConfig) -> Cache:
        if config.redis is not None:
            logger.info("Using redis verdict cache")
            return RedisCache(config.redis, ttl=config.cache_ttl)
        logger.info("Using in-memory verdict cache")
        return MemoryCache(ttl=config.cache_ttl)

    @property
    def anchor(self) -> AnchorLocation:
        return self._anchor

    @property
    def proximity_mode(self) -> ProximityMode:
        return self.config.proximity_mode

    def is_ip_address_near(self, ip_address: str, timeout: Optional[float] = None) -> bool:
        """Return True if ip_address is within the configured proximity of the anchor.

        Raises InvalidAddressError before any I/O for malformed input,
        ProviderError when the lookup fails and CacheError when the cache
        backend fails. Nothing is cached unless the verdict was computed.
        """
        validate_ip_address(ip_address)

        if self.config.allow_private_ip_addresses and is_private_or_loopback(ip_address):
            return True

        cached, found = self.cache.get(ip_address)
        if found:
            logger.debug(f"Cache hit for {ip_address}: {cached}")
            return cached

        logger.debug(f"Cache miss for {ip_address}, looking up location")
        location = self.geo_client.lookup(ip_address, timeout=timeout)
        is_near = self._compare(location)

        self.cache.set(ip_address, is_near)
        return is_near

    def _compare(self, location: GeoLookupResult) -> bool:
        if self.config.proximity_mode is ProximityMode.PRECISION:
            return is_same_bucket(self._anchor, location.latitude, location.longitude,
                                  self.config.sensitivity)
        return is_within_radius(self._anchor, location.latitude, location.longitude,
                                self.config.effective_radius)

    def close(self):
        """Close all resources"""
        self.cache.close()
        if self._owns_client:
            self.geo_client.close()
        logger.info("Geofence closed")
