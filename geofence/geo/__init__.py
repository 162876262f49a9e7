"""Geolocation lookups and coordinate comparison"""

from .client import GeoIPClient, GeoLookupResult, parse_lookup_response
from .proximity import (
    AnchorLocation,
    haversine_distance,
    is_within_radius,
    format_coordinates,
    is_same_bucket
)

__all__ = [
    'GeoIPClient',
    'GeoLookupResult',
    'parse_lookup_response',
    'AnchorLocation',
    'haversine_distance',
    'is_within_radius',
    'format_coordinates',
    'is_same_bucket'
]
