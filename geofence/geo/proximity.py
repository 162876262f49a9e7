"""Coordinate comparison strategies.

Both strategies are pure functions of two coordinate pairs.
"""

import math
from dataclasses import dataclass

EARTH_RADIUS_KM = 6371.0


@dataclass(frozen=True)
class AnchorLocation:
    """Fixed reference point that looked-up addresses are compared against"""
    latitude: float
    longitude: float


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometers between two points given in degrees"""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push a slightly above 1 for antipodal points
    a = min(1.0, max(0.0, a))
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def is_within_radius(anchor: AnchorLocation, latitude: float, longitude: float, radius_km: float) -> bool:
    return haversine_distance(anchor.latitude, anchor.longitude, latitude, longitude) <= radius_km


def format_coordinates(sensitivity: int, location: float) -> str:
    """Format a coordinate to `sensitivity` decimal places for comparison"""
    return f"{location:.{sensitivity}f}"


def is_same_bucket(anchor: AnchorLocation, latitude: float, longitude: float, sensitivity: int) -> bool:
    """Legacy comparison: equal after rounding both axes to `sensitivity` decimals"""
    return (format_coordinates(sensitivity, anchor.latitude) == format_coordinates(sensitivity, latitude)
            and format_coordinates(sensitivity, anchor.longitude) == format_coordinates(sensitivity, longitude))
