"""Input validation helpers for addresses and proximity settings"""

import ipaddress
from typing import Union

from .exceptions import ConfigurationError, InvalidAddressError

MIN_SENSITIVITY = 0
MAX_SENSITIVITY = 5

# RFC 1918 and RFC 4193 ranges; broader "not globally routable" blocks are not private
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)


def validate_ip_address(ip_str: str) -> Union[ipaddress.IPv4Address, ipaddress.IPv6Address]:
    """Parse an IPv4/IPv6 literal, raising InvalidAddressError when malformed"""
    if not isinstance(ip_str, str):
        raise InvalidAddressError(ip_str)
    try:
        return ipaddress.ip_address(ip_str)
    except ValueError:
        raise InvalidAddressError(ip_str) from None


def is_valid_ip(ip_str: str) -> bool:
    """Validate if string is a valid IP address"""
    try:
        validate_ip_address(ip_str)
        return True
    except InvalidAddressError:
        return False


def is_private_or_loopback(ip_str: str) -> bool:
    """
    Check if an address is in a private range or is a loopback address.

    Args:
        ip_str: IP address string

    Returns:
        True for RFC 1918 / unique-local / loopback style addresses,
        False for public or unparseable input.
    """
    try:
        ip = ipaddress.ip_address(ip_str)
    except ValueError:
        return False
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return ip.is_loopback or any(ip in network for network in PRIVATE_NETWORKS)


def validate_sensitivity(sensitivity: int) -> None:
    """Ensure sensitivity is an integer between 0 - 5"""
    if isinstance(sensitivity, bool) or not isinstance(sensitivity, int):
        raise ConfigurationError(
            f"invalid sensitivity {sensitivity!r}. value must be an integer between "
            f"{MIN_SENSITIVITY} - {MAX_SENSITIVITY}",
            config_key='sensitivity',
        )
    if sensitivity < MIN_SENSITIVITY or sensitivity > MAX_SENSITIVITY:
        raise ConfigurationError(
            f"invalid sensitivity {sensitivity}. value must be between "
            f"{MIN_SENSITIVITY} - {MAX_SENSITIVITY}",
            config_key='sensitivity',
        )


def validate_radius(radius: float) -> None:
    """Ensure radius (km) is a non-negative real number"""
    if isinstance(radius, bool) or not isinstance(radius, (int, float)):
        raise ConfigurationError(f"invalid radius {radius!r}. value must be a number", config_key='radius')
    # NaN fails both comparisons
    if not radius >= 0:
        raise ConfigurationError(f"invalid radius {radius}. value must be >= 0", config_key='radius')
