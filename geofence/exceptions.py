"""
Geofence Custom Exceptions
Standardized exception hierarchy for proximity checks
"""

from typing import Any, Dict, Optional


class GeofenceError(Exception):
    """Base exception for all geofence errors"""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/reporting"""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context,
        }


class InvalidAddressError(GeofenceError):
    """Input is not a parseable IPv4 or IPv6 literal"""

    def __init__(self, ip_address: Any):
        super().__init__(
            f"invalid IP address provided: {ip_address!r}",
            "INVALID_ADDRESS",
            {'ip_address': str(ip_address)},
        )
        self.ip_address = ip_address


class ConfigurationError(GeofenceError):
    """Configuration-related errors, raised at construction time only"""

    def __init__(self, message: str, config_key: Optional[str] = None,
                 config_file: Optional[str] = None):
        context = {}
        if config_key:
            context['config_key'] = config_key
        if config_file:
            context['config_file'] = config_file
        super().__init__(message, "CONFIG_ERROR", context)


class ProviderError(GeofenceError):
    """Geolocation provider call failed or returned an error payload"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 url: Optional[str] = None):
        context = {}
        if status_code is not None:
            context['status_code'] = status_code
        if url:
            context['url'] = url
        super().__init__(message, "PROVIDER_ERROR", context)
        self.status_code = status_code


class CacheError(GeofenceError):
    """Cache backend read, write or serialization failure"""

    def __init__(self, message: str, key: Optional[str] = None,
                 backend: Optional[str] = None):
        context = {}
        if key is not None:
            context['key'] = key
        if backend:
            context['backend'] = backend
        super().__init__(message, "CACHE_ERROR", context)
