"""Geolocation Provider Client

Looks up the coordinates of an IP address over HTTP. The default endpoint is
the ipbase v2 ``info`` API; the flat freegeoip style payload is also accepted.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from ..config import DEFAULT_PROVIDER_URL, DEFAULT_REQUEST_TIMEOUT
from ..exceptions import ProviderError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLookupResult:
    """Location reported by the provider for one address"""
    ip: str
    latitude: float
    longitude: float
    hostname: Optional[str] = None
    country_code: Optional[str] = None
    country_name: Optional[str] = None
    region_name: Optional[str] = None
    city: Optional[str] = None
    zip_code: Optional[str] = None
    timezone: Optional[str] = None


def _name(value: Any) -> Optional[str]:
    # ipbase nests most names as {"name": ...}
    if isinstance(value, dict):
        return value.get('name')
    return value


def parse_lookup_response(payload: Dict[str, Any]) -> GeoLookupResult:
    """Convert a provider JSON document into a GeoLookupResult"""
    if not isinstance(payload, dict):
        raise ProviderError("unexpected provider response: expected a JSON object")

    data = payload.get('data')
    if isinstance(data, dict):
        location = data.get('location') or {}
        country = location.get('country') or {}
        timezone = data.get('timezone') or {}
        fields = {
            'ip': data.get('ip', ''),
            'latitude': location.get('latitude'),
            'longitude': location.get('longitude'),
            'hostname': data.get('hostname'),
            'country_code': country.get('alpha2') if isinstance(country, dict) else None,
            'country_name': _name(country),
            'region_name': _name(location.get('region')),
            'city': _name(location.get('city')),
            'zip_code': location.get('zip'),
            'timezone': timezone.get('id') if isinstance(timezone, dict) else timezone,
        }
    else:
        fields = {
            'ip': payload.get('ip', ''),
            'latitude': payload.get('latitude'),
            'longitude': payload.get('longitude'),
            'country_code': payload.get('country_code'),
            'country_name': payload.get('country_name'),
            'region_name': payload.get('region_name'),
            'city': payload.get('city'),
            'zip_code': payload.get('zip_code'),
            'timezone': payload.get('time_zone'),
        }

    try:
        fields['latitude'] = float(fields['latitude'])
        fields['longitude'] = float(fields['longitude'])
    except (TypeError, ValueError):
        raise ProviderError("provider response is missing latitude/longitude") from None

    return GeoLookupResult(**fields)


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get('message'):
        return str(body['message'])
    return response.reason or f"HTTP {response.status_code}"


class GeoIPClient:
    """HTTP client for the geolocation provider"""

    def __init__(self, token: str, base_url: str = DEFAULT_PROVIDER_URL,
                 timeout: float = DEFAULT_REQUEST_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.token = token
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'Accept': 'application/json'})

    def lookup(self, ip_address: str = "", timeout: Optional[float] = None) -> GeoLookupResult:
        """Fetch the location of ip_address; an empty address looks up the caller's own public IP"""
        params = {'apikey': self.token}
        if ip_address:
            params['ip'] = ip_address

        try:
            response = self.session.get(self.base_url, params=params,
                                        timeout=timeout if timeout is not None else self.timeout)
        except requests.exceptions.RequestException as e:
            raise ProviderError(f"geolocation request failed: {e}", url=self.base_url) from e

        if not response.ok:
            message = _error_message(response)
            logger.debug(f"Provider returned {response.status_code} for {ip_address or 'self'}: {message}")
            raise ProviderError(message, status_code=response.status_code, url=self.base_url)

        try:
            payload = response.json()
        except ValueError as e:
            raise ProviderError(f"invalid JSON in provider response: {e}", status_code=response.status_code,
                                url=self.base_url) from e

        result = parse_lookup_response(payload)
        logger.debug(f"Located {ip_address or 'self'} at ({result.latitude}, {result.longitude})")
        return result

    def close(self):
        self.session.close()
