"""Unit tests for the geolocation provider client"""

import sys
import unittest
from pathlib import Path
from unittest.mock import Mock

import requests

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from geofence.config import DEFAULT_PROVIDER_URL
from geofence.exceptions import ProviderError
from geofence.geo.client import GeoIPClient, GeoLookupResult, parse_lookup_response

IPBASE_RESPONSE = {
    "data": {
        "ip": "8.8.8.8",
        "hostname": "dns.google",
        "type": "v4",
        "location": {
            "latitude": 37.751,
            "longitude": -97.822,
            "zip": "",
            "city": {"name": "Mountain View"},
            "region": {"name": "California"},
            "country": {"alpha2": "US", "name": "United States"},
        },
        "timezone": {"id": "America/Chicago"},
    }
}

FREEGEOIP_RESPONSE = {
    "ip": "8.8.8.8",
    "country_code": "US",
    "country_name": "United States",
    "time_zone": "America/Chicago",
    "latitude": 37.751,
    "longitude": -97.822,
}


def make_response(status_code=200, payload=None, reason="OK", json_error=False):
    response = Mock()
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = reason
    if json_error:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = payload
    return response


class TestParseLookupResponse(unittest.TestCase):

    def test_ipbase_payload(self):
        result = parse_lookup_response(IPBASE_RESPONSE)
        self.assertEqual(result, GeoLookupResult(
            ip="8.8.8.8",
            latitude=37.751,
            longitude=-97.822,
            hostname="dns.google",
            country_code="US",
            country_name="United States",
            region_name="California",
            city="Mountain View",
            zip_code="",
            timezone="America/Chicago",
        ))

    def test_flat_payload(self):
        result = parse_lookup_response(FREEGEOIP_RESPONSE)
        self.assertEqual(result.latitude, 37.751)
        self.assertEqual(result.longitude, -97.822)
        self.assertEqual(result.country_code, "US")
        self.assertEqual(result.timezone, "America/Chicago")

    def test_missing_coordinates(self):
        for payload in [{"data": {"ip": "8.8.8.8", "location": {}}}, {"ip": "8.8.8.8"}, [], "text"]:
            with self.subTest(payload=payload):
                with self.assertRaises(ProviderError):
                    parse_lookup_response(payload)


class TestGeoIPClient(unittest.TestCase):

    def setUp(self):
        self.session = Mock()
        self.client = GeoIPClient("fakeApiToken", timeout=8.0, session=self.session)

    def test_lookup_address(self):
        self.session.get.return_value = make_response(payload=IPBASE_RESPONSE)

        result = self.client.lookup("8.8.8.8")

        self.assertEqual((result.latitude, result.longitude), (37.751, -97.822))
        self.session.get.assert_called_once_with(
            DEFAULT_PROVIDER_URL,
            params={'apikey': 'fakeApiToken', 'ip': '8.8.8.8'},
            timeout=8.0,
        )
        self.session.headers.update.assert_called_with({'Accept': 'application/json'})

    def test_self_lookup_omits_ip(self):
        self.session.get.return_value = make_response(payload=IPBASE_RESPONSE)

        self.client.lookup("")

        self.assertEqual(self.session.get.call_args.kwargs['params'], {'apikey': 'fakeApiToken'})

    def test_per_call_timeout(self):
        self.session.get.return_value = make_response(payload=IPBASE_RESPONSE)

        self.client.lookup("8.8.8.8", timeout=1.5)

        self.assertEqual(self.session.get.call_args.kwargs['timeout'], 1.5)

    def test_provider_error_message_is_verbatim(self):
        self.session.get.return_value = make_response(
            status_code=401, reason="Unauthorized", payload={"message": "Invalid authentication credentials"})

        with self.assertRaises(ProviderError) as cm:
            self.client.lookup("8.8.8.8")

        self.assertEqual(cm.exception.message, "Invalid authentication credentials")
        self.assertEqual(cm.exception.status_code, 401)

    def test_error_without_json_body(self):
        self.session.get.return_value = make_response(status_code=503, reason="Service Unavailable",
                                                      json_error=True)

        with self.assertRaises(ProviderError) as cm:
            self.client.lookup("8.8.8.8")

        self.assertEqual(cm.exception.message, "Service Unavailable")
        self.assertEqual(cm.exception.status_code, 503)

    def test_transport_error(self):
        self.session.get.side_effect = requests.exceptions.ConnectTimeout("connect timed out")

        with self.assertRaises(ProviderError) as cm:
            self.client.lookup("8.8.8.8")

        self.assertIsNone(cm.exception.status_code)
        self.assertIsInstance(cm.exception.__cause__, requests.exceptions.ConnectTimeout)

    def test_invalid_json_on_success(self):
        self.session.get.return_value = make_response(json_error=True)

        with self.assertRaises(ProviderError):
            self.client.lookup("8.8.8.8")

    def test_close(self):
        self.client.close()
        self.session.close.assert_called_once()


if __name__ == '__main__':
    unittest.main()
