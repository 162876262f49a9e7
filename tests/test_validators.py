"""Unit tests for address and setting validation helpers"""

import sys
import unittest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from geofence.exceptions import ConfigurationError, InvalidAddressError
from geofence.validators import (
    is_private_or_loopback, is_valid_ip, validate_ip_address,
    validate_radius, validate_sensitivity
)


class TestValidateIPAddress(unittest.TestCase):

    def test_valid_addresses(self):
        for address in ["8.8.8.8", "2001:4860:4860::8888", "::1", "0.0.0.0"]:
            with self.subTest(address=address):
                self.assertTrue(is_valid_ip(address))
                self.assertEqual(str(validate_ip_address(address)), address)

    def test_invalid_addresses(self):
        for address in ["8.8.88", "256.1.1.1", "", "not-an-ip", "8.8.8.8 ", "1.2.3.4/24", None, 12345]:
            with self.subTest(address=address):
                self.assertFalse(is_valid_ip(address))
                with self.assertRaises(InvalidAddressError) as cm:
                    validate_ip_address(address)
                self.assertEqual(cm.exception.error_code, "INVALID_ADDRESS")


class TestPrivateAddresses(unittest.TestCase):

    def test_private_and_loopback(self):
        for address in ["10.0.0.1", "172.16.5.4", "192.168.1.1", "127.0.0.1", "::1", "fd00::1",
                        "::ffff:10.0.0.1"]:
            with self.subTest(address=address):
                self.assertTrue(is_private_or_loopback(address))

    def test_public_and_invalid(self):
        for address in ["8.8.8.8", "1.1.1.1", "2001:4860:4860::8888", "bogus", "172.32.0.1"]:
            with self.subTest(address=address):
                self.assertFalse(is_private_or_loopback(address))

    def test_reserved_ranges_are_not_private(self):
        # documentation, benchmarking, link-local, this-network, broadcast, class E
        for address in ["192.0.2.1", "198.18.0.1", "169.254.1.1", "0.0.0.1", "255.255.255.255",
                        "240.0.0.1", "2001:db8::1", "fe80::1", "100.64.0.1"]:
            with self.subTest(address=address):
                self.assertFalse(is_private_or_loopback(address))


class TestSettingValidation(unittest.TestCase):

    def test_sensitivity_range(self):
        for value in range(0, 6):
            with self.subTest(value=value):
                validate_sensitivity(value)

        for value in [-1, 6, 2.5, True, "3"]:
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    validate_sensitivity(value)

    def test_radius(self):
        for value in [0, 0.0, 1.5, 20000]:
            with self.subTest(value=value):
                validate_radius(value)

        for value in [-0.1, -5, float('nan'), "10", None]:
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    validate_radius(value)


if __name__ == '__main__':
    unittest.main()
