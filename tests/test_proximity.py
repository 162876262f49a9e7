"""Unit tests for the coordinate comparison strategies"""

import sys
import unittest
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from geofence.geo.proximity import (
    AnchorLocation, format_coordinates, haversine_distance,
    is_same_bucket, is_within_radius
)


class TestFormatCoordinates(unittest.TestCase):

    def test_rounding_by_sensitivity(self):
        test_cases = [
            (5, "-31.12345"),
            (4, "-31.1234"),
            (3, "-31.123"),
            (2, "-31.12"),
            (1, "-31.1"),
            (0, "-31"),
        ]
        for sensitivity, expected in test_cases:
            with self.subTest(sensitivity=sensitivity):
                self.assertEqual(format_coordinates(sensitivity, -31.12345), expected)


class TestHaversine(unittest.TestCase):

    def test_same_point_is_zero(self):
        self.assertEqual(haversine_distance(37.751, -97.822, 37.751, -97.822), 0.0)

    def test_one_degree_of_longitude(self):
        # ~88 km at this latitude
        distance = haversine_distance(37.751, -97.822, 37.751, -98.822)
        self.assertAlmostEqual(distance, 87.9, delta=0.5)

    def test_symmetric(self):
        self.assertAlmostEqual(
            haversine_distance(51.5074, -0.1278, 40.7128, -74.0060),
            haversine_distance(40.7128, -74.0060, 51.5074, -0.1278),
        )

    def test_antipodal_points(self):
        distance = haversine_distance(0.0, 0.0, 0.0, 180.0)
        self.assertAlmostEqual(distance, 3.141592653589793 * 6371.0, places=3)


class TestComparisons(unittest.TestCase):

    def setUp(self):
        self.anchor = AnchorLocation(latitude=37.751, longitude=-97.822)

    def test_radius_boundary_inclusive(self):
        distance = haversine_distance(37.751, -97.822, 37.751, -98.822)
        self.assertTrue(is_within_radius(self.anchor, 37.751, -98.822, distance))
        self.assertFalse(is_within_radius(self.anchor, 37.751, -98.822, distance * (1 - 1e-12)))

    def test_zero_radius(self):
        self.assertTrue(is_within_radius(self.anchor, 37.751, -97.822, 0.0))
        self.assertFalse(is_within_radius(self.anchor, 37.751, -98.822, 0.0))

    def test_precision_bucket(self):
        self.assertTrue(is_same_bucket(self.anchor, 37.7512, -97.8221, 3))
        self.assertFalse(is_same_bucket(self.anchor, 37.751, -98.822, 3))
        self.assertTrue(is_same_bucket(self.anchor, 37.9, -97.6, 0))

    def test_comparisons_are_stable(self):
        results = {is_within_radius(self.anchor, 37.8, -97.9, 10.0) for _ in range(5)}
        self.assertEqual(len(results), 1)


if __name__ == '__main__':
    unittest.main()
