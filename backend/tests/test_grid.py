import math
import unittest

from mapmate.core.grid import generate_grid
from mapmate.models.geo_model import Coordinate


class GridTests(unittest.TestCase):
    def test_returns_nine_points_with_center_in_the_middle(self):
        center = Coordinate(lat=51.5074, lng=-0.1278)
        points = generate_grid(center, 3.0)

        self.assertEqual(len(points), 9)
        self.assertEqual(points[4].lat, center.lat)
        self.assertEqual(points[4].lng, center.lng)
        self.assertEqual((points[4].row, points[4].col), (1, 1))
        self.assertEqual([p.index for p in points], list(range(9)))

    def test_zero_radius_collapses_to_center(self):
        center = Coordinate(lat=-33.8688, lng=151.2093)
        for point in generate_grid(center, 0):
            self.assertEqual((point.lat, point.lng), (center.lat, center.lng))

    def test_steps_for_ten_km_at_forty_degrees(self):
        center = Coordinate(lat=40.0, lng=-74.0)
        points = generate_grid(center, 10.0)

        lat_step = 5 / 111.32
        lng_step = 5 / (111.32 * math.cos(math.radians(40.0)))
        self.assertAlmostEqual(lat_step, 0.0449, places=4)

        # row-major: rows move latitude, columns move longitude
        self.assertAlmostEqual(points[0].lat, 40.0 - lat_step)
        self.assertAlmostEqual(points[0].lng, -74.0 - lng_step)
        self.assertAlmostEqual(points[2].lng, -74.0 + lng_step)
        self.assertAlmostEqual(points[7].lat, 40.0 + lat_step)
        self.assertAlmostEqual(points[7].lng, -74.0)
        self.assertAlmostEqual(points[8].lat, 40.0 + lat_step)
        self.assertAlmostEqual(points[8].lng, -74.0 + lng_step)

        # longitude steps widen by 1 / cos(40 deg)
        self.assertAlmostEqual(lat_step / lng_step, math.cos(math.radians(40.0)))
        self.assertAlmostEqual(math.cos(math.radians(40.0)), 0.766, places=3)

    def test_grid_is_deterministic(self):
        center = Coordinate(lat=12.5, lng=99.9)
        self.assertEqual(generate_grid(center, 4.2), generate_grid(center, 4.2))


if __name__ == "__main__":
    unittest.main()
