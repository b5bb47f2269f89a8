import unittest
from datetime import datetime, timedelta, timezone
import numpy as np
from config import TRUE_SCALE_UNITS_PER_AU
from ephemeris import EphemerisClock
from orbit_path import LevelOfDetail
from orrery import Orrery
from scaling import ScalingProfile
from solarsystem import CatalogLookupError
from visibility import VisibilityTier

J2000_INSTANT = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

class TestOrrery(unittest.TestCase):

    def setUp(self):
        self.clock = EphemerisClock(time_source=lambda: J2000_INSTANT + timedelta(days=100))
        self.orrery = Orrery(clock=self.clock)

    def test_time_arguments_are_equivalent(self):
        by_datetime = self.orrery.position('mars', J2000_INSTANT + timedelta(days=100))
        by_days = self.orrery.position('mars', 100.0)
        by_now = self.orrery.position('mars')
        np.testing.assert_array_almost_equal(by_datetime.as_array(), by_days.as_array())
        np.testing.assert_array_almost_equal(by_now.as_array(), by_days.as_array())

    def test_earth_at_epoch(self):
        self.assertAlmostEqual(self.orrery.position('earth', J2000_INSTANT).distance, 1.0, delta=0.02)

    def test_sun_at_origin(self):
        self.assertEqual(self.orrery.position('sun', 123.0).distance, 0.0)
        self.assertEqual(self.orrery.scaled_distance('sun', 123.0, ScalingProfile.ARTISTIC), 0.0)
        self.assertEqual(self.orrery.orbit_path('sun', ScalingProfile.ARTISTIC, LevelOfDetail.HIGH), [])

    def test_unknown_body(self):
        with self.assertRaises(CatalogLookupError):
            self.orrery.position('pluto', 0.0)
        with self.assertRaises(CatalogLookupError):
            self.orrery.scaled_radius('pluto', ScalingProfile.EXPLORATION)
        with self.assertRaises(CatalogLookupError):
            self.orrery.visibility('mars', 'pluto', ScalingProfile.TRUE_SCALE, 0.0)

    def test_neptune_true_scale_semi_major_axis(self):
        self.assertEqual(self.orrery.scaled_semi_major_axis('neptune', ScalingProfile.TRUE_SCALE),
                         30.06896348 * TRUE_SCALE_UNITS_PER_AU)
        self.assertEqual(self.orrery.scaled_semi_major_axis('sun', ScalingProfile.TRUE_SCALE), 0.0)

    def test_neptune_exploration_radius_meets_floor(self):
        floor = ScalingProfile.EXPLORATION.parameters.minimum_radius_floor
        self.assertGreaterEqual(self.orrery.scaled_radius('neptune', ScalingProfile.EXPLORATION), floor - 1e-12)

    def test_scaled_distance_matches_position(self):
        distance = self.orrery.position('saturn', 500.0).distance
        factor = ScalingProfile.EXPLORATION.parameters.distance_scale_factor
        self.assertAlmostEqual(self.orrery.scaled_distance('saturn', 500.0, ScalingProfile.EXPLORATION), distance * factor)
        self.assertAlmostEqual(float(np.linalg.norm(self.orrery.scaled_position('saturn', 500.0, ScalingProfile.EXPLORATION))),
                               distance * factor)

    def test_profile_names_accepted(self):
        self.assertEqual(self.orrery.scaled_radius('earth', 'artistic'),
                         self.orrery.scaled_radius('earth', ScalingProfile.ARTISTIC))

    def test_repeated_queries_are_identical(self):
        self.assertEqual(self.orrery.scaled_radius('mars', ScalingProfile.EXPLORATION),
                         self.orrery.scaled_radius('mars', ScalingProfile.EXPLORATION))
        self.assertEqual(self.orrery.scaled_distance('mars', 10.0, ScalingProfile.EXPLORATION),
                         self.orrery.scaled_distance('mars', 10.0, ScalingProfile.EXPLORATION))
        self.assertEqual(self.orrery.position('mars', 10.0), self.orrery.position('mars', 10.0))

    def test_switching_profile_does_not_leak_state(self):
        before = self.orrery.scaled_radius('mercury', ScalingProfile.EXPLORATION)
        self.orrery.scaled_radius('mercury', ScalingProfile.TRUE_SCALE)
        self.orrery.orbit_path('mercury', ScalingProfile.ARTISTIC, LevelOfDetail.LOW)
        self.assertEqual(self.orrery.scaled_radius('mercury', ScalingProfile.EXPLORATION), before)

    def test_orbit_path_segments(self):
        path = self.orrery.orbit_path('earth', ScalingProfile.EXPLORATION, LevelOfDetail.MEDIUM)
        self.assertEqual(len(path), 129)

    def test_orbit_path_accepts_names(self):
        by_name = self.orrery.orbit_path('earth', 'exploration', 'low')
        by_enum = self.orrery.orbit_path('earth', ScalingProfile.EXPLORATION, LevelOfDetail.LOW)
        self.assertEqual(len(by_name), 65)
        self.assertEqual(by_name, by_enum)

    def test_visibility_from_body_id_and_vector(self):
        days = 250.0
        by_id = self.orrery.visibility('jupiter', 'earth', ScalingProfile.TRUE_SCALE, days)
        earth_vector = self.orrery.position('earth', days).as_array()
        by_vector = self.orrery.visibility('jupiter', earth_vector, ScalingProfile.TRUE_SCALE, days)
        self.assertAlmostEqual(by_id.apparent_magnitude, by_vector.apparent_magnitude)
        self.assertIs(by_id.tier, by_vector.tier)

    def test_neptune_not_naked_eye_from_earth(self):
        report = self.orrery.visibility('neptune', 'earth', ScalingProfile.TRUE_SCALE, 0.0)
        self.assertFalse(report.is_naked_eye_visible)
        self.assertIs(report.tier, VisibilityTier.INVISIBLE)

    def test_sun_seen_from_earth(self):
        report = self.orrery.visibility('sun', 'earth', ScalingProfile.TRUE_SCALE, 0.0)
        self.assertAlmostEqual(report.apparent_magnitude, -26.74, delta=0.1)
        self.assertIs(report.tier, VisibilityTier.BRIGHT)
        self.assertEqual(report.phase_angle_deg, 0.0)
        self.assertEqual(report.distance_from_central_au, 0.0)
        self.assertTrue(report.should_render)

    def test_astronomical_info(self):
        info = self.orrery.astronomical_info('venus', 0.0)
        self.assertEqual(info.name, 'venus')
        self.assertAlmostEqual(info.distance_from_sun_au, 0.72, delta=0.01)
        self.assertAlmostEqual(info.orbital_velocity_km_s, 35.0, delta=0.5)

    def test_snapshot_covers_catalog(self):
        snapshot = self.orrery.snapshot(0.0, ScalingProfile.ARTISTIC)
        self.assertEqual(list(snapshot.keys()), self.orrery.body_names())
        earth = snapshot['earth']
        self.assertEqual(earth.scaled_radius, self.orrery.scaled_radius('earth', ScalingProfile.ARTISTIC))
        np.testing.assert_array_almost_equal(earth.scaled_position,
                                             self.orrery.scaled_position('earth', 0.0, ScalingProfile.ARTISTIC))

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
