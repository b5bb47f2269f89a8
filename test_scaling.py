import unittest
import numpy as np
from config import config, TRUE_SCALE_UNITS_PER_AU
from scaling import ScalingEngine, ScalingProfile
from solarsystem import SolarSystemCatalog, HeliocentricPosition

class TestScalingProfile(unittest.TestCase):

    def test_from_name_accepts_aliases(self):
        self.assertIs(ScalingProfile.from_name('true-scale'), ScalingProfile.TRUE_SCALE)
        self.assertIs(ScalingProfile.from_name('Realistic'), ScalingProfile.TRUE_SCALE)
        self.assertIs(ScalingProfile.from_name('EXPLORATION'), ScalingProfile.EXPLORATION)
        self.assertIs(ScalingProfile.from_name('artistic'), ScalingProfile.ARTISTIC)

    def test_from_name_rejects_unknown(self):
        with self.assertRaises(ValueError):
            ScalingProfile.from_name('cinematic')

    def test_parameters_come_from_config(self):
        params = ScalingProfile.EXPLORATION.parameters
        self.assertEqual(params.distance_scale_factor, config.Scaling.PROFILES['exploration']['distance_scale_factor'])
        self.assertEqual(ScalingProfile.TRUE_SCALE.parameters.maximum_enhancement_factor, 1.0)

    def test_default_profile(self):
        self.assertIs(ScalingProfile.default(), ScalingProfile.EXPLORATION)

class TestScalingEngine(unittest.TestCase):

    def setUp(self):
        self.catalog = SolarSystemCatalog.from_config()
        self.engines = {profile: ScalingEngine(profile) for profile in ScalingProfile}

    def test_true_scale_never_enhances(self):
        engine = self.engines[ScalingProfile.TRUE_SCALE]
        for body in self.catalog:
            self.assertEqual(engine.enhancement_factor(body.radius_km, body.is_central), 1.0)
            self.assertAlmostEqual(engine.scaled_body_radius(body),
                                   body.radius_km * engine.parameters.base_size_scale_factor)

    def test_enhanced_profiles_respect_floor_and_cap(self):
        for profile in (ScalingProfile.EXPLORATION, ScalingProfile.ARTISTIC):
            engine = self.engines[profile]
            params = engine.parameters
            for body in self.catalog.planets():
                factor = engine.enhancement_factor(body.radius_km)
                self.assertGreaterEqual(factor, 1.0)
                self.assertLessEqual(factor, params.maximum_enhancement_factor)
                base = body.radius_km * params.base_size_scale_factor
                if base >= params.minimum_radius_floor:
                    self.assertEqual(engine.scaled_body_radius(body), base)

    def test_exploration_keeps_every_planet_at_floor(self):
        engine = self.engines[ScalingProfile.EXPLORATION]
        for body in self.catalog.planets():
            self.assertGreaterEqual(engine.scaled_body_radius(body),
                                    engine.parameters.minimum_radius_floor - 1e-12, body.name)

    def test_neptune_radius_meets_exploration_floor(self):
        engine = self.engines[ScalingProfile.EXPLORATION]
        self.assertGreaterEqual(engine.scaled_body_radius(self.catalog.get('neptune')),
                                engine.parameters.minimum_radius_floor - 1e-12)

    def test_cap_limits_tiny_radius(self):
        engine = self.engines[ScalingProfile.EXPLORATION]
        params = engine.parameters
        tiny_radius_km = 1.0
        self.assertEqual(engine.enhancement_factor(tiny_radius_km), params.maximum_enhancement_factor)
        self.assertAlmostEqual(engine.scaled_radius(tiny_radius_km),
                               tiny_radius_km * params.base_size_scale_factor * params.maximum_enhancement_factor)

    def test_zero_radius(self):
        engine = self.engines[ScalingProfile.ARTISTIC]
        self.assertEqual(engine.enhancement_factor(0.0), 1.0)
        self.assertEqual(engine.scaled_radius(0.0), 0.0)

    def test_radius_scaling_is_monotonic(self):
        radii = np.linspace(0.0, 800000.0, 400)
        for engine in self.engines.values():
            for central in (False, True):
                scaled = [engine.scaled_radius(r, central) for r in radii]
                self.assertTrue(all(b >= a - 1e-12 for a, b in zip(scaled, scaled[1:])))

    def test_central_body_uses_its_own_parameters(self):
        engine = self.engines[ScalingProfile.ARTISTIC]
        sun = self.catalog.central_body
        params = engine.parameters
        expected_base = sun.radius_km * params.central_size_scale_factor
        self.assertAlmostEqual(engine.scaled_body_radius(sun),
                               max(expected_base, min(params.central_minimum_radius_floor,
                                                      expected_base * params.maximum_enhancement_factor)))
        self.assertLessEqual(engine.scaled_body_radius(sun), max(expected_base, params.central_minimum_radius_floor))

    def test_scaled_distance_is_linear(self):
        engine = self.engines[ScalingProfile.TRUE_SCALE]
        neptune = self.catalog.get('neptune').orbital_elements
        self.assertEqual(engine.scaled_distance(neptune.semi_major_axis_au), 30.06896348 * TRUE_SCALE_UNITS_PER_AU)
        self.assertEqual(engine.scaled_distance(0.0), 0.0)

    def test_scaled_position(self):
        engine = self.engines[ScalingProfile.EXPLORATION]
        position = HeliocentricPosition(1.0, -2.0, 0.5, float(np.sqrt(5.25)))
        np.testing.assert_array_almost_equal(engine.scaled_position(position),
                                             np.array([1.0, -2.0, 0.5]) * engine.distance_scale_factor)

    def test_scaling_is_idempotent(self):
        engine = self.engines[ScalingProfile.EXPLORATION]
        mars = self.catalog.get('mars')
        self.assertEqual(engine.scaled_body_radius(mars), engine.scaled_body_radius(mars))
        self.assertEqual(engine.scaled_distance(1.5), engine.scaled_distance(1.5))

    def test_engine_accepts_profile_names(self):
        self.assertIs(ScalingEngine('artistic').profile, ScalingProfile.ARTISTIC)

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
