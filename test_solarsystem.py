import unittest
import math
import numpy as np
from config import ConfigurationError
from solarsystem import (OrbitalMechanics, OrbitalElements, SolarSystemCatalog, CelestialBody,
                         HeliocentricPosition, CatalogLookupError)

def make_elements(a=1.0, e=0.0, i=0.0, node=0.0, perihelion=0.0, mean_longitude=0.0, period=365.25):
    return OrbitalElements(a, e, i, node, perihelion, mean_longitude, period)

class TestKeplerSolver(unittest.TestCase):

    def setUp(self):
        self.mechanics = OrbitalMechanics()

    def test_converges_for_catalog_eccentricities(self):
        for e in np.linspace(0.0, 0.25, 11):
            for mean_anomaly_deg in np.linspace(-720.0, 720.0, 73):
                E = self.mechanics.solve_kepler_equation(mean_anomaly_deg, e)
                residual = E - e * math.sin(E) - math.radians(mean_anomaly_deg)
                self.assertLess(abs(residual), 1e-6, f"e={e}, M={mean_anomaly_deg}")

    def test_circular_orbit_returns_mean_anomaly(self):
        self.assertAlmostEqual(self.mechanics.solve_kepler_equation(57.0, 0.0), math.radians(57.0))

    def test_detailed_solution_reports_convergence(self):
        solution = self.mechanics.solve_kepler_equation_detailed(45.0, 0.2)
        self.assertTrue(solution.converged)
        self.assertGreaterEqual(solution.iterations, 1)
        self.assertLessEqual(solution.iterations, 20)
        self.assertAlmostEqual(solution.eccentric_anomaly_rad, self.mechanics.solve_kepler_equation(45.0, 0.2))

    def test_exhausted_budget_returns_best_estimate_and_warns(self):
        with self.assertLogs(level='WARNING') as captured:
            solution = self.mechanics.solve_kepler_equation_detailed(10.0, 0.9, max_iterations=1)
        self.assertFalse(solution.converged)
        self.assertEqual(solution.iterations, 1)
        self.assertTrue(math.isfinite(solution.eccentric_anomaly_rad))
        self.assertTrue(any('did not converge' in line for line in captured.output))

    def test_true_anomaly_at_apsides(self):
        self.assertAlmostEqual(OrbitalMechanics.true_anomaly(0.0, 0.3), 0.0)
        self.assertAlmostEqual(abs(OrbitalMechanics.true_anomaly(math.pi, 0.3)), math.pi)

class TestOrbitalPositions(unittest.TestCase):

    def setUp(self):
        self.mechanics = OrbitalMechanics()
        self.catalog = SolarSystemCatalog.from_config()

    def test_position_is_periodic_in_mean_anomaly(self):
        elements = self.catalog.get('mercury').orbital_elements
        for mean_anomaly_deg in (0.0, 33.3, 181.0, 359.0):
            first = self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg)
            second = self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg + 360.0)
            np.testing.assert_array_almost_equal(first.as_array(), second.as_array())

    def test_position_repeats_after_one_period(self):
        for body in self.catalog.planets():
            elements = body.orbital_elements
            for days in (0.0, 1234.5, -800.0):
                first = self.mechanics.heliocentric_position(elements, days)
                later = self.mechanics.heliocentric_position(elements, days + elements.orbital_period_days)
                np.testing.assert_array_almost_equal(first.as_array(), later.as_array(), decimal=6)

    def test_perihelion_and_aphelion_distances(self):
        for body in self.catalog.planets():
            elements = body.orbital_elements
            perihelion = self.mechanics.position_from_mean_anomaly(elements, 0.0)
            aphelion = self.mechanics.position_from_mean_anomaly(elements, 180.0)
            self.assertAlmostEqual(perihelion.distance, elements.perihelion_au, places=9)
            self.assertAlmostEqual(aphelion.distance, elements.aphelion_au, places=9)

    def test_rotation_preserves_distance(self):
        elements = self.catalog.get('mars').orbital_elements
        for days in (0.0, 100.0, 1234.5, -5000.0):
            position = self.mechanics.heliocentric_position(elements, days)
            self.assertAlmostEqual(float(np.linalg.norm(position.as_array())), position.distance, places=9)

    def test_anomalies_are_normalized(self):
        elements = self.catalog.get('earth').orbital_elements
        position = self.mechanics.heliocentric_position(elements, -12345.6)
        for angle in (position.mean_anomaly_deg, position.eccentric_anomaly_deg, position.true_anomaly_deg):
            self.assertGreaterEqual(angle, 0.0)
            self.assertLess(angle, 360.0)

    def test_flat_orbit_stays_in_ecliptic(self):
        elements = make_elements(a=2.0, e=0.1)
        for mean_anomaly_deg in range(0, 360, 30):
            self.assertAlmostEqual(self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg).z, 0.0)

    def test_circular_orbit_has_constant_distance(self):
        elements = make_elements(a=3.0, e=0.0, i=10.0, node=40.0, perihelion=70.0)
        for mean_anomaly_deg in range(0, 360, 45):
            self.assertAlmostEqual(self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg).distance, 3.0)

    def test_transform_applies_argument_of_perihelion(self):
        elements = make_elements(perihelion=90.0)
        np.testing.assert_array_almost_equal(self.mechanics.transform_to_ecliptic(1.0, 0.0, elements),
                                             np.array([0.0, 1.0, 0.0]))

    def test_transform_applies_inclination_about_node_line(self):
        elements = make_elements(i=90.0)
        np.testing.assert_array_almost_equal(self.mechanics.transform_to_ecliptic(0.0, 1.0, elements),
                                             np.array([0.0, 0.0, 1.0]))
        np.testing.assert_array_almost_equal(self.mechanics.transform_to_ecliptic(1.0, 0.0, elements),
                                             np.array([1.0, 0.0, 0.0]))

    def test_mean_anomaly_advances_with_mean_motion(self):
        elements = make_elements(mean_longitude=10.0, perihelion=0.0, period=360.0)
        self.assertAlmostEqual(OrbitalMechanics.mean_anomaly_at(elements, 0.0), 10.0)
        self.assertAlmostEqual(OrbitalMechanics.mean_anomaly_at(elements, 5.0), 15.0)
        self.assertAlmostEqual(OrbitalMechanics.mean_anomaly_at(elements, 355.0), 5.0)
        self.assertAlmostEqual(OrbitalMechanics.mean_anomaly_at(elements, -20.0), 350.0)

    def test_earth_near_one_au_at_epoch(self):
        position = self.mechanics.heliocentric_position(self.catalog.get('earth').orbital_elements, 0.0)
        self.assertAlmostEqual(position.distance, 1.0, delta=0.02)
        self.assertAlmostEqual(position.z, 0.0, places=4)

    def test_central_body_sits_at_origin(self):
        position = self.mechanics.heliocentric_position(None, 1000.0)
        self.assertEqual(position, HeliocentricPosition.origin())
        self.assertEqual(OrbitalMechanics.orbital_velocity(None, 0.0), 0.0)

    def test_position_is_idempotent(self):
        elements = self.catalog.get('jupiter').orbital_elements
        self.assertEqual(self.mechanics.heliocentric_position(elements, 4321.0),
                         self.mechanics.heliocentric_position(elements, 4321.0))

class TestOrbitalDynamics(unittest.TestCase):

    def setUp(self):
        self.mechanics = OrbitalMechanics()
        self.catalog = SolarSystemCatalog.from_config()

    def test_vis_viva_circular_speed(self):
        # sqrt(GM / 1 AU) is about 29.78 km/s
        self.assertAlmostEqual(OrbitalMechanics.orbital_velocity(make_elements(a=1.0), 1.0), 29.78, delta=0.01)

    def test_faster_at_perihelion_than_aphelion(self):
        elements = self.catalog.get('mercury').orbital_elements
        self.assertGreater(OrbitalMechanics.orbital_velocity(elements, elements.perihelion_au),
                           OrbitalMechanics.orbital_velocity(elements, elements.aphelion_au))

    def test_vis_viva_clamps_negative_values(self):
        # r beyond 2a would give v^2 < 0
        self.assertEqual(OrbitalMechanics.orbital_velocity(make_elements(a=1.0), 2.5), 0.0)

    def test_keplers_third_law_for_catalog(self):
        for body in self.catalog.planets():
            ratio = OrbitalMechanics.keplers_third_law_ratio(body.orbital_elements)
            self.assertAlmostEqual(ratio, 1.0, delta=0.01, msg=body.name)

    def test_astronomical_info(self):
        earth = self.catalog.get('earth')
        info = self.mechanics.astronomical_info(earth, 0.0)
        self.assertEqual(info.name, 'earth')
        self.assertEqual(info.distance_from_sun_au, info.position.distance)
        self.assertAlmostEqual(info.orbital_velocity_km_s, 30.0, delta=0.6)

    def test_orbital_period_years(self):
        self.assertAlmostEqual(OrbitalMechanics.orbital_period_years(make_elements(period=730.5)), 2.0)

class TestOrbitalElements(unittest.TestCase):

    def test_invalid_eccentricity_rejected(self):
        with self.assertRaises(ConfigurationError):
            make_elements(e=1.0)
        with self.assertRaises(ConfigurationError):
            make_elements(e=-0.1)

    def test_non_positive_axis_and_period_rejected(self):
        with self.assertRaises(ConfigurationError):
            make_elements(a=0.0)
        with self.assertRaises(ConfigurationError):
            make_elements(period=0.0)

    def test_derived_properties(self):
        elements = make_elements(a=2.0, e=0.25, node=30.0, perihelion=100.0, period=720.0)
        self.assertAlmostEqual(elements.argument_of_perihelion_deg, 70.0)
        self.assertAlmostEqual(elements.perihelion_au, 1.5)
        self.assertAlmostEqual(elements.aphelion_au, 2.5)
        self.assertAlmostEqual(elements.mean_motion_deg_per_day, 0.5)

class TestSolarSystemCatalog(unittest.TestCase):

    def setUp(self):
        self.catalog = SolarSystemCatalog.from_config()

    def test_catalog_contents_and_order(self):
        self.assertEqual(self.catalog.names(),
                         ['sun', 'mercury', 'venus', 'earth', 'mars', 'jupiter', 'saturn', 'uranus', 'neptune'])
        self.assertEqual(len(self.catalog.planets()), 8)
        self.assertTrue(self.catalog.central_body.is_central)
        self.assertEqual(self.catalog.central_body.name, 'sun')

    def test_lookup_is_case_insensitive(self):
        self.assertIs(self.catalog.get('EARTH'), self.catalog.get('earth'))
        self.assertIn('Mars', self.catalog)

    def test_unknown_body_raises_lookup_error(self):
        with self.assertRaises(CatalogLookupError) as ctx:
            self.catalog.get('vulcan')
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIn('vulcan', str(ctx.exception))

    def test_catalog_is_read_only(self):
        with self.assertRaises(TypeError):
            self.catalog.bodies['pluto'] = self.catalog.get('earth')

    def test_neptune_elements(self):
        elements = self.catalog.get('neptune').orbital_elements
        self.assertAlmostEqual(elements.semi_major_axis_au, 30.06896348)

    def test_missing_key_raises_configuration_error(self):
        data = {'sun': {'radius_km': 1.0, 'orbit': None},
                'rock': {'orbit': {'semi_major_axis_au': 1.0}}}
        with self.assertRaises(ConfigurationError):
            SolarSystemCatalog.from_config(data, 'sun')

    def test_central_body_with_orbit_rejected(self):
        orbit = {'semi_major_axis_au': 1.0, 'eccentricity': 0.0, 'inclination_deg': 0.0,
                 'longitude_of_ascending_node_deg': 0.0, 'longitude_of_perihelion_deg': 0.0,
                 'mean_longitude_deg': 0.0, 'orbital_period_days': 365.25}
        with self.assertRaises(ConfigurationError):
            SolarSystemCatalog.from_config({'sun': {'radius_km': 1.0, 'orbit': orbit}}, 'sun')

    def test_requires_exactly_one_central_body(self):
        earth = self.catalog.get('earth')
        with self.assertRaises(ConfigurationError):
            SolarSystemCatalog([earth])
        with self.assertRaises(ConfigurationError):
            SolarSystemCatalog([self.catalog.central_body, earth, earth])

if __name__ == '__main__':
    unittest.main(argv=['first-arg-is-ignored'], exit=False)
