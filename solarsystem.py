# solarsystem.py
import math
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Mapping, NamedTuple, Optional, Tuple

import numpy as np

from config import config, ConfigurationError, AU_KM, GM_SUN_KM3_S2, DAYS_PER_JULIAN_YEAR
from physics_utils import normalize_degrees, rotation_matrix_x, rotation_matrix_z


class CatalogLookupError(KeyError):
    """Raised when a body identity is not present in the catalog.

    This is the only error the orrery surfaces to its callers; numerical
    issues are recovered locally.
    """
    def __init__(self, body_id, known_bodies: Iterable[str] = ()):
        self.body_id = body_id
        self.known_bodies = tuple(known_bodies)
        super().__init__(f"Unknown celestial body '{body_id}'. Known bodies: {', '.join(self.known_bodies)}")

    def __str__(self):
        # KeyError.__str__ would repr() the message
        return self.args[0]


@dataclass(frozen=True)
class OrbitalElements:
    """Mean orbital elements of a body at the reference epoch.

    Angles are in degrees, the semi-major axis in AU and the period in days.
    The longitude of perihelion (ϖ) is Ω + ω; the argument of perihelion is
    derived from it rather than stored.
    """
    semi_major_axis_au: float
    eccentricity: float
    inclination_deg: float
    longitude_of_ascending_node_deg: float
    longitude_of_perihelion_deg: float
    mean_longitude_deg: float
    orbital_period_days: float

    def __post_init__(self):
        if not self.semi_major_axis_au > 0:
            raise ConfigurationError(f"Semi-major axis must be positive, got {self.semi_major_axis_au}.")
        if not (0.0 <= self.eccentricity < 1.0):
            raise ConfigurationError(f"Eccentricity must be >= 0 and < 1, got {self.eccentricity}.")
        if not self.orbital_period_days > 0:
            raise ConfigurationError(f"Orbital period must be positive, got {self.orbital_period_days}.")

    @property
    def argument_of_perihelion_deg(self) -> float:
        return self.longitude_of_perihelion_deg - self.longitude_of_ascending_node_deg

    @property
    def perihelion_au(self) -> float:
        return self.semi_major_axis_au * (1.0 - self.eccentricity)

    @property
    def aphelion_au(self) -> float:
        return self.semi_major_axis_au * (1.0 + self.eccentricity)

    @property
    def mean_motion_deg_per_day(self) -> float:
        return 360.0 / self.orbital_period_days


@dataclass(frozen=True)
class CelestialBody:
    name: str
    display_name: str
    radius_km: float
    rotation_period_hours: float  # negative for retrograde rotation
    axial_tilt_deg: float
    mass_kg: float
    color: Tuple[int, int, int]
    orbital_elements: Optional[OrbitalElements] = None  # None only for the central body

    @property
    def is_central(self) -> bool:
        return self.orbital_elements is None


@dataclass(frozen=True)
class HeliocentricPosition:
    """Ecliptic position of a body relative to the central body.

    Purely derived from (orbital elements, time); never cached by the engine.
    Anomalies are in degrees, normalized to [0, 360).
    """
    x: float
    y: float
    z: float
    distance: float
    mean_anomaly_deg: float = 0.0
    eccentric_anomaly_deg: float = 0.0
    true_anomaly_deg: float = 0.0

    @classmethod
    def origin(cls) -> 'HeliocentricPosition':
        return cls(0.0, 0.0, 0.0, 0.0)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)


class KeplerSolution(NamedTuple):
    eccentric_anomaly_rad: float
    iterations: int
    converged: bool


@dataclass(frozen=True)
class AstronomicalInfo:
    name: str
    days_since_epoch: float
    position: HeliocentricPosition
    distance_from_sun_au: float
    orbital_velocity_km_s: float


class OrbitalMechanics:
    """Two-body Keplerian orbit calculations around a fixed central body.

    Every method is a pure function of its arguments and the (read-only)
    configuration, so one instance can be shared across threads.
    """
    def __init__(self, tolerance: Optional[float] = None, max_iterations: Optional[int] = None):
        self.tolerance = config.Ephemeris.KEPLER_TOLERANCE if tolerance is None else tolerance
        self.max_iterations = config.Ephemeris.KEPLER_MAX_ITERATIONS if max_iterations is None else max_iterations

    def solve_kepler_equation_detailed(self, mean_anomaly_deg: float, e: float,
                                       tolerance: Optional[float] = None,
                                       max_iterations: Optional[int] = None) -> KeplerSolution:
        """
        Solves Kepler's Equation M = E - e * sin(E) for eccentric anomaly E using Newton-Raphson.

        The iteration starts from E0 = M (in radians, not wrapped) and stops as soon
        as the Newton step falls below `tolerance`. If the iteration budget runs out
        first, the last estimate is returned with `converged=False`; this is a
        degraded-accuracy condition, never an error.

        Args:
            mean_anomaly_deg: Mean anomaly in degrees (any real value).
            e: Eccentricity (0 <= e < 1).
            tolerance: Step size below which E is considered converged.
            max_iterations: Maximum number of Newton steps.

        Returns:
            KeplerSolution with E in radians, the number of steps taken and the
            convergence flag.
        """
        tolerance = self.tolerance if tolerance is None else tolerance
        max_iterations = self.max_iterations if max_iterations is None else max_iterations

        M_rad = math.radians(mean_anomaly_deg)
        E_rad = M_rad
        iterations = 0
        converged = False
        for iterations in range(1, max_iterations + 1):
            f_E = E_rad - e * math.sin(E_rad) - M_rad
            f_prime_E = 1.0 - e * math.cos(E_rad)  # >= 1 - e > 0 for elliptical orbits
            delta_E = f_E / f_prime_E
            E_rad -= delta_E
            if abs(delta_E) < tolerance:
                converged = True
                break

        if not converged and config.Debug.KEPLER_SOLVER:
            residual = E_rad - e * math.sin(E_rad) - M_rad
            logging.warning(f"Kepler's equation solver did not converge after {max_iterations} iterations "
                            f"for M={mean_anomaly_deg} deg, e={e}. Returning E={E_rad}, residual={residual:.3e}")
        return KeplerSolution(E_rad, iterations, converged)

    def solve_kepler_equation(self, mean_anomaly_deg: float, e: float,
                              tolerance: Optional[float] = None,
                              max_iterations: Optional[int] = None) -> float:
        """Eccentric anomaly in radians; see `solve_kepler_equation_detailed`."""
        return self.solve_kepler_equation_detailed(mean_anomaly_deg, e, tolerance, max_iterations).eccentric_anomaly_rad

    @staticmethod
    def true_anomaly(eccentric_anomaly_rad: float, e: float) -> float:
        """True anomaly in radians, in (-pi, pi]."""
        return 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(eccentric_anomaly_rad / 2.0),
                                math.sqrt(1.0 - e) * math.cos(eccentric_anomaly_rad / 2.0))

    @staticmethod
    def mean_anomaly_at(elements: OrbitalElements, days_since_epoch: float) -> float:
        """Mean anomaly in degrees [0, 360) after `days_since_epoch` days."""
        current_mean_longitude = elements.mean_longitude_deg + elements.mean_motion_deg_per_day * days_since_epoch
        return normalize_degrees(current_mean_longitude - elements.longitude_of_perihelion_deg)

    @staticmethod
    def ecliptic_rotation(elements: OrbitalElements) -> np.ndarray:
        """
        Rotation from the perifocal (orbital plane) frame to the ecliptic frame.

        Composed as Rz(Ω) · Rx(i) · Rz(ω): first the argument of perihelion
        within the orbital plane, then the inclination about the line of nodes,
        then the longitude of the ascending node.
        """
        node_rad = math.radians(elements.longitude_of_ascending_node_deg)
        inclination_rad = math.radians(elements.inclination_deg)
        perihelion_rad = math.radians(elements.argument_of_perihelion_deg)
        return rotation_matrix_z(node_rad) @ rotation_matrix_x(inclination_rad) @ rotation_matrix_z(perihelion_rad)

    def transform_to_ecliptic(self, x_orb: float, y_orb: float, elements: OrbitalElements) -> np.ndarray:
        """Ecliptic (x, y, z) in AU for orbital-plane coordinates (x_orb, y_orb)."""
        return self.ecliptic_rotation(elements) @ np.array([x_orb, y_orb, 0.0], dtype=np.float64)

    def position_from_mean_anomaly(self, elements: OrbitalElements, mean_anomaly_deg: float) -> HeliocentricPosition:
        """
        Heliocentric ecliptic position for an explicit mean anomaly.

        This is the time-independent core of the position calculation; the orbit
        path sampler calls it directly with evenly spaced mean anomalies.
        """
        mean_anomaly_deg = normalize_degrees(mean_anomaly_deg)
        e = elements.eccentricity

        E_rad = self.solve_kepler_equation(mean_anomaly_deg, e)
        nu_rad = self.true_anomaly(E_rad, e)

        r_au = elements.semi_major_axis_au * (1.0 - e * math.cos(E_rad))
        x_orb = r_au * math.cos(nu_rad)
        y_orb = r_au * math.sin(nu_rad)

        x, y, z = self.transform_to_ecliptic(x_orb, y_orb, elements)

        if config.Debug.ORBITAL_MECHANICS:
            logging.debug(f"M={mean_anomaly_deg:.4f} E={math.degrees(E_rad):.4f} nu={math.degrees(nu_rad):.4f} "
                          f"r={r_au:.6f} AU -> ({x:.6f}, {y:.6f}, {z:.6f})")

        return HeliocentricPosition(
            x=float(x), y=float(y), z=float(z), distance=r_au,
            mean_anomaly_deg=mean_anomaly_deg,
            eccentric_anomaly_deg=normalize_degrees(math.degrees(E_rad)),
            true_anomaly_deg=normalize_degrees(math.degrees(nu_rad)),
        )

    def heliocentric_position(self, elements: Optional[OrbitalElements], days_since_epoch: float) -> HeliocentricPosition:
        """Position after `days_since_epoch` days. The central body (no elements) sits at the origin."""
        if elements is None:
            return HeliocentricPosition.origin()
        return self.position_from_mean_anomaly(elements, self.mean_anomaly_at(elements, days_since_epoch))

    @staticmethod
    def orbital_velocity(elements: Optional[OrbitalElements], distance_au: float) -> float:
        """
        Instantaneous orbital speed in km/s from the vis-viva equation.

        v^2 = GM_sun * (2/r - 1/a), with r and a converted from AU to km.
        Round-off that would make v^2 slightly negative is clamped to zero.
        """
        if elements is None or distance_au <= 0:
            return 0.0
        semi_major_axis_km = elements.semi_major_axis_au * AU_KM
        distance_km = distance_au * AU_KM
        velocity_squared = GM_SUN_KM3_S2 * (2.0 / distance_km - 1.0 / semi_major_axis_km)
        return math.sqrt(max(0.0, velocity_squared))

    @staticmethod
    def orbital_period_years(elements: OrbitalElements) -> float:
        return elements.orbital_period_days / DAYS_PER_JULIAN_YEAR

    @classmethod
    def keplers_third_law_ratio(cls, elements: OrbitalElements) -> float:
        """P^2 / a^3 with P in Julian years and a in AU; 1.0 for a perfect heliocentric orbit."""
        return cls.orbital_period_years(elements) ** 2 / elements.semi_major_axis_au ** 3

    def astronomical_info(self, body: CelestialBody, days_since_epoch: float) -> AstronomicalInfo:
        position = self.heliocentric_position(body.orbital_elements, days_since_epoch)
        return AstronomicalInfo(
            name=body.name,
            days_since_epoch=days_since_epoch,
            position=position,
            distance_from_sun_au=position.distance,
            orbital_velocity_km_s=self.orbital_velocity(body.orbital_elements, position.distance),
        )


class SolarSystemCatalog:
    """Immutable map of celestial bodies, built once at startup.

    The catalog is read-only after construction: `bodies` is a
    `MappingProxyType` and every entry is a frozen dataclass, so it can be
    shared by reference between the scaling, path and visibility components
    without locking.

    Lookups are case-insensitive. Unknown names raise `CatalogLookupError`.
    """
    def __init__(self, bodies: Iterable[CelestialBody]):
        ordered: Dict[str, CelestialBody] = {}
        for body in bodies:
            key = body.name.lower()
            if key in ordered:
                raise ConfigurationError(f"Duplicate celestial body '{body.name}' in catalog.")
            ordered[key] = body

        central = [body for body in ordered.values() if body.is_central]
        if len(central) != 1:
            raise ConfigurationError(f"Catalog must contain exactly one central body, found {len(central)}.")

        self._central_body = central[0]
        self._bodies = MappingProxyType(ordered)

    @classmethod
    def from_config(cls, planet_data: Optional[Mapping[str, Mapping]] = None,
                    central_body: Optional[str] = None) -> 'SolarSystemCatalog':
        """
        Builds the catalog from `config.SolarSystem.PLANET_DATA`.

        Raises:
            ConfigurationError: If an entry is missing a required key, the central
                body has orbital elements, or any other body lacks them.
        """
        planet_data = config.SolarSystem.PLANET_DATA if planet_data is None else planet_data
        central_body = config.SolarSystem.CENTRAL_BODY if central_body is None else central_body

        bodies: List[CelestialBody] = []
        try:
            for name, data in planet_data.items():
                orbit = data.get('orbit')
                if name == central_body and orbit is not None:
                    raise ConfigurationError(f"Central body '{name}' must not define orbital elements.")
                if name != central_body and orbit is None:
                    raise ConfigurationError(f"Celestial body '{name}' must define orbital elements.")

                elements = None
                if orbit is not None:
                    elements = OrbitalElements(
                        semi_major_axis_au=float(orbit['semi_major_axis_au']),
                        eccentricity=float(orbit['eccentricity']),
                        inclination_deg=float(orbit['inclination_deg']),
                        longitude_of_ascending_node_deg=float(orbit['longitude_of_ascending_node_deg']),
                        longitude_of_perihelion_deg=float(orbit['longitude_of_perihelion_deg']),
                        mean_longitude_deg=float(orbit['mean_longitude_deg']),
                        orbital_period_days=float(orbit['orbital_period_days']),
                    )
                bodies.append(CelestialBody(
                    name=name.lower(),
                    display_name=data.get('display_name', name.capitalize()),
                    radius_km=float(data['radius_km']),
                    rotation_period_hours=float(data.get('rotation_period_hours', 24.0)),
                    axial_tilt_deg=float(data.get('axial_tilt_deg', 0.0)),
                    mass_kg=float(data.get('mass_kg', 0.0)),
                    color=tuple(data.get('color', (255, 255, 255))),
                    orbital_elements=elements,
                ))
        except KeyError as e_key:
            logging.critical(f"Missing key during catalog construction: {e_key}. Check PLANET_DATA structure.", exc_info=True)
            raise ConfigurationError(f"Missing key in PLANET_DATA: {e_key}")

        catalog = cls(bodies)
        logging.info(f"SolarSystemCatalog built with {len(catalog)} celestial bodies.")
        return catalog

    @property
    def bodies(self) -> Mapping[str, CelestialBody]:
        return self._bodies

    @property
    def central_body(self) -> CelestialBody:
        return self._central_body

    def get(self, body_id: str) -> CelestialBody:
        try:
            return self._bodies[str(body_id).lower()]
        except KeyError:
            raise CatalogLookupError(body_id, self._bodies.keys()) from None

    def names(self) -> List[str]:
        return list(self._bodies.keys())

    def planets(self) -> List[CelestialBody]:
        return [body for body in self._bodies.values() if not body.is_central]

    def __contains__(self, body_id) -> bool:
        return str(body_id).lower() in self._bodies

    def __iter__(self) -> Iterator[CelestialBody]:
        return iter(self._bodies.values())

    def __len__(self) -> int:
        return len(self._bodies)
