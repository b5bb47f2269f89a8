# config.py
import logging

# Configure basic logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(module)s - %(message)s')

# Fundamental Physical Constants (used across different config sections)
AU_KM = 149597870.7  # Astronomical Unit in kilometers
GM_SUN_KM3_S2 = 1.32712442018e11  # Standard gravitational parameter of the Sun
SECONDS_PER_DAY = 86400.0
DAYS_PER_JULIAN_YEAR = 365.25
J2000_EPOCH_JD = 2451545.0  # Julian Date of the J2000.0 epoch
UNIX_EPOCH_JD = 2440587.5  # Julian Date of 1970-01-01T00:00:00Z
ARCSECONDS_PER_RADIAN = 206265.0

# Scene Scale Constants
KM_PER_SCENE_UNIT = 1.0e7  # One scene unit is ten million kilometers at true scale
TRUE_SCALE_UNITS_PER_AU = AU_KM / KM_PER_SCENE_UNIT
TRUE_SCALE_UNITS_PER_KM = 1.0 / KM_PER_SCENE_UNIT

class ConfigurationError(Exception):
    """Custom exception for orrery configuration errors.

    Raised by `SimulationConfig.validate()` and by catalog construction when
    settings are invalid, inconsistent, or missing, which would otherwise
    produce plausible-looking but astronomically wrong output.

    Attributes:
        message (str): A human-readable explanation of the configuration error.
                       This is the first argument passed to the exception constructor.
    """
    pass

class SimulationConfig:
    """Centralized, hierarchical configuration for the orrery engine.

    All parameters live in nested static classes (`SimulationConfig.Ephemeris`,
    `SimulationConfig.SolarSystem`, `SimulationConfig.Scaling`, ...). An instance
    named `config` is created at the end of this module and is importable via
    `from config import config`.

    The constructor invokes `validate()`, which checks every section for
    logical consistency and raises `ConfigurationError` on the first problem
    found, so a broken catalog or scaling profile fails at import time rather
    than mid-frame.

    Example Usage:
        >>> from config import config
        >>> print(f"Kepler tolerance: {config.Ephemeris.KEPLER_TOLERANCE}")
        >>> print(config.SolarSystem.PLANET_DATA['earth']['orbit']['semi_major_axis_au'])
    """

    # --- Ephemeris Configuration ---
    class Ephemeris:
        """Time reference and Kepler solver settings.

        Attributes:
            REFERENCE_EPOCH_JD (float): Julian Date all mean longitudes are referred to.
            KEPLER_TOLERANCE (float): Newton-Raphson step size below which the
                                      eccentric anomaly is considered converged.
            KEPLER_MAX_ITERATIONS (int): Iteration budget for the solver. When it is
                                         exhausted the last estimate is returned.
        """
        REFERENCE_EPOCH_JD = J2000_EPOCH_JD
        KEPLER_TOLERANCE = 1e-6
        KEPLER_MAX_ITERATIONS = 20

    # --- Solar System Data ---
    class SolarSystem:
        """Catalog of celestial bodies.

        Orbital elements are the J2000.0 mean elements (JPL approximate
        positions table): semi-major axis, eccentricity, inclination, longitude
        of the ascending node, longitude of perihelion and mean longitude at
        epoch. Physical properties come from NASA/IAU fact sheets.

        Attributes:
            CENTRAL_BODY (str): Key of the body pinned at the origin. It carries
                                no orbital elements.
            PLANET_DATA (Dict[str, Dict]): Body key -> physical and orbital parameters.
                                           Insertion order is catalog order.
        """
        CENTRAL_BODY = 'sun'

        PLANET_DATA = {
            'sun': {
                'display_name': 'Sun', 'radius_km': 696340.0, 'mass_kg': 1.989e30,
                'rotation_period_hours': 609.12, 'axial_tilt_deg': 7.25,
                'color': (255, 255, 0), 'orbit': None
            },
            'mercury': {
                'display_name': 'Mercury', 'radius_km': 2439.7, 'mass_kg': 3.301e23,
                'rotation_period_hours': 1407.6, 'axial_tilt_deg': 0.034,
                'color': (140, 120, 83),
                'orbit': {
                    'semi_major_axis_au': 0.38709893, 'eccentricity': 0.20563069, 'inclination_deg': 7.00487,
                    'longitude_of_ascending_node_deg': 48.33167, 'longitude_of_perihelion_deg': 77.45645,
                    'mean_longitude_deg': 252.25084, 'orbital_period_days': 87.969
                }
            },
            'venus': {
                'display_name': 'Venus', 'radius_km': 6051.8, 'mass_kg': 4.867e24,
                'rotation_period_hours': -5832.5, 'axial_tilt_deg': 177.4,  # retrograde
                'color': (255, 198, 73),
                'orbit': {
                    'semi_major_axis_au': 0.72333199, 'eccentricity': 0.00677323, 'inclination_deg': 3.39471,
                    'longitude_of_ascending_node_deg': 76.68069, 'longitude_of_perihelion_deg': 131.53298,
                    'mean_longitude_deg': 181.97973, 'orbital_period_days': 224.701
                }
            },
            'earth': {
                'display_name': 'Earth', 'radius_km': 6371.0, 'mass_kg': 5.972e24,
                'rotation_period_hours': 23.93, 'axial_tilt_deg': 23.44,
                'color': (107, 147, 214),
                'orbit': {
                    'semi_major_axis_au': 1.00000011, 'eccentricity': 0.01671022, 'inclination_deg': 0.00005,
                    'longitude_of_ascending_node_deg': -11.26064, 'longitude_of_perihelion_deg': 102.94719,
                    'mean_longitude_deg': 100.46435, 'orbital_period_days': 365.256
                }
            },
            'mars': {
                'display_name': 'Mars', 'radius_km': 3389.5, 'mass_kg': 6.39e23,
                'rotation_period_hours': 24.62, 'axial_tilt_deg': 25.19,
                'color': (205, 92, 92),
                'orbit': {
                    'semi_major_axis_au': 1.52366231, 'eccentricity': 0.09341233, 'inclination_deg': 1.85061,
                    'longitude_of_ascending_node_deg': 49.57854, 'longitude_of_perihelion_deg': 336.04084,
                    'mean_longitude_deg': 355.45332, 'orbital_period_days': 686.980
                }
            },
            'jupiter': {
                'display_name': 'Jupiter', 'radius_km': 69911.0, 'mass_kg': 1.898e27,
                'rotation_period_hours': 9.93, 'axial_tilt_deg': 3.13,
                'color': (216, 202, 157),
                'orbit': {
                    'semi_major_axis_au': 5.20336301, 'eccentricity': 0.04839266, 'inclination_deg': 1.30530,
                    'longitude_of_ascending_node_deg': 100.55615, 'longitude_of_perihelion_deg': 14.75385,
                    'mean_longitude_deg': 34.40438, 'orbital_period_days': 4332.589
                }
            },
            'saturn': {
                'display_name': 'Saturn', 'radius_km': 58232.0, 'mass_kg': 5.683e26,
                'rotation_period_hours': 10.66, 'axial_tilt_deg': 26.73,
                'color': (250, 178, 123),
                'orbit': {
                    'semi_major_axis_au': 9.53707032, 'eccentricity': 0.05415060, 'inclination_deg': 2.48446,
                    'longitude_of_ascending_node_deg': 113.71504, 'longitude_of_perihelion_deg': 92.43194,
                    'mean_longitude_deg': 49.94432, 'orbital_period_days': 10759.22
                }
            },
            'uranus': {
                'display_name': 'Uranus', 'radius_km': 25362.0, 'mass_kg': 8.681e25,
                'rotation_period_hours': -17.24, 'axial_tilt_deg': 97.77,  # retrograde, on its side
                'color': (79, 208, 231),
                'orbit': {
                    'semi_major_axis_au': 19.19126393, 'eccentricity': 0.04716771, 'inclination_deg': 0.76986,
                    'longitude_of_ascending_node_deg': 74.22988, 'longitude_of_perihelion_deg': 170.96424,
                    'mean_longitude_deg': 313.23218, 'orbital_period_days': 30685.4
                }
            },
            'neptune': {
                'display_name': 'Neptune', 'radius_km': 24622.0, 'mass_kg': 1.024e26,
                'rotation_period_hours': 16.11, 'axial_tilt_deg': 28.32,
                'color': (75, 112, 221),
                'orbit': {
                    'semi_major_axis_au': 30.06896348, 'eccentricity': 0.00858587, 'inclination_deg': 1.76917,
                    'longitude_of_ascending_node_deg': 131.72169, 'longitude_of_perihelion_deg': 44.97135,
                    'mean_longitude_deg': 304.88003, 'orbital_period_days': 60189.0
                }
            }
        }

    # --- Scaling Configuration ---
    class Scaling:
        """Visualization scaling profiles.

        Each profile maps physical units to scene units. Distances are scaled
        uniformly (`distance_scale_factor`, scene units per AU). Radii are first
        scaled by `base_size_scale_factor` (scene units per km); a radius that
        lands below `minimum_radius_floor` is enhanced toward the floor, but by
        no more than `maximum_enhancement_factor`. The central body uses its own
        size factor and floor because it is two orders of magnitude larger than
        any planet.

        Attributes:
            DEFAULT_PROFILE (str): Profile key used when none is selected.
            PROFILES (Dict[str, Dict[str, float]]): Profile key -> parameters.
        """
        DEFAULT_PROFILE = 'exploration'

        PROFILES = {
            'true_scale': {
                'distance_scale_factor': TRUE_SCALE_UNITS_PER_AU,
                'base_size_scale_factor': TRUE_SCALE_UNITS_PER_KM,
                'minimum_radius_floor': 0.0,
                'maximum_enhancement_factor': 1.0,  # planets may be sub-pixel
                'central_size_scale_factor': TRUE_SCALE_UNITS_PER_KM,
                'central_minimum_radius_floor': 0.0
            },
            'exploration': {
                'distance_scale_factor': 40.0,
                'base_size_scale_factor': 1.0e-5,
                'minimum_radius_floor': 0.8,
                'maximum_enhancement_factor': 50.0,
                'central_size_scale_factor': 1.0e-5,
                'central_minimum_radius_floor': 4.0
            },
            'artistic': {
                'distance_scale_factor': 20.0,
                'base_size_scale_factor': 5.0e-5,
                'minimum_radius_floor': 1.0,
                'maximum_enhancement_factor': 10.0,
                'central_size_scale_factor': 5.0e-6,
                'central_minimum_radius_floor': 3.0
            }
        }

    # --- Orbit Path Configuration ---
    class OrbitPath:
        """Orbit polyline sampling and level-of-detail settings.

        Attributes:
            BASE_SEGMENTS (int): Segment count at HIGH level of detail.
            LOW_DIVISOR (int), LOW_MIN_SEGMENTS (int): LOW uses max(LOW_MIN, BASE / LOW_DIVISOR).
            MEDIUM_DIVISOR (int), MEDIUM_MIN_SEGMENTS (int): Same rule for MEDIUM.
            ECCENTRICITY_THRESHOLD (float): Orbits more eccentric than this get
                                            (1 + e) times more segments.
            MAX_SEGMENTS (int): Hard cap on segments per orbit.
            LOD_MEDIUM_DISTANCE (float): Camera distance (scene units) beyond which MEDIUM is used.
            LOD_LOW_DISTANCE (float): Camera distance beyond which LOW is used.
            FADE_START_DISTANCE (float), FADE_END_DISTANCE (float): Camera distance range
                                            over which orbit lines fade.
            FADE_FLOOR_FRACTION (float): Fraction of the base opacity left at FADE_END_DISTANCE.
            DEFAULT_OPACITY (float), MIN_OPACITY (float), MAX_OPACITY (float): Opacity bounds.
        """
        BASE_SEGMENTS = 256
        LOW_DIVISOR = 4
        LOW_MIN_SEGMENTS = 32
        MEDIUM_DIVISOR = 2
        MEDIUM_MIN_SEGMENTS = 64
        ECCENTRICITY_THRESHOLD = 0.1
        MAX_SEGMENTS = 512

        LOD_MEDIUM_DISTANCE = 100.0
        LOD_LOW_DISTANCE = 1000.0

        FADE_START_DISTANCE = 50.0
        FADE_END_DISTANCE = 500.0
        FADE_FLOOR_FRACTION = 0.3
        DEFAULT_OPACITY = 0.6
        MIN_OPACITY = 0.1
        MAX_OPACITY = 0.8

    # --- Visibility Configuration ---
    class Visibility:
        """Apparent magnitude and visibility classification.

        Attributes:
            BASE_MAGNITUDES (Dict[str, float]): Magnitude of each body at 1 AU from
                                                both the Sun and the observer.
            DEFAULT_BASE_MAGNITUDE (float): Used for bodies missing from BASE_MAGNITUDES.
            TIER_THRESHOLDS (List[Tuple[str, float]]): Ordered (tier, upper magnitude bound)
                                                       pairs; anything dimmer is 'invisible'.
            TIER_RENDER_SCALE (Dict[str, float]): Render scale per tier under true scale.
            PHASE_PENALTY_START_DEG (float): Phase angle above which brightness is penalized.
            PHASE_PENALTY_MAG_PER_90_DEG (float): Magnitude penalty per 90 degrees beyond the start.
            ENHANCED_SCALE_REFERENCE_AU (float): Enhanced profiles use clamp(ref / distance).
            ENHANCED_SCALE_MIN (float), ENHANCED_SCALE_MAX (float): Bounds for that clamp.
            MIN_DISTANCE_AU (float): Distances are clamped to this before taking logarithms.
            CENTRAL_BODY_MAGNITUDE_AT_1AU (float): Self-luminous central body magnitude at 1 AU
                                                   from the observer.
        """
        BASE_MAGNITUDES = {
            'mercury': -0.42,
            'venus': -4.40,
            'earth': -3.86,
            'mars': -2.94,
            'jupiter': -2.94,
            'saturn': -0.55,
            'uranus': 5.68,
            'neptune': 7.84
        }
        DEFAULT_BASE_MAGNITUDE = 10.0

        TIER_THRESHOLDS = [
            ('bright', 1.0),
            ('visible', 4.0),
            ('faint', 6.5),   # naked-eye limit
            ('telescopic', 10.0)
        ]
        TIER_RENDER_SCALE = {
            'bright': 1.0,
            'visible': 0.8,
            'faint': 0.3,
            'telescopic': 0.1,
            'invisible': 0.0
        }

        PHASE_PENALTY_START_DEG = 90.0
        PHASE_PENALTY_MAG_PER_90_DEG = 2.0

        ENHANCED_SCALE_REFERENCE_AU = 10.0
        ENHANCED_SCALE_MIN = 0.1
        ENHANCED_SCALE_MAX = 1.0

        MIN_DISTANCE_AU = 1e-9

        CENTRAL_BODY_MAGNITUDE_AT_1AU = -26.74  # the Sun seen from 1 AU

    # --- Visualization Configuration ---
    class Visualization:
        """Configuration for the pygame orrery viewer.

        Attributes:
            SCREEN_WIDTH_PX (int), SCREEN_HEIGHT_PX (int): Window size.
            FPS (int): Target frames per second.
            DAYS_PER_SECOND (float): Simulated days advanced per wall-clock second at 1x.
            TIME_RATE_STEP (float): Multiplier applied by the time-acceleration keys.
            MIN_ZOOM (float), MAX_ZOOM (float): Camera zoom clamp.
            MIN_BODY_RADIUS_PX (int): Bodies are never drawn smaller than this.
            BACKGROUND_COLOR, ORBIT_COLOR, LABEL_COLOR (Tuple[int, int, int]): RGB colors.
            DEFAULT_OBSERVER (str): Body whose viewpoint drives the visibility labels.
        """
        SCREEN_WIDTH_PX = 1400
        SCREEN_HEIGHT_PX = 900
        FPS = 60
        DAYS_PER_SECOND = 10.0
        TIME_RATE_STEP = 2.0
        MIN_ZOOM = 0.01
        MAX_ZOOM = 500.0
        MIN_BODY_RADIUS_PX = 1
        BACKGROUND_COLOR = (5, 5, 15)
        ORBIT_COLOR = (68, 68, 68)
        LABEL_COLOR = (220, 220, 220)
        DEFAULT_OBSERVER = 'earth'

    # --- Monitoring Configuration ---
    class Monitoring:
        """Configuration for system resource monitoring.

        Attributes:
            MEMORY_USAGE_WARN_MB (int): Memory usage threshold in Megabytes. If exceeded,
                                        a warning is logged.
            MEMORY_CHECK_INTERVAL_FRAMES (int): Frequency (in rendered frames) at which
                                                memory usage is checked.
        """
        MEMORY_USAGE_WARN_MB = 1024
        MEMORY_CHECK_INTERVAL_FRAMES = 300

    # --- Debug Configuration ---
    class Debug:
        """Configuration for debugging features and logging verbosity.

        Attributes:
            ORBITAL_MECHANICS (bool): Verbose logging of position calculations.
            KEPLER_SOLVER (bool): Log a warning whenever the solver exhausts its
                                  iteration budget without converging.
            ORBIT_PATH (bool): Log segment counts when orbit paths are sampled.
            CONFIG_VALIDATION (bool): Log a message once validation succeeds.
        """
        ORBITAL_MECHANICS = False
        KEPLER_SOLVER = True
        ORBIT_PATH = False
        CONFIG_VALIDATION = True

    def __init__(self):
        """Initializes the `SimulationConfig` instance and validates it.

        Raises:
            ConfigurationError: If `self.validate()` detects any issue with the
                                configuration values.
        """
        self.validate()

    def validate(self):
        """Performs comprehensive validation of all configuration settings.

        Checks:
        -   **Global Scales**: `AU_KM`, `GM_SUN_KM3_S2` and the scene unit are positive.
        -   **Ephemeris**: tolerance positive, iteration budget a positive integer.
        -   **SolarSystem**: the central body exists and has no orbit; every other
            body has an orbit with `a > 0`, `0 <= e < 1`, inclination in [0, 180]
            and a positive period.
        -   **Scaling**: the three profiles exist, factors are positive, floors are
            non-negative, enhancement caps are >= 1 and exactly 1 for true scale.
        -   **OrbitPath**: segment settings are positive and consistent.
        -   **Visibility**: thresholds strictly increase and every tier has a render scale.
        -   **Visualization**: screen size, FPS and zoom bounds are positive.

        Raises:
            ConfigurationError: If any check fails.
        """
        # Global Scales
        if AU_KM <= 0 or GM_SUN_KM3_S2 <= 0 or KM_PER_SCENE_UNIT <= 0:
            raise ConfigurationError("AU_KM, GM_SUN_KM3_S2 and KM_PER_SCENE_UNIT must be positive.")

        # Ephemeris
        if self.Ephemeris.KEPLER_TOLERANCE <= 0:
            raise ConfigurationError("Ephemeris.KEPLER_TOLERANCE must be positive.")
        if not isinstance(self.Ephemeris.KEPLER_MAX_ITERATIONS, int) or self.Ephemeris.KEPLER_MAX_ITERATIONS <= 0:
            raise ConfigurationError("Ephemeris.KEPLER_MAX_ITERATIONS must be a positive integer.")

        # Solar System Data Validation
        planet_data = self.SolarSystem.PLANET_DATA
        central = self.SolarSystem.CENTRAL_BODY
        if central not in planet_data:
            raise ConfigurationError(f"Central body '{central}' missing from SolarSystem.PLANET_DATA.")
        if planet_data[central].get('orbit') is not None:
            raise ConfigurationError(f"Central body '{central}' must not define orbital elements.")

        for name, data in planet_data.items():
            if name != name.lower():
                raise ConfigurationError(f"Catalog key '{name}' must be lower case.")
            if data.get('radius_km', -1.0) < 0:
                raise ConfigurationError(f"Radius of celestial body '{name}' cannot be negative.")
            if data.get('mass_kg', -1.0) < 0:
                raise ConfigurationError(f"Mass of celestial body '{name}' cannot be negative.")
            if name == central:
                continue
            orbit = data.get('orbit')
            if orbit is None:
                raise ConfigurationError(f"Celestial body '{name}' (which is not the central body) must define an orbit.")
            if orbit.get('semi_major_axis_au', 0.0) <= 0:
                raise ConfigurationError(f"Semi-major axis of celestial body '{name}' must be positive.")
            if not (0.0 <= orbit.get('eccentricity', -1.0) < 1.0):
                raise ConfigurationError(f"Eccentricity of celestial body '{name}' ({orbit.get('eccentricity')}) must be >= 0 and < 1.")
            if not (0.0 <= orbit.get('inclination_deg', -1.0) <= 180.0):
                raise ConfigurationError(f"Inclination of '{name}' ({orbit.get('inclination_deg')}) must be between 0 and 180 degrees inclusive.")
            if orbit.get('orbital_period_days', 0.0) <= 0:
                raise ConfigurationError(f"Orbital period of celestial body '{name}' must be positive.")

        # Scaling
        profiles = self.Scaling.PROFILES
        for key in ('true_scale', 'exploration', 'artistic'):
            if key not in profiles:
                raise ConfigurationError(f"Scaling profile '{key}' is missing from Scaling.PROFILES.")
        if self.Scaling.DEFAULT_PROFILE not in profiles:
            raise ConfigurationError(f"Scaling.DEFAULT_PROFILE '{self.Scaling.DEFAULT_PROFILE}' is not a known profile.")
        for key, params in profiles.items():
            for factor in ('distance_scale_factor', 'base_size_scale_factor', 'central_size_scale_factor'):
                if params.get(factor, 0.0) <= 0:
                    raise ConfigurationError(f"Scaling.PROFILES['{key}']['{factor}'] must be positive.")
            for floor in ('minimum_radius_floor', 'central_minimum_radius_floor'):
                if params.get(floor, -1.0) < 0:
                    raise ConfigurationError(f"Scaling.PROFILES['{key}']['{floor}'] cannot be negative.")
            if params.get('maximum_enhancement_factor', 0.0) < 1.0:
                raise ConfigurationError(f"Scaling.PROFILES['{key}']['maximum_enhancement_factor'] must be >= 1.")
        if profiles['true_scale']['maximum_enhancement_factor'] != 1.0:
            raise ConfigurationError("The true_scale profile must never enhance radii (maximum_enhancement_factor == 1).")

        # Orbit Path
        op = self.OrbitPath
        if min(op.BASE_SEGMENTS, op.LOW_DIVISOR, op.LOW_MIN_SEGMENTS,
               op.MEDIUM_DIVISOR, op.MEDIUM_MIN_SEGMENTS, op.MAX_SEGMENTS) <= 0:
            raise ConfigurationError("OrbitPath segment settings must be positive.")
        if op.MAX_SEGMENTS < op.BASE_SEGMENTS:
            raise ConfigurationError("OrbitPath.MAX_SEGMENTS must be >= OrbitPath.BASE_SEGMENTS.")
        if not (0 < op.LOD_MEDIUM_DISTANCE < op.LOD_LOW_DISTANCE):
            raise ConfigurationError("OrbitPath LOD distances must satisfy 0 < MEDIUM < LOW.")
        if not (0 <= op.FADE_START_DISTANCE < op.FADE_END_DISTANCE):
            raise ConfigurationError("OrbitPath fade distances must satisfy 0 <= START < END.")
        if not (0.0 <= op.MIN_OPACITY <= op.MAX_OPACITY <= 1.0):
            raise ConfigurationError("OrbitPath opacities must satisfy 0 <= MIN_OPACITY <= MAX_OPACITY <= 1.")

        # Visibility
        bounds = [bound for _, bound in self.Visibility.TIER_THRESHOLDS]
        if any(later <= earlier for earlier, later in zip(bounds, bounds[1:])):
            raise ConfigurationError(f"Visibility.TIER_THRESHOLDS must be strictly increasing. Got: {bounds}")
        tier_names = [tier for tier, _ in self.Visibility.TIER_THRESHOLDS] + ['invisible']
        missing = [tier for tier in tier_names if tier not in self.Visibility.TIER_RENDER_SCALE]
        if missing:
            raise ConfigurationError(f"Visibility.TIER_RENDER_SCALE is missing tiers: {missing}")
        if not (0 < self.Visibility.ENHANCED_SCALE_MIN <= self.Visibility.ENHANCED_SCALE_MAX):
            raise ConfigurationError("Visibility enhanced scale bounds must satisfy 0 < MIN <= MAX.")
        if self.Visibility.MIN_DISTANCE_AU <= 0:
            raise ConfigurationError("Visibility.MIN_DISTANCE_AU must be positive.")

        # Visualization
        if self.Visualization.SCREEN_WIDTH_PX <= 0 or self.Visualization.SCREEN_HEIGHT_PX <= 0:
            raise ConfigurationError("Visualization screen dimensions (SCREEN_WIDTH_PX, SCREEN_HEIGHT_PX) must be positive.")
        if self.Visualization.FPS <= 0:
            raise ConfigurationError("Visualization.FPS must be positive.")
        if not (0 < self.Visualization.MIN_ZOOM < self.Visualization.MAX_ZOOM):
            raise ConfigurationError("Visualization zoom bounds must satisfy 0 < MIN_ZOOM < MAX_ZOOM.")

        if self.Debug.CONFIG_VALIDATION:
            logging.info("Configuration validated successfully.")


# --- Instantiate the configuration ---
# This makes the config object available for import and runs validation.
# e.g., from config import config
try:
    config = SimulationConfig()
except ConfigurationError as e:
    logging.error(f"FATAL CONFIGURATION ERROR: {e}", exc_info=True)
    raise
