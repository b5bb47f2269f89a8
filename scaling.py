# scaling.py
import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from config import config, ConfigurationError
from solarsystem import CelestialBody, HeliocentricPosition


@dataclass(frozen=True)
class ProfileParameters:
    distance_scale_factor: float  # scene units per AU
    base_size_scale_factor: float  # scene units per km
    minimum_radius_floor: float
    maximum_enhancement_factor: float
    central_size_scale_factor: float
    central_minimum_radius_floor: float


class ScalingProfile(Enum):
    """The three mutually exclusive ways of mapping physical units to scene units.

    TRUE_SCALE keeps sizes and distances on one common scale (planets may be
    sub-pixel). EXPLORATION and ARTISTIC compress distances and enhance small
    radii so every body stays visible.
    """
    TRUE_SCALE = 'true_scale'
    EXPLORATION = 'exploration'
    ARTISTIC = 'artistic'

    @classmethod
    def from_name(cls, name: str) -> 'ScalingProfile':
        """
        Parses a user-facing profile name.

        Accepts 'true-scale' (or 'true_scale', 'realistic'), 'exploration' and
        'artistic', case-insensitively.

        Raises:
            ValueError: If the name matches no profile.
        """
        key = str(name).strip().lower().replace('-', '_')
        if key == 'realistic':
            key = cls.TRUE_SCALE.value
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown scaling profile '{name}'. "
                             f"Expected one of: true-scale, realistic, exploration, artistic.") from None

    @classmethod
    def default(cls) -> 'ScalingProfile':
        return cls(config.Scaling.DEFAULT_PROFILE)

    @property
    def parameters(self) -> ProfileParameters:
        try:
            return ProfileParameters(**config.Scaling.PROFILES[self.value])
        except (KeyError, TypeError) as e:
            logging.error(f"Scaling profile '{self.value}' is misconfigured: {e}", exc_info=True)
            raise ConfigurationError(f"Scaling profile '{self.value}' is misconfigured: {e}")

    @property
    def enhances_radii(self) -> bool:
        return self is not ScalingProfile.TRUE_SCALE


class ScalingEngine:
    """
    Maps physical radii (km) and distances (AU) to scene units under one profile.

    An engine is immutable: switching profile means building a new engine and
    recomputing every body, never patching values scaled under the old profile.

    Radius enhancement:
        base = radius_km * size_factor
        enhancement = min(max_enhancement, floor / base) if 0 < base < floor else 1
        scaled = base * enhancement

    so a body that already meets the floor is drawn at exactly its base size,
    and ordering by physical radius is preserved (non-strictly, because the cap
    may collapse very small bodies onto the same value).
    """
    def __init__(self, profile: ScalingProfile = ScalingProfile.EXPLORATION):
        if not isinstance(profile, ScalingProfile):
            profile = ScalingProfile.from_name(profile)
        self._profile = profile
        self._parameters = profile.parameters

    @property
    def profile(self) -> ScalingProfile:
        return self._profile

    @property
    def parameters(self) -> ProfileParameters:
        return self._parameters

    @property
    def distance_scale_factor(self) -> float:
        return self._parameters.distance_scale_factor

    def scaled_distance(self, distance_au: float) -> float:
        return distance_au * self._parameters.distance_scale_factor

    def scaled_position(self, position: HeliocentricPosition) -> np.ndarray:
        """Ecliptic position in scene units, as a float64 3-vector."""
        return position.as_array() * self._parameters.distance_scale_factor

    def _size_parameters(self, central: bool):
        p = self._parameters
        if central:
            return p.central_size_scale_factor, p.central_minimum_radius_floor
        return p.base_size_scale_factor, p.minimum_radius_floor

    def enhancement_factor(self, radius_km: float, central: bool = False) -> float:
        size_factor, floor = self._size_parameters(central)
        base_radius = radius_km * size_factor
        if 0 < base_radius < floor:
            return min(self._parameters.maximum_enhancement_factor, floor / base_radius)
        return 1.0

    def scaled_radius(self, radius_km: float, central: bool = False) -> float:
        size_factor, _ = self._size_parameters(central)
        return radius_km * size_factor * self.enhancement_factor(radius_km, central)

    def scaled_body_radius(self, body: CelestialBody) -> float:
        return self.scaled_radius(body.radius_km, central=body.is_central)

    def __repr__(self):
        return f"ScalingEngine(profile={self._profile.name})"
