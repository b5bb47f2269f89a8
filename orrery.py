# orrery.py
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Union

import numpy as np

from ephemeris import EphemerisClock
from orbit_path import LevelOfDetail, OrbitPathPoint, OrbitPathSampler
from scaling import ScalingEngine, ScalingProfile
from solarsystem import (AstronomicalInfo, CelestialBody, HeliocentricPosition,
                         OrbitalMechanics, SolarSystemCatalog)
from visibility import VisibilityEstimator, VisibilityReport

TimeLike = Union[datetime, float, int, None]


@dataclass(frozen=True)
class BodyState:
    """Scaled state of one body for a single frame."""
    name: str
    position: HeliocentricPosition
    scaled_position: np.ndarray
    scaled_radius: float
    scaled_distance: float


class Orrery:
    """
    Public entry point of the orbital engine.

    Ties the catalog, the ephemeris clock and the orbital mechanics to the
    scaling, orbit path and visibility components. Every call recomputes from
    (elements, time, profile); switching profile between calls simply changes
    which `ScalingEngine` is used.

    Only `CatalogLookupError` escapes for bad body identities. `time` arguments
    accept a datetime, a number of days since the reference epoch, or None for
    the clock's current instant.
    """
    def __init__(self, catalog: Optional[SolarSystemCatalog] = None, clock: Optional[EphemerisClock] = None,
                 mechanics: Optional[OrbitalMechanics] = None):
        self.catalog = catalog if catalog is not None else SolarSystemCatalog.from_config()
        self.clock = clock if clock is not None else EphemerisClock()
        self.mechanics = mechanics if mechanics is not None else OrbitalMechanics()
        # One immutable engine per profile
        self._engines: Dict[ScalingProfile, ScalingEngine] = {profile: ScalingEngine(profile) for profile in ScalingProfile}
        logging.info(f"Orrery initialized with {len(self.catalog)} bodies, epoch JD {self.clock.reference_epoch_jd}.")

    def days_since_epoch(self, time: TimeLike = None) -> float:
        if time is None or isinstance(time, datetime):
            return self.clock.days_since_epoch(time)
        return float(time)

    def scaling_engine(self, profile: ScalingProfile) -> ScalingEngine:
        if not isinstance(profile, ScalingProfile):
            profile = ScalingProfile.from_name(profile)
        return self._engines[profile]

    def body(self, body_id: str) -> CelestialBody:
        return self.catalog.get(body_id)

    def body_names(self) -> List[str]:
        return self.catalog.names()

    def position(self, body_id: str, time: TimeLike = None) -> HeliocentricPosition:
        body = self.catalog.get(body_id)
        return self.mechanics.heliocentric_position(body.orbital_elements, self.days_since_epoch(time))

    def astronomical_info(self, body_id: str, time: TimeLike = None) -> AstronomicalInfo:
        return self.mechanics.astronomical_info(self.catalog.get(body_id), self.days_since_epoch(time))

    def scaled_radius(self, body_id: str, profile: ScalingProfile) -> float:
        return self.scaling_engine(profile).scaled_body_radius(self.catalog.get(body_id))

    def scaled_distance(self, body_id: str, time: TimeLike, profile: ScalingProfile) -> float:
        return self.scaling_engine(profile).scaled_distance(self.position(body_id, time).distance)

    def scaled_position(self, body_id: str, time: TimeLike, profile: ScalingProfile) -> np.ndarray:
        return self.scaling_engine(profile).scaled_position(self.position(body_id, time))

    def scaled_semi_major_axis(self, body_id: str, profile: ScalingProfile) -> float:
        """Scene-unit semi-major axis; 0.0 for the central body."""
        elements = self.catalog.get(body_id).orbital_elements
        if elements is None:
            return 0.0
        return self.scaling_engine(profile).scaled_distance(elements.semi_major_axis_au)

    def orbit_path(self, body_id: str, profile: ScalingProfile,
                   level_of_detail: LevelOfDetail = LevelOfDetail.HIGH) -> List[OrbitPathPoint]:
        if not isinstance(level_of_detail, LevelOfDetail):
            level_of_detail = LevelOfDetail.from_name(level_of_detail)
        body = self.catalog.get(body_id)
        sampler = OrbitPathSampler(self.scaling_engine(profile), level_of_detail, mechanics=self.mechanics)
        return sampler.sample(body.orbital_elements)

    def visibility(self, body_id: str, observer_position, profile: ScalingProfile = ScalingProfile.TRUE_SCALE,
                   time: TimeLike = None) -> VisibilityReport:
        """
        Visibility of `body_id` from an observer.

        Args:
            body_id: Observed body.
            observer_position: A 3-vector in AU, or the id of another catalog body
                whose position at `time` is used.
            profile: Scaling profile that selects the render-scale rule.
            time: Instant of observation.

        Raises:
            CatalogLookupError: If `body_id` (or an observer id) is unknown.
        """
        if not isinstance(profile, ScalingProfile):
            profile = ScalingProfile.from_name(profile)
        days = self.days_since_epoch(time)
        body = self.catalog.get(body_id)
        body_position = self.mechanics.heliocentric_position(body.orbital_elements, days)
        if isinstance(observer_position, str):
            observer = self.catalog.get(observer_position)
            observer_position = self.mechanics.heliocentric_position(observer.orbital_elements, days)
        return VisibilityEstimator(profile).estimate(body, body_position, observer_position)

    def snapshot(self, time: TimeLike = None, profile: ScalingProfile = ScalingProfile.EXPLORATION) -> Dict[str, BodyState]:
        """Scaled state of every catalog body at one instant, keyed by body name in catalog order."""
        engine = self.scaling_engine(profile)
        days = self.days_since_epoch(time)
        states = {}
        for body in self.catalog:
            position = self.mechanics.heliocentric_position(body.orbital_elements, days)
            states[body.name] = BodyState(
                name=body.name,
                position=position,
                scaled_position=engine.scaled_position(position),
                scaled_radius=engine.scaled_body_radius(body),
                scaled_distance=engine.scaled_distance(position.distance),
            )
        return states
