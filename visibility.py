# visibility.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import numpy as np

from config import config, AU_KM, ARCSECONDS_PER_RADIAN
from physics_utils import angle_between_deg, as_vector3
from scaling import ScalingProfile
from solarsystem import CelestialBody, HeliocentricPosition

NAKED_EYE_LIMIT_MAG = 6.5
EASILY_VISIBLE_MAG = 4.0
BRIGHT_MAG = 1.0


class VisibilityTier(Enum):
    BRIGHT = 'bright'
    VISIBLE = 'visible'
    FAINT = 'faint'
    TELESCOPIC = 'telescopic'
    INVISIBLE = 'invisible'


@dataclass(frozen=True)
class VisibilityReport:
    apparent_magnitude: float
    phase_angle_deg: float
    elongation_deg: float
    distance_to_observer_au: float
    distance_from_central_au: float
    angular_size_arcsec: float
    tier: VisibilityTier
    render_scale: float
    should_render: bool
    needs_label: bool

    @property
    def is_naked_eye_visible(self) -> bool:
        return self.apparent_magnitude < NAKED_EYE_LIMIT_MAG

    @property
    def is_easily_visible(self) -> bool:
        return self.apparent_magnitude < EASILY_VISIBLE_MAG

    @property
    def is_bright(self) -> bool:
        return self.apparent_magnitude < BRIGHT_MAG


def _position_vector(position) -> np.ndarray:
    if isinstance(position, HeliocentricPosition):
        return position.as_array()
    return as_vector3(position)


class VisibilityEstimator:
    """
    Estimates how bright a body looks from an arbitrary observer.

    Magnitudes follow the simplified model
        m = H + 5 * log10(d_observer * d_sun) + phase_correction
    with H the body's magnitude at 1 AU from both Sun and observer. Larger
    magnitudes are dimmer. Distances are clamped to a small positive minimum, so
    degenerate geometry (observer on top of the body) gives a very bright but
    finite magnitude instead of raising.

    The phase penalty is driven by the true phase angle (Sun-body-observer,
    measured at the body), not by the elongation seen from the observer, so
    magnitudes near opposition carry no penalty.

    The central body is self-luminous: its magnitude depends only on the
    observer distance and it carries no phase penalty.

    Positions may be `HeliocentricPosition` instances or 3-vectors in AU.
    """
    def __init__(self, profile: ScalingProfile = ScalingProfile.TRUE_SCALE):
        if not isinstance(profile, ScalingProfile):
            profile = ScalingProfile.from_name(profile)
        self.profile = profile

    @staticmethod
    def phase_angle(body_position, observer_position, central_position=None) -> float:
        """Angle at the body between the directions to the central body and to the observer, in degrees."""
        body = _position_vector(body_position)
        central = np.zeros(3) if central_position is None else _position_vector(central_position)
        return angle_between_deg(central - body, _position_vector(observer_position) - body)

    @staticmethod
    def elongation(body_position, observer_position, central_position=None) -> float:
        """Angle at the observer between the body and the central body, in degrees."""
        observer = _position_vector(observer_position)
        central = np.zeros(3) if central_position is None else _position_vector(central_position)
        return angle_between_deg(_position_vector(body_position) - observer, central - observer)

    @staticmethod
    def phase_correction(phase_angle_deg: float) -> float:
        start = config.Visibility.PHASE_PENALTY_START_DEG
        if phase_angle_deg <= start:
            return 0.0
        return (phase_angle_deg - start) / 90.0 * config.Visibility.PHASE_PENALTY_MAG_PER_90_DEG

    def apparent_magnitude(self, base_magnitude: float, distance_to_observer_au: float,
                           distance_from_central_au: float, phase_angle_deg: float) -> float:
        min_distance = config.Visibility.MIN_DISTANCE_AU
        d_obs = max(distance_to_observer_au, min_distance)
        d_central = max(distance_from_central_au, min_distance)
        return base_magnitude + 5.0 * math.log10(d_obs * d_central) + self.phase_correction(phase_angle_deg)

    @staticmethod
    def classify(apparent_magnitude: float) -> VisibilityTier:
        for tier_name, upper_bound in config.Visibility.TIER_THRESHOLDS:
            if apparent_magnitude < upper_bound:
                return VisibilityTier(tier_name)
        return VisibilityTier.INVISIBLE

    def render_scale(self, tier: VisibilityTier, distance_to_observer_au: float) -> float:
        """
        Size multiplier for drawing the body.

        True scale follows the visibility tier. Enhanced profiles ignore the tier
        and shrink with distance, so far bodies stay visible but small.
        """
        vis = config.Visibility
        if self.profile is ScalingProfile.TRUE_SCALE:
            return vis.TIER_RENDER_SCALE[tier.value]
        d_obs = max(distance_to_observer_au, vis.MIN_DISTANCE_AU)
        return min(vis.ENHANCED_SCALE_MAX, max(vis.ENHANCED_SCALE_MIN, vis.ENHANCED_SCALE_REFERENCE_AU / d_obs))

    @staticmethod
    def angular_size_arcsec(radius_km: float, distance_to_observer_au: float) -> float:
        d_obs = max(distance_to_observer_au, config.Visibility.MIN_DISTANCE_AU)
        return radius_km / (d_obs * AU_KM) * ARCSECONDS_PER_RADIAN

    def estimate(self, body: CelestialBody, body_position, observer_position,
                 central_position: Optional[object] = None) -> VisibilityReport:
        """
        Full visibility report for `body` as seen from `observer_position`.

        Args:
            body: The observed body; its name selects the base magnitude.
            body_position: Heliocentric position of the body (AU).
            observer_position: Position of the observer (AU).
            central_position: Position of the central body, origin by default.

        Returns:
            VisibilityReport
        """
        body_vec = _position_vector(body_position)
        observer_vec = _position_vector(observer_position)
        central_vec = np.zeros(3) if central_position is None else _position_vector(central_position)

        d_obs = float(np.linalg.norm(body_vec - observer_vec))
        if body.is_central:
            d_central = 0.0
            phase = elongation = 0.0
            magnitude = (config.Visibility.CENTRAL_BODY_MAGNITUDE_AT_1AU
                         + 5.0 * math.log10(max(d_obs, config.Visibility.MIN_DISTANCE_AU)))
        else:
            d_central = float(np.linalg.norm(body_vec - central_vec))
            phase = self.phase_angle(body_vec, observer_vec, central_vec)
            elongation = self.elongation(body_vec, observer_vec, central_vec)
            base_magnitude = config.Visibility.BASE_MAGNITUDES.get(body.name, config.Visibility.DEFAULT_BASE_MAGNITUDE)
            magnitude = self.apparent_magnitude(base_magnitude, d_obs, d_central, phase)
        tier = self.classify(magnitude)
        scale = self.render_scale(tier, d_obs)

        return VisibilityReport(
            apparent_magnitude=magnitude,
            phase_angle_deg=phase,
            elongation_deg=elongation,
            distance_to_observer_au=d_obs,
            distance_from_central_au=d_central,
            angular_size_arcsec=self.angular_size_arcsec(body.radius_km, d_obs),
            tier=tier,
            render_scale=scale,
            should_render=scale > 0,
            needs_label=tier in (VisibilityTier.FAINT, VisibilityTier.TELESCOPIC),
        )
