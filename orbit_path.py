# orbit_path.py
import logging
import math
from enum import Enum
from typing import List, NamedTuple, Optional

from config import config
from scaling import ScalingEngine
from solarsystem import OrbitalElements, OrbitalMechanics


class LevelOfDetail(Enum):
    LOW = 'low'
    MEDIUM = 'medium'
    HIGH = 'high'

    @classmethod
    def from_name(cls, name: str) -> 'LevelOfDetail':
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown level of detail '{name}'. Expected one of: low, medium, high.") from None


class OrbitPathPoint(NamedTuple):
    x: float
    y: float
    z: float


class OrbitPathSampler:
    """
    Discretizes orbits into closed polylines in scene units.

    Samples are evenly spaced in mean anomaly, so they crowd near aphelion where
    the body moves slowest. Orbits with noticeable eccentricity get more
    segments to compensate. A path is always recomputed in full; nothing is
    cached between calls.

    Attributes:
        scaling_engine (ScalingEngine): Supplies the distance factor applied to every point.
        level_of_detail (LevelOfDetail): Selects the segment budget.
        base_segments (int): Segment count at HIGH detail.
        max_segments (int): Hard cap on segments per orbit.
    """
    def __init__(self, scaling_engine: ScalingEngine, level_of_detail: LevelOfDetail = LevelOfDetail.HIGH,
                 base_segments: Optional[int] = None, max_segments: Optional[int] = None,
                 mechanics: Optional[OrbitalMechanics] = None):
        if not isinstance(level_of_detail, LevelOfDetail):
            level_of_detail = LevelOfDetail.from_name(level_of_detail)
        self.scaling_engine = scaling_engine
        self.level_of_detail = level_of_detail
        self.base_segments = config.OrbitPath.BASE_SEGMENTS if base_segments is None else int(base_segments)
        self.max_segments = config.OrbitPath.MAX_SEGMENTS if max_segments is None else int(max_segments)
        self.mechanics = mechanics or OrbitalMechanics()

    def segment_count(self, elements: OrbitalElements) -> int:
        """
        Number of polyline segments for an orbit at the sampler's level of detail.

        LOW uses max(32, base / 4), MEDIUM max(64, base / 2) and HIGH the base
        count. Orbits with e above the eccentricity threshold are multiplied by
        (1 + e), and the result is capped at `max_segments`.
        """
        op = config.OrbitPath
        if self.level_of_detail is LevelOfDetail.LOW:
            segments = max(op.LOW_MIN_SEGMENTS, self.base_segments // op.LOW_DIVISOR)
        elif self.level_of_detail is LevelOfDetail.MEDIUM:
            segments = max(op.MEDIUM_MIN_SEGMENTS, self.base_segments // op.MEDIUM_DIVISOR)
        elif self.level_of_detail is LevelOfDetail.HIGH:
            segments = self.base_segments
        else:
            raise ValueError(f"Unsupported level of detail: {self.level_of_detail!r}")

        if elements.eccentricity > op.ECCENTRICITY_THRESHOLD:
            segments = int(math.floor(segments * (1.0 + elements.eccentricity)))

        return min(segments, self.max_segments)

    def _mean_anomalies(self, elements: OrbitalElements, segments: Optional[int]) -> List[float]:
        if segments is None:
            segments = self.segment_count(elements)
        if segments <= 0:
            raise ValueError(f"Segment count must be positive, got {segments}.")
        if config.Debug.ORBIT_PATH:
            logging.debug(f"Sampling orbit (a={elements.semi_major_axis_au}, e={elements.eccentricity}) "
                          f"with {segments} segments at {self.level_of_detail.name} detail.")
        # i runs to `segments` inclusive so the last point closes the loop on the first
        return [360.0 * i / segments for i in range(segments + 1)]

    def sample(self, elements: Optional[OrbitalElements], segments: Optional[int] = None) -> List[OrbitPathPoint]:
        """
        Scene-unit points along the orbit, `segments + 1` of them.

        Args:
            elements: Orbital elements, or None for the central body (no path).
            segments: Explicit segment count overriding the level of detail.

        Returns:
            List[OrbitPathPoint]: Closed polyline; the last point repeats the first.
        """
        if elements is None:
            return []
        factor = self.scaling_engine.distance_scale_factor
        points = []
        for mean_anomaly_deg in self._mean_anomalies(elements, segments):
            position = self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg)
            points.append(OrbitPathPoint(position.x * factor, position.y * factor, position.z * factor))
        return points

    def sample_distances(self, elements: Optional[OrbitalElements], segments: Optional[int] = None) -> List[float]:
        """Unscaled heliocentric distances (AU) at the same samples as `sample`."""
        if elements is None:
            return []
        return [self.mechanics.position_from_mean_anomaly(elements, mean_anomaly_deg).distance
                for mean_anomaly_deg in self._mean_anomalies(elements, segments)]

    @staticmethod
    def level_of_detail_for_camera_distance(camera_distance: float) -> LevelOfDetail:
        op = config.OrbitPath
        if camera_distance > op.LOD_LOW_DISTANCE:
            return LevelOfDetail.LOW
        if camera_distance > op.LOD_MEDIUM_DISTANCE:
            return LevelOfDetail.MEDIUM
        return LevelOfDetail.HIGH

    @staticmethod
    def orbit_opacity_for_camera_distance(camera_distance: float, base_opacity: Optional[float] = None) -> float:
        """
        Orbit line opacity for a camera distance.

        Full base opacity up to the fade start, then a linear fade down to
        FADE_FLOOR_FRACTION of the base at the fade end and beyond, finally
        clamped to [MIN_OPACITY, MAX_OPACITY].
        """
        op = config.OrbitPath
        base_opacity = op.DEFAULT_OPACITY if base_opacity is None else base_opacity
        fade = (camera_distance - op.FADE_START_DISTANCE) / (op.FADE_END_DISTANCE - op.FADE_START_DISTANCE)
        fade = min(1.0, max(0.0, fade))
        opacity = base_opacity * (1.0 - fade * (1.0 - op.FADE_FLOOR_FRACTION))
        return min(op.MAX_OPACITY, max(op.MIN_OPACITY, opacity))
