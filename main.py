# main.py
import os
import sys
import logging
import cProfile
import argparse
from datetime import datetime, timezone
from typing import List, NamedTuple, Optional

import psutil  # For memory monitoring

from config import config, ConfigurationError
from orbit_path import LevelOfDetail, OrbitPathSampler
from orrery import Orrery
from scaling import ScalingEngine, ScalingProfile
from solarsystem import CatalogLookupError, OrbitalMechanics

# Heliocentric distance sanity ranges (AU): nominal value and allowed deviation
REFERENCE_DISTANCES_AU = {
    'mercury': (0.39, 0.1),
    'venus': (0.72, 0.1),
    'earth': (1.0, 0.05),
    'mars': (1.52, 0.15),
    'jupiter': (5.20, 0.3),
    'saturn': (9.54, 0.5),
    'uranus': (19.19, 1.0),
    'neptune': (30.07, 1.5),
}
KEPLER_THIRD_LAW_TOLERANCE = 0.01
ORBIT_EXTREMA_TOLERANCE = 0.01
PROFILE_STATS_FILE = "orrery_profile.prof"


class ValidationResult(NamedTuple):
    name: str
    passed: bool
    detail: str


def run_validation_suite(orrery: Orrery, days_since_epoch: float = 0.0) -> List[ValidationResult]:
    """Astronomical sanity checks over the whole catalog.

    Three groups of checks are run for every orbiting body:
    -   the heliocentric distance at `days_since_epoch` lies within the
        reference range from `REFERENCE_DISTANCES_AU` (bodies without a
        reference are skipped),
    -   P^2 / a^3 is within 1% of 1 (Kepler's third law, years and AU),
    -   the smallest and largest distances along a HIGH detail orbit path match
        perihelion a(1 - e) and aphelion a(1 + e) within 1%.

    Returns:
        List[ValidationResult]: One entry per check, in catalog order.
    """
    results = []
    sampler = OrbitPathSampler(ScalingEngine(ScalingProfile.TRUE_SCALE), LevelOfDetail.HIGH, mechanics=orrery.mechanics)
    for body in orrery.catalog.planets():
        elements = body.orbital_elements

        if body.name in REFERENCE_DISTANCES_AU:
            expected, tolerance = REFERENCE_DISTANCES_AU[body.name]
            distance = orrery.position(body.name, days_since_epoch).distance
            results.append(ValidationResult(
                f"{body.name}: heliocentric distance",
                abs(distance - expected) <= tolerance,
                f"{distance:.4f} AU (expected {expected} +/- {tolerance})"))

        ratio = OrbitalMechanics.keplers_third_law_ratio(elements)
        results.append(ValidationResult(
            f"{body.name}: Kepler's third law",
            abs(ratio - 1.0) <= KEPLER_THIRD_LAW_TOLERANCE,
            f"P^2/a^3 = {ratio:.5f}"))

        distances = sampler.sample_distances(elements)
        min_error = abs(min(distances) - elements.perihelion_au) / elements.perihelion_au
        max_error = abs(max(distances) - elements.aphelion_au) / elements.aphelion_au
        results.append(ValidationResult(
            f"{body.name}: orbit path extrema",
            min_error <= ORBIT_EXTREMA_TOLERANCE and max_error <= ORBIT_EXTREMA_TOLERANCE,
            f"min {min(distances):.5f} AU / max {max(distances):.5f} AU "
            f"(perihelion {elements.perihelion_au:.5f}, aphelion {elements.aphelion_au:.5f})"))
    return results


def format_report(orrery: Orrery, days_since_epoch: float, profile: ScalingProfile,
                  level_of_detail: LevelOfDetail, observer: str) -> str:
    """Plain-text table of every body's position, scaled values and visibility at one instant."""
    moment = orrery.clock.datetime_from_days(days_since_epoch)
    lines = [
        f"Orrery state at {moment:%Y-%m-%d %H:%M:%S} UTC ({days_since_epoch:.3f} days since epoch)",
        f"Profile: {profile.name}   Level of detail: {level_of_detail.name}   Observer: {observer}",
        "",
        f"{'body':<10} {'x (AU)':>10} {'y (AU)':>10} {'z (AU)':>9} {'r (AU)':>9} {'v (km/s)':>9} "
        f"{'dist':>10} {'radius':>9} {'segs':>5} {'mag':>7} {'tier':<11}",
    ]
    snapshot = orrery.snapshot(days_since_epoch, profile)
    sampler = OrbitPathSampler(orrery.scaling_engine(profile), level_of_detail)
    for body in orrery.catalog:
        state = snapshot[body.name]
        info = orrery.astronomical_info(body.name, days_since_epoch)
        segments = sampler.segment_count(body.orbital_elements) if body.orbital_elements else 0
        magnitude, tier = '', ''
        if not body.is_central and body.name != observer:
            report = orrery.visibility(body.name, observer, profile, days_since_epoch)
            magnitude, tier = f"{report.apparent_magnitude:7.2f}", report.tier.value
        position = state.position
        lines.append(
            f"{body.name:<10} {position.x:>10.5f} {position.y:>10.5f} {position.z:>9.5f} {position.distance:>9.5f} "
            f"{info.orbital_velocity_km_s:>9.3f} {state.scaled_distance:>10.3f} {state.scaled_radius:>9.4f} "
            f"{segments:>5} {magnitude:>7} {tier:<11}")
    return "\n".join(lines)


class OrreryApplication:
    """Owns the render loop that drives the orrery viewer.

    Attributes:
        orrery (Orrery): The engine facade.
        visualization (OrreryVisualization | None): Created lazily by `run_viewer()`.
        running (bool): Cleared when the window is closed or a fatal error occurs.
        process (psutil.Process): Current process, used for memory monitoring.
    """
    def __init__(self, orrery: Optional[Orrery] = None):
        self.orrery = orrery or Orrery()
        self.visualization = None
        self.running = True
        self.process = psutil.Process(os.getpid())

    def check_memory(self, frame: int):
        try:
            memory_mb = self.process.memory_info().rss / (1024 * 1024)
            if memory_mb > config.Monitoring.MEMORY_USAGE_WARN_MB:
                logging.warning(f"High memory usage: {memory_mb:.2f} MB at frame {frame}")
            else:
                logging.debug(f"Memory usage: {memory_mb:.2f} MB at frame {frame}")
        except psutil.Error as e_psutil:
            logging.error(f"Could not retrieve memory usage: {e_psutil}", exc_info=True)

    def run_viewer(self, days_since_epoch: float, profile: ScalingProfile,
                   level_of_detail: Optional[LevelOfDetail], observer: str, max_frames: Optional[int] = None) -> int:
        """Runs the pygame viewer until the window closes or `max_frames` frames are drawn.

        Returns:
            int: Number of frames rendered.
        """
        # Imported here so headless runs never initialize pygame
        from visualization import OrreryVisualization

        self.visualization = OrreryVisualization(self.orrery, profile, level_of_detail, observer, days_since_epoch)
        frame = 0
        try:
            while self.running and (max_frames is None or frame < max_frames):
                if not self.visualization.handle_events():
                    self.running = False
                    logging.info("Viewer stopped by user (window closed).")
                    break
                self.visualization.render()
                self.visualization.advance(self.visualization.tick())
                frame += 1
                if frame % config.Monitoring.MEMORY_CHECK_INTERVAL_FRAMES == 0:
                    self.check_memory(frame)
        finally:
            self.visualization.close()
        logging.info(f"Viewer finished after {frame} frames.")
        return frame


def parse_date(value: str) -> datetime:
    """argparse type for ISO-8601 dates; naive values are taken as UTC."""
    try:
        moment = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}'. Use ISO-8601, e.g. 2024-03-20 or 2024-03-20T12:00.")
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def parse_profile(value: str) -> ScalingProfile:
    try:
        return ScalingProfile.from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def parse_level_of_detail(value: str) -> Optional[LevelOfDetail]:
    if value.lower() == 'auto':
        return None
    try:
        return LevelOfDetail.from_name(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Keplerian orrery: planetary positions, scaling profiles and visibility.")
    parser.add_argument("--date", type=parse_date, default=None,
                        help="Instant to compute (ISO-8601, UTC). Defaults to now.")
    parser.add_argument("--mode", type=parse_profile, default=ScalingProfile.default(),
                        help="Scaling profile: true-scale (realistic), exploration or artistic.")
    parser.add_argument("--lod", type=parse_level_of_detail, default=None,
                        help="Orbit path level of detail: low, medium, high or auto (default).")
    parser.add_argument("--observer", default=config.Visualization.DEFAULT_OBSERVER,
                        help="Body the visibility estimates are made from.")
    parser.add_argument("--render", action="store_true", help="Open the pygame viewer.")
    parser.add_argument("--frames", type=int, default=None, help="Stop the viewer after this many frames.")
    parser.add_argument("--validate", action="store_true", help="Run the astronomical validation suite and exit.")
    parser.add_argument("--profile", action="store_true",
                        help=f"Enable cProfile. Statistics will be saved to '{PROFILE_STATS_FILE}'.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point.

    Without `--render` a text report for the requested instant is printed.
    `--validate` runs the validation suite instead and exits non-zero when any
    check fails.

    Returns:
        int: Process exit status.
    """
    args = build_arg_parser().parse_args(argv)

    profiler = None
    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        logging.info(f"cProfile profiling enabled. Output will be saved to {PROFILE_STATS_FILE} upon completion.")

    try:
        app = OrreryApplication()
        orrery = app.orrery
        observer = orrery.body(args.observer).name
        days = orrery.days_since_epoch(args.date)

        if args.validate:
            results = run_validation_suite(orrery, days)
            for result in results:
                print(f"[{'PASS' if result.passed else 'FAIL'}] {result.name}: {result.detail}")
            failed = sum(1 for result in results if not result.passed)
            print(f"\n{len(results) - failed} passed, {failed} failed")
            return 1 if failed else 0

        if args.render:
            app.run_viewer(days, args.mode, args.lod, observer, args.frames)
        else:
            lod = args.lod if args.lod is not None else LevelOfDetail.HIGH
            print(format_report(orrery, days, args.mode, lod, observer))
        return 0

    except CatalogLookupError as e_lookup:
        logging.error(str(e_lookup))
        print(f"ERROR: {e_lookup}")
        return 2
    except ConfigurationError as e_config_main:
        logging.critical(f"Orrery could not be initialized due to a ConfigurationError: {e_config_main}", exc_info=True)
        print(f"FATAL CONFIGURATION ERROR: {e_config_main}. Check logs for details.")
        return 1
    finally:
        if profiler:
            profiler.disable()
            try:
                profiler.dump_stats(PROFILE_STATS_FILE)
                logging.info(f"Profiling data successfully saved to {PROFILE_STATS_FILE}")
            except OSError as e_profile_dump:
                logging.error(f"Failed to save profiling data to {PROFILE_STATS_FILE}: {e_profile_dump}", exc_info=True)


if __name__ == "__main__":
    sys.exit(main())
