# visualization.py
import pygame
import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple
import logging
from config import config, ConfigurationError
from orbit_path import LevelOfDetail, OrbitPathPoint, OrbitPathSampler
from orrery import Orrery
from scaling import ScalingProfile

PROFILE_KEYS = {
    pygame.K_1: ScalingProfile.TRUE_SCALE,
    pygame.K_2: ScalingProfile.EXPLORATION,
    pygame.K_3: ScalingProfile.ARTISTIC,
}
# None means the level of detail follows the camera distance
LOD_CYCLE = [None, LevelOfDetail.LOW, LevelOfDetail.MEDIUM, LevelOfDetail.HIGH]


def world_to_screen(scene_xy: Sequence[float], camera_offset: np.ndarray, zoom_level: float,
                    pixels_per_unit: float, screen_size: Tuple[int, int]) -> Tuple[int, int]:
    """Converts ecliptic scene coordinates (x, y) to pygame pixel coordinates.

    The view looks down on the ecliptic from +Z, so ecliptic +Y points up the
    screen (pygame's Y axis grows downward).

    Args:
        scene_xy: Point in scene units; only the first two components are used.
        camera_offset (np.ndarray): Scene point shown at the center of the screen.
        zoom_level (float): Camera zoom, 1.0 shows the whole system.
        pixels_per_unit (float): Pixels per scene unit at zoom 1.0.
        screen_size: (width, height) of the window in pixels.

    Returns:
        Tuple[int, int]: Screen coordinates.
    """
    scale = zoom_level * pixels_per_unit
    screen_x = screen_size[0] / 2 + (scene_xy[0] - camera_offset[0]) * scale
    screen_y = screen_size[1] / 2 - (scene_xy[1] - camera_offset[1]) * scale
    return (int(round(screen_x)), int(round(screen_y)))


def fit_pixels_per_unit(extent_scene_units: float, screen_size: Tuple[int, int], margin: float = 0.9) -> float:
    """Pixels per scene unit so that a circle of radius `extent_scene_units` fits the window."""
    if extent_scene_units <= 0:
        return 1.0
    return margin * min(screen_size) / 2.0 / extent_scene_units


def blend_color(color: Tuple[int, int, int], background: Tuple[int, int, int], opacity: float) -> Tuple[int, int, int]:
    """Mixes `color` over `background`; pygame's line drawing on the display surface ignores alpha."""
    opacity = min(1.0, max(0.0, opacity))
    return tuple(int(round(b + (c - b) * opacity)) for c, b in zip(color, background))


class OrreryVisualization:
    """Top-down pygame viewer for the orrery.

    The viewer owns the render loop state (simulated time, profile, level of
    detail, camera) and asks the `Orrery` for everything it draws. Orbit paths
    are resampled in full whenever the scaling profile or the effective level of
    detail changes; body positions and visibility are recomputed every frame.

    Controls:
        1 / 2 / 3       true scale / exploration / artistic profile
        L               cycle level of detail (auto, low, medium, high)
        SPACE           pause or resume time
        [ / ]           slow down / speed up time
        + / - / wheel   zoom

    Attributes:
        orrery (Orrery): Source of all positions, radii, paths and visibility.
        profile (ScalingProfile): Active scaling profile.
        lod_setting (LevelOfDetail | None): Fixed level of detail, or None for automatic.
        observer (str): Body whose viewpoint drives visibility and labels.
        days (float): Simulated days since the reference epoch.
        time_rate (float): Multiplier on `config.Visualization.DAYS_PER_SECOND`.
        paused (bool): Whether simulated time is frozen.
        zoom_level (float): Camera zoom, clamped to the configured range.
        camera_offset (np.ndarray): Scene point at the screen center (the central body).
        visualization_enabled (bool): False when the display could not be created.

    Raises:
        ConfigurationError: If the screen dimensions are missing or invalid.
    """
    def __init__(self, orrery: Orrery, profile: ScalingProfile = ScalingProfile.EXPLORATION,
                 level_of_detail: Optional[LevelOfDetail] = None, observer: Optional[str] = None,
                 start_days: float = 0.0):
        self.orrery = orrery
        self.profile = profile
        self.lod_setting = level_of_detail
        self.observer = (observer or config.Visualization.DEFAULT_OBSERVER).lower()
        self.orrery.body(self.observer)  # fail fast on an unknown observer
        self.days = float(start_days)
        self.time_rate = 1.0
        self.paused = False
        self.zoom_level = 1.0
        self.camera_offset = np.zeros(2, dtype=np.float64)

        self.screen_size = (config.Visualization.SCREEN_WIDTH_PX, config.Visualization.SCREEN_HEIGHT_PX)
        self.pixels_per_unit = 1.0
        self._orbit_paths: Dict[str, List[OrbitPathPoint]] = {}
        self._paths_key = None

        self.visualization_enabled = True
        self.screen = None
        self.clock = None
        self.font = self.small_font = None
        try:
            pygame.init()
            if not all(isinstance(v, int) and v > 0 for v in self.screen_size):
                raise ConfigurationError("SCREEN_WIDTH_PX and SCREEN_HEIGHT_PX must be positive integers.")
            self.screen = pygame.display.set_mode(self.screen_size)
            pygame.display.set_caption("Orrery")
            self.clock = pygame.time.Clock()
        except ConfigurationError:
            self.visualization_enabled = False
            raise
        except pygame.error as e_disp:
            logging.critical(f"Error setting display mode: {e_disp}. Visualization disabled.", exc_info=True)
            self.visualization_enabled = False

        if self.visualization_enabled:
            try:
                self.font = pygame.font.Font(None, 22)
                self.small_font = pygame.font.Font(None, 16)
            except pygame.error as e_font:
                logging.error(f"Pygame error initializing fonts: {e_font}. Text rendering disabled.", exc_info=True)

        self._refresh_scale()

    # --- Scene state ---

    def _refresh_scale(self):
        """Fits the outermost aphelion of the active profile into the window."""
        extent = 0.0
        engine = self.orrery.scaling_engine(self.profile)
        for body in self.orrery.catalog.planets():
            extent = max(extent, engine.scaled_distance(body.orbital_elements.aphelion_au))
        self.pixels_per_unit = fit_pixels_per_unit(extent, self.screen_size)

    def camera_distance(self) -> float:
        """Half the visible extent in scene units, standing in for a 3D camera distance."""
        return min(self.screen_size) / 2.0 / (self.pixels_per_unit * self.zoom_level)

    def effective_level_of_detail(self) -> LevelOfDetail:
        if self.lod_setting is not None:
            return self.lod_setting
        return OrbitPathSampler.level_of_detail_for_camera_distance(self.camera_distance())

    def orbit_paths(self) -> Dict[str, List[OrbitPathPoint]]:
        """Orbit polylines for the current profile and level of detail, resampled only when either changes."""
        key = (self.profile, self.effective_level_of_detail())
        if key != self._paths_key:
            self._orbit_paths = {body.name: self.orrery.orbit_path(body.name, key[0], key[1])
                                 for body in self.orrery.catalog.planets()}
            self._paths_key = key
            logging.info(f"Resampled orbit paths for profile {key[0].name} at {key[1].name} detail.")
        return self._orbit_paths

    def set_profile(self, profile: ScalingProfile):
        if profile is self.profile:
            return
        self.profile = profile
        self.zoom_level = 1.0
        self._refresh_scale()
        logging.info(f"Scaling profile switched to {profile.name}.")

    def cycle_level_of_detail(self):
        index = LOD_CYCLE.index(self.lod_setting)
        self.lod_setting = LOD_CYCLE[(index + 1) % len(LOD_CYCLE)]
        logging.info(f"Level of detail set to {self.lod_setting.name if self.lod_setting else 'AUTO'}.")

    def change_time_rate(self, faster: bool):
        step = config.Visualization.TIME_RATE_STEP
        self.time_rate = self.time_rate * step if faster else self.time_rate / step

    def set_zoom(self, zoom_level: float):
        self.zoom_level = float(np.clip(zoom_level, config.Visualization.MIN_ZOOM, config.Visualization.MAX_ZOOM))

    def advance(self, elapsed_seconds: float):
        if not self.paused:
            self.days += elapsed_seconds * config.Visualization.DAYS_PER_SECOND * self.time_rate

    def to_screen(self, scene_xy) -> Tuple[int, int]:
        return world_to_screen(scene_xy, self.camera_offset, self.zoom_level, self.pixels_per_unit, self.screen_size)

    # --- Drawing ---

    def render(self):
        """Draws one frame: orbit paths, bodies and the status line.

        Error Handling:
            - Skips rendering if the display is unavailable.
            - `pygame.error` is logged and the frame dropped, so a transient
              drawing failure does not stop the loop.
        """
        if not self.visualization_enabled or self.screen is None:
            return
        try:
            self.screen.fill(config.Visualization.BACKGROUND_COLOR)
            self._draw_orbits()
            self._draw_bodies()
            self._draw_status()
            pygame.display.flip()
        except pygame.error as e_pygame_render:
            logging.error(f"Pygame error during render: {e_pygame_render}. Attempting to continue.", exc_info=True)

    def _draw_orbits(self):
        opacity = OrbitPathSampler.orbit_opacity_for_camera_distance(self.camera_distance())
        color = blend_color(config.Visualization.ORBIT_COLOR, config.Visualization.BACKGROUND_COLOR, opacity / config.OrbitPath.MAX_OPACITY)
        for name, path in self.orbit_paths().items():
            screen_points = [self.to_screen(point) for point in path]
            if len(screen_points) > 1:
                try:
                    pygame.draw.lines(self.screen, color, False, screen_points, 1)
                except pygame.error as e_orbit_draw:
                    logging.error(f"Error drawing orbit path for {name}: {e_orbit_draw}", exc_info=True)

    def _draw_bodies(self):
        snapshot = self.orrery.snapshot(self.days, self.profile)
        scale = self.pixels_per_unit * self.zoom_level
        for body in self.orrery.catalog:
            state = snapshot[body.name]
            render_scale = 1.0
            label = body.display_name
            if not body.is_central and body.name != self.observer:
                report = self.orrery.visibility(body.name, self.observer, self.profile, self.days)
                if not report.should_render:
                    continue
                render_scale = report.render_scale
                if report.needs_label:
                    label = f"{body.display_name} ({report.apparent_magnitude:.1f})"

            screen_pos = self.to_screen(state.scaled_position)
            radius_px = max(config.Visualization.MIN_BODY_RADIUS_PX, int(state.scaled_radius * render_scale * scale))
            pygame.draw.circle(self.screen, body.color, screen_pos, radius_px)

            if self.small_font:
                text_surface = self.small_font.render(label, True, config.Visualization.LABEL_COLOR)
                text_rect = text_surface.get_rect(center=(screen_pos[0], screen_pos[1] - radius_px - 10))
                self.screen.blit(text_surface, text_rect)

    def _draw_status(self):
        if not self.font:
            return
        moment = self.orrery.clock.datetime_from_days(self.days)
        lod = self.effective_level_of_detail().name + ('' if self.lod_setting else ' (auto)')
        status = (f"{moment:%Y-%m-%d %H:%M} UTC | {self.profile.name} | LOD {lod} | "
                  f"x{self.time_rate:g}{' PAUSED' if self.paused else ''} | observer {self.observer}")
        self.screen.blit(self.font.render(status, True, config.Visualization.LABEL_COLOR), (10, 10))

    # --- Input ---

    def handle_events(self) -> bool:
        """Processes the pygame event queue.

        Returns:
            bool: False once the window is closed or ESC is pressed, True otherwise.
        """
        if not self.visualization_enabled:
            return True
        try:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    logging.info("QUIT event received via Pygame window. Signaling shutdown.")
                    return False
                if event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        return False
                    if event.key in PROFILE_KEYS:
                        self.set_profile(PROFILE_KEYS[event.key])
                    elif event.key == pygame.K_l:
                        self.cycle_level_of_detail()
                    elif event.key == pygame.K_SPACE:
                        self.paused = not self.paused
                    elif event.key == pygame.K_RIGHTBRACKET:
                        self.change_time_rate(faster=True)
                    elif event.key == pygame.K_LEFTBRACKET:
                        self.change_time_rate(faster=False)
                    elif event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
                        self.set_zoom(self.zoom_level * 1.2)
                    elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
                        self.set_zoom(self.zoom_level / 1.2)
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 4:  # Scroll up
                        self.set_zoom(self.zoom_level * 1.1)
                    elif event.button == 5:  # Scroll down
                        self.set_zoom(self.zoom_level / 1.1)
            return True
        except pygame.error as e_pygame_event:
            logging.error(f"Pygame error during event handling: {e_pygame_event}. Attempting to continue.", exc_info=True)
            return True

    def tick(self) -> float:
        """Waits for the next frame and returns the elapsed wall-clock seconds."""
        if self.clock is None:
            return 1.0 / config.Visualization.FPS
        return self.clock.tick(config.Visualization.FPS) / 1000.0

    def close(self):
        pygame.quit()
