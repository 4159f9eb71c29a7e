#!/usr/bin/env python3
"""
Renderer Module

Pygame-based rendering for the orbit visualizer.
Draws the central sphere, equatorial plane, First Point of Aries line,
reference grid, orbital plane, orbit path, satellite marker and labels.
"""

import math
import numpy as np
from typing import List, Tuple, Optional, Sequence
import pygame

from .camera import Camera


class Colors:
    """Default color palette."""

    BACKGROUND = (11, 15, 26)
    SPHERE = (40, 90, 160)
    SPHERE_HIGHLIGHT = (80, 140, 200)
    GRID_LINE = (60, 120, 180)
    GRID_LINE_BACK = (25, 55, 95)
    TEXT = (220, 220, 220)
    TEXT_DIM = (200, 200, 200)

    # Reference grid below the sphere
    GROUND_GRID_CENTER = (43, 58, 85)
    GROUND_GRID = (26, 34, 51)

    # Planes (RGBA)
    EQUATOR_PLANE = (136, 204, 238, 89)
    ORBIT_PLANE = (68, 255, 136, 31)
    ORBIT_PLANE_EDGE = (34, 51, 68)

    # Orbit path
    ORBIT_FRONT = (68, 255, 136)
    ORBIT_BACK = (30, 110, 60)

    # First Point of Aries reference line
    ARIES_FRONT = (255, 221, 51)
    ARIES_BACK = (120, 105, 25)

    SATELLITE = (255, 102, 68)

    # Label sprites
    LABEL_TEXT = (230, 238, 255)
    LABEL_BACKGROUND = (12, 18, 32, 178)


def interpolate_color(
    color1: Tuple[int, int, int], color2: Tuple[int, int, int], t: float
) -> Tuple[int, int, int]:
    """Linearly interpolate between two colors."""
    t = max(0.0, min(1.0, t))
    return (
        int(color1[0] + (color2[0] - color1[0]) * t),
        int(color1[1] + (color2[1] - color1[1]) * t),
        int(color1[2] + (color2[2] - color1[2]) * t),
    )


class Renderer:
    """
    Handles all rendering operations.

    Parameters
    ----------
    screen : pygame.Surface
        Target surface.
    sphere_radius : float
        Radius of the central sphere in display units.
    num_latitude_lines : int
        Number of latitude grid lines.
    num_longitude_lines : int
        Number of longitude grid lines.
    equator_size : float
        Side of the equatorial plane square.
    aries_length : float
        Length of the First Point of Aries reference line.
    ground_grid_size : float
        Side of the reference grid below the sphere.
    ground_grid_divisions : int
        Number of cells per side of the reference grid.
    ground_grid_height : float
        z coordinate of the reference grid.
    satellite_size : int
        Base satellite marker size (pixels).
    """

    # Segments longer than this on screen are wrap-around artifacts
    MAX_SEGMENT_PIXELS_SQ = 2500
    PLANE_TILES = 8

    def __init__(
        self,
        screen: pygame.Surface,
        sphere_radius: float = 1.0,
        num_latitude_lines: int = 8,
        num_longitude_lines: int = 12,
        equator_size: float = 4.0,
        aries_length: float = 4.0,
        ground_grid_size: float = 20.0,
        ground_grid_divisions: int = 20,
        ground_grid_height: float = -1.5,
        satellite_size: int = 9,
    ):
        self.screen = screen
        self.screen_width = screen.get_width()
        self.screen_height = screen.get_height()

        self.sphere_radius = sphere_radius
        self.num_latitude_lines = num_latitude_lines
        self.num_longitude_lines = num_longitude_lines
        self.equator_size = equator_size
        self.aries_length = aries_length
        self.ground_grid_size = ground_grid_size
        self.ground_grid_divisions = ground_grid_divisions
        self.ground_grid_height = ground_grid_height
        self.satellite_size = satellite_size

        self._label_cache = {}

    def resize(self, screen: pygame.Surface) -> None:
        """Point the renderer at a resized display surface."""
        self.screen = screen
        self.screen_width = screen.get_width()
        self.screen_height = screen.get_height()

    def clear(self, color: Tuple[int, int, int] = Colors.BACKGROUND) -> None:
        """Clear screen with background color."""
        self.screen.fill(color)

    # -------------------------------------------------------------------------
    # Projection and visibility
    # -------------------------------------------------------------------------

    def project_point(
        self, point_3d: np.ndarray, camera: Camera
    ) -> Tuple[Optional[Tuple[float, float]], float]:
        """
        Project 3D point to 2D screen coordinates.

        Returns
        -------
        tuple
            ((screen_x, screen_y), depth) or (None, depth) if behind camera.
        """
        cam_pos = camera.get_position()
        forward, up, right = camera.get_view_matrix()

        to_point = np.asarray(point_3d) - cam_pos
        depth = np.dot(to_point, forward)

        if depth <= 0.1:
            return None, depth

        fov_scale = self.screen_height / 2
        x_proj = np.dot(to_point, right) / depth * fov_scale
        y_proj = -np.dot(to_point, up) / depth * fov_scale

        screen_x = self.screen_width / 2 + x_proj
        screen_y = self.screen_height / 2 + y_proj

        return (screen_x, screen_y), depth

    def get_projected_sphere_radius(self, camera: Camera) -> float:
        """Calculate apparent radius of the sphere on screen."""
        fov_scale = self.screen_height / 2
        return self.sphere_radius / camera.distance * fov_scale

    def is_point_visible_on_sphere(
        self, point_3d: np.ndarray, camera: Camera
    ) -> bool:
        """Check if a point on the sphere's surface faces the camera."""
        cam_pos = camera.get_position()
        to_camera = cam_pos - point_3d
        normal = point_3d / np.linalg.norm(point_3d)
        return np.dot(normal, to_camera) > 0

    def is_point_in_front_of_sphere(
        self, point_3d: np.ndarray, camera: Camera
    ) -> bool:
        """Check if a point in space is visible (not occluded by the sphere)."""
        cam_pos = camera.get_position()
        point_dist = np.linalg.norm(point_3d)

        if point_dist < self.sphere_radius:
            return False

        to_point = point_3d - cam_pos
        to_point_dist = np.linalg.norm(to_point)
        to_point_normalized = to_point / to_point_dist

        closest_approach_t = -np.dot(cam_pos, to_point_normalized)

        if closest_approach_t > to_point_dist:
            return True
        if closest_approach_t < 0:
            return True

        closest_point = cam_pos + closest_approach_t * to_point_normalized
        closest_dist_to_center = np.linalg.norm(closest_point)

        if closest_dist_to_center > self.sphere_radius:
            return True

        half_chord = math.sqrt(
            self.sphere_radius**2 - closest_dist_to_center**2
        )
        entry_t = closest_approach_t - half_chord

        return to_point_dist < entry_t

    # -------------------------------------------------------------------------
    # Central sphere
    # -------------------------------------------------------------------------

    def draw_sphere(self, camera: Camera) -> None:
        """Draw the central sphere with a radial gradient."""
        center_2d, _ = self.project_point(np.array([0.0, 0.0, 0.0]), camera)

        if center_2d is None:
            return

        radius = self.get_projected_sphere_radius(camera)
        if radius < 1:
            return

        sphere_surface = pygame.Surface(
            (int(radius * 2) + 4, int(radius * 2) + 4), pygame.SRCALPHA
        )
        center_on_surface = (int(radius) + 2, int(radius) + 2)

        for i in range(int(radius), 0, -2):
            factor = i / radius
            alpha = int(200 * factor + 55)
            r, g, b = interpolate_color(
                Colors.SPHERE, Colors.SPHERE_HIGHLIGHT, 1 - factor
            )
            pygame.draw.circle(sphere_surface, (r, g, b, alpha), center_on_surface, int(i))

        self.screen.blit(
            sphere_surface,
            (int(center_2d[0] - radius - 2), int(center_2d[1] - radius - 2)),
        )

    def draw_sphere_grid(self, camera: Camera) -> None:
        """Draw latitude and longitude grid lines on the sphere's surface."""
        for is_back in (True, False):
            for i in range(1, self.num_latitude_lines):
                lat = -math.pi / 2 + math.pi * i / self.num_latitude_lines
                self._draw_latitude_line(camera, lat, is_back=is_back)

            for i in range(self.num_longitude_lines):
                lon = 2 * math.pi * i / self.num_longitude_lines
                self._draw_longitude_line(camera, lon, is_back=is_back)

    def _draw_latitude_line(
        self, camera: Camera, latitude: float, is_back: bool = False
    ) -> None:
        """Draw a latitude line (parallel to equator) on the sphere surface."""
        num_points = 120
        z = self.sphere_radius * math.sin(latitude)
        circle_radius = self.sphere_radius * math.cos(latitude)

        if circle_radius < 0.001:
            return

        points = []
        for i in range(num_points + 1):
            theta = 2 * math.pi * i / num_points
            x = circle_radius * math.cos(theta)
            y = circle_radius * math.sin(theta)
            points.append(np.array([x, y, z]))

        self._draw_sphere_line(camera, points, is_back)

    def _draw_longitude_line(
        self, camera: Camera, longitude: float, is_back: bool = False
    ) -> None:
        """Draw a longitude line (meridian) on the sphere surface."""
        num_points = 120
        points = []

        for i in range(num_points + 1):
            lat = -math.pi / 2 + math.pi * i / num_points
            x = self.sphere_radius * math.cos(lat) * math.cos(longitude)
            y = self.sphere_radius * math.cos(lat) * math.sin(longitude)
            z = self.sphere_radius * math.sin(lat)
            points.append(np.array([x, y, z]))

        self._draw_sphere_line(camera, points, is_back)

    def _draw_sphere_line(
        self,
        camera: Camera,
        points: List[np.ndarray],
        draw_back: bool,
    ) -> None:
        """
        Draw a line on the sphere, handling front/back visibility.

        Each segment is drawn only if it matches the requested side.
        """
        if len(points) < 2:
            return

        projected = []
        visible = []

        for point in points:
            proj, _ = self.project_point(point, camera)
            projected.append(proj)
            visible.append(self.is_point_visible_on_sphere(point, camera))

        color = Colors.GRID_LINE_BACK if draw_back else Colors.GRID_LINE
        width = 1 if draw_back else max(1, int(2 / camera.distance * 2))

        for i in range(len(points) - 1):
            proj1, proj2 = projected[i], projected[i + 1]
            vis1, vis2 = visible[i], visible[i + 1]

            if proj1 is None or proj2 is None:
                continue

            if draw_back and (vis1 or vis2):
                continue
            if not draw_back and not (vis1 and vis2):
                continue

            self._draw_segment(proj1, proj2, color, width)

    # -------------------------------------------------------------------------
    # Lines in space
    # -------------------------------------------------------------------------

    def _draw_segment(
        self,
        proj1: Tuple[float, float],
        proj2: Tuple[float, float],
        color: Tuple[int, int, int],
        width: int,
        max_length_sq: Optional[float] = MAX_SEGMENT_PIXELS_SQ,
    ) -> bool:
        dx = proj2[0] - proj1[0]
        dy = proj2[1] - proj1[1]
        if max_length_sq is not None and dx * dx + dy * dy > max_length_sq:
            return False

        pygame.draw.line(
            self.screen,
            color,
            (int(proj1[0]), int(proj1[1])),
            (int(proj2[0]), int(proj2[1])),
            width,
        )
        return True

    def _draw_space_line(
        self,
        camera: Camera,
        points: Sequence[np.ndarray],
        color: Tuple[int, int, int],
        width: int,
        draw_back: bool,
    ) -> int:
        """
        Draw a polyline in space, handling occlusion by the sphere.

        Returns
        -------
        int
            Number of segments drawn
        """
        if len(points) < 2:
            return 0

        projected = [self.project_point(p, camera)[0] for p in points]
        front = [self.is_point_in_front_of_sphere(p, camera) for p in points]

        drawn = 0
        for i in range(len(points) - 1):
            proj1, proj2 = projected[i], projected[i + 1]

            if proj1 is None or proj2 is None:
                continue

            segment_front = front[i] and front[i + 1]
            segment_back = not front[i] and not front[i + 1]

            if draw_back and not segment_back:
                continue
            if not draw_back and not segment_front:
                continue

            if self._draw_segment(proj1, proj2, color, width):
                drawn += 1

        return drawn

    def _subdivide(
        self, start: np.ndarray, end: np.ndarray, pieces: int
    ) -> List[np.ndarray]:
        return [start + (end - start) * k / pieces for k in range(pieces + 1)]

    def _draw_straight_line(
        self,
        camera: Camera,
        start: np.ndarray,
        end: np.ndarray,
        pieces: int,
        color: Tuple[int, int, int],
        width: int = 1,
    ) -> int:
        """
        Draw a straight 3D line cut into pieces so the parts behind the
        camera drop out. Pieces are not length-filtered.

        Returns
        -------
        int
            Number of pieces drawn
        """
        points = self._subdivide(start, end, pieces)
        projected = [self.project_point(p, camera)[0] for p in points]
        drawn = 0
        for p1, p2 in zip(projected, projected[1:]):
            if p1 is not None and p2 is not None:
                self._draw_segment(p1, p2, color, width, max_length_sq=None)
                drawn += 1
        return drawn

    def draw_ground_grid(self, camera: Camera) -> int:
        """
        Draw the flat reference grid below the sphere.

        Returns
        -------
        int
            Number of grid pieces drawn
        """
        half = self.ground_grid_size / 2
        n = self.ground_grid_divisions
        z = self.ground_grid_height

        drawn = 0
        for k in range(n + 1):
            offset = -half + self.ground_grid_size * k / n
            color = Colors.GROUND_GRID_CENTER if 2 * k == n else Colors.GROUND_GRID

            for start, end in (
                (np.array([offset, -half, z]), np.array([offset, half, z])),
                (np.array([-half, offset, z]), np.array([half, offset, z])),
            ):
                drawn += self._draw_straight_line(camera, start, end, n, color)

        return drawn

    def draw_aries_line(self, camera: Camera, draw_back: bool) -> None:
        """Draw the First Point of Aries reference line along +x."""
        points = self._subdivide(
            np.array([0.0, 0.0, 0.003]),
            np.array([self.aries_length, 0.0, 0.003]),
            40,
        )
        color = Colors.ARIES_BACK if draw_back else Colors.ARIES_FRONT
        self._draw_space_line(camera, points, color, 1 if draw_back else 2, draw_back)

    def draw_orbit_path(
        self, camera: Camera, points: np.ndarray, draw_back: bool
    ) -> int:
        """Draw the orbit path; back segments are the ones hidden by the sphere."""
        if draw_back:
            return self._draw_space_line(camera, points, Colors.ORBIT_BACK, 1, True)
        line_width = max(2, int(4 / camera.distance * 2))
        return self._draw_space_line(
            camera, points, Colors.ORBIT_FRONT, line_width, False
        )

    # -------------------------------------------------------------------------
    # Translucent planes
    # -------------------------------------------------------------------------

    def draw_plane(
        self,
        camera: Camera,
        corners: np.ndarray,
        color: Tuple[int, int, int, int],
        edge_color: Optional[Tuple[int, int, int]] = None,
    ) -> int:
        """
        Draw a translucent quad given its four 3D corners.

        The quad is split into tiles so parts behind the camera drop out
        without hiding the rest.

        Returns
        -------
        int
            Number of tiles drawn
        """
        overlay = pygame.Surface(
            (self.screen_width, self.screen_height), pygame.SRCALPHA
        )
        n = self.PLANE_TILES
        c0, c1, c2, c3 = (np.asarray(c, dtype=float) for c in corners)

        def lerp(u: float, v: float) -> np.ndarray:
            bottom = c0 + (c1 - c0) * u
            top = c3 + (c2 - c3) * u
            return bottom + (top - bottom) * v

        drawn = 0
        for i in range(n):
            for j in range(n):
                tile = [
                    lerp(i / n, j / n),
                    lerp((i + 1) / n, j / n),
                    lerp((i + 1) / n, (j + 1) / n),
                    lerp(i / n, (j + 1) / n),
                ]
                projected = [self.project_point(p, camera)[0] for p in tile]
                if any(p is None for p in projected):
                    continue
                pygame.draw.polygon(
                    overlay, color, [(int(x), int(y)) for x, y in projected]
                )
                drawn += 1

        self.screen.blit(overlay, (0, 0))

        if edge_color is not None:
            edges = list(corners) + [corners[0]]
            for start, end in zip(edges, edges[1:]):
                self._draw_straight_line(
                    camera, np.asarray(start), np.asarray(end), n, edge_color
                )

        return drawn

    def draw_equatorial_plane(self, camera: Camera) -> None:
        h = self.equator_size / 2
        corners = np.array([
            [-h, -h, 0.0],
            [h, -h, 0.0],
            [h, h, 0.0],
            [-h, h, 0.0],
        ])
        self.draw_plane(camera, corners, Colors.EQUATOR_PLANE)

    def draw_orbit_plane(self, camera: Camera, path) -> None:
        corners = path.geometry.plane_corners(path.plane_side)
        self.draw_plane(camera, corners, Colors.ORBIT_PLANE, Colors.ORBIT_PLANE_EDGE)

    # -------------------------------------------------------------------------
    # Satellite
    # -------------------------------------------------------------------------

    def draw_satellite(
        self,
        camera: Camera,
        position: np.ndarray,
        direction: Optional[np.ndarray] = None,
        color: Tuple[int, int, int] = Colors.SATELLITE,
        size: Optional[int] = None,
    ) -> None:
        """Draw the satellite as a triangle pointing along its motion."""
        if size is None:
            size = self.satellite_size

        in_front = self.is_point_in_front_of_sphere(position, camera)
        proj, depth = self.project_point(position, camera)

        if proj is None:
            return

        perspective_size = size * (3.0 / depth) if depth > 0 else size
        perspective_size = max(4, min(20, perspective_size))

        screen_direction = None
        if direction is not None:
            proj_future, _ = self.project_point(position + direction * 0.1, camera)
            if proj_future is not None:
                screen_direction = (proj_future[0] - proj[0], proj_future[1] - proj[1])

        triangle_points = self._get_triangle_points(
            proj, perspective_size, screen_direction
        )

        if in_front:
            draw_color = color
            outline_color = (255, 255, 255)
            outline_width = 2
        else:
            draw_color = tuple(int(c * 0.4) for c in color)
            outline_color = tuple(int(c * 0.5) for c in color)
            outline_width = 1

        int_points = [(int(p[0]), int(p[1])) for p in triangle_points]
        pygame.draw.polygon(self.screen, draw_color, int_points)
        pygame.draw.polygon(self.screen, outline_color, int_points, outline_width)

    def _get_triangle_points(
        self,
        center: Tuple[float, float],
        size: float,
        direction: Optional[Tuple[float, float]] = None,
    ) -> List[Tuple[float, float]]:
        """Generate triangle vertices for the satellite marker."""
        if direction is not None and (direction[0] != 0 or direction[1] != 0):
            dx, dy = direction
            mag = math.sqrt(dx * dx + dy * dy)
            dx, dy = dx / mag, dy / mag
            px, py = -dy, dx
        else:
            dx, dy = 0, -1
            px, py = 1, 0

        cx, cy = center
        tip = (cx + dx * size, cy + dy * size)
        left = (
            cx - dx * size * 0.5 + px * size * 0.6,
            cy - dy * size * 0.5 + py * size * 0.6,
        )
        right = (
            cx - dx * size * 0.5 - px * size * 0.6,
            cy - dy * size * 0.5 - py * size * 0.6,
        )

        return [tip, left, right]

    # -------------------------------------------------------------------------
    # Text
    # -------------------------------------------------------------------------

    def make_label_surface(
        self, text: str, font: pygame.font.Font, padding: int = 6
    ) -> pygame.Surface:
        """Render text on a translucent box, cached per (text, font)."""
        key = (text, id(font), padding)
        surface = self._label_cache.get(key)
        if surface is None:
            text_surface = font.render(text, True, Colors.LABEL_TEXT)
            surface = pygame.Surface(
                (text_surface.get_width() + padding * 2,
                 text_surface.get_height() + padding * 2),
                pygame.SRCALPHA,
            )
            surface.fill(Colors.LABEL_BACKGROUND)
            surface.blit(text_surface, (padding, padding))
            self._label_cache[key] = surface
        return surface

    def draw_label(
        self,
        camera: Camera,
        text: str,
        point_3d: np.ndarray,
        font: pygame.font.Font,
    ) -> bool:
        """
        Draw a text label anchored at a 3D point.

        Labels are drawn on top of everything, like a depth-test-free sprite.

        Returns
        -------
        bool
            False if the anchor is behind the camera
        """
        proj, _ = self.project_point(point_3d, camera)
        if proj is None:
            return False

        surface = self.make_label_surface(text, font)
        self.screen.blit(
            surface,
            (int(proj[0] - surface.get_width() / 2),
             int(proj[1] - surface.get_height() / 2)),
        )
        return True

    def draw_text(
        self,
        text: str,
        position: Tuple[int, int],
        font: pygame.font.Font,
        color: Tuple[int, int, int] = Colors.TEXT,
    ) -> int:
        """Draw text and return height."""
        surface = font.render(text, True, color)
        self.screen.blit(surface, position)
        return surface.get_height()

    # -------------------------------------------------------------------------
    # Full frame
    # -------------------------------------------------------------------------

    def draw_scene(self, camera: Camera, context, font: pygame.font.Font) -> None:
        """
        Draw one frame of the scene from a SceneContext.

        Order: reference grid, hidden parts of lines, sphere, planes,
        visible parts of lines, satellite, labels.
        """
        path = context.path

        self.clear()
        self.draw_ground_grid(camera)

        self.draw_orbit_path(camera, path.points, draw_back=True)
        self.draw_aries_line(camera, draw_back=True)

        self.draw_sphere(camera)
        self.draw_sphere_grid(camera)

        self.draw_equatorial_plane(camera)
        self.draw_orbit_plane(camera, path)

        self.draw_aries_line(camera, draw_back=False)
        self.draw_orbit_path(camera, path.points, draw_back=False)

        direction = path.geometry.velocity_direction_at(context.clock.true_anomaly)
        self.draw_satellite(camera, context.satellite_position, direction)

        if context.labels_visible:
            h = self.equator_size / 2
            self.draw_label(
                camera, "Equatorial plane", np.array([-h, -h, 0.05]), font
            )
            corner = path.geometry.plane_corners(path.plane_side)[0]
            self.draw_label(
                camera, "Orbital plane", corner + path.geometry.normal * 0.05, font
            )

    def draw_info_panel(
        self,
        camera: Camera,
        context,
        font: pygame.font.Font,
        position: Tuple[int, int] = (10, 10),
    ) -> int:
        """
        Draw the orbit and camera readout.

        Returns
        -------
        int
            y coordinate below the last line
        """
        elements = context.elements
        clock = context.clock
        nu = clock.true_anomaly
        r = context.path.geometry.radius_at_true_anomaly(nu)

        info_lines = [
            f"a = {elements.semi_major_axis:.2f}   e = {elements.eccentricity:.2f}",
            f"i = {elements.inclination_deg:.0f}°   RAAN = {elements.raan_deg:.0f}°",
            f"Periapsis: {elements.periapsis_distance:.2f}",
            f"Apoapsis: {elements.apoapsis_distance:.2f}",
            "",
            f"True anomaly: {math.degrees(nu):.1f}°",
            f"Radius: {r:.3f}",
            f"Motion: {clock.mode.value}",
            f"Time Scale: {clock.time_scale:g}x" + (" [PAUSED]" if clock.paused else ""),
            "",
            f"Camera Longitude: {camera.theta_degrees:.1f}°",
            f"Camera Latitude: {camera.phi_degrees:.1f}°",
            f"Zoom: {camera.distance:.2f}",
            "",
            "Controls:",
            "Drag / arrows : Rotate",
            "Wheel / +/- : Zoom",
            "[ ] : Time scale",
            "SPACE : Pause/Resume",
            "K : Motion mode",
            "L : Labels",
            "R : Reset satellite",
            "ESC : Quit",
        ]

        x, y = position
        for line in info_lines:
            y += self.draw_text(line, (x, y), font) + 2

        return y
