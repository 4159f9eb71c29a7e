#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Camera Module for the Orbit Visualizer

An orbiting camera that always looks at the center of the sphere. It is
steered by the arrow keys, left-drag and the mouse wheel.
"""

import math
import numpy as np
from typing import Tuple


WORLD_UP = np.array([0.0, 0.0, 1.0])


class Camera:
    """
    Orbiting camera in spherical coordinates around the origin.

    theta is the azimuth measured from +x (the First Point of Aries
    direction), phi the elevation above the equatorial plane. phi is kept
    just short of the poles so the view basis never degenerates.

    Parameters
    ----------
    theta : float
        Initial azimuth in radians (default -1.2)
    phi : float
        Initial elevation in radians (default 0.39)
    distance : float
        Initial distance from origin (default 6.5)
    min_distance : float
        Closest zoom (default 2.0)
    max_distance : float
        Farthest zoom (default 50.0)
    rotation_speed : float
        Radians per arrow-key frame (default 0.03)
    zoom_speed : float
        Distance change per zoom-key frame (default 0.15)
    drag_sensitivity : float
        Radians per pixel of mouse drag (default 0.006)
    """

    PHI_LIMIT = math.pi / 2 - 0.01

    def __init__(
        self,
        theta: float = -1.2,
        phi: float = 0.39,
        distance: float = 6.5,
        min_distance: float = 2.0,
        max_distance: float = 50.0,
        rotation_speed: float = 0.03,
        zoom_speed: float = 0.15,
        drag_sensitivity: float = 0.006,
    ):
        self.min_distance = min_distance
        self.max_distance = max_distance
        self.rotation_speed = rotation_speed
        self.zoom_speed = zoom_speed
        self.drag_sensitivity = drag_sensitivity
        self.set_position_spherical(theta, phi, distance)

    def direction(self) -> np.ndarray:
        """Unit vector from the origin toward the camera."""
        cos_phi = math.cos(self.phi)
        return np.array([
            cos_phi * math.cos(self.theta),
            cos_phi * math.sin(self.theta),
            math.sin(self.phi),
        ])

    def get_position(self) -> np.ndarray:
        return self.distance * self.direction()

    def get_view_matrix(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Camera basis vectors.

        Returns
        -------
        Tuple[np.ndarray, np.ndarray, np.ndarray]
            (forward, up, right) unit vectors; forward points at the origin
        """
        forward = -self.direction()
        right = np.cross(forward, WORLD_UP)
        right /= np.linalg.norm(right)
        up = np.cross(right, forward)
        return forward, up, right

    def rotate_by(self, d_theta: float, d_phi: float) -> None:
        self.set_position_spherical(
            self.theta + d_theta, self.phi + d_phi, self.distance
        )

    def rotate_left(self) -> None:
        self.rotate_by(-self.rotation_speed, 0.0)

    def rotate_right(self) -> None:
        self.rotate_by(self.rotation_speed, 0.0)

    def rotate_up(self) -> None:
        self.rotate_by(0.0, self.rotation_speed)

    def rotate_down(self) -> None:
        self.rotate_by(0.0, -self.rotation_speed)

    def drag(self, dx: float, dy: float) -> None:
        """Rotate from a mouse drag of (dx, dy) pixels; the scene follows the cursor."""
        self.rotate_by(-dx * self.drag_sensitivity, dy * self.drag_sensitivity)

    def zoom_by(self, delta: float) -> None:
        """Move toward (negative delta) or away from the origin, within limits."""
        self.set_position_spherical(self.theta, self.phi, self.distance + delta)

    def zoom_in(self) -> None:
        self.zoom_by(-self.zoom_speed)

    def zoom_out(self) -> None:
        self.zoom_by(self.zoom_speed)

    def set_position_spherical(
        self, theta: float, phi: float, distance: float
    ) -> None:
        """Place the camera, wrapping theta and clamping phi and distance."""
        self.theta = theta % (2 * math.pi)
        self.phi = min(self.PHI_LIMIT, max(-self.PHI_LIMIT, phi))
        self.distance = min(self.max_distance, max(self.min_distance, distance))

    @property
    def theta_degrees(self) -> float:
        return math.degrees(self.theta)

    @property
    def phi_degrees(self) -> float:
        return math.degrees(self.phi)

    def __repr__(self) -> str:
        return (
            f"Camera(theta={self.theta_degrees:.1f}°, "
            f"phi={self.phi_degrees:.1f}°, distance={self.distance:.2f})"
        )
