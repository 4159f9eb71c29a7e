#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orbit Geometry for the Orbit Visualizer

Maps orbital elements to positions using the polar conic equation
r = a(1 - e²) / (1 + e·cos ν) followed by the inclination and RAAN
rotations. Nothing here depends on the rendering layer.

Coordinates: the orbital-plane (perifocal) frame has x toward periapsis
and z along the orbit normal. The display frame is z-up with x pointing
at the First Point of Aries.
"""

import math
import numpy as np
from typing import Tuple

from .elements import OrbitalElements


def radius_at_true_anomaly(
    semi_major_axis: float, eccentricity: float, nu: float
) -> float:
    """
    Calculate orbital radius at a given true anomaly.

    Parameters
    ----------
    semi_major_axis : float
        Semi-major axis (display units)
    eccentricity : float
        Eccentricity, strictly below 1
    nu : float
        True anomaly (radians)

    Returns
    -------
    float
        Distance from the central body's center
    """
    a = semi_major_axis
    e = eccentricity
    return a * (1 - e**2) / (1 + e * math.cos(nu))


def position_in_orbital_plane(
    semi_major_axis: float, eccentricity: float, nu: float
) -> Tuple[float, float]:
    """
    Calculate position in the orbital plane (perifocal coordinates).

    Returns
    -------
    tuple
        (x, y) position in orbital plane, x points to periapsis
    """
    r = radius_at_true_anomaly(semi_major_axis, eccentricity, nu)
    return r * math.cos(nu), r * math.sin(nu)


def orbital_plane_to_display_matrix(
    inclination_deg: float, raan_deg: float
) -> np.ndarray:
    """
    Get rotation matrix from the orbital plane to the display frame.

    R = Rz(Ω) · Rx(i): the plane is first tilted about the line of nodes
    (x-axis) by the inclination, then turned about the reference z-axis
    by the RAAN.

    Returns
    -------
    np.ndarray
        3x3 orthogonal rotation matrix
    """
    i = math.radians(inclination_deg)
    Omega = math.radians(raan_deg)

    cos_O = math.cos(Omega)
    sin_O = math.sin(Omega)
    cos_i = math.cos(i)
    sin_i = math.sin(i)

    R = np.array([
        [cos_O, -sin_O * cos_i, sin_O * sin_i],
        [sin_O, cos_O * cos_i, -cos_O * sin_i],
        [0.0, sin_i, cos_i],
    ])

    return R


def path_points(
    elements: OrbitalElements,
    segment_count: int,
    rotate: bool = True,
) -> np.ndarray:
    """
    Sample the orbit as a closed polyline.

    The conic is evaluated at segment_count + 1 evenly spaced true
    anomalies from 0 to 2π inclusive, so the first and last points
    coincide.

    Parameters
    ----------
    elements : OrbitalElements
        Orbit to sample
    segment_count : int
        Number of line segments (>= 1)
    rotate : bool
        Apply inclination and RAAN rotation (default True). When False
        the flat orbital-plane path (z = 0) is returned.

    Returns
    -------
    np.ndarray
        Array of shape (segment_count + 1, 3)
    """
    if segment_count < 1:
        raise ValueError("Segment count must be at least 1")

    a = elements.semi_major_axis
    e = elements.eccentricity

    nu = np.linspace(0.0, 2 * math.pi, segment_count + 1)
    r = a * (1 - e**2) / (1 + e * np.cos(nu))

    points = np.zeros((segment_count + 1, 3))
    points[:, 0] = r * np.cos(nu)
    points[:, 1] = r * np.sin(nu)

    if rotate:
        R = orbital_plane_to_display_matrix(
            elements.inclination_deg, elements.raan_deg
        )
        points = points @ R.T

    # cos/sin of 2π are not exactly those of 0
    points[-1] = points[0]

    return points


def position_at(elements: OrbitalElements, true_anomaly: float) -> np.ndarray:
    """
    Calculate the display-frame position at a single true anomaly.

    Parameters
    ----------
    elements : OrbitalElements
        Orbit to evaluate
    true_anomaly : float
        True anomaly (radians)

    Returns
    -------
    np.ndarray
        Position vector [x, y, z]
    """
    x_pf, y_pf = position_in_orbital_plane(
        elements.semi_major_axis, elements.eccentricity, true_anomaly
    )
    R = orbital_plane_to_display_matrix(
        elements.inclination_deg, elements.raan_deg
    )
    return R @ np.array([x_pf, y_pf, 0.0])


class OrbitGeometry:
    """
    Derived geometry of one orbit, used by the renderer.

    Parameters
    ----------
    elements : OrbitalElements
        The orbit's elements

    Attributes
    ----------
    elements : OrbitalElements
        The orbit's elements
    rotation : np.ndarray
        Orbital-plane to display-frame rotation matrix
    """

    def __init__(self, elements: OrbitalElements):
        self.elements = elements
        self.rotation = orbital_plane_to_display_matrix(
            elements.inclination_deg, elements.raan_deg
        )

    def radius_at_true_anomaly(self, nu: float) -> float:
        return radius_at_true_anomaly(
            self.elements.semi_major_axis, self.elements.eccentricity, nu
        )

    def position_at(self, nu: float) -> np.ndarray:
        x_pf, y_pf = position_in_orbital_plane(
            self.elements.semi_major_axis, self.elements.eccentricity, nu
        )
        return self.rotation @ np.array([x_pf, y_pf, 0.0])

    def path_points(self, segment_count: int) -> np.ndarray:
        return path_points(self.elements, segment_count)

    @property
    def periapsis_position(self) -> np.ndarray:
        return self.position_at(0.0)

    @property
    def apoapsis_position(self) -> np.ndarray:
        return self.position_at(math.pi)

    @property
    def ascending_node_position(self) -> np.ndarray:
        """
        Point where the orbit crosses the equatorial plane going north.

        The argument of periapsis is fixed at zero, so the node sits at
        the periapsis.
        """
        return self.position_at(0.0)

    @property
    def normal(self) -> np.ndarray:
        """Unit normal of the orbital plane (angular momentum direction)."""
        return self.rotation @ np.array([0.0, 0.0, 1.0])

    def velocity_direction_at(self, nu: float) -> np.ndarray:
        """
        Unit vector along the direction of motion at true anomaly nu.

        Uses the perifocal velocity direction (-sin ν, e + cos ν).
        """
        e = self.elements.eccentricity
        v_perifocal = np.array([-math.sin(nu), e + math.cos(nu), 0.0])
        v = self.rotation @ v_perifocal
        return v / np.linalg.norm(v)

    def plane_corners(self, side: float) -> np.ndarray:
        """
        Corners of a square of the given side centered on the focus,
        lying in the orbital plane.

        Returns
        -------
        np.ndarray
            Array of shape (4, 3), ordered around the square
        """
        h = side / 2
        corners = np.array([
            [-h, -h, 0.0],
            [h, -h, 0.0],
            [h, h, 0.0],
            [-h, h, 0.0],
        ])
        return corners @ self.rotation.T

    def __repr__(self) -> str:
        return f"OrbitGeometry({self.elements!r})"
