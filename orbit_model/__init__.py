#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OrbitView Orbit Model Package

This package provides the numerical side of the orbit visualizer:
orbital elements and their input clamping, the conic geometry that turns
elements into path points and satellite positions, satellite motion, and
the parameter state that the control surface writes to.

The model can be used independently of any visualization.
"""

from .elements import (
    OrbitalElements,
    ElementBounds,
    DEFAULT_BOUNDS,
    PARAMETER_NAMES,
    normalize_degrees,
)

from .orbit import (
    OrbitGeometry,
    radius_at_true_anomaly,
    position_in_orbital_plane,
    orbital_plane_to_display_matrix,
    path_points,
    position_at,
)

from .motion import (
    AnomalyClock,
    MotionMode,
    eccentric_anomaly_from_mean,
    true_anomaly_from_eccentric,
    mean_anomaly_from_true,
)

from .state import (
    OrbitConfig,
    OrbitPath,
    ParameterState,
    SceneContext,
    compute_path,
    update_geometry,
)


__all__ = [
    # Elements
    "OrbitalElements",
    "ElementBounds",
    "DEFAULT_BOUNDS",
    "PARAMETER_NAMES",
    "normalize_degrees",

    # Geometry
    "OrbitGeometry",
    "radius_at_true_anomaly",
    "position_in_orbital_plane",
    "orbital_plane_to_display_matrix",
    "path_points",
    "position_at",

    # Motion
    "AnomalyClock",
    "MotionMode",
    "eccentric_anomaly_from_mean",
    "true_anomaly_from_eccentric",
    "mean_anomaly_from_true",

    # State
    "OrbitConfig",
    "OrbitPath",
    "ParameterState",
    "SceneContext",
    "compute_path",
    "update_geometry",
]

__version__ = "1.0.0"
