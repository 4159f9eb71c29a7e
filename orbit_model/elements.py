#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Orbital Elements for the Orbit Visualizer

Defines the four user-controlled orbital elements and the bounds used to
clamp control-surface input before it reaches the geometry model.
Distances are in display units (Earth radius = 1), angles in degrees.
"""

import math
from dataclasses import dataclass, replace as dataclass_replace
from typing import Dict, Tuple


# Names of the parameters a control surface may change
PARAMETER_NAMES = (
    "eccentricity",
    "semi_major_axis",
    "inclination_deg",
    "raan_deg",
)


@dataclass(frozen=True)
class OrbitalElements:
    """
    Elements describing one orbit around the central sphere.

    Parameters
    ----------
    semi_major_axis : float
        Half the longest diameter of the ellipse (display units, > 0)
    eccentricity : float
        Shape of the ellipse (0 = circular, must stay below 1)
    inclination_deg : float
        Tilt of the orbital plane from the equatorial plane (degrees)
    raan_deg : float
        Right ascension of the ascending node, measured from the
        First Point of Aries (degrees)
    """

    semi_major_axis: float = 2.0
    eccentricity: float = 0.6
    inclination_deg: float = 40.0
    raan_deg: float = 0.0

    def __post_init__(self):
        if self.semi_major_axis <= 0:
            raise ValueError("Semi-major axis must be positive")
        if not 0 <= self.eccentricity < 1:
            raise ValueError("Eccentricity must be in [0, 1)")

    @property
    def inclination(self) -> float:
        """Inclination in radians."""
        return math.radians(self.inclination_deg)

    @property
    def raan(self) -> float:
        """RAAN in radians."""
        return math.radians(self.raan_deg)

    @property
    def semi_minor_axis(self) -> float:
        """b = a * sqrt(1 - e²)"""
        return self.semi_major_axis * math.sqrt(1 - self.eccentricity**2)

    @property
    def semi_latus_rectum(self) -> float:
        """p = a * (1 - e²)"""
        return self.semi_major_axis * (1 - self.eccentricity**2)

    @property
    def periapsis_distance(self) -> float:
        """Distance from the focus at the closest point."""
        return self.semi_major_axis * (1 - self.eccentricity)

    @property
    def apoapsis_distance(self) -> float:
        """Distance from the focus at the farthest point."""
        return self.semi_major_axis * (1 + self.eccentricity)

    def replace(self, name: str, value: float) -> "OrbitalElements":
        """
        Return a copy with one parameter changed.

        Raises
        ------
        KeyError
            If ``name`` is not one of PARAMETER_NAMES
        """
        if name not in PARAMETER_NAMES:
            raise KeyError(f"Unknown orbital parameter: {name}")
        return dataclass_replace(self, **{name: float(value)})

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in PARAMETER_NAMES}

    def __repr__(self) -> str:
        return (
            f"OrbitalElements(a={self.semi_major_axis:.2f}, "
            f"e={self.eccentricity:.3f}, "
            f"i={self.inclination_deg:.1f}°, "
            f"RAAN={self.raan_deg:.1f}°)"
        )


@dataclass(frozen=True)
class ElementBounds:
    """
    Clamp ranges applied to control-surface input.

    These are UI-safety limits rather than physical ones. RAAN is not
    clamped but wrapped into [0, 360).

    Attributes
    ----------
    eccentricity : tuple
        (min, max) eccentricity
    semi_major_axis : tuple
        (min, max) semi-major axis in display units
    inclination_deg : tuple
        (min, max) inclination in degrees
    STEPS : dict
        Slider step size per parameter
    """

    eccentricity: Tuple[float, float] = (0.0, 0.9)
    semi_major_axis: Tuple[float, float] = (0.5, 6.0)
    inclination_deg: Tuple[float, float] = (0.0, 180.0)
    raan_deg: Tuple[float, float] = (0.0, 360.0)

    STEPS = {
        "eccentricity": 0.01,
        "semi_major_axis": 0.05,
        "inclination_deg": 1.0,
        "raan_deg": 1.0,
    }

    def __post_init__(self):
        low, high = self.eccentricity
        if low < 0 or high >= 1 or low > high:
            raise ValueError("Eccentricity bounds must lie within [0, 1)")
        low, high = self.semi_major_axis
        if low <= 0 or low > high:
            raise ValueError("Semi-major axis bounds must be positive")

    def range_for(self, name: str) -> Tuple[float, float]:
        if name not in PARAMETER_NAMES:
            raise KeyError(f"Unknown orbital parameter: {name}")
        return getattr(self, name)

    def clamp(self, name: str, value: float) -> float:
        """
        Bring a single parameter value into its valid range.

        Parameters
        ----------
        name : str
            One of PARAMETER_NAMES
        value : float
            Raw input value

        Returns
        -------
        float
            Clamped value (RAAN wrapped modulo 360)

        Raises
        ------
        ValueError
            If the value is NaN or infinite
        """
        low, high = self.range_for(name)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number, got {value}")
        if name == "raan_deg":
            return normalize_degrees(value)
        return min(high, max(low, float(value)))

    def clamp_elements(
        self,
        semi_major_axis: float,
        eccentricity: float,
        inclination_deg: float,
        raan_deg: float,
    ) -> OrbitalElements:
        """Build OrbitalElements from raw values, clamping each one."""
        return OrbitalElements(
            semi_major_axis=self.clamp("semi_major_axis", semi_major_axis),
            eccentricity=self.clamp("eccentricity", eccentricity),
            inclination_deg=self.clamp("inclination_deg", inclination_deg),
            raan_deg=self.clamp("raan_deg", raan_deg),
        )


def normalize_degrees(value: float) -> float:
    """Wrap an angle into [0, 360)."""
    wrapped = float(value) % 360.0
    # -1e-17 % 360 rounds to 360.0
    return 0.0 if wrapped >= 360.0 else wrapped


DEFAULT_BOUNDS = ElementBounds()
