#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Satellite Motion Along the Orbit

The satellite marker is driven by a true anomaly that grows with time and
wraps modulo 2π. Two modes are supported:

- CONSTANT_RATE: true anomaly advances at a fixed angular speed. This is
  visually even but does not conserve areal velocity.
- KEPLERIAN: mean anomaly advances at the angular speed and the true
  anomaly follows from Kepler's equation, so the satellite slows down
  near apoapsis.
"""

import math
from enum import Enum
from typing import Optional

from .elements import OrbitalElements

TWO_PI = 2 * math.pi


class MotionMode(Enum):
    """How the true anomaly advances with time."""

    CONSTANT_RATE = "constant_rate"
    KEPLERIAN = "keplerian"


def eccentric_anomaly_from_mean(
    M: float, eccentricity: float, tolerance: float = 1e-10
) -> float:
    """
    Calculate eccentric anomaly from mean anomaly using Newton-Raphson iteration.

    Solves Kepler's equation: M = E - e * sin(E)

    Parameters
    ----------
    M : float
        Mean anomaly (radians)
    eccentricity : float
        Orbit eccentricity (< 1)
    tolerance : float
        Convergence tolerance

    Returns
    -------
    float
        Eccentric anomaly (radians)
    """
    e = eccentricity

    # Initial guess
    E = M if e < 0.8 else math.pi

    for _ in range(50):
        f = E - e * math.sin(E) - M
        f_prime = 1 - e * math.cos(E)
        E_new = E - f / f_prime

        if abs(E_new - E) < tolerance:
            return E_new
        E = E_new

    return E


def true_anomaly_from_eccentric(E: float, eccentricity: float) -> float:
    """
    Calculate true anomaly from eccentric anomaly.

    Returns
    -------
    float
        True anomaly in [0, 2π)
    """
    e = eccentricity
    nu = 2 * math.atan2(
        math.sqrt(1 + e) * math.sin(E / 2),
        math.sqrt(1 - e) * math.cos(E / 2)
    )
    return nu % TWO_PI


def mean_anomaly_from_true(nu: float, eccentricity: float) -> float:
    """Inverse of the two functions above, wrapped into [0, 2π)."""
    e = eccentricity
    E = 2 * math.atan2(
        math.sqrt(1 - e) * math.sin(nu / 2),
        math.sqrt(1 + e) * math.cos(nu / 2)
    )
    return (E - e * math.sin(E)) % TWO_PI


class AnomalyClock:
    """
    Advances the satellite's true anomaly each frame.

    Parameters
    ----------
    angular_speed : float
        Radians per second. In KEPLERIAN mode this is the mean motion.
    mode : MotionMode
        How the anomaly advances (default CONSTANT_RATE)
    true_anomaly : float
        Starting true anomaly (default 0, at periapsis)
    time_scale : float
        Multiplier applied to every time delta

    Attributes
    ----------
    paused : bool
        When set, advance() leaves the anomaly unchanged
    elapsed_time : float
        Total scaled time advanced so far (seconds)
    """

    DEFAULT_ANGULAR_SPEED = 0.9
    MIN_TIME_SCALE = 0.125
    MAX_TIME_SCALE = 16.0

    def __init__(
        self,
        angular_speed: float = DEFAULT_ANGULAR_SPEED,
        mode: MotionMode = MotionMode.CONSTANT_RATE,
        true_anomaly: float = 0.0,
        time_scale: float = 1.0,
    ):
        if angular_speed < 0:
            raise ValueError("Angular speed must be non-negative")
        if time_scale <= 0:
            raise ValueError("Time scale must be positive")

        self.angular_speed = angular_speed
        self.mode = mode
        self.time_scale = time_scale
        self.paused = False
        self.elapsed_time = 0.0
        self._true_anomaly = true_anomaly % TWO_PI
        # Mean anomaly is only tracked in KEPLERIAN mode; None means it
        # must be re-derived from the true anomaly on the next advance.
        self._mean_anomaly: Optional[float] = None

    @property
    def true_anomaly(self) -> float:
        """Current true anomaly (radians, in [0, 2π))."""
        return self._true_anomaly

    def advance(self, dt: float, elements: OrbitalElements) -> float:
        """
        Advance the clock by a real-time delta.

        Parameters
        ----------
        dt : float
            Elapsed real time in seconds (>= 0)
        elements : OrbitalElements
            Current orbit, needed for the eccentricity in KEPLERIAN mode

        Returns
        -------
        float
            The new true anomaly (radians)
        """
        if dt < 0:
            raise ValueError("Time step must be non-negative")

        if self.paused:
            return self._true_anomaly

        scaled_dt = dt * self.time_scale
        self.elapsed_time += scaled_dt
        delta = self.angular_speed * scaled_dt

        if self.mode == MotionMode.CONSTANT_RATE:
            self._true_anomaly = (self._true_anomaly + delta) % TWO_PI
        else:
            e = elements.eccentricity
            if self._mean_anomaly is None:
                self._mean_anomaly = mean_anomaly_from_true(self._true_anomaly, e)
            self._mean_anomaly = (self._mean_anomaly + delta) % TWO_PI
            E = eccentric_anomaly_from_mean(self._mean_anomaly, e)
            self._true_anomaly = true_anomaly_from_eccentric(E, e)

        return self._true_anomaly

    def set_mode(self, mode: MotionMode) -> None:
        """Switch motion mode, keeping the current true anomaly."""
        self.mode = mode
        self._mean_anomaly = None

    def toggle_mode(self) -> MotionMode:
        if self.mode == MotionMode.CONSTANT_RATE:
            self.set_mode(MotionMode.KEPLERIAN)
        else:
            self.set_mode(MotionMode.CONSTANT_RATE)
        return self.mode

    def on_elements_changed(self) -> None:
        """
        Re-anchor the mean anomaly after the eccentricity changed, so the
        marker stays where it is instead of jumping.
        """
        self._mean_anomaly = None

    def reset(self, true_anomaly: float = 0.0) -> None:
        """Return the satellite to the given anomaly and clear elapsed time."""
        self._true_anomaly = true_anomaly % TWO_PI
        self._mean_anomaly = None
        self.elapsed_time = 0.0

    def speed_up(self) -> float:
        self.time_scale = min(self.MAX_TIME_SCALE, self.time_scale * 2)
        return self.time_scale

    def slow_down(self) -> float:
        self.time_scale = max(self.MIN_TIME_SCALE, self.time_scale / 2)
        return self.time_scale

    def __repr__(self) -> str:
        return (
            f"AnomalyClock(ν={math.degrees(self._true_anomaly):.1f}°, "
            f"speed={self.angular_speed:.2f} rad/s, "
            f"mode={self.mode.value}, scale={self.time_scale}x)"
        )
