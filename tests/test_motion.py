#!/usr/bin/env python3
"""
Tests for Satellite Motion

These tests verify:
1. Constant-rate motion advances the true anomaly linearly and wraps at 2π
2. Kepler's equation helpers invert each other
3. Keplerian motion slows down near apoapsis and matches constant-rate
   motion on circular orbits
4. Pause, time scale and reset behave as the frame loop expects
"""

import math
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from orbit_model import (
    AnomalyClock,
    MotionMode,
    OrbitalElements,
    eccentric_anomaly_from_mean,
    true_anomaly_from_eccentric,
    mean_anomaly_from_true,
)


TWO_PI = 2 * math.pi


def angle_difference(a: float, b: float) -> float:
    """Signed difference a - b wrapped into [-π, π)."""
    return (a - b + math.pi) % TWO_PI - math.pi


class TestKeplerHelpers:
    """Tests for the anomaly conversion functions."""

    @pytest.mark.parametrize("e", [0.0, 0.3, 0.6, 0.9])
    def test_keplers_equation_solved(self, e):
        for k in range(12):
            M = TWO_PI * k / 12
            E = eccentric_anomaly_from_mean(M, e)
            assert E - e * math.sin(E) == pytest.approx(M, abs=1e-9)

    @pytest.mark.parametrize("e", [0.0, 0.2, 0.6, 0.9])
    def test_round_trip(self, e, angles):
        for nu in angles:
            M = mean_anomaly_from_true(nu, e)
            E = eccentric_anomaly_from_mean(M, e)
            result = true_anomaly_from_eccentric(E, e)
            assert angle_difference(result, nu) == pytest.approx(0.0, abs=1e-8)

    def test_circular_anomalies_coincide(self):
        for nu in (0.0, 1.0, 2.5, 4.0):
            assert mean_anomaly_from_true(nu, 0.0) == pytest.approx(nu)

    def test_apsides_fixed_points(self):
        for e in (0.1, 0.8):
            assert mean_anomaly_from_true(0.0, e) == pytest.approx(0.0)
            assert mean_anomaly_from_true(math.pi, e) == pytest.approx(math.pi)

    def test_true_anomaly_range(self):
        nu = true_anomaly_from_eccentric(-0.5, 0.4)
        assert 0.0 <= nu < TWO_PI


class TestConstantRateClock:
    """Tests for the default constant-rate motion."""

    def test_advance(self, default_elements):
        clock = AnomalyClock(angular_speed=0.9)
        assert clock.advance(1.0, default_elements) == pytest.approx(0.9)
        assert clock.advance(0.5, default_elements) == pytest.approx(1.35)

    def test_wraps_modulo_two_pi(self, default_elements):
        clock = AnomalyClock(angular_speed=1.0)
        nu = clock.advance(TWO_PI + 0.25, default_elements)
        assert nu == pytest.approx(0.25)
        assert 0.0 <= clock.true_anomaly < TWO_PI

    def test_many_small_steps_equal_one_large(self, default_elements):
        stepped = AnomalyClock(angular_speed=0.9)
        for _ in range(600):
            stepped.advance(1 / 60, default_elements)
        single = AnomalyClock(angular_speed=0.9)
        single.advance(10.0, default_elements)
        assert stepped.true_anomaly == pytest.approx(single.true_anomaly, abs=1e-9)

    def test_independent_of_eccentricity(self):
        a = AnomalyClock(angular_speed=0.9)
        b = AnomalyClock(angular_speed=0.9)
        a.advance(2.0, OrbitalElements(2.0, 0.0))
        b.advance(2.0, OrbitalElements(2.0, 0.9))
        assert a.true_anomaly == pytest.approx(b.true_anomaly)

    def test_rejects_negative_dt(self, default_elements):
        with pytest.raises(ValueError):
            AnomalyClock().advance(-0.1, default_elements)

    def test_rejects_negative_speed(self):
        with pytest.raises(ValueError):
            AnomalyClock(angular_speed=-1.0)

    @pytest.mark.parametrize("time_scale", [0.0, -1.0])
    def test_rejects_non_positive_time_scale(self, time_scale):
        with pytest.raises(ValueError):
            AnomalyClock(time_scale=time_scale)

    def test_paused(self, default_elements):
        clock = AnomalyClock(angular_speed=0.9)
        clock.paused = True
        assert clock.advance(5.0, default_elements) == 0.0
        assert clock.elapsed_time == 0.0

    def test_time_scale(self, default_elements):
        clock = AnomalyClock(angular_speed=0.5, time_scale=4.0)
        assert clock.advance(0.5, default_elements) == pytest.approx(1.0)
        assert clock.elapsed_time == pytest.approx(2.0)

    def test_time_scale_limits(self):
        clock = AnomalyClock()
        for _ in range(20):
            clock.speed_up()
        assert clock.time_scale == AnomalyClock.MAX_TIME_SCALE
        for _ in range(40):
            clock.slow_down()
        assert clock.time_scale == AnomalyClock.MIN_TIME_SCALE

    def test_reset(self, default_elements):
        clock = AnomalyClock()
        clock.advance(3.0, default_elements)
        clock.reset()
        assert clock.true_anomaly == 0.0
        assert clock.elapsed_time == 0.0
        clock.reset(7.0)
        assert clock.true_anomaly == pytest.approx(7.0 - TWO_PI)


class TestKeplerianClock:
    """Tests for the areal-velocity-conserving motion."""

    def test_circular_matches_constant_rate(self):
        elements = OrbitalElements(2.0, 0.0)
        keplerian = AnomalyClock(angular_speed=0.9, mode=MotionMode.KEPLERIAN)
        constant = AnomalyClock(angular_speed=0.9)
        for _ in range(50):
            keplerian.advance(0.1, elements)
            constant.advance(0.1, elements)
            assert keplerian.true_anomaly == pytest.approx(constant.true_anomaly, abs=1e-8)

    def test_faster_at_periapsis_than_apoapsis(self):
        elements = OrbitalElements(2.0, 0.6)
        dt = 0.01

        near_peri = AnomalyClock(mode=MotionMode.KEPLERIAN, true_anomaly=0.0)
        near_apo = AnomalyClock(mode=MotionMode.KEPLERIAN, true_anomaly=math.pi)

        d_peri = near_peri.advance(dt, elements) - 0.0
        d_apo = near_apo.advance(dt, elements) - math.pi

        assert d_peri > d_apo > 0

    def test_full_period_returns_to_start(self):
        elements = OrbitalElements(2.0, 0.6)
        clock = AnomalyClock(angular_speed=1.0, mode=MotionMode.KEPLERIAN, true_anomaly=1.0)
        steps = 1000
        for _ in range(steps):
            clock.advance(TWO_PI / steps, elements)
        assert clock.true_anomaly == pytest.approx(1.0, abs=1e-6)

    def test_half_period_reaches_apoapsis(self):
        elements = OrbitalElements(2.0, 0.6)
        clock = AnomalyClock(angular_speed=1.0, mode=MotionMode.KEPLERIAN)
        clock.advance(math.pi, elements)
        assert clock.true_anomaly == pytest.approx(math.pi, abs=1e-8)

    def test_mode_switch_keeps_position(self, default_elements):
        clock = AnomalyClock(angular_speed=0.9)
        clock.advance(1.3, default_elements)
        before = clock.true_anomaly
        clock.toggle_mode()
        assert clock.mode == MotionMode.KEPLERIAN
        assert clock.true_anomaly == before
        assert clock.advance(0.0, default_elements) == pytest.approx(before, abs=1e-9)
        assert clock.toggle_mode() == MotionMode.CONSTANT_RATE

    def test_eccentricity_change_keeps_position(self):
        clock = AnomalyClock(mode=MotionMode.KEPLERIAN)
        clock.advance(1.0, OrbitalElements(2.0, 0.2))
        before = clock.true_anomaly
        clock.on_elements_changed()
        after = clock.advance(0.0, OrbitalElements(2.0, 0.8))
        assert after == pytest.approx(before, abs=1e-9)

    def test_repr(self):
        assert "keplerian" in repr(AnomalyClock(mode=MotionMode.KEPLERIAN))
