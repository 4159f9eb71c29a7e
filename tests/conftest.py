#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides common fixtures, markers, and utilities for testing the orbit
model and the Pygame visualization layer.
"""

import math
import os
import sys
from pathlib import Path

import pytest

# Pygame must not open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "requires_pygame: mark test as requiring pygame"
    )


def pytest_collection_modifyitems(config, items):
    """Skip pygame tests when pygame is not installed."""
    try:
        import pygame
        pygame_available = True
    except ImportError:
        pygame_available = False

    skip_pygame = pytest.mark.skip(reason="pygame not installed")

    for item in items:
        if "requires_pygame" in item.keywords and not pygame_available:
            item.add_marker(skip_pygame)


# =============================================================================
# ORBIT MODEL FIXTURES
# =============================================================================

@pytest.fixture
def default_elements():
    """The orbit shown at startup: a=2, e=0.6, i=40°, RAAN=0°."""
    from orbit_model import OrbitalElements

    return OrbitalElements(
        semi_major_axis=2.0,
        eccentricity=0.6,
        inclination_deg=40.0,
        raan_deg=0.0,
    )


@pytest.fixture
def circular_elements():
    """Inclined circular orbit."""
    from orbit_model import OrbitalElements

    return OrbitalElements(
        semi_major_axis=3.0,
        eccentricity=0.0,
        inclination_deg=55.0,
        raan_deg=120.0,
    )


@pytest.fixture
def sample_elements():
    """A spread of valid elements covering the slider ranges."""
    from orbit_model import OrbitalElements

    samples = []
    for a in (0.5, 2.0, 6.0):
        for e in (0.0, 0.3, 0.9):
            for inc in (0.0, 40.0, 90.0, 180.0):
                for raan in (0.0, 135.0, 359.0):
                    samples.append(OrbitalElements(a, e, inc, raan))
    return samples


@pytest.fixture
def scene_context():
    """Scene context with the default configuration."""
    from orbit_model import SceneContext

    return SceneContext()


@pytest.fixture
def angles():
    """True anomalies spread around the orbit."""
    return [2 * math.pi * k / 24 for k in range(24)]


# =============================================================================
# PYGAME FIXTURES
# =============================================================================

@pytest.fixture
def pygame_module():
    """Initialised pygame with the dummy video driver."""
    pygame = pytest.importorskip("pygame")
    pygame.init()
    yield pygame
    pygame.quit()


@pytest.fixture
def screen(pygame_module):
    """Off-screen drawing surface."""
    return pygame_module.Surface((800, 600))


@pytest.fixture
def font(pygame_module):
    """Default pygame font."""
    return pygame_module.font.Font(None, 18)
