#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OrbitView Visualization Package

This package provides the Pygame-based presentation layer of the orbit
visualizer: camera, renderer, control panel and the frame loop.

The visualization package depends on the orbit_model package; the model
itself has no dependency on Pygame.

Usage:
    from visualization import Visualizer

    visualizer = Visualizer()
    visualizer.run()
"""

from .camera import Camera
from .renderer import Renderer, Colors
from .controls import ControlPanel, Slider, Checkbox
from .visualizer import Visualizer, run_visualizer


__all__ = [
    "Camera",
    "Renderer",
    "Colors",
    "ControlPanel",
    "Slider",
    "Checkbox",
    "Visualizer",
    "run_visualizer",
]

__version__ = "1.0.0"
