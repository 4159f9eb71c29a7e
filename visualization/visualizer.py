#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Visualizer Module for the Orbit Visualizer

Provides a Pygame-based interactive view of a single orbit. Each frame the
visualizer handles input (which may change orbital parameters through the
control panel), advances the satellite along the orbit and redraws.
"""

import logging
from typing import Optional

import pygame

from orbit_model import OrbitConfig, SceneContext
from .camera import Camera
from .controls import ControlPanel
from .renderer import Renderer


logger = logging.getLogger(__name__)


class Visualizer:
    """
    Interactive visualization of one orbit.

    The visualizer creates a resizable Pygame window and renders the
    sphere, reference planes, orbit and satellite. The control panel on
    the right changes the orbit; the camera is driven by mouse and keys.

    Parameters
    ----------
    context : SceneContext, optional
        Scene to display. A default one is created if omitted.
    width : int
        Window width in pixels (default 1000)
    height : int
        Window height in pixels (default 800)
    title : str
        Window title
    fps : int
        Frame rate cap (default 60)

    Attributes
    ----------
    screen : pygame.Surface
        The Pygame display surface
    camera : Camera
        The 3D camera
    renderer : Renderer
        The rendering engine
    panel : ControlPanel
        Sliders and checkbox writing into the context
    running : bool
        Whether the visualizer is running
    """

    def __init__(
        self,
        context: Optional[SceneContext] = None,
        width: int = 1000,
        height: int = 800,
        title: str = "Orbit Visualizer",
        fps: int = 60,
    ):
        pygame.init()

        self.width = width
        self.height = height
        self.fps = fps
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(title)

        self.context = context or SceneContext()
        self.camera = Camera()
        self.renderer = Renderer(self.screen)
        self.panel = ControlPanel(
            self.context.elements,
            self.context.parameters.bounds,
            on_change=self.context.set_parameter,
            on_labels_toggle=self.context.set_labels_visible,
            labels_visible=self.context.labels_visible,
        )
        self.panel.layout((width, height))

        self.running = False
        self._drag_origin = None

        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont('Arial', 16)
        self.label_font = pygame.font.SysFont('Trebuchet MS', 18)

    def _handle_events(self) -> None:
        """Handle Pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event.key)

            elif event.type in (
                pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEMOTION
            ):
                if not self.panel.handle_event(event):
                    self._handle_camera_mouse(event)

            elif event.type == pygame.MOUSEWHEEL:
                self._handle_wheel(event.y, pygame.mouse.get_pos())

    def _handle_wheel(self, y: int, mouse_pos) -> None:
        """Wheel zooms the camera unless the cursor is over the panel."""
        if self.panel.rect.collidepoint(mouse_pos):
            return
        self.camera.zoom_by(-y * self.camera.zoom_speed * 2)

    def _handle_resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.renderer.resize(self.screen)
        self.panel.layout((width, height))
        logger.debug(f"Window resized to {width}x{height}")

    def _handle_camera_mouse(self, event: pygame.event.Event) -> None:
        """Left-drag rotates the camera."""
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._drag_origin = event.pos
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._drag_origin = None
        elif event.type == pygame.MOUSEMOTION and self._drag_origin is not None:
            dx = event.pos[0] - self._drag_origin[0]
            dy = event.pos[1] - self._drag_origin[1]
            self.camera.drag(dx, dy)
            self._drag_origin = event.pos

    def _handle_keydown(self, key: int) -> None:
        """Handle key press events."""
        clock = self.context.clock

        if key == pygame.K_ESCAPE:
            self.running = False

        elif key == pygame.K_SPACE:
            clock.paused = not clock.paused

        elif key == pygame.K_r:
            clock.reset()
            logger.info("Satellite reset to periapsis")

        elif key == pygame.K_k:
            mode = clock.toggle_mode()
            logger.info(f"Motion mode: {mode.value}")

        elif key == pygame.K_l:
            self.context.set_labels_visible(not self.context.labels_visible)

        elif key == pygame.K_LEFTBRACKET:
            logger.info(f"Time scale: {clock.slow_down()}x")

        elif key == pygame.K_RIGHTBRACKET:
            logger.info(f"Time scale: {clock.speed_up()}x")

    def _handle_continuous_keys(self) -> None:
        """Handle continuous key presses for camera control."""
        keys = pygame.key.get_pressed()

        if keys[pygame.K_LEFT]:
            self.camera.rotate_left()
        if keys[pygame.K_RIGHT]:
            self.camera.rotate_right()
        if keys[pygame.K_UP]:
            self.camera.rotate_up()
        if keys[pygame.K_DOWN]:
            self.camera.rotate_down()

        if keys[pygame.K_PLUS] or keys[pygame.K_EQUALS] or keys[pygame.K_KP_PLUS]:
            self.camera.zoom_in()
        if keys[pygame.K_MINUS] or keys[pygame.K_KP_MINUS]:
            self.camera.zoom_out()

    def _update(self, dt: float) -> None:
        """
        Advance the satellite.

        Parameters
        ----------
        dt : float
            Real time delta in seconds
        """
        self.context.step(dt)
        self.panel.sync(self.context.elements, self.context.labels_visible)

    def _render(self) -> None:
        """Render the current frame."""
        self.renderer.draw_scene(self.camera, self.context, self.label_font)
        self.renderer.draw_info_panel(self.camera, self.context, self.font)
        self.panel.draw(self.screen, self.font)
        pygame.display.flip()

    def step(self) -> bool:
        """
        Perform a single visualization step.

        This is useful for external control of the visualization loop.

        Returns
        -------
        bool
            False if the visualizer should stop, True otherwise
        """
        dt = self.clock.tick(self.fps) / 1000.0

        self._handle_events()

        if not self.running:
            return False

        self._handle_continuous_keys()
        self._update(dt)
        self._render()

        return True

    def run(self) -> None:
        """
        Run the visualization main loop.

        This blocks until the user closes the window or presses ESC.
        """
        self.running = True
        logger.info(f"Starting visualization: {self.context.elements!r}")

        while self.step():
            pass

        pygame.quit()

    def close(self) -> None:
        """Close the visualizer and clean up resources."""
        pygame.quit()


def run_visualizer(
    config: Optional[OrbitConfig] = None,
    width: int = 1000,
    height: int = 800,
) -> None:
    """
    Convenience function to launch the visualizer.

    Parameters
    ----------
    config : OrbitConfig, optional
        Initial orbit and motion settings
    width : int
        Window width
    height : int
        Window height
    """
    visualizer = Visualizer(SceneContext(config), width=width, height=height)
    visualizer.run()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    print("Starting Orbit Visualizer")
    print("=" * 50)
    print("\nControls:")
    print("  Mouse drag / arrows : Rotate camera")
    print("  Wheel / +/-         : Zoom in/out")
    print("  [ ]                 : Decrease/increase time scale")
    print("  SPACE               : Pause/Resume")
    print("  K                   : Toggle Keplerian motion")
    print("  L                   : Toggle labels")
    print("  R                   : Reset satellite")
    print("  ESC                 : Quit")
    print()

    run_visualizer()
