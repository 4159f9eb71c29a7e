#!/usr/bin/env python3
"""
Control Panel Module

Pygame widgets for changing the orbit: one slider per orbital element and
a checkbox for scene labels. Widgets do not touch the orbit model directly;
each slider emits on_change(name, value) with the single scalar that
changed, and the checkbox emits on_toggle(checked).
"""

from typing import Callable, List, Optional, Tuple

import pygame

from orbit_model import ElementBounds, OrbitalElements

from .renderer import Colors


ParameterCallback = Callable[[str, float], None]
ToggleCallback = Callable[[bool], None]


class PanelColors:
    """Control panel palette."""

    BACKGROUND = (12, 18, 32, 200)
    TRACK = (60, 70, 95)
    TRACK_FILL = (68, 200, 136)
    KNOB = (230, 238, 255)
    KNOB_ACTIVE = (255, 221, 51)
    BOX = (230, 238, 255)


class Slider:
    """
    Horizontal range slider bound to one orbital parameter.

    Parameters
    ----------
    name : str
        Parameter name emitted with each change
    label : str
        Text shown above the track
    minimum : float
        Value at the left end
    maximum : float
        Value at the right end
    step : float
        Values snap to multiples of step from minimum
    value : float
        Initial value
    value_format : str
        Format spec for the displayed value
    on_change : callable, optional
        Called as on_change(name, value) when the value changes
    """

    ROW_HEIGHT = 46
    TRACK_HEIGHT = 6
    KNOB_RADIUS = 7

    def __init__(
        self,
        name: str,
        label: str,
        minimum: float,
        maximum: float,
        step: float,
        value: float,
        value_format: str = ".2f",
        on_change: Optional[ParameterCallback] = None,
    ):
        if maximum <= minimum:
            raise ValueError("Slider maximum must exceed minimum")
        if step <= 0:
            raise ValueError("Slider step must be positive")

        self.name = name
        self.label = label
        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self.value_format = value_format
        self.on_change = on_change
        self.value = self.snap(value)
        self.dragging = False
        self.rect = pygame.Rect(0, 0, 200, self.ROW_HEIGHT)

    @property
    def track_rect(self) -> pygame.Rect:
        return pygame.Rect(
            self.rect.x,
            self.rect.y + 26,
            self.rect.width,
            self.TRACK_HEIGHT,
        )

    @property
    def hit_rect(self) -> pygame.Rect:
        """Clickable area around the track, taller than the drawn line."""
        return self.track_rect.inflate(self.KNOB_RADIUS * 2, self.KNOB_RADIUS * 2)

    @property
    def display_value(self) -> str:
        return format(self.value, self.value_format)

    def snap(self, value: float) -> float:
        """Clamp into range and round to the nearest step."""
        value = min(self.maximum, max(self.minimum, float(value)))
        steps = round((value - self.minimum) / self.step)
        snapped = self.minimum + steps * self.step
        return round(min(self.maximum, snapped), 6)

    def value_at_x(self, x: float) -> float:
        track = self.track_rect
        fraction = (x - track.x) / max(1, track.width)
        fraction = min(1.0, max(0.0, fraction))
        return self.snap(self.minimum + fraction * (self.maximum - self.minimum))

    def knob_x(self) -> int:
        fraction = (self.value - self.minimum) / (self.maximum - self.minimum)
        return int(self.track_rect.x + fraction * self.track_rect.width)

    def set_value(self, value: float, notify: bool = True) -> bool:
        """
        Set the slider value.

        Returns
        -------
        bool
            True if the value changed
        """
        snapped = self.snap(value)
        if snapped == self.value:
            return False
        self.value = snapped
        if notify and self.on_change is not None:
            self.on_change(self.name, self.value)
        return True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Process a mouse event.

        Returns
        -------
        bool
            True if the event was consumed by this slider
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.hit_rect.collidepoint(event.pos):
                self.dragging = True
                self.set_value(self.value_at_x(event.pos[0]))
                return True

        elif event.type == pygame.MOUSEMOTION and self.dragging:
            self.set_value(self.value_at_x(event.pos[0]))
            return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            if self.dragging:
                self.dragging = False
                return True

        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        text = font.render(self.label, True, Colors.TEXT)
        surface.blit(text, (self.rect.x, self.rect.y + 2))
        value_text = font.render(self.display_value, True, Colors.TEXT_DIM)
        surface.blit(
            value_text,
            (self.rect.right - value_text.get_width(), self.rect.y + 2),
        )

        track = self.track_rect
        pygame.draw.rect(surface, PanelColors.TRACK, track, border_radius=3)
        knob_x = self.knob_x()
        filled = pygame.Rect(track.x, track.y, knob_x - track.x, track.height)
        if filled.width > 0:
            pygame.draw.rect(surface, PanelColors.TRACK_FILL, filled, border_radius=3)

        knob_color = PanelColors.KNOB_ACTIVE if self.dragging else PanelColors.KNOB
        pygame.draw.circle(
            surface, knob_color, (knob_x, track.centery), self.KNOB_RADIUS
        )

    def __repr__(self) -> str:
        return f"Slider({self.name}={self.display_value})"


class Checkbox:
    """
    Labelled on/off toggle.

    Parameters
    ----------
    label : str
        Text shown left of the box
    checked : bool
        Initial state
    on_toggle : callable, optional
        Called as on_toggle(checked) after every click
    """

    ROW_HEIGHT = 28
    BOX_SIZE = 16

    def __init__(
        self,
        label: str,
        checked: bool = True,
        on_toggle: Optional[ToggleCallback] = None,
    ):
        self.label = label
        self.checked = checked
        self.on_toggle = on_toggle
        self.rect = pygame.Rect(0, 0, 200, self.ROW_HEIGHT)

    @property
    def box_rect(self) -> pygame.Rect:
        return pygame.Rect(
            self.rect.right - self.BOX_SIZE,
            self.rect.y + (self.ROW_HEIGHT - self.BOX_SIZE) // 2,
            self.BOX_SIZE,
            self.BOX_SIZE,
        )

    def toggle(self) -> bool:
        self.checked = not self.checked
        if self.on_toggle is not None:
            self.on_toggle(self.checked)
        return self.checked

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.toggle()
                return True
        return False

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        text = font.render(self.label, True, Colors.TEXT)
        surface.blit(
            text, (self.rect.x, self.rect.centery - text.get_height() // 2)
        )
        box = self.box_rect
        pygame.draw.rect(surface, PanelColors.BOX, box, 2)
        if self.checked:
            pygame.draw.line(
                surface, PanelColors.BOX,
                (box.x + 3, box.centery), (box.centerx - 1, box.bottom - 4), 2,
            )
            pygame.draw.line(
                surface, PanelColors.BOX,
                (box.centerx - 1, box.bottom - 4), (box.right - 3, box.y + 3), 2,
            )


class ControlPanel:
    """
    Panel of sliders for the orbital elements plus a labels checkbox.

    Parameters
    ----------
    elements : OrbitalElements
        Initial slider values
    bounds : ElementBounds
        Slider ranges and steps
    on_change : callable
        Called as on_change(name, value) for each slider change
    on_labels_toggle : callable, optional
        Called as on_labels_toggle(visible) when the checkbox is clicked
    labels_visible : bool
        Initial checkbox state
    width : int
        Panel width in pixels
    """

    PADDING = 12

    # (parameter, label, value format), in display order
    SLIDER_SPECS = (
        ("inclination_deg", "Inclination (deg)", ".0f"),
        ("eccentricity", "Eccentricity", ".2f"),
        ("semi_major_axis", "Semi-Major Axis", ".2f"),
        ("raan_deg", "RAAN (deg)", ".0f"),
    )

    def __init__(
        self,
        elements: OrbitalElements,
        bounds: ElementBounds,
        on_change: ParameterCallback,
        on_labels_toggle: Optional[ToggleCallback] = None,
        labels_visible: bool = True,
        width: int = 260,
    ):
        self.width = width
        self.bounds = bounds
        self.sliders: List[Slider] = []

        for name, label, value_format in self.SLIDER_SPECS:
            minimum, maximum = bounds.range_for(name)
            self.sliders.append(
                Slider(
                    name=name,
                    label=label,
                    minimum=minimum,
                    maximum=maximum,
                    step=bounds.STEPS[name],
                    value=getattr(elements, name),
                    value_format=value_format,
                    on_change=on_change,
                )
            )

        self.labels_checkbox = Checkbox("Labels", labels_visible, on_labels_toggle)
        self.rect = pygame.Rect(0, 0, width, self._content_height())

    def _content_height(self) -> int:
        return (
            self.PADDING * 2
            + Slider.ROW_HEIGHT * len(self.sliders)
            + Checkbox.ROW_HEIGHT
        )

    def layout(self, screen_size: Tuple[int, int], margin: int = 10) -> None:
        """Place the panel in the top-right corner of the screen."""
        screen_width, _ = screen_size
        self.rect = pygame.Rect(
            screen_width - self.width - margin,
            margin,
            self.width,
            self._content_height(),
        )
        inner_width = self.width - self.PADDING * 2
        y = self.rect.y + self.PADDING
        for slider in self.sliders:
            slider.rect = pygame.Rect(
                self.rect.x + self.PADDING, y, inner_width, Slider.ROW_HEIGHT
            )
            y += Slider.ROW_HEIGHT
        self.labels_checkbox.rect = pygame.Rect(
            self.rect.x + self.PADDING, y, inner_width, Checkbox.ROW_HEIGHT
        )

    def slider(self, name: str) -> Slider:
        for slider in self.sliders:
            if slider.name == name:
                return slider
        raise KeyError(f"No slider for parameter: {name}")

    @property
    def dragging(self) -> bool:
        return any(slider.dragging for slider in self.sliders)

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Offer an event to each widget.

        Returns
        -------
        bool
            True if a widget consumed the event, so the camera should not
            also react to it
        """
        for slider in self.sliders:
            if slider.handle_event(event):
                return True
        if self.labels_checkbox.handle_event(event):
            return True
        # Swallow clicks on the panel background too
        if event.type in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            return self.rect.collidepoint(event.pos)
        return False

    def sync(self, elements: OrbitalElements, labels_visible: bool) -> None:
        """Reflect state changed elsewhere (keyboard, clamping) without emitting."""
        for slider in self.sliders:
            if slider.dragging:
                continue
            # A RAAN slider left at 360 already matches a state of 0
            if self.bounds.clamp(slider.name, slider.value) == getattr(elements, slider.name):
                continue
            slider.set_value(getattr(elements, slider.name), notify=False)
        self.labels_checkbox.checked = labels_visible

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        background = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        background.fill(PanelColors.BACKGROUND)
        surface.blit(background, self.rect.topleft)

        for slider in self.sliders:
            slider.draw(surface, font)
        self.labels_checkbox.draw(surface, font)
