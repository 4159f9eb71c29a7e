#!/usr/bin/env python3
"""
Tests for the Control Panel

These tests drive the sliders and checkbox with synthetic mouse events and
check that each widget emits exactly one scalar per change, which the
scene context then clamps and applies.
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

pygame = pytest.importorskip("pygame")

from orbit_model import DEFAULT_BOUNDS, OrbitalElements, SceneContext
from visualization.controls import Checkbox, ControlPanel, Slider


def mouse_down(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)


def mouse_up(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=button)


def mouse_move(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


@pytest.fixture
def slider():
    changes = []
    s = Slider(
        name="eccentricity",
        label="Eccentricity",
        minimum=0.0,
        maximum=0.9,
        step=0.01,
        value=0.6,
        on_change=lambda name, value: changes.append((name, value)),
    )
    s.rect = pygame.Rect(100, 50, 200, Slider.ROW_HEIGHT)
    s.changes = changes
    return s


class TestSlider:
    """Tests for a single slider."""

    def test_snap(self, slider):
        assert slider.snap(0.456) == pytest.approx(0.46)
        assert slider.snap(-1.0) == 0.0
        assert slider.snap(5.0) == 0.9

    def test_value_at_track_ends(self, slider):
        track = slider.track_rect
        assert slider.value_at_x(track.x - 50) == 0.0
        assert slider.value_at_x(track.right + 50) == 0.9
        assert slider.value_at_x(track.x + track.width / 2) == pytest.approx(0.45)

    def test_click_sets_value_and_emits(self, slider):
        track = slider.track_rect
        consumed = slider.handle_event(mouse_down((track.x, track.centery)))

        assert consumed
        assert slider.dragging
        assert slider.value == 0.0
        assert slider.changes == [("eccentricity", 0.0)]

    def test_drag_then_release(self, slider):
        track = slider.track_rect
        slider.handle_event(mouse_down((track.x, track.centery)))
        slider.handle_event(mouse_move((track.right, track.centery + 30)))
        assert slider.value == 0.9

        assert slider.handle_event(mouse_up((track.right, track.centery)))
        assert not slider.dragging
        assert not slider.handle_event(mouse_move((track.x, track.centery)))
        assert slider.value == 0.9
        assert len(slider.changes) == 2

    def test_click_outside_ignored(self, slider):
        assert not slider.handle_event(mouse_down((5, 5)))
        assert slider.changes == []

    def test_right_click_ignored(self, slider):
        track = slider.track_rect
        assert not slider.handle_event(mouse_down((track.x, track.centery), button=3))

    def test_no_event_when_value_unchanged(self, slider):
        assert not slider.set_value(0.6)
        assert slider.changes == []

    def test_set_value_without_notify(self, slider):
        assert slider.set_value(0.3, notify=False)
        assert slider.value == 0.3
        assert slider.changes == []

    def test_display_value(self, slider):
        assert slider.display_value == "0.60"

    def test_invalid_range(self):
        with pytest.raises(ValueError):
            Slider("x", "X", 1.0, 1.0, 0.1, 1.0)
        with pytest.raises(ValueError):
            Slider("x", "X", 0.0, 1.0, 0.0, 0.5)


class TestCheckbox:
    """Tests for the labels checkbox."""

    def test_click_toggles(self):
        toggles = []
        checkbox = Checkbox("Labels", True, toggles.append)
        checkbox.rect = pygame.Rect(0, 0, 100, Checkbox.ROW_HEIGHT)

        assert checkbox.handle_event(mouse_down((10, 10)))
        assert checkbox.checked is False
        checkbox.handle_event(mouse_down((10, 10)))
        assert toggles == [False, True]

    def test_click_outside(self):
        checkbox = Checkbox("Labels")
        checkbox.rect = pygame.Rect(0, 0, 100, Checkbox.ROW_HEIGHT)
        assert not checkbox.handle_event(mouse_down((500, 500)))
        assert checkbox.checked is True


class TestControlPanel:
    """Tests for the assembled panel wired to a scene context."""

    @pytest.fixture
    def wired(self):
        context = SceneContext()
        panel = ControlPanel(
            context.elements,
            context.parameters.bounds,
            on_change=context.set_parameter,
            on_labels_toggle=context.set_labels_visible,
            labels_visible=context.labels_visible,
        )
        panel.layout((1000, 800))
        return context, panel

    def test_slider_order_and_ranges(self, wired):
        _, panel = wired
        names = [s.name for s in panel.sliders]
        assert names == ["inclination_deg", "eccentricity", "semi_major_axis", "raan_deg"]
        assert (panel.slider("semi_major_axis").minimum,
                panel.slider("semi_major_axis").maximum) == (0.5, 6.0)
        assert panel.slider("raan_deg").maximum == 360.0

    def test_initial_values(self, wired):
        _, panel = wired
        assert panel.slider("eccentricity").value == 0.6
        assert panel.slider("inclination_deg").value == 40.0

    def test_layout_top_right(self, wired):
        _, panel = wired
        assert panel.rect.right == 990
        assert panel.rect.top == 10
        for slider in panel.sliders:
            assert panel.rect.contains(slider.rect)

    def test_slider_drag_updates_context(self, wired):
        context, panel = wired
        track = panel.slider("semi_major_axis").track_rect

        assert panel.handle_event(mouse_down((track.right, track.centery)))
        assert context.elements.semi_major_axis == 6.0
        assert context.path.elements.semi_major_axis == 6.0
        assert panel.dragging

        panel.handle_event(mouse_up((track.right, track.centery)))
        assert not panel.dragging

    def test_raan_end_of_track_wraps(self, wired):
        context, panel = wired
        track = panel.slider("raan_deg").track_rect
        panel.handle_event(mouse_down((track.right, track.centery)))
        assert context.elements.raan_deg == 0.0

    def test_raan_slider_stays_at_end_after_sync(self, wired):
        context, panel = wired
        context.set_parameter("raan_deg", 90.0)
        panel.sync(context.elements, context.labels_visible)

        slider = panel.slider("raan_deg")
        track = slider.track_rect
        panel.handle_event(mouse_down((track.right, track.centery)))
        panel.handle_event(mouse_up((track.right, track.centery)))
        panel.sync(context.elements, context.labels_visible)

        assert context.elements.raan_deg == 0.0
        assert slider.value == 360.0

    def test_sync_moves_raan_slider_on_real_change(self, wired):
        context, panel = wired
        context.set_parameter("raan_deg", 120.0)
        panel.sync(context.elements, context.labels_visible)
        assert panel.slider("raan_deg").value == 120.0

    def test_checkbox_updates_context(self, wired):
        context, panel = wired
        box = panel.labels_checkbox.rect
        assert panel.handle_event(mouse_down(box.center))
        assert context.labels_visible is False

    def test_background_click_consumed(self, wired):
        context, panel = wired
        corner = (panel.rect.x + 2, panel.rect.y + 2)
        assert panel.handle_event(mouse_down(corner))
        assert context.elements == OrbitalElements()

    def test_click_elsewhere_not_consumed(self, wired):
        _, panel = wired
        assert not panel.handle_event(mouse_down((50, 700)))

    def test_sync_does_not_emit(self, wired):
        context, panel = wired
        context.set_parameter("eccentricity", 0.25)
        panel.sync(context.elements, False)
        assert panel.slider("eccentricity").value == 0.25
        assert panel.labels_checkbox.checked is False

    def test_unknown_slider(self, wired):
        _, panel = wired
        with pytest.raises(KeyError):
            panel.slider("argument_of_periapsis")

    def test_draw(self, wired, screen, font):
        _, panel = wired
        panel.layout(screen.get_size())
        panel.draw(screen, font)
        # The panel background is drawn over the top-right corner
        assert screen.get_at((panel.rect.x + 1, panel.rect.y + 1))[:3] != (0, 0, 0)

    def test_bounds_steps_used(self, wired):
        _, panel = wired
        for slider in panel.sliders:
            assert slider.step == DEFAULT_BOUNDS.STEPS[slider.name]
