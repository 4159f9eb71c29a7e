#!/usr/bin/env python3
"""
Parameter State and Scene Context

Holds the single mutable parameter set written by the control surface and
the derived geometry read by the render step. Parameter changes flow one
way: control surface -> ParameterState -> subscribers -> update_geometry.

Nothing in this module touches the rendering layer, so the whole update
path can run headless.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .elements import OrbitalElements, ElementBounds, PARAMETER_NAMES
from .motion import AnomalyClock, MotionMode
from .orbit import OrbitGeometry, path_points


logger = logging.getLogger(__name__)

ParameterListener = Callable[[OrbitalElements, OrbitalElements], None]


@dataclass
class OrbitConfig:
    """
    Configuration for an orbit visualization.

    Attributes
    ----------
    elements : OrbitalElements
        Initial orbital elements.
    segment_count : int
        Number of segments used to draw the orbit path.
    angular_speed : float
        Satellite angular speed (radians per second).
    motion_mode : MotionMode
        Constant-rate or Keplerian satellite motion.
    time_scale : float
        Initial multiplier on real time.
    bounds : ElementBounds
        Clamp ranges for control-surface input.
    labels_visible : bool
        Whether scene labels start visible.
    """

    elements: OrbitalElements = field(default_factory=OrbitalElements)
    segment_count: int = 256
    angular_speed: float = AnomalyClock.DEFAULT_ANGULAR_SPEED
    motion_mode: MotionMode = MotionMode.CONSTANT_RATE
    time_scale: float = 1.0
    bounds: ElementBounds = field(default_factory=ElementBounds)
    labels_visible: bool = True


class ParameterState:
    """
    Current orbital elements plus change notification.

    There is one writer (the control surface) and any number of readers.
    Every write is clamped through the bounds, so stored elements are
    always valid.

    Parameters
    ----------
    elements : OrbitalElements
        Initial elements (clamped on entry)
    bounds : ElementBounds
        Clamp ranges
    """

    def __init__(
        self,
        elements: Optional[OrbitalElements] = None,
        bounds: Optional[ElementBounds] = None,
    ):
        self.bounds = bounds or ElementBounds()
        elements = elements or OrbitalElements()
        self._elements = self.bounds.clamp_elements(**elements.as_dict())
        self._listeners: List[ParameterListener] = []

        if self._elements != elements:
            logger.warning(f"Initial elements clamped to {self._elements!r}")

    @property
    def elements(self) -> OrbitalElements:
        return self._elements

    def get(self, name: str) -> float:
        if name not in PARAMETER_NAMES:
            raise KeyError(f"Unknown orbital parameter: {name}")
        return getattr(self._elements, name)

    def subscribe(self, listener: ParameterListener) -> Callable[[], None]:
        """
        Register a callback invoked as listener(old, new) on every change.

        Returns
        -------
        callable
            Call it to unsubscribe
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_parameter(self, name: str, value: float) -> OrbitalElements:
        """
        Change one parameter.

        Parameters
        ----------
        name : str
            One of "eccentricity", "semi_major_axis", "inclination_deg",
            "raan_deg"
        value : float
            Requested value, clamped into the valid range

        Returns
        -------
        OrbitalElements
            The elements after the change
        """
        clamped = self.bounds.clamp(name, value)
        if clamped != value:
            logger.debug(f"{name}={value} clamped to {clamped}")

        old = self._elements
        if getattr(old, name) == clamped:
            return old

        new = old.replace(name, clamped)
        self._elements = new
        logger.debug(f"Parameter {name} changed: {getattr(old, name)} -> {clamped}")

        for listener in list(self._listeners):
            listener(old, new)

        return new


@dataclass(frozen=True)
class OrbitPath:
    """
    Geometry derived from one set of elements.

    Attributes
    ----------
    elements : OrbitalElements
        Elements the path was computed from.
    points : np.ndarray
        Display-frame path, shape (segment_count + 1, 3).
    geometry : OrbitGeometry
        Helper for point evaluation and plane corners.
    """

    elements: OrbitalElements
    points: np.ndarray
    geometry: OrbitGeometry

    @property
    def plane_side(self) -> float:
        """The orbital plane square scales with the semi-major axis."""
        return 2.0 * self.elements.semi_major_axis

    @property
    def segment_count(self) -> int:
        return len(self.points) - 1


def compute_path(elements: OrbitalElements, segment_count: int) -> OrbitPath:
    return OrbitPath(
        elements=elements,
        points=path_points(elements, segment_count),
        geometry=OrbitGeometry(elements),
    )


def update_geometry(
    old: OrbitalElements,
    new: OrbitalElements,
    previous: Optional[OrbitPath],
    segment_count: int,
) -> OrbitPath:
    """
    Return the path for ``new``, reusing ``previous`` when nothing changed.

    Parameters
    ----------
    old : OrbitalElements
        Elements before the change
    new : OrbitalElements
        Elements after the change
    previous : OrbitPath, optional
        Path computed for ``old``
    segment_count : int
        Segments to sample if a new path is needed

    Returns
    -------
    OrbitPath
        Path matching ``new``
    """
    if (
        previous is not None
        and old == new
        and previous.elements == new
        and previous.segment_count == segment_count
    ):
        return previous
    return compute_path(new, segment_count)


class SceneContext:
    """
    Everything the render step needs for one frame.

    Parameters
    ----------
    config : OrbitConfig, optional
        Initial configuration

    Attributes
    ----------
    parameters : ParameterState
        The mutable orbital elements
    clock : AnomalyClock
        Drives the satellite's true anomaly
    path : OrbitPath
        Current orbit path
    satellite_position : np.ndarray
        Current satellite position in the display frame
    labels_visible : bool
        Whether scene labels are drawn
    """

    def __init__(self, config: Optional[OrbitConfig] = None):
        self.config = config or OrbitConfig()
        self.parameters = ParameterState(self.config.elements, self.config.bounds)
        self.clock = AnomalyClock(
            angular_speed=self.config.angular_speed,
            mode=self.config.motion_mode,
            time_scale=self.config.time_scale,
        )
        self.labels_visible = self.config.labels_visible
        self.path = compute_path(self.parameters.elements, self.config.segment_count)
        self.satellite_position = self.path.geometry.position_at(
            self.clock.true_anomaly
        )
        self.frame_count = 0

        self.parameters.subscribe(self._on_parameters_changed)

    @property
    def elements(self) -> OrbitalElements:
        return self.parameters.elements

    def _on_parameters_changed(
        self, old: OrbitalElements, new: OrbitalElements
    ) -> None:
        self.path = update_geometry(old, new, self.path, self.config.segment_count)
        if old.eccentricity != new.eccentricity:
            self.clock.on_elements_changed()
        self.satellite_position = self.path.geometry.position_at(
            self.clock.true_anomaly
        )

    def set_parameter(self, name: str, value: float) -> OrbitalElements:
        return self.parameters.set_parameter(name, value)

    def set_labels_visible(self, visible: bool) -> None:
        self.labels_visible = bool(visible)
        logger.debug(f"Labels visible: {self.labels_visible}")

    def step(self, dt: float) -> np.ndarray:
        """
        Advance the satellite by a real-time delta.

        Parameters
        ----------
        dt : float
            Real time elapsed since the previous frame (seconds)

        Returns
        -------
        np.ndarray
            New satellite position
        """
        nu = self.clock.advance(dt, self.elements)
        self.satellite_position = self.path.geometry.position_at(nu)
        self.frame_count += 1
        return self.satellite_position

    def __repr__(self) -> str:
        return f"SceneContext({self.elements!r}, {self.clock!r})"
