"""
Viewport & Unit Conversion
==========================
Stateless math converting between screen pixels, body-centric "world" pixels
and physical units (multiples of the critical radius).

Frames
------
- Screen: pixels on the canvas, origin at the top-left corner, +y down.
- World: pixels at zoom = 1 relative to the body center, +y down. Ray sources
  are stored in this frame.
- Physical: world / body_radius. When shown to a user the y axis is flipped so
  that +y points up.

The transform is ``screen = world * zoom + center + pan``.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace

from blackholeoptics import config
from blackholeoptics.model.geometry_primitives import Point, Vector


@dataclass(frozen=True)
class Viewport:
    """Canvas size, zoom and pan. Instances are immutable; use the helpers below."""
    width: float = config.DEFAULT_CANVAS_WIDTH
    height: float = config.DEFAULT_CANVAS_HEIGHT
    zoom: float = 1.0
    pan: Vector = field(default_factory=lambda: Vector(0.0, 0.0))

    @property
    def center(self) -> Point:
        """Screen position of the body center before panning."""
        return Point(self.width / 2, self.height / 2)

    @property
    def body_diameter(self) -> float:
        return min(self.width, self.height, config.MAX_BODY_DIAMETER)

    @property
    def body_radius(self) -> float:
        """Critical radius in world pixels."""
        return self.body_diameter * config.BODY_RADIUS_FRACTION

    def to_dict(self) -> dict[str, float]:
        return {
            "width": self.width,
            "height": self.height,
            "zoom": self.zoom,
            "pan_x": self.pan.x,
            "pan_y": self.pan.y,
        }


def clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


def world_to_screen(p: Point, viewport: Viewport) -> Point:
    center = viewport.center
    return Point(
        p.x * viewport.zoom + center.x + viewport.pan.x,
        p.y * viewport.zoom + center.y + viewport.pan.y,
    )


def screen_to_world(p: Point, viewport: Viewport) -> Point:
    center = viewport.center
    return Point(
        (p.x - center.x - viewport.pan.x) / viewport.zoom,
        (p.y - center.y - viewport.pan.y) / viewport.zoom,
    )


def physical_units(p: Point, body_radius: float) -> Point:
    """World pixels -> multiples of the critical radius (screen y convention)."""
    return Point(p.x / body_radius, p.y / body_radius)


def to_physics_display(p: Point, body_radius: float) -> Point:
    """World pixels -> physical units with +y up, as presented to the user."""
    return Point(p.x / body_radius, -p.y / body_radius)


def from_physics_display(p: Point, body_radius: float) -> Point:
    """Inverse of :func:`to_physics_display`."""
    return Point(p.x * body_radius, -p.y * body_radius)


def normalize_angle_degrees(angle: float) -> float:
    """Wrap an angle to [0, 360)."""
    wrapped = ((angle % 360.0) + 360.0) % 360.0
    # Tiny negative inputs can round up to exactly 360.0
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def normalize_angle_180(angle: float) -> float:
    """Wrap an angle to (-180, 180]."""
    wrapped = normalize_angle_degrees(angle)
    if wrapped > 180.0:
        wrapped -= 360.0
    return wrapped


def with_zoom(viewport: Viewport, zoom: float) -> Viewport:
    return replace(viewport, zoom=clamp(zoom, config.ZOOM_MIN, config.ZOOM_MAX))


def zoom_by_wheel(viewport: Viewport, delta: float) -> Viewport:
    """Apply a wheel delta; positive deltas (scrolling down) zoom out."""
    return with_zoom(viewport, viewport.zoom - delta * config.WHEEL_ZOOM_RATE)


def step_zoom(viewport: Viewport, step: float) -> Viewport:
    """Zoom by a fixed increment, as the sidebar +/- buttons do."""
    return with_zoom(viewport, viewport.zoom + step)


def pan_to(viewport: Viewport, pan: Vector) -> Viewport:
    return replace(viewport, pan=pan)


def resize(viewport: Viewport, width: float, height: float) -> Viewport:
    return replace(viewport, width=width, height=height)
