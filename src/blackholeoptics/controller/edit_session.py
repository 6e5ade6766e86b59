"""
Coordinate Edit Session
=======================
Direct numeric entry of one ray's position and angle in physical units.

The form shows the physics convention: +y up and angles counter-clockwise
(0 = right, 90 = up). Rays are stored in screen convention, so y and the
angle are negated on the way in and out.

Every keystroke is staged as text. A value that parses as a finite number is
committed to the scene straight away; anything else only stays in the form.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
import math
from typing import Optional

from blackholeoptics.model.geometry_primitives import Point
from blackholeoptics.model.scene import RaySource, Scene
from blackholeoptics.model.viewport import normalize_angle_180, normalize_angle_degrees, to_physics_display

logger = logging.getLogger(__name__)


class EditField(str, Enum):
    X = "x"
    Y = "y"
    ANGLE = "angle"


@dataclass(frozen=True)
class EditSession:
    target_id: int
    x: str
    y: str
    angle: str

    def text(self, edit_field: EditField) -> str:
        return getattr(self, edit_field.value)

    def to_dict(self) -> dict[str, object]:
        return {"target_id": self.target_id, "x": self.x, "y": self.y, "angle": self.angle}


def display_values(ray: RaySource, body_radius: float) -> tuple[float, float, float]:
    """Return (x, y, angle) of a ray in physics convention."""
    shown = to_physics_display(ray.position, body_radius)
    return shown.x, shown.y, normalize_angle_180(-ray.angle)


def open_session(ray: RaySource, body_radius: float) -> EditSession:
    x, y, angle = display_values(ray, body_radius)
    logger.debug("Editing ray #%d.", ray.id)
    return EditSession(
        target_id=ray.id,
        x=f"{x + 0.0:.2f}",
        y=f"{y + 0.0:.2f}",
        angle=f"{angle + 0.0:.1f}",
    )


def parse_number(text: str) -> Optional[float]:
    """Parse a finite float, or return None."""
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def _commit(ray: RaySource, edit_field: EditField, value: float, body_radius: float) -> RaySource:
    if edit_field is EditField.X:
        return ray.moved_to(Point(value * body_radius, ray.position.y))
    if edit_field is EditField.Y:
        return ray.moved_to(Point(ray.position.x, -value * body_radius))
    return replace(ray, angle=normalize_angle_degrees(-value))


def apply_edit(
    session: EditSession,
    scene: Scene,
    edit_field: EditField,
    text: str,
    body_radius: float,
) -> EditSession:
    """
    Stage ``text`` for ``edit_field`` and commit it if it is a valid number.

    Returns:
        The session with the new staged text.
    """
    staged = replace(session, **{edit_field.value: text})

    value = parse_number(text)
    if value is None:
        logger.debug("Ignoring non-numeric %s value %r for ray #%d.", edit_field.value, text, session.target_id)
        return staged

    if session.target_id not in scene:
        logger.warning("Edit target ray #%d no longer exists.", session.target_id)
        return staged

    scene.update(session.target_id, lambda ray: _commit(ray, edit_field, value, body_radius))
    return staged
