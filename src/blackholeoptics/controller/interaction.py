"""
Interaction Controller
======================
Translates raw pointer events into scene and viewport changes.

Why is this file needed?
------------------------
1. Routing: The canvas widget only reports what happened (button, position,
   modifiers). Deciding whether that means "place", "drag", "rotate", "pan"
   or "edit" lives here, where it can be tested without a window.
2. Gesture exclusivity: Exactly one gesture is active at a time, tracked by
   ``Mode``.

Gestures
--------
- Click on empty canvas: place a ray (90 deg with Shift, else 0 deg).
- Left drag on a ray: move it.
- Right drag on a ray: rotate it (0.5 deg per horizontal pixel).
- Shift + right click on a ray: edit its coordinates.
- Double click on a ray: delete it.
- Middle drag, or Alt + left drag: pan.
- Wheel: zoom.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
import logging
from typing import Optional

from blackholeoptics import config
from blackholeoptics.controller.edit_session import EditField, apply_edit, open_session
from blackholeoptics.model.geometry_primitives import Point, Vector
from blackholeoptics.model.state import EngineState
from blackholeoptics.model.viewport import pan_to, screen_to_world, step_zoom, zoom_by_wheel

logger = logging.getLogger(__name__)


class MouseButton(IntEnum):
    """Button codes in DOM order."""
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


@dataclass(frozen=True)
class Modifiers:
    shift: bool = False
    alt: bool = False


NO_MODIFIERS = Modifiers()


class Mode(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    ROTATING = "rotating"
    PANNING = "panning"
    EDITING = "editing"


class InteractionController:
    """
    State machine over an :class:`EngineState`.

    The controller is the only writer of the state. Every handler runs to
    completion and returns True when something visible changed, so the host
    knows when to repaint.
    """

    def __init__(self, state: EngineState, fire_on_place: bool = config.FIRE_ON_PLACE) -> None:
        self.state = state
        self.fire_on_place = fire_on_place

        self.mode: Mode = Mode.IDLE
        self.target_id: Optional[int] = None

        self._last_x: Optional[float] = None
        self._pan_press_point: Optional[Point] = None
        self._pan_at_press: Vector = Vector(0.0, 0.0)
        self._pan_button: Optional[MouseButton] = None
        self._suppress_next_click: bool = False

    # ------------------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------------------

    def hit_test(self, pos: Point) -> Optional[int]:
        radius = config.HIT_RADIUS_PX * self.state.viewport.zoom
        return self.state.scene.hit_test(pos, self.state.viewport, radius)

    def _to_idle(self) -> None:
        self.mode = Mode.IDLE
        self.target_id = None
        self._last_x = None
        self._pan_press_point = None
        self._pan_button = None

    # ------------------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------------------

    def press(self, button: MouseButton, pos: Point, modifiers: Modifiers = NO_MODIFIERS) -> bool:
        hit = self.hit_test(pos)

        if self.mode is Mode.EDITING:
            # Only Shift + right click on another ray does anything: it retargets the form
            if button is MouseButton.SECONDARY and modifiers.shift and hit is not None:
                return self._open_edit(hit)
            return False

        if self.mode is not Mode.IDLE:
            return False

        if button is MouseButton.PRIMARY and hit is not None:
            self.mode = Mode.DRAGGING
            self.target_id = hit
            return False

        if button is MouseButton.SECONDARY and hit is not None:
            if modifiers.shift:
                return self._open_edit(hit)
            self.mode = Mode.ROTATING
            self.target_id = hit
            self._last_x = pos.x
            return False

        if button is MouseButton.MIDDLE or (button is MouseButton.PRIMARY and modifiers.alt):
            self.mode = Mode.PANNING
            self._pan_press_point = pos
            self._pan_at_press = self.state.viewport.pan
            self._pan_button = button
            return False

        return False

    def move(self, pos: Point) -> bool:
        if self.mode is Mode.DRAGGING and self.target_id is not None:
            world = screen_to_world(pos, self.state.viewport)
            self.state.scene.update(self.target_id, lambda ray: ray.moved_to(world))
            return True

        if self.mode is Mode.ROTATING and self.target_id is not None and self._last_x is not None:
            delta_x = pos.x - self._last_x
            self._last_x = pos.x
            self.state.scene.update(
                self.target_id,
                lambda ray: ray.rotated_to(ray.angle + delta_x * config.ROTATE_DEGREES_PER_PIXEL),
            )
            return True

        if self.mode is Mode.PANNING and self._pan_press_point is not None:
            delta = pos - self._pan_press_point
            self.state.viewport = pan_to(self.state.viewport, self._pan_at_press + delta)
            return True

        return False

    def release(self, button: MouseButton, pos: Point) -> bool:
        if self.mode is Mode.DRAGGING and button is MouseButton.PRIMARY:
            self._to_idle()
        elif self.mode is Mode.ROTATING and button is MouseButton.SECONDARY:
            self._to_idle()
        elif self.mode is Mode.PANNING and button is self._pan_button:
            # Only a primary release is followed by a click event
            if button is MouseButton.PRIMARY:
                self._suppress_next_click = True
            self._to_idle()
        return False

    def click(self, pos: Point, modifiers: Modifiers = NO_MODIFIERS) -> bool:
        """Primary click (press + release) on the canvas: place a ray."""
        if self._suppress_next_click:
            self._suppress_next_click = False
            return False

        if self.mode is not Mode.IDLE:
            return False

        if self.hit_test(pos) is not None:
            return False

        world = screen_to_world(pos, self.state.viewport)
        angle = config.SHIFT_PLACEMENT_ANGLE if modifiers.shift else 0.0
        ray_id = self.state.scene.create(
            world,
            angle,
            zoom=self.state.viewport.zoom,
            body_radius=self.state.body_radius,
            fired=self.fire_on_place,
        )
        return ray_id is not None

    def double_click(self, pos: Point) -> bool:
        if self.mode is not Mode.IDLE:
            return False
        hit = self.hit_test(pos)
        if hit is None:
            return False
        self.state.scene.delete(hit)
        return True

    def wheel(self, delta: float) -> bool:
        before = self.state.viewport.zoom
        self.state.viewport = zoom_by_wheel(self.state.viewport, delta)
        return self.state.viewport.zoom != before

    # ------------------------------------------------------------------------------
    # Edit session
    # ------------------------------------------------------------------------------

    def _open_edit(self, ray_id: int) -> bool:
        ray = self.state.scene.get(ray_id)
        if ray is None:
            return False
        self.state.edit_session = open_session(ray, self.state.body_radius)
        self.mode = Mode.EDITING
        self.target_id = ray_id
        return True

    def edit_field(self, edit_field: EditField, text: str) -> bool:
        session = self.state.edit_session
        if self.mode is not Mode.EDITING or session is None:
            return False
        self.state.edit_session = apply_edit(session, self.state.scene, edit_field, text, self.state.body_radius)
        return True

    def close_edit(self) -> bool:
        if self.mode is not Mode.EDITING:
            return False
        self.state.edit_session = None
        self._to_idle()
        return True

    # ------------------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------------------

    def clear_all(self) -> bool:
        if self.mode is Mode.EDITING:
            self.close_edit()
        self.state.scene.clear()
        self._to_idle()
        return True

    def fire_all(self) -> bool:
        return self.state.scene.fire_all() > 0

    def zoom_in(self) -> bool:
        self.state.viewport = step_zoom(self.state.viewport, config.ZOOM_BUTTON_STEP)
        return True

    def zoom_out(self) -> bool:
        self.state.viewport = step_zoom(self.state.viewport, -config.ZOOM_BUTTON_STEP)
        return True

    def toggle_gravity(self) -> bool:
        self.state.gravity_enabled = not self.state.gravity_enabled
        logger.info("Gravity %s.", "enabled" if self.state.gravity_enabled else "disabled")
        return True

    def toggle_grid(self) -> bool:
        self.state.show_grid = not self.state.show_grid
        return True
