"""Tests for the interaction state machine.

The default canvas is 800x800, so the body center is at screen (400, 400)
and the critical radius is 150 px.
"""

from __future__ import annotations

import pytest

from blackholeoptics.controller.edit_session import EditField
from blackholeoptics.controller.interaction import InteractionController, Mode, Modifiers, MouseButton
from blackholeoptics.model.geometry_primitives import Point, Vector
from blackholeoptics.model.state import EngineState
from blackholeoptics.model.viewport import pan_to

SHIFT = Modifiers(shift=True)
ALT = Modifiers(alt=True)

RAY_SCREEN = Point(700.0, 400.0)  # world (300, 0)


def _place(controller: InteractionController, pos: Point = RAY_SCREEN, modifiers: Modifiers = Modifiers()) -> int:
    assert controller.click(pos, modifiers)
    return controller.state.scene.list()[-1].id


def test_click_places_fired_ray(controller: InteractionController, state: EngineState) -> None:
    """A click outside the body creates a ray at 0 deg that fires at once."""
    ray_id = _place(controller)
    ray = state.scene.get(ray_id)
    assert ray.position == Point(300.0, 0.0)
    assert ray.angle == 0.0
    assert ray.fired
    assert controller.mode is Mode.IDLE


def test_shift_click_places_ray_at_90_degrees(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller, Point(400.0, 100.0), SHIFT)
    assert state.scene.get(ray_id).angle == 90.0


def test_click_inside_body_is_ignored(controller: InteractionController, state: EngineState) -> None:
    assert not controller.click(Point(450.0, 430.0))
    assert len(state.scene) == 0


def test_click_on_existing_ray_does_not_place(controller: InteractionController, state: EngineState) -> None:
    _place(controller)
    assert not controller.click(Point(705.0, 402.0))
    assert len(state.scene) == 1


def test_placement_uses_zoom_and_pan(state: EngineState) -> None:
    """Clicks are mapped back to world pixels through the viewport."""
    controller = InteractionController(state)
    controller.wheel(-500.0)  # zoom 1.5
    state.viewport = pan_to(state.viewport, Vector(20.0, 0.0))
    ray_id = _place(controller, Point(720.0, 400.0))
    assert state.scene.get(ray_id).position.x == pytest.approx(200.0)


def test_drag_moves_ray(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller)

    controller.press(MouseButton.PRIMARY, RAY_SCREEN)
    assert controller.mode is Mode.DRAGGING
    assert controller.move(Point(700.0, 100.0))
    controller.release(MouseButton.PRIMARY, Point(700.0, 100.0))
    assert controller.mode is Mode.IDLE

    assert state.scene.get(ray_id).position == Point(300.0, -300.0)
    # The click that ends the drag lands on the ray and places nothing
    assert not controller.click(Point(700.0, 100.0))
    assert len(state.scene) == 1


def test_drag_into_body_is_allowed(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller)
    controller.press(MouseButton.PRIMARY, RAY_SCREEN)
    controller.move(Point(410.0, 400.0))
    assert state.scene.get(ray_id).position == Point(10.0, 0.0)


def test_right_drag_rotates_half_a_degree_per_pixel(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller)

    controller.press(MouseButton.SECONDARY, RAY_SCREEN)
    assert controller.mode is Mode.ROTATING
    controller.move(Point(720.0, 400.0))
    assert state.scene.get(ray_id).angle == pytest.approx(10.0)
    controller.move(Point(680.0, 390.0))
    assert state.scene.get(ray_id).angle == pytest.approx(350.0)
    # Rotation does not move the ray
    assert state.scene.get(ray_id).position == Point(300.0, 0.0)

    controller.release(MouseButton.PRIMARY, Point(680.0, 390.0))
    assert controller.mode is Mode.ROTATING
    controller.release(MouseButton.SECONDARY, Point(680.0, 390.0))
    assert controller.mode is Mode.IDLE


def test_shift_right_click_opens_editor(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller, Point(700.0, 250.0))  # world (300, -150)

    assert controller.press(MouseButton.SECONDARY, Point(700.0, 250.0), SHIFT)
    assert controller.mode is Mode.EDITING
    session = state.edit_session
    assert session.target_id == ray_id
    assert (session.x, session.y, session.angle) == ('2.00', '1.00', '0.0')


def test_editing_commits_and_closes(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller)
    controller.press(MouseButton.SECONDARY, RAY_SCREEN, SHIFT)

    assert controller.edit_field(EditField.Y, '-1')
    assert state.scene.get(ray_id).position == Point(300.0, 150.0)
    assert controller.edit_field(EditField.ANGLE, '90')
    assert state.scene.get(ray_id).angle == pytest.approx(270.0)
    controller.edit_field(EditField.X, 'abc')
    assert state.scene.get(ray_id).position.x == 300.0
    assert state.edit_session.x == 'abc'

    assert controller.close_edit()
    assert controller.mode is Mode.IDLE
    assert state.edit_session is None
    assert not controller.edit_field(EditField.X, '1')


def test_editing_suppresses_other_gestures(controller: InteractionController, state: EngineState) -> None:
    ray_id = _place(controller)
    controller.press(MouseButton.SECONDARY, RAY_SCREEN, SHIFT)

    controller.press(MouseButton.PRIMARY, RAY_SCREEN)
    controller.move(Point(100.0, 100.0))
    assert state.scene.get(ray_id).position == Point(300.0, 0.0)
    assert not controller.click(Point(100.0, 100.0))
    assert not controller.double_click(RAY_SCREEN)
    assert len(state.scene) == 1
    assert controller.mode is Mode.EDITING


def test_shift_right_click_retargets_editor(controller: InteractionController, state: EngineState) -> None:
    _place(controller)
    other = _place(controller, Point(100.0, 400.0))
    controller.press(MouseButton.SECONDARY, RAY_SCREEN, SHIFT)

    assert controller.press(MouseButton.SECONDARY, Point(100.0, 400.0), SHIFT)
    assert state.edit_session.target_id == other
    assert state.edit_session.x == '-2.00'


def test_double_click_deletes_ray(controller: InteractionController, state: EngineState) -> None:
    _place(controller)
    assert controller.double_click(RAY_SCREEN)
    assert len(state.scene) == 0
    assert not controller.double_click(RAY_SCREEN)


def test_middle_drag_pans(controller: InteractionController, state: EngineState) -> None:
    controller.press(MouseButton.MIDDLE, Point(100.0, 100.0))
    assert controller.mode is Mode.PANNING
    controller.move(Point(150.0, 80.0))
    assert state.viewport.pan == Vector(50.0, -20.0)
    controller.move(Point(160.0, 100.0))
    assert state.viewport.pan == Vector(60.0, 0.0)
    controller.release(MouseButton.MIDDLE, Point(160.0, 100.0))
    assert controller.mode is Mode.IDLE

    # A second pan continues from the current offset
    controller.press(MouseButton.MIDDLE, Point(0.0, 0.0))
    controller.move(Point(-10.0, 5.0))
    assert state.viewport.pan == Vector(50.0, 5.0)


def test_alt_drag_pans_and_swallows_the_next_click(controller: InteractionController, state: EngineState) -> None:
    controller.press(MouseButton.PRIMARY, Point(100.0, 100.0), ALT)
    assert controller.mode is Mode.PANNING
    controller.move(Point(130.0, 100.0))
    controller.release(MouseButton.PRIMARY, Point(130.0, 100.0))

    assert state.viewport.pan == Vector(30.0, 0.0)
    assert not controller.click(Point(130.0, 100.0), ALT)
    assert len(state.scene) == 0
    assert controller.click(Point(130.0, 100.0))
    assert len(state.scene) == 1


def test_alt_press_on_ray_drags_instead_of_panning(controller: InteractionController) -> None:
    _place(controller)
    controller.press(MouseButton.PRIMARY, RAY_SCREEN, ALT)
    assert controller.mode is Mode.DRAGGING


def test_wheel_zooms_without_changing_mode(controller: InteractionController, state: EngineState) -> None:
    _place(controller)
    controller.press(MouseButton.PRIMARY, RAY_SCREEN)
    assert controller.wheel(200.0)
    assert state.viewport.zoom == pytest.approx(0.8)
    assert controller.mode is Mode.DRAGGING
    assert controller.wheel(1e6)
    assert state.viewport.zoom == 0.2
    assert not controller.wheel(1e6)


def test_zoom_buttons(controller: InteractionController, state: EngineState) -> None:
    controller.zoom_in()
    assert state.viewport.zoom == pytest.approx(1.2)
    controller.zoom_out()
    controller.zoom_out()
    assert state.viewport.zoom == pytest.approx(0.8)


def test_clear_all_drops_every_ray(controller: InteractionController, state: EngineState) -> None:
    _place(controller)
    _place(controller, Point(100.0, 400.0))
    controller.press(MouseButton.SECONDARY, RAY_SCREEN, SHIFT)

    assert controller.clear_all()
    assert len(state.scene) == 0
    assert state.edit_session is None
    assert controller.mode is Mode.IDLE


def test_explicit_fire_configuration(state: EngineState) -> None:
    """With fire-on-place disabled, rays wait for the fire-all command."""
    controller = InteractionController(state, fire_on_place=False)
    ray_id = _place(controller)
    assert not state.scene.get(ray_id).fired
    assert controller.fire_all()
    assert state.scene.get(ray_id).fired
    assert not controller.fire_all()


def test_toggles(controller: InteractionController, state: EngineState) -> None:
    controller.toggle_gravity()
    controller.toggle_grid()
    assert state.gravity_enabled
    assert state.show_grid
    controller.toggle_gravity()
    assert not state.gravity_enabled
