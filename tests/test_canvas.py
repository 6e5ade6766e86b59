"""Tests for the canvas event mapping, run on Qt's offscreen platform."""

from __future__ import annotations

import os
from typing import Iterator

import pytest

os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

from PySide6.QtCore import QEvent, QPointF, Qt  # noqa: E402
from PySide6.QtGui import QMouseEvent  # noqa: E402
from PySide6.QtWidgets import QApplication  # noqa: E402

from blackholeoptics.controller.interaction import InteractionController, Mode  # noqa: E402
from blackholeoptics.model.geometry_primitives import Point  # noqa: E402
from blackholeoptics.model.state import EngineState  # noqa: E402
from blackholeoptics.view.widgets.canvas import PlaygroundCanvas  # noqa: E402

RAY_SCREEN = QPointF(700.0, 400.0)  # world (300, 0) on the default 800x800 canvas


@pytest.fixture(scope='module')
def qapp() -> QApplication:
    return QApplication.instance() or QApplication([])


@pytest.fixture
def canvas(qapp: QApplication, controller: InteractionController) -> Iterator[PlaygroundCanvas]:
    widget = PlaygroundCanvas(controller)
    yield widget
    widget.deleteLater()


def _double_click(button: Qt.MouseButton, pos: QPointF = RAY_SCREEN,
                  modifiers: Qt.KeyboardModifier = Qt.NoModifier) -> QMouseEvent:
    return QMouseEvent(QEvent.MouseButtonDblClick, pos, pos, button, button, modifiers)


def test_quick_second_right_press_starts_rotation(canvas: PlaygroundCanvas, state: EngineState) -> None:
    """A right double click is treated as a press, not dropped."""
    state.scene.create(Point(300.0, 0.0), 0.0, zoom=1.0, body_radius=state.body_radius)
    canvas.mouseDoubleClickEvent(_double_click(Qt.RightButton))
    assert canvas.controller.mode is Mode.ROTATING


def test_quick_second_shift_right_press_opens_editor(canvas: PlaygroundCanvas, state: EngineState) -> None:
    ray_id = state.scene.create(Point(300.0, 0.0), 0.0, zoom=1.0, body_radius=state.body_radius)
    canvas.mouseDoubleClickEvent(_double_click(Qt.RightButton, modifiers=Qt.ShiftModifier))
    assert canvas.controller.mode is Mode.EDITING
    assert state.edit_session.target_id == ray_id


def test_quick_second_middle_press_starts_pan(canvas: PlaygroundCanvas) -> None:
    canvas.mouseDoubleClickEvent(_double_click(Qt.MiddleButton, QPointF(100.0, 100.0)))
    assert canvas.controller.mode is Mode.PANNING


def test_left_double_click_deletes_ray(canvas: PlaygroundCanvas, state: EngineState) -> None:
    state.scene.create(Point(300.0, 0.0), 0.0, zoom=1.0, body_radius=state.body_radius)
    canvas.mouseDoubleClickEvent(_double_click(Qt.LeftButton))
    assert len(state.scene) == 0
    assert canvas.controller.mode is Mode.IDLE
