"""
Playground Canvas
=================
QPainter widget that draws the engine state and forwards pointer events to
the interaction controller.

Nothing here computes geometry: positions come from the viewport transform
and paths from the scene tracer.
"""
from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QPointF, QRectF, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QMouseEvent, QPainter, QPainterPath, QPaintEvent, QPen, QWheelEvent, QResizeEvent
from PySide6.QtWidgets import QWidget, QSizePolicy

from blackholeoptics.controller.interaction import InteractionController, Modifiers, MouseButton, Mode
from blackholeoptics.controller.tracer import trace_scene
from blackholeoptics.model.geometry_primitives import ORIGIN, Point
from blackholeoptics.model.grid import Axis, grid_offset, grid_spacing, grid_ticks
from blackholeoptics.model.viewport import world_to_screen

logger = logging.getLogger(__name__)

BACKGROUND_COLOR = QColor(5, 5, 12)
GRID_COLOR = QColor(255, 255, 255, 50)
LABEL_COLOR = QColor(255, 255, 255, 180)
RING_COLOR = QColor(255, 255, 255, 230)
PATH_COLOR = QColor(239, 68, 68)
MARKER_COLOR = QColor(6, 182, 212)
HIGHLIGHT_COLOR = QColor(250, 204, 21)

MARKER_WIDTH = 24.0
MARKER_HEIGHT = 12.0

_BUTTONS = {
    Qt.LeftButton: MouseButton.PRIMARY,
    Qt.MiddleButton: MouseButton.MIDDLE,
    Qt.RightButton: MouseButton.SECONDARY,
}


def _point(event: QMouseEvent) -> Point:
    pos = event.position()
    return Point(pos.x(), pos.y())


def _modifiers(event: QMouseEvent) -> Modifiers:
    mods = event.modifiers()
    return Modifiers(
        shift=bool(mods & Qt.ShiftModifier),
        alt=bool(mods & Qt.AltModifier),
    )


class PlaygroundCanvas(QWidget):
    """The pannable, zoomable drawing area."""
    state_changed = Signal()

    def __init__(self, controller: InteractionController, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.controller = controller
        self._skip_next_click = False

        self.setMouseTracking(False)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setContextMenuPolicy(Qt.PreventContextMenu)
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumSize(200, 200)

    @property
    def state(self):
        return self.controller.state

    def _changed(self, changed: bool) -> None:
        if changed:
            self.update()
            self.state_changed.emit()

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:
        self.state.set_canvas_size(float(self.width()), float(self.height()))
        super().resizeEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            return
        self._changed(self.controller.press(button, _point(event), _modifiers(event)))
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self._changed(self.controller.move(_point(event)))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        button = _BUTTONS.get(event.button())
        if button is None:
            return
        pos = _point(event)
        self._changed(self.controller.release(button, pos))
        if button is MouseButton.PRIMARY:
            # Qt has no click event; a browser would send one after every left release
            if self._skip_next_click:
                self._skip_next_click = False
            else:
                self._changed(self.controller.click(pos, _modifiers(event)))
        self.update()

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            # Qt delivers a quick second press here instead of to mousePressEvent
            self.mousePressEvent(event)
            return
        # The second press of a double click arrives here; its release must not place a ray
        self._skip_next_click = True
        self._changed(self.controller.double_click(_point(event)))

    def wheelEvent(self, event: QWheelEvent) -> None:
        # Qt reports +120 per notch away from the user; the zoom rule expects DOM deltas
        delta = -event.angleDelta().y() * 100.0 / 120.0
        self._changed(self.controller.wheel(delta))
        event.accept()

    # ------------------------------------------------------------------------------
    # Painting
    # ------------------------------------------------------------------------------

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)

        if self.state.show_grid:
            self._paint_grid(painter)
        self._paint_body(painter)
        self._paint_paths(painter)
        self._paint_markers(painter)
        painter.end()

    def _paint_grid(self, painter: QPainter) -> None:
        viewport = self.state.viewport
        rs = self.state.body_radius
        spacing = grid_spacing(viewport, rs)
        offset_x, offset_y = grid_offset(viewport, rs)

        painter.setPen(QPen(GRID_COLOR, 1.5))
        x = offset_x
        while x <= viewport.width:
            painter.drawLine(QPointF(x, 0.0), QPointF(x, viewport.height))
            x += spacing
        y = offset_y
        while y <= viewport.height:
            painter.drawLine(QPointF(0.0, y), QPointF(viewport.width, y))
            y += spacing

        painter.setPen(LABEL_COLOR)
        painter.setFont(QFont("monospace", 8))
        for tick in grid_ticks(viewport, rs):
            if tick.axis is Axis.X:
                painter.drawText(QPointF(tick.position - 8.0, viewport.height - 10.0), tick.label)
            else:
                painter.drawText(QPointF(10.0, tick.position + 4.0), tick.label)

    def _paint_body(self, painter: QPainter) -> None:
        viewport = self.state.viewport
        center = world_to_screen(ORIGIN, viewport)
        radius = self.state.body_radius * viewport.zoom

        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(Qt.black))
        painter.drawEllipse(QPointF(center.x, center.y), radius, radius)

        ring_pen = QPen(RING_COLOR, max(1.0, viewport.body_diameter * 0.006 * viewport.zoom))
        ring_pen.setStyle(Qt.DashLine)
        painter.setPen(ring_pen)
        painter.setBrush(Qt.NoBrush)
        painter.drawEllipse(QPointF(center.x, center.y), radius, radius)

    def _paint_paths(self, painter: QPainter) -> None:
        painter.setPen(QPen(PATH_COLOR, 1.0))
        painter.setBrush(Qt.NoBrush)
        for trajectory in trace_scene(self.state).values():
            points = trajectory.screen_array()
            if len(points) < 2:
                continue
            path = QPainterPath(QPointF(*points[0]))
            for x, y in points[1:]:
                path.lineTo(x, y)
            painter.drawPath(path)

    def _paint_markers(self, painter: QPainter) -> None:
        viewport = self.state.viewport
        editing_id = self.controller.target_id if self.controller.mode is Mode.EDITING else None
        width = MARKER_WIDTH * viewport.zoom
        height = MARKER_HEIGHT * viewport.zoom

        for ray in self.state.scene.list():
            screen = world_to_screen(ray.position, viewport)
            painter.save()
            painter.translate(screen.x, screen.y)
            painter.rotate(ray.angle)
            painter.setPen(Qt.NoPen)
            painter.setBrush(MARKER_COLOR)
            painter.drawRect(QRectF(-width / 2, -height / 2, width, height))
            painter.restore()

            if ray.id == editing_id:
                painter.setPen(QPen(HIGHLIGHT_COLOR, 1.5))
                painter.setBrush(Qt.NoBrush)
                margin = width / 2 + 8.0
                painter.drawRect(QRectF(screen.x - margin, screen.y - margin, 2 * margin, 2 * margin))
