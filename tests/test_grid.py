"""Tests for the coordinate grid overlay."""

from __future__ import annotations

import pytest

from blackholeoptics.model.geometry_primitives import Vector
from blackholeoptics.model.grid import Axis, grid_offset, grid_spacing, grid_ticks
from blackholeoptics.model.viewport import Viewport

RS = 150.0


def test_spacing_follows_zoom() -> None:
    """Lines are half a critical radius apart on screen."""
    assert grid_spacing(Viewport(), RS) == 75.0
    assert grid_spacing(Viewport(zoom=2.0), RS) == 150.0


def test_offset_puts_a_line_through_the_center() -> None:
    vp = Viewport(width=800, height=800, pan=Vector(10.0, -5.0))
    assert grid_offset(vp, RS) == pytest.approx((35.0, 20.0))


def test_ticks_cover_the_visible_canvas(viewport: Viewport) -> None:
    ticks = grid_ticks(viewport, RS)
    x_ticks = [t for t in ticks if t.axis is Axis.X]
    y_ticks = [t for t in ticks if t.axis is Axis.Y]

    assert [t.label for t in x_ticks] == [
        '-2.5', '-2.0', '-1.5', '-1.0', '-0.5', '0.0', '0.5', '1.0', '1.5', '2.0', '2.5'
    ]
    assert all(0.0 <= t.position <= viewport.width for t in ticks)
    assert len(y_ticks) == len(x_ticks)


def test_y_labels_point_up(viewport: Viewport) -> None:
    """Positions above the center carry positive labels, and zero is unsigned."""
    labels = {t.position: t.label for t in grid_ticks(viewport, RS) if t.axis is Axis.Y}
    assert labels[250.0] == '1.0'
    assert labels[550.0] == '-1.0'
    assert labels[400.0] == '0.0'


def test_ticks_follow_pan() -> None:
    vp = Viewport(width=800, height=800, pan=Vector(75.0, 0.0))
    labels = {t.position: t.label for t in grid_ticks(vp, RS) if t.axis is Axis.X}
    assert labels[475.0] == '0.0'
    assert labels[400.0] == '-0.5'
