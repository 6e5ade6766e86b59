"""Coordinate grid overlay: spacing and tick labels in critical-radius units."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import math

from blackholeoptics import config
from blackholeoptics.model.viewport import Viewport


class Axis(Enum):
    X = "x"
    Y = "y"


@dataclass(frozen=True)
class GridTick:
    axis: Axis
    position: float  # screen pixel along the axis
    label: str


def grid_spacing(viewport: Viewport, body_radius: float, step: float = config.GRID_STEP_RS) -> float:
    """Distance in screen pixels between neighbouring grid lines."""
    return step * body_radius * viewport.zoom


def grid_offset(viewport: Viewport, body_radius: float, step: float = config.GRID_STEP_RS) -> tuple[float, float]:
    """Screen offset of the first grid line so that one line passes through the body center."""
    spacing = grid_spacing(viewport, body_radius, step)
    center = viewport.center
    return (
        (center.x + viewport.pan.x) % spacing,
        (center.y + viewport.pan.y) % spacing,
    )


def _format(value: float) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:.1f}"


def grid_ticks(viewport: Viewport, body_radius: float, step: float = config.GRID_STEP_RS) -> list[GridTick]:
    """
    Tick labels for the visible part of the grid.

    X labels read left to right. Y labels follow the physics convention, so
    positions above the center are positive.
    """
    pixels_per_rs = body_radius * viewport.zoom
    max_distance = max(viewport.width, viewport.height) / 2
    max_rs = math.ceil(max_distance / pixels_per_rs)

    origin_x = viewport.center.x + viewport.pan.x
    origin_y = viewport.center.y + viewport.pan.y

    ticks: list[GridTick] = []
    n_steps = int(round(2 * max_rs / step))
    for k in range(n_steps + 1):
        value = -max_rs + k * step
        offset = value * pixels_per_rs

        x_pos = origin_x + offset
        if 0.0 <= x_pos <= viewport.width:
            ticks.append(GridTick(Axis.X, x_pos, _format(value)))

        y_pos = origin_y + offset
        if 0.0 <= y_pos <= viewport.height:
            ticks.append(GridTick(Axis.Y, y_pos, _format(-value)))

    return ticks
