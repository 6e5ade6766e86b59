"""
Configuration & Global Constants
================================
This module serves as the central registry for the numeric constants shared by
the engine and the Qt host.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (zoom limits, step sizes, hit radii)
   scattered throughout the code.
2. Consistency: The solver, the interaction controller and the canvas read the
   same values, so what is drawn is what is hit-tested.

Exports:
    ZOOM_MIN, ZOOM_MAX (float): Allowed zoom range.
    MAX_STEPS (int): Hard cap on geodesic integration steps.
"""
import logging
import os

# Viewport
ZOOM_MIN: float = 0.2
ZOOM_MAX: float = 2.5
WHEEL_ZOOM_RATE: float = 0.001  # zoom change per wheel delta unit
ZOOM_BUTTON_STEP: float = 0.2

DEFAULT_CANVAS_WIDTH: int = 800
DEFAULT_CANVAS_HEIGHT: int = 800

# Central body
MAX_BODY_DIAMETER: float = 600.0  # px
BODY_RADIUS_FRACTION: float = 0.25  # critical radius = diameter * fraction

# Geodesic solver
STEP_FRACTION: float = 0.01  # h = body_radius * STEP_FRACTION
MAX_STEPS: int = 4000
HORIZON_MARGIN: float = 1.001
ESCAPE_DISTANCE_FACTOR: float = 1.5

# Interaction
ROTATE_DEGREES_PER_PIXEL: float = 0.5
HIT_RADIUS_PX: float = 12.0  # at zoom = 1
SHIFT_PLACEMENT_ANGLE: float = 90.0
FIRE_ON_PLACE: bool = True

# Coordinate grid
GRID_STEP_RS: float = 0.5

LOG_LEVEL_ENV: str = "BLACKHOLEOPTICS_LOG_LEVEL"


def get_log_level() -> int:
    """Return the logging level from the environment (INFO when unset or unknown)."""
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.INFO
