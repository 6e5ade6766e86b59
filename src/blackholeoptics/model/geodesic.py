"""
Geodesic Solver
===============
Integrates the path of a light ray in the equatorial plane of a
Schwarzschild-like body, starting from a world point and a screen angle.

All lengths are in world pixels. The on-screen critical radius
(``body_radius``) is used as the Schwarzschild radius r_s and as the length
scale of the integration step.

The equations of motion, with ' denoting d/dλ (affine parameter), are::

    r'   = p_r
    φ'   = L / r²
    p_r' = -½ dV/dr,   V = f L² / r²,   f = 1 - r_s / r

where L = r0 · n_φ is fixed by the initial direction. With gravity disabled
r_s = 0 and the same equations describe a straight line in polar form.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
import math
from typing import Callable, TYPE_CHECKING

import numpy as np

from blackholeoptics import config
from blackholeoptics.model.geometry_primitives import Point, Vector
from blackholeoptics.model.viewport import Viewport, world_to_screen

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

RADIAL_TOLERANCE = 1e-12

Derivatives = Callable[["npt.NDArray[np.float64]"], "npt.NDArray[np.float64]"]


class Termination(Enum):
    """Why the integration stopped."""
    CAPTURED = "captured"
    REACHED_CENTER = "reached_center"
    ESCAPED = "escaped"
    STEP_BUDGET = "step_budget"
    NON_FINITE = "non_finite"


@dataclass(frozen=True)
class TrajectoryPoint:
    world: Point
    screen: Point
    distance: float  # distance from center in units of the critical radius


@dataclass
class Trajectory:
    points: list[TrajectoryPoint] = field(default_factory=list)
    termination: Termination = Termination.STEP_BUDGET

    def __len__(self) -> int:
        return len(self.points)

    def screen_array(self) -> npt.NDArray[np.float64]:
        """Return an (N, 2) array of screen coordinates for polyline drawing."""
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([[p.screen.x, p.screen.y] for p in self.points], dtype=np.float64)


def rk4_step(y: npt.NDArray[np.float64], h: float, derivs: Derivatives) -> npt.NDArray[np.float64]:
    """One classical 4th-order Runge-Kutta step."""
    k1 = derivs(y)
    k2 = derivs(y + 0.5 * h * k1)
    k3 = derivs(y + 0.5 * h * k2)
    k4 = derivs(y + h * k3)
    return y + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4)


def initial_conditions(origin: Point, angle_deg: float) -> tuple[npt.NDArray[np.float64], float]:
    """
    Project the emission direction onto the local {e_r, e_φ} basis.

    Args:
        origin: Start point in world pixels, relative to the body center.
        angle_deg: Emission angle in screen degrees.

    Returns:
        The state vector [r0, φ0, p_r0] and the conserved angular momentum L.
    """
    r0 = origin.norm
    phi0 = origin.polar_angle
    direction = Vector.from_angle(angle_deg)

    n_r = direction.x * math.cos(phi0) + direction.y * math.sin(phi0)
    n_phi = -direction.x * math.sin(phi0) + direction.y * math.cos(phi0)
    if abs(n_phi) < RADIAL_TOLERANCE:
        # sin/cos round-off of a ray aimed at the center
        n_phi = 0.0

    # The affine-parameter scale is arbitrary; the unit direction fixes it to 1
    return np.array([r0, phi0, n_r], dtype=np.float64), n_phi * r0


def make_derivatives(angular_momentum: float, rs_eff: float) -> Derivatives:
    """Build the right-hand side with L and r_s baked in as constants."""
    l_squared = angular_momentum * angular_momentum

    if l_squared == 0.0:
        # Radial ray: no angular motion and no centrifugal term
        def radial_derivs(y: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
            return np.array([y[2], 0.0, 0.0], dtype=np.float64)

        return radial_derivs

    def derivs(y: npt.NDArray[np.float64]) -> npt.NDArray[np.float64]:
        r, _phi, p_r = y
        dv_dr = l_squared * (-2.0 / r**3 + 3.0 * rs_eff / r**4)
        return np.array([p_r, angular_momentum / (r * r), -0.5 * dv_dr], dtype=np.float64)

    return derivs


def trace_path(
    origin: Point,
    angle_deg: float,
    body_radius: float,
    viewport: Viewport,
    gravity_enabled: bool,
) -> Trajectory:
    """
    Integrate a light ray and report why it stopped.

    Args:
        origin: Start point in world pixels.
        angle_deg: Emission direction in screen degrees.
        body_radius: Critical radius in world pixels (also the step scale).
        viewport: Supplies the zoom and canvas size for the escape test and
            the screen projection of each point.
        gravity_enabled: When False the ray is a straight line.

    Returns:
        Trajectory with points in integration order.
    """
    if body_radius <= 0.0:
        raise ValueError(f"body_radius must be positive, got {body_radius}")

    rs_eff = body_radius if gravity_enabled else 0.0
    horizon = rs_eff * config.HORIZON_MARGIN
    h = body_radius * config.STEP_FRACTION
    # Below half a step the polar angle is meaningless
    center_radius = 0.5 * h

    zoom = viewport.zoom
    max_distance = max(viewport.width, viewport.height) * config.ESCAPE_DISTANCE_FACTOR / zoom
    x_limit = viewport.width / zoom
    y_limit = viewport.height / zoom

    state, angular_momentum = initial_conditions(origin, angle_deg)
    derivs = make_derivatives(angular_momentum, rs_eff)

    trajectory = Trajectory()
    # Division by r near the center may overflow; the finiteness check ends the path
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        for _ in range(config.MAX_STEPS):
            if not np.all(np.isfinite(state)):
                trajectory.termination = Termination.NON_FINITE
                break

            r, phi, _p_r = state
            if gravity_enabled and r <= horizon:
                trajectory.termination = Termination.CAPTURED
                break
            if r < center_radius:
                trajectory.termination = Termination.REACHED_CENTER
                break

            world = Point.from_polar(float(r), float(phi))
            if r > max_distance or abs(world.x) > x_limit or abs(world.y) > y_limit:
                trajectory.termination = Termination.ESCAPED
                break

            trajectory.points.append(TrajectoryPoint(
                world=world,
                screen=world_to_screen(world, viewport),
                distance=float(r) / body_radius,
            ))
            state = rk4_step(state, h, derivs)
        else:
            trajectory.termination = Termination.STEP_BUDGET

    logger.debug(
        "Traced ray from (%.1f, %.1f) at %.1f deg: %d points, %s",
        origin.x, origin.y, angle_deg, len(trajectory), trajectory.termination.value,
    )
    return trajectory


def compute_path(
    origin: Point,
    angle_deg: float,
    body_radius: float,
    viewport: Viewport,
    gravity_enabled: bool,
) -> list[TrajectoryPoint]:
    """Return only the ordered points of :func:`trace_path`."""
    return trace_path(origin, angle_deg, body_radius, viewport, gravity_enabled).points
