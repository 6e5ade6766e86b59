"""
Scene Tracer
============
Computes the light paths of every fired ray for rendering.

The solver is a pure function of hashable arguments, so results are memoized:
repainting without changing a ray, the zoom or the gravity toggle does not
integrate again. A failure on one ray is logged and yields an empty path for
that ray only.
"""
from __future__ import annotations

from functools import lru_cache
import logging

from blackholeoptics.model.geodesic import Termination, Trajectory, trace_path
from blackholeoptics.model.geometry_primitives import Point
from blackholeoptics.model.state import EngineState
from blackholeoptics.model.viewport import Viewport

logger = logging.getLogger(__name__)

CACHE_SIZE = 512


@lru_cache(maxsize=CACHE_SIZE)
def cached_trace(
    origin: Point,
    angle_deg: float,
    body_radius: float,
    viewport: Viewport,
    gravity_enabled: bool,
) -> Trajectory:
    return trace_path(origin, angle_deg, body_radius, viewport, gravity_enabled)


def trace_scene(state: EngineState) -> dict[int, Trajectory]:
    """
    Trace every fired ray of the scene.

    Returns:
        Mapping of ray id -> trajectory, in scene order. Unfired rays are absent.
    """
    paths: dict[int, Trajectory] = {}
    for ray in state.scene.list():
        if not ray.fired:
            continue
        try:
            paths[ray.id] = cached_trace(
                ray.position,
                ray.angle,
                state.body_radius,
                state.viewport,
                state.gravity_enabled,
            )
        except Exception as e:
            logger.error(f"Failed to trace ray #{ray.id}: {e}")
            paths[ray.id] = Trajectory(points=[], termination=Termination.NON_FINITE)
    return paths
