"""
Scene Store (Data Model)
========================
This module holds the user-placed ray sources.

Why is this file needed?
------------------------
1. Ownership: It is the single owner of ray ids and of the insertion order,
   which is also the drawing (z) order.
2. Atomicity: Ray sources are immutable; every mutation swaps a whole
   RaySource, so readers never observe a half-updated ray.

Classes:
    RaySource: One emitter (position, angle, fired flag).
    Scene: The ordered store with create/update/delete/list.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
import logging
from typing import Callable, Iterator, Optional

from blackholeoptics.model.geometry_primitives import Point
from blackholeoptics.model.viewport import Viewport, normalize_angle_degrees, world_to_screen

logger = logging.getLogger(__name__)


class EmissionSide(str, Enum):
    """Side of the marker the beam leaves from. Kept for compatibility; no geometric effect."""
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class RaySource:
    id: int
    position: Point  # world pixels relative to the body center
    angle: float = 0.0  # screen degrees, [0, 360)
    fired: bool = False
    direction: EmissionSide = EmissionSide.RIGHT

    def moved_to(self, position: Point) -> RaySource:
        return replace(self, position=position)

    def rotated_to(self, angle: float) -> RaySource:
        return replace(self, angle=normalize_angle_degrees(angle))

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "x": self.position.x,
            "y": self.position.y,
            "angle": self.angle,
            "fired": self.fired,
            "direction": self.direction.value,
        }


class Scene:
    """Ordered mapping of id -> RaySource with a never-reused id counter."""

    def __init__(self) -> None:
        self._rays: dict[int, RaySource] = {}
        self._next_id: int = 0

    def __len__(self) -> int:
        return len(self._rays)

    def __iter__(self) -> Iterator[RaySource]:
        return iter(list(self._rays.values()))

    def __contains__(self, ray_id: object) -> bool:
        return ray_id in self._rays

    @property
    def next_id(self) -> int:
        return self._next_id

    def list(self) -> list[RaySource]:
        """Rays in insertion order."""
        return list(self._rays.values())

    def get(self, ray_id: int) -> Optional[RaySource]:
        return self._rays.get(ray_id)

    def create(
        self,
        position: Point,
        angle: float,
        *,
        zoom: float,
        body_radius: float,
        fired: bool = True,
    ) -> Optional[int]:
        """
        Place a new ray source.

        Placement happens in screen space and is translated back to world
        space, so the rejection radius is ``body_radius / zoom``.

        Returns:
            The new id, or None when the position is inside the body.
        """
        if position.norm <= body_radius / zoom:
            logger.debug("Rejected ray placement at (%.1f, %.1f): inside the body.", position.x, position.y)
            return None

        ray_id = self._next_id
        self._next_id += 1
        self._rays[ray_id] = RaySource(
            id=ray_id,
            position=position,
            angle=normalize_angle_degrees(angle),
            fired=fired,
        )
        logger.debug("Created ray #%d at (%.1f, %.1f), %.1f deg.", ray_id, position.x, position.y, angle)
        return ray_id

    def update(self, ray_id: int, mutator: Callable[[RaySource], RaySource]) -> RaySource:
        """Replace a ray with ``mutator(ray)``. The id cannot change."""
        if ray_id not in self._rays:
            raise KeyError(f"Ray #{ray_id} not found.")
        updated = mutator(self._rays[ray_id])
        if updated.id != ray_id:
            raise ValueError(f"Mutator changed the id of ray #{ray_id} to #{updated.id}.")
        self._rays[ray_id] = updated
        return updated

    def delete(self, ray_id: int) -> None:
        if ray_id not in self._rays:
            raise KeyError(f"Ray #{ray_id} not found.")
        del self._rays[ray_id]
        logger.debug("Deleted ray #%d.", ray_id)

    def clear(self) -> None:
        """Drop every ray. The id counter is kept so ids are never reused."""
        count = len(self._rays)
        self._rays = {}
        logger.info("Cleared %d ray(s).", count)

    def fire_all(self) -> int:
        """Mark every ray as fired. Returns how many changed."""
        changed = 0
        for ray_id, ray in list(self._rays.items()):
            if not ray.fired:
                self._rays[ray_id] = replace(ray, fired=True)
                changed += 1
        return changed

    def hit_test(self, screen_point: Point, viewport: Viewport, radius: float) -> Optional[int]:
        """
        Find the topmost ray whose marker is within ``radius`` screen pixels.

        Later rays are drawn on top, so they win ties.
        """
        for ray in reversed(self.list()):
            if world_to_screen(ray.position, viewport).distance_to(screen_point) <= radius:
                return ray.id
        return None

    def to_list(self) -> list[dict[str, object]]:
        return [ray.to_dict() for ray in self._rays.values()]
