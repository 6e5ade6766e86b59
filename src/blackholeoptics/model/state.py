"""
Engine State (Data Model)
=========================
This module defines the central data structure for the running application.

Why is this file needed?
------------------------
1. State Management: It holds the scene, the viewport, the optional edit
   session and the display toggles in one place.
2. Snapshots: ``to_dict`` produces a plain, JSON-compatible view of everything
   the presentation layer needs.
3. Decoupling: Views read from this object; the interaction controller writes
   to it.

Classes:
    EngineState: The main container class.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from blackholeoptics.model.scene import Scene
from blackholeoptics.model.viewport import Viewport, resize

if TYPE_CHECKING:
    from blackholeoptics.controller.edit_session import EditSession

logger = logging.getLogger(__name__)


@dataclass
class EngineState:
    """
    Holds the entire state of the running engine.
    Pass this instance to the controller and the views.
    """
    viewport: Viewport = field(default_factory=Viewport)
    scene: Scene = field(default_factory=Scene)
    edit_session: Optional[EditSession] = None

    gravity_enabled: bool = False
    show_grid: bool = False

    @property
    def body_radius(self) -> float:
        """Critical radius in world pixels, derived from the canvas size."""
        return self.viewport.body_radius

    def set_canvas_size(self, width: float, height: float) -> None:
        self.viewport = resize(self.viewport, width, height)

    def reset(self) -> None:
        """Clear all rays and restore the default view, keeping the canvas size and the id counter."""
        self.viewport = Viewport(width=self.viewport.width, height=self.viewport.height)
        self.scene.clear()
        self.edit_session = None
        self.gravity_enabled = False
        self.show_grid = False
        logger.info("Engine state has been reset.")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "viewport": self.viewport.to_dict(),
            "body_radius": self.body_radius,
            "gravity_enabled": self.gravity_enabled,
            "show_grid": self.show_grid,
            "rays": self.scene.to_list(),
            "edit_session": self.edit_session.to_dict() if self.edit_session is not None else None,
        }
