"""Shared fixtures for the engine tests."""

from __future__ import annotations

import pytest

from blackholeoptics.controller.interaction import InteractionController
from blackholeoptics.model.state import EngineState
from blackholeoptics.model.viewport import Viewport


@pytest.fixture
def viewport() -> Viewport:
    """800x800 canvas at zoom 1: body diameter 600 px, critical radius 150 px."""
    return Viewport(width=800, height=800)


@pytest.fixture
def state(viewport: Viewport) -> EngineState:
    return EngineState(viewport=viewport)


@pytest.fixture
def controller(state: EngineState) -> InteractionController:
    return InteractionController(state)
