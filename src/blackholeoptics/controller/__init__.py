"""
Interaction Engine
==================
Turns user gestures into scene and viewport changes, and traces the light
paths of the fired rays.

Note: This package should be pure Python/NumPy and should NOT import PySide6.
"""
