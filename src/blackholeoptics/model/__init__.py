"""
The MODEL layer contains pure data structures and numerics.
It has NO knowledge of the GUI (Qt).
It deals with geometry, the viewport transform, and the geodesic solver.
"""
