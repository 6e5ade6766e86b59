"""
The VIEW layer: PySide6 widgets that draw the engine state and forward
pointer events to the interaction controller.
"""
