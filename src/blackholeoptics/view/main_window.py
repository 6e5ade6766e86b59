"""
Main Application Window
=======================
The primary GUI container: a sidebar with the global commands and the
playground canvas.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects sidebar actions (Clean All, gravity, zoom) to the
   interaction controller and keeps the sidebar in sync with the state.
"""
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QCheckBox, QHBoxLayout, QLabel, QMainWindow, QPushButton, QSplitter, QVBoxLayout, QWidget
)

from blackholeoptics.controller.edit_session import EditField
from blackholeoptics.controller.interaction import InteractionController
from blackholeoptics.model.state import EngineState
from blackholeoptics.view.widgets.canvas import PlaygroundCanvas
from blackholeoptics.view.widgets.edit_panel import CoordinateEditPanel


VISIBLE_APP_NAME = "Black-hole optics"

INSTRUCTIONS = [
    "• Click anywhere to place a laser",
    "• Shift + Click to place laser at 90°",
    "• Right-click and drag to rotate",
    "• Left-click and drag to move",
    "• Double-click to remove a laser",
    "• Shift + Right-click to edit coordinates",
    "• Use mouse wheel to zoom in/out",
    "• Alt + drag or middle-click drag to pan",
    "• Toggle gravitation to see light bending",
]


class MainWindow(QMainWindow):
    def __init__(self, state: EngineState) -> None:
        super().__init__()
        self.state: EngineState = state
        self.controller = InteractionController(state)

        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1200, 800)

        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        # --- LEFT SIDE: Sidebar ---
        sidebar = QWidget()
        side_layout = QVBoxLayout(sidebar)

        title = QLabel(f"<h2>{VISIBLE_APP_NAME}</h2>")
        side_layout.addWidget(title)

        self.btn_clean = QPushButton("Clean All")
        side_layout.addWidget(self.btn_clean)

        self.chk_gravity = QCheckBox("Gravitation")
        self.chk_gravity.setChecked(state.gravity_enabled)
        side_layout.addWidget(self.chk_gravity)

        self.chk_grid = QCheckBox("Show Grid")
        self.chk_grid.setChecked(state.show_grid)
        side_layout.addWidget(self.chk_grid)

        zoom_row = QHBoxLayout()
        self.btn_zoom_out = QPushButton("-")
        self.btn_zoom_in = QPushButton("+")
        zoom_row.addWidget(self.btn_zoom_out)
        zoom_row.addWidget(self.btn_zoom_in)
        side_layout.addLayout(zoom_row)

        self.lbl_zoom = QLabel()
        side_layout.addWidget(self.lbl_zoom)

        help_label = QLabel("<b>How to Use</b><br>" + "<br>".join(INSTRUCTIONS))
        help_label.setWordWrap(True)
        side_layout.addWidget(help_label)

        self.edit_panel = CoordinateEditPanel()
        side_layout.addWidget(self.edit_panel)
        side_layout.addStretch()

        splitter.addWidget(sidebar)

        # --- RIGHT SIDE: Canvas ---
        self.canvas = PlaygroundCanvas(self.controller)
        splitter.addWidget(self.canvas)

        # Same 1:4 proportion as the original layout
        splitter.setSizes([240, 960])

        # --- SIGNAL CONNECTIONS ---
        self.btn_clean.clicked.connect(lambda: self._run(self.controller.clear_all))
        self.chk_gravity.toggled.connect(self.on_gravity_toggled)
        self.chk_grid.toggled.connect(self.on_grid_toggled)
        self.btn_zoom_in.clicked.connect(lambda: self._run(self.controller.zoom_in))
        self.btn_zoom_out.clicked.connect(lambda: self._run(self.controller.zoom_out))

        self.edit_panel.field_edited.connect(self.on_field_edited)
        self.edit_panel.close_requested.connect(lambda: self._run(self.controller.close_edit))

        self.canvas.state_changed.connect(self.sync_sidebar)

        self._create_actions()
        self.sync_sidebar()

    def _create_actions(self) -> None:
        self.act_clean = QAction("Clean All", self)
        self.act_clean.setShortcut("Ctrl+Shift+Backspace")
        self.act_clean.triggered.connect(lambda: self._run(self.controller.clear_all))
        self.addAction(self.act_clean)

        self.act_close_edit = QAction("Close Editor", self)
        self.act_close_edit.setShortcut("Esc")
        self.act_close_edit.triggered.connect(lambda: self._run(self.controller.close_edit))
        self.addAction(self.act_close_edit)

    def _run(self, command) -> None:
        if command():
            self.canvas.update()
            self.sync_sidebar()

    def on_gravity_toggled(self, checked: bool) -> None:
        if checked != self.state.gravity_enabled:
            self._run(self.controller.toggle_gravity)

    def on_grid_toggled(self, checked: bool) -> None:
        if checked != self.state.show_grid:
            self._run(self.controller.toggle_grid)

    def on_field_edited(self, edit_field: EditField, text: str) -> None:
        if self.controller.edit_field(edit_field, text):
            self.canvas.update()

    def sync_sidebar(self) -> None:
        """Refresh every sidebar widget from the engine state."""
        self.lbl_zoom.setText(f"Zoom: {self.state.viewport.zoom:.2f}×")
        self.edit_panel.set_session(self.state.edit_session)
