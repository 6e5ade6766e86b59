from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal
from PySide6.QtWidgets import QFormLayout, QGroupBox, QHBoxLayout, QLabel, QLineEdit, QPushButton, QVBoxLayout, QWidget

from blackholeoptics.controller.edit_session import EditField, EditSession


class CoordinateEditPanel(QGroupBox):
    """Numeric form for the ray being edited (coordinates in Rs units)."""
    field_edited = Signal(object, str)  # (EditField, text)
    close_requested = Signal()

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__("Ray", parent)

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        header.addWidget(QLabel("Coordinates (in Rs units)"))
        header.addStretch()
        self.btn_close = QPushButton("×")
        self.btn_close.setFixedWidth(28)
        self.btn_close.setToolTip("Close")
        self.btn_close.clicked.connect(self.close_requested)
        header.addWidget(self.btn_close)
        layout.addLayout(header)

        form = QFormLayout()
        self.inputs: dict[EditField, QLineEdit] = {}
        for edit_field, label in ((EditField.X, "X:"), (EditField.Y, "Y:"), (EditField.ANGLE, "Angle (°):")):
            line_edit = QLineEdit()
            line_edit.textEdited.connect(lambda text, f=edit_field: self.field_edited.emit(f, text))
            form.addRow(label, line_edit)
            self.inputs[edit_field] = line_edit
        layout.addLayout(form)

        self.setVisible(False)

    def set_session(self, session: Optional[EditSession]) -> None:
        if session is None:
            self.setVisible(False)
            return

        self.setTitle(f"Ray #{session.target_id}")
        for edit_field, line_edit in self.inputs.items():
            text = session.text(edit_field)
            # setText does not emit textEdited, so this cannot loop back
            if line_edit.text() != text:
                line_edit.setText(text)
        self.setVisible(True)
