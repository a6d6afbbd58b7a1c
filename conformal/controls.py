"""Conformal controls: point count input, run buttons and status readout."""

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QIntValidator
from PyQt6.QtWidgets import (
    QWidget, QHBoxLayout, QLabel, QLineEdit, QPushButton,
)

from conformal.point_set import DEFAULT_POINT_COUNT, parse_point_count
from conformal.service import MODE_PARALLEL, MODE_SINGLE


class ConformalControls(QWidget):
    """Control bar for bulk point runs."""

    run_requested = pyqtSignal(str)  # compute mode

    def __init__(self, initial_count: int = DEFAULT_POINT_COUNT, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)

        layout.addWidget(QLabel("Points:"))
        self.count_edit = QLineEdit(str(initial_count))
        self.count_edit.setValidator(QIntValidator(1, 1_000_000_000, self))
        self.count_edit.setMaximumWidth(120)
        layout.addWidget(self.count_edit)

        self.single_btn = QPushButton("Run single-thread")
        self.parallel_btn = QPushButton("Run parallel")
        layout.addWidget(self.single_btn)
        layout.addWidget(self.parallel_btn)

        self.status_label = QLabel()
        self.status_label.setStyleSheet("color: #aaa; font-family: monospace;")
        layout.addWidget(self.status_label, stretch=1)

        self.single_btn.clicked.connect(lambda: self.run_requested.emit(MODE_SINGLE))
        self.parallel_btn.clicked.connect(lambda: self.run_requested.emit(MODE_PARALLEL))

    def get_count(self) -> int:
        return parse_point_count(self.count_edit.text())

    def set_busy(self, busy: bool) -> None:
        self.single_btn.setEnabled(not busy)
        self.parallel_btn.setEnabled(not busy)

    def set_status(self, text: str) -> None:
        self.status_label.setText(text)
