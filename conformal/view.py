"""Conformal view: orchestrates the two plane canvases, controls and controllers.

This is the coordinator for the explorer. It:
- Owns the AppState shared by both canvases
- Routes z-plane cursor events to the ProbeController
- Routes run button clicks to the PointSetClient
- Redraws both canvases after every state change
"""

from __future__ import annotations

import logging

from PyQt6.QtWidgets import QWidget, QHBoxLayout, QVBoxLayout

from conformal.canvas import PLANE_W, PLANE_Z, PlaneCanvas
from conformal.controls import ConformalControls
from conformal.point_set import DEFAULT_POINT_COUNT, PointSetClient
from conformal.probe import ProbeController
from conformal.service import MappingService
from conformal.state import AppState
from conformal.transform import W_VIEW, Z_VIEW
from ui_common import LoadingOverlay, make_title

logger = logging.getLogger(__name__)


class ConformalView(QWidget):
    """z-plane and w-plane side by side, with the run controls below."""

    def __init__(
        self,
        service: MappingService,
        initial_count: int = DEFAULT_POINT_COUNT,
        parent=None,
    ):
        super().__init__(parent)
        self.state = AppState()

        self.z_canvas = PlaneCanvas(PLANE_Z, Z_VIEW, self.state)
        self.w_canvas = PlaneCanvas(PLANE_W, W_VIEW, self.state)
        self.controls = ConformalControls(initial_count)

        planes = QWidget()
        planes_layout = QHBoxLayout(planes)
        planes_layout.setContentsMargins(8, 8, 8, 0)
        for title, canvas in (
            ("z-plane", self.z_canvas),
            ("w = i·(iz / (iz + 1))^(1/4)", self.w_canvas),
        ):
            column = QVBoxLayout()
            column.addWidget(make_title(title))
            column.addWidget(canvas)
            planes_layout.addLayout(column)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(planes)
        layout.addWidget(self.controls)

        self.loading_overlay = LoadingOverlay(planes)

        # Controllers
        self.probe = ProbeController(service, self.state, self.redraw, view=Z_VIEW)
        self.point_set = PointSetClient(
            service, self.state, self.redraw,
            on_status=self.controls.set_status,
            on_busy_changed=self._on_busy_changed,
        )

        # Wire signals
        self.z_canvas.cursor_moved.connect(self.probe.cursor_moved)
        self.z_canvas.cursor_left.connect(self.probe.cursor_left)
        self.controls.run_requested.connect(self.run)

    # -- Public interface --

    def run(self, mode: str) -> None:
        """Request a new bulk point set with the count currently entered."""
        self.point_set.request_points(mode, self.controls.get_count())

    def redraw(self) -> None:
        self.z_canvas.update()
        self.w_canvas.update()

    def shutdown(self) -> None:
        """Abort in-flight requests before the window goes away."""
        self.probe.shutdown()
        self.point_set.shutdown()

    # -- Signal handlers --

    def _on_busy_changed(self, busy: bool) -> None:
        self.controls.set_busy(busy)
        if busy:
            self.loading_overlay.start("Computing points...")
        else:
            self.loading_overlay.stop()
