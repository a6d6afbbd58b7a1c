"""App window: hosts the ConformalView and a status bar with the service URL."""

import logging

from PyQt6.QtWidgets import QMainWindow, QStatusBar, QLabel

from conformal.network import QtMappingService
from conformal.point_set import DEFAULT_POINT_COUNT
from conformal.service import MODE_SINGLE
from conformal.view import ConformalView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window for the conformal map explorer."""

    def __init__(self, base_url, initial_count=DEFAULT_POINT_COUNT):
        super().__init__()
        self.setWindowTitle("Conformal Map Explorer")

        self.service = QtMappingService(base_url, parent=self)
        self.view = ConformalView(self.service, initial_count)
        self.setCentralWidget(self.view)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._server_label = QLabel(f"  Server: {base_url}  ")
        self._status_bar.addWidget(self._server_label)

        logger.info("Using mapping service at %s", base_url)

    def start(self, initial_fetch=True):
        """Show the window and optionally kick off the first bulk run."""
        self.show()
        if initial_fetch:
            self.view.run(MODE_SINGLE)

    def closeEvent(self, event):
        self.view.shutdown()
        super().closeEvent(event)
