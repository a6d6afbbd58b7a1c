"""Plane canvas: draws one view (z-plane or w-plane) of the current state.

Both canvases read the shared AppState. The z-plane canvas is also the
probe surface: it tracks the mouse and emits cursor_moved / cursor_left
in view pixel coordinates.
"""

from __future__ import annotations

import math

import numpy as np
from PyQt6.QtCore import Qt, QPointF, QRectF, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from conformal.coloring import parse_css_color
from conformal.complex_algebra import I, ZERO, Complex
from conformal.state import AppState
from conformal.transform import VIEW_SIZE, ScreenPoint, ViewConfig, in_bounds

PLANE_Z = "z"
PLANE_W = "w"

BACKGROUND_COLOR = QColor(0, 0, 0)
AXIS_COLOR = QColor(0x33, 0x33, 0x33)
SLIT_COLOR = QColor(0xFF, 0x00, 0x55)
SECTOR_COLOR = QColor(255, 255, 255, 51)
HOVER_COLOR = QColor(255, 255, 255)
HOVER_RAY_COLOR = QColor(255, 255, 255, 26)
UNDEFINED_COLOR = QColor(255, 120, 120)

POINT_SIZE = 2.0
HOVER_RADIUS = 5.0
SLIT_WIDTH = 4.0
SLIT_END_RADIUS = 4.0
# Long enough to leave the view from any origin
SECTOR_RAY_LENGTH = 600.0


def format_complex(c: Complex) -> str:
    """'1.25 + 0.50i' / '1.25 - 0.50i' with two decimals."""
    sign = "-" if c.im < 0 else "+"
    return f"{c.re:.2f} {sign} {abs(c.im):.2f}i"


def _to_qcolor(text: str) -> QColor:
    rgba = parse_css_color(text)
    if rgba is not None:
        return QColor(*rgba)
    color = QColor(text)
    return color if color.isValid() else QColor(255, 255, 255)


class PlaneCanvas(QWidget):
    """Fixed-size canvas for one complex plane."""

    cursor_moved = pyqtSignal(float, float)  # view pixels
    cursor_left = pyqtSignal()

    def __init__(self, plane: str, view: ViewConfig, state: AppState, parent=None):
        super().__init__(parent)
        if plane not in (PLANE_Z, PLANE_W):
            raise ValueError(f"unknown plane {plane!r}")
        self._plane = plane
        self._view = view
        self._state = state
        self.setFixedSize(VIEW_SIZE, VIEW_SIZE)

        # Screen-space cache of the point set, rebuilt when the set changes
        self._cached_generation = -1
        self._xs = np.empty(0)
        self._ys = np.empty(0)
        self._colors: list[QColor] = []

        if plane == PLANE_Z:
            self.setMouseTracking(True)
            self.setCursor(Qt.CursorShape.CrossCursor)

    # -- Point cache --

    def _refresh_point_cache(self) -> None:
        state = self._state
        if state.generation == self._cached_generation:
            return
        values = [p.z if self._plane == PLANE_Z else p.w for p in state.points]
        re = np.fromiter((c.re for c in values), dtype=np.float64, count=len(values))
        im = np.fromiter((c.im for c in values), dtype=np.float64, count=len(values))
        self._xs, self._ys = self._view.to_screen_array(re, im)
        self._colors = [_to_qcolor(p.color) for p in state.points]
        self._cached_generation = state.generation

    # -- Painting --

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), BACKGROUND_COLOR)

        self._draw_axes(painter)
        if self._plane == PLANE_Z:
            self._draw_slit(painter)
        else:
            self._draw_sector(painter)

        self._draw_points(painter)
        self._draw_hover(painter)
        painter.end()

    def _draw_axes(self, painter: QPainter) -> None:
        origin = self._view.origin
        pen = QPen(AXIS_COLOR)
        pen.setWidthF(1.0)
        painter.setPen(pen)
        painter.drawLine(QPointF(0, origin.y), QPointF(VIEW_SIZE, origin.y))
        painter.drawLine(QPointF(origin.x, 0), QPointF(origin.x, VIEW_SIZE))

    def _draw_slit(self, painter: QPainter) -> None:
        """Segment [0, i]: its image is the branch cut of the fourth root."""
        p0 = self._view.to_screen(ZERO)
        pi = self._view.to_screen(I)

        pen = QPen(SLIT_COLOR)
        pen.setWidthF(SLIT_WIDTH)
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(pen)
        painter.drawLine(QPointF(p0.x, p0.y), QPointF(pi.x, pi.y))

        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(SLIT_COLOR))
        painter.drawEllipse(QPointF(p0.x, p0.y), SLIT_END_RADIUS, SLIT_END_RADIUS)
        painter.drawEllipse(QPointF(pi.x, pi.y), SLIT_END_RADIUS, SLIT_END_RADIUS)
        painter.setBrush(Qt.BrushStyle.NoBrush)

    def _draw_sector(self, painter: QPainter) -> None:
        """Dashed rays at pi/4 and 3pi/4 bounding the image sector."""
        center = self._view.to_screen(ZERO)
        pen = QPen(SECTOR_COLOR)
        pen.setStyle(Qt.PenStyle.DashLine)
        painter.setPen(pen)
        for angle in (math.pi / 4, 3 * math.pi / 4):
            end = QPointF(
                center.x + SECTOR_RAY_LENGTH * math.cos(angle),
                center.y - SECTOR_RAY_LENGTH * math.sin(angle),
            )
            painter.drawLine(QPointF(center.x, center.y), end)

    def _draw_points(self, painter: QPainter) -> None:
        self._refresh_point_cache()
        painter.setPen(Qt.PenStyle.NoPen)
        for x, y, color in zip(self._xs, self._ys, self._colors):
            painter.fillRect(QRectF(float(x), float(y), POINT_SIZE, POINT_SIZE), color)

    def _draw_label(self, painter: QPainter, text: str, color: QColor) -> None:
        font = QFont("monospace")
        font.setStyleHint(QFont.StyleHint.Monospace)
        font.setPixelSize(12)
        painter.setFont(font)
        painter.setPen(color)
        painter.drawText(QPointF(10, 20), text)

    def _draw_hover(self, painter: QPainter) -> None:
        hover = self._state.hover
        if hover is None:
            return

        painter.setBrush(Qt.BrushStyle.NoBrush)
        if self._plane == PLANE_Z:
            pen = QPen(HOVER_COLOR)
            pen.setWidthF(1.0)
            painter.setPen(pen)
            painter.drawEllipse(
                QPointF(hover.screen.x, hover.screen.y), HOVER_RADIUS, HOVER_RADIUS,
            )
            self._draw_label(painter, f"z: {format_complex(hover.z)}", HOVER_COLOR)
            return

        if hover.w is None:
            if hover.resolved:
                self._draw_label(painter, "w: no target point", UNDEFINED_COLOR)
            return

        sw = self._view.to_screen(hover.w)
        origin = self._view.to_screen(ZERO)

        painter.setPen(QPen(HOVER_RAY_COLOR))
        painter.drawLine(QPointF(origin.x, origin.y), QPointF(sw.x, sw.y))

        pen = QPen(HOVER_COLOR)
        pen.setWidthF(2.0)
        painter.setPen(pen)
        painter.drawEllipse(QPointF(sw.x, sw.y), HOVER_RADIUS, HOVER_RADIUS)
        self._draw_label(painter, f"w: {format_complex(hover.w)}", HOVER_COLOR)

    # -- Mouse --

    def mouseMoveEvent(self, event):
        if self._plane != PLANE_Z:
            return
        pos = event.position()
        if not in_bounds(ScreenPoint(pos.x(), pos.y())):
            return
        self.cursor_moved.emit(pos.x(), pos.y())

    def leaveEvent(self, event):
        if self._plane == PLANE_Z:
            self.cursor_left.emit()
        super().leaveEvent(event)
