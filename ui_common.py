"""Shared UI widgets: plane titles and the loading overlay shown during bulk runs."""

from PyQt6.QtCore import Qt, QTimer, QRectF
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtWidgets import QWidget, QLabel


def make_title(text):
    """Small centred caption placed above a canvas."""
    label = QLabel(text)
    label.setAlignment(Qt.AlignmentFlag.AlignHCenter)
    label.setStyleSheet("color: #ccc; font-weight: bold;")
    return label


class LoadingOverlay(QWidget):
    """Dimmed overlay with a spinning arc and a message."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.message = "Computing points..."
        self.angle = 0
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents)
        self._timer = QTimer(self)
        self._timer.setInterval(16)  # ~60 fps
        self._timer.timeout.connect(self._tick)
        self.hide()

    def start(self, message="Computing points..."):
        self.message = message
        self.angle = 0
        if self.parentWidget():
            self.resize(self.parentWidget().size())
        self.show()
        self.raise_()
        self._timer.start()

    def stop(self):
        self._timer.stop()
        self.hide()

    def _tick(self):
        self.angle = (self.angle + 6) % 360
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        w, h = self.width(), self.height()

        painter.fillRect(self.rect(), QColor(10, 10, 15, 160))

        radius = 22
        cx, cy = w / 2, h / 2 - 15
        arc_rect = QRectF(cx - radius, cy - radius, 2 * radius, 2 * radius)

        track = QPen(QColor(255, 255, 255, 40))
        track.setWidthF(4)
        painter.setPen(track)
        painter.drawEllipse(arc_rect)

        arc = QPen(QColor(0xFF, 0x00, 0x55))
        arc.setWidthF(4)
        arc.setCapStyle(Qt.PenCapStyle.RoundCap)
        painter.setPen(arc)
        # Qt arcs are in 1/16 degree, counter-clockwise
        painter.drawArc(arc_rect, -self.angle * 16, 100 * 16)

        painter.setPen(QColor(255, 255, 255, 200))
        font = QFont()
        font.setPointSizeF(13)
        font.setBold(True)
        painter.setFont(font)
        painter.drawText(
            QRectF(0, cy + radius + 12, w, 30),
            Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop,
            self.message,
        )
        painter.end()
