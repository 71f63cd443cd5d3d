"""
wheel_widget.py
---------------
Wheel custom widget (the render surface).
Features:
      1. Paints the weighted wedges, labels, rim, hub, pointer and the winner highlight.
      2. Owns the SpinController of the wheel on screen and runs its frames on the
         Qt event loop (QtFrameScheduler).
      3. Re-emits controller events as Qt signals for the windows.
The widget never changes engine state from paintEvent; it only draws the
rotation and partition the controller hands over.
"""
import math
import random

from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QObject, QTimer, QRectF, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QColor, QPen, QFont, QRadialGradient, QPainterPath, QBrush, QLinearGradient

from spinwheel.engine.controller import SpinController
from spinwheel.engine.scheduler import FrameHandle, FrameScheduler
from spinwheel.utils.config import FRAME_INTERVAL_MS, PhysicsConfig


class QtFrameScheduler(QObject, FrameScheduler):
    """One single-shot QTimer per frame; cancel() stops it before it can fire."""

    def __init__(self, parent=None, interval_ms=FRAME_INTERVAL_MS):
        super().__init__(parent)
        self.interval_ms = interval_ms

    def schedule(self, callback):
        timer = QTimer(self)
        timer.setSingleShot(True)

        def _cancel():
            timer.stop()
            timer.deleteLater()

        handle = FrameHandle(_cancel)

        def _fire():
            timer.deleteLater()
            if not handle.cancelled:
                callback()

        timer.timeout.connect(_fire)
        timer.start(self.interval_ms)
        return handle


class WheelWidget(QWidget):
    spinFinished = pyqtSignal(object)     # Segment
    spinningChanged = pyqtSignal(bool)

    def __init__(self, parent=None, config=None, rng=None):
        super().__init__(parent)
        self.config = (config or PhysicsConfig()).validate()
        self.rng = rng if rng is not None else random.Random()
        self.scheduler = QtFrameScheduler(self, self.config.frame_interval_ms)
        self.controller = None

        # what paintEvent draws; only written by the controller callbacks
        self._rotation = 0.0
        self._partition = ()

        self.setMinimumSize(300, 300)

    # -------------------------------------------------------------
    # Engine wiring
    # -------------------------------------------------------------
    def set_segments(self, segments):
        """Load a new segment list. Raises InvalidConfiguration and keeps the old wheel."""
        if not segments:
            self._drop_controller()
            self.update()
            return

        if self.controller is None:
            was_spinning = False
            self.controller = SpinController(
                segments, self.scheduler, self.config, self.rng,
                on_render=self._on_render, on_complete=self._on_complete)
            self._on_render(self.controller.rotation, self.controller.partition)
        else:
            was_spinning = self.controller.is_spinning
            self.controller.set_segments(segments)
        if was_spinning:
            self.spinningChanged.emit(False)

    def set_physics(self, config):
        config.validate()
        self.config = config
        self.scheduler.interval_ms = config.frame_interval_ms
        if self.controller is not None:
            was_spinning = self.controller.is_spinning
            self.controller.set_config(config)
            if was_spinning:
                self.spinningChanged.emit(False)

    def _drop_controller(self):
        if self.controller is not None:
            was_spinning = self.controller.is_spinning
            self.controller.reset()
            self.controller = None
            if was_spinning:
                self.spinningChanged.emit(False)
        self._rotation = 0.0
        self._partition = ()

    @property
    def is_spinning(self):
        return self.controller is not None and self.controller.is_spinning

    @property
    def winner(self):
        return self.controller.winner if self.controller is not None else None

    def start_spin(self):
        if self.controller is None:
            return False
        accepted = self.controller.spin()
        if accepted:
            self.spinningChanged.emit(True)
            self.update()
        return accepted

    def reset(self):
        if self.controller is None:
            return
        was_spinning = self.controller.is_spinning
        self.controller.reset()
        if was_spinning:
            self.spinningChanged.emit(False)

    def pointer_position(self):
        """Where the pointer meets the rim, in widget coordinates."""
        rect = self.rect()
        radius = min(rect.width(), rect.height()) / 2 * 0.85
        center = QPointF(rect.center())
        return QPointF(center.x() + radius, center.y())

    def _on_render(self, rotation, partition):
        self._rotation = rotation
        self._partition = partition
        self.update()

    def _on_complete(self, segment):
        self.spinningChanged.emit(False)
        self.spinFinished.emit(segment)

    # -------------------------------------------------------------
    # Painting
    # -------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        rect = self.rect()
        center = QPointF(rect.center())
        radius = min(rect.width(), rect.height()) / 2 * 0.85

        # 1. glow behind the wheel
        painter.setPen(Qt.NoPen)
        radial = QRadialGradient(center, radius * 1.1)
        radial.setColorAt(0, QColor(99, 102, 241, 70))
        radial.setColorAt(1, Qt.transparent)
        painter.setBrush(radial)
        painter.drawEllipse(center, radius * 1.1, radius * 1.1)

        if not self._partition:
            painter.setPen(QColor(120, 120, 120))
            painter.setFont(QFont("Segoe UI", 14, QFont.Bold))
            painter.drawText(rect, Qt.AlignCenter, "Add segments to spin")
            painter.end()
            return

        winner = self.winner
        painter.save()
        try:
            painter.translate(center)
            painter.rotate(math.degrees(self._rotation))

            # Loop 1: wedges
            for interval in self._partition:
                base_c = QColor(interval.segment.color)
                if not base_c.isValid():
                    base_c = QColor(136, 132, 216)

                mid = interval.middle
                grad = QLinearGradient(0, 0, radius * math.cos(mid), radius * math.sin(mid))
                grad.setColorAt(0.0, base_c.darker(115))
                grad.setColorAt(0.6, base_c)
                grad.setColorAt(1.0, base_c.darker(120))
                painter.setBrush(QBrush(grad))
                painter.setPen(QPen(Qt.white, 2))
                painter.drawPath(self._wedge_path(interval, radius))

            # Loop 2: labels on top of every wedge
            font_size = max(9, int(radius * 0.07))
            if len(self._partition) > 12:
                font_size = int(font_size * 0.8)
            font = QFont("Segoe UI", font_size, QFont.Bold)
            painter.setFont(font)
            for interval in self._partition:
                painter.save()
                try:
                    painter.rotate(math.degrees(interval.middle))
                    text_rect = QRectF(radius * 0.25, -20, radius * 0.68, 40)
                    text_str = interval.segment.label

                    painter.setPen(QColor(0, 0, 0, 120))
                    painter.drawText(text_rect.translated(2, 2), Qt.AlignRight | Qt.AlignVCenter, text_str)
                    painter.setPen(Qt.white)
                    painter.drawText(text_rect, Qt.AlignRight | Qt.AlignVCenter, text_str)
                finally:
                    painter.restore()

            # winner highlight
            if winner is not None:
                for interval in self._partition:
                    if interval.segment is winner:
                        painter.setBrush(QColor(255, 255, 255, 60))
                        painter.setPen(QPen(QColor(250, 204, 21), 5))
                        painter.drawPath(self._wedge_path(interval, radius))
                        break
        finally:
            painter.restore()

        # 2. rim
        painter.setBrush(Qt.NoBrush)
        painter.setPen(QPen(QColor(51, 51, 51), 5))
        painter.drawEllipse(center, radius, radius)

        # 3. hub
        painter.setBrush(Qt.white)
        painter.setPen(QPen(QColor(51, 51, 51), 2))
        painter.drawEllipse(center, radius * 0.12, radius * 0.12)
        painter.setBrush(QColor(51, 51, 51))
        painter.setPen(Qt.NoPen)
        painter.drawEllipse(center, radius * 0.04, radius * 0.04)

        # 4. pointer (3 o'clock, angle 0 of the wheel frame)
        self.draw_pointer(painter, center, radius)
        painter.end()

    @staticmethod
    def _wedge_path(interval, radius):
        # Qt arcs run counter-clockwise; wheel angles run clockwise on screen
        path = QPainterPath()
        path.moveTo(0, 0)
        path.arcTo(-radius, -radius, radius * 2, radius * 2,
                   -math.degrees(interval.start), -math.degrees(interval.span))
        path.closeSubpath()
        return path

    def draw_pointer(self, painter, center, radius):
        tip_x = center.x() + radius - 15
        back_x = center.x() + radius + 12
        path = QPainterPath()
        path.moveTo(back_x, center.y() - 16)
        path.lineTo(tip_x, center.y())
        path.lineTo(back_x, center.y() + 16)
        path.closeSubpath()

        painter.save()
        try:
            painter.translate(2, 2)
            painter.setPen(Qt.NoPen)
            painter.setBrush(QColor(0, 0, 0, 100))
            painter.drawPath(path)
        finally:
            painter.restore()

        painter.save()
        try:
            painter.setPen(QPen(Qt.white, 2))
            painter.setBrush(QColor(225, 29, 72))
            painter.drawPath(path)
        finally:
            painter.restore()
