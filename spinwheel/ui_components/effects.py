"""
effects.py
----------
Celebration layers shown over the spin page: a confetti burst in the winning
segment's colors and the winner banner.
"""
import math
import random
from PyQt5.QtWidgets import QWidget, QLabel, QVBoxLayout, QGraphicsOpacityEffect
from PyQt5.QtCore import Qt, QTimer, QPropertyAnimation, QEasingCurve, QPointF, pyqtSignal
from PyQt5.QtGui import QPainter, QColor

GRAVITY = 0.35
DRAG = 0.985
PARTICLE_LIFE = 90  # frames


def burst_palette(color):
    """Shades of the winning color plus gold and white, as hex strings."""
    base = QColor(color)
    if not base.isValid():
        base = QColor("#facc15")
    return [base.name(), base.lighter(140).name(), base.darker(130).name(), "#facc15", "#ffffff"]


def make_burst(origin, colors, count=120, rng=random):
    """Particles fanning out from origin (x, y), mostly to the left and upwards."""
    x, y = origin
    particles = []
    for _ in range(count):
        # the pointer sits on the right rim, so spray back over the wheel
        angle = rng.uniform(math.pi * 0.6, math.pi * 1.4)
        speed = rng.uniform(6, 16)
        particles.append({
            'x': x, 'y': y,
            'vx': math.cos(angle) * speed,
            'vy': math.sin(angle) * speed - rng.uniform(2, 6),
            'size': rng.randint(5, 11),
            'spin': rng.uniform(-12, 12),
            'angle': rng.uniform(0, 360),
            'color': rng.choice(colors),
            'life': PARTICLE_LIFE,
        })
    return particles


def advance_particles(particles, height):
    """One frame of motion; returns the particles still alive and on screen."""
    alive = []
    for p in particles:
        p['vx'] *= DRAG
        p['vy'] = p['vy'] * DRAG + GRAVITY
        p['x'] += p['vx']
        p['y'] += p['vy']
        p['angle'] = (p['angle'] + p['spin']) % 360
        p['life'] -= 1
        if p['life'] > 0 and p['y'] < height + p['size']:
            alive.append(p)
    return alive


class ConfettiWidget(QWidget):
    """Transparent layer; a burst stops and hides itself once every particle is gone."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self.particles = []
        self.timer = QTimer(self)
        self.timer.timeout.connect(self.update_particles)

    def burst(self, color, origin=None):
        if origin is None:
            origin = (self.width() / 2, self.height() / 2)
        self.particles = make_burst(origin, burst_palette(color))
        self.timer.start(16)
        self.show()
        self.raise_()

    def stop(self):
        self.timer.stop()
        self.particles = []
        self.hide()

    def update_particles(self):
        self.particles = advance_particles(self.particles, self.height())
        if not self.particles:
            self.stop()
            return
        self.update()

    def paintEvent(self, event):
        if not self.particles:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        for p in self.particles:
            color = QColor(p['color'])
            color.setAlphaF(min(1.0, p['life'] / (PARTICLE_LIFE * 0.4)))
            painter.save()
            painter.translate(QPointF(p['x'], p['y']))
            painter.rotate(p['angle'])
            painter.setBrush(color)
            size = p['size']
            painter.drawRect(int(-size / 2), int(-size / 4), size, max(2, size // 2))
            painter.restore()
        painter.end()


class WinnerOverlay(QWidget):
    """Winner banner over the spin page; a click dismisses it."""
    dismissed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QVBoxLayout(self)
        layout.setAlignment(Qt.AlignCenter)

        self.title_label = QLabel("🎉 WINNER 🎉")
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet("color: #facc15; font-size: 36px; font-weight: bold; margin-bottom: 10px;")

        self.name_label = QLabel("")
        self.name_label.setAlignment(Qt.AlignCenter)
        self.name_label.setStyleSheet("color: #ffffff; font-size: 72px; font-weight: bold;")

        self.url_label = QLabel("")
        self.url_label.setAlignment(Qt.AlignCenter)
        self.url_label.setOpenExternalLinks(True)
        self.url_label.setTextInteractionFlags(Qt.TextBrowserInteraction)
        self.url_label.setStyleSheet("color: #93c5fd; font-size: 20px; margin-top: 10px;")

        layout.addWidget(self.title_label)
        layout.addWidget(self.name_label)
        layout.addWidget(self.url_label)

    def show_winner(self, segment):
        self.name_label.setText(segment.label)
        if segment.url:
            self.url_label.setText(f'<a href="{segment.url}" style="color:#93c5fd">{segment.url}</a>')
            self.url_label.show()
        else:
            self.url_label.hide()
        self.show()
        self.raise_()

        if not self.name_label.graphicsEffect():
            eff = QGraphicsOpacityEffect(self.name_label)
            self.name_label.setGraphicsEffect(eff)

        self.op_anim = QPropertyAnimation(self.name_label.graphicsEffect(), b"opacity")
        self.op_anim.setDuration(800)
        self.op_anim.setStartValue(0.0)
        self.op_anim.setEndValue(1.0)
        self.op_anim.setEasingCurve(QEasingCurve.OutBack)
        self.op_anim.start()

    def mousePressEvent(self, event):
        self.hide()
        self.dismissed.emit()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 200))
        painter.end()
