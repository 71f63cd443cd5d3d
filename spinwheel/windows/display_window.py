"""
display_window.py
-----------------
Spin page (audience view).
Features:
      1. Shows the published wheel with its title.
      2. SPIN / Reset buttons; SPIN is locked while the wheel turns.
      3. Winner banner + confetti when a spin settles.
      4. Records every outcome to the store and lists recent results on the right.
"""
from PyQt5.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                             QListWidget, QMessageBox)
from PyQt5.QtCore import Qt, pyqtSignal, QTimer

from spinwheel.engine.models import SpinOutcome
from spinwheel.log import log_error_app, log_transaction
from spinwheel.storage import StorageError
from spinwheel.ui_components.effects import ConfettiWidget, WinnerOverlay
from spinwheel.ui_components.wheel_widget import WheelWidget

RECENT_RESULTS = 20


class DisplayWindow(QWidget):
    """
    Spin page
    - wheel (left) + recent results (right)
    - the outcome is persisted before the banner shows
    """
    spinStarted = pyqtSignal()
    spinRecorded = pyqtSignal(object)   # SpinOutcome

    def __init__(self, store, config=None, rng=None):
        super().__init__()
        self.setWindowTitle("Spin the Wheel")
        self.resize(1100, 750)
        self.store = store
        self.wheel_model = None

        self.setStyleSheet("background-color: #1e293b;")

        main_layout = QHBoxLayout(self)
        main_layout.setContentsMargins(20, 20, 20, 20)

        # --- LEFT SIDE: Title, Wheel & Buttons ---
        left_container = QWidget()
        left_layout = QVBoxLayout(left_container)

        self.title_label = QLabel("No wheel loaded")
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet("""
            QLabel {
                color: #facc15;
                font-size: 36px;
                font-weight: bold;
                margin-bottom: 10px;
            }
        """)

        self.wheel = WheelWidget(config=config, rng=rng)
        self.wheel.spinFinished.connect(self.on_spin_finished)
        self.wheel.spinningChanged.connect(self.on_spinning_changed)

        btn_row = QHBoxLayout()
        self.spin_btn = QPushButton("SPIN!")
        self.spin_btn.setFixedSize(200, 70)
        self.spin_btn.setCursor(Qt.PointingHandCursor)
        self.spin_btn.setStyleSheet("""
            QPushButton {
                background-color: #4f46e5;
                color: white; font-size: 26px; border-radius: 35px; border: 3px solid #fff; font-weight: bold;
            }
            QPushButton:hover { background-color: #6366f1; }
            QPushButton:pressed { background-color: #4338ca; }
            QPushButton:disabled { background-color: #94a3b8; border-color: #cbd5e1; }
        """)
        self.spin_btn.clicked.connect(self.start_spin)

        self.reset_btn = QPushButton("Reset")
        self.reset_btn.setFixedSize(120, 70)
        self.reset_btn.setCursor(Qt.PointingHandCursor)
        self.reset_btn.setStyleSheet("""
            QPushButton {
                background-color: #e5e7eb; color: #1f2937; font-size: 20px; border-radius: 35px; font-weight: bold;
            }
            QPushButton:hover { background-color: #d1d5db; }
        """)
        self.reset_btn.clicked.connect(self.reset_wheel)

        btn_row.addStretch(1)
        btn_row.addWidget(self.spin_btn)
        btn_row.addWidget(self.reset_btn)
        btn_row.addStretch(1)

        left_layout.addWidget(self.title_label)
        left_layout.addWidget(self.wheel, 1)
        left_layout.addLayout(btn_row)

        # --- RIGHT SIDE: Recent results ---
        right_container = QWidget()
        right_container.setFixedWidth(300)
        right_container.setStyleSheet("""
            QWidget {
                background-color: rgba(0, 0, 0, 0.3);
                border-radius: 15px;
            }
        """)
        right_layout = QVBoxLayout(right_container)

        lbl_list_title = QLabel("🏆 Recent results")
        lbl_list_title.setAlignment(Qt.AlignCenter)
        lbl_list_title.setStyleSheet("color: #facc15; font-size: 24px; font-weight: bold; padding: 10px; background: transparent;")

        self.result_list = QListWidget()
        self.result_list.setFocusPolicy(Qt.NoFocus)
        self.result_list.setStyleSheet("""
            QListWidget {
                background-color: transparent;
                border: none;
                color: white;
                font-size: 18px;
                outline: none;
            }
            QListWidget::item {
                padding: 10px;
                border-bottom: 1px solid rgba(255,255,255,0.1);
            }
        """)
        right_layout.addWidget(lbl_list_title)
        right_layout.addWidget(self.result_list)

        main_layout.addWidget(left_container, 7)
        main_layout.addWidget(right_container, 3)

        # overlays last so they stack above the layout
        self.overlay = WinnerOverlay(self)
        self.confetti = ConfettiWidget(self)
        self.overlay.dismissed.connect(self.confetti.stop)
        self.overlay.hide()
        self.confetti.hide()

        self.spin_btn.setEnabled(False)

    # -------------------------------------------------------------
    # Wheel loading
    # -------------------------------------------------------------
    def set_wheel(self, wheel):
        """Show a wheel. Raises InvalidConfiguration (old wheel stays) if its segments are unusable."""
        self.wheel.set_segments(wheel.segments)
        self.wheel_model = wheel
        self.title_label.setText(wheel.title or "Untitled wheel")
        self.hide_winner_message()
        self.spin_btn.setEnabled(bool(wheel.segments))
        self.refresh_results()

    def set_physics(self, config):
        self.wheel.set_physics(config)

    def refresh_results(self):
        self.result_list.clear()
        if self.wheel_model is None:
            return
        try:
            outcomes = self.store.list(self.wheel_model.id)
        except StorageError:
            log_error_app("cannot list results for the spin page")
            return
        for outcome in reversed(outcomes[-RECENT_RESULTS:]):
            self.result_list.addItem(f"{outcome.timestamp:%m/%d %H:%M}  {outcome.segment_label}")

    # -------------------------------------------------------------
    # Spin flow
    # -------------------------------------------------------------
    def start_spin(self):
        if self.wheel_model is None:
            return
        self.hide_winner_message()
        if self.wheel.start_spin():
            log_transaction(f"spin started on wheel {self.wheel_model.id} ({self.wheel_model.title})")
            self.spinStarted.emit()

    def reset_wheel(self):
        self.hide_winner_message()
        self.wheel.reset()

    def on_spinning_changed(self, spinning):
        self.spin_btn.setEnabled(not spinning and self.wheel_model is not None)
        self.spin_btn.setText("Spinning..." if spinning else "SPIN!")

    def on_spin_finished(self, segment):
        if self.wheel_model is None:
            return
        outcome = SpinOutcome.from_segment(self.wheel_model.id, segment)
        log_transaction(f"wheel {self.wheel_model.id} landed on {segment.label!r} (segment {segment.id})")
        try:
            self.store.append(outcome)
        except StorageError as e:
            log_error_app(f"cannot record spin result: {e}")
            QMessageBox.warning(self, "Save error", f"The result could not be saved:\n{e}")
        else:
            self.spinRecorded.emit(outcome)
            self.refresh_results()

        # short pause so the settled wheel is visible before the banner
        QTimer.singleShot(600, lambda: self.show_winner_message(segment))

    def show_winner_message(self, segment):
        if self.wheel.winner is not segment:
            # reset or a new spin happened during the pause
            return
        self.overlay.show_winner(segment)
        tip = self.wheel.mapTo(self, self.wheel.pointer_position().toPoint())
        self.confetti.burst(segment.color, (tip.x(), tip.y()))

    def hide_winner_message(self):
        self.overlay.hide()
        self.confetti.stop()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.overlay.setGeometry(self.rect())
        self.confetti.setGeometry(self.rect())
