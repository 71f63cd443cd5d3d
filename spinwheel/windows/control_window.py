"""
control_window.py
-----------------
Operator console (wheel editor).
Features:
      1. Wheel management: pick / create / delete wheels stored in data.json.
      2. Segment editing: label, weight, color and link per segment; add, remove, shuffle order.
      3. Physics tuning: friction slider applied to preview and spin page.
      4. Flow control: publish the edited wheel to the spin page, spin from here,
         show the result summary of the current wheel.
"""
import random

from PyQt5.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton,
                             QLabel, QMessageBox, QLineEdit, QComboBox, QGroupBox, QFrame,
                             QSizePolicy, QSlider, QTableWidget, QTableWidgetItem,
                             QDoubleSpinBox, QColorDialog, QHeaderView, QAbstractItemView)
from PyQt5.QtCore import Qt
from PyQt5.QtGui import QColor

from spinwheel.analytics import build_analytics, format_summary
from spinwheel.engine.errors import InvalidConfiguration
from spinwheel.engine.models import Segment, Wheel, default_segments, new_segment
from spinwheel.log import log_error_app, log_transaction
from spinwheel.storage import StorageError, WheelNotFound
from spinwheel.ui_components.wheel_widget import WheelWidget
from spinwheel.utils.config import PhysicsConfig, friction_from_slider, slider_from_friction
from .display_window import DisplayWindow

COL_LABEL, COL_WEIGHT, COL_COLOR, COL_URL = range(4)
MIN_WEIGHT = 0.1


class ControlWindow(QMainWindow):
    """
    Operator console
    - editor panel on the left
    - preview wheel on the right
    - owns the spin page window
    """
    def __init__(self, store, rng=None):
        super().__init__()
        self.setWindowTitle("Spin Wheel - Console")
        self.resize(1400, 900)

        self.store = store
        self.current_wheel = None
        self._loading = False

        try:
            self.physics = self.store.load_physics().validate()
        except (StorageError, InvalidConfiguration) as e:
            log_error_app(f"physics settings unusable, using defaults: {e}")
            self.physics = PhysicsConfig()

        self.display_window = DisplayWindow(store, config=self.physics, rng=rng)
        self.display_window.show()
        self.display_window.spinStarted.connect(self.on_remote_spin_started)
        self.display_window.wheel.spinningChanged.connect(self.on_display_spinning_changed)

        self.init_ui()
        self.setup_style()
        self.reload_wheel_list()

        # the spin page starts with the first saved wheel (no publish needed)
        if self.current_wheel is not None and self.wheel_combo.findData(self.current_wheel.id) >= 0:
            try:
                self.display_window.set_wheel(self.current_wheel)
            except InvalidConfiguration as e:
                log_error_app(f"saved wheel {self.current_wheel.id} cannot be spun: {e}")

    def closeEvent(self, event):
        reply = QMessageBox.question(self, 'Quit',
                                     "Close the console?\nThe spin page will close too.",
                                     QMessageBox.Yes | QMessageBox.No, QMessageBox.No)

        if reply == QMessageBox.Yes:
            try:
                self.store.save_physics(self.physics)
            except StorageError as e:
                log_error_app(f"cannot save physics settings on exit: {e}")
            self.display_window.close()
            event.accept()
        else:
            event.ignore()

    def init_ui(self):
        main_widget = QWidget()
        self.setCentralWidget(main_widget)
        main_widget.setStyleSheet("background-color: #1f2937;")

        layout = QHBoxLayout(main_widget)

        # --- Left: editor panel ---
        control_panel = QFrame()
        control_panel.setFixedWidth(600)
        control_panel.setStyleSheet("""
            QFrame { background-color: #334155; color: white; }
            QLabel { color: #e2e8f0; font-weight: bold; font-size: 15px; }
            QPushButton { background-color: #4f46e5; color: white; padding: 8px; border-radius: 5px; font-weight: bold; }
            QPushButton:hover { background-color: #6366f1; }
            QLineEdit, QComboBox, QDoubleSpinBox { padding: 6px; color: #111; background: #f1f5f9; border-radius: 4px; font-size: 14px; }
            QTableWidget { color: #111; background: #f8fafc; font-size: 14px; }
            QGroupBox { border: 2px solid #64748b; border-radius: 5px; margin-top: 20px; font-weight: bold; color: #f1f5f9; padding: 10px; }
            QGroupBox::title { subcontrol-origin: margin; left: 10px; padding: 0 5px; }
        """)

        ctrl_layout = QVBoxLayout(control_panel)

        title = QLabel("🎡 Wheel Console")
        title.setStyleSheet("font-size: 24px; color: #facc15; margin-bottom: 10px;")
        title.setAlignment(Qt.AlignCenter)
        ctrl_layout.addWidget(title)

        # 1. Wheel selection
        wheel_group = QGroupBox("🗂️ Wheels")
        wg_layout = QHBoxLayout(wheel_group)

        self.wheel_combo = QComboBox()
        self.wheel_combo.currentIndexChanged.connect(self.on_wheel_selected)

        new_wheel_btn = QPushButton("➕ New")
        new_wheel_btn.clicked.connect(self.new_wheel)

        delete_wheel_btn = QPushButton("🗑️ Delete")
        delete_wheel_btn.setStyleSheet("background-color: #b91c1c;")
        delete_wheel_btn.clicked.connect(self.delete_wheel)

        wg_layout.addWidget(self.wheel_combo, 3)
        wg_layout.addWidget(new_wheel_btn, 1)
        wg_layout.addWidget(delete_wheel_btn, 1)

        # 2. Segment editor
        edit_group = QGroupBox("✏️ Segments")
        eg_layout = QVBoxLayout(edit_group)

        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Wheel title...")
        self.title_input.textChanged.connect(self.update_preview_content)

        self.segment_table = QTableWidget(0, 4)
        self.segment_table.setHorizontalHeaderLabels(["Label", "Weight", "Color", "Link (optional)"])
        self.segment_table.horizontalHeader().setSectionResizeMode(COL_LABEL, QHeaderView.Stretch)
        self.segment_table.horizontalHeader().setSectionResizeMode(COL_URL, QHeaderView.Stretch)
        self.segment_table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.segment_table.itemChanged.connect(self.update_preview_list)

        add_seg_btn = QPushButton("➕ Add segment")
        add_seg_btn.clicked.connect(self.add_segment)

        remove_seg_btn = QPushButton("➖ Remove selected")
        remove_seg_btn.setStyleSheet("background-color: #b91c1c;")
        remove_seg_btn.clicked.connect(self.remove_segment)

        shuffle_btn = QPushButton("🔀 Shuffle order")
        shuffle_btn.clicked.connect(self.shuffle_segments)

        save_btn = QPushButton("💾 Save wheel")
        save_btn.setStyleSheet("background-color: #15803d;")
        save_btn.clicked.connect(self.save_wheel)

        seg_btns = QHBoxLayout()
        seg_btns.addWidget(add_seg_btn)
        seg_btns.addWidget(remove_seg_btn)
        seg_btns.addWidget(shuffle_btn)

        eg_layout.addWidget(self.title_input)
        eg_layout.addWidget(self.segment_table)
        eg_layout.addLayout(seg_btns)
        eg_layout.addWidget(save_btn)

        # 3. Physics tuning
        physics_group = QGroupBox("⚙️ Spin tuning")
        physics_group.setStyleSheet("QGroupBox { border: 2px solid #ea580c; }")
        phy_layout = QVBoxLayout(physics_group)

        # 0~100 -> 0.950~0.999
        lbl_friction_title = QLabel("Friction")
        hbox_friction = QHBoxLayout()
        self.slider_friction = QSlider(Qt.Horizontal)
        self.slider_friction.setRange(0, 100)
        self.slider_friction.setValue(slider_from_friction(self.physics.friction))
        self.slider_friction.valueChanged.connect(self.update_physics_params)

        self.lbl_friction_val = QLabel(f"{self.physics.friction:.3f}")
        self.lbl_friction_val.setFixedWidth(60)
        self.lbl_friction_val.setStyleSheet("color: yellow;")

        hbox_friction.addWidget(QLabel("Short"))
        hbox_friction.addWidget(self.slider_friction)
        hbox_friction.addWidget(QLabel("Long"))
        hbox_friction.addWidget(self.lbl_friction_val)

        btn_reset_phy = QPushButton("↩️ Restore defaults")
        btn_reset_phy.setStyleSheet("background-color: #64748b; font-size: 13px; padding: 5px;")
        btn_reset_phy.clicked.connect(self.reset_physics_params)

        phy_layout.addWidget(lbl_friction_title)
        phy_layout.addLayout(hbox_friction)
        phy_layout.addWidget(btn_reset_phy)

        # 4. Publish and system
        publish_btn = QPushButton("🚀 Publish to spin page 🚀")
        publish_btn.setStyleSheet("""
            QPushButton {
                background-color: #7c3aed; color: white; margin-top: 10px; font-size: 17px; padding: 12px;
            }
            QPushButton:hover { background-color: #8b5cf6; }
        """)
        publish_btn.clicked.connect(self.publish_to_display)

        close_sys_btn = QPushButton("❌ Quit")
        close_sys_btn.setStyleSheet("background-color: #b91c1c; margin-top: 10px;")
        close_sys_btn.clicked.connect(self.close)

        ctrl_layout.addWidget(wheel_group)
        ctrl_layout.addWidget(edit_group, 1)
        ctrl_layout.addWidget(physics_group)
        ctrl_layout.addWidget(publish_btn)
        ctrl_layout.addStretch()
        ctrl_layout.addWidget(close_sys_btn)

        # --- Right: preview and main actions ---
        preview_panel = QWidget()
        preview_layout = QVBoxLayout(preview_panel)

        self.preview_label = QLabel("📺 PREVIEW")
        self.preview_label.setStyleSheet("font-size: 20px; color: white; font-weight: bold;")
        self.preview_label.setAlignment(Qt.AlignCenter)

        self.preview_wheel = WheelWidget(config=self.physics)
        self.preview_wheel.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)

        self.sys_spin_btn = QPushButton("🎰 SPIN (from console)")
        self.sys_spin_btn.setMinimumHeight(60)
        self.sys_spin_btn.setStyleSheet("""
            QPushButton {
                background-color: #facc15;
                color: black; font-size: 22px; border-radius: 10px; border: 2px solid white;
            }
            QPushButton:hover { background-color: #fde047; }
            QPushButton:disabled { background-color: #94a3b8; }
        """)
        self.sys_spin_btn.clicked.connect(self.master_start_spin)

        stats_btn = QPushButton("📊 Results summary")
        stats_btn.setMinimumHeight(40)
        stats_btn.setStyleSheet("background-color: #0891b2; color: white; font-size: 16px; border-radius: 8px;")
        stats_btn.clicked.connect(self.show_analytics)

        preview_layout.addWidget(self.preview_label)
        preview_layout.addWidget(self.preview_wheel, 1)
        preview_layout.addWidget(self.sys_spin_btn)
        preview_layout.addWidget(stats_btn)

        layout.addWidget(control_panel, 1)
        layout.addWidget(preview_panel, 2)

    def setup_style(self):
        self.setStyleSheet(self.styleSheet() + """
            QMessageBox { background-color: #333; color: white; }
            QMessageBox QLabel { color: white; font-size: 15px; }
            QMessageBox QPushButton { background-color: #facc15; color: black; padding: 5px 15px; }
        """)

    # -------------------------------------------------------------
    # Physics
    # -------------------------------------------------------------
    def update_physics_params(self):
        """Friction slider moved"""
        self.physics.friction = friction_from_slider(self.slider_friction.value())
        self.lbl_friction_val.setText(f"{self.physics.friction:.3f}")
        self._apply_physics()

    def reset_physics_params(self):
        self.physics = PhysicsConfig()
        self.slider_friction.blockSignals(True)
        self.slider_friction.setValue(slider_from_friction(self.physics.friction))
        self.slider_friction.blockSignals(False)
        self.lbl_friction_val.setText(f"{self.physics.friction:.3f}")
        self._apply_physics()

    def _apply_physics(self):
        try:
            self.display_window.set_physics(self.physics)
            self.preview_wheel.set_physics(self.physics)
        except InvalidConfiguration as e:
            log_error_app(f"rejected physics settings: {e}")
            QMessageBox.warning(self, "Invalid settings", str(e))
            return
        try:
            self.store.save_physics(self.physics)
        except StorageError as e:
            log_error_app(f"cannot save physics settings: {e}")

    # -------------------------------------------------------------
    # Wheels
    # -------------------------------------------------------------
    def reload_wheel_list(self, select_id=None):
        try:
            wheels = self.store.list_wheels()
        except StorageError as e:
            QMessageBox.critical(self, "Load error", f"Cannot read saved wheels:\n{e}")
            wheels = []

        self._loading = True
        self.wheel_combo.clear()
        for wheel in wheels:
            self.wheel_combo.addItem(wheel.caption(), wheel.id)
        self._loading = False

        if not wheels:
            self.load_into_editor(Wheel(title="", segments=default_segments()))
            return

        index = self.wheel_combo.findData(select_id) if select_id else 0
        self.wheel_combo.setCurrentIndex(max(index, 0))
        self.on_wheel_selected(self.wheel_combo.currentIndex())

    def on_wheel_selected(self, index):
        if self._loading or index < 0:
            return
        wheel_id = self.wheel_combo.itemData(index)
        try:
            wheel = self.store.load(wheel_id)
        except (WheelNotFound, StorageError) as e:
            log_error_app(f"cannot load wheel {wheel_id}: {e}")
            QMessageBox.warning(self, "Load error", f"Cannot load this wheel:\n{e}")
            return
        self.load_into_editor(wheel)

    def new_wheel(self):
        self.wheel_combo.blockSignals(True)
        self.wheel_combo.setCurrentIndex(-1)
        self.wheel_combo.blockSignals(False)
        self.load_into_editor(Wheel(title="", segments=default_segments()))
        self.title_input.setFocus()

    def delete_wheel(self):
        wheel = self.current_wheel
        if wheel is None or self.wheel_combo.findData(wheel.id) < 0:
            return

        reply = QMessageBox.question(self, "Delete wheel",
                                     f"Delete [{wheel.title}] and all of its recorded results?",
                                     QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if reply != QMessageBox.Yes:
            return
        try:
            self.store.delete_wheel(wheel.id)
        except StorageError as e:
            QMessageBox.critical(self, "Delete error", str(e))
            return
        log_transaction(f"wheel {wheel.id} ({wheel.title}) deleted")
        self.reload_wheel_list()

    def load_into_editor(self, wheel):
        self.current_wheel = wheel
        self._loading = True
        self.title_input.setText(wheel.title)
        self.segment_table.setRowCount(0)
        for segment in wheel.segments:
            self._append_row(segment)
        self._loading = False
        self.update_preview_list()
        self.update_preview_content()

    def save_wheel(self):
        title = self.title_input.text().strip()
        segments = self.collect_segments()
        if not title or len(segments) < 2:
            QMessageBox.warning(self, "Cannot save", "Please provide a title and at least 2 segments.")
            return

        wheel = self.current_wheel or Wheel()
        wheel.title = title
        wheel.segments = segments
        try:
            self.store.save_wheel(wheel)
        except StorageError as e:
            QMessageBox.critical(self, "Save error", f"Cannot save the wheel:\n{e}")
            return
        log_transaction(f"wheel {wheel.id} ({wheel.title}) saved with {len(segments)} segments")
        self.reload_wheel_list(select_id=wheel.id)

        msg = QMessageBox(self)
        msg.setWindowTitle("Saved")
        msg.setText("Wheel saved!")
        msg.setIcon(QMessageBox.NoIcon)
        msg.exec_()

    # -------------------------------------------------------------
    # Segment table
    # -------------------------------------------------------------
    def _append_row(self, segment):
        row = self.segment_table.rowCount()
        self.segment_table.insertRow(row)

        label_item = QTableWidgetItem(segment.label)
        label_item.setData(Qt.UserRole, segment.id)
        self.segment_table.setItem(row, COL_LABEL, label_item)

        # the spin box minimum keeps every weight positive
        weight_box = QDoubleSpinBox()
        weight_box.setRange(MIN_WEIGHT, 1000000)
        weight_box.setDecimals(2)
        weight_box.setValue(max(MIN_WEIGHT, float(segment.weight)))
        weight_box.valueChanged.connect(self.update_preview_list)
        self.segment_table.setCellWidget(row, COL_WEIGHT, weight_box)

        color_btn = QPushButton(segment.color)
        color_btn.setProperty("hex", segment.color)
        self._paint_color_button(color_btn, segment.color)
        color_btn.clicked.connect(lambda _=False, b=color_btn: self.pick_color(b))
        self.segment_table.setCellWidget(row, COL_COLOR, color_btn)

        self.segment_table.setItem(row, COL_URL, QTableWidgetItem(segment.url or ""))

    @staticmethod
    def _paint_color_button(button, hex_color):
        text_color = "black" if QColor(hex_color).lightness() > 150 else "white"
        button.setStyleSheet(f"background-color: {hex_color}; color: {text_color}; padding: 4px;")

    def pick_color(self, button):
        color = QColorDialog.getColor(QColor(button.property("hex")), self, "Segment color")
        if color.isValid():
            hex_color = color.name()
            button.setProperty("hex", hex_color)
            button.setText(hex_color)
            self._paint_color_button(button, hex_color)
            self.update_preview_list()

    def collect_segments(self):
        segments = []
        for row in range(self.segment_table.rowCount()):
            label_item = self.segment_table.item(row, COL_LABEL)
            url_item = self.segment_table.item(row, COL_URL)
            weight_box = self.segment_table.cellWidget(row, COL_WEIGHT)
            color_btn = self.segment_table.cellWidget(row, COL_COLOR)
            if label_item is None or weight_box is None or color_btn is None:
                continue
            url = url_item.text().strip() if url_item is not None else ""
            segments.append(Segment(
                id=label_item.data(Qt.UserRole),
                label=label_item.text().strip(),
                weight=weight_box.value(),
                color=color_btn.property("hex"),
                url=url or None,
            ))
        return segments

    def add_segment(self):
        self._append_row(new_segment(self.collect_segments()))
        self.update_preview_list()

    def remove_segment(self):
        rows = sorted({index.row() for index in self.segment_table.selectedIndexes()}, reverse=True)
        if not rows and self.segment_table.rowCount():
            rows = [self.segment_table.rowCount() - 1]
        for row in rows:
            self.segment_table.removeRow(row)
        self.update_preview_list()

    def shuffle_segments(self):
        segments = self.collect_segments()
        if len(segments) < 2:
            return
        random.shuffle(segments)
        self._loading = True
        self.segment_table.setRowCount(0)
        for segment in segments:
            self._append_row(segment)
        self._loading = False
        self.update_preview_list()

    # -------------------------------------------------------------
    # Preview / publish
    # -------------------------------------------------------------
    def update_preview_list(self, *args):
        """Only the preview wheel follows the editor; the spin page waits for publish."""
        if self._loading:
            return
        try:
            self.preview_wheel.set_segments(self.collect_segments())
        except InvalidConfiguration as e:
            self.preview_label.setText(f"📺 PREVIEW - {e}")

    def update_preview_content(self):
        title = self.title_input.text().strip() or "Untitled wheel"
        self.preview_label.setText(f"📺 PREVIEW: {title}")

    def publish_to_display(self):
        """Send the edited wheel to the spin page (unsaved edits included)."""
        wheel = self.current_wheel or Wheel()
        published = Wheel(
            id=wheel.id,
            title=self.title_input.text().strip(),
            segments=self.collect_segments(),
            created_at=wheel.created_at,
            updated_at=wheel.updated_at,
            is_public=wheel.is_public,
            user_id=wheel.user_id,
        )
        try:
            self.display_window.set_wheel(published)
        except InvalidConfiguration as e:
            QMessageBox.warning(self, "Cannot publish", f"This wheel cannot be spun:\n{e}")
            return
        log_transaction(f"wheel {published.id} ({published.title}) published to the spin page")

        msg = QMessageBox(self)
        msg.setWindowTitle("Published")
        msg.setText("The spin page now shows this wheel.")
        msg.setIcon(QMessageBox.NoIcon)
        msg.exec_()

    def on_remote_spin_started(self):
        """Lock the console button while the spin page turns"""
        self.sys_spin_btn.setEnabled(False)

    def on_display_spinning_changed(self, spinning):
        self.sys_spin_btn.setEnabled(not spinning)

    def master_start_spin(self):
        if self.display_window.wheel_model is None:
            QMessageBox.information(self, "Nothing to spin", "Publish a wheel to the spin page first.")
            return
        self.display_window.start_spin()

    def show_analytics(self):
        wheel = self.current_wheel
        if wheel is None or self.wheel_combo.findData(wheel.id) < 0:
            QMessageBox.information(self, "Results", "Save the wheel first to collect results.")
            return
        try:
            outcomes = self.store.list(wheel.id)
        except StorageError as e:
            QMessageBox.critical(self, "Load error", str(e))
            return

        msg = QMessageBox(self)
        msg.setWindowTitle("Results summary")
        msg.setText(format_summary(wheel, build_analytics(wheel, outcomes)))
        msg.setIcon(QMessageBox.NoIcon)
        msg.exec_()
