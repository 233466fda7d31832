"""
Reusable UI Widgets
Atomic components with no business logic - just behavior
"""

from PyQt5.QtWidgets import QSlider, QLabel, QApplication
from PyQt5.QtCore import Qt, pyqtSignal, QPoint
from PyQt5.QtGui import QFont

from xapdesk.config import GAIN_MAX_DB, GAIN_MIN_DB, format_db

from .theme import slider_style, COLORS, MONO_FONT, FONT_SIZES


class ValuePopup(QLabel):
    """
    Floating popup that displays a value near a slider handle.
    Shows during drag, hides on release.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFont(QFont(MONO_FONT, FONT_SIZES['small']))
        self.setStyleSheet(f"""
            QLabel {{
                background-color: {COLORS['background_light']};
                color: {COLORS['text_bright']};
                border: 1px solid {COLORS['border_light']};
                border-radius: 3px;
                padding: 2px 5px;
            }}
        """)
        self.setAlignment(Qt.AlignCenter)
        self.hide()
        self.setWindowFlags(Qt.ToolTip)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)

    def show_value(self, text, global_pos):
        """Show popup with text at position."""
        self.setText(text)
        self.adjustSize()
        self.move(global_pos.x() + 15, global_pos.y() - self.height() // 2)
        self.show()
        self.raise_()


class GainFader(QSlider):
    """
    Vertical dB fader with click+drag anywhere behavior.
    Drag up = increase, drag down = decrease. Hold Shift for fine control.

    The fader never talks to the engine while moving. It emits committed(value)
    once per gesture, on release, and only if the value moved. Double-click
    emits reset_requested. The position shown between gestures is whatever
    show_confirmed() last set.
    """

    committed = pyqtSignal(int)
    reset_requested = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(Qt.Vertical, parent)
        self.setRange(GAIN_MIN_DB, GAIN_MAX_DB)
        self.setTracking(False)
        self.setStyleSheet(slider_style())

        # Drag tracking
        self.dragging = False
        self.drag_start_y = 0
        self.drag_start_value = 0

        self._popup = None

    def show_confirmed(self, value):
        """Move the handle to a confirmed value without emitting anything."""
        position = max(self.minimum(), min(self.maximum(), int(value)))
        self.blockSignals(True)
        self.setValue(position)
        self.blockSignals(False)

    def _get_handle_global_pos(self):
        """Calculate global position of slider handle."""
        groove_margin = 5
        available_height = self.height() - 2 * groove_margin
        value_ratio = (self.value() - self.minimum()) / (self.maximum() - self.minimum())
        handle_y = groove_margin + (1.0 - value_ratio) * available_height
        return self.mapToGlobal(QPoint(self.width(), int(handle_y)))

    def _update_popup(self):
        if self._popup is None:
            self._popup = ValuePopup()
        self._popup.show_value(format_db(self.value()), self._get_handle_global_pos())

    def mousePressEvent(self, event):
        """Start drag from current value."""
        if not self.isEnabled():
            return
        if event.button() == Qt.LeftButton:
            self.dragging = True
            self.drag_start_y = event.globalPos().y()
            self.drag_start_value = self.value()

    def mouseMoveEvent(self, event):
        """Drag up = increase, drag down = decrease. Shift = fine control."""
        if not self.isEnabled() or not self.dragging:
            return
        # Normal: drag full height = full range. Fine: 3x the height.
        travel = self.height() * (3.0 if QApplication.keyboardModifiers() & Qt.ShiftModifier else 1.0)
        delta_y = self.drag_start_y - event.globalPos().y()
        value_range = self.maximum() - self.minimum()
        new_value = self.drag_start_value + int((delta_y / max(travel, 1)) * value_range)
        new_value = max(self.minimum(), min(self.maximum(), new_value))

        if new_value != self.value():
            self.blockSignals(True)
            self.setValue(new_value)
            self.blockSignals(False)
            self._update_popup()

    def mouseReleaseEvent(self, event):
        """End drag; commit if the gesture moved the fader."""
        if event.button() != Qt.LeftButton or not self.dragging:
            return
        self.dragging = False
        if self._popup:
            self._popup.hide()
        if self.value() != self.drag_start_value:
            self.committed.emit(self.value())

    def mouseDoubleClickEvent(self, event):
        """Double-click = reset request; the fader itself does not move."""
        if self.isEnabled() and event.button() == Qt.LeftButton:
            self.reset_requested.emit()
        event.accept()

    def wheelEvent(self, event):
        # Wheel ticks would each be a command
        event.ignore()
