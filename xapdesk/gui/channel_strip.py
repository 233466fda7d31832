"""
Channel Strip
One channel: header, name, meter readout, fader readout, fader, On/Off

The strip renders its ChannelState and reports gestures; it never changes
its own displayed values. Gesture signals carry the strip's ChannelAddress.
"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from xapdesk.config import GAIN_MAX_DB, GAIN_MIN_DB

from .theme import (COLORS, FONT_FAMILY, FONT_SIZES, MONO_FONT, SIZES,
                    lit_button_style, meter_label_style)
from .widgets import GainFader


class ChannelStrip(QWidget):
    """Widget view of one ChannelState."""

    gain_committed = pyqtSignal(object, int)   # address, requested dB
    gain_reset = pyqtSignal(object)            # address
    mute_requested = pyqtSignal(object, bool)  # address, desired muted

    def __init__(self, state, parent=None):
        super().__init__(parent)
        self.state = state
        self.address = state.address
        self.setObjectName(self.address.panel_id)
        self.setFixedWidth(SIZES['strip_width'])
        self.setup_ui()

        state.gain_changed.connect(self._on_gain_changed)
        state.lit_changed.connect(self._on_lit_changed)
        state.meter_changed.connect(self._on_meter_changed)
        self.refresh()

    def setup_ui(self):
        """Create channel strip."""
        ids = self.address.element_ids()
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 5, 2, 5)
        layout.setSpacing(3)

        header = QLabel(str(self.address.index))
        header.setFont(QFont(MONO_FONT, FONT_SIZES['tiny']))
        header.setAlignment(Qt.AlignCenter)
        header.setStyleSheet(f"color: {COLORS['text_dim']};")
        layout.addWidget(header)

        self.name_label = QLabel(self.state.label)
        self.name_label.setFont(QFont(FONT_FAMILY, FONT_SIZES['small']))
        self.name_label.setAlignment(Qt.AlignCenter)
        self.name_label.setStyleSheet(f"color: {COLORS['text']};")
        self.name_label.setToolTip(self.state.label)
        layout.addWidget(self.name_label)

        self.meter_label = QLabel()
        self.meter_label.setObjectName(ids['level'])
        self.meter_label.setFont(QFont(MONO_FONT, FONT_SIZES['label'], QFont.Bold))
        self.meter_label.setAlignment(Qt.AlignCenter)
        self.meter_label.setFixedHeight(18)
        layout.addWidget(self.meter_label)

        self.fader_label = QLabel()
        self.fader_label.setObjectName(ids['faderLevel'])
        self.fader_label.setFont(QFont(MONO_FONT, FONT_SIZES['small']))
        self.fader_label.setAlignment(Qt.AlignCenter)
        self.fader_label.setStyleSheet(f"color: {COLORS['text_bright']};")
        layout.addWidget(self.fader_label)

        # Fader with its bound labels
        top = QLabel(str(GAIN_MAX_DB))
        bottom = QLabel(str(GAIN_MIN_DB))
        for bound in (top, bottom):
            bound.setFont(QFont(MONO_FONT, FONT_SIZES['tiny']))
            bound.setAlignment(Qt.AlignCenter)
            bound.setStyleSheet(f"color: {COLORS['text_dim']};")

        self.fader = GainFader()
        self.fader.setObjectName(ids['slider'])
        self.fader.setMinimumHeight(SIZES['fader_height'])
        self.fader.setToolTip("Drag to set gain (double-click: 0 dB)")
        self.fader.committed.connect(self._on_fader_committed)
        self.fader.reset_requested.connect(self._on_fader_reset)

        layout.addWidget(top)
        layout.addWidget(self.fader, stretch=1, alignment=Qt.AlignHCenter)
        layout.addWidget(bottom)

        # On / Off
        btn_layout = QHBoxLayout()
        btn_layout.setSpacing(2)

        self.on_btn = QPushButton("On")
        self.on_btn.setObjectName(ids['on'])
        self.off_btn = QPushButton("Off")
        self.off_btn.setObjectName(ids['off'])
        for btn in (self.on_btn, self.off_btn):
            btn.setFixedSize(*SIZES['button'])
            btn.setFont(QFont(FONT_FAMILY, FONT_SIZES['tiny'], QFont.Bold))
            btn_layout.addWidget(btn)
        self.on_btn.clicked.connect(lambda: self.mute_requested.emit(self.address, False))
        self.off_btn.clicked.connect(lambda: self.mute_requested.emit(self.address, True))

        layout.addLayout(btn_layout)

    # -- gestures ------------------------------------------------------------

    def _on_fader_committed(self, value):
        self.gain_committed.emit(self.address, value)

    def _on_fader_reset(self):
        self.gain_reset.emit(self.address)

    # -- rendering -----------------------------------------------------------

    def refresh(self):
        """Re-render everything from the state."""
        self._on_gain_changed(self.state.gain)
        self._on_lit_changed(self.state.off_lit)
        self._on_meter_changed(self.state.meter_text, self.state.meter_band)

    def _on_gain_changed(self, _value):
        self.fader.show_confirmed(self.state.fader_position)
        self.fader_label.setText(self.state.gain_text)

    def _on_lit_changed(self, muted):
        self.on_btn.setStyleSheet(lit_button_style('on', not muted))
        self.off_btn.setStyleSheet(lit_button_style('off', muted))

    def _on_meter_changed(self, text, band):
        self.meter_label.setText(text)
        self.meter_label.setStyleSheet(meter_label_style(band))
