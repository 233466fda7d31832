"""
Mixer Panel Component
One row of channel strips per group, built from the surface state

Group rows follow the group display order; strips inside a row follow the
order the engine listed them in. Strip gestures are forwarded as panel
signals carrying the ChannelAddress.
"""

from PyQt5.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame
from PyQt5.QtCore import Qt, pyqtSignal
from PyQt5.QtGui import QFont

from xapdesk.model.channel import pretty_name

from .channel_strip import ChannelStrip
from .theme import COLORS, FONT_FAMILY, FONT_SIZES, panel_style


class MixerPanel(QWidget):
    """Mixer panel with channel strips grouped by row."""

    gain_committed = pyqtSignal(object, int)   # address, requested dB
    gain_reset = pyqtSignal(object)            # address
    mute_requested = pyqtSignal(object, bool)  # address, desired muted

    def __init__(self, surface, parent=None):
        super().__init__(parent)
        self.surface = surface
        self.strips = {}  # ChannelAddress -> ChannelStrip
        self.setup_ui()

    def setup_ui(self):
        """Create mixer panel."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        for group in self.surface.groups():
            heading = QLabel(pretty_name(group).upper())
            heading.setFont(QFont(FONT_FAMILY, FONT_SIZES['section'], QFont.Bold))
            heading.setStyleSheet(f"color: {COLORS['accent_group']};")
            layout.addWidget(heading)

            row_frame = QFrame()
            row_frame.setObjectName(f"group_{group}")
            row_frame.setStyleSheet(panel_style())
            row_layout = QHBoxLayout(row_frame)
            row_layout.setContentsMargins(4, 4, 4, 4)
            row_layout.setSpacing(2)

            for state in self.surface.in_group(group):
                strip = ChannelStrip(state)
                strip.gain_committed.connect(self.gain_committed)
                strip.gain_reset.connect(self.gain_reset)
                strip.mute_requested.connect(self.mute_requested)
                row_layout.addWidget(strip)
                self.strips[state.address] = strip

            row_layout.addStretch()
            layout.addWidget(row_frame, stretch=1)

        if not self.strips:
            empty = QLabel("No channels reported by the engine")
            empty.setAlignment(Qt.AlignCenter)
            empty.setStyleSheet(f"color: {COLORS['text_dim']};")
            layout.addWidget(empty)

    def strip(self, address):
        return self.strips.get(address)
