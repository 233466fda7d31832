"""
Channel Display State
The rendered channel set, independent of widgets.

One ChannelState per channel holds exactly what the operator sees:
- fader value + fader label (confirmed gain)   written by the dispatcher
- on/off lit state                             written by the dispatcher
- meter text + meter band + meter-mute flag    written by the reconciler

Widgets subscribe to the signals and re-render; they never write here.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Iterator, List, Optional

from PyQt5.QtCore import QObject, pyqtSignal

from xapdesk.config import format_db, group_display_order
from xapdesk.model.channel import ChannelAddress, ChannelDescriptor


class MuteLit(Enum):
    """Which of the two mute buttons is lit. Exactly one always is."""
    ON = 'on'    # channel audible
    OFF = 'off'  # channel muted

    @classmethod
    def for_muted(cls, muted: bool) -> 'MuteLit':
        return cls.OFF if muted else cls.ON


class ChannelState(QObject):
    """Display state of one channel strip."""

    gain_changed = pyqtSignal(object)   # confirmed gain (int or float)
    lit_changed = pyqtSignal(bool)      # True = muted (off lit)
    meter_changed = pyqtSignal(str, object)  # text, band (None before first reading)

    def __init__(self, descriptor: ChannelDescriptor, parent=None):
        super().__init__(parent)
        self.address = descriptor.address
        self.label = descriptor.display_label
        self._gain = descriptor.gain
        self._lit = MuteLit.for_muted(descriptor.muted)
        self._meter_text = ""
        self._meter_band: Optional[str] = None
        self._meter_muted = descriptor.muted

    # -- gain (dispatcher) ---------------------------------------------------

    @property
    def gain(self):
        return self._gain

    @property
    def gain_text(self) -> str:
        return format_db(self._gain)

    @property
    def fader_position(self) -> int:
        """Gain rounded for the integer fader. Halves round up."""
        return int(math.floor(self._gain + 0.5))

    def apply_confirmed_gain(self, value):
        """Show an engine-confirmed gain. Always re-emits so the fader snaps to it."""
        self._gain = value
        self.gain_changed.emit(value)

    def reshow_gain(self):
        """Re-emit the confirmed gain unchanged. Pulls a released fader back after a failed commit."""
        self.gain_changed.emit(self._gain)

    # -- mute lit state (dispatcher) -----------------------------------------

    @property
    def lit(self) -> MuteLit:
        return self._lit

    @property
    def on_lit(self) -> bool:
        return self._lit is MuteLit.ON

    @property
    def off_lit(self) -> bool:
        return self._lit is MuteLit.OFF

    def apply_confirmed_mute(self, muted: bool):
        self._lit = MuteLit.for_muted(muted)
        self.lit_changed.emit(bool(muted))

    # -- meter (reconciler) --------------------------------------------------

    @property
    def meter_text(self) -> str:
        return self._meter_text

    @property
    def meter_band(self) -> Optional[str]:
        return self._meter_band

    @property
    def meter_muted(self) -> bool:
        return self._meter_muted

    def set_meter(self, text: str, band: Optional[str], muted: bool):
        """
        Update the meter readout.

        band=None keeps the current band (used while muted).
        Emits only when text or band actually changed.
        """
        self._meter_muted = muted
        new_band = self._meter_band if band is None else band
        if text == self._meter_text and new_band == self._meter_band:
            return
        self._meter_text = text
        self._meter_band = new_band
        self.meter_changed.emit(text, new_band)

    def display(self) -> dict:
        """Everything visible for this channel, for comparisons and debug dumps."""
        return {
            'label': self.label,
            'gain': self._gain,
            'gain_text': self.gain_text,
            'on_lit': self.on_lit,
            'off_lit': self.off_lit,
            'meter_text': self._meter_text,
            'meter_band': self._meter_band,
        }


class SurfaceState:
    """All channel states, keyed by address, in build order."""

    def __init__(self, descriptors, parent=None):
        self._channels: Dict[ChannelAddress, ChannelState] = {}
        for descriptor in descriptors:
            if descriptor.address in self._channels:
                raise ValueError(f"duplicate channel {descriptor.address}")
            self._channels[descriptor.address] = ChannelState(descriptor, parent)

    def __getitem__(self, address: ChannelAddress) -> ChannelState:
        return self._channels[address]

    def __contains__(self, address) -> bool:
        return address in self._channels

    def __iter__(self) -> Iterator[ChannelState]:
        return iter(self._channels.values())

    def __len__(self):
        return len(self._channels)

    def get(self, address: ChannelAddress) -> Optional[ChannelState]:
        return self._channels.get(address)

    def find(self, element_id: str) -> Optional[ChannelState]:
        """Look up a channel by one of its widget object names."""
        try:
            return self._channels.get(ChannelAddress.from_element_id(element_id))
        except ValueError:
            return None

    def groups(self) -> List[str]:
        """Group codes present, in display order."""
        seen = []
        for address in self._channels:
            if address.group not in seen:
                seen.append(address.group)
        return group_display_order(seen)

    def in_group(self, group: str) -> List[ChannelState]:
        """Channels of one group, in build order."""
        return [state for address, state in self._channels.items() if address.group == group]

    def display(self) -> dict:
        return {address: state.display() for address, state in self._channels.items()}
