"""
MixerController - Routes mixer strip gestures to the command dispatcher.

Owns the dispatcher and the mixer panel for the current surface. Every
gesture arrives with its ChannelAddress already bound by the strip.
"""
from __future__ import annotations

from xapdesk.gui.mixer_panel import MixerPanel
from xapdesk.sync.dispatcher import CommandDispatcher
from xapdesk.utils.logger import logger


class MixerController:
    """Handles mixer strip gestures and command results."""

    STATUS_MESSAGE_MS = 4000

    def __init__(self, main_frame):
        self.main = main_frame
        self.dispatcher = None

    def install(self, surface):
        """Build a dispatcher and panel for a freshly loaded surface."""
        self.dispatcher = CommandDispatcher(
            self.main.bridge, self.main.runner, surface,
            guard=self.main.guard, on_result=self.on_command_result,
        )
        panel = MixerPanel(surface)
        panel.gain_committed.connect(self.on_gain_committed)
        panel.gain_reset.connect(self.on_gain_reset)
        panel.mute_requested.connect(self.on_mute_requested)
        self.main.set_mixer_panel(panel)
        logger.info(f"Surface built: {len(surface)} channels", component="UI")
        return panel

    def on_gain_committed(self, address, value):
        """Fader released at a new position."""
        if self.dispatcher is not None:
            self.dispatcher.set_gain(address, value)

    def on_gain_reset(self, address):
        """Fader double-clicked."""
        if self.dispatcher is not None:
            self.dispatcher.reset_gain(address)

    def on_mute_requested(self, address, muted):
        """On (muted=False) or Off (muted=True) pressed."""
        if self.dispatcher is not None:
            self.dispatcher.set_mute(address, muted)

    def on_command_result(self, address, operation, result):
        """Surface failed commands in the status bar; the strip keeps its prior state."""
        if result.ok:
            return
        self.main.statusBar().showMessage(f"{address} {operation}: {result}",
                                          self.STATUS_MESSAGE_MS)
