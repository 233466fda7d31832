"""
Command Dispatcher
Sends gain/mute commands and applies only what the engine confirms

Nothing on screen changes when a command is sent. The reply handler gets an
explicit result: on Ok the confirmed value is written to the channel's
display state, on anything else the prior state stays and the failure is
logged. A failed gain re-emits the confirmed value so the fader returns to
it. No retries.

Replies are applied in arrival order (last-applied-wins). With a
SequenceGuard, a reply older than one already applied for the same
channel field is dropped instead.
"""

from __future__ import annotations

from functools import partial

from xapdesk.config import UNITY_GAIN_DB
from xapdesk.utils.logger import logger

GAIN = 'gain'
MUTE = 'mute'


class CommandDispatcher:
    """Routes channel commands to the engine and confirmed replies to the surface."""

    def __init__(self, bridge, runner, surface, guard=None, on_result=None):
        self.bridge = bridge
        self.runner = runner
        self.surface = surface
        self.guard = guard
        # Optional observer: on_result(address, operation, result)
        self.on_result = on_result

    def _issue(self, address, operation):
        if self.guard is None:
            return None
        return self.guard.issue((address, operation))

    def _accept(self, address, operation, token) -> bool:
        if self.guard is None:
            return True
        if self.guard.accept((address, operation), token):
            return True
        logger.channel(address, f"stale {operation} reply dropped", details=f"token {token}")
        return False

    def _notify(self, address, operation, result):
        if self.on_result is not None:
            self.on_result(address, operation, result)

    # -- gain ----------------------------------------------------------------

    def set_gain(self, address, requested: int):
        """Request a gain change. The fader moves only when the engine confirms."""
        token = self._issue(address, GAIN)
        logger.channel(address, f"set gain {requested}")
        return self.runner.submit(
            partial(self.bridge.set_gain, address, requested),
            partial(self._on_gain_reply, address, requested, token),
        )

    def reset_gain(self, address):
        """Double-click reset: always asks for unity, whatever the fader shows."""
        return self.set_gain(address, UNITY_GAIN_DB)

    def _on_gain_reply(self, address, requested, token, result):
        self._notify(address, GAIN, result)
        if not result.ok:
            logger.warning(f"{address}: set gain {requested} failed", component="SYNC",
                           details=str(result))
            state = self.surface.get(address)
            if state is not None:
                state.reshow_gain()
            return
        if not self._accept(address, GAIN, token):
            return
        state = self.surface.get(address)
        if state is None:
            return
        if result.value != requested:
            logger.channel(address, f"engine confirmed gain {result.value} (asked {requested})")
        state.apply_confirmed_gain(result.value)

    # -- mute ----------------------------------------------------------------

    def set_mute(self, address, muted: bool):
        """Request mute (Off pressed) or unmute (On pressed)."""
        muted = bool(muted)
        token = self._issue(address, MUTE)
        logger.channel(address, "mute" if muted else "unmute")
        return self.runner.submit(
            partial(self.bridge.set_mute, address, muted),
            partial(self._on_mute_reply, address, muted, token),
        )

    def _on_mute_reply(self, address, muted, token, result):
        self._notify(address, MUTE, result)
        if not result.ok:
            logger.warning(f"{address}: {'mute' if muted else 'unmute'} failed", component="SYNC",
                           details=str(result))
            return
        if not self._accept(address, MUTE, token):
            return
        state = self.surface.get(address)
        if state is None:
            return
        state.apply_confirmed_mute(muted)
