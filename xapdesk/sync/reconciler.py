"""
Heartbeat Reconciler
Folds each state poll into the meter readouts

Per channel present in a snapshot:
- muted      -> meter text cleared, band left as it was
- not muted  -> "<rounded>db", band red (>= 20) / yellow (>= 10) / green

Only the meter is touched; gain and on/off lit state belong to the
dispatcher. Snapshot entries with no rendered channel are skipped,
rendered channels missing from the snapshot are left alone.
"""

from __future__ import annotations

import math

from xapdesk.config import format_db, level_band
from xapdesk.engine.results import TransportFailure
from xapdesk.utils.logger import logger

POLL_STREAM = 'poll'


def display_round(level: float) -> int:
    """Nearest whole dB, halves toward +infinity (-0.5 -> 0, 2.5 -> 3)."""
    return int(math.floor(level + 0.5))


class HeartbeatReconciler:
    """Polls engine state and applies it to the surface."""

    def __init__(self, bridge, runner, surface, monitor=None, guard=None):
        self.bridge = bridge
        self.runner = runner
        self.surface = surface
        self.monitor = monitor
        self.guard = guard

    def apply(self, snapshot):
        """Apply one parsed snapshot. Returns how many channels were updated."""
        applied = 0
        for address, reading in snapshot.items():
            state = self.surface.get(address)
            if state is None:
                continue
            if reading.muted:
                state.set_meter("", None, True)
            else:
                rounded = display_round(reading.level)
                state.set_meter(format_db(rounded), level_band(rounded), False)
            applied += 1
        return applied

    def poll(self):
        """Request one snapshot in the background."""
        token = self.guard.issue(POLL_STREAM) if self.guard is not None else None
        return self.runner.submit(self.bridge.fetch_snapshot,
                                  lambda result: self._on_snapshot(token, result))

    def _on_snapshot(self, token, result):
        if not result.ok:
            if isinstance(result, TransportFailure):
                logger.debug("Poll failed", component="SYNC", details=str(result))
            else:
                logger.warning("Poll reply not applied", component="SYNC", details=str(result))
            if self.monitor is not None:
                self.monitor.record_failure(result)
            return

        if self.monitor is not None:
            self.monitor.record_success()
        if self.guard is not None and not self.guard.accept(POLL_STREAM, token):
            logger.debug("Stale poll reply dropped", component="SYNC", details=f"token {token}")
            return
        self.apply(result.value)
