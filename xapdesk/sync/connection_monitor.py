"""
Connection Monitor
Tracks poll health the way a heartbeat watchdog does

Consecutive poll failures are counted; reaching the miss limit marks the
connection stale and emits connection_lost once. The next successful poll
clears the count and emits connection_restored. Commands are never blocked.
"""

from __future__ import annotations

from PyQt5.QtCore import QObject, pyqtSignal

from xapdesk.config import DEFAULT_POLL_MISS_LIMIT
from xapdesk.utils.logger import logger


class ConnectionMonitor(QObject):
    """Counts missed polls and reports lost/restored transitions."""

    connection_lost = pyqtSignal()
    connection_restored = pyqtSignal()

    def __init__(self, miss_limit=DEFAULT_POLL_MISS_LIMIT, parent=None):
        super().__init__(parent)
        if miss_limit < 1:
            raise ValueError(f"miss_limit must be >= 1, got {miss_limit}")
        self.miss_limit = miss_limit
        self.missed = 0
        self._stale = False

    @property
    def is_stale(self) -> bool:
        return self._stale

    def record_success(self):
        self.missed = 0
        if self._stale:
            self._stale = False
            logger.info("Engine responding again", component="HTTP")
            self.connection_restored.emit()

    def record_failure(self, reason=None):
        self.missed += 1
        logger.debug(f"Poll missed ({self.missed}/{self.miss_limit})", component="HTTP",
                     details=str(reason) if reason else None)
        if not self._stale and self.missed >= self.miss_limit:
            self._stale = True
            logger.warning(f"Connection lost - {self.missed} polls unanswered", component="HTTP")
            self.connection_lost.emit()

    def reset(self):
        """Forget history, e.g. after a manual reconnect."""
        self.missed = 0
        self._stale = False
