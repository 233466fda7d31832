"""
Request Runner
Runs blocking bridge calls off the GUI thread

submit(call, on_done) returns at once. call() runs on a QThreadPool worker;
its result comes back through a queued Qt signal, so on_done(result) always
runs on the thread that owns the runner (the GUI thread), in the order the
calls complete. Nothing is cancelled; every submitted call reports back.
"""

from __future__ import annotations

import itertools

from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from xapdesk.engine.results import TransportFailure
from xapdesk.utils.logger import logger


class _CallTask(QRunnable):
    """One blocking call on a pool thread."""

    def __init__(self, runner, ticket, call):
        super().__init__()
        self._runner = runner
        self._ticket = ticket
        self._call = call

    def run(self):
        try:
            result = self._call()
        except Exception as e:
            # Bridge calls return failures instead of raising; this is a bug path
            logger.error(f"Request raised {type(e).__name__}", component="HTTP", details=str(e))
            result = TransportFailure(f"{type(e).__name__}: {e}")
        # Receiver lives on the GUI thread, so this is a queued delivery
        self._runner._completed.emit(self._ticket, result)


class RequestRunner(QObject):
    """Thread pool front end with completion callbacks on the owner thread."""

    _completed = pyqtSignal(object, object)  # ticket, result

    MAX_THREADS = 4

    def __init__(self, max_threads=None, parent=None):
        super().__init__(parent)
        self._pool = QThreadPool(self)
        self._pool.setMaxThreadCount(max_threads or self.MAX_THREADS)
        self._tickets = itertools.count(1)
        self._callbacks = {}  # ticket -> on_done
        self._completed.connect(self._on_completed)

    def submit(self, call, on_done):
        """Run call() in the background and hand its result to on_done."""
        ticket = next(self._tickets)
        self._callbacks[ticket] = on_done
        self._pool.start(_CallTask(self, ticket, call))
        return ticket

    def _on_completed(self, ticket, result):
        on_done = self._callbacks.pop(ticket, None)
        if on_done is not None:
            on_done(result)

    @property
    def pending_count(self) -> int:
        """Calls submitted whose results have not been delivered yet."""
        return len(self._callbacks)

    def wait_for_done(self, msecs=-1) -> bool:
        """Block until all worker calls finish (results may still be queued)."""
        return self._pool.waitForDone(msecs)
