"""
Tests for xapdesk/engine/request_runner.py
Calls run on pool threads; results arrive on the owner thread
"""

import threading

import pytest
from PyQt5.QtCore import QCoreApplication

from xapdesk.engine.request_runner import RequestRunner
from xapdesk.engine.results import Ok, TransportFailure


@pytest.fixture(scope="session")
def qt_app():
    return QCoreApplication.instance() or QCoreApplication([])


def drain(qt_app, runner, expected):
    """Wait for workers, then pump queued deliveries until `expected` arrived."""
    assert runner.wait_for_done(5000)
    for _ in range(50):
        qt_app.processEvents()
        if len(expected()) >= 1 and runner.pending_count == 0:
            break


class TestRequestRunner:
    """Background calls with completion callbacks."""

    def test_result_delivered_on_owner_thread(self, qt_app):
        runner = RequestRunner()
        seen = []
        runner.submit(lambda: Ok(threading.get_ident()),
                      lambda result: seen.append((result, threading.get_ident())))
        drain(qt_app, runner, lambda: seen)
        assert len(seen) == 1
        result, delivered_on = seen[0]
        assert result.ok
        assert delivered_on == threading.get_ident()

    def test_raising_call_becomes_transport_failure(self, qt_app):
        runner = RequestRunner()
        seen = []

        def explode():
            raise RuntimeError("bug")

        runner.submit(explode, seen.append)
        drain(qt_app, runner, lambda: seen)
        assert len(seen) == 1
        assert isinstance(seen[0], TransportFailure)
        assert "RuntimeError" in seen[0].error

    def test_every_call_reports(self, qt_app):
        runner = RequestRunner(max_threads=2)
        seen = []
        for i in range(6):
            runner.submit(lambda i=i: Ok(i), seen.append)
        assert runner.wait_for_done(5000)
        for _ in range(50):
            qt_app.processEvents()
            if len(seen) == 6:
                break
        assert sorted(r.value for r in seen) == list(range(6))
        assert runner.pending_count == 0
