"""
Tests for xapdesk/utils/logger.py
"""

import logging

import pytest

from xapdesk.utils.logger import LogLevel, logger, parse_log_level


class TestParseLogLevel:
    """Level names from CLI/env."""

    @pytest.mark.parametrize("name,level", [
        ("debug", LogLevel.DEBUG), ("INFO", LogLevel.INFO), ("warn", LogLevel.WARNING),
        ("Warning", LogLevel.WARNING), (" error ", LogLevel.ERROR),
    ])
    def test_names(self, name, level):
        assert parse_log_level(name) == level

    def test_unknown_gives_default(self):
        assert parse_log_level("loud") == LogLevel.INFO
        assert parse_log_level(None, LogLevel.ERROR) == LogLevel.ERROR


class TestDeskLogger:
    """Component tags and the GUI signal."""

    def test_signal_carries_tagged_message(self):
        seen = []
        logger.signal_emitter.log_message.connect(lambda msg, level, ts: seen.append((msg, level)))
        logger.warning("Gain rejected", component="HTTP", details="status 500")
        assert ("[HTTP] Gain rejected - status 500", logging.WARNING) in seen

    def test_channel_helper(self):
        seen = []
        logger.signal_emitter.log_message.connect(lambda msg, level, ts: seen.append(msg))
        logger.channel("I3", "set gain -6")
        assert "[SYNC] I3: set gain -6" in seen

    def test_file_logging(self, tmp_path):
        path = tmp_path / "desk.log"
        logger.enable_file_logging(str(path))
        try:
            logger.info("to file", component="APP")
        finally:
            logger.disable_file_logging()
        assert "[APP] to file" in path.read_text()

    def test_untagged_message(self):
        seen = []
        logger.signal_emitter.log_message.connect(lambda msg, level, ts: seen.append((msg, level)))
        logger.log(logging.ERROR, "plain")
        assert ("plain", logging.ERROR) in seen

    def test_terminal_threshold_leaves_gui_feed(self):
        seen = []
        logger.signal_emitter.log_message.connect(lambda msg, level, ts: seen.append(msg))
        logger.set_level(LogLevel.ERROR)
        try:
            logger.debug("still shown", component="UI")
        finally:
            logger.set_level(LogLevel.INFO)
        assert "[UI] still shown" in seen
