"""
Application log for xapdesk

    from xapdesk.utils.logger import logger
    logger.warning("Gain rejected", component="HTTP", details="status 500")

Records are written as "[COMPONENT] message - details" to stdout, to an
optional log file, and to the in-app console via a Qt signal (safe to call
from request worker threads).

Components: HTTP (engine traffic), SYNC (replies applied to the surface),
APP (lifecycle), UI, CONFIG.
"""

import logging
import os
import sys
from datetime import datetime
from enum import IntEnum
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

LOGGER_NAME = "xapdesk"
LEVEL_ENV = "XAPDESK_LOG_LEVEL"
STREAM_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


class LogLevel(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


def parse_log_level(name: Optional[str], default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Resolve a level name like 'debug' or 'WARN'; unknown names give default."""
    if not name:
        return default
    name = name.strip().upper()
    if name == 'WARN':
        name = 'WARNING'
    try:
        return LogLevel[name]
    except KeyError:
        return default


class LogSignalEmitter(QObject):
    log_message = pyqtSignal(str, int, str)  # text, level, HH:MM:SS


class QtSignalHandler(logging.Handler):
    """Forwards records to the console panel; delivery is queued to the GUI thread."""

    def __init__(self, emitter: LogSignalEmitter):
        super().__init__(level=logging.DEBUG)
        self.emitter = emitter
        self.setFormatter(logging.Formatter("%(message)s"))

    def emit(self, record: logging.LogRecord):
        try:
            self.emitter.log_message.emit(
                self.format(record), record.levelno, datetime.now().strftime("%H:%M:%S"))
        except Exception:
            self.handleError(record)


def _tagged(msg: str, component: Optional[str], details: Optional[str]) -> str:
    text = f"[{component}] {msg}" if component else msg
    return f"{text} - {details}" if details else text


class DeskLogger:
    """Wraps the "xapdesk" stdlib logger with component tags and a GUI feed."""

    def __init__(self):
        self._logger = logging.getLogger(LOGGER_NAME)
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        self.signal_emitter = LogSignalEmitter()

        self._stream = logging.StreamHandler(sys.stdout)
        self._stream.setLevel(parse_log_level(os.environ.get(LEVEL_ENV)))
        self._stream.setFormatter(logging.Formatter(STREAM_FORMAT, datefmt="%H:%M:%S"))
        self._logger.addHandler(self._stream)
        self._logger.addHandler(QtSignalHandler(self.signal_emitter))

        self._file: Optional[logging.FileHandler] = None

    def set_level(self, level: LogLevel):
        """Terminal threshold. The GUI console and log file always get everything."""
        self._stream.setLevel(level)

    def enable_file_logging(self, filepath: str):
        self.disable_file_logging()
        self._file = logging.FileHandler(filepath)
        self._file.setLevel(logging.DEBUG)
        self._file.setFormatter(logging.Formatter(STREAM_FORMAT))
        self._logger.addHandler(self._file)

    def disable_file_logging(self):
        if self._file is None:
            return
        self._logger.removeHandler(self._file)
        self._file.close()
        self._file = None

    def log(self, level: int, msg: str, component: Optional[str] = None,
            details: Optional[str] = None):
        self._logger.log(level, _tagged(msg, component, details))

    def debug(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self.log(logging.DEBUG, msg, component, details)

    def info(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self.log(logging.INFO, msg, component, details)

    def warning(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self.log(logging.WARNING, msg, component, details)

    def error(self, msg: str, component: Optional[str] = None, details: Optional[str] = None):
        self.log(logging.ERROR, msg, component, details)

    def http(self, msg: str, details: Optional[str] = None):
        """Engine request/response trace."""
        self.debug(msg, component="HTTP", details=details)

    def channel(self, address, msg: str, details: Optional[str] = None):
        """Per-channel sync trace, prefixed with the channel address."""
        self.debug(f"{address}: {msg}", component="SYNC", details=details)


logger = DeskLogger()
