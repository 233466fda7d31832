"""
Console Panel - Slide-out log console

Shows the records the logger delivers through its Qt signal, color-coded by
level, capped at MAX_LINES, with a level filter, auto-scroll, clear and copy.
"""

import logging

from PyQt5.QtWidgets import (
    QHBoxLayout, QVBoxLayout, QPlainTextEdit, QPushButton, QComboBox, QLabel, QFrame,
)
from PyQt5.QtCore import QPropertyAnimation, QEasingCurve, pyqtProperty
from PyQt5.QtGui import QFont, QTextCursor

from xapdesk.utils.logger import logger, parse_log_level

from .theme import COLORS, MONO_FONT, FONT_SIZES


LOG_COLORS = {
    logging.DEBUG: "#666666",
    logging.INFO: "#88ff88",
    logging.WARNING: "#ffaa44",
    logging.ERROR: "#ff6666",
}

LOG_LEVEL_NAMES = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
}


class ConsolePanel(QFrame):
    """
    Slide-out console panel for viewing logs.

    Slides in from the right edge of the surface. Toggle with the header
    button or Ctrl+`.
    """

    MAX_LINES = 500
    PANEL_WIDTH = 320
    ANIMATION_DURATION = 200  # ms

    def __init__(self, parent=None):
        super().__init__(parent)

        self._visible_width = 0
        self._is_open = False
        self._auto_scroll = True
        self._filter_level = logging.DEBUG

        self.setup_ui()
        logger.signal_emitter.log_message.connect(self.on_log_message)

        # Start hidden (zero width)
        self.setFixedWidth(0)

    def setup_ui(self):
        """Create console UI."""
        self.setFrameShape(QFrame.StyledPanel)
        self.setStyleSheet(f"""
            QFrame {{
                background-color: {COLORS['background_dark']};
                border-left: 2px solid {COLORS['border_light']};
            }}
        """)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(5)

        header = QHBoxLayout()
        title = QLabel("CONSOLE")
        title.setFont(QFont(MONO_FONT, FONT_SIZES['label']))
        title.setStyleSheet(f"color: {COLORS['text_bright']};")
        header.addWidget(title)
        header.addStretch()

        self.level_filter = QComboBox()
        self.level_filter.addItems(list(LOG_LEVEL_NAMES.values()))
        self.level_filter.setFixedWidth(70)
        self.level_filter.setStyleSheet(f"""
            QComboBox {{
                background-color: {COLORS['background']};
                color: {COLORS['text']};
                border: 1px solid {COLORS['border']};
                border-radius: 3px;
                padding: 2px 8px;
                font-size: {FONT_SIZES['tiny']}px;
            }}
        """)
        self.level_filter.currentTextChanged.connect(self.on_filter_changed)
        header.addWidget(self.level_filter)
        layout.addLayout(header)

        self.log_text = QPlainTextEdit()
        self.log_text.setReadOnly(True)
        self.log_text.setFont(QFont(MONO_FONT, FONT_SIZES['tiny']))
        self.log_text.setLineWrapMode(QPlainTextEdit.NoWrap)
        self.log_text.setStyleSheet(f"""
            QPlainTextEdit {{
                background-color: {COLORS['background_dark']};
                color: {COLORS['text']};
                border: 1px solid {COLORS['border']};
            }}
        """)
        layout.addWidget(self.log_text)

        buttons = QHBoxLayout()
        buttons.setSpacing(5)

        self.auto_scroll_btn = QPushButton("Auto")
        self.auto_scroll_btn.setCheckable(True)
        self.auto_scroll_btn.setChecked(True)
        self.auto_scroll_btn.clicked.connect(self.toggle_auto_scroll)
        self.style_button(self.auto_scroll_btn, checked=True)
        buttons.addWidget(self.auto_scroll_btn)

        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self.clear_log)
        self.style_button(clear_btn)
        buttons.addWidget(clear_btn)

        copy_btn = QPushButton("Copy")
        copy_btn.clicked.connect(self.copy_log)
        self.style_button(copy_btn)
        buttons.addWidget(copy_btn)

        buttons.addStretch()

        close_btn = QPushButton("x")
        close_btn.setFixedWidth(25)
        close_btn.clicked.connect(self.hide_panel)
        self.style_button(close_btn)
        buttons.addWidget(close_btn)

        layout.addLayout(buttons)

    def style_button(self, btn, checked=False):
        """Apply consistent button styling."""
        background = COLORS['background_light'] if checked else COLORS['background']
        color = COLORS['status_ok'] if checked else COLORS['text']
        btn.setStyleSheet(f"""
            QPushButton {{
                background-color: {background};
                color: {color};
                border: 1px solid {COLORS['border']};
                border-radius: 3px;
                padding: 3px 5px;
                font-size: {FONT_SIZES['tiny']}px;
            }}
        """)

    def on_log_message(self, message: str, level: int, timestamp: str):
        """Handle incoming log message."""
        if level < self._filter_level:
            return

        level_name = LOG_LEVEL_NAMES.get(level, "???")
        color = LOG_COLORS.get(level, COLORS['text'])
        formatted = (
            f"<span style='color: {COLORS['text_dim']}'>{timestamp}</span> "
            f"<span style='color: {color}'>[{level_name}]</span> "
            f"<span style='color: {COLORS['text']}'>{message}</span>"
        )
        self.log_text.appendHtml(formatted)

        doc = self.log_text.document()
        if doc.blockCount() > self.MAX_LINES:
            cursor = QTextCursor(doc)
            cursor.movePosition(QTextCursor.Start)
            cursor.movePosition(QTextCursor.Down, QTextCursor.KeepAnchor,
                                doc.blockCount() - self.MAX_LINES)
            cursor.removeSelectedText()

        if self._auto_scroll:
            bar = self.log_text.verticalScrollBar()
            bar.setValue(bar.maximum())

    def on_filter_changed(self, text: str):
        self._filter_level = parse_log_level(text, default=logging.DEBUG)

    def toggle_auto_scroll(self):
        self._auto_scroll = self.auto_scroll_btn.isChecked()
        self.style_button(self.auto_scroll_btn, checked=self._auto_scroll)

    def clear_log(self):
        self.log_text.clear()
        logger.info("Console cleared", component="UI")

    def copy_log(self):
        """Copy log to clipboard."""
        from PyQt5.QtWidgets import QApplication
        QApplication.clipboard().setText(self.log_text.toPlainText())
        logger.info("Log copied to clipboard", component="UI")

    # Animation property for width
    def get_visible_width(self):
        return self._visible_width

    def set_visible_width(self, width):
        self._visible_width = width
        self.setFixedWidth(int(width))

    visible_width = pyqtProperty(float, get_visible_width, set_visible_width)

    def _animate(self, start, end, curve):
        self.animation = QPropertyAnimation(self, b"visible_width")
        self.animation.setDuration(self.ANIMATION_DURATION)
        self.animation.setStartValue(start)
        self.animation.setEndValue(end)
        self.animation.setEasingCurve(curve)
        self.animation.start()

    def show_panel(self):
        """Animate panel open."""
        if self._is_open:
            return
        self._is_open = True
        self.show()
        self._animate(0, self.PANEL_WIDTH, QEasingCurve.OutCubic)
        logger.debug("Console opened", component="UI")

    def hide_panel(self):
        """Animate panel closed."""
        if not self._is_open:
            return
        self._is_open = False
        self._animate(self.PANEL_WIDTH, 0, QEasingCurve.InCubic)
        logger.debug("Console closed", component="UI")

    def toggle_panel(self):
        if self._is_open:
            self.hide_panel()
        else:
            self.show_panel()

    @property
    def is_open(self):
        return self._is_open
