"""
Main Frame - Combines all components
"""

from PyQt5.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QPushButton, QLabel, QFrame, QScrollArea, QShortcut)
from PyQt5.QtCore import Qt, QTimer
from PyQt5.QtGui import QFont, QKeySequence

from xapdesk.engine.http_bridge import HttpBridge
from xapdesk.engine.request_runner import RequestRunner
from xapdesk.gui.console_panel import ConsolePanel
from xapdesk.gui.controllers import ConnectionController, MixerController
from xapdesk.gui.theme import COLORS, FONT_FAMILY, FONT_SIZES, status_style
from xapdesk.sync.connection_monitor import ConnectionMonitor
from xapdesk.sync.sequence_guard import SequenceGuard
from xapdesk.utils.logger import logger


class MainFrame(QMainWindow):
    """Main application window."""

    def __init__(self, settings, bridge=None, runner=None):
        super().__init__()

        self.setWindowTitle("xapdesk")
        self.setMinimumSize(600, 420)
        self.setGeometry(100, 50, 1100, 640)

        self.settings = settings
        self.bridge = bridge or HttpBridge.from_settings(settings)
        self.runner = runner or RequestRunner(parent=self)
        self.guard = SequenceGuard() if settings.discard_stale_replies else None
        self.monitor = ConnectionMonitor(settings.poll_miss_limit, self)

        self.surface = None
        self.mixer_panel = None

        self.setup_ui()

        self.mixer = MixerController(self)
        self.connection = ConnectionController(self)
        self.connect_btn.clicked.connect(self.connection.on_connect_clicked)

        # Auto-connect once the window is up
        QTimer.singleShot(0, self.connection.connect)

    def setup_ui(self):
        """Create the main interface layout."""
        central = QWidget()
        self.setCentralWidget(central)
        central.setStyleSheet(f"background-color: {COLORS['background_dark']};")

        main_layout = QVBoxLayout(central)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        main_layout.addWidget(self.create_top_bar())

        content = QWidget()
        content_layout = QHBoxLayout(content)
        content_layout.setContentsMargins(0, 0, 0, 0)
        content_layout.setSpacing(0)

        self.mixer_area = QScrollArea()
        self.mixer_area.setWidgetResizable(True)
        self.mixer_area.setFrameShape(QFrame.NoFrame)
        placeholder = QLabel("Waiting for engine...")
        placeholder.setAlignment(Qt.AlignCenter)
        placeholder.setStyleSheet(f"color: {COLORS['text_dim']};")
        self.mixer_area.setWidget(placeholder)
        content_layout.addWidget(self.mixer_area, stretch=1)

        self.console_panel = ConsolePanel()
        content_layout.addWidget(self.console_panel)

        main_layout.addWidget(content, stretch=1)

        console_shortcut = QShortcut(QKeySequence("Ctrl+`"), self)
        console_shortcut.activated.connect(self.toggle_console)

        logger.info("xapdesk started", component="APP")

    def create_top_bar(self):
        """Create top bar."""
        bar = QFrame()
        bar.setFrameShape(QFrame.StyledPanel)
        bar.setStyleSheet(f"background-color: {COLORS['background_light']}; "
                          f"border-bottom: 1px solid {COLORS['border_light']};")
        bar.setFixedHeight(50)

        layout = QHBoxLayout(bar)
        layout.setContentsMargins(10, 5, 10, 5)

        title = QLabel("XAPDESK")
        title.setFont(QFont(FONT_FAMILY, FONT_SIZES['title'], QFont.Bold))
        title.setStyleSheet(f"color: {COLORS['text_bright']};")
        layout.addWidget(title)

        engine_label = QLabel(f"{self.bridge.base_url}  device {self.bridge.device_id}")
        engine_label.setStyleSheet(f"color: {COLORS['text_dim']};")
        layout.addWidget(engine_label)

        layout.addStretch()

        self.connect_btn = QPushButton("Connect")
        layout.addWidget(self.connect_btn)

        self.status_label = QLabel("Disconnected")
        self.status_label.setStyleSheet(status_style('warn'))
        layout.addWidget(self.status_label)

        layout.addSpacing(10)

        self.console_btn = QPushButton(">_")
        self.console_btn.setToolTip("Toggle Console (Ctrl+`)")
        self.console_btn.setFixedSize(30, 30)
        self.console_btn.setCheckable(True)
        self.console_btn.clicked.connect(self.toggle_console)
        layout.addWidget(self.console_btn)

        return bar

    def set_mixer_panel(self, panel):
        """Show a newly built mixer panel in place of the old one."""
        self.mixer_panel = panel
        # setWidget deletes the previous widget
        self.mixer_area.setWidget(panel)

    def toggle_console(self):
        """Toggle console panel visibility."""
        self.console_panel.toggle_panel()
        self.console_btn.setChecked(self.console_panel.is_open)

    def closeEvent(self, event):
        """Stop polling and release the HTTP session."""
        self.connection.poll_timer.stop()
        self.runner.wait_for_done(int(self.settings.request_timeout_s * 1000) + 500)
        self.bridge.close()
        logger.info("xapdesk closed", component="APP")
        super().closeEvent(event)
