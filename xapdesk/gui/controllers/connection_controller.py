"""
ConnectionController - Handles the engine connection lifecycle.

Connect = read the channel list once, build the surface, start polling.
The poll timer drives the heartbeat reconciler; the connection monitor
turns a run of missed polls into CONNECTION LOST and the next good poll
back into Connected.
"""
from __future__ import annotations

from PyQt5.QtCore import QTimer

from xapdesk.gui.theme import COLORS, status_style
from xapdesk.sync.channel_state import SurfaceState
from xapdesk.sync.reconciler import HeartbeatReconciler
from xapdesk.utils.logger import logger


class ConnectionController:
    """Handles engine connection lifecycle."""

    def __init__(self, main_frame):
        self.main = main_frame
        self.connected = False
        self.loading = False
        self.reconciler = None

        self.poll_timer = QTimer(main_frame)
        self.poll_timer.setInterval(main_frame.settings.poll_interval_ms)
        self.poll_timer.timeout.connect(self.on_poll_tick)

        main_frame.monitor.connection_lost.connect(self.on_connection_lost)
        main_frame.monitor.connection_restored.connect(self.on_connection_restored)

    def toggle_connection(self):
        """Connect/disconnect the surface."""
        if self.connected:
            self.disconnect()
        else:
            self.connect()

    def connect(self):
        """Fetch the channel list in the background; the surface is built on reply."""
        if self.loading:
            return
        self.loading = True
        self.main.connect_btn.setEnabled(False)
        self._set_status("Connecting...", 'warn')
        logger.info(f"Connecting to {self.main.bridge.base_url}", component="APP")
        self.main.runner.submit(self.main.bridge.fetch_descriptors, self.on_descriptors)

    def on_descriptors(self, result):
        """Build the surface from the engine's channel list, or report failure."""
        self.loading = False
        self.main.connect_btn.setEnabled(True)

        if not result.ok:
            logger.warning("Could not load channels", component="APP", details=str(result))
            self._show_failed()
            return
        try:
            surface = SurfaceState(result.value)
        except ValueError as e:
            logger.error("Engine reported an invalid channel list", component="APP",
                         details=str(e))
            self._show_failed()
            return

        self.main.surface = surface
        self.main.mixer.install(surface)
        self.reconciler = HeartbeatReconciler(
            self.main.bridge, self.main.runner, surface,
            monitor=self.main.monitor, guard=self.main.guard,
        )
        if self.main.guard is not None:
            self.main.guard.reset()
        self.main.monitor.reset()
        self.connected = True
        self.poll_timer.start()

        self.main.connect_btn.setText("Disconnect")
        self.main.connect_btn.setStyleSheet(self._connect_btn_style())
        self._set_status("Connected", 'ok')

    def disconnect(self):
        """Stop polling. The surface stays on screen but goes stale."""
        self.poll_timer.stop()
        self.connected = False
        self.main.connect_btn.setText("Connect")
        self.main.connect_btn.setStyleSheet(self._connect_btn_style())
        self._set_status("Disconnected", 'warn')
        logger.info("Polling stopped", component="APP")

    def on_poll_tick(self):
        if self.reconciler is not None:
            self.reconciler.poll()

    def on_connection_lost(self):
        """Handle connection lost - show prominent warning. Polling continues."""
        if not self.connected:
            return
        self.main.connect_btn.setText("RECONNECT")
        self.main.connect_btn.setStyleSheet(
            f"background-color: {COLORS['status_error']}; color: black; font-weight: bold;")
        self._set_status("CONNECTION LOST", 'error')

    def on_connection_restored(self):
        """Handle connection restored by a successful poll."""
        if not self.connected:
            return
        self.main.connect_btn.setText("Disconnect")
        self.main.connect_btn.setStyleSheet(self._connect_btn_style())
        self._set_status("Connected", 'ok')

    def reconnect(self):
        """Drop the current surface and load it again from the engine."""
        self.poll_timer.stop()
        self.connected = False
        self.connect()

    def on_connect_clicked(self):
        """Header button: reconnect while stale, otherwise toggle."""
        if self.connected and self.main.monitor.is_stale:
            self.reconnect()
        else:
            self.toggle_connection()

    def _show_failed(self):
        self.main.connect_btn.setText("Retry")
        self._set_status("Connection Failed", 'error')

    def _set_status(self, text, state):
        self.main.status_label.setText(text)
        self.main.status_label.setStyleSheet(status_style(state))

    def _connect_btn_style(self):
        """Return the standard connect button stylesheet."""
        return f"""
            QPushButton {{
                background-color: {COLORS['border_light']};
                color: white;
                padding: 5px 15px;
                border-radius: 3px;
            }}
            QPushButton:hover {{
                background-color: {COLORS['text']};
            }}
        """
