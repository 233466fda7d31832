"""
GUI Controllers - keep MainFrame a layout-only window.

MixerController: panel gestures -> CommandDispatcher
ConnectionController: initial load, poll timer, connection status
"""

from .mixer_controller import MixerController
from .connection_controller import ConnectionController

__all__ = [
    'MixerController',
    'ConnectionController',
]
