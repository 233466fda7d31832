"""
Surface synchronization: display state, commands out, state polls in.
"""

from xapdesk.sync.channel_state import ChannelState, MuteLit, SurfaceState
from xapdesk.sync.connection_monitor import ConnectionMonitor
from xapdesk.sync.dispatcher import CommandDispatcher
from xapdesk.sync.reconciler import HeartbeatReconciler, display_round
from xapdesk.sync.sequence_guard import SequenceGuard

__all__ = [
    'ChannelState', 'MuteLit', 'SurfaceState', 'ConnectionMonitor',
    'CommandDispatcher', 'HeartbeatReconciler', 'display_round', 'SequenceGuard',
]
