"""Remote engine access: HTTP bridge, payload parsing, background requests."""
from .results import Ok, RemoteRejection, TransportFailure, MalformedSnapshot
from .snapshot import ChannelReading, Snapshot, parse_snapshot, parse_descriptors
from .http_bridge import HttpBridge

__all__ = [
    'Ok',
    'RemoteRejection',
    'TransportFailure',
    'MalformedSnapshot',
    'ChannelReading',
    'Snapshot',
    'parse_snapshot',
    'parse_descriptors',
    'HttpBridge',
]
