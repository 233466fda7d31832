"""Channel data models."""
from .channel import (
    ChannelAddress,
    ChannelDescriptor,
    Group,
    default_label,
    pretty_name,
)

__all__ = [
    'ChannelAddress',
    'ChannelDescriptor',
    'Group',
    'default_label',
    'pretty_name',
]
