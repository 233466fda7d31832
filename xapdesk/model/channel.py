"""
Channel Addressing

Maps a channel identity (group code + 1-based index) to:
- the object names of the widgets that render it
- the remote resource path used to command it

Both mappings are pure and invertible. Widgets keep their ChannelAddress as
bound context; from_element_id() exists for inspection and debug dumps.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import quote

from xapdesk.config import (
    ELEMENT_ROLES, GROUP_NAMES, PANEL_PREFIX, get_api_path,
)


class Group(str, Enum):
    """Known channel groups, with the engine's short codes as values."""
    INPUT = 'I'
    OUTPUT = 'O'


def pretty_name(group: str) -> str:
    """Readable group name: 'I' -> 'Input', 'O' -> 'Output', anything else as-is."""
    code = group.value if isinstance(group, Group) else group
    return GROUP_NAMES.get(code, code)


def default_label(group: str, index: int) -> str:
    """Fallback label for a channel created without one."""
    return f"{pretty_name(group)} {index}"


@dataclass(frozen=True, order=True)
class ChannelAddress:
    """(group, index) identity of one channel. Unique across the surface."""
    group: str
    index: int

    def __post_init__(self):
        # Normalize enum members to their code so I == Group.INPUT hash alike
        if isinstance(self.group, Group):
            object.__setattr__(self, 'group', self.group.value)
        if not isinstance(self.group, str) or not self.group:
            raise ValueError(f"group must be a non-empty string, got {self.group!r}")
        if isinstance(self.index, bool) or not isinstance(self.index, int):
            raise ValueError(f"index must be an int, got {self.index!r}")
        if self.index < 1:
            raise ValueError(f"index is 1-based, got {self.index}")

    def __str__(self):
        return f"{self.group}{self.index}"

    # -- element identifiers -------------------------------------------------

    def element_id(self, role: str) -> str:
        """Object name for one of this channel's widgets."""
        if role not in ELEMENT_ROLES:
            raise ValueError(f"unknown element role '{role}'")
        return f"{self.group}_{self.index}_{role}"

    def element_ids(self) -> dict:
        """All widget object names for this channel, keyed by role."""
        return {role: self.element_id(role) for role in ELEMENT_ROLES}

    @property
    def panel_id(self) -> str:
        """Object name of the channel's container widget."""
        return f"{PANEL_PREFIX}_{self.group}_{self.index}"

    @classmethod
    def from_element_id(cls, name: str) -> 'ChannelAddress':
        """
        Recover the address from a widget object name.

        Parses from the right, so group codes that contain '_' still work.
        Raises ValueError if the name is not a channel element id.
        """
        parts = name.rsplit('_', 2)
        if len(parts) != 3 or parts[2] not in ELEMENT_ROLES:
            raise ValueError(f"not a channel element id: {name!r}")
        return cls._from_parts(parts[0], parts[1], name)

    @classmethod
    def from_panel_id(cls, name: str) -> 'ChannelAddress':
        """Recover the address from a channel container object name."""
        prefix = f"{PANEL_PREFIX}_"
        if not name.startswith(prefix):
            raise ValueError(f"not a channel panel id: {name!r}")
        parts = name[len(prefix):].rsplit('_', 1)
        if len(parts) != 2:
            raise ValueError(f"not a channel panel id: {name!r}")
        return cls._from_parts(parts[0], parts[1], name)

    @classmethod
    def _from_parts(cls, group: str, index: str, name: str) -> 'ChannelAddress':
        # str.isdigit() accepts non-ASCII digits; int() below would too
        if not (index.isascii() and index.isdigit()):
            raise ValueError(f"bad channel index in {name!r}")
        return cls(group, int(index))

    # -- remote resources ----------------------------------------------------

    def resource_path(self, device: int, operation: Optional[str] = None) -> str:
        """
        Remote path for this channel on the given device.

        operation: None for the channel itself, or 'gain' / 'mute'.
        """
        name = operation or 'channel'
        if name not in ('channel', 'gain', 'mute'):
            raise ValueError(f"unknown channel operation '{operation}'")
        return get_api_path(name, device, quote(self.group, safe=''), self.index)


@dataclass(frozen=True)
class ChannelDescriptor:
    """Initial state for one channel, used once to build its strip."""
    address: ChannelAddress
    label: str = ""
    gain: float = 0
    muted: bool = False

    @property
    def display_label(self) -> str:
        return self.label or default_label(self.address.group, self.address.index)
