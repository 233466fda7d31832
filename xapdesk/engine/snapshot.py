"""
State payload parsing

The engine's state endpoint returns every channel, grouped by group code:

    {"channels": {"I": [{"level": -12.3, "muted": false, ...}, ...],
                  "O": [...]}}

Array position + 1 is the channel index. Poll replies are parsed into a
Snapshot (level/muted only). The same payload, read once at startup, also
yields the ChannelDescriptors the surface is built from (label/gain/muted).

Parsing is all-or-nothing: one bad entry rejects the whole payload.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Tuple

from xapdesk.engine.results import MalformedSnapshot, Ok
from xapdesk.model.channel import ChannelAddress, ChannelDescriptor


@dataclass(frozen=True)
class ChannelReading:
    """Live meter state for one channel from one poll."""
    level: float
    muted: bool


@dataclass(frozen=True)
class Snapshot:
    """One full-state poll reply: group code -> readings in index order."""
    channels: Dict[str, Tuple[ChannelReading, ...]] = field(default_factory=dict)

    def items(self) -> Iterator[Tuple[ChannelAddress, ChannelReading]]:
        """Yield (address, reading) for every entry, groups in payload order."""
        for group, readings in self.channels.items():
            for i, reading in enumerate(readings):
                yield ChannelAddress(group, i + 1), reading

    def __len__(self):
        return sum(len(r) for r in self.channels.values())


class _Malformed(Exception):
    pass


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_finite(value) -> bool:
    """Number that fits a float and is not inf/nan. Oversized JSON ints fail."""
    if not _is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _decode(body):
    if isinstance(body, (bytes, bytearray)):
        body = body.decode('utf-8')
    if isinstance(body, str):
        try:
            return json.loads(body)
        except ValueError as e:
            raise _Malformed(f"not JSON: {e}")
    return body


def _channel_groups(body) -> Dict[str, list]:
    data = _decode(body)
    if not isinstance(data, dict):
        raise _Malformed("top level is not an object")
    channels = data.get('channels')
    if not isinstance(channels, dict):
        raise _Malformed("missing 'channels' object")
    for group, entries in channels.items():
        if not isinstance(group, str) or not group:
            raise _Malformed(f"bad group code {group!r}")
        if not isinstance(entries, list):
            raise _Malformed(f"group '{group}' is not an array")
        for i, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise _Malformed(f"{group}[{i}] is not an object")
    return channels


def _reading(group: str, i: int, entry: dict) -> ChannelReading:
    muted = entry.get('muted')
    if not isinstance(muted, bool):
        raise _Malformed(f"{group}[{i}].muted is not a boolean: {muted!r}")
    if muted:
        # level is not shown while muted
        return ChannelReading(level=0.0, muted=True)
    level = entry.get('level')
    if not _is_finite(level):
        raise _Malformed(f"{group}[{i}].level is not a finite number: {level!r}")
    return ChannelReading(level=float(level), muted=muted)


def parse_snapshot(body):
    """Parse a poll reply body. Returns Ok(Snapshot) or MalformedSnapshot."""
    try:
        groups = _channel_groups(body)
        channels = {
            group: tuple(_reading(group, i, entry) for i, entry in enumerate(entries))
            for group, entries in groups.items()
        }
    except _Malformed as e:
        return MalformedSnapshot(str(e))
    return Ok(Snapshot(channels))


def _descriptor(group: str, i: int, entry: dict) -> ChannelDescriptor:
    label = entry.get('label') or ""
    gain = entry.get('gain', 0)
    muted = entry.get('muted', False)
    if not isinstance(label, str):
        raise _Malformed(f"{group}[{i}].label is not a string: {label!r}")
    if not _is_finite(gain):
        raise _Malformed(f"{group}[{i}].gain is not a finite number: {gain!r}")
    if not isinstance(muted, bool):
        raise _Malformed(f"{group}[{i}].muted is not a boolean: {muted!r}")
    if isinstance(gain, float) and gain.is_integer():
        gain = int(gain)
    return ChannelDescriptor(ChannelAddress(group, i + 1), label=label, gain=gain, muted=muted)


def parse_descriptors(body):
    """
    Parse an initial state body into channel descriptors.

    Returns Ok(list of ChannelDescriptor) in payload order, or MalformedSnapshot.
    Missing label/gain/muted fall back to "", 0 and False.
    """
    try:
        groups = _channel_groups(body)
        descriptors: List[ChannelDescriptor] = [
            _descriptor(group, i, entry)
            for group, entries in groups.items()
            for i, entry in enumerate(entries)
        ]
    except _Malformed as e:
        return MalformedSnapshot(str(e))
    return Ok(descriptors)
