"""
Sequence Guard
Drops replies that arrive after a newer reply for the same field was applied.

Each outgoing request takes a token from issue(key); when its reply comes
back, accept(key, token) says whether it is still the newest one seen for
that key. Keys are per channel field, e.g. (address, 'gain').
"""

from __future__ import annotations

import itertools
from typing import Dict, Hashable


class SequenceGuard:
    """Monotonic request tokens with a last-applied watermark per key."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._applied: Dict[Hashable, int] = {}

    def issue(self, key: Hashable) -> int:
        """Token for a request about to be sent for key."""
        return next(self._counter)

    def accept(self, key: Hashable, token: int) -> bool:
        """True (and record it) if token is newer than the last applied for key."""
        if token <= self._applied.get(key, 0):
            return False
        self._applied[key] = token
        return True

    def last_applied(self, key: Hashable) -> int:
        return self._applied.get(key, 0)

    def reset(self):
        self._applied.clear()
