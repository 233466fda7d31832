"""
Tests for xapdesk/sync/sequence_guard.py
"""

from xapdesk.model.channel import ChannelAddress
from xapdesk.sync.sequence_guard import SequenceGuard

KEY = (ChannelAddress('I', 1), 'gain')


class TestSequenceGuard:
    """Token issue and acceptance."""

    def test_tokens_increase(self):
        guard = SequenceGuard()
        tokens = [guard.issue(KEY) for _ in range(5)]
        assert tokens == sorted(tokens)
        assert len(set(tokens)) == 5

    def test_in_order_accepted(self):
        guard = SequenceGuard()
        a, b = guard.issue(KEY), guard.issue(KEY)
        assert guard.accept(KEY, a)
        assert guard.accept(KEY, b)
        assert guard.last_applied(KEY) == b

    def test_older_rejected(self):
        guard = SequenceGuard()
        a, b = guard.issue(KEY), guard.issue(KEY)
        assert guard.accept(KEY, b)
        assert not guard.accept(KEY, a)
        assert guard.last_applied(KEY) == b

    def test_duplicate_rejected(self):
        guard = SequenceGuard()
        a = guard.issue(KEY)
        assert guard.accept(KEY, a)
        assert not guard.accept(KEY, a)

    def test_keys_independent(self):
        guard = SequenceGuard()
        other = (ChannelAddress('I', 1), 'mute')
        a = guard.issue(KEY)
        b = guard.issue(other)
        assert guard.accept(other, b)
        assert guard.accept(KEY, a)

    def test_reset(self):
        guard = SequenceGuard()
        a, b = guard.issue(KEY), guard.issue(KEY)
        guard.accept(KEY, b)
        guard.reset()
        assert guard.accept(KEY, a)
