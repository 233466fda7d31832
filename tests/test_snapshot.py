"""
Tests for xapdesk/engine/snapshot.py
Poll payload and initial channel list parsing
"""

import json

import pytest

from xapdesk.engine.results import MalformedSnapshot
from xapdesk.engine.snapshot import ChannelReading, parse_descriptors, parse_snapshot
from xapdesk.model.channel import ChannelAddress


STATE = {
    "channels": {
        "I": [
            {"label": "Kick", "gain": 0, "muted": False, "level": -12.4},
            {"label": "Snare", "gain": -6.0, "muted": True, "level": 3},
        ],
        "O": [
            {"label": "Main", "gain": 2.5, "muted": False, "level": 19.5},
        ],
    }
}


class TestParseSnapshot:
    """Snapshot parsing."""

    def test_entries_get_one_based_indices(self):
        result = parse_snapshot(json.dumps(STATE))
        assert result.ok
        items = dict(result.value.items())
        assert items[ChannelAddress('I', 1)] == ChannelReading(-12.4, False)
        assert items[ChannelAddress('I', 2)] == ChannelReading(0.0, True)
        assert items[ChannelAddress('O', 1)] == ChannelReading(19.5, False)
        assert len(result.value) == 3

    def test_bytes_accepted(self):
        assert parse_snapshot(json.dumps(STATE).encode('utf-8')).ok

    def test_empty_groups(self):
        result = parse_snapshot('{"channels": {}}')
        assert result.ok
        assert len(result.value) == 0

    @pytest.mark.parametrize("body", [
        "not json",
        "[]",
        '{"nochannels": {}}',
        '{"channels": []}',
        '{"channels": {"I": {}}}',
        '{"channels": {"I": [1]}}',
        '{"channels": {"I": [{"muted": false}]}}',
        '{"channels": {"I": [{"level": "3", "muted": false}]}}',
        '{"channels": {"I": [{"level": true, "muted": false}]}}',
        '{"channels": {"I": [{"level": 1}]}}',
        '{"channels": {"I": [{"level": 1, "muted": 0}]}}',
        '{"channels": {"": [{"level": 1, "muted": false}]}}',
    ])
    def test_malformed(self, body):
        result = parse_snapshot(body)
        assert not result.ok
        assert isinstance(result, MalformedSnapshot)

    def test_one_bad_entry_rejects_all(self):
        body = {"channels": {"I": [{"level": 1, "muted": False}, {"level": None, "muted": False}]}}
        assert isinstance(parse_snapshot(json.dumps(body)), MalformedSnapshot)

    def test_non_finite_level(self):
        assert not parse_snapshot('{"channels": {"I": [{"level": NaN, "muted": false}]}}').ok

    def test_muted_level_not_validated(self):
        body = '{"channels": {"I": [{"level": -3.0, "muted": false}, {"level": null, "muted": true}, {"muted": true}]}}'
        result = parse_snapshot(body)
        assert result.ok
        items = dict(result.value.items())
        assert items[ChannelAddress('I', 1)] == ChannelReading(-3.0, False)
        assert items[ChannelAddress('I', 2)] == ChannelReading(0.0, True)
        assert items[ChannelAddress('I', 3)].muted is True

    def test_oversized_integer_level(self):
        body = '{"channels": {"I": [{"level": 1' + "0" * 400 + ', "muted": false}]}}'
        assert isinstance(parse_snapshot(body), MalformedSnapshot)


class TestParseDescriptors:
    """Initial channel list parsing."""

    def test_fields(self):
        result = parse_descriptors(json.dumps(STATE))
        assert result.ok
        kick, snare, main = result.value
        assert kick.address == ChannelAddress('I', 1)
        assert (kick.label, kick.gain, kick.muted) == ("Kick", 0, False)
        assert snare.gain == -6
        assert isinstance(snare.gain, int)
        assert snare.muted is True
        assert main.address == ChannelAddress('O', 1)
        assert main.gain == 2.5

    def test_defaults_for_missing_fields(self):
        result = parse_descriptors('{"channels": {"I": [{}, {"label": null}]}}')
        assert result.ok
        first, second = result.value
        assert (first.label, first.gain, first.muted) == ("", 0, False)
        assert second.display_label == "Input 2"

    def test_bad_gain(self):
        assert not parse_descriptors('{"channels": {"I": [{"gain": "loud"}]}}').ok

    def test_oversized_integer_gain(self):
        body = '{"channels": {"I": [{"gain": 1' + "0" * 400 + '}]}}'
        assert isinstance(parse_descriptors(body), MalformedSnapshot)
