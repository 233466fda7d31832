"""
Tests for xapdesk/engine/http_bridge.py
Requests are made through a mocked requests.Session
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from xapdesk.config import Settings
from xapdesk.engine.http_bridge import HttpBridge, parse_gain_body
from xapdesk.engine.results import MalformedSnapshot, Ok, RemoteRejection, TransportFailure
from xapdesk.model.channel import ChannelAddress


def make_response(status=200, text=""):
    response = MagicMock()
    response.status_code = status
    response.text = text
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def http(session):
    return HttpBridge("http://mixer.local:1337/", device_id=0, timeout=1.5, session=session)


class TestParseGainBody:
    """Gain reply bodies."""

    @pytest.mark.parametrize("text,expected", [
        ("-12", -12), ("0", 0), ("20\n", 20), ("-3.5", -3.5), ("6.0", 6), ("99", 99),
    ])
    def test_numbers(self, text, expected):
        assert parse_gain_body(text) == expected

    @pytest.mark.parametrize("text", ["", "loud", "nan", "inf", None])
    def test_unparseable(self, text):
        assert parse_gain_body(text) is None


class TestSetGain:
    """GET /{device}/{group}/{index}/gain?value=N"""

    def test_request_shape(self, http, session):
        session.get.return_value = make_response(200, "-10")
        http.set_gain(ChannelAddress('I', 3), -10)
        session.get.assert_called_once_with(
            "http://mixer.local:1337/0/I/3/gain", params={'value': '-10'}, timeout=1.5)

    def test_confirmed_value_returned(self, http, session):
        session.get.return_value = make_response(200, "20")
        assert http.set_gain(ChannelAddress('I', 1), 35) == Ok(20)

    def test_non_200(self, http, session):
        session.get.return_value = make_response(500, "boom")
        result = http.set_gain(ChannelAddress('I', 1), 0)
        assert isinstance(result, RemoteRejection)
        assert result.status == 500

    def test_unparseable_body(self, http, session):
        session.get.return_value = make_response(200, "ok")
        result = http.set_gain(ChannelAddress('I', 1), 0)
        assert isinstance(result, RemoteRejection)
        assert result.reason == "unparseable gain"

    def test_transport_failure(self, http, session):
        session.get.side_effect = requests.ConnectionError("refused")
        result = http.set_gain(ChannelAddress('I', 1), 0)
        assert isinstance(result, TransportFailure)
        assert "refused" in result.error

    def test_timeout(self, http, session):
        session.get.side_effect = requests.Timeout()
        assert isinstance(http.set_gain(ChannelAddress('I', 1), 0), TransportFailure)


class TestSetMute:
    """GET /{device}/{group}/{index}/mute?value=0|1"""

    @pytest.mark.parametrize("muted,value", [(True, '1'), (False, '0')])
    def test_request_shape(self, http, session, muted, value):
        session.get.return_value = make_response(200, "")
        assert http.set_mute(ChannelAddress('O', 2), muted) == Ok(muted)
        session.get.assert_called_once_with(
            "http://mixer.local:1337/0/O/2/mute", params={'value': value}, timeout=1.5)

    def test_failure(self, http, session):
        session.get.return_value = make_response(404)
        assert not http.set_mute(ChannelAddress('O', 2), True).ok


class TestFetch:
    """GET /{device}"""

    def test_snapshot(self, http, session):
        body = {"channels": {"I": [{"level": -3.2, "muted": False}]}}
        session.get.return_value = make_response(200, json.dumps(body))
        result = http.fetch_snapshot()
        assert result.ok
        session.get.assert_called_once_with("http://mixer.local:1337/0", params=None, timeout=1.5)

    def test_malformed_snapshot(self, http, session):
        session.get.return_value = make_response(200, "<html>")
        assert isinstance(http.fetch_snapshot(), MalformedSnapshot)

    def test_snapshot_rejection(self, http, session):
        session.get.return_value = make_response(503)
        assert isinstance(http.fetch_snapshot(), RemoteRejection)

    def test_descriptors(self, http, session):
        body = {"channels": {"I": [{"label": "Vox", "gain": -4, "muted": True, "level": 0}]}}
        session.get.return_value = make_response(200, json.dumps(body))
        result = http.fetch_descriptors()
        assert result.ok
        assert result.value[0].label == "Vox"


class TestConstruction:
    """Defaults and settings."""

    def test_from_settings(self, session):
        settings = Settings(base_url="http://10.0.0.5:9000", device_id=2, request_timeout_s=0.5)
        http = HttpBridge.from_settings(settings, session=session)
        assert http.url("/2") == "http://10.0.0.5:9000/2"
        assert http.device_id == 2
        assert http.timeout == 0.5

    def test_defaults(self, session):
        http = HttpBridge(session=session)
        assert http.base_url == "http://127.0.0.1:1337"
        assert http.device_id == 0

    def test_close(self, http, session):
        http.close()
        session.close.assert_called_once()
