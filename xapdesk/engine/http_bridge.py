"""
HTTP Bridge
Handles request/response communication with the mixing engine

Endpoints (device 0 by default):
- GET /{device}                          full state (JSON)
- GET /{device}/{group}/{index}/gain     ?value=<int>, replies confirmed dB as text
- GET /{device}/{group}/{index}/mute     ?value=0|1, reply body ignored

Every call blocks until answered or timed out and returns a result value
(see results.py); nothing here raises for network or engine errors. Calls
are safe to make from worker threads; the GUI thread never calls these
directly (see request_runner.py).
"""

from __future__ import annotations

import math

import requests

from xapdesk.config import (
    DEFAULT_BASE_URL, DEFAULT_DEVICE_ID, DEFAULT_REQUEST_TIMEOUT_S, HTTP_OK, get_api_path,
)
from xapdesk.engine.results import Ok, RemoteRejection, TransportFailure
from xapdesk.engine.snapshot import parse_descriptors, parse_snapshot
from xapdesk.utils.logger import logger


def parse_gain_body(text: str):
    """Parse a gain reply body into an int (or float if fractional). None if unparseable."""
    try:
        value = float(text.strip())
    except (AttributeError, ValueError):
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


class HttpBridge:
    """Issues control requests to the mixing engine over HTTP."""

    def __init__(self, base_url=None, device_id=None, timeout=None, session=None):
        self.base_url = (base_url or DEFAULT_BASE_URL).rstrip('/')
        self.device_id = DEFAULT_DEVICE_ID if device_id is None else device_id
        self.timeout = timeout or DEFAULT_REQUEST_TIMEOUT_S
        self._session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings, session=None):
        return cls(settings.base_url, settings.device_id, settings.request_timeout_s, session)

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _get(self, path, params=None):
        """GET path; Ok(response) on 200, otherwise a failure result."""
        url = self.url(path)
        logger.http(f"GET {path}", details=str(params) if params else None)
        try:
            response = self._session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            logger.http(f"GET {path} failed", details=str(e))
            return TransportFailure(str(e) or type(e).__name__)

        if response.status_code != HTTP_OK:
            logger.http(f"GET {path} -> {response.status_code}")
            return RemoteRejection(response.status_code, response.text)
        return Ok(response)

    # -- channel commands ----------------------------------------------------

    def set_gain(self, address, value: int):
        """
        Ask the engine to set a channel's gain.

        Returns Ok(confirmed_db) with the value the engine echoed back, which
        may differ from the request (the engine clamps), or a failure result.
        """
        result = self._get(address.resource_path(self.device_id, 'gain'),
                           params={'value': str(int(value))})
        if not result.ok:
            return result

        text = result.value.text
        confirmed = parse_gain_body(text)
        if confirmed is None:
            logger.warning(f"{address}: gain reply is not a number: {text!r}", component="HTTP")
            return RemoteRejection(result.value.status_code, text, reason="unparseable gain")
        return Ok(confirmed)

    def set_mute(self, address, muted: bool):
        """Ask the engine to mute/unmute a channel. Returns Ok(muted) on success."""
        result = self._get(address.resource_path(self.device_id, 'mute'),
                           params={'value': '1' if muted else '0'})
        if not result.ok:
            return result
        return Ok(bool(muted))

    # -- state ---------------------------------------------------------------

    def fetch_snapshot(self):
        """Poll live state. Returns Ok(Snapshot) or a failure result."""
        result = self._get(get_api_path('state', self.device_id))
        if not result.ok:
            return result
        return parse_snapshot(result.value.text)

    def fetch_descriptors(self):
        """Read the initial channel list. Returns Ok([ChannelDescriptor]) or a failure."""
        result = self._get(get_api_path('state', self.device_id))
        if not result.ok:
            return result
        return parse_descriptors(result.value.text)

    def close(self):
        self._session.close()
