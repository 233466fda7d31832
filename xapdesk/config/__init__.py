"""
Central Configuration
All constants, API paths, and connection settings in one place

Settings precedence (lowest to highest):
    defaults -> settings.json in the app data dir -> XAPDESK_* env vars -> CLI
"""

import json
import os
from dataclasses import dataclass, fields, replace
from typing import Optional

# === GAIN ===
# Nominal fader domain. The engine owns clamping; these only size the fader.
GAIN_MIN_DB = -65
GAIN_MAX_DB = 20
UNITY_GAIN_DB = 0

# === METER BANDS ===
# First match wins, evaluated on the rounded level
LEVEL_RED_DB = 20
LEVEL_YELLOW_DB = 10

BAND_RED = 'red'
BAND_YELLOW = 'yellow'
BAND_GREEN = 'green'
METER_BANDS = (BAND_RED, BAND_YELLOW, BAND_GREEN)

DB_SUFFIX = 'db'

# === CHANNEL GROUPS ===
GROUP_NAMES = {
    'I': 'Input',
    'O': 'Output',
}

# Display order for known groups; unknown groups follow in arrival order
GROUP_ORDER = ['I', 'O']

# === ELEMENT ROLES ===
# Suffixes used to build per-channel widget object names
ELEMENT_ROLES = (
    'level',       # live meter readout
    'faderLevel',  # confirmed gain readout
    'slider',      # gain fader
    'on',          # unmute button
    'off',         # mute button
)
PANEL_PREFIX = 'channel'

# === REMOTE API ===
# Formatted with device/group/index; group is percent-encoded by the caller
API_PATHS = {
    'state': '/{device}',
    'channel': '/{device}/{group}/{index}',
    'gain': '/{device}/{group}/{index}/gain',
    'mute': '/{device}/{group}/{index}/mute',
}

HTTP_OK = 200

# === CONNECTION DEFAULTS ===
DEFAULT_BASE_URL = 'http://127.0.0.1:1337'
DEFAULT_DEVICE_ID = 0
DEFAULT_POLL_INTERVAL_MS = 1000   # matches the engine's own heartbeat default
DEFAULT_REQUEST_TIMEOUT_S = 2.0
DEFAULT_POLL_MISS_LIMIT = 3       # connection lost after 3 failed polls

SETTINGS_FILENAME = 'settings.json'

# Environment overrides: env var -> Settings field
ENV_OVERRIDES = {
    'XAPDESK_BASE_URL': 'base_url',
    'XAPDESK_DEVICE_ID': 'device_id',
    'XAPDESK_POLL_MS': 'poll_interval_ms',
    'XAPDESK_TIMEOUT': 'request_timeout_s',
    'XAPDESK_MISS_LIMIT': 'poll_miss_limit',
    'XAPDESK_DISCARD_STALE': 'discard_stale_replies',
}


@dataclass(frozen=True)
class Settings:
    """Connection and sync settings for one control surface session."""
    base_url: str = DEFAULT_BASE_URL
    device_id: int = DEFAULT_DEVICE_ID
    poll_interval_ms: int = DEFAULT_POLL_INTERVAL_MS
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S
    poll_miss_limit: int = DEFAULT_POLL_MISS_LIMIT
    # Drop replies older than the last one applied for the same field.
    # Off keeps plain last-applied-wins.
    discard_stale_replies: bool = False

    def validate(self):
        """Raise ValueError if any field is out of range."""
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if self.device_id < 0:
            raise ValueError(f"device_id must be >= 0, got {self.device_id}")
        if self.poll_interval_ms <= 0:
            raise ValueError(f"poll_interval_ms must be > 0, got {self.poll_interval_ms}")
        if self.request_timeout_s <= 0:
            raise ValueError(f"request_timeout_s must be > 0, got {self.request_timeout_s}")
        if self.poll_miss_limit < 1:
            raise ValueError(f"poll_miss_limit must be >= 1, got {self.poll_miss_limit}")
        return self

    def with_overrides(self, **overrides):
        """Return a copy with the non-None overrides applied and validated."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes).validate()


_FIELD_TYPES = {f.name: f.type for f in fields(Settings)}


def _coerce(name, raw):
    """Coerce a raw file/env value to the type of Settings.<name>."""
    kind = _FIELD_TYPES[name]
    if kind in (bool, 'bool'):
        if isinstance(raw, bool):
            return raw
        text = str(raw).strip().lower()
        if text in ('1', 'true', 'yes', 'on'):
            return True
        if text in ('0', 'false', 'no', 'off'):
            return False
        raise ValueError(f"not a boolean: {raw!r}")
    if kind in (int, 'int'):
        if isinstance(raw, bool):
            raise ValueError(f"not an integer: {raw!r}")
        return int(raw)
    if kind in (float, 'float'):
        return float(raw)
    return str(raw).strip()


def _apply(settings, source, values):
    """Overlay values onto settings, skipping (and logging) bad entries."""
    from xapdesk.utils.logger import logger

    for name, raw in values.items():
        if name not in _FIELD_TYPES:
            logger.warning(f"Unknown setting '{name}' in {source}, ignoring", component="CONFIG")
            continue
        try:
            candidate = replace(settings, **{name: _coerce(name, raw)}).validate()
        except (TypeError, ValueError) as e:
            logger.warning(f"Invalid {name}={raw!r} in {source}, ignoring", component="CONFIG",
                           details=str(e))
            continue
        settings = candidate
    return settings


def load_settings(path=None, env=None) -> Settings:
    """
    Build Settings from defaults, the settings file and the environment.

    Args:
        path: settings.json location (default: app data dir)
        env: mapping to read overrides from (default: os.environ)
    """
    from xapdesk.utils.logger import logger

    settings = Settings()

    if path is None:
        from xapdesk.utils.app_paths import get_settings_path
        path = get_settings_path()

    if os.path.exists(path):
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {path}", component="CONFIG", details=str(e))
            data = None
        if isinstance(data, dict):
            settings = _apply(settings, path, data)
        elif data is not None:
            logger.warning(f"{path} must contain a JSON object, ignoring", component="CONFIG")

    env = os.environ if env is None else env
    env_values = {field: env[var] for var, field in ENV_OVERRIDES.items() if env.get(var)}
    if env_values:
        settings = _apply(settings, "environment", env_values)

    return settings


def group_display_order(groups) -> list:
    """Sort group codes: known groups first in GROUP_ORDER, then the rest as given."""
    known = [g for g in GROUP_ORDER if g in groups]
    rest = [g for g in groups if g not in GROUP_ORDER]
    return known + rest


def level_band(rounded_db: int) -> str:
    """Classify a rounded meter level into its color band."""
    if rounded_db >= LEVEL_RED_DB:
        return BAND_RED
    if rounded_db >= LEVEL_YELLOW_DB:
        return BAND_YELLOW
    return BAND_GREEN


def format_db(value) -> str:
    """Format a dB value for display: integral values without a decimal point."""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}{DB_SUFFIX}"


def get_api_path(name: str, device: int, group: Optional[str] = None,
                 index: Optional[int] = None) -> str:
    """Format one of API_PATHS."""
    return API_PATHS[name].format(device=device, group=group, index=index)
