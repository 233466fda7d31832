"""App path helpers (cross-platform).

SSOT for xapdesk app data paths.

Environment overrides (useful for portable/dev launches):
- XAPDESK_CFG_DIR: base dir containing settings.json
"""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "xapdesk"


def _env_path(name: str) -> Path | None:
    v = os.environ.get(name)
    if not v:
        return None
    return Path(os.path.expanduser(v)).resolve()


def get_app_config_dir() -> Path:
    """Base app config dir."""
    cfg_dir = _env_path("XAPDESK_CFG_DIR")
    if cfg_dir is not None:
        return cfg_dir
    return Path(user_config_dir(APP_NAME, appauthor=False, roaming=True)).resolve()


def get_settings_path() -> Path:
    from xapdesk.config import SETTINGS_FILENAME
    return get_app_config_dir() / SETTINGS_FILENAME
