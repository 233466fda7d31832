"""
Tests for xapdesk/config/__init__.py
Constants, helpers and layered settings
"""

import json

import pytest

from xapdesk.config import (
    API_PATHS,
    DEFAULT_BASE_URL,
    DEFAULT_POLL_INTERVAL_MS,
    ENV_OVERRIDES,
    GAIN_MAX_DB,
    GAIN_MIN_DB,
    UNITY_GAIN_DB,
    Settings,
    format_db,
    get_api_path,
    group_display_order,
    level_band,
    load_settings,
)


class TestConstants:
    """Fixed values."""

    def test_gain_range(self):
        assert (GAIN_MIN_DB, GAIN_MAX_DB, UNITY_GAIN_DB) == (-65, 20, 0)

    def test_defaults(self):
        assert DEFAULT_BASE_URL == 'http://127.0.0.1:1337'
        assert DEFAULT_POLL_INTERVAL_MS == 1000

    def test_api_paths(self):
        assert get_api_path('state', 0) == '/0'
        assert get_api_path('gain', 0, 'I', 3) == '/0/I/3/gain'
        assert get_api_path('mute', 1, 'O', 2) == '/1/O/2/mute'
        for key, path in API_PATHS.items():
            assert path.startswith('/'), key
            assert not path.endswith('/'), key


class TestHelpers:
    """Pure helpers."""

    @pytest.mark.parametrize("value,band", [
        (20, 'red'), (35, 'red'), (19, 'yellow'), (10, 'yellow'), (9, 'green'), (-65, 'green'),
    ])
    def test_level_band(self, value, band):
        assert level_band(value) == band

    @pytest.mark.parametrize("value,text", [
        (0, '0db'), (-12, '-12db'), (6.0, '6db'), (2.5, '2.5db'), (99, '99db'),
    ])
    def test_format_db(self, value, text):
        assert format_db(value) == text

    def test_group_display_order(self):
        assert group_display_order(['O', 'FX', 'I']) == ['I', 'O', 'FX']
        assert group_display_order(['B', 'A']) == ['B', 'A']


class TestSettings:
    """Settings validation."""

    def test_defaults_valid(self):
        assert Settings().validate() == Settings()

    @pytest.mark.parametrize("field,value", [
        ('poll_interval_ms', 0), ('request_timeout_s', 0), ('device_id', -1),
        ('poll_miss_limit', 0), ('base_url', ''),
    ])
    def test_invalid(self, field, value):
        with pytest.raises(ValueError):
            Settings(**{field: value}).validate()

    def test_with_overrides_skips_none(self):
        s = Settings().with_overrides(base_url=None, device_id=3)
        assert s.base_url == DEFAULT_BASE_URL
        assert s.device_id == 3

    def test_with_overrides_validates(self):
        with pytest.raises(ValueError):
            Settings().with_overrides(poll_interval_ms=-5)


class TestLoadSettings:
    """defaults -> settings.json -> environment"""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_settings(tmp_path / 'settings.json', env={}) == Settings()

    def test_file_overlay(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'base_url': 'http://desk:8080', 'poll_interval_ms': 250}))
        s = load_settings(path, env={})
        assert s.base_url == 'http://desk:8080'
        assert s.poll_interval_ms == 250
        assert s.device_id == 0

    def test_env_beats_file(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'poll_interval_ms': 250}))
        s = load_settings(path, env={'XAPDESK_POLL_MS': '500', 'XAPDESK_DISCARD_STALE': 'yes'})
        assert s.poll_interval_ms == 500
        assert s.discard_stale_replies is True

    def test_invalid_values_ignored(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text(json.dumps({'poll_interval_ms': -1, 'request_timeout_s': 'soon',
                                    'colour': 'red', 'device_id': 2}))
        s = load_settings(path, env={'XAPDESK_DEVICE_ID': 'x', 'XAPDESK_TIMEOUT': '0.75'})
        assert s.poll_interval_ms == DEFAULT_POLL_INTERVAL_MS
        assert s.device_id == 2
        assert s.request_timeout_s == 0.75

    def test_bad_json_ignored(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text('{not json')
        assert load_settings(path, env={}) == Settings()

    def test_non_object_ignored(self, tmp_path):
        path = tmp_path / 'settings.json'
        path.write_text('[1, 2]')
        assert load_settings(path, env={}) == Settings()

    def test_env_names(self):
        assert set(ENV_OVERRIDES) >= {
            'XAPDESK_BASE_URL', 'XAPDESK_DEVICE_ID', 'XAPDESK_POLL_MS',
            'XAPDESK_TIMEOUT', 'XAPDESK_DISCARD_STALE',
        }

    def test_cfg_dir_override(self, tmp_path, monkeypatch):
        monkeypatch.setenv('XAPDESK_CFG_DIR', str(tmp_path))
        (tmp_path / 'settings.json').write_text(json.dumps({'device_id': 4}))
        assert load_settings(env={}).device_id == 4
