# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for configuration loading and logging setup."""

import pytest
from loguru import logger

from genro_emailtree import (
    ConfigError,
    EngineConfig,
    get_config,
    load_config,
    set_config,
    setup_logging,
)
from genro_emailtree.config import get_config_path


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ('DEFAULT_FONT', 'SNAPSHOT_VERSION', 'LOG_LEVEL', 'JSON_LOGS'):
        monkeypatch.delenv(f'GENRO_EMAILTREE_{name}', raising=False)
    monkeypatch.setenv('XDG_CONFIG_HOME', str(tmp_path))
    return tmp_path


class TestEngineConfig:
    """Tests for EngineConfig."""

    def test_defaults(self):
        """Test the built-in defaults."""
        config = EngineConfig()
        assert config.default_font == 'Arial, sans-serif'
        assert config.snapshot_version == '1.0'
        assert config.log_level == 'INFO'
        assert config.json_logs is False

    def test_no_width_setting(self):
        """Test column widths are not configurable."""
        with pytest.raises(TypeError):
            EngineConfig(width_precision=2)

    def test_unknown_log_level(self):
        """Test unknown levels are rejected."""
        with pytest.raises(ConfigError, match='log level'):
            EngineConfig(log_level='LOUD')


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file(self, clean_env):
        """Test defaults are used when no file exists."""
        assert load_config() == EngineConfig()

    def test_xdg_path(self, clean_env):
        """Test the config path follows XDG_CONFIG_HOME."""
        assert get_config_path() == clean_env / 'genro-emailtree' / 'config.toml'

    def test_file_values(self, clean_env):
        """Test values are read from the TOML file."""
        path = clean_env / 'config.toml'
        path.write_text('default_font = "Georgia, serif"\nlog_level = "DEBUG"\nunknown = 1\n')
        config = load_config(path)
        assert config.default_font == 'Georgia, serif'
        assert config.log_level == 'DEBUG'

    def test_env_overrides_file(self, clean_env, monkeypatch):
        """Test environment variables win over the file."""
        path = clean_env / 'config.toml'
        path.write_text('snapshot_version = "2.0"\n')
        monkeypatch.setenv('GENRO_EMAILTREE_SNAPSHOT_VERSION', '3.0')
        monkeypatch.setenv('GENRO_EMAILTREE_JSON_LOGS', 'true')
        config = load_config(path)
        assert config.snapshot_version == '3.0'
        assert config.json_logs is True

    def test_bool_coercion(self, clean_env, monkeypatch):
        """Test json_logs accepts the usual false spellings."""
        monkeypatch.setenv('GENRO_EMAILTREE_JSON_LOGS', 'off')
        assert load_config().json_logs is False

    def test_bad_toml(self, clean_env):
        """Test invalid TOML raises ConfigError."""
        path = clean_env / 'config.toml'
        path.write_text('this is = = not toml')
        with pytest.raises(ConfigError, match='Invalid config file'):
            load_config(path)

    def test_bad_env_value(self, clean_env, monkeypatch):
        """Test an invalid environment value raises ConfigError."""
        monkeypatch.setenv('GENRO_EMAILTREE_LOG_LEVEL', 'LOUD')
        with pytest.raises(ConfigError):
            load_config()

    def test_get_config_caches(self, clean_env):
        """Test get_config loads once and set_config overrides."""
        set_config(None)
        first = get_config()
        assert get_config() is first
        custom = EngineConfig(default_font='Georgia')
        set_config(custom)
        assert get_config() is custom


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_enables_package_logs(self, capsys):
        """Test library records reach stderr once logging is set up."""
        from genro_emailtree import EmailNode, move

        handler_id = setup_logging('WARNING')
        try:
            tree = EmailNode('m', 'mjml', children=[
                EmailNode('b', 'mj-body', children=[]),
                EmailNode('t', 'mj-text'),
            ])
            assert move(tree, 't', 'b', 0) is None
        finally:
            logger.remove(handler_id)
            logger.disable('genro_emailtree')
        assert 'Cannot move mj-text into mj-body' in capsys.readouterr().err

    def test_json_logs(self, capsys):
        """Test serialized output."""
        from genro_emailtree import import_snapshot, SnapshotImportError

        handler_id = setup_logging('INFO', json_logs=True)
        try:
            with pytest.raises(SnapshotImportError):
                import_snapshot('{')
        finally:
            logger.remove(handler_id)
            logger.disable('genro_emailtree')
        err = capsys.readouterr().err
        assert '"record"' in err
        assert 'malformed JSON' in err

    def test_bad_config_fails_at_setup(self, clean_env, monkeypatch):
        """Test an invalid environment value is reported by setup_logging itself."""
        set_config(None)
        monkeypatch.setenv('GENRO_EMAILTREE_LOG_LEVEL', 'LOUD')
        with pytest.raises(ConfigError, match='log level'):
            setup_logging()
