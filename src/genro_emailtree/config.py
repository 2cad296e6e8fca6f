# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Configuration for genro-emailtree.

All tunable parameters in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/genro-emailtree/config.toml) if it exists
3. Environment variables (GENRO_EMAILTREE_*) override the file

Example config.toml::

    default_font = "Helvetica, sans-serif"
    log_level = "DEBUG"
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from .exceptions import ConfigError

ENV_PREFIX = 'GENRO_EMAILTREE_'

_LOG_LEVELS = ('TRACE', 'DEBUG', 'INFO', 'SUCCESS', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class EngineConfig:
    """Engine settings.

    Attributes:
        default_font: Font stack applied when a font reference is cleaned up.
        snapshot_version: Version written into exported snapshots.
        log_level: Level used by setup_logging() when none is given.
        json_logs: Emit serialized JSON log records.
    """

    default_font: str = 'Arial, sans-serif'
    snapshot_version: str = '1.0'
    log_level: str = 'INFO'
    json_logs: bool = False

    def __post_init__(self) -> None:
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"Unknown log level: {self.log_level}")


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get('XDG_CONFIG_HOME')
    if xdg:
        return Path(xdg) / 'genro-emailtree' / 'config.toml'
    return Path.home() / '.config' / 'genro-emailtree' / 'config.toml'


def _coerce(name: str, raw: Any) -> Any:
    """Convert a raw file/env value to the type of the named field."""
    if name == 'json_logs':
        if isinstance(raw, bool):
            return raw
        return str(raw).strip().lower() in ('1', 'true', 'yes', 'on')
    return str(raw)


def _apply(config: EngineConfig, data: dict[str, Any]) -> EngineConfig:
    known = {f.name for f in fields(EngineConfig)}
    changes = {
        name: _coerce(name, value) for name, value in data.items() if name in known
    }
    if not changes:
        return config
    return replace(config, **changes)


def _from_env() -> dict[str, str]:
    values: dict[str, str] = {}
    for f in fields(EngineConfig):
        raw = os.environ.get(ENV_PREFIX + f.name.upper())
        if raw is not None:
            values[f.name] = raw
    return values


def load_config(path: Path | None = None) -> EngineConfig:
    """Load config from file (if it exists) and environment variables.

    Raises:
        ConfigError: If the file is not valid TOML or a value is invalid.
    """
    config = EngineConfig()
    path = path or get_config_path()

    if path.exists():
        try:
            with open(path, 'rb') as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid config file {path}: {e}") from e
        config = _apply(config, data)

    return _apply(config, _from_env())


_config: EngineConfig | None = None


def get_config() -> EngineConfig:
    """Return the process-wide config, loading it on first use.

    Raises:
        ConfigError: On the loading call, if the file or an environment
            variable holds an invalid value.
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: EngineConfig | None) -> None:
    """Replace the process-wide config (None forces a reload on next use)."""
    global _config
    _config = config
