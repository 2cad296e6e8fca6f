# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Logging setup for applications embedding genro-emailtree.

The library logs through loguru and is disabled on import. Call
setup_logging() to see its output.
"""

from __future__ import annotations

import sys

from loguru import logger

from .config import get_config

PACKAGE = 'genro_emailtree'

HUMAN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(log_level: str | None = None, json_logs: bool | None = None) -> int:
    """Route genro-emailtree logs to stderr.

    The config is loaded here, so an invalid config file or environment
    variable fails at startup rather than on the first layout or export call.

    Args:
        log_level: Minimum level. Defaults to the configured log_level.
        json_logs: Emit one JSON record per line. Defaults to the
            configured json_logs.

    Returns:
        The loguru handler id.

    Raises:
        ConfigError: If the config cannot be loaded.
    """
    config = get_config()
    level = (log_level or config.log_level).upper()
    serialize = config.json_logs if json_logs is None else json_logs

    logger.remove()
    if serialize:
        handler_id = logger.add(sys.stderr, level=level, serialize=True)
    else:
        handler_id = logger.add(sys.stderr, level=level, format=HUMAN_FORMAT, colorize=True)
    logger.enable(PACKAGE)
    return handler_id
