# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""EmailTree exceptions.

Tree operations never raise for data the engine produces itself: missing
ids and illegal placements are reported as ``None`` results, and structural
problems as lists of messages. Exceptions are reserved for the boundaries
where external data enters the engine.
"""

from __future__ import annotations


class EmailTreeError(Exception):
    """Base exception for EmailTree errors."""

    pass


class InvalidNodeError(EmailTreeError):
    """Raised when a mapping cannot be turned into an EmailNode."""

    pass


class SnapshotImportError(EmailTreeError):
    """Raised when a snapshot is rejected on import.

    Attributes:
        errors: The list of violations that caused the rejection.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Validation failed: " + ", ".join(self.errors))


class ConfigError(EmailTreeError):
    """Raised when a configuration value is invalid."""

    pass
