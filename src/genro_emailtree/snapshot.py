# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Snapshot format - import/export of email trees.

A snapshot wraps a tree with optional test data::

    {
        "emailTree": {...},
        "testData": {...} | null,
        "exportedAt": "2025-01-31T10:00:00+00:00",
        "version": "1.0"
    }

Import accepts the wrapper or a bare tree. An imported tree must pass the
structural validator: any violation rejects the whole import.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from loguru import logger

from .config import get_config
from .exceptions import InvalidNodeError, SnapshotImportError
from .node import EmailNode
from .validation import NESTING_TOO_DEEP, validate

ROOT_TYPE = 'mjml'

# Extra guidance appended to common validator messages
_HINTS: tuple[tuple[str, str], ...] = (
    (
        'mj-raw cannot be placed inside mj-wrapper',
        'mj-raw components can only be placed directly in mj-body or mj-head, '
        'not inside mj-wrapper.',
    ),
    (
        'cannot be placed inside mj-raw',
        'HTML content inside mj-raw should be stored as text content, '
        'not as child elements.',
    ),
)


@dataclass
class Snapshot:
    """An imported or exported document."""

    email_tree: EmailNode
    test_data: dict[str, Any] | None = None
    exported_at: str | None = None
    version: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            'emailTree': self.email_tree.to_dict(),
            'testData': self.test_data,
            'exportedAt': self.exported_at,
            'version': self.version,
        }


def export_snapshot(
    tree: EmailNode, test_data: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build the snapshot wrapper for a tree.

    Raises:
        ConfigError: If the config has not been loaded yet and is invalid
            (the version is read from it).
    """
    snapshot = Snapshot(
        email_tree=tree,
        test_data=test_data or None,
        exported_at=datetime.now(timezone.utc).isoformat(),
        version=get_config().snapshot_version,
    )
    return snapshot.to_dict()


def dumps_snapshot(tree: EmailNode, test_data: dict[str, Any] | None = None) -> str:
    """Serialize the snapshot wrapper of a tree to indented JSON."""
    return json.dumps(export_snapshot(tree, test_data), indent=2)


def _with_hint(error: str) -> str:
    for needle, hint in _HINTS:
        if needle in error:
            return f"{error}\n\nNote: {hint}"
    return error


def _check_shape(raw_tree: Any) -> list[str]:
    """Check the root shape before the tree is built."""
    if not isinstance(raw_tree, dict):
        return ['Invalid tree structure: not an object']
    if not isinstance(raw_tree.get('id'), str) or not isinstance(raw_tree.get('type'), str):
        return ['Invalid tree structure: missing id or type']
    if raw_tree['type'] != ROOT_TYPE:
        return [f'Invalid tree structure: root must be {ROOT_TYPE} type']
    if 'children' in raw_tree and raw_tree['children'] is not None and not isinstance(
        raw_tree['children'], list
    ):
        return ['Invalid tree structure: children must be an array']
    return []


def _build_tree(raw_tree: Any) -> tuple[EmailNode | None, list[str]]:
    errors = _check_shape(raw_tree)
    if errors:
        return None, errors
    try:
        tree = EmailNode.from_dict(raw_tree)
    except InvalidNodeError as e:
        return None, [f'Invalid tree structure: {e}']
    except RecursionError:
        return None, [NESTING_TOO_DEEP]
    return tree, [_with_hint(error) for error in validate(tree)]


def _split(data: Any) -> tuple[Any, dict[str, Any]]:
    """Separate the raw tree from the wrapper fields."""
    if isinstance(data, dict) and data.get('emailTree'):
        return data['emailTree'], data
    return data, {}


def check_snapshot_tree(data: Any) -> list[str]:
    """Return the violations that would reject ``data`` on import."""
    raw_tree, _ = _split(data)
    _, errors = _build_tree(raw_tree)
    return errors


def import_snapshot(data: dict[str, Any] | str | bytes) -> Snapshot:
    """Import a snapshot (wrapper or bare tree).

    Args:
        data: Parsed JSON object, or JSON text/bytes.

    Returns:
        The accepted Snapshot.

    Raises:
        SnapshotImportError: If the JSON is malformed, the tree shape is
            wrong, or the structural validator reports any violation.
            ``errors`` holds every message.
    """
    if isinstance(data, (str, bytes, bytearray)):
        # Covers JSONDecodeError and UnicodeDecodeError (both ValueError)
        # as well as documents nested past the recursion limit
        try:
            data = json.loads(data)
        except (ValueError, RecursionError) as e:
            logger.warning("Snapshot import failed: malformed JSON ({})", e)
            raise SnapshotImportError([f'Malformed JSON: {e}']) from e

    raw_tree, wrapper = _split(data)
    tree, errors = _build_tree(raw_tree)
    if errors:
        logger.warning("Snapshot import rejected with {} violation(s)", len(errors))
        raise SnapshotImportError(errors)

    test_data = wrapper.get('testData')
    if test_data is not None and not isinstance(test_data, dict):
        raise SnapshotImportError(['Invalid snapshot: testData must be an object'])

    logger.info("Snapshot imported: root '{}'", tree.id)
    return Snapshot(
        email_tree=tree,
        test_data=test_data,
        exported_at=wrapper.get('exportedAt'),
        version=wrapper.get('version'),
    )
