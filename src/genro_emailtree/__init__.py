# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-EmailTree - Document tree engine for MJML email editors.

Immutable-style operations over a tree of email components: creation with
registry and document defaults, navigation, copy-on-write mutation,
structural validation, column layout recomputation and snapshot
import/export.
"""

__version__ = "0.1.0"

from loguru import logger

from .config import EngineConfig, get_config, load_config, set_config
from .defaults import (
    effective_attributes,
    extract_document_override_defaults,
    merge_effective_attributes,
)
from .document import EmailDocument
from .exceptions import (
    ConfigError,
    EmailTreeError,
    InvalidNodeError,
    SnapshotImportError,
)
from .factory import create_node, wrap_text_content
from .grammar import Grammar, element
from .layout import (
    cleanup_font_references,
    format_width,
    redistribute_column_widths_after_move,
    redistribute_container_column_widths,
    redistribute_group_column_widths,
    reset_attribute_references,
)
from .logging import setup_logging
from .mutation import duplicate, insert, move, regenerate_ids, remove, update_node
from .navigation import (
    collect_ids,
    find_all_by_type,
    find_by_id,
    find_first_by_type,
    find_parent,
    get_ancestor_ids,
    is_descendant_of_type,
    iter_nodes,
    walk,
)
from .node import EmailNode, generate_id
from .registry import (
    TypeRegistration,
    can_accept_child,
    get_default_attributes,
    get_label,
    get_registration,
    has_content,
    is_container,
    registered_tags,
)
from .snapshot import (
    Snapshot,
    check_snapshot_tree,
    dumps_snapshot,
    export_snapshot,
    import_snapshot,
)
from .templates import initial_template
from .validation import is_valid, validate

logger.disable("genro_emailtree")

__all__ = [
    # Node
    "EmailNode",
    "generate_id",
    # Registry
    "Grammar",
    "element",
    "TypeRegistration",
    "get_registration",
    "registered_tags",
    "can_accept_child",
    "is_container",
    "has_content",
    "get_label",
    "get_default_attributes",
    # Factory
    "create_node",
    "wrap_text_content",
    "initial_template",
    # Navigation
    "iter_nodes",
    "walk",
    "find_by_id",
    "find_first_by_type",
    "find_all_by_type",
    "find_parent",
    "get_ancestor_ids",
    "is_descendant_of_type",
    "collect_ids",
    # Mutation
    "insert",
    "remove",
    "move",
    "duplicate",
    "update_node",
    "regenerate_ids",
    # Defaults
    "extract_document_override_defaults",
    "merge_effective_attributes",
    "effective_attributes",
    # Validation
    "validate",
    "is_valid",
    # Layout
    "format_width",
    "redistribute_group_column_widths",
    "redistribute_container_column_widths",
    "redistribute_column_widths_after_move",
    "reset_attribute_references",
    "cleanup_font_references",
    # Snapshot
    "Snapshot",
    "export_snapshot",
    "dumps_snapshot",
    "import_snapshot",
    "check_snapshot_tree",
    # Document
    "EmailDocument",
    # Config and logging
    "EngineConfig",
    "get_config",
    "load_config",
    "set_config",
    "setup_logging",
    # Exceptions
    "EmailTreeError",
    "InvalidNodeError",
    "SnapshotImportError",
    "ConfigError",
]
