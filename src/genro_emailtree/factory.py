# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Node factory - builds new nodes with resolved defaults."""

from __future__ import annotations

import re

from loguru import logger

from .defaults import extract_document_override_defaults
from .node import EmailNode, generate_id
from .registry import get_registration, seed_children

_MARKUP_PATTERN = re.compile(r'^\s*<')

EMPTY_TEXT_CONTENT = '<p></p>'


def wrap_text_content(content: str | None) -> str:
    """Return text content as markup, wrapping bare fragments in <p>."""
    if not content:
        return EMPTY_TEXT_CONTENT
    if _MARKUP_PATTERN.match(content):
        return content
    return f'<p>{content}</p>'


def create_node(
    type: str,
    id: str | None = None,
    content: str | None = None,
    document: EmailNode | None = None,
) -> EmailNode:
    """Create a new node of the given type.

    Attributes are the registry defaults for the type, overridden by the
    per-type defaults declared in ``document`` (if given). Container types
    start with an empty children list; mj-social is seeded with the default
    social networks.

    Args:
        type: Component tag. Unknown tags produce a bare node.
        id: Explicit id. If None, a UUID4 is generated.
        content: Payload for content-bearing types. mj-text content is
            wrapped in <p> unless it already starts with markup.
        document: Tree whose mj-attributes declarations override defaults.

    Returns:
        The new EmailNode.

    Example:
        >>> create_node('mj-text', content='Hello').content
        '<p>Hello</p>'
        >>> len(create_node('mj-social').children)
        3
    """
    registration = get_registration(type)
    if not registration.known:
        logger.debug("Creating node of unknown type '{}'", type)

    attributes = dict(registration.default_attributes)
    if document is not None:
        overrides = extract_document_override_defaults(document)
        attributes.update(overrides.get(type, {}))

    node = EmailNode(id or generate_id(), type, attributes)

    if registration.can_have_children:
        node.children = []

    if registration.has_content:
        if type == 'mj-text':
            node.content = wrap_text_content(content)
        else:
            node.content = content if content is not None else ''

    return seed_children(node)
