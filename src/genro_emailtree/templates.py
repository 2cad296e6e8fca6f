# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Starter documents."""

from __future__ import annotations

from .factory import create_node
from .layout import redistribute_column_widths_after_move
from .mutation import insert
from .node import EmailNode

PLACEHOLDER_LOGO = 'https://placehold.co/150x60/E3F2FD/1976D2?text=LOGO'


def _declaration(type: str, id: str, **attributes) -> EmailNode:
    node = create_node(type, id)
    node.attributes.update(attributes)
    # Declarations carry defaults only, never children or payload
    node.children = None
    node.content = None
    return node


def initial_template() -> EmailNode:
    """Return the document a new email starts from.

    Layout:
        mjml
          ├── mj-head: mj-attributes (text/button/image/section/column
          │            defaults), mj-preview
          └── mj-body
                └── mj-wrapper
                      └── mj-section (hero)
                            ├── mj-column: mj-image, mj-text
                            └── mj-column: mj-text, mj-button
    """
    attributes = create_node('mj-attributes', 'attributes-1')
    attributes.children = [
        _declaration(
            'mj-text', 'text-defaults-1',
            fontSize='16px', color='#333333', lineHeight='1.6',
            fontFamily='Arial, sans-serif', align='left',
            paddingTop='10px', paddingRight='25px',
            paddingBottom='10px', paddingLeft='25px',
        ),
        _declaration(
            'mj-button', 'button-defaults-1',
            backgroundColor='#007bff', color='#ffffff', borderRadius='4px',
            fontSize='16px', fontWeight='bold', innerPadding='12px 24px',
            paddingTop='15px', paddingBottom='15px',
        ),
        _declaration('mj-image', 'image-defaults-1', align='center', src=PLACEHOLDER_LOGO),
        _declaration(
            'mj-section', 'section-defaults-1',
            paddingTop='20px', paddingBottom='20px', textAlign='center',
        ),
        _declaration('mj-column', 'column-defaults-1', width='100%'),
    ]

    head = create_node('mj-head', 'head-1')
    head.children = [
        attributes,
        create_node('mj-preview', 'preview-1', 'Welcome to our newsletter!'),
    ]

    body = create_node('mj-body', 'body-1')
    body.attributes.update(width='600px', backgroundColor='#f8f9fa')

    tree = create_node('mjml', 'mjml-1')
    tree.children = [head, body]

    wrapper = create_node('mj-wrapper', 'wrapper-1', document=tree)
    wrapper.attributes.update(
        paddingTop='20px', paddingRight='20px', paddingBottom='20px', paddingLeft='20px'
    )
    tree = insert(tree, 'body-1', wrapper, 0)

    hero = create_node('mj-section', 'hero-section-1', document=tree)
    hero.attributes.update(backgroundColor='#ffffff', paddingTop='40px', paddingBottom='40px')
    tree = insert(tree, 'wrapper-1', hero, 0)

    left = create_node('mj-column', 'hero-column-1', document=tree)
    left.children = [
        create_node('mj-image', 'hero-image-1', document=tree),
        create_node('mj-text', 'hero-text-1', '<h1>Hello!</h1>', document=tree),
    ]
    right = create_node('mj-column', 'hero-column-2', document=tree)
    right.children = [
        create_node('mj-text', 'hero-text-2', 'Thanks for joining us.', document=tree),
        create_node('mj-button', 'hero-button-1', 'Get started', document=tree),
    ]
    right.children[1].attributes['href'] = 'https://example.com'

    tree = insert(tree, 'hero-section-1', left, 0)
    tree = insert(tree, 'hero-section-1', right, 1)
    return redistribute_column_widths_after_move(
        tree, 'hero-column-2', 'hero-section-1', 'hero-section-1'
    )
