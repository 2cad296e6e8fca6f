# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Shared fixtures for genro-emailtree tests."""

import pytest

from genro_emailtree import EmailNode, EngineConfig, set_config


@pytest.fixture(autouse=True)
def default_config():
    """Run every test with default settings, isolated from env and files."""
    set_config(EngineConfig())
    yield
    set_config(None)


def build_tree():
    """A small document: head with text defaults, one section with two columns.

    mjml-1
      ├── head-1 > attributes-1 > text-defaults
      └── body-1 > section-1
                     ├── col-1 > text-1
                     └── col-2 > button-1
    """
    text_defaults = EmailNode('text-defaults', 'mj-text', {'color': '#333333'})
    head = EmailNode(
        'head-1', 'mj-head', children=[
            EmailNode('attributes-1', 'mj-attributes', children=[text_defaults]),
        ],
    )
    col1 = EmailNode(
        'col-1', 'mj-column', {'width': '50%'}, children=[
            EmailNode('text-1', 'mj-text', {'fontSize': '20px'}, content='<p>Hi</p>'),
        ],
    )
    col2 = EmailNode(
        'col-2', 'mj-column', {'width': '50%'}, children=[
            EmailNode('button-1', 'mj-button', {'href': 'https://example.com'}, content='Go'),
        ],
    )
    body = EmailNode(
        'body-1', 'mj-body', children=[
            EmailNode('section-1', 'mj-section', children=[col1, col2]),
        ],
    )
    return EmailNode('mjml-1', 'mjml', children=[head, body])


@pytest.fixture
def tree():
    return build_tree()
