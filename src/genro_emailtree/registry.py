# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Type registry - the closed catalog of email component types.

The catalog is declared once as a Grammar (MjmlGrammar) and exposed as
TypeRegistration records. Every other module consults it through
get_registration(); there is no per-type class hierarchy.

Hierarchy:
    mjml
      ├── mj-head
      │     └── mj-attributes | mj-breakpoint | mj-font | mj-preview
      │         mj-style | mj-title | mj-raw
      │           mj-attributes:
      │             └── one declaration per component type (mj-text, ...)
      └── mj-body
            └── mj-wrapper | mj-section | mj-raw
                  mj-wrapper: mj-section
                  mj-section: mj-column | mj-group | mj-raw
                  mj-group:   mj-column | mj-raw
                  mj-column:  mj-text | mj-button | mj-image | mj-divider
                              mj-social | mj-raw
                  mj-social:  mj-social-element

Unknown tags resolve to a registration with known=False, which accepts no
children and has no defaults, so documents authored with newer component
types still load.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .grammar import Grammar, element
from .node import EmailNode, generate_id

DEFAULT_FONT_STACK = 'Ubuntu, Helvetica, Arial, sans-serif'

SOCIAL_NETWORK_PRESETS: tuple[dict[str, str], ...] = (
    {'name': 'facebook', 'href': 'https://facebook.com', 'backgroundColor': '#3b5998'},
    {'name': 'instagram', 'href': 'https://instagram.com', 'backgroundColor': '#E4405F'},
    {'name': 'x', 'href': 'https://x.com', 'backgroundColor': '#000000'},
)


def _padding(vertical: str, horizontal: str) -> dict[str, str]:
    return {
        'paddingTop': vertical,
        'paddingRight': horizontal,
        'paddingBottom': vertical,
        'paddingLeft': horizontal,
    }


class MjmlGrammar(Grammar):
    """Grammar of the email component vocabulary."""

    # === Document structure ===

    @property
    def root(self):
        return dict(
            tag='mjml',
            label='Email',
            category='layout',
            valid_children='mj-head,mj-body',
        )

    @property
    def head(self):
        return dict(
            tag='mj-head',
            label='Head',
            category='head',
            valid_children='mj-attributes,head_declarations,head_content,mj-raw',
        )

    @property
    def attributes_block(self):
        return dict(
            tag='mj-attributes',
            label='Attributes',
            category='head',
            valid_children='mj-body,layout_containers,body_content,mj-social,mj-social-element',
        )

    @property
    def head_declarations(self):
        return dict(
            tag='mj-breakpoint,mj-font',
            label={'mj-breakpoint': 'Breakpoint', 'mj-font': 'Font'},
            category='head',
            defaults={'mj-breakpoint': {'width': '480px'}, 'mj-font': {}},
        )

    @property
    def head_content(self):
        return dict(
            tag='mj-preview,mj-style,mj-title',
            label={'mj-preview': 'Preview', 'mj-style': 'Style', 'mj-title': 'Title'},
            category='head',
            content=True,
        )

    @property
    def body(self):
        return dict(
            tag='mj-body',
            label='Body',
            category='layout',
            valid_children='mj-wrapper,mj-section,mj-raw',
            defaults={'width': '600px'},
        )

    # === Layout containers ===

    @property
    def layout_containers(self):
        return dict(
            tag='mj-wrapper,mj-section,mj-group,mj-column',
        )

    @property
    def wrapper(self):
        return dict(
            tag='mj-wrapper',
            label='Wrapper',
            category='layout',
            valid_children='mj-section',
            defaults={'direction': 'ltr', 'textAlign': 'center', **_padding('20px', '0px')},
        )

    @property
    def section(self):
        return dict(
            tag='mj-section',
            label='Section',
            category='layout',
            valid_children='mj-column,mj-group,mj-raw',
            defaults={'direction': 'ltr', 'textAlign': 'center', **_padding('20px', '0px')},
        )

    @property
    def group(self):
        return dict(
            tag='mj-group',
            label='Group',
            category='layout',
            valid_children='mj-column,mj-raw',
            defaults={'direction': 'ltr'},
        )

    @property
    def column(self):
        return dict(
            tag='mj-column',
            label='Column',
            category='layout',
            valid_children='body_content,mj-social,mj-raw',
            defaults={'direction': 'ltr', 'verticalAlign': 'top'},
        )

    # === Content ===

    @property
    def body_content(self):
        return dict(
            tag='mj-text,mj-button,mj-image,mj-divider',
            label={
                'mj-text': 'Text',
                'mj-button': 'Button',
                'mj-image': 'Image',
                'mj-divider': 'Divider',
            },
            defaults={
                'mj-text': {
                    'align': 'left',
                    'color': '#000000',
                    'fontFamily': DEFAULT_FONT_STACK,
                    'fontSize': '13px',
                    'lineHeight': '1',
                    **_padding('10px', '25px'),
                },
                'mj-button': {
                    'align': 'center',
                    'backgroundColor': '#414141',
                    'border': 'none',
                    'borderRadius': '3px',
                    'color': '#ffffff',
                    'fontFamily': DEFAULT_FONT_STACK,
                    'fontSize': '13px',
                    'fontWeight': 'normal',
                    'innerPadding': '10px 25px',
                    'lineHeight': '120%',
                    'target': '_blank',
                    'textDecoration': 'none',
                    'textTransform': 'none',
                    'verticalAlign': 'middle',
                    **_padding('10px', '25px'),
                },
                'mj-image': {
                    'align': 'center',
                    'border': '0',
                    'height': 'auto',
                    'target': '_blank',
                    'fontSize': '13px',
                    **_padding('10px', '25px'),
                },
                'mj-divider': {
                    'align': 'center',
                    'borderColor': '#000000',
                    'borderStyle': 'solid',
                    'borderWidth': '4px',
                    'width': '100%',
                    **_padding('10px', '25px'),
                },
            },
        )

    @property
    def text_content(self):
        # mj-text and mj-button also carry a markup payload
        return dict(tag='mj-text,mj-button', content=True)

    @property
    def raw(self):
        return dict(tag='mj-raw', label='Raw HTML', content=True)

    @property
    def social_element(self):
        return dict(
            tag='mj-social-element',
            label='Social Element',
            defaults={
                'align': 'center',
                'borderRadius': '3px',
                'color': '#000000',
                'fontFamily': DEFAULT_FONT_STACK,
                'fontSize': '13px',
                'lineHeight': '1',
                'target': '_blank',
                'textDecoration': 'none',
                'verticalAlign': 'middle',
                'padding': '4px',
            },
        )

    @element(
        tag='mj-social',
        valid_children='mj-social-element',
        label='Social',
        defaults={
            'align': 'center',
            'borderRadius': '3px',
            'color': '#333333',
            'fontFamily': DEFAULT_FONT_STACK,
            'fontSize': '13px',
            'iconSize': '20px',
            'lineHeight': '22px',
            'mode': 'horizontal',
            'textDecoration': 'none',
            **_padding('10px', '25px'),
        },
    )
    def social(self, node: EmailNode) -> EmailNode:
        """Seed a new social block with the default networks."""
        node.children = [
            EmailNode(
                generate_id(),
                'mj-social-element',
                {**preset, 'borderRadius': '3px'},
            )
            for preset in SOCIAL_NETWORK_PRESETS
        ]
        return node


@dataclass(frozen=True)
class TypeRegistration:
    """Capabilities of one component type.

    Attributes:
        tag: The component tag.
        label: Human-readable label (used in validation paths).
        can_have_children: True for container types.
        accepted_child_types: Tags allowed as direct children.
        has_content: True if the type carries a text/markup payload.
        default_attributes: Baseline attribute values.
        category: 'layout', 'content' or 'head'.
        known: False for tags outside the catalog.
    """

    tag: str
    label: str
    can_have_children: bool = False
    accepted_child_types: frozenset[str] = frozenset()
    has_content: bool = False
    default_attributes: dict[str, Any] = field(default_factory=dict)
    category: str = 'content'
    known: bool = True

    def can_accept_child(self, child_type: str) -> bool:
        return child_type in self.accepted_child_types


def _unknown(tag: str) -> TypeRegistration:
    return TypeRegistration(tag=tag, label=tag, known=False)


GRAMMAR = MjmlGrammar()


def _build_registry(grammar: Grammar) -> dict[str, TypeRegistration]:
    registry: dict[str, TypeRegistration] = {}
    for tag in grammar.get_all_tags():
        config = grammar.get_config(tag)
        accepted = grammar.valid_children(tag)
        registry[tag] = TypeRegistration(
            tag=tag,
            label=config['label'],
            can_have_children=accepted is not None,
            accepted_child_types=accepted or frozenset(),
            has_content=bool(config.get('content')),
            default_attributes=dict(config.get('defaults') or {}),
            category=config.get('category') or 'content',
        )
    return registry


_REGISTRY: dict[str, TypeRegistration] = _build_registry(GRAMMAR)


def get_registration(tag: str) -> TypeRegistration:
    """Look up the registration of a component type.

    Never fails: unknown tags yield an empty registration carrying the tag.
    """
    registration = _REGISTRY.get(tag)
    if registration is None:
        return _unknown(tag)
    return registration


def registered_tags() -> list[str]:
    """Return all known component tags."""
    return sorted(_REGISTRY)


def can_accept_child(parent_type: str, child_type: str) -> bool:
    """True if child_type is allowed directly under parent_type."""
    return get_registration(parent_type).can_accept_child(child_type)


def is_container(tag: str) -> bool:
    return get_registration(tag).can_have_children


def has_content(tag: str) -> bool:
    return get_registration(tag).has_content


def get_label(tag: str) -> str:
    return get_registration(tag).label


def get_default_attributes(tag: str) -> dict[str, Any]:
    """Return a copy of the baseline defaults of a component type."""
    return dict(get_registration(tag).default_attributes)


def seed_children(node: EmailNode) -> EmailNode:
    """Apply the grammar's structural seeding to a freshly created node."""
    method = GRAMMAR.get_method(node.type)
    if method is not None:
        result = method(GRAMMAR, node)
        if result is not None:
            return result
    return node
