# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Grammar system for declaring email component types."""

from __future__ import annotations

from typing import Any, Callable


def element(
    tag: str | None = None,
    valid_children: str | None = None,
    content: bool = False,
    label: str | None = None,
    category: str = 'content',
    defaults: dict[str, Any] | None = None,
) -> Callable:
    """Decorator for grammar element methods with custom logic.

    Used to define component types whose freshly created nodes need
    structural seeding. The method receives the new node as first argument
    and may populate it.

    Args:
        tag: Tag name(s), comma-separated for aliases. If None, uses method name.
        valid_children: Comma-separated tags or group names accepted as children.
            None means the type is a leaf.
        content: True if the type carries a text/markup payload.
        label: Human-readable label used in paths and messages.
        category: 'layout', 'content' or 'head'.
        defaults: Baseline attribute values.

    Example:
        class SocialGrammar(Grammar):
            @element(tag='mj-social', valid_children='mj-social-element')
            def social(self, node):
                node.children.append(...)
                return node
    """
    def decorator(func: Callable) -> Callable:
        func._element_config = {
            'tag': tag,
            'valid_children': valid_children,
            'content': content,
            'label': label,
            'category': category,
            'defaults': defaults or {},
            'method': func,
        }
        return func

    return decorator


class Grammar:
    """Base class for defining component grammars.

    Grammars define component types using:
    - Properties that return dicts for groups of similar types
    - @element decorated methods for types with custom seeding logic

    A group dict accepts the keys ``tag`` (comma-separated), ``valid_children``,
    ``content``, ``label``, ``category`` and ``defaults``. When a group lists
    several tags, ``label`` and ``defaults`` may be dicts keyed by tag.
    ``valid_children`` may reference other groups by property name; names
    are expanded to tags when the grammar is queried.

    Example:
        class MailGrammar(Grammar):
            @property
            def leaves(self):
                return dict(tag='mj-text,mj-button', content=True)

            @property
            def column(self):
                return dict(tag='mj-column', valid_children='leaves')
    """

    def __init__(self) -> None:
        self._tag_to_config: dict[str, dict[str, Any]] = {}
        self._groups: dict[str, dict[str, Any]] = {}
        self._resolve_all()

    def _resolve_all(self) -> None:
        """Resolve all grammar definitions from properties and decorated methods."""
        for name in dir(self):
            if name.startswith('_'):
                continue

            attr = getattr(self.__class__, name, None)

            # Check for @element decorated methods
            if callable(attr) and hasattr(attr, '_element_config'):
                config = attr._element_config.copy()
                tags = config.get('tag') or name
                config['_method_name'] = name
                self._store_config(tags, config)
                continue

            # Check for properties returning dicts
            if isinstance(attr, property):
                value = getattr(self, name)
                if isinstance(value, dict) and 'tag' in value:
                    config = value.copy()
                    config['_group_name'] = name
                    self._groups[name] = config
                    self._store_config(config['tag'], config)

    def _store_config(self, tags: str, config: dict[str, Any]) -> None:
        """Store configuration for one or more tags.

        A tag may appear in several groups: each group only sets the keys it
        declares, so a reference-only group (just ``tag``) never erases the
        rules of a tag defined elsewhere.
        """
        tag_list = [t.strip() for t in tags.split(',')]
        defaults = config.get('defaults') or {}
        # Multi-tag groups may key their defaults by tag
        per_tag_defaults = (
            len(tag_list) > 1 and bool(defaults) and set(defaults) <= set(tag_list)
        )

        for tag in tag_list:
            tag_config = self._tag_to_config.setdefault(
                tag, {'tag': tag, 'label': tag, 'defaults': {}}
            )
            for key, value in config.items():
                if key == 'tag' or value is None:
                    continue
                if key == 'label':
                    if isinstance(value, dict):
                        value = value.get(tag, tag_config['label'])
                    tag_config['label'] = value
                elif key == 'defaults':
                    if per_tag_defaults:
                        value = defaults.get(tag, {})
                    tag_config['defaults'].update(value)
                else:
                    tag_config[key] = value

    def get_config(self, tag: str) -> dict[str, Any] | None:
        """Get configuration for a tag."""
        return self._tag_to_config.get(tag)

    def get_method(self, tag: str) -> Callable | None:
        """Get the custom method for a tag, if any."""
        config = self._tag_to_config.get(tag)
        if config and 'method' in config:
            return config['method']
        return None

    def get_all_tags(self) -> list[str]:
        """Get all defined tags."""
        return list(self._tag_to_config.keys())

    def expand_name(self, name: str) -> list[str]:
        """Expand a name (tag or group) to a list of tags.

        Args:
            name: A tag name, group name, or comma-separated list of both.

        Returns:
            List of tag names. If name is a tag, returns [name].
            If name is a group, returns all tags in the group.
            Comma-separated names are expanded individually.
        """
        result: list[str] = []
        for part in name.split(','):
            part = part.strip()
            if not part:
                continue
            if part in self._tag_to_config:
                result.append(part)
            else:
                group_config = self._groups.get(part)
                if group_config and 'tag' in group_config:
                    for tag in group_config['tag'].split(','):
                        result.append(tag.strip())
                else:
                    # Unknown name, treat as literal tag
                    result.append(part)
        return result

    def valid_children(self, tag: str) -> frozenset[str] | None:
        """Return the expanded set of accepted child tags.

        Returns:
            frozenset of tags, or None if the tag is unknown or a leaf.
        """
        config = self._tag_to_config.get(tag)
        if config is None:
            return None
        raw = config.get('valid_children')
        if raw is None:
            return None
        return frozenset(self.expand_name(raw))
