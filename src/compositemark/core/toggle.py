"""
Per-part enable/override states for composite mark parts.

A part setting arrives either from the user's mark definition or from config as
``true``, ``false``/absent, or a mapping of mark properties. This module turns
that loose shape into an explicit sum type so callers never branch on truthiness:

- Disabled: the part is not drawn.
- UseDefault: the part is drawn with the generated mark only.
- Override(properties): the part is drawn and the properties are layered on top.

Notes:
    - An empty mapping is an Override with no properties; it enables the part.
    - ``part_toggle(None)`` returns None for user settings ("not specified");
      config values go through ``configured_toggle`` where absent means Disabled.

Examples:
    >>> part_toggle(True)
    UseDefault()
    >>> part_toggle({"color": "red"})
    Override(properties={'color': 'red'})
    >>> is_part_enabled(None, UseDefault())
    True
    >>> is_part_enabled(Disabled(), Override({"size": 3}))
    False
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from .errors import GrammarError

__all__ = [
    "Disabled",
    "UseDefault",
    "Override",
    "PartToggle",
    "part_toggle",
    "configured_toggle",
    "is_part_enabled",
    "toggle_properties",
]


@dataclass(frozen=True, slots=True)
class Disabled:
    """Part is suppressed."""


@dataclass(frozen=True, slots=True)
class UseDefault:
    """Part is drawn with its generated mark."""


@dataclass(frozen=True, slots=True)
class Override:
    """Part is drawn; ``properties`` are merged over the generated mark."""

    properties: Mapping[str, Any] = field(default_factory=dict)


PartToggle = Disabled | UseDefault | Override


def part_toggle(value: Any) -> PartToggle | None:
    """
    Convert a loose part setting into a PartToggle.

    Args:
        value (Any): None, a bool, a mapping of mark properties, or a PartToggle.

    Returns:
        PartToggle | None: None when value is None, otherwise the matching toggle.

    Raises:
        GrammarError: If value has any other shape.
    """
    if value is None:
        return None
    if isinstance(value, (Disabled, UseDefault, Override)):
        return value
    if isinstance(value, bool):
        return UseDefault() if value else Disabled()
    if isinstance(value, Mapping):
        return Override(dict(value))
    raise GrammarError(f"part setting must be a bool or a mapping (got {value!r})")


def configured_toggle(value: Any) -> PartToggle:
    """Like ``part_toggle`` but an absent config value means Disabled."""
    toggle = part_toggle(value)
    return Disabled() if toggle is None else toggle


def is_part_enabled(user: PartToggle | None, configured: PartToggle) -> bool:
    """The user's setting decides when given; otherwise the configured one does."""
    effective = configured if user is None else user
    return not isinstance(effective, Disabled)


def toggle_properties(toggle: PartToggle | None) -> dict[str, Any]:
    """Mark properties carried by an Override; empty for every other state."""
    if isinstance(toggle, Override):
        return dict(toggle.properties)
    return {}
