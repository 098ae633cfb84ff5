"""
Lightweight typing aliases used across schemas and the expansion passes.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from compositemark.core.typing import FieldName, JsonDict
    >>> def describe(f: FieldName) -> JsonDict:
    ...     return {"field": f}
    >>> describe(FieldName("mean_b"))
    {'field': 'mean_b'}
"""

from __future__ import annotations

from typing import Any, NewType

__all__ = [
    "ChannelName",
    "FieldName",
    "JsonDict",
]

ChannelName = NewType("ChannelName", str)
FieldName = NewType("FieldName", str)

# Specs, layers and transform steps cross module boundaries as plain JSON-like dicts.
JsonDict = dict[str, Any]
