"""
Registry of composite marks and their normalizers.

A normalizer takes a unit spec mapping and a Config and returns the expanded
layered spec. ``errorbar`` is registered when the package is imported.

Usage:
    from compositemark import registry
    registry.add("errorbar", normalize_errorbar)
    registry.normalize({"mark": "errorbar", "encoding": {...}})
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .config import Config
from .core.errors import SpecError
from .core.typing import JsonDict
from .log import invalid_mark

__all__ = [
    "Normalizer",
    "add",
    "remove",
    "composite_marks",
    "is_composite_mark",
    "mark_type",
    "normalize",
]

logger = logging.getLogger(__name__)

Normalizer = Callable[[Mapping[str, Any], Config], JsonDict]

_NORMALIZERS: dict[str, Normalizer] = {}


def add(mark: str, normalizer: Normalizer) -> None:
    _NORMALIZERS[mark] = normalizer
    logger.debug("Registered composite mark %s", mark)


def remove(mark: str) -> None:
    _NORMALIZERS.pop(mark, None)


def composite_marks() -> list[str]:
    return sorted(_NORMALIZERS)


def is_composite_mark(mark: str) -> bool:
    return mark in _NORMALIZERS


def mark_type(spec: Mapping[str, Any]) -> str:
    """Mark type of a unit spec whose mark is a string or a ``{"type": ...}`` mapping."""
    mark = spec.get("mark")
    if isinstance(mark, Mapping):
        mark = mark.get("type")
    if not isinstance(mark, str):
        raise SpecError(f"unit spec must have a mark type (got {mark!r})")
    return mark


def normalize(spec: Mapping[str, Any], config: Config | None = None) -> JsonDict:
    """
    Expand a composite-mark unit spec with its registered normalizer.

    Notes:
        The spec's own ``config`` block is applied over ``config`` (defaults when
        None) before dispatch, and still passes through as an outer field.

    Raises:
        SpecError: If the spec has no mark type or its mark is not a registered
            composite mark.
    """
    mark = mark_type(spec)
    normalizer = _NORMALIZERS.get(mark)
    if normalizer is None:
        raise SpecError(invalid_mark(mark))
    config = Config.from_mapping(spec.get("config"), base=config)
    return normalizer(spec, config)
