"""
Shared layer building for composite marks.

``part_layer_mixins`` decides whether one part of a composite mark is drawn and,
if so, merges its final mark properties. Mark property precedence, lowest first:

1. properties configured for the part (config Override)
2. ``color`` / ``opacity`` from the composite mark definition; an opacity of 0
   is applied (a falsy opacity is not skipped)
3. the generated mark (type plus the configured part properties the part
   template folds in, so config wins over the mark color/opacity)
4. ``style`` = ``<composite mark>-<part>``
5. properties from the user's own part override on the mark definition
"""

from __future__ import annotations

from typing import Any

from .core.schema import ErrorBarDef
from .core.toggle import PartToggle, is_part_enabled, toggle_properties
from .core.typing import JsonDict

__all__ = [
    "part_layer_mixins",
    "mark_to_dict",
]


def mark_to_dict(mark: str | JsonDict) -> JsonDict:
    """Expand a bare mark type into ``{"type": mark}``; mark dicts are copied."""
    if isinstance(mark, str):
        return {"type": mark}
    return dict(mark)


def part_layer_mixins(
    mark_def: ErrorBarDef,
    part: str,
    configured: PartToggle,
    part_base_spec: JsonDict,
) -> list[JsonDict]:
    """
    Finalize one part layer, or suppress it.

    Args:
        mark_def (ErrorBarDef): The composite mark definition from the unit spec.
        part (str): Part name (e.g., "whisker").
        configured (PartToggle): The part's configured state.
        part_base_spec (JsonDict): Generated ``{"mark": ..., "encoding": ...}`` template.

    Returns:
        list[JsonDict]: Empty when the part is disabled, otherwise one layer.

    Examples:
        >>> from compositemark.core.toggle import UseDefault
        >>> part_layer_mixins(
        ...     ErrorBarDef(color="red"), "point", UseDefault(),
        ...     {"mark": "point", "encoding": {}},
        ... )
        [{'mark': {'color': 'red', 'type': 'point', 'style': 'errorbar-point'}, 'encoding': {}}]
    """
    user = mark_def.part_override(part)
    if not is_part_enabled(user, configured):
        return []

    mark: dict[str, Any] = toggle_properties(configured)
    if mark_def.color:
        mark["color"] = mark_def.color
    if mark_def.opacity is not None:
        mark["opacity"] = mark_def.opacity
    mark.update(mark_to_dict(part_base_spec["mark"]))
    mark["style"] = f"{mark_def.type}-{part}"
    mark.update(toggle_properties(user))

    return [{**part_base_spec, "mark": mark}]
