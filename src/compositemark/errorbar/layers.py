"""
Layer assembly for error bars.

Each part gets a ``{mark, encoding}`` template that reads the derived fields of
ErrorBarParams, then goes through ``part_layer_mixins``. Layers are emitted in a
fixed drawing order (later layers draw on top):

bar, line, ticks (lower whisker), ticks (upper whisker), whisker, point
"""

from __future__ import annotations

import copy
from typing import Any

from ..common import part_layer_mixins
from ..config import ErrorBarConfig
from ..core.grammar import ErrorBarPart, is_single_point_part, mark_name_of_part
from ..core.schema import ErrorBarDef
from ..core.toggle import toggle_properties
from ..core.typing import JsonDict
from .params import ErrorBarParams

__all__ = ["errorbar_layers", "part_layer"]

# Channels drawn through the mark definition (color) or not at all (size).
_OMITTED_CHANNELS: frozenset[str] = frozenset({"color", "size"})


def part_layer(
    part: ErrorBarPart,
    mark_def: ErrorBarDef,
    config: ErrorBarConfig,
    params: ErrorBarParams,
    field: str | None = None,
) -> list[JsonDict]:
    """
    Build one part's layer.

    Args:
        part (ErrorBarPart): Part to draw.
        mark_def (ErrorBarDef): Composite mark definition.
        config (ErrorBarConfig): Error-bar defaults.
        params (ErrorBarParams): Synthesized pipeline and rewritten encodings.
        field (str | None): Derived field a single-point part binds to; the center
            field when None. Ignored by the whisker part.

    Returns:
        list[JsonDict]: Zero or one layer.
    """
    axis = params.continuous_axis
    axis_def = params.continuous_axis_channel_def
    derived = params.derived

    position: dict[str, Any] = {"type": axis_def.type}
    if axis_def.scale:
        position["scale"] = axis_def.scale
    if axis_def.axis:
        position["axis"] = axis_def.axis

    encoding: dict[str, Any]
    if is_single_point_part(part):
        encoding = {axis: {"field": field or derived.center, **position}}
    else:
        encoding = {
            axis: {"field": derived.lower_whisker, **position},
            # Vega-Lite 5 secondary channels take no type
            f"{axis}2": {"field": derived.upper_whisker},
        }
    for channel, channel_def in params.encoding_without_continuous_axis.items():
        if channel not in _OMITTED_CHANNELS:
            encoding[channel] = channel_def

    configured = config.part(part.value)
    base_mark = {"type": mark_name_of_part(part), **toggle_properties(configured)}

    return part_layer_mixins(
        mark_def,
        part.value,
        configured,
        {"mark": base_mark, "encoding": copy.deepcopy(encoding)},
    )


def errorbar_layers(
    mark_def: ErrorBarDef, config: ErrorBarConfig, params: ErrorBarParams
) -> list[JsonDict]:
    """Assemble every enabled part in drawing order."""
    derived = params.derived
    return [
        *part_layer(ErrorBarPart.BAR, mark_def, config, params),
        *part_layer(ErrorBarPart.LINE, mark_def, config, params),
        *part_layer(ErrorBarPart.TICKS, mark_def, config, params, derived.lower_whisker),
        *part_layer(ErrorBarPart.TICKS, mark_def, config, params, derived.upper_whisker),
        *part_layer(ErrorBarPart.WHISKER, mark_def, config, params),
        *part_layer(ErrorBarPart.POINT, mark_def, config, params),
    ]
