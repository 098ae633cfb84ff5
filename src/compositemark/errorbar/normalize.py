"""
Error-bar expansion entry point.

Sequences channel filtering, center/extent resolution, orientation, transform
synthesis and layer assembly, and rebuilds the outer spec around the result.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import Config, ErrorBarConfig
from ..core.constants import MEDIAN_DEFAULT_EXTENT
from ..core.grammar import ErrorBarCenter, ErrorBarExtent
from ..core.schema import ErrorBarDef, UnitSpec
from ..core.typing import JsonDict
from ..log import unusual_center_extent, warn
from .channels import filter_unsupported_channels
from .layers import errorbar_layers
from .orient import errorbar_orient
from .params import errorbar_params

__all__ = [
    "resolve_center_extent",
    "normalize_errorbar",
]


def resolve_center_extent(
    mark_def: ErrorBarDef, config: ErrorBarConfig
) -> tuple[ErrorBarCenter, ErrorBarExtent]:
    """
    Resolve center and extent from the mark definition and config.

    Notes:
        Mark values win over config. A median center without an explicit extent
        uses iqr rather than the configured extent. Pairings other than
        mean with a non-iqr extent, or median with iqr, log a warning.

    Examples:
        >>> resolve_center_extent(ErrorBarDef(center="median"), ErrorBarConfig())
        (<ErrorBarCenter.MEDIAN: 'median'>, <ErrorBarExtent.IQR: 'iqr'>)
    """
    center = mark_def.center or config.center
    extent = mark_def.extent or config.extent
    if center is ErrorBarCenter.MEDIAN:
        extent = mark_def.extent or ErrorBarExtent(MEDIAN_DEFAULT_EXTENT)

    if (center is ErrorBarCenter.MEDIAN) != (extent is ErrorBarExtent.IQR):
        warn(unusual_center_extent(center.value, extent.value))
    return center, extent


def normalize_errorbar(spec: UnitSpec | Mapping[str, Any], config: Config | None = None) -> JsonDict:
    """
    Expand an error-bar unit spec into a layered spec.

    Args:
        spec (UnitSpec | Mapping[str, Any]): Unit spec whose mark is "errorbar".
        config (Config | None): Defaults; ``Config()`` when None.

    Returns:
        JsonDict: Outer fields of ``spec`` (without mark, encoding, selection,
        projection), ``transform`` = any user transforms followed by the
        synthesized pipeline, and ``layer`` = the enabled parts in drawing order.

    Raises:
        OrientationError: If no orientation can be resolved.
        pydantic.ValidationError: If ``spec`` is not a valid error-bar unit spec.

    Examples:
        >>> out = normalize_errorbar({
        ...     "mark": "errorbar",
        ...     "encoding": {
        ...         "x": {"field": "a", "type": "ordinal"},
        ...         "y": {"field": "b", "type": "quantitative", "aggregate": "errorbar"},
        ...     },
        ... })
        >>> [layer["mark"]["type"] for layer in out["layer"]]
        ['rule', 'point']
    """
    config = config or Config()
    unit = spec if isinstance(spec, UnitSpec) else UnitSpec.model_validate(dict(spec))
    unit = filter_unsupported_channels(unit)

    center, extent = resolve_center_extent(unit.mark, config.errorbar)
    orient = errorbar_orient(unit)
    params = errorbar_params(unit, orient, center, extent)

    outer = unit.outer_fields()
    user_transforms = outer.pop("transform", None) or []
    return {
        **outer,
        "transform": [*user_transforms, *params.transform],
        "layer": errorbar_layers(unit.mark, config.errorbar, params),
    }
