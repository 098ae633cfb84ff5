"""
Orientation resolution and continuous-axis extraction for error bars.

Decision table (x continuous / y continuous):

| x cont. | y cont. | Result
|---------|---------|---------------------------------------------------------------
| yes     | yes     | aggregate "errorbar" on exactly one axis (other axis has no
|         |         | aggregate) picks that axis; on both axes raises; otherwise the
|         |         | mark's ``orient``, else vertical
| yes     | no      | horizontal
| no      | yes     | vertical
| no      | no      | OrientationError
"""

from __future__ import annotations

from ..core.constants import ERRORBAR
from ..core.errors import OrientationError
from ..core.fielddef import is_continuous
from ..core.grammar import Orient
from ..core.schema import FieldDef, UnitSpec
from ..log import continuous_axis_aggregate, warn

__all__ = [
    "errorbar_orient",
    "continuous_axis",
]


def errorbar_orient(spec: UnitSpec) -> Orient:
    """
    Decide which axis an error bar summarizes.

    Args:
        spec (UnitSpec): Parsed unit spec (channels already filtered).

    Returns:
        Orient: VERTICAL when y is summarized, HORIZONTAL when x is.

    Raises:
        OrientationError: If both axes carry the errorbar aggregate, or neither
            axis is continuous.
    """
    x = spec.encoding.get("x")
    y = spec.encoding.get("y")

    if is_continuous(x):
        if is_continuous(y):
            x_agg, y_agg = x.aggregate, y.aggregate
            if x_agg is None and y_agg == ERRORBAR:
                return Orient.VERTICAL
            if y_agg is None and x_agg == ERRORBAR:
                return Orient.HORIZONTAL
            if x_agg == ERRORBAR and y_agg == ERRORBAR:
                raise OrientationError("Both x and y cannot have aggregate")
            if spec.mark.orient is not None:
                return spec.mark.orient
            return Orient.VERTICAL
        return Orient.HORIZONTAL
    if is_continuous(y):
        return Orient.VERTICAL
    raise OrientationError("Need a valid continuous axis for errorbars")


def continuous_axis(spec: UnitSpec, orient: Orient) -> tuple[str, FieldDef]:
    """
    Isolate the summarized channel and strip its aggregate.

    Args:
        spec (UnitSpec): Parsed unit spec.
        orient (Orient): Resolved orientation.

    Returns:
        tuple[str, FieldDef]: ``("y", def)`` for vertical, ``("x", def)`` for
        horizontal. The returned definition has no aggregate; scale and axis are kept.

    Notes:
        An aggregate other than "errorbar" is ignored with a warning; the compiler
        always synthesizes its own aggregate.
    """
    channel = "y" if orient is Orient.VERTICAL else "x"
    channel_def = spec.encoding.get(channel)
    if not isinstance(channel_def, FieldDef):
        raise OrientationError(f"{channel} must be a field definition for {orient.value} errorbars")

    aggregate = channel_def.aggregate
    if aggregate is not None:
        if aggregate != ERRORBAR:
            warn(continuous_axis_aggregate(str(aggregate)))
        channel_def = channel_def.model_copy(update={"aggregate": None})
    return channel, channel_def
