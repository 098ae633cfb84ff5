"""
Statistical transform synthesis for error bars.

Builds the transform pipeline that computes the center and whisker bounds of the
continuous field per group, and rewrites the remaining encodings to read the
transformed fields.

Pipeline order
--------------
1. bin steps for binned grouping channels
2. timeUnit steps for time-unit grouping channels
3. one aggregate step: center, extent ops, pass-through aggregates; grouped by the
   (transformed) names of every non-aggregated field channel, including each
   entry of an array channel such as detail
4. calculate steps (stderr/stdev only): upper then lower whisker = center +/- extent

Derived names
-------------
| Name                    | Source
|-------------------------|-------------------------------------------
| ``<center>_<field>``    | aggregate op ``mean`` or ``median``
| ``lower_whisker_<f>``   | ci0 / q1, or calculate center - extent
| ``upper_whisker_<f>``   | ci1 / q3, or calculate center + extent
| ``extent_<field>``      | aggregate op ``stderr`` / ``stdev``
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.constants import EXTENT_PREFIX, LOWER_WHISKER_PREFIX, UPPER_WHISKER_PREFIX
from ..core.fielddef import vg_field
from ..core.grammar import (
    ErrorBarCenter,
    ErrorBarExtent,
    Orient,
    is_aggregate_op,
    is_special_extent,
)
from ..core.schema import (
    AggregatedFieldDef,
    AggregateTransform,
    BinTransform,
    CalculateTransform,
    FieldDef,
    TimeUnitTransform,
    UnitSpec,
    channel_def_to_dict,
)
from ..core.typing import JsonDict
from .orient import continuous_axis

__all__ = [
    "DerivedFields",
    "ErrorBarParams",
    "derived_fields",
    "errorbar_params",
]

# Bound ops for extents that aggregate both whiskers directly.
_SPECIAL_EXTENT_OPS: dict[ErrorBarExtent, tuple[str, str]] = {
    ErrorBarExtent.CI: ("ci0", "ci1"),
    ErrorBarExtent.IQR: ("q1", "q3"),
}


@dataclass(frozen=True, slots=True)
class DerivedFields:
    """Names of every field the pipeline derives from the continuous field."""

    continuous_field: str
    center: str
    lower_whisker: str
    upper_whisker: str
    extent: str | None = None


def derived_fields(field: str, center: ErrorBarCenter, extent: ErrorBarExtent) -> DerivedFields:
    """
    Derive the output names for a continuous field.

    Examples:
        >>> derived_fields("b", ErrorBarCenter.MEAN, ErrorBarExtent.STDERR)
        DerivedFields(continuous_field='b', center='mean_b', lower_whisker='lower_whisker_b', upper_whisker='upper_whisker_b', extent='extent_b')
    """
    return DerivedFields(
        continuous_field=field,
        center=f"{center.value}_{field}",
        lower_whisker=f"{LOWER_WHISKER_PREFIX}{field}",
        upper_whisker=f"{UPPER_WHISKER_PREFIX}{field}",
        extent=None if is_special_extent(extent) else f"{EXTENT_PREFIX}{field}",
    )


@dataclass(frozen=True)
class ErrorBarParams:
    """Output of the transform synthesizer, consumed by the layer assembler."""

    transform: list[JsonDict]
    groupby: list[str]
    continuous_axis_channel_def: FieldDef
    continuous_axis: str
    encoding_without_continuous_axis: dict[str, Any]
    derived: DerivedFields


def _dump(step: Any) -> JsonDict:
    return step.model_dump(by_alias=True, exclude_none=True)


def errorbar_params(
    spec: UnitSpec,
    orient: Orient,
    center: ErrorBarCenter,
    extent: ErrorBarExtent,
) -> ErrorBarParams:
    """
    Synthesize the aggregate pipeline and grouping keys.

    Args:
        spec (UnitSpec): Parsed unit spec (channels already filtered).
        orient (Orient): Resolved orientation.
        center (ErrorBarCenter): Resolved center.
        extent (ErrorBarExtent): Resolved extent.

    Returns:
        ErrorBarParams: Transform steps as dicts, groupby keys, the cleaned
        continuous channel, and the rewritten non-continuous encoding.
    """
    axis, axis_def = continuous_axis(spec, orient)
    field = axis_def.field or ""
    derived = derived_fields(field, center, extent)

    aggregate = [AggregatedFieldDef(op=center.value, field=field, as_=derived.center)]
    post_aggregate_calculates: list[CalculateTransform] = []

    if extent in _SPECIAL_EXTENT_OPS:
        lower_op, upper_op = _SPECIAL_EXTENT_OPS[extent]
        aggregate.append(AggregatedFieldDef(op=lower_op, field=field, as_=derived.lower_whisker))
        aggregate.append(AggregatedFieldDef(op=upper_op, field=field, as_=derived.upper_whisker))
    else:
        aggregate.append(AggregatedFieldDef(op=extent.value, field=field, as_=derived.extent))
        post_aggregate_calculates = [
            CalculateTransform(
                calculate=f"datum.{derived.center} + datum.{derived.extent}",
                as_=derived.upper_whisker,
            ),
            CalculateTransform(
                calculate=f"datum.{derived.center} - datum.{derived.extent}",
                as_=derived.lower_whisker,
            ),
        ]

    groupby: list[str] = []
    bins: list[BinTransform] = []
    time_units: list[TimeUnitTransform] = []
    encoding_without_continuous_axis: dict[str, Any] = {}

    def rewrite(channel_def: Any) -> Any:
        if not isinstance(channel_def, FieldDef):
            return channel_def_to_dict(channel_def)

        transformed = vg_field(channel_def)
        if channel_def.aggregate is not None:
            if is_aggregate_op(channel_def.aggregate):
                aggregate.append(
                    AggregatedFieldDef(
                        op=str(channel_def.aggregate), field=channel_def.field, as_=transformed
                    )
                )
        else:
            if channel_def.bin:
                bins.append(
                    BinTransform(bin=channel_def.bin, field=channel_def.field, as_=transformed)
                )
            elif channel_def.time_unit:
                time_units.append(
                    TimeUnitTransform(
                        time_unit=channel_def.time_unit, field=channel_def.field, as_=transformed
                    )
                )
            groupby.append(transformed)

        # downstream layers read the post-transform field
        rewritten = channel_def.model_copy(
            update={"field": transformed, "aggregate": None, "bin": None, "time_unit": None}
        )
        return rewritten.to_dict()

    for channel, channel_def in spec.encoding.items():
        if channel == axis:
            continue
        if isinstance(channel_def, list):
            # array channels (detail) group on every entry
            encoding_without_continuous_axis[channel] = [rewrite(cd) for cd in channel_def]
        else:
            encoding_without_continuous_axis[channel] = rewrite(channel_def)

    transform: list[JsonDict] = [
        *(_dump(b) for b in bins),
        *(_dump(t) for t in time_units),
        _dump(AggregateTransform(aggregate=aggregate, groupby=groupby)),
        *(_dump(c) for c in post_aggregate_calculates),
    ]

    return ErrorBarParams(
        transform=transform,
        groupby=groupby,
        continuous_axis_channel_def=axis_def,
        continuous_axis=axis,
        encoding_without_continuous_axis=encoding_without_continuous_axis,
        derived=derived,
    )
