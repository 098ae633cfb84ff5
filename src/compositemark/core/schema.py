"""
Pydantic v2 models for composite-mark unit specs, channel definitions and the
transform steps the expansion emits.

Validators normalize enum-like strings (type, center, extent, orient) with the
grammar helpers and raise GrammarError on unknown terms; pydantic surfaces those
as ValidationError.

Responsibilities
- Parse the parts of a unit spec the compiler reads (mark, encoding) and keep every
  other outer field verbatim as model extras.
- Tell field definitions from value definitions, keeping unknown channel
  properties (title, legend, sort, ...) as extras.
- Model transform steps so emitted dicts use the wire names (``as``, ``timeUnit``).

Style
- Zero-IO (stdlib + pydantic only).
- Models that mirror user input allow extras; models the compiler builds forbid them.

References
- grammar: src/compositemark/core/grammar.py
- errors: src/compositemark/core/errors.py
- tests: tests/core/test_schema_specs.py
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import ERRORBAR
from .errors import GrammarError
from .grammar import (
    ERRORBAR_PARTS,
    ErrorBarCenter,
    ErrorBarExtent,
    Orient,
    center_from_value,
    extent_from_value,
    measure_type_from_value,
    orient_from_value,
)
from .toggle import PartToggle, part_toggle
from .typing import JsonDict

__all__ = [
    # Channel definitions
    "FieldDef",
    "ValueDef",
    "ChannelDef",
    "channel_def_from_value",
    "channel_def_to_dict",
    "is_field_def",
    # Marks & specs
    "ErrorBarDef",
    "UnitSpec",
    # Transforms
    "AggregatedFieldDef",
    "AggregateTransform",
    "BinTransform",
    "TimeUnitTransform",
    "CalculateTransform",
    "TransformStep",
]

# ============================================================================
# Channel definitions
# ============================================================================


class FieldDef(BaseModel):
    """
    Encoding channel bound to a data field.

    Attributes:
        field (str | None): Field name; None only for ``count`` aggregates.
        type (str | None): One of {"quantitative","ordinal","temporal","nominal"}.
        aggregate (str | dict | None): Aggregate op, or the composite mark keyword.
        bin (bool | dict | None): Binning directive or bin parameters.
        time_unit (str | None): Time unit (wire name ``timeUnit``).
        scale (dict | None): Scale properties, reused on derived-field layers.
        axis (dict | None): Axis properties, reused on derived-field layers.

    Notes:
        Other channel properties are kept as extras and dumped back unchanged.

    Examples:
        >>> FieldDef(field="b", type="Quantitative").type
        'quantitative'
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    field: str | None = None
    type: str | None = None
    aggregate: str | dict[str, Any] | None = None
    bin: bool | dict[str, Any] | None = None
    time_unit: str | None = Field(default=None, alias="timeUnit")
    scale: dict[str, Any] | None = None
    axis: dict[str, Any] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v: Any) -> Any:
        """
        Normalize the measure type to its lower-case value.

        Raises:
            GrammarError: If the type is not a known measure type.
        """
        if v is None:
            return v
        return measure_type_from_value(v).value

    def to_dict(self) -> JsonDict:
        return self.model_dump(by_alias=True, exclude_none=True)


class ValueDef(BaseModel):
    """Constant-valued (or otherwise field-less) channel definition, copied verbatim."""

    model_config = ConfigDict(extra="allow")

    value: Any = None

    def to_dict(self) -> JsonDict:
        return self.model_dump(exclude_unset=True)


ChannelDef = FieldDef | ValueDef


def _is_field_mapping(value: Mapping[str, Any]) -> bool:
    return bool(value.get("field")) or value.get("aggregate") == "count"


def channel_def_from_value(value: Any) -> Any:
    """
    Parse one encoding entry.

    Args:
        value (Any): Raw channel definition.

    Returns:
        Any: FieldDef when the mapping names a field (or counts), ValueDef for other
        mappings, a list of parsed entries for array channels (e.g., ``detail``);
        anything else is returned as-is.
    """
    if isinstance(value, (FieldDef, ValueDef)):
        return value
    if isinstance(value, Mapping):
        if _is_field_mapping(value):
            return FieldDef.model_validate(dict(value))
        return ValueDef.model_validate(dict(value))
    if isinstance(value, list):
        return [channel_def_from_value(v) for v in value]
    return value


def channel_def_to_dict(value: Any) -> Any:
    if isinstance(value, (FieldDef, ValueDef)):
        return value.to_dict()
    if isinstance(value, list):
        return [channel_def_to_dict(v) for v in value]
    return copy.deepcopy(value)


def is_field_def(value: Any) -> bool:
    return isinstance(value, FieldDef)


# ============================================================================
# Marks & specs
# ============================================================================


class ErrorBarDef(BaseModel):
    """
    Error-bar mark definition with per-part overrides.

    Attributes:
        type (str): Always "errorbar".
        center (ErrorBarCenter | None): Center measure; config default when None.
        extent (ErrorBarExtent | None): Extent measure; resolved by the orchestrator when None.
        orient (Orient | None): Orientation used only when both axes are continuous
            and neither carries the errorbar aggregate.
        color (str | None): Color applied to every emitted part.
        opacity (float | None): Opacity applied to every emitted part.
        bar, line, point, ticks, whisker (bool | dict | None): Part overrides;
            False disables, True enables, a mapping enables and adds mark properties.

    Raises:
        GrammarError (wrapped in pydantic.ValidationError): On unknown
        center/extent/orient terms or a mark type other than "errorbar".

    Examples:
        >>> ErrorBarDef(type="errorbar", center="median").center
        <ErrorBarCenter.MEDIAN: 'median'>
    """

    model_config = ConfigDict(extra="forbid")

    type: str = ERRORBAR
    center: ErrorBarCenter | None = None
    extent: ErrorBarExtent | None = None
    orient: Orient | None = None
    color: str | None = None
    opacity: float | None = None
    bar: bool | dict[str, Any] | None = None
    line: bool | dict[str, Any] | None = None
    point: bool | dict[str, Any] | None = None
    ticks: bool | dict[str, Any] | None = None
    whisker: bool | dict[str, Any] | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _check_type(cls, v: Any) -> str:
        if v != ERRORBAR:
            raise GrammarError(f"mark type must be {ERRORBAR!r} (got {v!r})")
        return v

    @field_validator("center", mode="before")
    @classmethod
    def _normalize_center(cls, v: Any) -> Any:
        return None if v is None else center_from_value(v)

    @field_validator("extent", mode="before")
    @classmethod
    def _normalize_extent(cls, v: Any) -> Any:
        return None if v is None else extent_from_value(v)

    @field_validator("orient", mode="before")
    @classmethod
    def _normalize_orient(cls, v: Any) -> Any:
        return None if v is None else orient_from_value(v)

    def part_override(self, part: str) -> PartToggle | None:
        """User toggle for a part name, or None when the mark leaves it unset."""
        if part not in ERRORBAR_PARTS:
            return None
        return part_toggle(getattr(self, part))


class UnitSpec(BaseModel):
    """
    Unit specification whose mark is a composite error bar.

    Attributes:
        mark (ErrorBarDef): Mark definition; a bare "errorbar" string is accepted.
        encoding (dict[str, Any]): Channel name to FieldDef/ValueDef (or raw list entries).
        selection (Any): Absorbed by the expansion; never passed through.
        projection (Any): Absorbed by the expansion; never passed through.

    Notes:
        Every other key (data, transform, width, title, config, $schema, ...) is kept
        in ``model_extra`` and returned by ``outer_fields``.

    Examples:
        >>> spec = UnitSpec.model_validate({
        ...     "data": {"url": "data/population.json"},
        ...     "mark": "errorbar",
        ...     "encoding": {"y": {"field": "people", "type": "quantitative"}},
        ... })
        >>> spec.outer_fields()
        {'data': {'url': 'data/population.json'}}
    """

    model_config = ConfigDict(extra="allow")

    mark: ErrorBarDef
    encoding: dict[str, Any] = Field(default_factory=dict)
    selection: Any = None
    projection: Any = None

    @field_validator("mark", mode="before")
    @classmethod
    def _coerce_mark(cls, v: Any) -> Any:
        if isinstance(v, str):
            return {"type": v}
        return v

    @field_validator("encoding", mode="before")
    @classmethod
    def _parse_encoding(cls, v: Any) -> Any:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise GrammarError(f"encoding must be a mapping (got {type(v).__name__})")
        return {str(ch): channel_def_from_value(cd) for ch, cd in v.items()}

    def outer_fields(self) -> JsonDict:
        return copy.deepcopy(dict(self.model_extra or {}))


# ============================================================================
# Transforms
# ============================================================================


class AggregatedFieldDef(BaseModel):
    """One ``{op, field, as}`` entry of an aggregate transform."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    op: str
    field: str | None = None
    as_: str = Field(alias="as")


class AggregateTransform(BaseModel):
    model_config = ConfigDict(extra="forbid")

    aggregate: list[AggregatedFieldDef]
    groupby: list[str] = Field(default_factory=list)


class BinTransform(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    bin: bool | dict[str, Any]
    field: str
    as_: str = Field(alias="as")


class TimeUnitTransform(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    time_unit: str = Field(alias="timeUnit")
    field: str
    as_: str = Field(alias="as")


class CalculateTransform(BaseModel):
    """Post-aggregate expression step; ``calculate`` is a Vega expression over ``datum``."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    calculate: str
    as_: str = Field(alias="as")


TransformStep = BinTransform | TimeUnitTransform | AggregateTransform | CalculateTransform
