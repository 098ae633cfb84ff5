"""
Closed vocabularies for composite mark expansion and their normalization helpers.

Defines measure types, orientations, error-bar centers/extents, the error-bar part
vocabulary with its primitive-mark mapping, and the recognized aggregate operators.
All helpers are zero-IO; the only side effect is a logged warning when an unknown
part name is looked up.

Responsibilities
- Define enums whose serialized values are the lower-case Vega-Lite terms.
- Provide ``*_from_value`` normalizers that raise GrammarError on unknown terms.
- Map each error-bar part to the primitive mark that draws it.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE
   - Enum serialized values (spec wire format): lower case, as Vega-Lite spells them

2) Closed sets:
   - ErrorBarPart is exhaustive; ``mark_name_of_part`` degrades to ``point`` for
     names outside it instead of failing, so a bad part name never aborts a
     compilation.

Part-to-mark mapping
--------------------
| Part     | Primitive mark | Single point
|----------|----------------|-------------
| bar      | bar            | yes
| line     | line           | yes
| point    | point          | yes
| ticks    | tick           | yes
| whisker  | rule           | no (ranged: channel + channel2)

Examples
--------
>>> from compositemark.core.grammar import ErrorBarPart, mark_name_of_part, center_from_value
>>> mark_name_of_part(ErrorBarPart.WHISKER)
'rule'
>>> center_from_value("Median")
<ErrorBarCenter.MEDIAN: 'median'>
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Final

from ..log import warn, wrong_part
from .errors import GrammarError

__all__ = [
    "MeasureType",
    "Orient",
    "ErrorBarCenter",
    "ErrorBarExtent",
    "ErrorBarPart",
    "ERRORBAR_PARTS",
    "AGGREGATE_OPS",
    "CONTINUOUS_TYPES",
    # helpers/validators
    "measure_type_from_value",
    "orient_from_value",
    "center_from_value",
    "extent_from_value",
    "is_aggregate_op",
    "is_single_point_part",
    "is_special_extent",
    "mark_name_of_part",
    "ensure_all_enum_values_lower_snake",
]


# ============================================================================
# FIELD TYPES & ORIENTATION
# ============================================================================


class MeasureType(Enum):
    """
    Declared data type of an encoded field.

    Notes:
      Quantitative and temporal fields are continuous unless binned; nominal and
      ordinal fields are always discrete.
    """

    QUANTITATIVE = "quantitative"
    ORDINAL = "ordinal"
    TEMPORAL = "temporal"
    NOMINAL = "nominal"


CONTINUOUS_TYPES: Final[frozenset[str]] = frozenset(
    {MeasureType.QUANTITATIVE.value, MeasureType.TEMPORAL.value}
)


class Orient(Enum):
    """
    Layout of the summary. ``vertical`` summarizes along y, ``horizontal`` along x.
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


# ============================================================================
# ERROR BAR MEASURES
# ============================================================================


class ErrorBarCenter(Enum):
    """Central-tendency measure placed at the point/bar/line position."""

    MEAN = "mean"
    MEDIAN = "median"


class ErrorBarExtent(Enum):
    """
    Spread measure defining the whisker bounds.

    Notes:
      ``ci`` and ``iqr`` have dedicated aggregate ops for both bounds (ci0/ci1,
      q1/q3). ``stderr`` and ``stdev`` produce a single spread value that is
      added to and subtracted from the center after aggregation.
    """

    CI = "ci"
    IQR = "iqr"
    STDERR = "stderr"
    STDEV = "stdev"


# ============================================================================
# PART VOCABULARY
# ============================================================================


class ErrorBarPart(Enum):
    """Visual sub-parts an error bar decomposes into."""

    BAR = "bar"
    LINE = "line"
    POINT = "point"
    TICKS = "ticks"
    WHISKER = "whisker"


ERRORBAR_PARTS: Final[tuple[str, ...]] = tuple(p.value for p in ErrorBarPart)

_MARK_NAME_OF_PART: Final[dict[ErrorBarPart, str]] = {
    ErrorBarPart.BAR: "bar",
    ErrorBarPart.LINE: "line",
    ErrorBarPart.POINT: "point",
    ErrorBarPart.TICKS: "tick",
    ErrorBarPart.WHISKER: "rule",
}

_SINGLE_POINT_PARTS: Final[frozenset[ErrorBarPart]] = frozenset(
    {ErrorBarPart.BAR, ErrorBarPart.LINE, ErrorBarPart.POINT, ErrorBarPart.TICKS}
)

_FALLBACK_MARK: Final[str] = "point"


# ============================================================================
# AGGREGATE OPERATORS
# ============================================================================

AGGREGATE_OPS: Final[frozenset[str]] = frozenset(
    {
        "argmax",
        "argmin",
        "average",
        "count",
        "distinct",
        "max",
        "mean",
        "median",
        "min",
        "missing",
        "q1",
        "q3",
        "ci0",
        "ci1",
        "stderr",
        "stdev",
        "stdevp",
        "sum",
        "valid",
        "values",
        "variance",
        "variancep",
    }
)


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")


def _normalize(value: object, enum_cls: type[Enum], what: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    token = str(value or "").strip().lower()
    allowed = [m.value for m in enum_cls]
    if token not in allowed:
        raise GrammarError(f"{what} must be one of {allowed} (got {value!r})")
    return enum_cls(token)


def measure_type_from_value(value: object) -> MeasureType:
    """
    Parse a field type string into a MeasureType.

    Args:
      value (object): Candidate type, case-insensitive (e.g., "Quantitative").

    Returns:
      MeasureType: Parsed measure type.

    Raises:
      GrammarError: If value is not a known measure type.
    """
    return _normalize(value, MeasureType, "type")  # type: ignore[return-value]


def orient_from_value(value: object) -> Orient:
    """Parse an orient string; raises GrammarError if not vertical/horizontal."""
    return _normalize(value, Orient, "orient")  # type: ignore[return-value]


def center_from_value(value: object) -> ErrorBarCenter:
    """Parse a center string; raises GrammarError if not mean/median."""
    return _normalize(value, ErrorBarCenter, "center")  # type: ignore[return-value]


def extent_from_value(value: object) -> ErrorBarExtent:
    """Parse an extent string; raises GrammarError if not ci/iqr/stderr/stdev."""
    return _normalize(value, ErrorBarExtent, "extent")  # type: ignore[return-value]


def is_aggregate_op(value: object) -> bool:
    return isinstance(value, str) and value in AGGREGATE_OPS


def is_special_extent(extent: ErrorBarExtent) -> bool:
    """True for extents whose bounds are computed directly by aggregate ops."""
    return extent in (ErrorBarExtent.CI, ErrorBarExtent.IQR)


def is_single_point_part(part: ErrorBarPart | str) -> bool:
    """
    Check whether a part binds the continuous axis to a single derived field.

    Args:
      part (ErrorBarPart | str): Part enum or its serialized name.

    Returns:
      bool: True for bar/line/point/ticks, False for whisker and unknown names.
    """
    try:
        return ErrorBarPart(part) in _SINGLE_POINT_PARTS
    except ValueError:
        return False


def mark_name_of_part(part: ErrorBarPart | str) -> str:
    """
    Get the primitive mark type that draws a part.

    Args:
      part (ErrorBarPart | str): Part enum or its serialized name.

    Returns:
      str: Primitive mark type ("bar", "line", "point", "tick" or "rule").
      Unknown part names log a warning and return "point".

    Examples:
      >>> mark_name_of_part("ticks")
      'tick'
    """
    try:
        return _MARK_NAME_OF_PART[ErrorBarPart(part)]
    except ValueError:
        name = part.value if isinstance(part, Enum) else str(part)
        warn(wrong_part(name))
        return _FALLBACK_MARK


def ensure_all_enum_values_lower_snake(enums: Iterable[type[Enum]]) -> None:
    """
    Assert that every enum member's value is lower_snake.

    Args:
      enums (Iterable[type[Enum]]): Iterable of Enum classes to inspect.

    Raises:
      AssertionError: If any enum member has a non-lower_snake value.
    """
    for E in enums:
        for m in E:
            if not _LOWER_SNAKE_RE.match(m.value):
                raise AssertionError(
                    f"{E.__name__}.{m.name} has non-lower_snake value: {m.value!r}"
                )
