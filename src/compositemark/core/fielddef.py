"""
Field-definition helpers: continuity checks and transformed field names.

``vg_field`` gives the name a field takes after its bin/aggregate/timeUnit
transform runs. The transform synthesizer writes transform outputs under this
name and rewrites encodings to read from it, so both sides must call this one
function.

Examples:
    >>> from compositemark.core.schema import FieldDef
    >>> vg_field(FieldDef(field="a", type="quantitative", bin=True))
    'bin_maxbins_10_a'
    >>> vg_field(FieldDef(field="date", type="temporal", timeUnit="month"))
    'month_date'
    >>> is_continuous(FieldDef(field="a", type="quantitative", bin=True))
    False
"""

from __future__ import annotations

import re
from typing import Any

from .constants import DEFAULT_BIN_MAXBINS
from .grammar import CONTINUOUS_TYPES, MeasureType
from .schema import FieldDef

__all__ = [
    "is_continuous",
    "is_discrete",
    "bin_to_string",
    "vg_field",
]

_NON_WORD_RE = re.compile(r"\W")


def is_discrete(fd: FieldDef) -> bool:
    """
    Check whether a field definition is discrete.

    Notes:
        Nominal and ordinal fields are discrete. Quantitative fields are discrete
        only when binned. Temporal fields are continuous. A field without a type
        is treated as discrete.
    """
    if fd.type is None or fd.type not in CONTINUOUS_TYPES:
        return True
    if fd.type == MeasureType.QUANTITATIVE.value:
        return bool(fd.bin)
    return False


def is_continuous(value: Any) -> bool:
    """True for a FieldDef that is not discrete; value definitions are never continuous."""
    return isinstance(value, FieldDef) and not is_discrete(value)


def _var_name(s: str) -> str:
    return _NON_WORD_RE.sub("_", s)


def bin_to_string(bin_: bool | dict[str, Any]) -> str:
    """
    Name prefix for a binned field.

    Args:
        bin_ (bool | dict): ``True`` or a mapping of bin parameters.

    Returns:
        str: ``bin_maxbins_10`` for True, otherwise ``bin`` followed by
        ``_<param>_<value>`` for each parameter in insertion order.

    Examples:
        >>> bin_to_string({"maxbins": 20, "nice": True})
        'bin_maxbins_20_nice_True'
    """
    params = {"maxbins": DEFAULT_BIN_MAXBINS} if isinstance(bin_, bool) else dict(bin_)
    return "bin" + "".join(_var_name(f"_{k}_{v}") for k, v in params.items())


def vg_field(fd: FieldDef) -> str:
    """
    Field name after the definition's own transform.

    Args:
        fd (FieldDef): Field definition.

    Returns:
        str: ``count_*`` for count aggregates; ``<fn>_<field>`` where fn is the bin
        string, else the aggregate op, else the time unit; the bare field otherwise.
    """
    if fd.aggregate == "count":
        return "count_*"
    fn: str | None = None
    if fd.bin:
        fn = bin_to_string(fd.bin)
    elif fd.aggregate:
        fn = str(fd.aggregate)
    elif fd.time_unit:
        fn = str(fd.time_unit)
    field = fd.field or ""
    if fn:
        return f"{fn}_{field}" if field else fn
    return field
