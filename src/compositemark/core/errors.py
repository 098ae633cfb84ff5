"""
Core exception types raised while expanding composite marks.

Provides typed exceptions for core-domain failures:
- GrammarError for enum normalization failures (center, extent, orient, measure type).
- CompositeMarkError as the base for failures that abort a compilation.
- OrientationError when no orientation can be resolved from the x/y encodings.
- SpecError for unknown composite mark types or malformed unit specifications.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Validators in compositemark.core.schema raise GrammarError; pydantic wraps it
      in a ValidationError at model construction time.
    - Non-fatal conditions (dropped channels, ignored aggregates, unusual
      center/extent pairs) never raise; they are logged via compositemark.log.

Examples:
    Catch an orientation failure.

    >>> from compositemark.core.errors import OrientationError
    >>> try:
    ...     raise OrientationError("Need a valid continuous axis for errorbars")
    ... except ValueError as e:
    ...     msg = str(e)
    >>> "continuous axis" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "CompositeMarkError",
    "OrientationError",
    "SpecError",
    "GrammarError",
]


class CompositeMarkError(ValueError):
    """Composite mark could not be expanded; aborts the compilation."""


class OrientationError(CompositeMarkError):
    """Neither axis is continuous, or both axes carry the composite aggregate."""


class SpecError(CompositeMarkError):
    """Unit specification is not a composite mark this compiler can expand."""


class GrammarError(ValueError):
    """Enum-like value is not one of the accepted lower-case terms."""
