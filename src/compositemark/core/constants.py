"""
Composite mark defaults shared by the config layer and the expansion passes.

Defines the reserved aggregate keyword, the supported channel set, the
derived-field prefixes and the default center/extent. This module is zero-IO and
uses only the Python standard library.

Notes:
    - Changing DEFAULT_CENTER or DEFAULT_EXTENT changes compiled output for every
      spec that leaves them unset; compositemark.config consumes these values.
    - Derived field names are always ``<prefix><continuous field>``; see
      compositemark.errorbar.params.derived_fields.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "ERRORBAR",
    "SUPPORTED_CHANNELS",
    "DEFAULT_CENTER",
    "DEFAULT_EXTENT",
    "MEDIAN_DEFAULT_EXTENT",
    "LOWER_WHISKER_PREFIX",
    "UPPER_WHISKER_PREFIX",
    "EXTENT_PREFIX",
    "DEFAULT_BIN_MAXBINS",
]

# Composite mark type; doubles as the reserved aggregate keyword on the summarized axis.
ERRORBAR: Final[str] = "errorbar"

# Encoding channels an errorbar accepts; anything else is dropped with a warning.
SUPPORTED_CHANNELS: Final[tuple[str, ...]] = ("x", "y", "color", "detail", "opacity", "size")

DEFAULT_CENTER: Final[str] = "mean"
DEFAULT_EXTENT: Final[str] = "stderr"

# Extent used when center resolves to median and the mark leaves extent unset.
MEDIAN_DEFAULT_EXTENT: Final[str] = "iqr"

LOWER_WHISKER_PREFIX: Final[str] = "lower_whisker_"
UPPER_WHISKER_PREFIX: Final[str] = "upper_whisker_"
EXTENT_PREFIX: Final[str] = "extent_"

# maxbins implied by ``bin: true`` when naming the binned field.
DEFAULT_BIN_MAXBINS: Final[int] = 10
