"""
Diagnostics for composite mark expansion.

Non-fatal conditions are reported as warnings on the ``compositemark`` logger and
compilation continues with an adjusted result. Fatal conditions are never logged
here; they raise compositemark.core.errors exceptions instead.

Responsibilities
- Own the package logger and the single ``warn`` entry point.
- Build the human-readable message text for every diagnostic so call sites and
  tests share one wording.

Notes
- Handlers and levels are configured by the application (see compositemark.cli);
  the library only emits records.
- Tests capture records with pytest's ``caplog`` fixture.

Examples
--------
>>> from compositemark.log import incompatible_channel
>>> incompatible_channel("shape", "errorbar")
'shape dropped as it is incompatible with "errorbar".'
"""

from __future__ import annotations

import logging

__all__ = [
    "logger",
    "warn",
    "incompatible_channel",
    "unusual_center_extent",
    "continuous_axis_aggregate",
    "wrong_part",
    "invalid_mark",
]

logger = logging.getLogger("compositemark")


def warn(message: str) -> None:
    """Emit a non-fatal diagnostic on the package logger."""
    logger.warning("%s", message)


def incompatible_channel(channel: str, mark: str, when: str | None = None) -> str:
    return f'{channel} dropped as it is incompatible with "{mark}"' + (
        f" when {when}." if when else "."
    )


def unusual_center_extent(center: str, extent: str) -> str:
    return f"{center} is not usually used with {extent} for error bar."


def continuous_axis_aggregate(aggregate: str) -> str:
    return f"Continuous axis should not have customized aggregation function {aggregate}"


def wrong_part(part: str) -> str:
    return f"wrong ErrorBarPart is used ({part} is entered)"


def invalid_mark(mark: str) -> str:
    return f'Invalid mark type "{mark}"'
