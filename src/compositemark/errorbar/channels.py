"""Channel filtering for error bars."""

from __future__ import annotations

from ..core.constants import ERRORBAR, SUPPORTED_CHANNELS
from ..core.schema import UnitSpec
from ..log import incompatible_channel, warn

__all__ = ["filter_unsupported_channels"]


def filter_unsupported_channels(spec: UnitSpec) -> UnitSpec:
    """
    Drop encoding channels an error bar cannot draw.

    Args:
        spec (UnitSpec): Parsed unit spec.

    Returns:
        UnitSpec: Copy of ``spec`` whose encoding only holds channels in
        {x, y, color, detail, opacity, size}. Each dropped channel logs one warning.
    """
    encoding = {}
    for channel, channel_def in spec.encoding.items():
        if channel in SUPPORTED_CHANNELS:
            encoding[channel] = channel_def
        else:
            warn(incompatible_channel(channel, ERRORBAR))
    return spec.model_copy(update={"encoding": encoding})
