"""Altair chart construction and saving for expanded layered specs."""

from __future__ import annotations

import importlib
from collections.abc import Mapping
from typing import Any

import altair as alt

__all__ = ["to_chart", "save"]


def to_chart(layered: Mapping[str, Any], *, validate: bool = True) -> alt.LayerChart:
    """
    Build an Altair LayerChart from an expanded spec.

    Args:
        layered (Mapping[str, Any]): Output of ``compositemark.normalize``.
        validate (bool): Validate against the Vega-Lite schema bundled with Altair.

    Returns:
        alt.LayerChart: Chart whose ``to_dict()`` carries the same transform and layers.

    Raises:
        ValueError: If the spec has no ``layer`` list.
    """
    if not isinstance(layered.get("layer"), list):
        raise ValueError("expanded spec must contain a 'layer' list")
    return alt.LayerChart.from_dict(dict(layered), validate=validate)


def _require_converter() -> None:
    try:
        importlib.import_module("vl_convert")
    except ImportError as e:
        raise RuntimeError(
            "Saving PNG/SVG requires the 'vl-convert-python' package "
            "(pip install 'compositemark[image]')."
        ) from e


def save(
    chart: alt.TopLevelMixin,
    *,
    out_html: str | None = None,
    out_png: str | None = None,
    out_svg: str | None = None,
) -> None:
    """
    Save a chart to one or more files.

    Args:
        chart: Any top-level Altair chart.
        out_html: HTML output path (no extra dependency).
        out_png: PNG output path (requires vl-convert-python).
        out_svg: SVG output path (requires vl-convert-python).

    Raises:
        RuntimeError: If an image path is given and vl-convert-python is missing.
    """
    if out_html:
        chart.save(out_html, format="html")
    if out_png or out_svg:
        _require_converter()
        if out_png:
            chart.save(out_png, format="png")
        if out_svg:
            chart.save(out_svg, format="svg")
