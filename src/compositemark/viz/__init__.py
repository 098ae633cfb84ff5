"""
compositemark.viz — Altair bridge for expanded specs.

## Responsibilities
- Load a layered spec produced by the compiler into an ``alt.LayerChart``.
- Save charts as HTML (always) or PNG/SVG (requires vl-convert-python).

## Import DAG discipline
- Depends on: altair (and stdlib). Nothing in compositemark.core or
  compositemark.errorbar imports this package.
"""

from .chart import save, to_chart

__all__ = ["to_chart", "save"]
