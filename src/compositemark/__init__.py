"""
compositemark — expands composite error-bar marks into layered Vega-Lite specs.

## Responsibilities
- Rewrite a unit spec with ``mark: "errorbar"`` into pass-through outer fields, a
  ``transform`` pipeline (bin, timeUnit, aggregate, calculate) and a ``layer`` list
  of primitive marks (bar, line, tick, rule, point).
- Report non-fatal problems as warnings on the ``compositemark`` logger and raise
  OrientationError when no summarized axis can be found.

## Public API
- normalize — dispatch on the mark type through the composite-mark registry.
- normalize_errorbar — error-bar expansion.
- Config — center/extent/part defaults with env and TOML loaders.
- OrientationError, SpecError, CompositeMarkError — fatal errors.

## Import DAG discipline
- core depends on stdlib + pydantic, plus compositemark.log for the wrong-part warning.
- errorbar depends on core, config, common, log.
- viz (altair) and cli are leaves; nothing in the library imports them.

## Examples
```python
from compositemark import normalize
layered = normalize({
    "mark": "errorbar",
    "encoding": {
        "x": {"field": "a", "type": "ordinal"},
        "y": {"field": "b", "type": "quantitative", "aggregate": "errorbar"},
    },
})
[layer["mark"]["type"] for layer in layered["layer"]]  # ['rule', 'point']
```
"""

from . import registry
from .config import Config, ErrorBarConfig
from .core.constants import ERRORBAR
from .core.errors import CompositeMarkError, OrientationError, SpecError
from .errorbar import normalize_errorbar
from .registry import normalize

registry.add(ERRORBAR, normalize_errorbar)

__all__ = [
    "normalize",
    "normalize_errorbar",
    "Config",
    "ErrorBarConfig",
    "CompositeMarkError",
    "OrientationError",
    "SpecError",
]
