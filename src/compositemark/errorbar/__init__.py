"""
compositemark.errorbar — expansion of the ``errorbar`` composite mark.

## Responsibilities
- channels — drop encodings an error bar cannot draw.
- orient — resolve vertical/horizontal and isolate the continuous channel.
- params — synthesize bin/timeUnit/aggregate/calculate steps and groupby keys.
- layers — build the bar, line, ticks, whisker and point layers.
- normalize — run the passes in order and rebuild the outer spec.

## Examples
```python
from compositemark.errorbar import normalize_errorbar
layered = normalize_errorbar({
    "data": {"url": "data/barley.json"},
    "mark": {"type": "errorbar", "extent": "ci"},
    "encoding": {
        "x": {"field": "variety", "type": "ordinal"},
        "y": {"field": "yield", "type": "quantitative"},
    },
})
layered["transform"][-1]["aggregate"][1]["op"]  # 'ci0'
```
"""

from .normalize import normalize_errorbar, resolve_center_extent
from .params import DerivedFields, ErrorBarParams, derived_fields, errorbar_params

__all__ = [
    "normalize_errorbar",
    "resolve_center_extent",
    "errorbar_params",
    "derived_fields",
    "DerivedFields",
    "ErrorBarParams",
]
