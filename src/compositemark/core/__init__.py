"""
Core package aggregator for compositemark contracts (grammar, schemas, field helpers, errors).

## Contracts (single source of truth)
- Grammar — measure types, orientations, error-bar centers/extents, part vocabulary.
- Schemas — pydantic models for unit specs, channel definitions and transform steps.
- Field helpers — continuity checks and transformed field names (``vg_field``).
- Toggles — explicit Disabled / UseDefault / Override part states.
- Errors/Constants — fatal exception types and shared defaults.

## Notes
- Zero-IO policy: stdlib + pydantic, plus compositemark.log (stdlib logging) for the
  one side effect, a logged warning for unknown part names.
- Enum `.value` strings are the Vega-Lite spellings used on the wire.

## Downstream usage
- compositemark.errorbar — reads specs through `schema`, derives names with `fielddef`,
  and builds layers from `grammar` part names.
- compositemark.config — stores per-part defaults as `toggle` states.

## Examples
```python
from compositemark.core.grammar import ErrorBarPart, mark_name_of_part
mark_name_of_part(ErrorBarPart.TICKS)  # 'tick'

from compositemark.core.schema import FieldDef
from compositemark.core.fielddef import vg_field
vg_field(FieldDef(field="a", type="quantitative", bin=True))  # 'bin_maxbins_10_a'
```
"""
