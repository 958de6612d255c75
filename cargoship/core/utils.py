"""
core/utils.py - Shared helpers

Number rendering for reports and deterministic dictionaries for JSON output.
"""

from __future__ import annotations
import json
import math
from typing import Any, Dict


def format_quantity(value: float) -> str:
    """
    Render a quantity for report lines.

    Integral values print without a fractional part (3000.0 -> "3000");
    everything else uses the shortest round-trip form (4.5 -> "4.5").
    """
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)


def determinize_dict(data: Dict[str, Any], precision: int = 6) -> Dict[str, Any]:
    """
    Make a dictionary deterministic for JSON output.

    - Sorts all keys recursively
    - Rounds floats to consistent precision
    - Converts unknown types to strings
    """
    def _process(obj: Any) -> Any:
        if isinstance(obj, float):
            return round(obj, precision)
        elif isinstance(obj, dict):
            return {k: _process(v) for k, v in sorted(obj.items())}
        elif isinstance(obj, (list, tuple)):
            return [_process(item) for item in obj]
        elif isinstance(obj, (int, str, bool, type(None))):
            return obj
        else:
            return str(obj)

    processed = _process(data)
    return json.loads(json.dumps(processed, sort_keys=True))
