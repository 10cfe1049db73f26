"""
JSON helpers for SDK results.

Chain results carry values that the standard encoder rejects (bytes,
``HexBytes``, ``AttributeDict``, ``Decimal``) and integers wider than what a
JSON consumer holding IEEE doubles can represent. Everything is converted
to plain JSON types here; wide integers become decimal strings.
"""
import json
import math
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel

# Largest integer a double represents exactly
MAX_SAFE_INTEGER = 2**53 - 1


def to_json_safe(value: Any) -> Any:
    """Recursively convert a value into JSON-encodable types."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, float):
        # NaN and infinities have no JSON form
        return value if math.isfinite(value) else str(value)
    if isinstance(value, bool):
        return value
    if isinstance(value, Enum):
        return to_json_safe(value.value)
    if isinstance(value, int):
        if -MAX_SAFE_INTEGER <= value <= MAX_SAFE_INTEGER:
            return value
        return str(value)
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    if isinstance(value, BaseModel):
        return to_json_safe(value.model_dump())
    if isinstance(value, Mapping):
        return {str(k): to_json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [to_json_safe(v) for v in value]
    return str(value)


def safe_stringify(value: Any, indent: Optional[int] = None) -> str:
    """Serialize a value to JSON text without losing wide integers."""
    return json.dumps(to_json_safe(value), indent=indent, allow_nan=False)
