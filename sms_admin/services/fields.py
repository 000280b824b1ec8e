"""Field access shared by the computation helpers.

Helpers accept pydantic models, plain objects and mappings. Mappings may use
either the Python (snake_case) or the wire (camelCase) spelling of a key.
"""

import math
from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic.alias_generators import to_camel

_MISSING = object()


def get_field(record: Any, name: str, default: Any = None) -> Any:
    """Read ``name`` from a record, trying the camelCase spelling second."""
    for key in (name, to_camel(name)):
        if isinstance(record, Mapping):
            value = record.get(key, _MISSING)
        else:
            value = getattr(record, key, _MISSING)
        if value is not _MISSING:
            return value
    return default


def plain_value(value: Any) -> Any:
    """Unwrap enum members to their value."""
    if isinstance(value, Enum):
        return value.value
    return value


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)
