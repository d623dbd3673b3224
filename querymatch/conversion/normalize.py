"""
Numeric normalization for converted values.

Converters may hand back numbers the query engines cannot serialize:
NumPy fixed-width integers and single-precision floats, int/float
subclasses such as IntEnum, Decimal and Fraction. normalize() rewrites a
value tree so every numeric leaf is a plain int or float.
"""

from __future__ import annotations

import numbers
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any

from .models import Canonical

_NOT_SEQUENCES = (str, bytes, bytearray, memoryview)


def normalize(value: Any) -> Canonical:
    """
    Return a copy of value with every numeric leaf reduced to int or float.

    Mappings become dicts and other sequences (text and bytes excepted)
    become lists; keys are kept as they are. Non-numeric leaves pass
    through unchanged.
    """
    if isinstance(value, Mapping):
        return {key: normalize(item) for key, item in value.items()}
    if isinstance(value, Sequence) and not isinstance(value, _NOT_SEQUENCES):
        return [normalize(item) for item in value]
    return normalize_number(value)


def normalize_number(value: Any) -> Any:
    """Reduce a single scalar to int or float when it is numeric."""
    kind = type(value)

    if kind is bool or kind is int or kind is float:
        return value

    if isinstance(value, numbers.Integral):
        return _normalize_integer(value)

    if isinstance(value, Decimal):
        if value.is_finite() and value == value.to_integral_value():
            return _normalize_integer(int(value))
        return float(value)

    if isinstance(value, numbers.Real):
        return float(value)

    return value


def _normalize_integer(value: numbers.Integral) -> int:
    # int() is exact for every Integral, so values outside the native
    # range become arbitrary-precision ints instead of being truncated.
    return int(value)
