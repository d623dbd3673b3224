"""
Canonical value model shared by converters and query engines.

A canonical value is what the query engines accept: dicts with string
keys, lists, and the scalars int, float, str, bool and None. Python's int
is both the machine integer and the arbitrary-precision integer, so the
numeric shapes reduce to int and float.
"""

from __future__ import annotations

from typing import Any, Callable, Union

Canonical = Union[dict[str, "Canonical"], list["Canonical"], int, float, str, bool, None]

# A converter returns a canonical value or raises. TypeNotSupportedError
# means "try the next converter"; anything else stops the pipeline.
Converter = Callable[[Any], Any]


class RawJSON(bytes):
    """
    Bytes that are already a serialized JSON document.

    Returned by as_json() so a value can be re-fed into the conversion
    pipeline without being mistaken for arbitrary binary data.
    """

    __slots__ = ()

    def __repr__(self) -> str:
        return f"RawJSON({bytes(self)!r})"
