"""
Built-in converters.

Each converter accepts exactly one input shape and raises
TypeNotSupportedError for anything else. BUILTIN_CONVERTERS lists them in
their default trial order; the order matters where shapes overlap (an
io.BytesIO is also readable, a str is also a Sequence).
"""

from __future__ import annotations

import io
import json
from collections.abc import Mapping, Sequence
from typing import Any

from kubernetes.dynamic.resource import ResourceInstance

from ..errors import DecodeError, DocumentShapeError, ReadError, TypeNotSupportedError
from ..k8s.unstructured import Unstructured, UnstructuredList
from .models import Canonical, Converter, RawJSON

_BYTES_TYPES = (bytes, bytearray, memoryview)


def unmarshal_json(data: bytes) -> Canonical:
    """
    Decode a JSON document whose root must be an object or an array.

    Raises:
        DocumentShapeError: If data is empty or the root is a scalar/null
        DecodeError: If data is not valid JSON
    """
    if len(data) == 0:
        raise DocumentShapeError("a valid JSON document is expected")

    try:
        result = json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodeError(f"unable to unmarshal result, {e}") from e

    if not isinstance(result, (dict, list)):
        raise DocumentShapeError("a JSON array or object is required")

    return result


# ─────────────────────────────────────────────────────────────────────────────
# Documents
# ─────────────────────────────────────────────────────────────────────────────

def string_converter(value: Any) -> Canonical:
    """Decode a str holding a JSON document."""
    if type(value) is not str:
        raise TypeNotSupportedError()
    return unmarshal_json(value.encode("utf-8"))


def bytes_converter(value: Any) -> Canonical:
    """Decode bytes, bytearray or memoryview holding a JSON document."""
    if type(value) not in _BYTES_TYPES:
        raise TypeNotSupportedError()
    return unmarshal_json(bytes(value))


def raw_json_converter(value: Any) -> Canonical:
    """Decode a RawJSON document."""
    if not isinstance(value, RawJSON):
        raise TypeNotSupportedError()
    return unmarshal_json(bytes(value))


def buffer_converter(value: Any) -> Canonical:
    """
    Decode everything written so far to an in-memory buffer.

    Uses getvalue(), so the buffer's read position is left alone and the
    same buffer can be converted again after more output is captured.
    """
    if isinstance(value, io.BytesIO):
        return unmarshal_json(value.getvalue())
    if isinstance(value, io.StringIO):
        return unmarshal_json(value.getvalue().encode("utf-8"))
    raise TypeNotSupportedError()


def reader_converter(value: Any) -> Canonical:
    """
    Read a file-like object to EOF and decode it.

    The stream is consumed; converting it a second time sees no data.
    """
    read = getattr(value, "read", None)
    if not callable(read):
        raise TypeNotSupportedError()

    try:
        data = read()
    except (OSError, ValueError) as e:
        raise ReadError(f"failed to read from reader: {e}") from e

    if isinstance(data, str):
        data = data.encode("utf-8")

    return unmarshal_json(bytes(data or b""))


# ─────────────────────────────────────────────────────────────────────────────
# Kubernetes objects
# ─────────────────────────────────────────────────────────────────────────────

def unstructured_converter(value: Any) -> Canonical:
    """Unwrap an Unstructured to its backing mapping."""
    if not isinstance(value, Unstructured):
        raise TypeNotSupportedError()
    return value.object


def resource_instance_converter(value: Any) -> Canonical:
    """Unwrap a dynamic-client ResourceInstance to a plain dict."""
    if not isinstance(value, ResourceInstance):
        raise TypeNotSupportedError()
    return value.to_dict()


def unstructured_list_converter(value: Any) -> Canonical:
    """Turn an UnstructuredList into a list of its items' mappings."""
    if not isinstance(value, UnstructuredList):
        raise TypeNotSupportedError()
    return [item.object for item in value.items]


# ─────────────────────────────────────────────────────────────────────────────
# Containers
# ─────────────────────────────────────────────────────────────────────────────

def mapping_converter(value: Any) -> Canonical:
    """Pass a mapping through unchanged."""
    if not isinstance(value, Mapping):
        raise TypeNotSupportedError()
    return value


def sequence_converter(value: Any) -> Canonical:
    """Pass a sequence through unchanged; text and bytes are not sequences here."""
    if not isinstance(value, Sequence) or isinstance(value, (str, *_BYTES_TYPES)):
        raise TypeNotSupportedError()
    return value


BUILTIN_CONVERTERS: tuple[Converter, ...] = (
    string_converter,
    bytes_converter,
    raw_json_converter,
    buffer_converter,
    reader_converter,
    unstructured_converter,
    resource_instance_converter,
    unstructured_list_converter,
    mapping_converter,
    sequence_converter,
)
