"""
Conversion pipeline for query matching.

Turns strings, bytes, streams, containers and Kubernetes objects into the
canonical dict/list shape the query engines evaluate.

Usage:
    from querymatch.conversion import convert, register_converter

    convert('{"a": 1}')            # {'a': 1}
    convert(b'["x", "y"]')         # ['x', 'y']
    convert(io.BytesIO(b'{}'))     # {}

    register_converter(my_converter)  # tried before the built-ins
"""

# Models
from .models import Canonical, Converter, RawJSON

# Normalizer
from .normalize import normalize

# Built-ins
from .converters import (
    BUILTIN_CONVERTERS,
    buffer_converter,
    bytes_converter,
    mapping_converter,
    raw_json_converter,
    reader_converter,
    resource_instance_converter,
    sequence_converter,
    string_converter,
    unmarshal_json,
    unstructured_converter,
    unstructured_list_converter,
)

# Registry
from .registry import ConverterRegistry, convert, default_registry, register_converter

from ..errors import TypeNotSupportedError

__all__ = [
    # Models
    "Canonical",
    "Converter",
    "RawJSON",
    # Normalizer
    "normalize",
    # Built-ins
    "BUILTIN_CONVERTERS",
    "string_converter",
    "bytes_converter",
    "raw_json_converter",
    "buffer_converter",
    "reader_converter",
    "unstructured_converter",
    "resource_instance_converter",
    "unstructured_list_converter",
    "mapping_converter",
    "sequence_converter",
    "unmarshal_json",
    # Registry
    "ConverterRegistry",
    "default_registry",
    "register_converter",
    "convert",
    "TypeNotSupportedError",
]
