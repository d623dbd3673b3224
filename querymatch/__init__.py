"""
querymatch - Query-expression matchers for test assertions

Assert on JSON/YAML documents and Kubernetes objects with jq, JSONPath or
yq expressions instead of field-by-field comparisons.

Subpackages:
    - conversion: Turn arbitrary inputs into canonical dict/list values
    - assertions: jq / JSONPath / yq matchers and assertion helpers
    - k8s: Kubernetes client helpers returning pollable functions

Usage:
    from querymatch import expect, jq, register_converter

    expect('{"a": 1}').to(jq.match(".a == 1"))

    # Teach the pipeline about your own types
    def order_converter(value):
        if not isinstance(value, Order):
            raise TypeNotSupportedError()
        return {"id": value.id, "status": value.status}

    register_converter(order_converter)
    expect(order).to(jq.match('.status == "%s"', "shipped"))
"""

__version__ = "0.1.0"

# Errors
from .errors import (
    ConfigError,
    ConversionError,
    DecodeError,
    DocumentShapeError,
    ExpressionError,
    QueryError,
    QueryMatchError,
    ReadError,
    ResourceError,
    SchemeError,
    TypeNotSupportedError,
    UnsupportedTypeError,
)

# Configuration
from .config import FormatConfig, configure, get_config, load_config

# Re-export conversion for convenience
from .conversion import (
    Canonical,
    Converter,
    ConverterRegistry,
    RawJSON,
    convert,
    default_registry,
    normalize,
    register_converter,
    unmarshal_json,
)

# Re-export assertions for convenience
from .assertions import (
    Equal,
    Matcher,
    MatchResult,
    MatchStatus,
    Not,
    WithTransform,
    as_json,
    evaluate,
    eventually,
    expect,
    jq,
    jsonpath,
    yq,
)

__all__ = [
    # Package info
    "__version__",
    # Errors
    "QueryMatchError",
    "ConversionError",
    "TypeNotSupportedError",
    "UnsupportedTypeError",
    "DecodeError",
    "DocumentShapeError",
    "ReadError",
    "ExpressionError",
    "QueryError",
    "ConfigError",
    "SchemeError",
    "ResourceError",
    # Configuration
    "FormatConfig",
    "configure",
    "get_config",
    "load_config",
    # Conversion
    "Canonical",
    "Converter",
    "RawJSON",
    "ConverterRegistry",
    "default_registry",
    "register_converter",
    "convert",
    "normalize",
    "unmarshal_json",
    # Assertions
    "Matcher",
    "MatchResult",
    "MatchStatus",
    "Not",
    "Equal",
    "WithTransform",
    "as_json",
    "evaluate",
    "expect",
    "eventually",
    "jq",
    "jsonpath",
    "yq",
]
