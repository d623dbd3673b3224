"""
Exception hierarchy for querymatch.

Conversion failures, expression failures and Kubernetes helper failures
all derive from QueryMatchError so callers can catch the whole family.
TypeNotSupportedError is the one converters must raise to say
"not my type"; the registry treats it as a signal to try the next
converter and never lets it reach the caller.
"""

from __future__ import annotations


class QueryMatchError(Exception):
    """Base class for all querymatch errors."""


# ─────────────────────────────────────────────────────────────────────────────
# Conversion
# ─────────────────────────────────────────────────────────────────────────────

class ConversionError(QueryMatchError):
    """A value could not be turned into a canonical value."""


class TypeNotSupportedError(ConversionError):
    """
    Raised by a converter that does not handle the given input type.

    Custom converters raise this (or a subclass) so the registry moves on
    to the next converter.
    """

    def __init__(self, message: str = "type not supported by this converter"):
        super().__init__(message)


class UnsupportedTypeError(ConversionError):
    """No registered converter accepted the value."""


class DecodeError(ConversionError):
    """Document content is malformed."""


class DocumentShapeError(ConversionError):
    """Document is empty or its root is not an object or array."""


class ReadError(ConversionError):
    """A stream failed while being read to completion."""


# ─────────────────────────────────────────────────────────────────────────────
# Queries
# ─────────────────────────────────────────────────────────────────────────────

class ExpressionError(QueryMatchError):
    """A query expression could not be parsed."""

    def __init__(self, expression: str, reason: str):
        self.expression = expression
        self.reason = reason
        super().__init__(f"unable to parse expression {expression}, {reason}")


class QueryError(QueryMatchError):
    """The query engine failed while evaluating an expression."""


# ─────────────────────────────────────────────────────────────────────────────
# Configuration & Kubernetes
# ─────────────────────────────────────────────────────────────────────────────

class ConfigError(QueryMatchError):
    """Configuration file or values are invalid."""


class SchemeError(QueryMatchError):
    """A typed object has no GroupVersionKind registered in the scheme."""


class ResourceError(QueryMatchError):
    """A Kubernetes read-modify-write cycle failed."""
