"""
JSONPath-based matchers.

Same entry points as the jq module, evaluated with jsonpath_ng's extended
grammar (filters, arithmetic, len). A JSONPath expression selects values
rather than computing a boolean, so match() passes only when the first
selected value is literally true:

    expect({"ready": True}).to(jsonpath.match("$.ready"))
    expect(doc).to(WithTransform(jsonpath.extract("$.items[0].id"), Equal(1)))
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from jsonpath_ng.exceptions import JSONPathError
from jsonpath_ng.ext import parse as parse_jsonpath

from ..conversion.registry import ConverterRegistry, default_registry
from ..errors import ExpressionError, QueryError
from .base import QueryMatcher

logger = logging.getLogger(__name__)


def parse_expression(expression: str) -> Any:
    """
    Parse a JSONPath expression.

    Raises:
        ExpressionError: If the expression is not valid JSONPath
    """
    try:
        return parse_jsonpath(expression)
    except JSONPathError as e:
        raise ExpressionError(expression, str(e)) from e


def find_values(path: Any, data: Any) -> list[Any]:
    """
    Evaluate a parsed JSONPath and return the matched values in order.

    Raises:
        QueryError: If evaluation fails (e.g. a filter compares
            incompatible types)
    """
    try:
        matches = path.find(data)
    except Exception as e:
        raise QueryError(f"failed to evaluate JSONPath {path}: {type(e).__name__}: {e}") from e

    return [m.value for m in matches]


class JSONPathMatcher(QueryMatcher):
    """Matches when the first value a JSONPath selects is true."""

    def match(self, actual: Any) -> bool:
        path = parse_expression(self.expression)
        data = self.registry.convert(actual)

        logger.debug(f"Evaluating JSONPath {self.expression!r}")
        values = find_values(path, data)

        if not values:
            return False
        return values[0] is True


def match(expression: str, *args: Any, registry: ConverterRegistry | None = None) -> JSONPathMatcher:
    """
    Create a matcher for a JSONPath expression selecting a boolean.

    Args:
        expression: JSONPath expression, optionally with %-style placeholders
        *args: Values substituted into the placeholders
        registry: Converter registry to use (default: the process-wide one)
    """
    if args:
        expression = expression % args
    return JSONPathMatcher(expression, registry=registry)


def extract(
    expression: str,
    all_matches: bool = False,
    registry: ConverterRegistry | None = None,
) -> Callable[[Any], Any]:
    """
    Create a transform returning the first value a JSONPath selects.

    With all_matches=True the transform returns every selected value as a
    list. Empty text or bytes extract to None once the expression has
    parsed.
    """
    registry = default_registry if registry is None else registry

    def transform(actual: Any) -> Any:
        path = parse_expression(expression)
        if isinstance(actual, (str, bytes, bytearray)) and len(actual) == 0:
            return None

        data = registry.convert(actual)
        values = find_values(path, data)

        if all_matches:
            return values
        return values[0] if values else None

    transform.__qualname__ = f"extract({expression!r})"
    return transform
