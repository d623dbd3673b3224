"""
jq-based matchers.

match() builds a matcher from a jq expression that yields a boolean;
extract() builds a transform that returns the first value a jq
expression yields. Inputs go through the conversion pipeline first, so
JSON text, bytes, streams, dicts, lists and Kubernetes objects all work.

Example:
    expect('{"a": 1}').to(jq.match(".a == 1"))
    expect(pod).to(jq.match('.status.phase == "%s"', "Running"))
    expect(doc).to(WithTransform(jq.extract(".items | length"), Equal(2)))
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Callable

import jq

from ..conversion.registry import ConverterRegistry, default_registry
from ..errors import ExpressionError, QueryError
from .base import QueryMatcher

logger = logging.getLogger(__name__)

NO_RESULT = object()


@lru_cache(maxsize=256)
def compile_expression(expression: str) -> Any:
    """
    Compile a jq expression.

    Raises:
        ExpressionError: If the expression does not parse
    """
    try:
        return jq.compile(expression)
    except ValueError as e:
        raise ExpressionError(expression, str(e)) from e


def first_result(program: Any, data: Any) -> Any:
    """
    Run a compiled program and return its first output.

    Returns NO_RESULT when the program yields nothing. Only the first
    output is computed.

    Raises:
        QueryError: If the input cannot be serialized for jq, or evaluation
            fails before producing a first output
    """
    try:
        return next(iter(program.input_value(data)), NO_RESULT)
    except (ValueError, TypeError) as e:
        raise QueryError(str(e)) from e


class JQMatcher(QueryMatcher):
    """Matches when a jq expression's first output is true."""

    def match(self, actual: Any) -> bool:
        program = compile_expression(self.expression)
        data = self.registry.convert(actual)

        logger.debug(f"Evaluating jq expression {self.expression!r}")
        result = first_result(program, data)

        if result is NO_RESULT:
            return False
        if isinstance(result, bool):
            return result
        return False


def match(expression: str, *args: Any, registry: ConverterRegistry | None = None) -> JQMatcher:
    """
    Create a matcher for a boolean jq expression.

    Args:
        expression: jq expression, optionally with %-style placeholders
        *args: Values substituted into the placeholders
        registry: Converter registry to use (default: the process-wide one)
    """
    if args:
        expression = expression % args
    return JQMatcher(expression, registry=registry)


def extract(
    expression: str,
    registry: ConverterRegistry | None = None,
) -> Callable[[Any], Any]:
    """
    Create a transform returning the first output of a jq expression.

    The expression is compiled on every call, so an invalid one is
    reported even for empty input. Empty text or bytes then extract to None
    rather than failing, so "nothing to query" is distinguishable from
    invalid content. An expression that yields nothing also extracts to None.
    """
    registry = default_registry if registry is None else registry

    def transform(actual: Any) -> Any:
        program = compile_expression(expression)
        if isinstance(actual, (str, bytes, bytearray)) and len(actual) == 0:
            return None

        data = registry.convert(actual)
        result = first_result(program, data)

        return None if result is NO_RESULT else result

    transform.__qualname__ = f"extract({expression!r})"
    return transform
