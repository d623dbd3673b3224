"""
YAML matchers.

The input is YAML text (str or bytes), possibly several documents. Each
document is decoded with PyYAML and evaluated with a jq-syntax expression;
the expression must yield exactly one value that reads as a boolean.

Example:
    manifest = '''
    kind: Deployment
    spec:
      replicas: 3
    '''
    expect(manifest).to(yq.match(".spec.replicas == 3"))
"""

from __future__ import annotations

import logging
from typing import Any

import yaml

from ..conversion.normalize import normalize
from ..errors import DecodeError, QueryError, UnsupportedTypeError
from ..formatting import format_object
from .base import QueryMatcher
from .jq import NO_RESULT, compile_expression, first_result

logger = logging.getLogger(__name__)

_TRUE_STRINGS = {"1", "t", "true"}
_FALSE_STRINGS = {"0", "f", "false"}


class _YAMLLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as the strings they were written as."""


_YAMLLoader.add_constructor("tag:yaml.org,2002:timestamp", yaml.SafeLoader.construct_yaml_str)


def load_documents(actual: Any) -> list[Any]:
    """
    Decode every YAML document in a str or bytes value.

    Raises:
        UnsupportedTypeError: If actual is not text or bytes
        DecodeError: If the YAML is malformed
    """
    if isinstance(actual, (bytes, bytearray)):
        actual = bytes(actual).decode("utf-8")
    if not isinstance(actual, str):
        raise UnsupportedTypeError(f"unsupported type:\n{format_object(actual, 1)}")

    try:
        return [normalize(doc) for doc in yaml.load_all(actual, Loader=_YAMLLoader)]
    except yaml.YAMLError as e:
        raise DecodeError(f"failure reading document: {e}") from e


def parse_bool(value: Any) -> bool:
    """Read a query result as a boolean the way YAML tooling prints it."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, int)):
        text = str(value).strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise QueryError(f"failure parsing result: {value!r} is not a boolean")


class YQMatcher(QueryMatcher):
    """Matches when a jq-syntax expression over YAML documents yields true."""

    def match(self, actual: Any) -> bool:
        program = compile_expression(self.expression)
        documents = load_documents(actual)

        logger.debug(f"Evaluating yq expression {self.expression!r} over {len(documents)} document(s)")
        results = []
        for document in documents:
            result = first_result(program, document)
            if result is not NO_RESULT:
                results.append(result)

        if not results:
            return False
        if len(results) != 1:
            raise QueryError(f"expected a single result, got {len(results)}")

        return parse_bool(results[0])


def match(expression: str, *args: Any) -> YQMatcher:
    """
    Create a matcher for a boolean expression over YAML text.

    Args:
        expression: jq-syntax expression, optionally with %-style placeholders
        *args: Values substituted into the placeholders
    """
    if args:
        expression = expression % args
    return YQMatcher(expression)
