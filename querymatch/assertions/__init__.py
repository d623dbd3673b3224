"""
Query matchers for test assertions.

Each engine module exposes match() (a boolean matcher) and, where it makes
sense, extract() (a transform returning the first selected value):

    - jq: jq expressions over converted values
    - jsonpath: JSONPath expressions over converted values
    - yq: jq-syntax expressions over YAML text

Usage:
    from querymatch.assertions import Equal, WithTransform, expect, jq

    expect('{"a": 1}').to(jq.match(".a == 1"))
    expect(doc).not_to(jq.match('.kind == "%s"', "Secret"))
    expect(doc).to(WithTransform(jq.extract(".items | length"), Equal(2)))

    # Poll until a condition holds
    eventually(lambda: read_status(), timeout=5).should(jq.match(".ready"))
"""

# Models
from .models import MatchResult, MatchStatus

# Matcher contract & helpers
from .base import (
    Equal,
    Eventually,
    Expectation,
    Matcher,
    Not,
    QueryMatcher,
    WithTransform,
    evaluate,
    eventually,
    expect,
)

# Engines
from . import jq, jsonpath, yq
from .jq import JQMatcher
from .jsonpath import JSONPathMatcher
from .yq import YQMatcher

# Transforms
from .transform import as_json

__all__ = [
    # Models
    "MatchResult",
    "MatchStatus",
    # Matcher contract & helpers
    "Matcher",
    "QueryMatcher",
    "Not",
    "Equal",
    "WithTransform",
    "Expectation",
    "Eventually",
    "evaluate",
    "expect",
    "eventually",
    # Engines
    "jq",
    "jsonpath",
    "yq",
    "JQMatcher",
    "JSONPathMatcher",
    "YQMatcher",
    # Transforms
    "as_json",
]
