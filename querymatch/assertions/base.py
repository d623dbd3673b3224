"""
Matcher contract and assertion helpers.

Every matcher implements three methods: match() decides, and the two
message methods explain a failure of the positive or negated assertion.
expect() and eventually() turn matchers into pytest-friendly assertions.

Example:
    from querymatch.assertions import expect, jq

    expect('{"a": 1}').to(jq.match(".a == 1"))
    expect(data).not_to(jq.match('.status.phase == "%s"', "Failed"))
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable

from ..conversion.registry import ConverterRegistry, default_registry
from ..formatting import format_message, with_failure_path
from .models import MatchResult

logger = logging.getLogger(__name__)


class Matcher(ABC):
    """Base class for all matchers."""

    @abstractmethod
    def match(self, actual: Any) -> bool:
        """
        Evaluate the matcher.

        Returns:
            True if actual matches

        Raises:
            QueryMatchError: If the matcher could not be evaluated. An
                error is never the same as "did not match".
        """

    @abstractmethod
    def failure_message(self, actual: Any) -> str:
        """Message for a failed positive assertion."""

    @abstractmethod
    def negated_failure_message(self, actual: Any) -> str:
        """Message for a failed negated assertion."""


class QueryMatcher(Matcher):
    """
    Base for matchers that evaluate a query expression.

    Subclasses implement match(); messages name the expression and, when
    the matcher recorded one, the first mismatched key.
    """

    def __init__(self, expression: str, registry: ConverterRegistry | None = None):
        self.expression = expression
        self.registry = default_registry if registry is None else registry
        self.first_failure_path: list[Any] = []

    def failure_message(self, actual: Any) -> str:
        message = format_message(actual, "to match expression", self.expression)
        return with_failure_path(message, self.first_failure_path)

    def negated_failure_message(self, actual: Any) -> str:
        message = format_message(actual, "not to match expression", self.expression)
        return with_failure_path(message, self.first_failure_path)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.expression!r})"


# ─────────────────────────────────────────────────────────────────────────────
# Composition
# ─────────────────────────────────────────────────────────────────────────────

class Not(Matcher):
    """Inverts another matcher's outcome. Errors are not inverted."""

    def __init__(self, matcher: Matcher):
        self.matcher = matcher

    def match(self, actual: Any) -> bool:
        return not self.matcher.match(actual)

    def failure_message(self, actual: Any) -> str:
        return self.matcher.negated_failure_message(actual)

    def negated_failure_message(self, actual: Any) -> str:
        return self.matcher.failure_message(actual)


class Equal(Matcher):
    """Matches values equal to expected."""

    def __init__(self, expected: Any):
        self.expected = expected

    def match(self, actual: Any) -> bool:
        return actual == self.expected

    def failure_message(self, actual: Any) -> str:
        return format_message(actual, "to equal", self.expected)

    def negated_failure_message(self, actual: Any) -> str:
        return format_message(actual, "not to equal", self.expected)


class WithTransform(Matcher):
    """
    Applies a transform before delegating to another matcher.

    Pairs with extract() to assert on part of a document:

        expect(doc).to(WithTransform(jq.extract(".spec.replicas"), Equal(3)))
    """

    def __init__(self, transform: Callable[[Any], Any], matcher: Matcher):
        self.transform = transform
        self.matcher = matcher
        self.transformed: Any = None

    def match(self, actual: Any) -> bool:
        self.transformed = self.transform(actual)
        return self.matcher.match(self.transformed)

    def failure_message(self, actual: Any) -> str:
        return self.matcher.failure_message(self.transformed)

    def negated_failure_message(self, actual: Any) -> str:
        return self.matcher.negated_failure_message(self.transformed)


# ─────────────────────────────────────────────────────────────────────────────
# Assertions
# ─────────────────────────────────────────────────────────────────────────────

def evaluate(matcher: Matcher, actual: Any) -> MatchResult:
    """
    Evaluate a matcher and record the outcome instead of raising.

    Errors raised by the matcher end up in the result with ERROR status.
    """
    try:
        matched = matcher.match(actual)
    except Exception as e:
        return MatchResult.error_result(f"{matcher!r} could not be evaluated", e, actual)

    if matched:
        return MatchResult.passed_result(f"{matcher!r} matched", actual)
    return MatchResult.failed_result(matcher.failure_message(actual), actual)


class Expectation:
    """An assertion on a single value."""

    def __init__(self, actual: Any):
        self.actual = actual

    def to(self, matcher: Matcher) -> None:
        """
        Assert that the value matches.

        Raises:
            AssertionError: If the matcher does not match
            QueryMatchError: If the matcher could not be evaluated
        """
        if not matcher.match(self.actual):
            raise AssertionError(matcher.failure_message(self.actual))

    def not_to(self, matcher: Matcher) -> None:
        """Assert that the value does not match. Matcher errors still raise."""
        if matcher.match(self.actual):
            raise AssertionError(matcher.negated_failure_message(self.actual))

    should = to
    should_not = not_to


def expect(actual: Any) -> Expectation:
    """Start an assertion on a value."""
    return Expectation(actual)


class Eventually:
    """
    Polls a function until its result satisfies a matcher.

    Exceptions from the poll function or the matcher count as "not yet"
    and are retried until the timeout expires.
    """

    def __init__(self, poll: Callable[[], Any], timeout: float = 1.0, interval: float = 0.01):
        self.poll = poll
        self.timeout = timeout
        self.interval = interval

    def should(self, matcher: Matcher) -> Any:
        """Wait for a match; returns the matching value."""
        return self._wait(matcher, expect_match=True)

    def should_not(self, matcher: Matcher) -> Any:
        """Wait for a value that does not match; returns it."""
        return self._wait(matcher, expect_match=False)

    def _wait(self, matcher: Matcher, expect_match: bool) -> Any:
        deadline = time.monotonic() + self.timeout
        attempts = 0

        while True:
            attempts += 1
            try:
                actual = self.poll()
                if matcher.match(actual) == expect_match:
                    return actual
                if expect_match:
                    last_failure = matcher.failure_message(actual)
                else:
                    last_failure = matcher.negated_failure_message(actual)
            except Exception as e:
                last_failure = f"{type(e).__name__}: {e}"

            logger.debug(f"Attempt {attempts} did not satisfy {matcher!r}")

            if time.monotonic() >= deadline:
                raise AssertionError(
                    f"Timed out after {self.timeout:.3f}s ({attempts} attempts).\n{last_failure}"
                )
            time.sleep(self.interval)


def eventually(poll: Callable[[], Any], timeout: float = 1.0, interval: float = 0.01) -> Eventually:
    """Start a polling assertion on a zero-argument function."""
    return Eventually(poll, timeout=timeout, interval=interval)
