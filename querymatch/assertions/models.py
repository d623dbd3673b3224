"""
Match result models.

A MatchResult records the outcome of evaluating one matcher against one
value, including errors, so callers that must not raise (the CLI, report
writers) can still show what happened.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..formatting import format_value


class MatchStatus(str, Enum):
    """Outcome of a matcher evaluation."""
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"  # e.g., bad expression, unconvertible value


@dataclass
class MatchResult:
    """
    Result of evaluating a matcher.

    Attributes:
        status: Whether the matcher passed, failed, or errored
        message: Failure message, or a short description when passing
        actual: The value the matcher was evaluated against
        error: The exception raised during evaluation, if any
    """
    status: MatchStatus
    message: str
    actual: Any = None
    error: BaseException | None = None

    @property
    def passed(self) -> bool:
        return self.status == MatchStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == MatchStatus.FAILED

    def __str__(self) -> str:
        if self.status == MatchStatus.PASSED:
            return f"PASS: {self.message}"

        lines = [f"{self.status.value.upper()}: {self.message}"]
        if self.error is not None:
            lines.append(f"   {type(self.error).__name__}: {format_value(str(self.error))}")
        return "\n".join(lines)

    @classmethod
    def passed_result(cls, message: str, actual: Any = None) -> MatchResult:
        return cls(status=MatchStatus.PASSED, message=message, actual=actual)

    @classmethod
    def failed_result(cls, message: str, actual: Any = None) -> MatchResult:
        return cls(status=MatchStatus.FAILED, message=message, actual=actual)

    @classmethod
    def error_result(cls, message: str, error: BaseException, actual: Any = None) -> MatchResult:
        """Create an error result (the matcher couldn't be evaluated)."""
        return cls(status=MatchStatus.ERROR, message=message, actual=actual, error=error)
