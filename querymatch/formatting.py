"""
Rendering helpers for failure messages and diagnostics.

Values are rendered as "<type>: value", with containers cut off at the
configured depth and long renderings truncated.
"""

from __future__ import annotations

import reprlib
from typing import Any

from .config import get_config


def _repr_for(max_depth: int) -> reprlib.Repr:
    r = reprlib.Repr()
    r.maxlevel = max(max_depth, 1)
    r.maxdict = r.maxlist = r.maxtuple = r.maxset = r.maxfrozenset = r.maxdeque = 100
    r.maxarray = 100
    r.maxstring = r.maxother = r.maxlong = 1000
    return r


def _truncate(text: str, max_length: int) -> str:
    if max_length and len(text) > max_length:
        return text[: max(max_length - 3, 0)] + "..."
    return text


def format_value(value: Any) -> str:
    """Render a value without its type tag, truncated to the configured length."""
    config = get_config()
    if isinstance(value, str):
        formatted = value
    elif isinstance(value, (bytes, bytearray)):
        formatted = bytes(value).decode("utf-8", errors="replace")
    else:
        formatted = _repr_for(config.max_depth).repr(value)
    return _truncate(formatted, config.max_length)


def format_object(value: Any, indentation: int = 0) -> str:
    """
    Render a value as "<type>: value" at the given indentation level.

    Continuation lines of multi-line renderings share the indentation.
    """
    prefix = get_config().indent * indentation
    body = f"<{type(value).__name__}>: {format_value(value)}"
    return "\n".join(prefix + line for line in body.split("\n"))


def format_message(actual: Any, message: str, expected: Any) -> str:
    """
    Build a two-sided assertion message.

    Example:
        Expected
            <dict>: {'a': 1}
        to match expression
            <str>: .a == 2
    """
    return "\n".join([
        "Expected",
        format_object(actual, 1),
        message,
        format_object(expected, 1),
    ])


def format_failure_path(failure_path: list[Any]) -> str:
    """
    Render a mismatch path collected innermost-first.

    Integers render as [i], keys as "key" joined with dots.
    """
    parts: list[str] = []
    last = len(failure_path) - 1

    for i in range(last, -1, -1):
        segment = failure_path[i]
        if isinstance(segment, int) and not isinstance(segment, bool):
            parts.append(f"[{segment}]")
        else:
            if i != last:
                parts.append(".")
            parts.append(f'"{segment}"')

    return "".join(parts)


def with_failure_path(message: str, failure_path: list[Any] | None) -> str:
    """Append the first mismatched key to a message when a path is known."""
    if not failure_path:
        return message
    return f"{message}\n\nfirst mismatched key: {format_failure_path(failure_path)}"
