"""
Converter registry and the conversion pipeline.

The registry is an ordered list of converters. convert() tries them in
order: the first success wins, TypeNotSupportedError moves on to the next
converter, and any other exception stops the pipeline and propagates.

Converters registered later are tried first, so callers can override the
built-ins for their own types:

    from querymatch.conversion import register_converter, TypeNotSupportedError

    def order_converter(value):
        if not isinstance(value, Order):
            raise TypeNotSupportedError()
        return {"id": value.id, "status": value.status}

    register_converter(order_converter)
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable
from typing import Any

from ..errors import TypeNotSupportedError, UnsupportedTypeError
from ..formatting import format_object
from .converters import BUILTIN_CONVERTERS
from .models import Canonical, Converter
from .normalize import normalize

logger = logging.getLogger(__name__)


class ConverterRegistry:
    """
    Ordered, thread-safe list of converters.

    Registrations are serialized on a lock and publish a new tuple, so a
    convert() call iterates one consistent snapshot taken when it starts
    and readers never wait on each other.

    Example:
        registry = ConverterRegistry(BUILTIN_CONVERTERS)
        registry.register(order_converter)
        data = registry.convert('{"a": 1}')
    """

    def __init__(self, converters: Iterable[Converter] = ()):
        self._lock = threading.Lock()
        self._converters: tuple[Converter, ...] = tuple(converters)

    @property
    def converters(self) -> tuple[Converter, ...]:
        """Snapshot of the converters in trial order."""
        with self._lock:
            return self._converters

    def register(self, converter: Converter) -> None:
        """
        Add a converter ahead of all previously registered ones.

        Registering the same converter twice is allowed; it is simply
        tried twice.
        """
        with self._lock:
            self._converters = (converter, *self._converters)
        logger.debug(f"Registered converter {_name_of(converter)}")

    def convert(self, value: Any) -> Canonical:
        """
        Convert value to a canonical, normalized value.

        Args:
            value: Any input a registered converter accepts

        Returns:
            A fresh canonical dict or list

        Raises:
            UnsupportedTypeError: If every converter rejected the value
            Exception: Whatever a converter raised other than
                TypeNotSupportedError, unchanged
        """
        for converter in self.converters:
            try:
                result = converter(value)
            except TypeNotSupportedError:
                continue
            return normalize(result)

        raise UnsupportedTypeError(f"unsupported type:\n{format_object(value, 1)}")

    def __len__(self) -> int:
        return len(self.converters)

    def __repr__(self) -> str:
        names = ", ".join(_name_of(c) for c in self.converters)
        return f"ConverterRegistry([{names}])"


def _name_of(converter: Converter) -> str:
    return getattr(converter, "__qualname__", None) or repr(converter)


# ─────────────────────────────────────────────────────────────────────────────
# Process-wide registry
# ─────────────────────────────────────────────────────────────────────────────

default_registry = ConverterRegistry(BUILTIN_CONVERTERS)


def register_converter(converter: Converter) -> None:
    """Register a converter with the default registry (tried before all others)."""
    default_registry.register(converter)


def convert(value: Any) -> Canonical:
    """Convert value with the default registry."""
    return default_registry.convert(value)
