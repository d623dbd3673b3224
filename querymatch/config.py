"""
Formatting configuration for matcher failure messages.

Settings can be set programmatically with configure() or loaded from a
YAML file:

    format:
      max_length: 2000
      max_depth: 2
      indent: "  "
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatConfig:
    """
    Controls how values are rendered in failure messages.

    Attributes:
        max_length: Truncate rendered values longer than this (0 disables)
        max_depth: Nesting depth rendered for containers before eliding
        indent: Indentation unit used for nested message lines
    """
    max_length: int = 4000
    max_depth: int = 3
    indent: str = "    "

    def with_overrides(self, **overrides: Any) -> FormatConfig:
        return replace(self, **overrides)


_lock = threading.Lock()
_current = FormatConfig()


def get_config() -> FormatConfig:
    """Return the process-wide formatting configuration."""
    return _current


def configure(config: FormatConfig) -> None:
    """Replace the process-wide formatting configuration."""
    global _current
    with _lock:
        _current = config
    logger.debug(f"Formatting configured: {config}")


def load_config(path: str | Path) -> FormatConfig:
    """
    Load a FormatConfig from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        The parsed FormatConfig (defaults for keys that are absent)

    Raises:
        ConfigError: If the file is missing, not valid YAML, or has
            unknown keys or values of the wrong type
    """
    path = Path(path)

    if not path.exists():
        raise ConfigError(f"{path}: file not found")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML syntax: {e}") from e

    if data is None:
        return FormatConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"{path}: file must contain a YAML object, got {type(data).__name__}")

    return parse_config(data.get("format") or {}, source=str(path))


def parse_config(data: dict[str, Any], source: str = "config") -> FormatConfig:
    """Build a FormatConfig from a plain mapping, validating keys and types."""
    if not isinstance(data, dict):
        raise ConfigError(f"{source}: 'format' must be a mapping, got {type(data).__name__}")

    known = {f.name: f for f in fields(FormatConfig)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(
            f"{source}: unknown format option(s) {', '.join(unknown)} "
            f"(valid options are: {', '.join(sorted(known))})"
        )

    for key, value in data.items():
        expected = int if key in ("max_length", "max_depth") else str
        if isinstance(value, bool) or not isinstance(value, expected):
            raise ConfigError(
                f"{source}: format.{key} must be {expected.__name__}, got {type(value).__name__}"
            )
        if expected is int and value < 0:
            raise ConfigError(f"{source}: format.{key} must not be negative")

    return FormatConfig(**data)
