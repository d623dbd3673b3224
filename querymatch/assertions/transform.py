"""
Transforms for use with WithTransform.
"""

from __future__ import annotations

import json
from typing import Any, Callable

from ..conversion.models import RawJSON
from ..errors import ConversionError


def as_json() -> Callable[[Any], RawJSON]:
    """
    Create a transform that serializes a value to a RawJSON document.

    The result converts back through the pipeline, which makes it useful
    for comparing a Python object against jq expressions after a
    round-trip through JSON.
    """
    def transform(value: Any) -> RawJSON:
        try:
            return RawJSON(json.dumps(value).encode("utf-8"))
        except (TypeError, ValueError) as e:
            raise ConversionError(f"unable to marshal result, {e}") from e

    return transform
