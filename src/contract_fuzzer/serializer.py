"""Depth-bounded JSON rendering for report diagnostics.

Captured requests, responses and exceptions are arbitrary in-memory values.
They can be very deep or refer to themselves, so rendering them with
``json.dumps`` may recurse forever. :func:`serialize` stops descending once
``max_depth`` is reached, which is enough to guarantee termination on cyclic
structures:

    >>> data = {}
    >>> data["self"] = data
    >>> serialize(data, 3)
    '{"self":{"self":{}}}'
"""

import dataclasses
import json
import math
from collections.abc import Mapping
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel


def serialize(value: Any, max_depth: int) -> str:
    """Render ``value`` as compact JSON, truncated at ``max_depth`` levels.

    Containers reached at ``max_depth`` render empty (``[]``/``{}``). Nulls
    inside arrays and mapping entries with a null key or value are dropped.
    A top-level None or a non-positive ``max_depth`` renders as ``""``.
    """
    rendered = _render(value, 0, max_depth)
    return rendered if rendered is not None else ""


class BoundedSerializer:
    """Holds a configured depth so callers can pass the serializer around."""

    def __init__(self, max_depth: int):
        self.max_depth = max_depth

    def serialize(self, value: Any) -> str:
        return serialize(value, self.max_depth)

    __call__ = serialize


def _render(value: Any, depth: int, max_depth: int) -> Optional[str]:
    if depth >= max_depth or value is None:
        return None

    value = _normalize(value)
    if value is None:
        return None

    if isinstance(value, Mapping):
        entries: List[str] = []
        for key, item in value.items():
            if key is None or item is None:
                continue
            rendered = _render(item, depth + 1, max_depth)
            if rendered is not None:
                entries.append(f"{json.dumps(_key_text(key), ensure_ascii=False)}:{rendered}")
        return "{" + ",".join(entries) + "}"

    if isinstance(value, (list, tuple)):
        items = [_render(item, depth + 1, max_depth) for item in value]
        return "[" + ",".join(item for item in items if item is not None) + "]"

    return json.dumps(value, ensure_ascii=False, allow_nan=False)


def _normalize(value: Any) -> Any:
    """Map non-JSON values onto dicts, lists and primitives, one level deep."""
    if isinstance(value, float) and not math.isfinite(value):
        # NaN and infinities have no JSON literal
        return str(value)
    if isinstance(value, (str, int, float, bool, Mapping, list, tuple)):
        return value
    if isinstance(value, BaseModel):
        return {name: getattr(value, name) for name in type(value).model_fields}
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (set, frozenset)):
        return sorted(value, key=repr)
    return str(value)


def _key_text(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, Enum):
        return str(key.value)
    return str(key)
