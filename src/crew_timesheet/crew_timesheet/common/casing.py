"""Translation between backend row keys and view-model keys.

Rows coming from MySQL use underscore-separated column names
(``crew_name``, ``hours_regular``); JSON payloads served to the dashboard use
camel-case (``crewName``, ``hoursRegular``). Every payload crosses this
boundary through the helpers below so the mapping stays in one place.
"""
from __future__ import annotations

import re
from dataclasses import fields, is_dataclass
from datetime import date, datetime, time
from enum import Enum
from typing import Any, Mapping

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def to_snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, time):
        return value.strftime("%H:%M")
    if is_dataclass(value) and not isinstance(value, type):
        return to_view(value)
    if isinstance(value, Mapping):
        return camelize_keys(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


def camelize_keys(row: Mapping[str, Any]) -> dict:
    return {to_camel(str(k)): _plain(v) for k, v in row.items()}


def snake_keys(payload: Mapping[str, Any]) -> dict:
    return {to_snake(str(k)): v for k, v in payload.items()}


def to_view(obj: Any) -> dict:
    """Dataclass entity -> camel-case dict ready for ``jsonify``."""
    return {to_camel(f.name): _plain(getattr(obj, f.name)) for f in fields(obj)}
