"""
Value helpers for specifications that crossed a serialization boundary.

A JSON payload carries UUIDs and timestamps as strings; a leaf may state
``value_type`` so the factory restores the Python value before comparing.
"""

from __future__ import annotations

import datetime
import uuid as uuid_module
from decimal import Decimal
from typing import Any


def parse_list_value(value: Any) -> list[Any]:
    """
    Parse a value into a list.

    Supports Python collections and comma-separated strings
    (``"val1, val2"`` or ``"[val1, val2]"``).
    """
    if isinstance(value, list | tuple | set):
        return list(value)
    if isinstance(value, str):
        content = value.strip()
        if content.startswith("[") and content.endswith("]"):
            content = content[1:-1].strip()
        if not content:
            return []
        return [v.strip().strip("'").strip('"') for v in content.split(",")]
    return [value]


def _cast_datetime(value: Any) -> datetime.datetime:
    if isinstance(value, datetime.datetime):
        return value
    result = datetime.datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if result.tzinfo is not None:
        result = result.astimezone(datetime.timezone.utc)
    return result


def _cast_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value)


_CASTERS: dict[str, Any] = {
    "string": str,
    "str": str,
    "integer": int,
    "int": int,
    "float": float,
    "decimal": lambda v: v if isinstance(v, Decimal) else Decimal(str(v)),
    "boolean": _cast_boolean,
    "bool": _cast_boolean,
    "datetime": _cast_datetime,
    "uuid": lambda v: v if isinstance(v, uuid_module.UUID) else uuid_module.UUID(str(v)),
    "list": parse_list_value,
}


def cast_value(value: Any, value_type: str | None = None) -> Any:
    """
    Cast *value* to the Python type named by *value_type*.

    Lists are cast item by item. ``None`` stays ``None``. Unknown type
    names and values that fail to cast pass through unchanged.
    """
    if value is None or value_type is None:
        return value
    if isinstance(value, list) and value_type != "list":
        return [cast_value(item, value_type) for item in value]
    caster = _CASTERS.get(value_type.lower())
    if caster is None:
        return value
    try:
        return caster(value)
    except (ValueError, TypeError, ArithmeticError):
        return value
