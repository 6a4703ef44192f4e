"""Firestore REST value encoding.

Firestore's REST API represents every field as a typed value object:

    {"stringValue": "Sliding Window"}
    {"integerValue": "12"}             (64-bit ints travel as strings)
    {"doubleValue": 4.5}
    {"timestampValue": "2024-01-01T00:00:00Z"}
    {"arrayValue": {"values": [...]}}
    {"mapValue": {"fields": {...}}}
"""

from datetime import datetime, timezone
from typing import Any

from catalogue.catalog.models import parse_timestamp


def encode_value(value: Any) -> dict[str, Any]:
    """Encode a Python value as a Firestore typed value.

    Args:
        value: Value to encode.

    Returns:
        Typed value object.

    Raises:
        TypeError: If the value type is not supported.
    """
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        return {"timestampValue": format_timestamp(value)}
    if isinstance(value, (list, tuple)):
        if not value:
            return {"arrayValue": {}}
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    if isinstance(value, dict):
        return {"mapValue": {"fields": encode_fields(value)}}
    raise TypeError(f"Cannot encode {type(value).__name__} as a Firestore value")


def decode_value(typed: dict[str, Any]) -> Any:
    """Decode a Firestore typed value.

    Unknown value kinds (references, geo points, bytes) are returned as
    their raw payload.

    Args:
        typed: Typed value object.

    Returns:
        Python value.
    """
    if "nullValue" in typed:
        return None
    if "booleanValue" in typed:
        return bool(typed["booleanValue"])
    if "integerValue" in typed:
        return int(typed["integerValue"])
    if "doubleValue" in typed:
        return float(typed["doubleValue"])
    if "stringValue" in typed:
        return typed["stringValue"]
    if "timestampValue" in typed:
        return parse_timestamp(typed["timestampValue"])
    if "arrayValue" in typed:
        return [decode_value(item) for item in typed["arrayValue"].get("values", [])]
    if "mapValue" in typed:
        return decode_fields(typed["mapValue"].get("fields", {}))

    for raw in typed.values():
        return raw
    return None


def encode_fields(data: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Encode a document's fields."""
    return {str(key): encode_value(value) for key, value in data.items()}


def decode_fields(fields: dict[str, dict[str, Any]]) -> dict[str, Any]:
    """Decode a document's fields."""
    return {key: decode_value(value) for key, value in fields.items()}


def format_timestamp(value: datetime) -> str:
    """Format a datetime as an RFC 3339 UTC timestamp.

    Naive datetimes are taken as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def document_id(name: str) -> str:
    """Get the document id from a full resource name.

    Example:
        "projects/p/databases/(default)/documents/products/abc123" -> "abc123"
    """
    return name.rsplit("/", 1)[-1]
