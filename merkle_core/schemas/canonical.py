"""
Schemas & Serialization
File: canonical.py

Purpose: Deterministic serialization of source items into the bytes
fed to the hash function for Merkle leaves.

CRITICAL: All outputs from this module MUST be deterministic across runs.
"""

import json
import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel

from .errors import CanonicalizationException

# Canonical JSON separators - no whitespace
CANONICAL_JSON_SEPARATORS: tuple[str, str] = (",", ":")


def ensure_utc(dt: datetime) -> datetime:
    """
    Ensure a datetime is timezone-aware and in UTC.

    Naive datetimes are treated as UTC, aware ones are converted.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_datetime_canonical(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 with Z suffix for UTC.

    Args:
        dt: A datetime object.

    Returns:
        ISO-8601 formatted string with Z suffix (e.g., "2026-01-27T21:35:00Z").
    """
    utc_dt = ensure_utc(dt)
    if utc_dt.microsecond == 0:
        return utc_dt.strftime("%Y-%m-%dT%H:%M:%SZ")
    return utc_dt.strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _validate_float(value: float, path: str = "") -> None:
    if not math.isfinite(value):
        raise CanonicalizationException(
            message=f"Non-finite float value encountered: {value}",
            details={"path": path, "value": str(value)},
        )


def canonicalize_value(value: Any, path: str = "", exclude_none: bool = True) -> Any:
    """
    Recursively canonicalize a value for deterministic JSON serialization.

    Args:
        value: Any Python value to canonicalize.
        path: Current path for error reporting.
        exclude_none: Drop None-valued dict entries and model fields.

    Returns:
        A JSON-serializable canonical representation.

    Raises:
        CanonicalizationException: If the value cannot be canonicalized
            (e.g., contains NaN/Infinity floats or an unsupported type).
    """
    if value is None:
        return None

    if isinstance(value, bool):
        # Must check bool before int since bool is subclass of int
        return value

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        _validate_float(value, path)
        return value

    if isinstance(value, str):
        return value

    if isinstance(value, datetime):
        return format_datetime_canonical(value)

    if isinstance(value, Enum):
        return canonicalize_value(value.value, path, exclude_none)

    if isinstance(value, BaseModel):
        dumped = value.model_dump(
            mode="json",
            by_alias=True,
            exclude_none=exclude_none,
        )
        return canonicalize_value(dumped, path, exclude_none)

    if isinstance(value, dict):
        # Keys are sorted during JSON serialization
        canonical: dict[str, Any] = {}
        for k, v in value.items():
            if not isinstance(k, str):
                raise CanonicalizationException(
                    message=f"Dictionary keys must be strings, got {type(k).__name__}",
                    details={"path": path, "key": repr(k)},
                )
            if v is None and exclude_none:
                continue
            canonical[k] = canonicalize_value(
                v, f"{path}.{k}" if path else k, exclude_none
            )
        return canonical

    if isinstance(value, (list, tuple)):
        return [
            canonicalize_value(item, f"{path}[{i}]", exclude_none)
            for i, item in enumerate(value)
        ]

    if isinstance(value, (bytes, bytearray)):
        return bytes(value).hex()

    raise CanonicalizationException(
        message=f"Cannot canonicalize value of type {type(value).__name__}",
        details={"path": path, "type": type(value).__name__},
    )


def dumps_canonical(obj: Any, exclude_none: bool = True) -> str:
    """
    Serialize an object to a canonical JSON string.

    The output has sorted keys, no whitespace, None fields excluded
    (unless exclude_none is False), datetimes as ISO-8601 with Z suffix,
    enums as their values and no NaN/Infinity floats.

    Raises:
        CanonicalizationException: If serialization fails.

    Example:
        >>> dumps_canonical({"b": 2, "a": 1})
        '{"a":1,"b":2}'
    """
    try:
        canonicalized = canonicalize_value(obj, exclude_none=exclude_none)
        return json.dumps(
            canonicalized,
            sort_keys=True,
            separators=CANONICAL_JSON_SEPARATORS,
            ensure_ascii=False,
            allow_nan=False,
        )
    except CanonicalizationException:
        raise
    except (TypeError, ValueError) as e:
        raise CanonicalizationException(
            message=f"Failed to serialize to canonical JSON: {e}",
            details={"type": type(obj).__name__, "error": str(e)},
        ) from e


def loads_canonical(json_str: str) -> Any:
    """Parse a canonical JSON string (datetimes stay strings)."""
    return json.loads(json_str)


# Leaf encoding tags: raw bytes and JSON text never share an encoding.
BYTES_ITEM_TAG = b"\x00"
JSON_ITEM_TAG = b"\x01"


def encode_item(item: Any) -> bytes:
    """
    Serialize a source item into the bytes hashed for its leaf.

    Rules:
        - bytes / bytearray: BYTES_ITEM_TAG + the raw bytes
        - anything else (str included): JSON_ITEM_TAG + canonical JSON,
          UTF-8 encoded, with None values kept

    Items of different JSON types never share an encoding, so 1, "1"
    and b"1" are three distinct leaves.

    Example:
        >>> encode_item("A")
        b'\\x01"A"'
        >>> encode_item({"id": 1, "note": None})
        b'\\x01{"id":1,"note":null}'
    """
    if isinstance(item, (bytes, bytearray)):
        return BYTES_ITEM_TAG + bytes(item)
    return JSON_ITEM_TAG + dumps_canonical(item, exclude_none=False).encode("utf-8")
