"""
Deterministic JSON encoding for ledger snapshots.

The same persisted state always encodes to the same bytes: keys are sorted,
there is no whitespace, and only integers, strings, booleans, null, lists and
string-keyed objects are accepted.
"""

from __future__ import annotations

import json
from typing import Any


CANONICAL_ENCODING_VERSION = 1


def _check_text(s: str) -> None:
    # Lone surrogates do not survive a UTF-8 round trip.
    if any(0xD800 <= ord(ch) <= 0xDFFF for ch in s):
        raise TypeError("surrogate code points are not allowed in canonical encoding")


def _check_value(value: Any) -> None:
    """Walk *value* and reject anything that has no single canonical spelling."""
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        _check_text(value)
    elif isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"object keys must be str, got {type(key).__name__}")
            _check_text(key)
            _check_value(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            _check_value(item)


def canonical_json_bytes(value: Any) -> bytes:
    """Encode *value* as sorted, compact UTF-8 JSON. Floats raise TypeError."""
    _check_value(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def canonical_json_loads(data: bytes) -> Any:
    """Decode canonical JSON bytes, rejecting floats on the way in."""
    value = json.loads(data.decode("utf-8"))
    _check_value(value)
    return value
