"""
Key-value persistence for the staking ledger.

The lifecycle never touches a storage backend directly. It talks to a
`KeyValueStore` (get / set / has / remove over tuple keys), so it runs the same
against the in-memory store used in tests and against any host storage that
implements the protocol.

`OverlayStore` stages writes on top of another store and applies them in one
`commit()`; the contract uses it to make each operation all-or-nothing.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, Protocol, Tuple, runtime_checkable


Key = Tuple[Any, ...]

_MISSING = object()


@runtime_checkable
class KeyValueStore(Protocol):
    def get(self, key: Key, default: Any = None) -> Any: ...

    def set(self, key: Key, value: Any) -> None: ...

    def has(self, key: Key) -> bool: ...

    def remove(self, key: Key) -> None: ...


class InMemoryStore:
    """
    Dict-backed store.

    Values are stored as-is (frozen dataclasses are safe to share). Iteration
    helpers sort keys so callers get a deterministic order.
    """

    def __init__(self) -> None:
        self._data: Dict[Key, Any] = {}

    def get(self, key: Key, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: Key, value: Any) -> None:
        if not isinstance(key, tuple):
            raise TypeError(f"store keys must be tuples, got {type(key).__name__}")
        self._data[key] = value

    def has(self, key: Key) -> bool:
        return key in self._data

    def remove(self, key: Key) -> None:
        self._data.pop(key, None)

    def items(self, prefix: Key = ()) -> Iterator[Tuple[Key, Any]]:
        """Yield `(key, value)` pairs whose key starts with *prefix*, sorted by key."""
        n = len(prefix)
        for key in sorted(self._data, key=repr):
            if key[:n] == prefix:
                yield key, self._data[key]

    def __len__(self) -> int:
        return len(self._data)


class OverlayStore:
    """
    Write-staging view over a base store.

    Reads fall through to the base unless the key was written or removed in
    this overlay. Nothing reaches the base until `commit()`; `discard()` drops
    the staged writes.
    """

    def __init__(self, base: KeyValueStore) -> None:
        self._base = base
        self._staged: Dict[Key, Any] = {}  # value, or _MISSING for a removal

    def get(self, key: Key, default: Any = None) -> Any:
        if key in self._staged:
            val = self._staged[key]
            return default if val is _MISSING else val
        return self._base.get(key, default)

    def set(self, key: Key, value: Any) -> None:
        if not isinstance(key, tuple):
            raise TypeError(f"store keys must be tuples, got {type(key).__name__}")
        self._staged[key] = value

    def has(self, key: Key) -> bool:
        if key in self._staged:
            return self._staged[key] is not _MISSING
        return self._base.has(key)

    def remove(self, key: Key) -> None:
        self._staged[key] = _MISSING

    def items(self, prefix: Key = ()) -> Iterator[Tuple[Key, Any]]:
        merged: Dict[Key, Any] = dict(self._base.items(prefix))  # type: ignore[attr-defined]
        n = len(prefix)
        for key, val in self._staged.items():
            if key[:n] != prefix:
                continue
            if val is _MISSING:
                merged.pop(key, None)
            else:
                merged[key] = val
        for key in sorted(merged, key=repr):
            yield key, merged[key]

    @property
    def pending(self) -> int:
        return len(self._staged)

    def commit(self) -> None:
        for key, val in self._staged.items():
            if val is _MISSING:
                self._base.remove(key)
            else:
                self._base.set(key, val)
        self._staged.clear()

    def discard(self) -> None:
        self._staged.clear()
