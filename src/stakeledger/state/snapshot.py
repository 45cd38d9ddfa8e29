"""
Canonical snapshots of persisted ledger state.

Snapshot JSON shape (version 1):
    {
      "version": 1,
      "admin": str | null,
      "pool": {...} | null,
      "emergency": bool,
      "positions": {user: {...}, ...}
    }
"""

from __future__ import annotations

from typing import Any, Dict

from ..core.staking.state import pool_from_dict, pool_to_dict, position_from_dict, position_to_dict
from .canonical import CANONICAL_ENCODING_VERSION, canonical_json_bytes, canonical_json_loads
from .kv import InMemoryStore
from .positions import PositionStore
from .registry import ADMIN_KEY, EMERGENCY_KEY, POOL_KEY, PoolRegistry

SNAPSHOT_VERSION = 1


def export_snapshot(store: InMemoryStore) -> bytes:
    registry = PoolRegistry(store)
    pool = registry.find_pool()
    positions: Dict[str, Any] = {
        p.user: position_to_dict(p) for p in PositionStore(store).all()
    }
    doc = {
        "version": SNAPSHOT_VERSION,
        "encoding": CANONICAL_ENCODING_VERSION,
        "admin": store.get(ADMIN_KEY),
        "pool": None if pool is None else pool_to_dict(pool),
        "emergency": registry.emergency_mode(),
        "positions": positions,
    }
    return canonical_json_bytes(doc)


def import_snapshot(data: bytes) -> InMemoryStore:
    """Rebuild an `InMemoryStore` from `export_snapshot()` output."""
    doc = canonical_json_loads(data)
    if not isinstance(doc, dict):
        raise TypeError("snapshot must be a JSON object")
    if doc.get("version") != SNAPSHOT_VERSION:
        raise ValueError(f"unsupported snapshot version: {doc.get('version')!r}")

    store = InMemoryStore()
    if doc["admin"] is not None:
        store.set(ADMIN_KEY, str(doc["admin"]))
    if doc["pool"] is not None:
        store.set(POOL_KEY, pool_from_dict(doc["pool"]))
    store.set(EMERGENCY_KEY, bool(doc["emergency"]))

    positions = PositionStore(store)
    for user, d in doc["positions"].items():
        position = position_from_dict(d)
        if position.user != user:
            raise ValueError(f"position key {user!r} does not match owner {position.user!r}")
        positions.create(position)
    return store
