"""
State management for the staking ledger
"""

from .kv import InMemoryStore, KeyValueStore, OverlayStore
from .positions import PositionStore
from .registry import PoolRegistry
from .snapshot import export_snapshot, import_snapshot

__all__ = [
    "InMemoryStore",
    "KeyValueStore",
    "OverlayStore",
    "PositionStore",
    "PoolRegistry",
    "export_snapshot",
    "import_snapshot",
]
