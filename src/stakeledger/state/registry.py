"""
Pool registry: the singleton admin, pool and emergency flag.

Persisted layout:
    ("admin",)     -> Address
    ("pool",)      -> StakingPool
    ("emergency",) -> bool
"""

from __future__ import annotations

from ..core.staking.errors import NotInitialized
from ..core.staking.types import Address, StakingPool
from .kv import KeyValueStore

ADMIN_KEY = ("admin",)
POOL_KEY = ("pool",)
EMERGENCY_KEY = ("emergency",)


class PoolRegistry:
    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    # Admin

    def has_admin(self) -> bool:
        return self._store.has(ADMIN_KEY)

    def get_admin(self) -> Address:
        admin = self._store.get(ADMIN_KEY)
        if admin is None:
            raise NotInitialized("admin has not been set")
        return admin

    def set_admin(self, admin: Address) -> None:
        self._store.set(ADMIN_KEY, admin)

    # Pool

    def find_pool(self) -> StakingPool | None:
        return self._store.get(POOL_KEY)

    def get_pool(self) -> StakingPool:
        pool = self.find_pool()
        if pool is None:
            raise NotInitialized("staking pool has not been initialized")
        return pool

    def set_pool(self, pool: StakingPool) -> None:
        self._store.set(POOL_KEY, pool)

    # Emergency flag

    def emergency_mode(self) -> bool:
        return bool(self._store.get(EMERGENCY_KEY, False))

    def set_emergency_mode(self, enabled: bool) -> None:
        self._store.set(EMERGENCY_KEY, bool(enabled))
