"""
Position store: one staking position per user.

Persisted layout: ("position", user) -> StakingPosition
"""

from __future__ import annotations

from typing import Iterator

from ..core.staking.errors import AlreadyStaked, PositionNotFound
from ..core.staking.types import Address, StakingPosition
from .kv import KeyValueStore

POSITION_PREFIX = "position"


def position_key(user: Address) -> tuple[str, Address]:
    return (POSITION_PREFIX, user)


class PositionStore:
    """
    Keyed position table over a `KeyValueStore`.

    `create()` refuses to overwrite, which keeps the one-open-position-per-user
    invariant local to this class; `update()` refuses to create.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def has(self, user: Address) -> bool:
        return self._store.has(position_key(user))

    def find(self, user: Address) -> StakingPosition | None:
        return self._store.get(position_key(user))

    def get(self, user: Address) -> StakingPosition:
        position = self.find(user)
        if position is None:
            raise PositionNotFound(f"no position for {user}")
        return position

    def create(self, position: StakingPosition) -> None:
        if self.has(position.user):
            raise AlreadyStaked(f"{position.user} already has an open position")
        self._store.set(position_key(position.user), position)

    def update(self, position: StakingPosition) -> None:
        if not self.has(position.user):
            raise PositionNotFound(f"no position for {position.user}")
        self._store.set(position_key(position.user), position)

    def remove(self, user: Address) -> None:
        self._store.remove(position_key(user))

    def all(self) -> Iterator[StakingPosition]:
        """Iterate open positions (the backing store must support `items()`)."""
        for _key, position in self._store.items((POSITION_PREFIX,)):  # type: ignore[attr-defined]
            yield position
