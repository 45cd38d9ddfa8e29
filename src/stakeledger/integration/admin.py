"""
Admin control: one-time initialization and gated pool mutations.

None of these touch positions or the reward engine. `set_emergency_mode`
publishes no event, unlike `initialize` and `update_pool`.
"""

from __future__ import annotations

from dataclasses import replace

from ..core.staking.errors import StakingInvariantError
from ..core.staking.guards import (
    guard_admin,
    guard_initialized,
    guard_not_initialized,
    guard_pool_config,
    guard_reward_rate,
)
from ..core.staking.invariants import check_pool
from ..core.staking.math import check_i128, check_u32
from ..core.staking.types import Address, EventTopic, StakingPool
from ..logging import get_logger
from .collaborators import ContractEnv
from .unit_of_work import UnitOfWork

logger = get_logger("admin")

EMERGENCY_WITHDRAWAL_FEE_BPS = 500  # 5%


class AdminControl:
    def __init__(self, env: ContractEnv) -> None:
        self.env = env

    def _require_admin(self, uow: UnitOfWork, admin: Address) -> None:
        self.env.auth.require_auth(admin)
        guard_admin(uow.registry.get_admin(), admin)

    def initialize(
        self,
        uow: UnitOfWork,
        admin: Address,
        token: Address,
        reward_rate: int,
        bonus_multiplier: int,
        min_stake: int,
        max_stake: int,
    ) -> StakingPool:
        guard_not_initialized(uow.registry.has_admin())
        self.env.auth.require_auth(admin)
        guard_pool_config(reward_rate, min_stake, max_stake)

        pool = StakingPool(
            token=token,
            total_staked=0,
            reward_rate=check_i128(reward_rate, "reward_rate"),
            bonus_multiplier=check_u32(bonus_multiplier, "bonus_multiplier"),
            min_stake=check_i128(min_stake, "min_stake"),
            max_stake=check_i128(max_stake, "max_stake"),
            emergency_withdrawal_fee=EMERGENCY_WITHDRAWAL_FEE_BPS,
        )
        violations = check_pool(pool)
        if violations:
            raise StakingInvariantError(violations)

        uow.registry.set_admin(admin)
        uow.registry.set_pool(pool)
        uow.registry.set_emergency_mode(False)
        uow.emit(
            EventTopic.POOL_INITIALIZED, admin,
            admin=admin, reward_rate=reward_rate, bonus_multiplier=bonus_multiplier,
        )
        logger.info(
            "Initialized pool for token %s (admin=%s, rate=%d, stake=[%d, %d])",
            token, admin, reward_rate, min_stake, max_stake,
        )
        return pool

    def update_pool(
        self,
        uow: UnitOfWork,
        admin: Address,
        reward_rate: int | None = None,
        bonus_multiplier: int | None = None,
    ) -> StakingPool:
        self._require_admin(uow, admin)
        pool = guard_initialized(uow.registry.find_pool())

        if reward_rate is not None:
            guard_reward_rate(reward_rate)
            pool = replace(pool, reward_rate=check_i128(reward_rate, "reward_rate"))
        if bonus_multiplier is not None:
            pool = replace(pool, bonus_multiplier=check_u32(bonus_multiplier, "bonus_multiplier"))

        uow.registry.set_pool(pool)
        uow.emit(
            EventTopic.POOL_UPDATED, admin,
            admin=admin, reward_rate=pool.reward_rate,
            bonus_multiplier=pool.bonus_multiplier, timestamp=self.env.clock.now(),
        )
        logger.info(
            "Pool updated by %s (rate=%d, bonus_multiplier=%d)",
            admin, pool.reward_rate, pool.bonus_multiplier,
        )
        return pool

    def set_emergency_mode(self, uow: UnitOfWork, admin: Address, enabled: bool) -> None:
        self._require_admin(uow, admin)
        uow.registry.set_emergency_mode(enabled)
        logger.warning("Emergency mode %s by %s", "enabled" if enabled else "disabled", admin)
