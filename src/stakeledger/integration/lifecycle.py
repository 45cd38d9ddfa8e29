"""
Position lifecycle: stake -> (claim)* -> unstake.

Per user there are two states, Unstaked (no position) and Active (position
stored). `stake` moves Unstaked -> Active, `unstake` moves Active -> Unstaked,
`claim_rewards` stays in Active.

Ordering inside every transition:
1. authorization and guards (typed StakingError, nothing touched),
2. all checked arithmetic and the post-state invariants,
3. the single external token transfer,
4. staged storage writes and events (committed by the caller's UnitOfWork).

A fault at any step therefore leaves no storage change, and a failed transfer
leaves no storage change and no published event.
"""

from __future__ import annotations

from dataclasses import replace

from ..core.staking.errors import NotStaked, StakingInvariantError
from ..core.staking.guards import guard_balance, guard_initialized, guard_stake, guard_unstake
from ..core.staking.invariants import check_pool, check_position
from ..core.staking.math import check_u64, checked_add, checked_sub
from ..core.staking.rewards import calculate_rewards, early_withdrawal_fee
from ..core.staking.types import (
    Address,
    EventTopic,
    NoVesting,
    RewardCalculation,
    StakingPool,
    StakingPosition,
    VestingOption,
)
from ..core.staking.vesting import schedule_fields
from ..logging import get_logger
from .collaborators import ContractEnv
from .unit_of_work import UnitOfWork

logger = get_logger("lifecycle")


def _check_post_state(pool: StakingPool, position: StakingPosition | None = None) -> None:
    violations = check_pool(pool)
    if position is not None:
        violations += check_position(position)
    if violations:
        raise StakingInvariantError(violations)


class StakeLifecycle:
    def __init__(self, env: ContractEnv) -> None:
        self.env = env

    def stake(
        self,
        uow: UnitOfWork,
        user: Address,
        amount: int,
        lock_period: int,
        vesting: VestingOption = NoVesting(),
    ) -> StakingPosition:
        self.env.auth.require_auth(user)

        pool = guard_initialized(uow.registry.find_pool())
        multiplier = guard_stake(
            pool,
            emergency=uow.registry.emergency_mode(),
            amount=amount,
            lock_period=lock_period,
            already_staked=uow.positions.has(user),
            vesting=vesting,
        )
        guard_balance(self.env.token.balance(user), amount)

        now = check_u64(self.env.clock.now(), "timestamp")
        position = StakingPosition(
            user=user,
            amount=amount,
            start_time=now,
            last_reward_time=now,
            reward_multiplier=multiplier,
            lock_period=lock_period,
            **schedule_fields(vesting, lock_period),
        )
        new_pool = replace(
            pool, total_staked=checked_add(pool.total_staked, amount, "total staked"),
        )
        _check_post_state(new_pool, position)

        self.env.token.transfer(user, self.env.address, amount)

        uow.registry.set_pool(new_pool)
        uow.positions.create(position)
        uow.emit(
            EventTopic.STAKED, user,
            user=user, amount=amount, lock_period=lock_period,
            multiplier=multiplier, timestamp=now,
        )
        logger.info(
            "Staked %d for %s (lock=%ds, multiplier=%d, vesting=%r)",
            amount, user, lock_period, multiplier, vesting,
        )
        return position

    def unstake(self, uow: UnitOfWork, user: Address) -> int:
        self.env.auth.require_auth(user)

        pool = guard_initialized(uow.registry.find_pool())
        position = uow.positions.find(user)
        if position is None:
            raise NotStaked(f"{user} has no open position")

        now = check_u64(self.env.clock.now(), "timestamp")
        emergency = uow.registry.emergency_mode()
        time_staked = guard_unstake(position, now=now, emergency=emergency)

        rewards = calculate_rewards(position, pool, now)
        fee = early_withdrawal_fee(position, pool, time_staked=time_staked, emergency=emergency)
        payout = checked_sub(
            checked_add(position.amount, rewards.claimable_amount, "total amount"),
            fee,
            "total amount after fee",
        )
        new_pool = replace(
            pool, total_staked=checked_sub(pool.total_staked, position.amount, "total staked"),
        )
        _check_post_state(new_pool)

        self.env.token.transfer(self.env.address, user, payout)

        uow.registry.set_pool(new_pool)
        uow.positions.remove(user)
        uow.emit(
            EventTopic.UNSTAKED, user,
            user=user, principal=position.amount,
            claimable_rewards=rewards.claimable_amount, fee=fee, timestamp=now,
        )
        logger.info(
            "Unstaked %d for %s (rewards=%d, fee=%d, emergency=%s)",
            position.amount, user, rewards.claimable_amount, fee, emergency,
        )
        return rewards.claimable_amount

    def claim_rewards(self, uow: UnitOfWork, user: Address) -> int:
        self.env.auth.require_auth(user)

        pool = guard_initialized(uow.registry.find_pool())
        position = uow.positions.find(user)
        if position is None:
            raise NotStaked(f"{user} has no open position")

        now = check_u64(self.env.clock.now(), "timestamp")
        rewards = calculate_rewards(position, pool, now)
        if rewards.claimable_amount == 0:
            logger.debug("Nothing claimable for %s", user)
            return 0

        # The period counter is informational; release math reads elapsed time only.
        current_period = position.vesting_current_period
        if position.has_vesting and current_period < position.vesting_total_periods:
            current_period += 1
        updated = replace(position, last_reward_time=now, vesting_current_period=current_period)
        _check_post_state(pool, updated)

        self.env.token.transfer(self.env.address, user, rewards.claimable_amount)

        uow.positions.update(updated)
        uow.emit(
            EventTopic.REWARDS_CLAIMED, user,
            user=user, base_rewards=rewards.base_rewards,
            bonus_rewards=rewards.bonus_rewards, timestamp=now,
        )
        logger.info("Claimed %d rewards for %s", rewards.claimable_amount, user)
        return rewards.claimable_amount

    # -- Read projections ------------------------------------------------------

    def pending_rewards(self, uow: UnitOfWork, user: Address) -> RewardCalculation:
        pool = guard_initialized(uow.registry.find_pool())
        position = uow.positions.find(user)
        if position is None:
            raise NotStaked(f"{user} has no open position")
        now = check_u64(self.env.clock.now(), "timestamp")
        return calculate_rewards(position, pool, now)
