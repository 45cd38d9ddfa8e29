"""Reward engine: base, bonus and releasable rewards for one position.

``calculate_rewards`` is pure. It reads a position, the pool and a timestamp and
returns a ``RewardCalculation``; it never touches storage.

Base rewards accrue over the window since ``last_reward_time`` at
``reward_rate / 1e9`` units per staked unit per second. The bonus scales base
rewards by the position's multiplier over 100. Every multiplication is checked
against i128 and raises ``StakingOverflowError`` instead of wrapping.
"""

from __future__ import annotations

from .math import (
    PERCENT_SCALE,
    REWARD_SCALE,
    apply_bps,
    checked_add,
    checked_mul,
    div_trunc,
    sat_sub,
)
from .types import RewardCalculation, StakingPool, StakingPosition
from .vesting import vested_amount


def base_rewards(reward_rate: int, amount: int, elapsed: int) -> int:
    """``reward_rate * amount * elapsed / 1e9``."""
    per_second = checked_mul(reward_rate, amount, "base reward")
    return div_trunc(checked_mul(per_second, elapsed, "base reward time"), REWARD_SCALE)


def bonus_rewards(base: int, reward_multiplier: int) -> int:
    """Bonus over the 100% base: ``base * (multiplier - 100) / 100``."""
    return div_trunc(
        checked_mul(base, reward_multiplier - PERCENT_SCALE, "bonus reward"),
        PERCENT_SCALE,
    )


def calculate_rewards(position: StakingPosition, pool: StakingPool, now: int) -> RewardCalculation:
    elapsed_since_claim = sat_sub(now, position.last_reward_time)

    base = base_rewards(pool.reward_rate, position.amount, elapsed_since_claim)
    bonus = bonus_rewards(base, position.reward_multiplier)
    total = checked_add(base, bonus, "total reward")

    vesting_amount = vested_amount(total, position, now)

    return RewardCalculation(
        base_rewards=base,
        bonus_rewards=bonus,
        total_rewards=total,
        vesting_amount=vesting_amount,
        claimable_amount=vesting_amount,
    )


def early_withdrawal_fee(
    position: StakingPosition, pool: StakingPool, *, time_staked: int, emergency: bool,
) -> int:
    """Fee charged on principal when withdrawing inside the lock period.

    ``guards.guard_unstake`` rejects exactly this condition before the fee is
    computed, so on the unstake path this always returns 0.
    """
    if time_staked < position.lock_period and not emergency:
        return apply_bps(position.amount, pool.emergency_withdrawal_fee, "withdrawal fee")
    return 0
