"""Invariant checkers for the staking ledger.

Each function returns True when the invariant holds. `check_pool()` and
`check_position()` return the list of violated invariant IDs (empty = all
pass); the lifecycle runs them on every post-state before committing.

`check_conservation()` is the ledger-wide law (pool total == sum of open
principal). It needs every position, so it is an audit check rather than a
per-transition one.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .lock_period import LOCK_PERIOD_MULTIPLIERS
from .math import BPS_SCALE, I128_MAX, U32_MAX, U64_MAX
from .types import StakingPool, StakingPosition


# -- Pool --------------------------------------------------------------------

def inv_total_staked_nonneg(p: StakingPool) -> bool:
    return 0 <= p.total_staked <= I128_MAX


def inv_reward_rate_nonneg(p: StakingPool) -> bool:
    return p.reward_rate >= 0


def inv_stake_bounds_ordered(p: StakingPool) -> bool:
    return 0 <= p.min_stake < p.max_stake


def inv_fee_bps_bounded(p: StakingPool) -> bool:
    return 0 <= p.emergency_withdrawal_fee <= BPS_SCALE


def inv_bonus_multiplier_u32(p: StakingPool) -> bool:
    return 0 <= p.bonus_multiplier <= U32_MAX


# -- Position ----------------------------------------------------------------

def inv_amount_positive(s: StakingPosition) -> bool:
    return 0 < s.amount <= I128_MAX


def inv_lock_period_recognized(s: StakingPosition) -> bool:
    return s.lock_period in LOCK_PERIOD_MULTIPLIERS


def inv_multiplier_matches_lock(s: StakingPosition) -> bool:
    return LOCK_PERIOD_MULTIPLIERS.get(s.lock_period) == s.reward_multiplier


def inv_times_ordered(s: StakingPosition) -> bool:
    return 0 <= s.start_time <= s.last_reward_time <= U64_MAX


def inv_vesting_zeroed_when_disabled(s: StakingPosition) -> bool:
    if s.has_vesting:
        return True
    return (
        s.vesting_total_periods == 0
        and s.vesting_current_period == 0
        and s.vesting_period_duration == 0
        and s.vesting_cliff_percentage == 0
    )


def inv_vesting_schedule_valid(s: StakingPosition) -> bool:
    if not s.has_vesting:
        return True
    return (
        0 < s.vesting_total_periods <= U32_MAX
        and s.vesting_period_duration > 0
        and 0 <= s.vesting_cliff_percentage <= BPS_SCALE
    )


def inv_vesting_counter_bounded(s: StakingPosition) -> bool:
    return 0 <= s.vesting_current_period <= s.vesting_total_periods


# ---------------------------------------------------------------------------
# Registries + checks
# ---------------------------------------------------------------------------

POOL_INVARIANTS: dict[str, Callable[[StakingPool], bool]] = {
    "inv_total_staked_nonneg": inv_total_staked_nonneg,
    "inv_reward_rate_nonneg": inv_reward_rate_nonneg,
    "inv_stake_bounds_ordered": inv_stake_bounds_ordered,
    "inv_fee_bps_bounded": inv_fee_bps_bounded,
    "inv_bonus_multiplier_u32": inv_bonus_multiplier_u32,
}

POSITION_INVARIANTS: dict[str, Callable[[StakingPosition], bool]] = {
    "inv_amount_positive": inv_amount_positive,
    "inv_lock_period_recognized": inv_lock_period_recognized,
    "inv_multiplier_matches_lock": inv_multiplier_matches_lock,
    "inv_times_ordered": inv_times_ordered,
    "inv_vesting_zeroed_when_disabled": inv_vesting_zeroed_when_disabled,
    "inv_vesting_schedule_valid": inv_vesting_schedule_valid,
    "inv_vesting_counter_bounded": inv_vesting_counter_bounded,
}


def check_pool(pool: StakingPool) -> list[str]:
    return [inv_id for inv_id, check_fn in POOL_INVARIANTS.items() if not check_fn(pool)]


def check_position(position: StakingPosition) -> list[str]:
    return [
        inv_id
        for inv_id, check_fn in POSITION_INVARIANTS.items()
        if not check_fn(position)
    ]


def check_conservation(pool: StakingPool, positions: Iterable[StakingPosition]) -> list[str]:
    """Return ``["inv_total_staked_conserved"]`` when the pool total drifts."""
    if pool.total_staked != sum(p.amount for p in positions):
        return ["inv_total_staked_conserved"]
    return []
