"""Guard functions for the staking lifecycle.

One pure function per transition precondition. Each raises the typed
``StakingError`` for the first failed check, in the order the contract checks
them, and returns normally (sometimes with a derived value) when the
transition is allowed.
"""

from __future__ import annotations

from .errors import (
    AlreadyStaked,
    EmergencyMode,
    InsufficientBalance,
    InvalidAmount,
    InvalidLockPeriod,
    InvalidPoolConfig,
    LockPeriodNotExpired,
    NotInitialized,
    Unauthorized,
)
from .lock_period import multiplier_for
from .math import U32_MAX, sat_sub
from .types import Address, NoVesting, StakingPool, StakingPosition, Vesting, VestingOption


def guard_initialized(pool: StakingPool | None) -> StakingPool:
    if pool is None:
        raise NotInitialized("staking pool has not been initialized")
    return pool


def guard_not_initialized(has_admin: bool) -> None:
    # Re-initialization reports the NotInitialized code, as the contract does.
    if has_admin:
        raise NotInitialized("staking pool is already initialized")


def guard_pool_config(reward_rate: int, min_stake: int, max_stake: int) -> None:
    if reward_rate < 0:
        raise InvalidPoolConfig(f"reward_rate must be >= 0, got {reward_rate}")
    if min_stake < 0 or max_stake <= min_stake:
        raise InvalidPoolConfig(
            f"need 0 <= min_stake < max_stake, got min={min_stake} max={max_stake}"
        )


def guard_reward_rate(reward_rate: int) -> None:
    if reward_rate < 0:
        raise InvalidPoolConfig(f"reward_rate must be >= 0, got {reward_rate}")


def guard_admin(stored_admin: Address, admin: Address) -> None:
    if admin != stored_admin:
        raise Unauthorized(f"{admin} is not the pool admin")


def guard_vesting_option(option: VestingOption, lock_period: int) -> None:
    if isinstance(option, NoVesting):
        return
    if not isinstance(option, Vesting):
        raise TypeError(f"unknown vesting option: {option!r}")
    if option.periods <= 0 or option.periods > U32_MAX:
        raise InvalidLockPeriod(f"vesting periods out of range: {option.periods}")
    if lock_period // option.periods == 0:
        raise InvalidLockPeriod(
            f"{option.periods} vesting periods do not fit a {lock_period}s lock"
        )


def guard_stake(
    pool: StakingPool,
    *,
    emergency: bool,
    amount: int,
    lock_period: int,
    already_staked: bool,
    vesting: VestingOption,
) -> int:
    """Check a stake request. Returns the position's reward multiplier."""
    if emergency:
        raise EmergencyMode("staking is disabled in emergency mode")
    # min_stake may be 0; a position still needs a positive principal.
    if amount <= 0:
        raise InvalidAmount(f"amount must be positive, got {amount}")
    if amount < pool.min_stake or amount > pool.max_stake:
        raise InvalidAmount(
            f"amount {amount} outside [{pool.min_stake}, {pool.max_stake}]"
        )
    multiplier = multiplier_for(lock_period)
    if already_staked:
        raise AlreadyStaked("user already has an open position")
    guard_vesting_option(vesting, lock_period)
    return multiplier


def guard_balance(balance: int, amount: int) -> None:
    if balance < amount:
        raise InsufficientBalance(f"balance {balance} < amount {amount}")


def guard_unstake(position: StakingPosition, *, now: int, emergency: bool) -> int:
    """Check lock expiry. Returns the time staked in seconds."""
    time_staked = sat_sub(now, position.start_time)
    if time_staked < position.lock_period and not emergency:
        raise LockPeriodNotExpired(
            f"{position.lock_period - time_staked}s of lock period remaining"
        )
    return time_staked
