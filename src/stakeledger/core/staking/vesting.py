"""Vesting calculator: releasable share of accrued rewards.

The schedule is a cliff followed by linear release over equal periods:

- no period completed: nothing beyond the linear share (which is also 0),
- some periods completed: ``max(cliff, linear share)``,
- all periods completed: everything.

`periods_completed` counts whole periods since the stake *started*, not since
the last claim. Reward accrual, in contrast, only covers the window since the
last claim (see ``rewards.calculate_rewards``).
"""

from __future__ import annotations

from .math import apply_bps, checked_mul, div_trunc, sat_sub
from .types import NoVesting, StakingPosition, Vesting, VestingOption

# Share of rewards released once the first period completes.
DEFAULT_CLIFF_BPS: int = 2500


def periods_completed(total_staked_time: int, period_duration: int) -> int:
    return div_trunc(total_staked_time, period_duration)


def vested_amount(total_rewards: int, position: StakingPosition, now: int) -> int:
    """Portion of *total_rewards* releasable at *now* for *position*."""
    if not position.has_vesting:
        return total_rewards

    completed = periods_completed(
        sat_sub(now, position.start_time), position.vesting_period_duration,
    )
    max_periods = position.vesting_total_periods
    if completed >= max_periods:
        return total_rewards

    if completed == 0:
        cliff_amount = 0
    else:
        cliff_amount = apply_bps(
            total_rewards, position.vesting_cliff_percentage, "vesting cliff",
        )

    linear = div_trunc(
        checked_mul(total_rewards, min(completed, max_periods), "vested amount"),
        max_periods,
    )
    return max(cliff_amount, linear)


def schedule_fields(option: VestingOption, lock_period: int) -> dict[str, bool | int]:
    """Position vesting fields for a stake-time vesting option.

    Callers validate `option` first (see ``guards.guard_vesting_option``).
    """
    if isinstance(option, NoVesting):
        return dict(
            has_vesting=False,
            vesting_total_periods=0,
            vesting_current_period=0,
            vesting_period_duration=0,
            vesting_cliff_percentage=0,
        )
    if isinstance(option, Vesting):
        return dict(
            has_vesting=True,
            vesting_total_periods=option.periods,
            vesting_current_period=0,
            vesting_period_duration=lock_period // option.periods,
            vesting_cliff_percentage=DEFAULT_CLIFF_BPS,
        )
    raise TypeError(f"unknown vesting option: {option!r}")
