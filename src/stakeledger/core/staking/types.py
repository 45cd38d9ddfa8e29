"""Data types for the staking ledger.

All persisted types are frozen dataclasses (immutable); transitions build new
values with ``dataclasses.replace()``.

Units/conventions:
- `reward_rate` is a per-second rate scaled by 1e9.
- `*_multiplier` values are percents (100 = 1.0x).
- `*_bps` / `*_percentage` / `*_fee` values are basis points (1/10_000).
- times and durations are integer seconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Any, Mapping, Union

Address = str


@unique
class EventTopic(Enum):
    """One member per published event topic."""
    POOL_INITIALIZED = "pool_initialized"
    STAKED = "staked"
    UNSTAKED = "unstaked"
    REWARDS_CLAIMED = "rewards_claimed"
    POOL_UPDATED = "pool_updated"


@dataclass(frozen=True)
class StakingPool:
    """Singleton pool configuration plus the aggregate principal."""

    token: Address
    total_staked: int = 0
    reward_rate: int = 0
    bonus_multiplier: int = 0
    min_stake: int = 0
    max_stake: int = 0
    emergency_withdrawal_fee: int = 500


@dataclass(frozen=True)
class VestingSchedule:
    total_periods: int
    current_period: int
    period_duration: int
    cliff_percentage: int


@dataclass(frozen=True)
class StakingPosition:
    """One open stake. At most one exists per user."""

    user: Address
    amount: int
    start_time: int
    last_reward_time: int
    reward_multiplier: int
    lock_period: int

    # Vesting (all zero when has_vesting is False)
    has_vesting: bool = False
    vesting_total_periods: int = 0
    vesting_current_period: int = 0
    vesting_period_duration: int = 0
    vesting_cliff_percentage: int = 0

    @property
    def schedule(self) -> VestingSchedule | None:
        if not self.has_vesting:
            return None
        return VestingSchedule(
            total_periods=self.vesting_total_periods,
            current_period=self.vesting_current_period,
            period_duration=self.vesting_period_duration,
            cliff_percentage=self.vesting_cliff_percentage,
        )


@dataclass(frozen=True)
class RewardCalculation:
    """Derived reward snapshot. Never persisted."""

    base_rewards: int
    bonus_rewards: int
    total_rewards: int
    vesting_amount: int
    claimable_amount: int


# -- Vesting option (stake input) --------------------------------------------

@dataclass(frozen=True)
class NoVesting:
    """Rewards are released in full as they accrue."""


@dataclass(frozen=True)
class Vesting:
    """Rewards are released over `periods` equal slices of the lock period."""

    periods: int


VestingOption = Union[NoVesting, Vesting]


@dataclass(frozen=True)
class ContractEvent:
    """A published event: topic, the address it concerns, and its payload."""

    topic: EventTopic
    principal: Address
    data: Mapping[str, Any] = field(default_factory=dict)
