"""`staking`: pure-Python reward/vesting engine and transition guards.

- deterministic, integer-only arithmetic with explicit i128/u64/u32 widths,
- immutable records (frozen dataclasses),
- fail-closed guards and invariant checks.

Public API:
- `calculate_rewards(position, pool, now) -> RewardCalculation`
- `multiplier_for(lock_period) -> int`
- guards / invariants used by the lifecycle layer
"""

from .errors import (
    AlreadyStaked,
    EmergencyMode,
    InsufficientBalance,
    InvalidAmount,
    InvalidLockPeriod,
    InvalidPoolConfig,
    LockPeriodNotExpired,
    NotInitialized,
    NotStaked,
    PositionNotFound,
    RewardCalculationFailed,
    StakingError,
    StakingInvariantError,
    StakingOverflowError,
    Unauthorized,
    error_for_code,
)
from .lock_period import (
    LOCK_30_DAYS,
    LOCK_90_DAYS,
    LOCK_180_DAYS,
    LOCK_365_DAYS,
    is_recognized,
    multiplier_for,
)
from .rewards import calculate_rewards, early_withdrawal_fee
from .types import (
    Address,
    ContractEvent,
    EventTopic,
    NoVesting,
    RewardCalculation,
    StakingPool,
    StakingPosition,
    Vesting,
    VestingOption,
    VestingSchedule,
)

__all__ = [
    "calculate_rewards",
    "early_withdrawal_fee",
    "multiplier_for",
    "is_recognized",
    "LOCK_30_DAYS",
    "LOCK_90_DAYS",
    "LOCK_180_DAYS",
    "LOCK_365_DAYS",
    "Address",
    "ContractEvent",
    "EventTopic",
    "NoVesting",
    "RewardCalculation",
    "StakingPool",
    "StakingPosition",
    "Vesting",
    "VestingOption",
    "VestingSchedule",
    "StakingError",
    "NotInitialized",
    "Unauthorized",
    "InsufficientBalance",
    "InvalidAmount",
    "InvalidLockPeriod",
    "PositionNotFound",
    "AlreadyStaked",
    "NotStaked",
    "LockPeriodNotExpired",
    "EmergencyMode",
    "InvalidPoolConfig",
    "RewardCalculationFailed",
    "StakingOverflowError",
    "StakingInvariantError",
    "error_for_code",
]
