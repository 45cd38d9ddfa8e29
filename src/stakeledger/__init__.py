"""`stakeledger`: token-staking ledger with lock multipliers and vested rewards.

Users lock tokens for one of four fixed durations, accrue per-second rewards
scaled by a duration multiplier, and optionally receive rewards under a
cliff + linear vesting schedule. An admin configures the pool and can enable an
emergency mode that waives lock enforcement.

Layout:
- `stakeledger.core.staking`: pure reward/vesting math, guards, invariants.
- `stakeledger.state`: key-value persistence, pool registry, position store.
- `stakeledger.integration`: the contract facade and its collaborators.
"""

from .core.staking import (
    LOCK_30_DAYS,
    LOCK_90_DAYS,
    LOCK_180_DAYS,
    LOCK_365_DAYS,
    NoVesting,
    RewardCalculation,
    StakingError,
    StakingInvariantError,
    StakingOverflowError,
    StakingPool,
    StakingPosition,
    Vesting,
    calculate_rewards,
)
from .integration import StakingContract

__version__ = "0.1.0"

__all__ = [
    "LOCK_30_DAYS",
    "LOCK_90_DAYS",
    "LOCK_180_DAYS",
    "LOCK_365_DAYS",
    "NoVesting",
    "RewardCalculation",
    "StakingError",
    "StakingInvariantError",
    "StakingOverflowError",
    "StakingPool",
    "StakingPosition",
    "Vesting",
    "calculate_rewards",
    "StakingContract",
]
