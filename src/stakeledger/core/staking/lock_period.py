"""Lock-period policy: exact lock duration -> reward multiplier.

The lookup is an exact match against four durations. A value one second away
from a recognized duration is as invalid as any other value.
"""

from __future__ import annotations

from .errors import InvalidLockPeriod

DAY: int = 24 * 60 * 60

LOCK_30_DAYS: int = 30 * DAY
LOCK_90_DAYS: int = 90 * DAY
LOCK_180_DAYS: int = 180 * DAY
LOCK_365_DAYS: int = 365 * DAY

LOCK_PERIOD_MULTIPLIERS: dict[int, int] = {
    LOCK_30_DAYS: 100,   # 1x
    LOCK_90_DAYS: 150,   # 1.5x
    LOCK_180_DAYS: 200,  # 2x
    LOCK_365_DAYS: 300,  # 3x
}


def is_recognized(lock_period: int) -> bool:
    return lock_period in LOCK_PERIOD_MULTIPLIERS


def multiplier_for(lock_period: int) -> int:
    """Reward multiplier (percent) for *lock_period* seconds.

    Raises:
        InvalidLockPeriod: *lock_period* is not exactly one of the table keys.
    """
    multiplier = LOCK_PERIOD_MULTIPLIERS.get(lock_period)
    if multiplier is None:
        raise InvalidLockPeriod(f"unrecognized lock period: {lock_period}s")
    return multiplier
