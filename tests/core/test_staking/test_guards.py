"""Tests for stakeledger/core/staking/guards.py: transition preconditions."""

import pytest

from stakeledger.core.staking.errors import (
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
from stakeledger.core.staking.guards import (
    guard_admin,
    guard_balance,
    guard_initialized,
    guard_not_initialized,
    guard_pool_config,
    guard_stake,
    guard_unstake,
    guard_vesting_option,
)
from stakeledger.core.staking.lock_period import DAY, LOCK_30_DAYS, LOCK_180_DAYS
from stakeledger.core.staking.math import U32_MAX
from stakeledger.core.staking.types import NoVesting, StakingPool, StakingPosition, Vesting

POOL = StakingPool(token="tok", reward_rate=1, min_stake=100, max_stake=1_000)


def _stake(**overrides):
    kwargs = dict(
        emergency=False, amount=500, lock_period=LOCK_30_DAYS,
        already_staked=False, vesting=NoVesting(),
    )
    kwargs.update(overrides)
    return guard_stake(POOL, **kwargs)


class TestInitialization:
    def test_missing_pool(self):
        with pytest.raises(NotInitialized):
            guard_initialized(None)

    def test_present_pool(self):
        assert guard_initialized(POOL) is POOL

    def test_reinitialize_reports_not_initialized_code(self):
        with pytest.raises(NotInitialized) as exc:
            guard_not_initialized(True)
        assert exc.value.code == 1

    def test_fresh(self):
        guard_not_initialized(False)


class TestPoolConfig:
    def test_valid(self):
        guard_pool_config(0, 0, 1)

    @pytest.mark.parametrize(
        "rate, lo, hi",
        [(-1, 0, 10), (1, -1, 10), (1, 10, 10), (1, 11, 10)],
    )
    def test_invalid(self, rate, lo, hi):
        with pytest.raises(InvalidPoolConfig):
            guard_pool_config(rate, lo, hi)


class TestAdmin:
    def test_match(self):
        guard_admin("root", "root")

    def test_mismatch(self):
        with pytest.raises(Unauthorized):
            guard_admin("root", "mallory")


class TestStake:
    def test_ok_returns_multiplier(self):
        assert _stake() == 100
        assert _stake(lock_period=LOCK_180_DAYS) == 200

    def test_bounds_inclusive(self):
        assert _stake(amount=100) == 100
        assert _stake(amount=1_000) == 100

    @pytest.mark.parametrize("amount", [99, 1_001, 0, -5])
    def test_amount_out_of_bounds(self, amount):
        with pytest.raises(InvalidAmount):
            _stake(amount=amount)

    def test_zero_amount_with_zero_min_stake(self):
        pool = StakingPool(token="tok", reward_rate=1, min_stake=0, max_stake=1_000)
        with pytest.raises(InvalidAmount):
            guard_stake(
                pool, emergency=False, amount=0, lock_period=LOCK_30_DAYS,
                already_staked=False, vesting=NoVesting(),
            )

    def test_emergency_checked_first(self):
        with pytest.raises(EmergencyMode):
            _stake(emergency=True, amount=1, lock_period=45 * DAY, already_staked=True)

    def test_amount_before_lock_period(self):
        with pytest.raises(InvalidAmount):
            _stake(amount=1, lock_period=45 * DAY)

    def test_lock_period_before_already_staked(self):
        with pytest.raises(InvalidLockPeriod):
            _stake(lock_period=45 * DAY, already_staked=True)

    def test_already_staked(self):
        with pytest.raises(AlreadyStaked):
            _stake(already_staked=True)


class TestVestingOption:
    def test_no_vesting(self):
        guard_vesting_option(NoVesting(), LOCK_30_DAYS)

    def test_valid(self):
        guard_vesting_option(Vesting(12), LOCK_30_DAYS)

    @pytest.mark.parametrize("periods", [0, -1, U32_MAX + 1])
    def test_out_of_range(self, periods):
        with pytest.raises(InvalidLockPeriod):
            guard_vesting_option(Vesting(periods), LOCK_30_DAYS)

    def test_period_shorter_than_a_second(self):
        with pytest.raises(InvalidLockPeriod):
            guard_vesting_option(Vesting(LOCK_30_DAYS + 1), LOCK_30_DAYS)


class TestBalance:
    def test_enough(self):
        guard_balance(100, 100)

    def test_short(self):
        with pytest.raises(InsufficientBalance):
            guard_balance(99, 100)


class TestUnstake:
    POSITION = StakingPosition(
        user="alice", amount=500, start_time=1_000, last_reward_time=1_000,
        reward_multiplier=100, lock_period=LOCK_30_DAYS,
    )

    def test_locked(self):
        with pytest.raises(LockPeriodNotExpired):
            guard_unstake(self.POSITION, now=1_000 + LOCK_30_DAYS - 1, emergency=False)

    def test_expired_exactly(self):
        assert guard_unstake(self.POSITION, now=1_000 + LOCK_30_DAYS, emergency=False) == LOCK_30_DAYS

    def test_emergency_waives_lock(self):
        assert guard_unstake(self.POSITION, now=1_010, emergency=True) == 10

    def test_clock_before_start_saturates(self):
        assert guard_unstake(self.POSITION, now=0, emergency=True) == 0
