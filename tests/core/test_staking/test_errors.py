"""Tests for stakeledger/core/staking/errors.py: taxonomy and codes."""

import pytest

from stakeledger.core.staking import errors
from stakeledger.core.staking.errors import (
    StakingError,
    StakingInvariantError,
    StakingOverflowError,
    error_for_code,
)

EXPECTED_CODES = {
    "NotInitialized": 1,
    "Unauthorized": 2,
    "InsufficientBalance": 3,
    "InvalidAmount": 4,
    "InvalidLockPeriod": 5,
    "PositionNotFound": 6,
    "AlreadyStaked": 7,
    "NotStaked": 8,
    "LockPeriodNotExpired": 9,
    "EmergencyMode": 10,
    "InvalidPoolConfig": 11,
    "RewardCalculationFailed": 12,
}


class TestCodes:
    @pytest.mark.parametrize("name, code", sorted(EXPECTED_CODES.items()))
    def test_code(self, name, code):
        cls = getattr(errors, name)
        assert issubclass(cls, StakingError)
        assert cls.code == code
        assert error_for_code(code) is cls

    def test_unknown_code(self):
        with pytest.raises(ValueError):
            error_for_code(99)

    def test_default_message(self):
        assert str(errors.NotStaked()) == "NotStaked"


class TestFatalFaults:
    def test_not_recoverable(self):
        assert not issubclass(StakingOverflowError, StakingError)
        assert not issubclass(StakingInvariantError, StakingError)

    def test_invariant_error_carries_violations(self):
        e = StakingInvariantError(["inv_a", "inv_b"])
        assert e.violations == ["inv_a", "inv_b"]
        assert "inv_a, inv_b" in str(e)
