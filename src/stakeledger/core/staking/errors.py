"""Exception types for the staking ledger.

Two unrelated families:

- ``StakingError`` and its subclasses are recoverable domain results. Each
  carries the numeric code of the contract's error enum. Raising one leaves the
  persisted state untouched.
- ``StakingOverflowError`` and ``StakingInvariantError`` are fatal faults. They
  abort the whole unit of work and are never caught by ``except StakingError``.
"""

from __future__ import annotations


class StakingError(Exception):
    """Base class for recoverable staking errors."""

    code: int = 0

    def __init__(self, message: str | None = None) -> None:
        self.message = message or type(self).__name__
        super().__init__(self.message)


class NotInitialized(StakingError):
    code = 1


class Unauthorized(StakingError):
    code = 2


class InsufficientBalance(StakingError):
    code = 3


class InvalidAmount(StakingError):
    code = 4


class InvalidLockPeriod(StakingError):
    code = 5


class PositionNotFound(StakingError):
    code = 6


class AlreadyStaked(StakingError):
    code = 7


class NotStaked(StakingError):
    code = 8


class LockPeriodNotExpired(StakingError):
    code = 9


class EmergencyMode(StakingError):
    code = 10


class InvalidPoolConfig(StakingError):
    code = 11


class RewardCalculationFailed(StakingError):
    code = 12


_BY_CODE: dict[int, type[StakingError]] = {
    cls.code: cls
    for cls in (
        NotInitialized,
        Unauthorized,
        InsufficientBalance,
        InvalidAmount,
        InvalidLockPeriod,
        PositionNotFound,
        AlreadyStaked,
        NotStaked,
        LockPeriodNotExpired,
        EmergencyMode,
        InvalidPoolConfig,
        RewardCalculationFailed,
    )
}


def error_for_code(code: int) -> type[StakingError]:
    """Return the error class for a numeric contract error code."""
    try:
        return _BY_CODE[code]
    except KeyError:
        raise ValueError(f"unknown staking error code: {code}") from None


class StakingOverflowError(Exception):
    """Raised when an accounting step leaves its integer domain."""


class StakingInvariantError(Exception):
    """Raised when a post-state violates one or more invariants."""

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(f"invariant violations: {', '.join(violations)}")
