"""Checked integer arithmetic for the staking engine.

Every function is stateless and operates on plain Python ints. Python ints never
wrap, so the storage widths of the ledger are enforced explicitly:

- amounts, rates and totals are signed 128-bit,
- timestamps and durations are unsigned 64-bit,
- multipliers, period counts and basis points are unsigned 32-bit.

A result outside its width raises ``StakingOverflowError``. Nothing saturates
except the explicit ``sat_sub`` used for elapsed-time computations.

Division truncates toward zero (``div_trunc``), not toward -inf like ``//``.
"""

from __future__ import annotations

from .errors import StakingOverflowError

# Domain constants
REWARD_SCALE: int = 1_000_000_000  # 1e9 fixed-point scale of reward_rate
BPS_SCALE: int = 10_000
PERCENT_SCALE: int = 100

I128_MIN: int = -(1 << 127)
I128_MAX: int = (1 << 127) - 1
U64_MAX: int = (1 << 64) - 1
U32_MAX: int = (1 << 32) - 1


# -- Range checks ------------------------------------------------------------

def check_i128(value: int, what: str = "value") -> int:
    if value < I128_MIN or value > I128_MAX:
        raise StakingOverflowError(f"{what} overflows i128: {value}")
    return value


def check_u64(value: int, what: str = "value") -> int:
    if value < 0 or value > U64_MAX:
        raise StakingOverflowError(f"{what} outside u64: {value}")
    return value


def check_u32(value: int, what: str = "value") -> int:
    if value < 0 or value > U32_MAX:
        raise StakingOverflowError(f"{what} outside u32: {value}")
    return value


# -- Checked i128 operations -------------------------------------------------

def checked_add(a: int, b: int, what: str = "addition") -> int:
    return check_i128(a + b, what)


def checked_sub(a: int, b: int, what: str = "subtraction") -> int:
    return check_i128(a - b, what)


def checked_mul(a: int, b: int, what: str = "multiplication") -> int:
    return check_i128(a * b, what)


def div_trunc(a: int, b: int) -> int:
    """Integer division rounding toward zero.

    Raises ``StakingOverflowError`` on division by zero.
    """
    if b == 0:
        raise StakingOverflowError("division by zero")
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


# -- Time helpers ------------------------------------------------------------

def sat_sub(a: int, b: int) -> int:
    """Unsigned subtraction clamped at zero (``a - b`` or 0)."""
    return a - b if a > b else 0


# -- Basis points ------------------------------------------------------------

def apply_bps(amount: int, bps: int, what: str = "bps") -> int:
    """``amount * bps / 10000`` with the product checked against i128."""
    return div_trunc(checked_mul(amount, bps, what), BPS_SCALE)
