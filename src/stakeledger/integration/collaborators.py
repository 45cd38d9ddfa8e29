"""
External collaborators of the staking contract and in-memory implementations.

The contract only sees the protocols below. The in-memory classes are the
reference behavior for each boundary and what the test-suite runs against.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Protocol

from ..core.staking.errors import InsufficientBalance, Unauthorized
from ..core.staking.types import Address, ContractEvent, EventTopic


class TokenLedger(Protocol):
    def balance(self, address: Address) -> int: ...

    def transfer(self, src: Address, dst: Address, amount: int) -> None:
        """Move *amount* from *src* to *dst*. Raises InsufficientBalance."""


class AuthProvider(Protocol):
    def require_auth(self, principal: Address) -> None:
        """Raise Unauthorized unless the current caller is *principal*."""


class Clock(Protocol):
    def now(self) -> int: ...


class EventSink(Protocol):
    def publish(self, event: ContractEvent) -> None: ...


@dataclass(frozen=True)
class ContractEnv:
    """Everything a contract call reaches outside its own storage."""

    address: Address
    token: TokenLedger
    auth: AuthProvider
    clock: Clock
    events: EventSink


# ---------------------------------------------------------------------------
# In-memory implementations
# ---------------------------------------------------------------------------


class InMemoryTokenLedger:
    """
    Single-token balance table: address -> amount.

    Zero balances are dropped to keep the table sparse.
    """

    def __init__(self, balances: Optional[Dict[Address, int]] = None) -> None:
        self._balances: Dict[Address, int] = {}
        for address, amount in (balances or {}).items():
            self.mint(address, amount)

    def balance(self, address: Address) -> int:
        return self._balances.get(address, 0)

    def mint(self, address: Address, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"mint amount must be non-negative: {amount}")
        self._set(address, self.balance(address) + amount)

    def transfer(self, src: Address, dst: Address, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"transfer amount must be non-negative: {amount}")
        current = self.balance(src)
        if current < amount:
            raise InsufficientBalance(f"{src} has {current}, needs {amount}")
        self._set(src, current - amount)
        self._set(dst, self.balance(dst) + amount)

    def total_supply(self) -> int:
        return sum(self._balances.values())

    def _set(self, address: Address, amount: int) -> None:
        if amount == 0:
            self._balances.pop(address, None)
        else:
            self._balances[address] = amount


class CallerAuth:
    """
    Authorization by comparing against the current caller.

    The host (or a test) sets the caller for the duration of a call with
    `as_caller()`. With no caller set every `require_auth` fails.
    """

    def __init__(self, caller: Optional[Address] = None) -> None:
        self.caller = caller

    def require_auth(self, principal: Address) -> None:
        if self.caller is None or self.caller != principal:
            raise Unauthorized(f"caller {self.caller!r} is not {principal!r}")

    @contextmanager
    def as_caller(self, principal: Address) -> Iterator[None]:
        previous = self.caller
        self.caller = principal
        try:
            yield
        finally:
            self.caller = previous


class ManualClock:
    """Test clock. Time only moves when told to, and never backwards."""

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("clock start must be non-negative")
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, seconds: int) -> int:
        if seconds < 0:
            raise ValueError("clock cannot move backwards")
        self._now += seconds
        return self._now

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(f"clock cannot move backwards: {timestamp} < {self._now}")
        self._now = timestamp


class SystemClock:
    """Wall-clock seconds, clamped so successive reads never decrease."""

    def __init__(self) -> None:
        self._last = 0

    def now(self) -> int:
        self._last = max(self._last, int(time.time()))
        return self._last


class RecordingEventSink:
    def __init__(self) -> None:
        self.events: List[ContractEvent] = []

    def publish(self, event: ContractEvent) -> None:
        self.events.append(event)

    def topics(self) -> List[EventTopic]:
        return [e.topic for e in self.events]

    def of(self, topic: EventTopic) -> List[ContractEvent]:
        return [e for e in self.events if e.topic == topic]
