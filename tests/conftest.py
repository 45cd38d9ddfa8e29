"""Shared fixtures: a contract wired to in-memory collaborators."""

from __future__ import annotations

import pytest

from stakeledger.integration import (
    CallerAuth,
    InMemoryTokenLedger,
    ManualClock,
    RecordingEventSink,
    StakingContract,
)
from stakeledger.state import InMemoryStore

ADMIN = "admin"
ALICE = "alice"
BOB = "bob"
TOKEN = "stake-token"
CONTRACT = "staking-contract"

T0 = 1_700_000_000
RATE_1X = 1_000_000_000  # 1 unit per second per unit staked
MIN_STAKE = 100
MAX_STAKE = 1_000_000
CONTRACT_FUNDING = 10**18


@pytest.fixture
def ledger() -> InMemoryTokenLedger:
    return InMemoryTokenLedger({
        ALICE: 10_000_000,
        BOB: 10_000_000,
        CONTRACT: CONTRACT_FUNDING,
    })


@pytest.fixture
def auth() -> CallerAuth:
    return CallerAuth()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(T0)


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def contract(ledger, auth, clock, sink, store) -> StakingContract:
    return StakingContract(
        token=ledger, auth=auth, clock=clock, events=sink, store=store, address=CONTRACT,
    )


@pytest.fixture
def pool_contract(contract, auth) -> StakingContract:
    """Contract initialized with the 1x reference rate and [100, 1_000_000] stake bounds."""
    with auth.as_caller(ADMIN):
        contract.initialize(ADMIN, TOKEN, RATE_1X, 100, MIN_STAKE, MAX_STAKE)
    return contract
