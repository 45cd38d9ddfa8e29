"""Tests for initialize / update_pool / set_emergency_mode."""

import pytest

from stakeledger.config import ConfigError, PoolConfig, StakingConfig
from stakeledger.core.staking.errors import (
    InvalidPoolConfig,
    NotInitialized,
    StakingOverflowError,
    Unauthorized,
)
from stakeledger.core.staking.lock_period import LOCK_30_DAYS
from stakeledger.core.staking.math import U32_MAX
from stakeledger.core.staking.types import EventTopic
from stakeledger.integration import InMemoryTokenLedger, ManualClock, StakingContract

ADMIN = "admin"
ALICE = "alice"
TOKEN = "stake-token"
T0 = 1_700_000_000


class TestInitialize:
    def test_pool_fields(self, pool_contract):
        pool = pool_contract.get_pool_info()
        assert pool.token == TOKEN
        assert pool.total_staked == 0
        assert pool.reward_rate == 1_000_000_000
        assert pool.bonus_multiplier == 100
        assert (pool.min_stake, pool.max_stake) == (100, 1_000_000)
        assert pool.emergency_withdrawal_fee == 500
        assert pool_contract.get_admin() == ADMIN
        assert pool_contract.is_emergency_mode() is False

    def test_event(self, pool_contract, sink):
        (event,) = sink.of(EventTopic.POOL_INITIALIZED)
        assert event.principal == ADMIN
        assert event.data == {
            "admin": ADMIN,
            "reward_rate": 1_000_000_000,
            "bonus_multiplier": 100,
        }

    def test_only_once(self, pool_contract, auth, sink):
        with auth.as_caller(ADMIN), pytest.raises(NotInitialized):
            pool_contract.initialize(ADMIN, "other", 1, 100, 1, 10)
        assert pool_contract.get_pool_info().token == TOKEN
        assert len(sink.events) == 1

    def test_requires_auth(self, contract, auth):
        with auth.as_caller(ALICE), pytest.raises(Unauthorized):
            contract.initialize(ADMIN, TOKEN, 1, 100, 1, 10)
        with pytest.raises(NotInitialized):
            contract.get_admin()

    @pytest.mark.parametrize(
        "rate, lo, hi",
        [(-1, 1, 10), (1, -1, 10), (1, 10, 10), (1, 11, 10)],
    )
    def test_invalid_config(self, contract, auth, rate, lo, hi):
        with auth.as_caller(ADMIN), pytest.raises(InvalidPoolConfig):
            contract.initialize(ADMIN, TOKEN, rate, 100, lo, hi)
        with pytest.raises(NotInitialized):
            contract.get_pool_info()

    def test_bonus_multiplier_width(self, contract, auth):
        with auth.as_caller(ADMIN), pytest.raises(StakingOverflowError):
            contract.initialize(ADMIN, TOKEN, 1, U32_MAX + 1, 1, 10)

    def test_reads_before_initialize(self, contract):
        assert contract.is_emergency_mode() is False
        with pytest.raises(NotInitialized):
            contract.get_pool_info()


class TestInitializeFromConfig:
    def test_pool_config(self, contract, auth):
        cfg = StakingConfig(
            admin=ADMIN,
            pool=PoolConfig(token=TOKEN, reward_rate=7, bonus_multiplier=120, min_stake=5, max_stake=50),
        )
        with auth.as_caller(ADMIN):
            contract.initialize_from_config(cfg)
        pool = contract.get_pool_info()
        assert (pool.reward_rate, pool.bonus_multiplier, pool.min_stake, pool.max_stake) == (7, 120, 5, 50)
        assert contract.get_admin() == ADMIN

    def test_explicit_admin_wins(self, contract, auth):
        cfg = StakingConfig(admin="someone-else")
        with auth.as_caller(ADMIN):
            contract.initialize_from_config(cfg, admin=ADMIN)
        assert contract.get_admin() == ADMIN

    def test_admin_required(self, contract, auth):
        with auth.as_caller(ADMIN), pytest.raises(ConfigError):
            contract.initialize_from_config(StakingConfig())
        with pytest.raises(NotInitialized):
            contract.get_pool_info()

    def test_from_config(self, auth):
        config = StakingConfig(contract_address="vault", admin=ADMIN)
        ledger = InMemoryTokenLedger({ALICE: 1000})
        contract = StakingContract.from_config(config, token=ledger, auth=auth, clock=ManualClock(T0))
        assert contract.address == "vault"
        with auth.as_caller(ADMIN):
            contract.initialize_from_config(config)
        with auth.as_caller(ALICE):
            contract.stake(ALICE, 100, LOCK_30_DAYS)
        assert ledger.balance("vault") == 100


class TestUpdatePool:
    def test_updates_and_emits(self, pool_contract, auth, clock, sink):
        clock.advance(5)
        with auth.as_caller(ADMIN):
            pool_contract.update_pool(ADMIN, reward_rate=42, bonus_multiplier=150)
        pool = pool_contract.get_pool_info()
        assert (pool.reward_rate, pool.bonus_multiplier) == (42, 150)
        (event,) = sink.of(EventTopic.POOL_UPDATED)
        assert event.data == {
            "admin": ADMIN,
            "reward_rate": 42,
            "bonus_multiplier": 150,
            "timestamp": T0 + 5,
        }

    def test_partial_update(self, pool_contract, auth):
        with auth.as_caller(ADMIN):
            pool_contract.update_pool(ADMIN, bonus_multiplier=110)
        pool = pool_contract.get_pool_info()
        assert pool.reward_rate == 1_000_000_000
        assert pool.bonus_multiplier == 110

    def test_new_rate_applies_to_open_positions(self, pool_contract, auth, clock):
        with auth.as_caller(ALICE):
            pool_contract.stake(ALICE, 1000, LOCK_30_DAYS)
        with auth.as_caller(ADMIN):
            pool_contract.update_pool(ADMIN, reward_rate=2_000_000_000)
        clock.advance(10)
        assert pool_contract.get_pending_rewards(ALICE).total_rewards == 20_000

    def test_negative_rate(self, pool_contract, auth):
        with auth.as_caller(ADMIN), pytest.raises(InvalidPoolConfig):
            pool_contract.update_pool(ADMIN, reward_rate=-1)
        assert pool_contract.get_pool_info().reward_rate == 1_000_000_000

    def test_non_admin(self, pool_contract, auth):
        with auth.as_caller(ALICE), pytest.raises(Unauthorized):
            pool_contract.update_pool(ALICE, reward_rate=1)

    def test_not_initialized(self, contract, auth):
        with auth.as_caller(ADMIN), pytest.raises(NotInitialized):
            contract.update_pool(ADMIN, reward_rate=1)


class TestEmergencyMode:
    def test_toggle_without_event(self, pool_contract, auth, sink):
        with auth.as_caller(ADMIN):
            pool_contract.set_emergency_mode(ADMIN, True)
        assert pool_contract.is_emergency_mode() is True
        with auth.as_caller(ADMIN):
            pool_contract.set_emergency_mode(ADMIN, False)
        assert pool_contract.is_emergency_mode() is False
        assert sink.topics() == [EventTopic.POOL_INITIALIZED]

    def test_non_admin(self, pool_contract, auth):
        with auth.as_caller(ALICE), pytest.raises(Unauthorized):
            pool_contract.set_emergency_mode(ALICE, True)
        assert pool_contract.is_emergency_mode() is False

    def test_logged_as_warning(self, pool_contract, auth, caplog):
        with caplog.at_level("WARNING", logger="stakeledger"):
            with auth.as_caller(ADMIN):
                pool_contract.set_emergency_mode(ADMIN, True)
        assert "Emergency mode enabled" in caplog.text
