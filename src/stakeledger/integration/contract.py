"""
Staking contract facade.

`StakingContract` exposes the public operations and runs each mutating one
inside its own `UnitOfWork`:

- normal return      -> staged writes committed, buffered events published,
- StakingError       -> everything discarded, error re-raised to the caller,
- any other failure  -> everything discarded, fault re-raised (never converted
                        into a StakingError).

Read projections go straight to the committed store.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, List, Optional

from ..config import ConfigError, StakingConfig
from ..core.staking.errors import PositionNotFound, StakingError
from ..core.staking.invariants import check_conservation
from ..core.staking.types import (
    Address,
    NoVesting,
    RewardCalculation,
    StakingPool,
    StakingPosition,
    VestingOption,
)
from ..logging import get_logger, setup_logging
from ..state.kv import InMemoryStore, KeyValueStore
from ..state.positions import PositionStore
from ..state.registry import PoolRegistry
from .admin import AdminControl
from .collaborators import (
    AuthProvider,
    CallerAuth,
    Clock,
    ContractEnv,
    EventSink,
    RecordingEventSink,
    SystemClock,
    TokenLedger,
)
from .lifecycle import StakeLifecycle
from .unit_of_work import UnitOfWork

logger = get_logger("contract")


class StakingContract:
    def __init__(
        self,
        *,
        token: TokenLedger,
        auth: AuthProvider,
        clock: Clock,
        events: EventSink,
        store: Optional[KeyValueStore] = None,
        address: Address = "staking-contract",
    ) -> None:
        self.store: KeyValueStore = InMemoryStore() if store is None else store
        self.env = ContractEnv(address=address, token=token, auth=auth, clock=clock, events=events)
        self.lifecycle = StakeLifecycle(self.env)
        self.admin = AdminControl(self.env)

    @classmethod
    def from_config(
        cls,
        config: StakingConfig,
        *,
        token: TokenLedger,
        auth: Optional[AuthProvider] = None,
        clock: Optional[Clock] = None,
        events: Optional[EventSink] = None,
        store: Optional[KeyValueStore] = None,
    ) -> "StakingContract":
        config.validate()
        setup_logging(config.log_level_value, json_format=config.log_json)
        return cls(
            token=token,
            auth=CallerAuth() if auth is None else auth,
            clock=SystemClock() if clock is None else clock,
            events=RecordingEventSink() if events is None else events,
            store=store,
            address=config.contract_address,
        )

    @property
    def address(self) -> Address:
        return self.env.address

    @contextmanager
    def _unit(self, op: str) -> Iterator[UnitOfWork]:
        uow = UnitOfWork(self.store, self.env.events)
        try:
            yield uow
        except StakingError as e:
            uow.discard()
            logger.debug("%s rejected: %s (code %d)", op, e, e.code)
            raise
        except Exception:
            uow.discard()
            logger.error("%s aborted", op, exc_info=True)
            raise
        uow.commit()

    # -- Admin ---------------------------------------------------------------

    def initialize(
        self,
        admin: Address,
        token: Address,
        reward_rate: int,
        bonus_multiplier: int,
        min_stake: int,
        max_stake: int,
    ) -> None:
        with self._unit("initialize") as uow:
            self.admin.initialize(
                uow, admin, token, reward_rate, bonus_multiplier, min_stake, max_stake,
            )

    def initialize_from_config(
        self, config: StakingConfig, admin: Optional[Address] = None,
    ) -> None:
        """Initialize from ``config.pool``; *admin* defaults to ``config.admin``."""
        admin = config.admin if admin is None else admin
        if not admin:
            raise ConfigError("admin must be set to initialize the pool")
        pool = config.pool
        pool.validate()
        self.initialize(
            admin, pool.token, pool.reward_rate, pool.bonus_multiplier,
            pool.min_stake, pool.max_stake,
        )

    def update_pool(
        self,
        admin: Address,
        reward_rate: Optional[int] = None,
        bonus_multiplier: Optional[int] = None,
    ) -> None:
        with self._unit("update_pool") as uow:
            self.admin.update_pool(uow, admin, reward_rate, bonus_multiplier)

    def set_emergency_mode(self, admin: Address, enabled: bool) -> None:
        with self._unit("set_emergency_mode") as uow:
            self.admin.set_emergency_mode(uow, admin, enabled)

    # -- Lifecycle -------------------------------------------------------------

    def stake(
        self,
        user: Address,
        amount: int,
        lock_period: int,
        vesting: VestingOption = NoVesting(),
    ) -> None:
        with self._unit("stake") as uow:
            self.lifecycle.stake(uow, user, amount, lock_period, vesting)

    def unstake(self, user: Address) -> int:
        with self._unit("unstake") as uow:
            return self.lifecycle.unstake(uow, user)

    def claim_rewards(self, user: Address) -> int:
        with self._unit("claim_rewards") as uow:
            return self.lifecycle.claim_rewards(uow, user)

    # -- Read projections ------------------------------------------------------

    def get_position(self, user: Address) -> StakingPosition:
        position = PositionStore(self.store).find(user)
        if position is None:
            raise PositionNotFound(f"no position for {user}")
        return position

    def get_pool_info(self) -> StakingPool:
        return PoolRegistry(self.store).get_pool()

    def get_pending_rewards(self, user: Address) -> RewardCalculation:
        return self.lifecycle.pending_rewards(UnitOfWork(self.store, self.env.events), user)

    def get_admin(self) -> Address:
        return PoolRegistry(self.store).get_admin()

    def is_emergency_mode(self) -> bool:
        return PoolRegistry(self.store).emergency_mode()

    def audit(self) -> List[str]:
        """Ledger-wide conservation check. Needs a store that supports `items()`."""
        return check_conservation(self.get_pool_info(), PositionStore(self.store).all())
