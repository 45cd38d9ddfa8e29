"""Configuration management for stakeledger.

Supports loading configuration from:
1. Default values
2. Config file (YAML, path given explicitly or via STAKELEDGER_CONFIG)
3. Environment variables (STAKELEDGER_*)

Configuration precedence: env vars > config file > defaults
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from .logging import get_logger

logger = get_logger("config")

# Default values
DEFAULT_CONTRACT_ADDRESS = "staking-contract"
DEFAULT_REWARD_RATE = 1_000_000_000  # 1 unit/sec/unit staked at 1e9 scale
DEFAULT_BONUS_MULTIPLIER = 100
DEFAULT_MIN_STAKE = 100
DEFAULT_MAX_STAKE = 1_000_000
DEFAULT_LOG_LEVEL = "INFO"

ENV_PREFIX = "STAKELEDGER_"
CONFIG_PATH_ENV = "STAKELEDGER_CONFIG"


class ConfigError(Exception):
    """Configuration error."""


@dataclass
class PoolConfig:
    """Pool parameters fed to ``initialize``."""

    token: str = "token"
    reward_rate: int = DEFAULT_REWARD_RATE
    bonus_multiplier: int = DEFAULT_BONUS_MULTIPLIER
    min_stake: int = DEFAULT_MIN_STAKE
    max_stake: int = DEFAULT_MAX_STAKE

    def validate(self) -> None:
        """Validate configuration.

        Raises ConfigError if validation fails.
        """
        if not self.token:
            raise ConfigError("pool.token must be non-empty")
        if self.reward_rate < 0:
            raise ConfigError(f"pool.reward_rate must be >= 0, got {self.reward_rate}")
        if self.min_stake < 0 or self.max_stake <= self.min_stake:
            raise ConfigError(
                f"pool stake bounds must satisfy 0 <= min < max, got {self.min_stake}..{self.max_stake}"
            )
        if self.bonus_multiplier < 0:
            raise ConfigError(f"pool.bonus_multiplier must be >= 0, got {self.bonus_multiplier}")


@dataclass
class StakingConfig:
    """Top-level configuration."""

    contract_address: str = DEFAULT_CONTRACT_ADDRESS
    admin: str | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = False
    pool: PoolConfig = field(default_factory=PoolConfig)

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    def validate(self) -> None:
        if not self.contract_address:
            raise ConfigError("contract_address must be non-empty")
        if not isinstance(self.log_level_value, int):
            raise ConfigError(f"unknown log_level: {self.log_level}")
        self.pool.validate()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "StakingConfig":
        pool_data = data.get("pool") or {}
        if not isinstance(pool_data, Mapping):
            raise ConfigError("pool must be a mapping")
        unknown = set(pool_data) - set(PoolConfig.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"unknown pool keys: {', '.join(sorted(unknown))}")
        pool = PoolConfig(**{
            k: str(v) if k == "token" else _as_int(k, v)
            for k, v in pool_data.items()
        })

        return cls(
            contract_address=str(data.get("contract_address", DEFAULT_CONTRACT_ADDRESS)),
            admin=data.get("admin"),
            log_level=str(data.get("log_level", DEFAULT_LOG_LEVEL)),
            log_json=bool(data.get("log_json", False)),
            pool=pool,
        )


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ConfigError(f"{name} must be an integer, got {value!r}")
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _apply_env(config: StakingConfig, environ: Mapping[str, str]) -> None:
    def env(name: str) -> str | None:
        return environ.get(ENV_PREFIX + name)

    if (v := env("CONTRACT_ADDRESS")) is not None:
        config.contract_address = v
    if (v := env("ADMIN")) is not None:
        config.admin = v
    if (v := env("LOG_LEVEL")) is not None:
        config.log_level = v
    if (v := env("LOG_JSON")) is not None:
        config.log_json = v.lower() in ("1", "true", "yes")
    if (v := env("POOL_TOKEN")) is not None:
        config.pool.token = v
    for name in ("reward_rate", "bonus_multiplier", "min_stake", "max_stake"):
        if (v := env("POOL_" + name.upper())) is not None:
            setattr(config.pool, name, _as_int(name, v))


def load_config(
    path: Path | str | None = None,
    environ: Mapping[str, str] | None = None,
) -> StakingConfig:
    """Load configuration: defaults, then the YAML file, then env vars.

    Raises ConfigError on unreadable files or invalid values.
    """
    environ = os.environ if environ is None else environ
    if path is None and environ.get(CONFIG_PATH_ENV):
        path = environ[CONFIG_PATH_ENV]

    data: Mapping[str, Any] = {}
    if path is not None:
        config_path = Path(path)
        if not config_path.is_file():
            raise ConfigError(f"config file not found: {config_path}")
        try:
            loaded = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {config_path}: {e}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, Mapping):
            raise ConfigError("config YAML must be a mapping")
        data = loaded
        logger.debug("Loaded config file %s", config_path)

    config = StakingConfig.from_dict(data)
    _apply_env(config, environ)
    config.validate()
    return config
