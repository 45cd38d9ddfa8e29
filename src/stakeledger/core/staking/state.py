"""Serialization for persisted staking records.

Round-trip property (tested): `pool_from_dict(pool_to_dict(p)) == p` and
`position_from_dict(position_to_dict(s)) == s` for all valid records.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import StakingPool, StakingPosition

# Derived from the dataclass fields.
POOL_FIELDS: tuple[str, ...] = tuple(StakingPool.__dataclass_fields__)
POSITION_FIELDS: tuple[str, ...] = tuple(StakingPosition.__dataclass_fields__)

_STR_FIELDS = frozenset({"token", "user"})


def _record_to_dict(record: Any, names: tuple[str, ...]) -> dict[str, bool | int | str]:
    return {name: getattr(record, name) for name in names}


def _record_kwargs(d: Mapping[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    kwargs: dict[str, Any] = {}
    for name in names:
        val = d[name]
        if name in _STR_FIELDS:
            if not isinstance(val, str):
                raise TypeError(f"field {name!r} must be str, got {type(val).__name__}")
            kwargs[name] = val
        elif isinstance(val, bool):
            kwargs[name] = val
        elif isinstance(val, int):
            kwargs[name] = int(val)  # normalize int subclasses
        else:
            raise TypeError(f"field {name!r} must be bool|int, got {type(val).__name__}")
    return kwargs


def pool_to_dict(pool: StakingPool) -> dict[str, bool | int | str]:
    return _record_to_dict(pool, POOL_FIELDS)


def pool_from_dict(d: Mapping[str, Any]) -> StakingPool:
    """Deserialize a dict to a StakingPool. Raises KeyError on missing fields."""
    return StakingPool(**_record_kwargs(d, POOL_FIELDS))


def position_to_dict(position: StakingPosition) -> dict[str, bool | int | str]:
    return _record_to_dict(position, POSITION_FIELDS)


def position_from_dict(d: Mapping[str, Any]) -> StakingPosition:
    """Deserialize a dict to a StakingPosition. Raises KeyError on missing fields."""
    return StakingPosition(**_record_kwargs(d, POSITION_FIELDS))
