"""
All-or-nothing execution of one contract call.

A `UnitOfWork` gives the lifecycle a registry and position store that write to
an `OverlayStore`, plus an event buffer. `commit()` applies the staged writes
and only then publishes the buffered events; `discard()` drops both.
"""

from __future__ import annotations

from typing import Any, List

from ..core.staking.types import Address, ContractEvent, EventTopic
from ..state.kv import KeyValueStore, OverlayStore
from ..state.positions import PositionStore
from ..state.registry import PoolRegistry
from .collaborators import EventSink


class UnitOfWork:
    def __init__(self, store: KeyValueStore, sink: EventSink) -> None:
        self.store = OverlayStore(store)
        self.registry = PoolRegistry(self.store)
        self.positions = PositionStore(self.store)
        self._sink = sink
        self._events: List[ContractEvent] = []

    def emit(self, topic: EventTopic, principal: Address, /, **data: Any) -> None:
        self._events.append(ContractEvent(topic=topic, principal=principal, data=data))

    @property
    def staged_events(self) -> List[ContractEvent]:
        return list(self._events)

    def commit(self) -> None:
        self.store.commit()
        events, self._events = self._events, []
        for event in events:
            self._sink.publish(event)

    def discard(self) -> None:
        self.store.discard()
        self._events.clear()
