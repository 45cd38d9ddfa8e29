"""
Contract surface: lifecycle and admin transitions over persisted state, wired to
the external token / auth / clock / event collaborators.
"""

from .admin import AdminControl
from .collaborators import (
    AuthProvider,
    CallerAuth,
    Clock,
    ContractEnv,
    EventSink,
    InMemoryTokenLedger,
    ManualClock,
    RecordingEventSink,
    SystemClock,
    TokenLedger,
)
from .contract import StakingContract
from .lifecycle import StakeLifecycle
from .unit_of_work import UnitOfWork

__all__ = [
    "AdminControl",
    "AuthProvider",
    "CallerAuth",
    "Clock",
    "ContractEnv",
    "EventSink",
    "InMemoryTokenLedger",
    "ManualClock",
    "RecordingEventSink",
    "SystemClock",
    "TokenLedger",
    "StakingContract",
    "StakeLifecycle",
    "UnitOfWork",
]
