from .base import EventState, EventStore
from .sqlite import SQLiteEventStore

__all__ = [
    "EventState",
    "EventStore",
    "SQLiteEventStore",
]
