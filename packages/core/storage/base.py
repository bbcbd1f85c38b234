from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable


@dataclass(frozen=True)
class EventState:
    id: str
    name: str
    time: dt.datetime
    duration: int
    type: str
    description: Optional[str]
    created_at: str


@runtime_checkable
class EventStore(Protocol):
    def add_event(self, event: EventState) -> None:
        """Persist a new event."""

    def get_event(self, event_id: str) -> Optional[EventState]:
        """Return an event by id, or None if missing."""

    def list_events(self) -> List[EventState]:
        """Return every stored event in the store's natural order."""

    def list_events_between(
        self, start: dt.datetime, end: dt.datetime
    ) -> List[EventState]:
        """Return events whose time falls within [start, end]."""

    def delete_event(self, event_id: str) -> bool:
        """Delete an event. Returns True if a row was removed."""

    def ping(self) -> None:
        """Raise if the store cannot be reached."""
