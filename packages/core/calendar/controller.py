from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, replace
from typing import Any, Callable, List, Optional, Union

from .client import CalendarEvent, EventsApiClient, EventsApiError


logger = logging.getLogger("calendar_events.controller")

PAST_SLOT_MESSAGE = "Cannot create events in the past."
NAME_REQUIRED_MESSAGE = "Event name is required"
INVALID_DURATION_MESSAGE = "Please enter a valid duration in minutes"
CONFIRM_DELETE_MESSAGE = "Are you sure you want to delete this event?"

DEFAULT_DURATION = 15
DEFAULT_TYPE = "Work"


@dataclass(frozen=True)
class EventDraft:
    start: dt.datetime
    name: str = ""
    duration: Union[int, str] = DEFAULT_DURATION
    type: str = DEFAULT_TYPE
    description: str = ""

    def with_values(self, **changes: Any) -> "EventDraft":
        return replace(self, **changes)


def _local_now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def _to_minute(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        value = value.astimezone()
    return value.replace(second=0, microsecond=0)


def parse_duration(value: Union[int, float, str, None]) -> Optional[int]:
    """Return a positive whole number of minutes, or None if invalid."""
    if value is None or isinstance(value, bool):
        return None
    try:
        minutes = int(float(str(value).strip()))
    except (ValueError, OverflowError):
        return None
    return minutes if minutes > 0 else None


class CalendarController:
    """Client-side rules for the calendar view.

    The controller never patches ``events`` locally: every successful create
    or delete is followed by a full re-fetch from the API.
    """

    def __init__(
        self,
        api: EventsApiClient,
        alert: Callable[[str], None],
        confirm: Callable[[str], bool],
        clock: Optional[Callable[[], dt.datetime]] = None,
    ) -> None:
        self._api = api
        self._alert = alert
        self._confirm = confirm
        self._clock = clock or _local_now
        self.events: List[CalendarEvent] = []

    def refresh(self) -> List[CalendarEvent]:
        self.events = self._api.list_events()
        return self.events

    def select_slot(self, start: dt.datetime) -> Optional[EventDraft]:
        selected = _to_minute(start)
        if selected < _to_minute(self._clock()):
            self._alert(PAST_SLOT_MESSAGE)
            return None
        return EventDraft(start=selected)

    def select_event(self, event_id: str) -> Optional[CalendarEvent]:
        for event in self.events:
            if event.id == event_id:
                return event
        return None

    def submit(self, draft: EventDraft) -> Optional[CalendarEvent]:
        if not draft.name.strip():
            self._alert(NAME_REQUIRED_MESSAGE)
            return None
        duration = parse_duration(draft.duration)
        if duration is None:
            self._alert(INVALID_DURATION_MESSAGE)
            return None
        try:
            created = self._api.create_event(
                name=draft.name,
                start=draft.start,
                duration=duration,
                type=draft.type,
                description=draft.description or None,
            )
        except EventsApiError as exc:
            self._alert(exc.message)
            return None
        self.refresh()
        return created

    def delete(self, event: CalendarEvent) -> bool:
        if not self._confirm(CONFIRM_DELETE_MESSAGE):
            logger.debug("delete_cancelled id=%s", event.id)
            return False
        try:
            self._api.delete_event(event.id)
        except EventsApiError as exc:
            self._alert(exc.message)
            return False
        self.refresh()
        return True
