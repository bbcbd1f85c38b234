from .client import (
    CalendarEvent,
    EventsApiClient,
    EventsApiError,
    default_api_client,
)
from .controller import CalendarController, EventDraft, parse_duration

__all__ = [
    "CalendarController",
    "CalendarEvent",
    "EventDraft",
    "EventsApiClient",
    "EventsApiError",
    "default_api_client",
    "parse_duration",
]
