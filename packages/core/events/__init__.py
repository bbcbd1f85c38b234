from ..storage.base import EventState as Event
from .service import (
    EventValidationError,
    create_event,
    delete_event,
    list_events,
    summarize_events,
    summary_window,
)

__all__ = [
    "Event",
    "EventValidationError",
    "create_event",
    "delete_event",
    "list_events",
    "summarize_events",
    "summary_window",
]
