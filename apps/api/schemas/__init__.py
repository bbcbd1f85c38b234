from .events import EventCreateRequest, EventResponse

__all__ = [
    "EventCreateRequest",
    "EventResponse",
]
