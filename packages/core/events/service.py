from __future__ import annotations

import calendar
import datetime as dt
import logging
import uuid
from typing import List, Optional, Tuple

from ..storage.base import EventState, EventStore


logger = logging.getLogger("calendar_events.events")

MISSING_FIELDS_MESSAGE = "Missing name, time, duration, or type"
INVALID_DURATION_MESSAGE = "Duration must be a positive number of minutes"
MAX_DURATION_MINUTES = 525600
DURATION_TOO_LONG_MESSAGE = f"Duration must be at most {MAX_DURATION_MINUTES} minutes"
INVALID_TIME_MESSAGE = "Time is out of the supported range"
INVALID_RANGE_MESSAGE = "Invalid range. Use weekly or monthly."

SUMMARY_RANGES = ("weekly", "monthly")


class EventValidationError(ValueError):
    """Raised when event input or a summary range is rejected."""


def _utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def _as_utc(value: dt.datetime) -> dt.datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def _subtract_month(value: dt.datetime) -> dt.datetime:
    year, month = value.year, value.month - 1
    if month == 0:
        year, month = year - 1, 12
    last_day = calendar.monthrange(year, month)[1]
    return value.replace(year=year, month=month, day=min(value.day, last_day))


def create_event(
    store: EventStore,
    name: Optional[str],
    time: Optional[dt.datetime],
    duration: Optional[int],
    type: Optional[str],
    description: Optional[str] = None,
) -> EventState:
    name = _clean(name)
    type = _clean(type)
    if not name or time is None or duration is None or not type:
        logger.info("event_rejected reason=missing_fields")
        raise EventValidationError(MISSING_FIELDS_MESSAGE)
    if duration <= 0:
        logger.info("event_rejected reason=invalid_duration duration=%s", duration)
        raise EventValidationError(INVALID_DURATION_MESSAGE)
    if duration > MAX_DURATION_MINUTES:
        logger.info("event_rejected reason=duration_too_long duration=%s", duration)
        raise EventValidationError(DURATION_TOO_LONG_MESSAGE)
    try:
        start = _as_utc(time)
        # the end time must be representable too
        start + dt.timedelta(minutes=duration)
    except OverflowError as exc:
        logger.info("event_rejected reason=time_out_of_range")
        raise EventValidationError(INVALID_TIME_MESSAGE) from exc

    event = EventState(
        id=uuid.uuid4().hex,
        name=name,
        time=start,
        duration=duration,
        type=type,
        description=_clean(description),
        created_at=_utc_now().isoformat(),
    )
    store.add_event(event)
    logger.info("event_created id=%s time=%s", event.id, event.time.isoformat())
    return event


def list_events(store: EventStore) -> List[EventState]:
    return store.list_events()


def summary_window(
    range_name: Optional[str], now: Optional[dt.datetime] = None
) -> Tuple[dt.datetime, dt.datetime]:
    """Return the inclusive [start, end] window for a summary range."""
    end = _as_utc(now) if now is not None else _utc_now()
    if range_name == "weekly":
        return end - dt.timedelta(days=7), end
    if range_name == "monthly":
        return _subtract_month(end), end
    raise EventValidationError(INVALID_RANGE_MESSAGE)


def summarize_events(
    store: EventStore, range_name: Optional[str], now: Optional[dt.datetime] = None
) -> List[EventState]:
    start, end = summary_window(range_name, now=now)
    return store.list_events_between(start, end)


def delete_event(store: EventStore, event_id: str) -> bool:
    removed = store.delete_event(event_id)
    logger.info("event_deleted id=%s removed=%s", event_id, removed)
    return removed
