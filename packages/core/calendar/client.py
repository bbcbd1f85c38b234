from __future__ import annotations

import datetime as dt
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx


logger = logging.getLogger("calendar_events.client")

DEFAULT_API_URL = "http://localhost:5000"


@dataclass(frozen=True)
class CalendarEvent:
    id: str
    name: str
    start: dt.datetime
    end: dt.datetime
    duration: int
    type: str
    description: Optional[str]


class EventsApiError(RuntimeError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def parse_time(value: str) -> dt.datetime:
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return dt.datetime.fromisoformat(value)


def event_from_payload(item: Dict[str, Any]) -> CalendarEvent:
    start = parse_time(item["time"])
    duration = int(item["duration"])
    return CalendarEvent(
        id=item["id"],
        name=item.get("name", ""),
        start=start,
        end=start + dt.timedelta(minutes=duration),
        duration=duration,
        type=item.get("type", ""),
        description=item.get("description"),
    )


class EventsApiClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10,
    ) -> None:
        self._base_url = (base_url or DEFAULT_API_URL).rstrip("/")
        self._http = http_client or httpx.Client(timeout=timeout)

    def _url(self, path: str) -> str:
        return f"{self._base_url}{path}"

    def _check(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            body = response.json()
            message = body.get("error") or body.get("detail") or response.text
        except (ValueError, AttributeError):
            message = response.text
        logger.info(
            "api_error method=%s path=%s status=%s",
            response.request.method,
            response.request.url.path,
            response.status_code,
        )
        raise EventsApiError(response.status_code, str(message))

    def list_events(self) -> List[CalendarEvent]:
        response = self._http.get(self._url("/events"))
        self._check(response)
        return [event_from_payload(item) for item in response.json()]

    def summary(self, range_name: str) -> List[CalendarEvent]:
        response = self._http.get(self._url("/summary"), params={"range": range_name})
        self._check(response)
        return [event_from_payload(item) for item in response.json()]

    def create_event(
        self,
        name: str,
        start: dt.datetime,
        duration: int,
        type: str,
        description: Optional[str] = None,
    ) -> CalendarEvent:
        payload: Dict[str, Any] = {
            "name": name,
            "time": start.isoformat(),
            "duration": duration,
            "type": type,
        }
        if description:
            payload["description"] = description
        response = self._http.post(self._url("/events"), json=payload)
        self._check(response)
        return event_from_payload(response.json())

    def delete_event(self, event_id: str) -> None:
        response = self._http.delete(self._url(f"/events/{event_id}"))
        self._check(response)


def default_api_client() -> EventsApiClient:
    base_url = os.getenv("EVENTS_API_URL", DEFAULT_API_URL)
    timeout = float(os.getenv("EVENTS_API_TIMEOUT", "10"))
    return EventsApiClient(base_url=base_url, timeout=timeout)
