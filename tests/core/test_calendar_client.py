import datetime as dt

import httpx
import pytest
from fastapi.testclient import TestClient

from apps.api.main import app
from apps.api.routes import events as events_module
from packages.core.calendar.client import EventsApiClient, EventsApiError, parse_time
from packages.core.storage.sqlite import SQLiteEventStore


@pytest.fixture
def api(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    app.dependency_overrides[events_module.get_store] = lambda: store
    yield EventsApiClient(base_url="http://testserver", http_client=TestClient(app))
    app.dependency_overrides.clear()


def test_parse_time_accepts_zulu_suffix():
    assert parse_time("2026-10-20T09:00:00Z") == dt.datetime(
        2026, 10, 20, 9, 0, tzinfo=dt.timezone.utc
    )


def test_created_event_end_is_derived_from_duration(api):
    start = (dt.datetime.now(dt.timezone.utc) + dt.timedelta(hours=1)).replace(microsecond=0)
    created = api.create_event(name="A", start=start, duration=30, type="Work")

    events = api.list_events()
    assert [event.id for event in events] == [created.id]
    listed = events[0]
    assert listed.start == start
    assert listed.end == start + dt.timedelta(minutes=30)


def test_create_event_surfaces_server_message(api):
    start = dt.datetime(2026, 10, 20, 9, 0, tzinfo=dt.timezone.utc)
    with pytest.raises(EventsApiError) as excinfo:
        api.create_event(name="A", start=start, duration=0, type="Work")
    assert excinfo.value.status_code == 400
    assert excinfo.value.message == "Duration must be a positive number of minutes"


def test_summary_and_delete(api):
    recent = dt.datetime.now(dt.timezone.utc) - dt.timedelta(days=2)
    created = api.create_event(
        name="Retro", start=recent, duration=60, type="Work", description="Sprint 12"
    )
    weekly = api.summary("weekly")
    assert [event.id for event in weekly] == [created.id]
    assert weekly[0].description == "Sprint 12"

    api.delete_event(created.id)
    api.delete_event(created.id)
    assert api.list_events() == []


def test_summary_invalid_range_raises(api):
    with pytest.raises(EventsApiError) as excinfo:
        api.summary("yearly")
    assert excinfo.value.message == "Invalid range. Use weekly or monthly."


def test_error_key_is_read_from_server_body():
    def handler(request):
        return httpx.Response(400, json={"error": "Missing name, time, duration, or type"})

    api = EventsApiClient(
        base_url="http://calendar.test",
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    with pytest.raises(EventsApiError) as excinfo:
        api.create_event(
            name="A",
            start=dt.datetime(2026, 10, 20, 9, 0, tzinfo=dt.timezone.utc),
            duration=30,
            type="Work",
        )
    assert excinfo.value.message == "Missing name, time, duration, or type"
