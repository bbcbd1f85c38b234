import datetime as dt
import sqlite3

import pytest

from packages.core.storage.base import EventState, EventStore
from packages.core.storage.sqlite import SQLiteEventStore


UTC = dt.timezone.utc


def _event(event_id, when, description=None):
    return EventState(
        id=event_id,
        name=f"event {event_id}",
        time=when,
        duration=30,
        type="Work",
        description=description,
        created_at="2026-01-01T00:00:00+00:00",
    )


def test_sqlite_store_add_get_list(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "nested" / "events.db"))
    assert isinstance(store, EventStore)

    store.add_event(_event("a", dt.datetime(2026, 1, 5, 9, 30, tzinfo=UTC), "notes"))
    store.add_event(_event("b", dt.datetime(2026, 1, 6, 9, 30, tzinfo=UTC)))

    fetched = store.get_event("a")
    assert fetched is not None
    assert fetched.time == dt.datetime(2026, 1, 5, 9, 30, tzinfo=UTC)
    assert fetched.description == "notes"
    assert store.get_event("missing") is None
    assert {event.id for event in store.list_events()} == {"a", "b"}


def test_sqlite_store_range_is_inclusive(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    start = dt.datetime(2026, 3, 1, tzinfo=UTC)
    end = dt.datetime(2026, 3, 8, tzinfo=UTC)
    store.add_event(_event("before", start - dt.timedelta(microseconds=1)))
    store.add_event(_event("at_start", start))
    store.add_event(_event("middle", start + dt.timedelta(days=3)))
    store.add_event(_event("at_end", end))
    store.add_event(_event("after", end + dt.timedelta(seconds=1)))

    found = store.list_events_between(start, end)
    assert [event.id for event in found] == ["at_start", "middle", "at_end"]


def test_sqlite_store_normalizes_offsets(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    plus_two = dt.timezone(dt.timedelta(hours=2))
    store.add_event(_event("offset", dt.datetime(2026, 3, 2, 1, 0, tzinfo=plus_two)))

    found = store.list_events_between(
        dt.datetime(2026, 3, 1, 22, 0, tzinfo=UTC),
        dt.datetime(2026, 3, 1, 23, 30, tzinfo=UTC),
    )
    assert [event.id for event in found] == ["offset"]
    assert found[0].time == dt.datetime(2026, 3, 1, 23, 0, tzinfo=UTC)


def test_sqlite_store_delete(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    store.add_event(_event("a", dt.datetime(2026, 1, 5, tzinfo=UTC)))

    assert store.delete_event("a") is True
    assert store.delete_event("a") is False
    assert store.list_events() == []


def test_sqlite_store_ping(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    store.ping()


def test_sqlite_store_closes_connections(tmp_path):
    store = SQLiteEventStore(db_path=str(tmp_path / "events.db"))
    opened = []
    original_connect = store._connect

    def tracking_connect():
        conn = original_connect()
        opened.append(conn)
        return conn

    store._connect = tracking_connect
    store.add_event(_event("a", dt.datetime(2026, 1, 5, tzinfo=UTC)))
    store.list_events()
    store.delete_event("a")

    assert len(opened) == 3
    for conn in opened:
        with pytest.raises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1")
