from __future__ import annotations

import datetime as dt
import os
import sqlite3
from contextlib import closing, contextmanager
from typing import Iterator, List, Optional, Tuple

from .base import EventState, EventStore


_EVENT_COLUMNS = "id, name, time, duration, type, description, created_at"


def to_db_time(value: dt.datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    # Fixed width keeps lexical order equal to chronological order.
    return value.astimezone(dt.timezone.utc).isoformat(timespec="microseconds")


def from_db_time(value: str) -> dt.datetime:
    return dt.datetime.fromisoformat(value)


class SQLiteEventStore(EventStore):
    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        directory = os.path.dirname(db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        self._init_db()

    @property
    def db_path(self) -> str:
        return self._db_path

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self._db_path)

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        with closing(self._connect()) as conn:
            with conn:
                yield conn

    def _init_db(self) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS events (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    time TEXT NOT NULL,
                    duration INTEGER NOT NULL,
                    type TEXT NOT NULL,
                    description TEXT,
                    created_at TEXT NOT NULL
                )
                """
            )
            conn.execute("CREATE INDEX IF NOT EXISTS events_time_idx ON events (time)")

    def _row_to_event(self, row: Tuple) -> EventState:
        return EventState(
            id=row[0],
            name=row[1],
            time=from_db_time(row[2]),
            duration=int(row[3]),
            type=row[4],
            description=row[5],
            created_at=row[6],
        )

    def add_event(self, event: EventState) -> None:
        with self._connection() as conn:
            conn.execute(
                f"INSERT INTO events ({_EVENT_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    event.id,
                    event.name,
                    to_db_time(event.time),
                    event.duration,
                    event.type,
                    event.description,
                    event.created_at,
                ),
            )

    def get_event(self, event_id: str) -> Optional[EventState]:
        with self._connection() as conn:
            row = conn.execute(
                f"SELECT {_EVENT_COLUMNS} FROM events WHERE id = ?",
                (event_id,),
            ).fetchone()
            if row is None:
                return None
            return self._row_to_event(row)

    def list_events(self) -> List[EventState]:
        with self._connection() as conn:
            rows = conn.execute(f"SELECT {_EVENT_COLUMNS} FROM events").fetchall()
            return [self._row_to_event(row) for row in rows]

    def list_events_between(
        self, start: dt.datetime, end: dt.datetime
    ) -> List[EventState]:
        with self._connection() as conn:
            rows = conn.execute(
                f"""
                SELECT {_EVENT_COLUMNS}
                FROM events
                WHERE time >= ? AND time <= ?
                ORDER BY time ASC
                """,
                (to_db_time(start), to_db_time(end)),
            ).fetchall()
            return [self._row_to_event(row) for row in rows]

    def delete_event(self, event_id: str) -> bool:
        with self._connection() as conn:
            result = conn.execute("DELETE FROM events WHERE id = ?", (event_id,))
            return result.rowcount > 0

    def ping(self) -> None:
        with self._connection() as conn:
            conn.execute("SELECT 1").fetchone()
