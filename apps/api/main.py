from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from apps.api.observability import init_observability, instrument_app
from apps.api.routes.events import router as events_router
from packages.core.logging_config import configure_logging
from packages.core.storage.sqlite import SQLiteEventStore


logger = logging.getLogger("calendar_events.api")


def _db_path() -> str:
    data_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "data"))
    return os.getenv("EVENTS_DB_PATH", os.path.join(data_dir, "events.db"))


def _host() -> str:
    return os.getenv("EVENTS_API_HOST", "127.0.0.1")


def _port() -> int:
    return int(os.getenv("EVENTS_API_PORT", "5000"))


def _open_store() -> SQLiteEventStore:
    store = SQLiteEventStore(db_path=_db_path())
    try:
        store.ping()
    except sqlite3.Error:
        logger.exception("event_store_unreachable path=%s", store.db_path)
    else:
        logger.info("event_store_connected path=%s", store.db_path)
    return store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    app.state.event_store = _open_store()
    yield


configure_logging()

init_observability()
app = FastAPI(title="Calendar Events API", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
instrument_app(app)
app.include_router(events_router)


def _error_response(
    status_code: int, message: str, headers: Optional[Dict[str, str]] = None
) -> JSONResponse:
    # both keys carry the same message
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "detail": message},
        headers=headers,
    )


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def _request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    if errors:
        first = errors[0]
        field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        detail = f"Invalid {field or 'request'}: {first.get('msg', 'invalid value')}"
    else:
        detail = "Invalid request"
    logger.info("request_rejected path=%s detail=%s", request.url.path, detail)
    return _error_response(400, detail)


def run() -> None:
    uvicorn.run(app, host=_host(), port=_port(), log_config=None)


if __name__ == "__main__":
    run()
