from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from apps.api.schemas.events import EventCreateRequest, EventResponse
from packages.core.events.service import (
    EventValidationError,
    create_event,
    delete_event,
    list_events,
    summarize_events,
)
from packages.core.storage.base import EventState, EventStore


router = APIRouter(tags=["events"])


def get_store(request: Request) -> EventStore:
    return request.app.state.event_store


def _to_response(event: EventState) -> EventResponse:
    return EventResponse(
        id=event.id,
        name=event.name,
        time=event.time,
        duration=event.duration,
        type=event.type,
        description=event.description,
    )


@router.get("/events", response_model=List[EventResponse])
def list_all(store: EventStore = Depends(get_store)) -> List[EventResponse]:
    return [_to_response(event) for event in list_events(store)]


@router.get("/summary", response_model=List[EventResponse])
def summary(
    range_name: Optional[str] = Query(default=None, alias="range"),
    store: EventStore = Depends(get_store),
) -> List[EventResponse]:
    try:
        events = summarize_events(store, range_name)
    except EventValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return [_to_response(event) for event in events]


@router.post("/events", response_model=EventResponse, status_code=201)
def create(
    payload: EventCreateRequest, store: EventStore = Depends(get_store)
) -> EventResponse:
    try:
        event = create_event(
            store,
            name=payload.name,
            time=payload.time,
            duration=payload.duration,
            type=payload.type,
            description=payload.description,
        )
    except EventValidationError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return _to_response(event)


@router.delete("/events/{event_id}", status_code=204)
def delete(event_id: str, store: EventStore = Depends(get_store)) -> Response:
    delete_event(store, event_id)
    return Response(status_code=204)
