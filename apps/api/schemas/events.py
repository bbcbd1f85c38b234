from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictInt, field_validator


class EventCreateRequest(BaseModel):
    # required fields are validated by the events service
    name: Optional[str] = None
    time: Optional[dt.datetime] = Field(default=None, description="ISO-8601 start datetime")
    duration: Optional[StrictInt] = Field(default=None, description="Length in minutes")
    type: Optional[str] = None
    description: Optional[str] = None

    @field_validator("time", mode="before")
    @classmethod
    def _iso_time_only(cls, value: Any) -> Any:
        if value is None:
            return value
        if not isinstance(value, str):
            raise ValueError("time must be an ISO-8601 string")
        try:
            float(value)
        except ValueError:
            return value
        raise ValueError("time must be an ISO-8601 string, not a timestamp")


class EventResponse(BaseModel):
    id: str
    name: str
    time: dt.datetime
    duration: int
    type: str
    description: Optional[str]
