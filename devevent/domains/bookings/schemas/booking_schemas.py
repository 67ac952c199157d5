"""Booking request/response schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class BookingCreate(BaseModel):
    event_id: int = Field(gt=0)
    email: str = Field(min_length=1, max_length=320)


class BookingResponse(BaseModel):
    id: int
    event_id: int
    email: str
    created_at: str
