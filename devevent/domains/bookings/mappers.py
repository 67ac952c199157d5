"""Booking mappers for DTO responses."""

from __future__ import annotations

from devevent.domains.bookings.models import Booking
from devevent.domains.bookings.schemas import BookingResponse


def map_booking(booking: Booking) -> dict:
    return BookingResponse(
        id=booking.id,
        event_id=booking.event_id,
        email=booking.email,
        created_at=booking.created_at.isoformat() if booking.created_at else "",
    ).model_dump()
