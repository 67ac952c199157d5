"""Booking schemas."""

from devevent.domains.bookings.schemas.booking_schemas import BookingCreate, BookingResponse

__all__ = ["BookingCreate", "BookingResponse"]
