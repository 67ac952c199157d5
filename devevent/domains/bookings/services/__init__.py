"""Booking services."""

from devevent.domains.bookings.services.booking_service import create_booking, normalize_email

__all__ = ["create_booking", "normalize_email"]
