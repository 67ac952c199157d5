"""Booking controllers."""

from devevent.domains.bookings.controllers.booking_api import booking_api_bp

__all__ = ["booking_api_bp"]
