"""Booking models."""

from devevent.domains.bookings.models.booking import Booking

__all__ = ["Booking"]
