"""Booking services."""

from __future__ import annotations

import logging
import re

from sqlalchemy.exc import SQLAlchemyError

from devevent.core.database import connect
from devevent.domains.bookings.models import Booking
from devevent.domains.events.services import event_exists
from devevent.errors import InfrastructureError, ValidationError
from devevent.extensions import db

logger = logging.getLogger(__name__)

# Local and domain parts non-empty without whitespace or "@"; the domain has a dot.
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    normalized = (email or "").strip().lower()
    if not _EMAIL_PATTERN.match(normalized):
        raise ValidationError("A valid email address is required")
    return normalized


def create_booking(event_id: int, email: str) -> Booking:
    """Book ``event_id`` for ``email``; the event must exist right now."""
    normalized = normalize_email(email)
    connect()
    if not event_exists(event_id):
        raise ValidationError("Referenced event does not exist")

    booking = Booking(event_id=event_id, email=normalized)
    db.session.add(booking)
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Booking creation failed for event %s", event_id)
        raise InfrastructureError("Booking creation failed") from exc
    logger.info("Created booking %s for event %s", booking.id, event_id)
    return booking
