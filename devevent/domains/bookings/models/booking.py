"""Event booking model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from devevent.domains.events.models.event import utcnow
from devevent.extensions import db


class Booking(db.Model):
    # event_id is checked when the booking is created but is not a foreign key:
    # deleting an event leaves its bookings in place.
    __tablename__ = "booking"

    id: Mapped[int] = mapped_column(primary_key=True)
    event_id: Mapped[int] = mapped_column(db.Integer, index=True, nullable=False)
    email: Mapped[str] = mapped_column(db.String(320), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)
