"""Event catalog models."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, List

from sqlalchemy.orm import Mapped, mapped_column, relationship

from devevent.extensions import db

EVENT_MODES = ("online", "offline", "hybrid")


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Event(db.Model):
    """
    One advertised event.

    ``date`` is stored as ``YYYY-MM-DD`` and ``time`` as 24h ``HH:MM``; the
    event service normalizes both before every save. Tags live in
    ``event_tag`` so exact case-insensitive tag lookups stay indexed.
    """

    __tablename__ = "event"
    __table_args__ = (db.Index("ix_event_created_at", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(db.String(255), nullable=False)
    slug: Mapped[str] = mapped_column(db.String(255), unique=True, index=True, nullable=False)
    description: Mapped[str] = mapped_column(db.Text, nullable=False)
    overview: Mapped[str] = mapped_column(db.Text, nullable=False)
    image: Mapped[str] = mapped_column(db.String(1024), nullable=False)
    venue: Mapped[str] = mapped_column(db.String(255), nullable=False)
    location: Mapped[str] = mapped_column(db.String(255), nullable=False)
    date: Mapped[str] = mapped_column(db.String(10), nullable=False)
    time: Mapped[str] = mapped_column(db.String(5), nullable=False)
    mode: Mapped[str] = mapped_column(db.String(16), nullable=False)
    audience: Mapped[str] = mapped_column(db.String(255), nullable=False)
    # Lower-cased in Python so search folds non-ASCII case on every backend.
    title_normalized: Mapped[str] = mapped_column(db.String(512), nullable=False, default="")
    audience_normalized: Mapped[str] = mapped_column(db.String(512), nullable=False, default="")
    agenda: Mapped[list] = mapped_column(db.JSON, default=list, nullable=False)
    organizer: Mapped[str] = mapped_column(db.String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=utcnow, onupdate=utcnow)

    tag_rows: Mapped[List["EventTag"]] = relationship(
        "EventTag",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="EventTag.position",
        lazy="selectin",
    )

    @property
    def tags(self) -> List[str]:
        return [row.value for row in self.tag_rows]

    def set_tags(self, values: Iterable[str]) -> None:
        self.tag_rows = [
            EventTag(value=value, value_normalized=value.lower(), position=index)
            for index, value in enumerate(values)
        ]

    def __repr__(self) -> str:
        return f"<Event {self.slug}>"


class EventTag(db.Model):
    __tablename__ = "event_tag"
    __table_args__ = (db.Index("ix_event_tag_value_normalized", "value_normalized"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    event_id: Mapped[int] = mapped_column(
        db.ForeignKey("event.id", ondelete="CASCADE"), index=True, nullable=False
    )
    value: Mapped[str] = mapped_column(db.String(64), nullable=False)
    value_normalized: Mapped[str] = mapped_column(db.String(64), nullable=False)
    position: Mapped[int] = mapped_column(db.Integer, default=0, nullable=False)

    event: Mapped[Event] = relationship("Event", back_populates="tag_rows")
