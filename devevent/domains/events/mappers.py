"""Event mappers for DTO responses."""

from __future__ import annotations

from devevent.domains.events.models import Event
from devevent.domains.events.schemas import EventResponse, EventSummary


def map_event(event: Event) -> dict:
    return EventResponse(
        id=event.id,
        title=event.title,
        slug=event.slug,
        description=event.description,
        overview=event.overview,
        image=event.image,
        venue=event.venue,
        location=event.location,
        date=event.date,
        time=event.time,
        mode=event.mode,
        audience=event.audience,
        agenda=list(event.agenda or []),
        organizer=event.organizer,
        tags=event.tags,
        created_at=event.created_at.isoformat() if event.created_at else "",
        updated_at=event.updated_at.isoformat() if event.updated_at else "",
    ).model_dump()


def map_event_summary(event: Event) -> dict:
    return EventSummary(
        id=event.id,
        title=event.title,
        slug=event.slug,
        date=event.date,
        time=event.time,
    ).model_dump()
