"""Event schemas."""

from devevent.domains.events.schemas.event_schemas import (
    EventDraft,
    EventListFilter,
    EventResponse,
    EventSummary,
)

__all__ = ["EventDraft", "EventListFilter", "EventResponse", "EventSummary"]
