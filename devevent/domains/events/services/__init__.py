"""Event domain services."""

from devevent.domains.events.services.event_service import (
    create_event,
    delete_event,
    event_exists,
    find_event_by_slug,
    find_events,
    import_event,
    update_event,
)

__all__ = [
    "create_event",
    "import_event",
    "update_event",
    "delete_event",
    "find_events",
    "find_event_by_slug",
    "event_exists",
]
