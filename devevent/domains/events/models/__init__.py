"""Event catalog models."""

from devevent.domains.events.models.event import EVENT_MODES, Event, EventTag

__all__ = ["Event", "EventTag", "EVENT_MODES"]
