"""Event domain controllers."""

from devevent.domains.events.controllers.event_admin import event_admin_bp
from devevent.domains.events.controllers.event_api import event_api_bp

__all__ = ["event_admin_bp", "event_api_bp"]
