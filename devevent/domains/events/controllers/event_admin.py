"""Admin area endpoints behind the request gate (dashboard and form descriptors)."""

from __future__ import annotations

from flask import Blueprint, jsonify

from devevent.core.utils.decorators import admin_required
from devevent.domains.events.forms import CreateEventForm, EditEventForm, build_event_form
from devevent.domains.events.mappers import map_event_summary
from devevent.domains.events.services import event_service

event_admin_bp = Blueprint("event_admin", __name__)


@event_admin_bp.get("/dashboard")
@admin_required
def dashboard():
    events = event_service.find_events()
    return jsonify({"ok": True, "events": [map_event_summary(e) for e in events], "total": len(events)})


@event_admin_bp.get("/events/new")
@admin_required
def new_event_form():
    return jsonify({"ok": True, "form": build_event_form(CreateEventForm())})


@event_admin_bp.get("/events/<slug>/edit")
@admin_required
def edit_event_form(slug: str):
    event = event_service.find_event_by_slug(slug)
    return jsonify({"ok": True, "form": build_event_form(EditEventForm(event))})
