"""Event JSON API.

- GET    /api/events?search=   public list/search, newest first
- GET    /api/events/<slug>    public detail
- POST   /api/events           admin, multipart (image required)
- PUT    /api/events/<slug>    admin, multipart (image optional)
- DELETE /api/events/<slug>    admin
"""

from __future__ import annotations

from typing import Optional

from flask import Blueprint, jsonify, request
from pydantic import ValidationError

from devevent.core.media.storage import ImageUpload
from devevent.core.utils.decorators import admin_required
from devevent.core.utils.validation import jsonable_errors
from devevent.domains.events.mappers import map_event
from devevent.domains.events.schemas import EventDraft, EventListFilter
from devevent.domains.events.services import event_service

event_api_bp = Blueprint("event_api", __name__)


def _validation_failed(exc: ValidationError):
    return (
        jsonify(
            {
                "ok": False,
                "error": "validation_error",
                "message": "Invalid event data",
                "details": jsonable_errors(exc),
            }
        ),
        400,
    )


def _image_from_request() -> Optional[ImageUpload]:
    file = request.files.get("image")
    if file is None or not file.filename:
        return None
    data = file.read()
    if not data:
        return None
    return ImageUpload(data=data, filename=file.filename, content_type=file.mimetype)


@event_api_bp.get("")
def list_events():
    try:
        filters = EventListFilter.model_validate(request.args.to_dict())
    except ValidationError as exc:
        return _validation_failed(exc)
    events = event_service.find_events(filters.search)
    return jsonify(
        {
            "ok": True,
            "message": "Events fetched successfully",
            "events": [map_event(e) for e in events],
        }
    )


@event_api_bp.get("/<slug>")
def get_event(slug: str):
    event = event_service.find_event_by_slug(slug)
    return jsonify({"ok": True, "message": "Event fetched successfully", "event": map_event(event)})


@event_api_bp.post("")
@admin_required
def create_event():
    try:
        draft = EventDraft.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _validation_failed(exc)
    event = event_service.create_event(draft, _image_from_request())
    return (
        jsonify({"ok": True, "message": "Event created successfully", "event": map_event(event)}),
        201,
    )


@event_api_bp.put("/<slug>")
@admin_required
def update_event(slug: str):
    try:
        draft = EventDraft.model_validate(request.form.to_dict())
    except ValidationError as exc:
        return _validation_failed(exc)
    event = event_service.update_event(slug, draft, _image_from_request())
    return jsonify({"ok": True, "message": "Event updated successfully", "event": map_event(event)})


@event_api_bp.delete("/<slug>")
@admin_required
def delete_event(slug: str):
    event_service.delete_event(slug)
    return jsonify({"ok": True, "message": "Event deleted successfully"})
