"""Event services: validation, normalization, persistence and search.

The service owns every event invariant. Callers pass an ``EventDraft`` (already
shape-checked at the request boundary) and, for creation, the image bytes;
the service trims and normalizes fields, derives the slug, rejects slug
collisions before anything is written, uploads the image and persists.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from flask import current_app

from devevent.core.media.storage import ImageUpload, get_media_storage
from devevent.domains.events.models import Event, EventTag
from devevent.domains.events.normalization import (
    ensure_non_empty,
    normalize_date,
    normalize_lines,
    normalize_mode,
    normalize_time,
    slugify,
)
from devevent.domains.events.repository import EventRepository
from devevent.domains.events.schemas import EventDraft
from devevent.errors import ConflictError, DevEventError, NotFoundError, ValidationError
from devevent.extensions import db

logger = logging.getLogger(__name__)

TEXT_FIELDS = (
    "title",
    "description",
    "overview",
    "venue",
    "location",
    "audience",
    "organizer",
)
TAG_MAX_LENGTH = 64

repository = EventRepository()


def find_events(search_text: Optional[str] = None) -> List[Event]:
    """All events newest first, or those matching ``search_text``.

    A match is a case-insensitive substring of the title, a case-insensitive
    substring of the audience, or a tag equal to the text ignoring case.
    """
    needle = (search_text or "").strip()
    if not needle:
        return repository.find()
    folded = needle.lower()
    like = f"%{_escape_like(folded)}%"
    criterion = db.or_(
        Event.title_normalized.like(like, escape="\\"),
        Event.audience_normalized.like(like, escape="\\"),
        Event.tag_rows.any(EventTag.value_normalized == folded),
    )
    return repository.find(criterion)


def find_event_by_slug(slug: str) -> Event:
    normalized = (slug or "").strip().lower()
    if not normalized:
        raise ValidationError("Invalid or missing slug parameter")
    event = repository.find_one(slug=normalized)
    if event is None:
        raise NotFoundError(f"Event with slug '{normalized}' not found")
    return event


def event_exists(event_id: int) -> bool:
    return repository.find_one(id=event_id) is not None


def create_event(draft: EventDraft, image: Optional[ImageUpload]) -> Event:
    """Create an event; the image is mandatory."""
    if image is None or not image.data:
        raise ValidationError("Image file is required")
    _check_image(image)

    event = Event()
    _apply_draft(event, draft)
    _assign_slug(event, title_changed=True)

    event.image = _upload(image)
    repository.create(event)
    logger.info("Created event %s", event.slug)
    return event


def import_event(draft: EventDraft, image_url: str) -> Event:
    """Create an event whose image is already hosted (used by the seed command)."""
    event = Event()
    _apply_draft(event, draft)
    event.image = ensure_non_empty(image_url, "image")
    _assign_slug(event, title_changed=True)
    repository.create(event)
    logger.info("Imported event %s", event.slug)
    return event


def update_event(slug: str, draft: EventDraft, image: Optional[ImageUpload] = None) -> Event:
    """Overwrite an event from ``draft``; without a new image the stored one is kept."""
    event = find_event_by_slug(slug)
    if image is not None and image.data:
        _check_image(image)
    else:
        image = None

    previous_title = event.title
    try:
        _apply_draft(event, draft)
        _assign_slug(event, title_changed=event.title != previous_title)
        if image is not None:
            event.image = _upload(image)
    except DevEventError:
        # Drop in-memory edits so nothing half-applied can be flushed later.
        db.session.rollback()
        raise
    repository.save(event)
    logger.info("Updated event %s", event.slug)
    return event


def delete_event(slug: str) -> None:
    event = find_event_by_slug(slug)
    repository.delete(event)
    logger.info("Deleted event %s", event.slug)


# --- helpers ---


def _apply_draft(event: Event, draft: EventDraft) -> None:
    for field in TEXT_FIELDS:
        setattr(event, field, ensure_non_empty(getattr(draft, field), field))
    event.title_normalized = event.title.lower()
    event.audience_normalized = event.audience.lower()
    event.mode = normalize_mode(draft.mode)
    event.date = normalize_date(draft.date)
    event.time = normalize_time(draft.time)
    event.agenda = normalize_lines(draft.agenda, "agenda")
    event.set_tags(normalize_lines(draft.tags, "tags", unique=True, max_length=TAG_MAX_LENGTH))


def _assign_slug(event: Event, *, title_changed: bool) -> None:
    # Only regenerate the slug when the title changed or none exists yet.
    if not (title_changed or not event.slug):
        return
    slug = slugify(event.title)
    if not slug:
        raise ValidationError('Field "title" must contain at least one letter or digit')
    with db.session.no_autoflush:
        clash = repository.find_one(slug=slug)
    if clash is not None and clash is not event:
        raise ConflictError(f"An event with slug '{slug}' already exists")
    event.slug = slug


def _check_image(image: ImageUpload) -> None:
    allowed = current_app.config.get("UPLOAD_ALLOWED_EXTENSIONS") or set()
    if image.extension not in allowed:
        raise ValidationError(f"Unsupported image type; allowed: {', '.join(sorted(allowed))}")


def _upload(image: ImageUpload) -> str:
    folder = current_app.config.get("MEDIA_FOLDER", "DevEvent")
    return get_media_storage().upload(image, folder)


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
