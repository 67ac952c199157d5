"""Admin event form descriptors.

The admin UI renders one form for both creating and editing. The mode is a
tagged variant: ``CreateEventForm`` or ``EditEventForm(event)``, and
``build_event_form`` is the single place that turns either into field
descriptors, initial values and the submit target.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from typing import Union

from flask import url_for

from devevent.domains.events.models import EVENT_MODES, Event


@dataclass(frozen=True)
class CreateEventForm:
    pass


@dataclass(frozen=True)
class EditEventForm:
    event: Event


EventFormMode = Union[CreateEventForm, EditEventForm]


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    input_type: str
    required: bool = True
    value: str = ""


# (name, label, input type); agenda and tags are submitted as JSON arrays.
EVENT_FORM_FIELDS = (
    ("title", "Event Title", "text"),
    ("description", "Event Description", "textarea"),
    ("overview", "Overview", "textarea"),
    ("venue", "Venue", "text"),
    ("location", "Location", "text"),
    ("date", "Date", "date"),
    ("time", "Time", "time"),
    ("mode", "Mode", "select"),
    ("audience", "Audience", "text"),
    ("organizer", "Organizer", "text"),
    ("agenda", "Agenda", "json-list"),
    ("tags", "Tags", "json-list"),
    ("image", "Image", "file"),
)


def _initial_values(event: Event) -> dict:
    values = {
        name: getattr(event, name) or ""
        for name, _, input_type in EVENT_FORM_FIELDS
        if input_type not in ("json-list", "file")
    }
    values["agenda"] = json.dumps(list(event.agenda or []))
    values["tags"] = json.dumps(event.tags)
    # File inputs cannot be prefilled; the current image is shown instead.
    values["image"] = ""
    return values


def build_event_form(mode: EventFormMode) -> dict:
    if isinstance(mode, EditEventForm):
        event = mode.event
        values = _initial_values(event)
        header = {
            "form": "edit",
            "method": "PUT",
            "action": url_for("event_api.update_event", slug=event.slug),
            "current_image": event.image,
        }
        image_required = False
    else:
        values = {}
        header = {"form": "create", "method": "POST", "action": url_for("event_api.create_event")}
        image_required = True

    fields = [
        FormField(
            name=name,
            label=label,
            input_type=input_type,
            required=image_required if name == "image" else True,
            value=values.get(name, ""),
        )
        for name, label, input_type in EVENT_FORM_FIELDS
    ]
    return {
        **header,
        "encoding": "multipart/form-data",
        "mode_options": list(EVENT_MODES),
        "fields": [asdict(field) for field in fields],
    }
