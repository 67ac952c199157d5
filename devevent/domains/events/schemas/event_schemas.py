"""Event request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from devevent.core.utils.validation import parse_json_list


class EventDraft(BaseModel):
    """Admin-submitted event fields. ``agenda`` and ``tags`` arrive JSON-serialized."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    overview: str = Field(min_length=1)
    venue: str = Field(min_length=1, max_length=255)
    location: str = Field(min_length=1, max_length=255)
    date: str = Field(min_length=1, max_length=64)
    time: str = Field(min_length=1, max_length=16)
    mode: str = Field(min_length=1, max_length=16)
    audience: str = Field(min_length=1, max_length=255)
    organizer: str = Field(min_length=1, max_length=255)
    agenda: List[str] = Field(min_length=1)
    tags: List[str] = Field(min_length=1)

    @field_validator("agenda", "tags", mode="before")
    @classmethod
    def parse_serialized_list(cls, value, info: ValidationInfo) -> List[str]:
        return parse_json_list(value, info.field_name)


class EventListFilter(BaseModel):
    search: Optional[str] = Field(default=None, max_length=255)


class EventResponse(BaseModel):
    id: int
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    agenda: List[str]
    organizer: str
    tags: List[str]
    created_at: str
    updated_at: str


class EventSummary(BaseModel):
    id: int
    title: str
    slug: str
    date: str
    time: str
