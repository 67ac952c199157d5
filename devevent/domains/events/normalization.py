"""Normalization rules applied to events before they are saved."""

from __future__ import annotations

import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Union

from devevent.domains.events.models import EVENT_MODES
from devevent.errors import ValidationError

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")
# H:MM, HH:MM, H:MM:SS or HH:MM:SS
_TIME_PATTERN = re.compile(r"^([0-9]{1,2}):([0-9]{2})(?::([0-9]{2}))?$")
# Tried in order before falling back to ISO 8601 parsing.
_DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def slugify(title: str) -> str:
    """Lower-case, trim, collapse non-alphanumeric runs to one hyphen, strip edge hyphens."""
    return _NON_ALNUM_RUN.sub("-", title.lower().strip()).strip("-")


def normalize_date(value: Union[str, date, datetime]) -> str:
    """Return an ISO calendar date (``YYYY-MM-DD``); never defaults on bad input."""
    if isinstance(value, datetime):
        return _utc_date(value).isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = (value or "").strip()
    if not text:
        raise ValidationError("Invalid event date")
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt).date().isoformat()
        except ValueError:
            continue
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        raise ValidationError("Invalid event date") from None
    return _utc_date(parsed).isoformat()


def _utc_date(value: datetime) -> date:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.date()


def normalize_time(value: str) -> str:
    """Return 24h ``HH:MM``; seconds are accepted and dropped."""
    match = _TIME_PATTERN.match((value or "").strip())
    if not match:
        raise ValidationError("Invalid event time format; expected HH:MM (24h)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    seconds = int(match.group(3) or 0)
    if hours > 23 or minutes > 59 or seconds > 59:
        raise ValidationError("Invalid event time value")
    return f"{hours:02d}:{minutes:02d}"


def normalize_mode(value: str) -> str:
    mode = (value or "").strip().lower()
    if mode not in EVENT_MODES:
        raise ValidationError(f'Field "mode" must be one of: {", ".join(EVENT_MODES)}')
    return mode


def ensure_non_empty(value: str, field: str) -> str:
    text = (value or "").strip() if isinstance(value, str) else ""
    if not text:
        raise ValidationError(f'Field "{field}" is required and cannot be empty')
    return text


def normalize_lines(values: Iterable[str], field: str, *, unique: bool = False, max_length: int = 0) -> List[str]:
    """Trim entries, drop blanks and require at least one.

    With ``unique``, case-insensitive duplicates collapse onto their first spelling.
    """
    cleaned: List[str] = []
    seen = set()
    for raw in values or []:
        if not isinstance(raw, str):
            raise ValidationError(f'Field "{field}" must contain only text')
        text = raw.strip()
        if not text:
            continue
        if max_length and len(text) > max_length:
            raise ValidationError(f'Entries of "{field}" must be at most {max_length} characters')
        key = text.lower()
        if unique and key in seen:
            continue
        seen.add(key)
        cleaned.append(text)
    if not cleaned:
        raise ValidationError(f'Field "{field}" is required and cannot be empty')
    return cleaned
