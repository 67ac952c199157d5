"""Input validation helpers."""

from __future__ import annotations

import json
from typing import Any, List

from pydantic import ValidationError as PydanticValidationError


def parse_json_list(raw: Any, field: str) -> List[str]:
    """Parse a JSON-serialized list of strings sent as a form field.

    Raises ValueError so pydantic field validators report it as a field error.
    """
    if isinstance(raw, list):
        values = raw
    else:
        try:
            values = json.loads(raw)
        except (TypeError, ValueError):
            raise ValueError(f"{field} must be a JSON array of strings") from None
    if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
        raise ValueError(f"{field} must be a JSON array of strings")
    return values


def jsonable_errors(exc: PydanticValidationError) -> list[dict]:
    errors = exc.errors(include_url=False)
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
    return errors
