"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import g, jsonify, request

from devevent.core.auth.constants import ADMIN_COOKIE_NAME, ADMIN_ROLE
from devevent.core.auth.token_service import verify_admin_token
from devevent.errors import AuthorizationError, ForbiddenError, UnauthorizedError

F = TypeVar("F", bound=Callable)


def _deny(error: AuthorizationError):
    return jsonify(error.to_dict()), error.status_code


def admin_required(fn: F) -> F:
    """Re-verify the admin cookie at the handler, independent of the request gate.

    Missing cookie -> 401; invalid, expired or non-admin token -> 403.
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        token = request.cookies.get(ADMIN_COOKIE_NAME)
        if not token:
            return _deny(UnauthorizedError())
        payload = verify_admin_token(token)
        if payload is None or payload.role != ADMIN_ROLE:
            return _deny(ForbiddenError())
        g.admin = payload
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
