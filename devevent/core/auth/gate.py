"""Edge request gate for the admin area.

Runs before every request. Navigation into ``/admin`` needs a valid admin
cookie, except for the login page itself. The gate only steers navigation;
mutating handlers verify the credential again on their own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from flask import Flask, redirect, request

from devevent.core.auth.constants import (
    ADMIN_COOKIE_NAME,
    ADMIN_LOGIN_PATH,
    ADMIN_PATH_PREFIX,
    ADMIN_ROLE,
)
from devevent.core.auth.token_service import verify_admin_token


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    redirect_to: Optional[str] = None


ALLOW = GateDecision(allowed=True)
REDIRECT_TO_LOGIN = GateDecision(allowed=False, redirect_to=ADMIN_LOGIN_PATH)


def _normalize_path(path: str) -> str:
    return path.rstrip("/") or "/"


def is_admin_path(path: str) -> bool:
    path = _normalize_path(path)
    return path == ADMIN_PATH_PREFIX or path.startswith(ADMIN_PATH_PREFIX + "/")


def evaluate_request(path: str, token: Optional[str]) -> GateDecision:
    """Decide whether a request to ``path`` carrying ``token`` may proceed."""
    if _normalize_path(path) == ADMIN_LOGIN_PATH:
        return ALLOW
    if not is_admin_path(path):
        return ALLOW
    if not token:
        return REDIRECT_TO_LOGIN
    payload = verify_admin_token(token)
    if payload is None or payload.role != ADMIN_ROLE:
        return REDIRECT_TO_LOGIN
    return ALLOW


def register_request_gate(app: Flask) -> None:
    @app.before_request
    def _admin_gate():
        decision = evaluate_request(request.path, request.cookies.get(ADMIN_COOKIE_NAME))
        if decision.allowed:
            return None
        return redirect(decision.redirect_to)
