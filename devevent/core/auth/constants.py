"""Admin session constants shared by the token service, gate and handlers."""

from __future__ import annotations

from devevent.config import ADMIN_COOKIE_NAME, ADMIN_TOKEN_TTL

ADMIN_ROLE = "admin"
ADMIN_SUBJECT = "admin"

ADMIN_PATH_PREFIX = "/admin"
ADMIN_LOGIN_PATH = "/admin/login"

__all__ = [
    "ADMIN_COOKIE_NAME",
    "ADMIN_TOKEN_TTL",
    "ADMIN_ROLE",
    "ADMIN_SUBJECT",
    "ADMIN_PATH_PREFIX",
    "ADMIN_LOGIN_PATH",
]
