"""Admin authentication service layer."""

from __future__ import annotations

import logging
import secrets

from flask import current_app

from devevent.core.auth.token_service import issue_admin_token
from devevent.errors import AuthenticationError

logger = logging.getLogger(__name__)


def _matches(provided: str, expected: str) -> bool:
    return secrets.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


def authenticate_admin(username: str, password: str) -> str:
    """Check the configured admin credentials and return a freshly signed token."""
    expected_username = current_app.config.get("ADMIN_USERNAME") or ""
    expected_password = current_app.config.get("ADMIN_PASSWORD") or ""
    if not expected_username or not expected_password:
        logger.warning("Admin login attempted but ADMIN_USERNAME/ADMIN_PASSWORD are not configured")
        raise AuthenticationError()

    # Evaluate both comparisons so timing does not reveal which one failed.
    username_ok = _matches(username, expected_username)
    password_ok = _matches(password, expected_password)
    if not (username_ok and password_ok):
        logger.warning("Rejected admin login attempt")
        raise AuthenticationError()

    logger.info("Admin logged in")
    return issue_admin_token()
