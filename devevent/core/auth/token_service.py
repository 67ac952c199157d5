"""Admin token issuance and verification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException
from jwt import PyJWTError

from devevent.core.auth.constants import ADMIN_ROLE, ADMIN_SUBJECT, ADMIN_TOKEN_TTL


@dataclass(frozen=True)
class AdminTokenPayload:
    """Decoded admin claim. ``role`` is whatever the token carried; callers check it."""

    role: Optional[str]
    subject: Optional[str]
    expires_at: Optional[datetime]

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def issue_admin_token() -> str:
    """Sign a credential embedding ``{"role": "admin"}``, valid for seven days."""
    return create_access_token(
        identity=ADMIN_SUBJECT,
        additional_claims={"role": ADMIN_ROLE},
        expires_delta=ADMIN_TOKEN_TTL,
    )


def verify_admin_token(token: Optional[str]) -> Optional[AdminTokenPayload]:
    """Return the decoded payload, or None for any invalid token.

    Malformed strings, foreign signatures and expired tokens are deliberately
    indistinguishable: callers only need allow/deny.
    """
    if not token or not isinstance(token, str):
        return None
    try:
        claims = decode_token(token)
    except (PyJWTError, JWTExtendedException):
        return None
    exp = claims.get("exp")
    return AdminTokenPayload(
        role=claims.get("role"),
        subject=claims.get("sub"),
        expires_at=datetime.fromtimestamp(exp, tz=timezone.utc) if exp else None,
    )
