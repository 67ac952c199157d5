from datetime import datetime, timedelta, timezone

import jwt
import pytest

from devevent.core.auth.token_service import issue_admin_token, verify_admin_token

pytestmark = pytest.mark.unit


def test_issued_token_round_trips_as_admin(app):
    with app.app_context():
        token = issue_admin_token()
        payload = verify_admin_token(token)
    assert payload is not None
    assert payload.is_admin
    assert payload.role == "admin"


def test_issued_token_expires_in_seven_days(app):
    before = datetime.now(timezone.utc)
    with app.app_context():
        payload = verify_admin_token(issue_admin_token())
    lifetime = payload.expires_at - before
    assert timedelta(days=7) - timedelta(minutes=1) < lifetime <= timedelta(days=7) + timedelta(seconds=5)


@pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c", 12345])
def test_malformed_tokens_are_invalid(app, token):
    with app.app_context():
        assert verify_admin_token(token) is None


def test_token_signed_with_other_key_is_invalid(app):
    now = datetime.now(timezone.utc)
    forged = jwt.encode(
        {
            "sub": "admin",
            "role": "admin",
            "type": "access",
            "fresh": False,
            "jti": "forged",
            "iat": now,
            "nbf": now,
            "exp": now + timedelta(days=1),
        },
        "some-other-secret-that-is-long-enough",
        algorithm="HS256",
    )
    with app.app_context():
        assert verify_admin_token(forged) is None


def test_expired_token_is_invalid(app, make_token):
    token = make_token(expires_in=timedelta(seconds=-10))
    with app.app_context():
        assert verify_admin_token(token) is None


def test_token_with_other_role_decodes_but_is_not_admin(app, make_token):
    token = make_token(role="editor")
    with app.app_context():
        payload = verify_admin_token(token)
    assert payload is not None
    assert payload.role == "editor"
    assert not payload.is_admin
