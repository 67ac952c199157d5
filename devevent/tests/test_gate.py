from datetime import timedelta

import pytest

from devevent.config import ADMIN_COOKIE_NAME
from devevent.core.auth.gate import evaluate_request, is_admin_path

pytestmark = pytest.mark.integration


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/admin", True),
        ("/admin/", True),
        ("/admin/dashboard", True),
        ("/admin/events/new", True),
        ("/administrator", False),
        ("/api/events", False),
        ("/", False),
    ],
)
def test_is_admin_path(path, expected):
    assert is_admin_path(path) is expected


def test_public_paths_are_allowed_without_token(app):
    with app.app_context():
        assert evaluate_request("/api/events", None).allowed
        assert evaluate_request("/health", None).allowed


def test_login_page_is_always_allowed(app):
    with app.app_context():
        assert evaluate_request("/admin/login", None).allowed
        assert evaluate_request("/admin/login/", "garbage").allowed


def test_admin_path_without_token_redirects_to_login(app):
    with app.app_context():
        decision = evaluate_request("/admin/dashboard", None)
    assert not decision.allowed
    assert decision.redirect_to == "/admin/login"


def test_admin_path_with_valid_token_is_allowed(app, admin_token):
    with app.app_context():
        assert evaluate_request("/admin/dashboard", admin_token).allowed


def test_admin_path_with_other_role_redirects(app, make_token):
    with app.app_context():
        assert not evaluate_request("/admin/dashboard", make_token(role="viewer")).allowed


def test_admin_path_with_expired_token_redirects(app, make_token):
    token = make_token(expires_in=timedelta(seconds=-5))
    with app.app_context():
        assert not evaluate_request("/admin", token).allowed


def test_dashboard_redirects_anonymous_navigation(client):
    resp = client.get("/admin/dashboard")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/login")


def test_dashboard_redirects_invalid_cookie(client):
    client.set_cookie(ADMIN_COOKIE_NAME, "tampered.token.value")
    resp = client.get("/admin/events/new")
    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/login")


def test_login_page_reachable_without_cookie(client):
    resp = client.get("/admin/login")
    assert resp.status_code == 200
    assert resp.get_json()["submit"] == "/admin/login"


def test_dashboard_reachable_with_admin_cookie(admin_client):
    resp = admin_client.get("/admin/dashboard")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["ok"] is True
    assert body["events"] == []


def test_gate_does_not_protect_public_api(client):
    assert client.get("/api/events").status_code == 200
