"""Admin auth HTTP controllers (login/logout)."""

from __future__ import annotations

from flask import Blueprint, jsonify, request, url_for
from flask_jwt_extended import set_access_cookies, unset_access_cookies
from pydantic import ValidationError

from devevent.core.auth.auth_service import authenticate_admin
from devevent.core.auth.constants import ADMIN_TOKEN_TTL
from devevent.core.auth.schemas import AdminLoginRequest
from devevent.core.utils.validation import jsonable_errors
from devevent.extensions import limiter

auth_bp = Blueprint("admin_auth", __name__)


@auth_bp.get("/login")
def login_page():
    # Rendering lives in the frontend; describe what the login form posts.
    return jsonify(
        {
            "ok": True,
            "page": "admin_login",
            "fields": ["username", "password"],
            "submit": url_for("admin_auth.login"),
        }
    )


@auth_bp.post("/login")
@limiter.limit("10/minute")
def login():
    payload = request.get_json(silent=True) or {}
    try:
        data = AdminLoginRequest.model_validate(payload)
    except ValidationError as exc:
        return (
            jsonify({"ok": False, "error": "bad_request", "details": jsonable_errors(exc)}),
            400,
        )
    token = authenticate_admin(data.username, data.password)
    resp = jsonify({"ok": True, "message": "Login successful"})
    set_access_cookies(resp, token, max_age=int(ADMIN_TOKEN_TTL.total_seconds()))
    return resp


@auth_bp.post("/logout")
def logout():
    # Only the cookie is cleared; the signed token stays valid until it expires.
    resp = jsonify({"ok": True, "message": "Logged out"})
    unset_access_cookies(resp)
    return resp
