import io
import json
import shutil
from datetime import timedelta

import pytest
from flask_jwt_extended import create_access_token

from devevent import create_app
from devevent.config import ADMIN_COOKIE_NAME
from devevent.core.auth.token_service import issue_admin_token
from devevent.core.media.storage import MediaStorage
from devevent.extensions import db


# ==================== Pytest Markers ====================
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (database, API)")


class FakeMediaStorage(MediaStorage):
    """Records uploads instead of sending them anywhere."""

    def __init__(self):
        self.uploads = []

    def upload(self, image, folder):
        self.uploads.append((folder, image))
        return f"https://media.test/{folder}/{len(self.uploads)}.{image.extension or 'bin'}"


@pytest.fixture()
def media():
    return FakeMediaStorage()


@pytest.fixture()
def app(media):
    """
    Per-test app on a fresh in-memory database.

    No app context stays pushed while the test runs: each client request gets
    its own context and session, as it would in production.
    """
    app = create_app("testing")
    app.extensions["media_storage"] = media
    with app.app_context():
        db.create_all()
    try:
        yield app
    finally:
        with app.app_context():
            db.session.remove()
            db.drop_all()
        shutil.rmtree(app.config["UPLOAD_FOLDER"], ignore_errors=True)


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_token(app):
    with app.app_context():
        return issue_admin_token()


@pytest.fixture()
def admin_client(client, admin_token):
    client.set_cookie(ADMIN_COOKIE_NAME, admin_token)
    return client


@pytest.fixture()
def make_token(app):
    """Sign arbitrary tokens with the app key (other roles, expired ones)."""

    def _make(role="admin", expires_in=timedelta(days=7)):
        with app.app_context():
            return create_access_token(
                identity="someone",
                additional_claims={"role": role},
                expires_delta=expires_in,
            )

    return _make


@pytest.fixture()
def event_form():
    """Multipart form fields for a valid event; overrides replace single fields."""

    def _form(**overrides):
        form = {
            "title": "React Summit 2025",
            "description": "The biggest React conference worldwide.",
            "overview": "Two days of talks on React and its ecosystem.",
            "venue": "Kromhouthal",
            "location": "Amsterdam, Netherlands",
            "date": "2025-06-03",
            "time": "09:00",
            "mode": "hybrid",
            "audience": "React developers",
            "organizer": "GitNation",
            "agenda": json.dumps(["Registration", "Keynote", "Talks"]),
            "tags": json.dumps(["react", "frontend"]),
        }
        form.update(overrides)
        return form

    return _form


@pytest.fixture()
def image_file():
    def _image(name="poster.png", data=b"\x89PNG fake image bytes"):
        return (io.BytesIO(data), name)

    return _image


@pytest.fixture()
def create_event(admin_client, event_form, image_file):
    """Create an event through the API and return its JSON representation."""

    def _create(**overrides):
        data = event_form(**overrides)
        data["image"] = image_file()
        resp = admin_client.post("/api/events", data=data, content_type="multipart/form-data")
        assert resp.status_code == 201, resp.get_json()
        return resp.get_json()["event"]

    return _create
