import pytest

from devevent import create_app
from devevent.config import TestingConfig, validate_config
from devevent.errors import ConfigurationError

pytestmark = pytest.mark.unit


def _settings(**overrides):
    settings = {
        "JWT_SECRET_KEY": "secret",
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "MEDIA_BACKEND": "local",
    }
    settings.update(overrides)
    return settings


def test_complete_settings_pass():
    validate_config(_settings())


@pytest.mark.parametrize(
    "key,env_name",
    [("JWT_SECRET_KEY", "ADMIN_JWT_SECRET"), ("SQLALCHEMY_DATABASE_URI", "DATABASE_URL")],
)
def test_missing_required_setting_names_env_var(key, env_name):
    with pytest.raises(ConfigurationError, match=env_name):
        validate_config(_settings(**{key: None}))


def test_unknown_media_backend_fails():
    with pytest.raises(ConfigurationError, match="MEDIA_BACKEND"):
        validate_config(_settings(MEDIA_BACKEND="s3"))


def test_cloudinary_backend_needs_credentials():
    with pytest.raises(ConfigurationError, match="CLOUDINARY_API_SECRET"):
        validate_config(
            _settings(
                MEDIA_BACKEND="cloudinary",
                CLOUDINARY_CLOUD_NAME="demo",
                CLOUDINARY_API_KEY="key",
                CLOUDINARY_API_SECRET="",
            )
        )


def test_create_app_fails_fast_without_secret(monkeypatch):
    monkeypatch.setattr(TestingConfig, "JWT_SECRET_KEY", None)
    with pytest.raises(ConfigurationError, match="ADMIN_JWT_SECRET"):
        create_app("testing")


def test_testing_app_uses_cookie_transport():
    app = create_app("testing")
    assert app.config["JWT_TOKEN_LOCATION"] == ["cookies"]
    assert app.config["JWT_ACCESS_COOKIE_NAME"] == "admin-token"
    assert app.config["JWT_COOKIE_SAMESITE"] == "Strict"


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json() == {"ok": True}
