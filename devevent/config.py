"""Application configuration for DevEvent."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Dict, Mapping, Optional, Type

from dotenv import load_dotenv
from sqlalchemy.engine.url import make_url

from devevent.errors import ConfigurationError

load_dotenv()

ADMIN_COOKIE_NAME = "admin-token"
ADMIN_TOKEN_TTL = timedelta(days=7)


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("1", "true", "yes")


def _engine_options_from_uri(uri: Optional[str]) -> dict:
    if not uri:
        return {}
    url = make_url(uri)
    # Always keep pool_pre_ping, vary connect_args by dialect.
    if url.get_backend_name() == "sqlite":
        return {"pool_pre_ping": True, "connect_args": {"timeout": 30}}
    if url.get_backend_name() in {"postgresql", "postgres"}:
        timeout = int(os.environ.get("DB_CONNECT_TIMEOUT_SECONDS", "10"))
        return {"pool_pre_ping": True, "connect_args": {"connect_timeout": timeout}}
    return {"pool_pre_ping": True}


class BaseConfig:
    """Base configuration loaded for all environments."""

    ADMIN_JWT_SECRET = os.environ.get("ADMIN_JWT_SECRET")
    SECRET_KEY = os.environ.get("SECRET_KEY") or ADMIN_JWT_SECRET
    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)

    # Equality-checked admin credentials (not hashed).
    ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME")
    ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD")

    # The admin credential travels only in an http-only, same-site-strict cookie.
    JWT_SECRET_KEY = ADMIN_JWT_SECRET
    JWT_TOKEN_LOCATION = ["cookies"]
    JWT_ACCESS_COOKIE_NAME = ADMIN_COOKIE_NAME
    JWT_ACCESS_COOKIE_PATH = "/"
    JWT_COOKIE_SAMESITE = "Strict"
    JWT_COOKIE_SECURE = _env_flag("COOKIE_SECURE")
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_ACCESS_TOKEN_EXPIRES = ADMIN_TOKEN_TTL

    RATELIMIT_DEFAULT = "200/hour"
    RATELIMIT_STORAGE_URI = os.environ.get("REDIS_URL", "memory://")
    RATELIMIT_ENABLED = _env_flag("RATELIMIT_ENABLED", "true")

    MAX_CONTENT_LENGTH = int(os.environ.get("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))
    UPLOAD_ALLOWED_EXTENSIONS = set(
        (os.environ.get("UPLOAD_ALLOWED_EXTENSIONS") or "png,jpg,jpeg,gif,webp,avif").split(",")
    )
    UPLOAD_FOLDER = os.environ.get("UPLOAD_FOLDER", "instance/uploads")

    # Media collaborator: "local" keeps files under UPLOAD_FOLDER, "cloudinary" uploads them.
    MEDIA_BACKEND = os.environ.get("MEDIA_BACKEND", "cloudinary")
    MEDIA_FOLDER = os.environ.get("MEDIA_FOLDER", "DevEvent")
    MEDIA_UPLOAD_TIMEOUT_SECONDS = int(os.environ.get("MEDIA_UPLOAD_TIMEOUT_SECONDS", "30"))
    CLOUDINARY_CLOUD_NAME = os.environ.get("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.environ.get("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.environ.get("CLOUDINARY_API_SECRET", "")

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"
    MEDIA_BACKEND = os.environ.get("MEDIA_BACKEND", "local")


class TestingConfig(BaseConfig):
    TESTING = True
    ENV = "testing"
    # In-memory SQLite; Flask-SQLAlchemy pins it to a single shared connection.
    SQLALCHEMY_DATABASE_URI = os.environ.get("TEST_DATABASE_URL", "sqlite://")
    SQLALCHEMY_ENGINE_OPTIONS = _engine_options_from_uri(SQLALCHEMY_DATABASE_URI)
    ADMIN_JWT_SECRET = "test-admin-jwt-secret-with-enough-length"
    JWT_SECRET_KEY = ADMIN_JWT_SECRET
    SECRET_KEY = "test-secret-key"
    ADMIN_USERNAME = "admin"
    ADMIN_PASSWORD = "admin-password"
    RATELIMIT_ENABLED = False
    MEDIA_BACKEND = "local"
    UPLOAD_FOLDER = os.environ.get("TEST_UPLOAD_FOLDER", "instance/test-uploads")


class ProductionConfig(BaseConfig):
    ENV = "production"
    JWT_COOKIE_SECURE = True


config_by_name: Dict[str, Type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    # CI pipelines set APP_ENV=ci; map to testing defaults.
    "ci": TestingConfig,
}

# Setting key -> environment variable operators must provide.
REQUIRED_SETTINGS = {
    "JWT_SECRET_KEY": "ADMIN_JWT_SECRET",
    "SQLALCHEMY_DATABASE_URI": "DATABASE_URL",
}
CLOUDINARY_SETTINGS = ("CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY", "CLOUDINARY_API_SECRET")
MEDIA_BACKENDS = ("local", "cloudinary")


def validate_config(config: Mapping) -> None:
    """Fail fast when settings the app cannot run without are absent."""
    missing = [env for key, env in REQUIRED_SETTINGS.items() if not config.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    backend = config.get("MEDIA_BACKEND")
    if backend not in MEDIA_BACKENDS:
        raise ConfigurationError(f"Unknown MEDIA_BACKEND {backend!r}; expected one of {', '.join(MEDIA_BACKENDS)}")
    if backend == "cloudinary":
        missing = [key for key in CLOUDINARY_SETTINGS if not config.get(key)]
        if missing:
            raise ConfigurationError(f"Missing Cloudinary settings: {', '.join(missing)}")
