"""DevEvent application factory and bootstrap."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from flask import Flask
from sqlalchemy.exc import SQLAlchemyError

from devevent.config import config_by_name, validate_config
from devevent.core.auth.gate import register_request_gate
from devevent.core.database import init_database
from devevent.core.media.storage import init_media
from devevent.errors import DevEventError, InfrastructureError
from devevent.extensions import init_extensions


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the DevEvent Flask application.

    Raises:
        ConfigurationError: If the signing secret, database URL or selected
            media backend settings are missing.
    """
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(__name__, instance_path=str(instance_root), instance_relative_config=True)
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    validate_config(app.config)
    _configure_logging(app)

    # Ensure the local media folder exists when images are stored on disk
    uploads_path = Path(app.config.get("UPLOAD_FOLDER", "instance/uploads"))
    if not uploads_path.is_absolute():
        uploads_path = project_root / uploads_path
    if app.config.get("MEDIA_BACKEND") == "local":
        uploads_path.mkdir(parents=True, exist_ok=True)
    app.config["UPLOAD_FOLDER"] = str(uploads_path)

    init_extensions(app)
    init_database(app)
    init_media(app)
    register_request_gate(app)
    _register_blueprints(app)
    _register_error_handlers(app)

    @app.get("/health")
    def health():
        return {"ok": True}, 200

    from devevent.scripts.seed_events import register_commands

    register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = str(app.config.get("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("devevent").setLevel(level)
    app.logger.setLevel(level)


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from devevent.core.auth.controllers import auth_bp
    from devevent.core.media.controllers import media_bp
    from devevent.domains.bookings.controllers import booking_api_bp
    from devevent.domains.events.controllers import event_admin_bp, event_api_bp

    app.register_blueprint(auth_bp, url_prefix="/admin")
    app.register_blueprint(event_admin_bp, url_prefix="/admin")
    app.register_blueprint(event_api_bp, url_prefix="/api/events")
    app.register_blueprint(booking_api_bp, url_prefix="/api/bookings")
    app.register_blueprint(media_bp, url_prefix="/uploads")


def _register_error_handlers(app: Flask) -> None:
    """JSON error responses for the error taxonomy and anything unexpected."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(DevEventError)
    def _domain_error(exc: DevEventError):
        if isinstance(exc, InfrastructureError):
            app.logger.error("Infrastructure failure: %s (cause: %r)", exc, exc.__cause__)
        return exc.to_dict(), exc.status_code

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {
            "ok": False,
            "error": exc.name.lower().replace(" ", "_"),
            "message": exc.description,
        }, exc.code

    @app.errorhandler(SQLAlchemyError)
    def _database_error(exc: SQLAlchemyError):
        app.logger.exception("Database error: %s", exc)
        return InfrastructureError().to_dict(), 500

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500
