"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask, current_app, request

from ..extensions import db, login_manager
from .error_handlers import AuthenticationError, register_error_handlers
from .logging_config import setup_logging
from .module_registry import register_default_modules


def configure_logging(app: Flask) -> None:
    """Route the Flask app logger through the shared VocabReview handlers."""

    logger = setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON_FORMAT", False),
    )
    app.logger.handlers = list(logger.handlers)
    app.logger.setLevel(logger.level)
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions with the Flask app instance."""

    db.init_app(app)
    login_manager.init_app(app)


def register_request_loader(app: Flask) -> None:
    """Resolve the learner from the identity header set by the auth gateway."""

    @login_manager.request_loader
    def load_user_from_request(req):
        from ..models import User

        raw_user_id = req.headers.get(current_app.config.get("AUTH_USER_HEADER", "X-User-Id"))
        if not raw_user_id or not raw_user_id.isdigit():
            return None
        return db.session.get(User, int(raw_user_id))

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        current_app.logger.info("Rejected unauthenticated request to %s", request.path)
        raise AuthenticationError()


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def initialize_database(app: Flask) -> None:
    """Create database tables for every registered model."""

    from .. import models  # noqa: F401  (registers the mappers)

    db.create_all()
    app.logger.info("Database tables ready at %s", app.config.get("SQLALCHEMY_DATABASE_URI"))


__all__ = [
    "configure_logging",
    "register_extensions",
    "register_request_loader",
    "register_error_handlers",
    "register_blueprints",
    "initialize_database",
]
