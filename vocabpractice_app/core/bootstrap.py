"""Bootstrap helpers for configuring the Flask application."""

from __future__ import annotations

from flask import Flask, current_app
from flask_login import current_user

from ..extensions import csrf_protect, db, login_manager
from ..modules.auth.config import AuthModuleDefaultConfig
from ..modules.practice.config import PracticeModuleDefaultConfig
from ..modules.word_sets.config import WordSetsModuleDefaultConfig
from .logging_config import setup_logging
from .module_registry import register_default_modules
from .signals import ALL_SIGNALS

MODULE_DEFAULT_CONFIGS = (
    AuthModuleDefaultConfig,
    PracticeModuleDefaultConfig,
    WordSetsModuleDefaultConfig,
)


def configure_logging(app: Flask) -> None:
    """Configure application logging if no handlers are present."""

    if app.logger.handlers:
        return

    setup_logging(app.logger, app.config.get("LOG_LEVEL", "INFO"), app.config.get("LOG_DIR"))
    app.logger.propagate = False
    app.logger.info("Flask app logger configured successfully.")


def register_extensions(app: Flask) -> None:
    """Initialize shared extensions and module defaults with the app instance."""

    for default_config in MODULE_DEFAULT_CONFIGS:
        for key in dir(default_config):
            if key.isupper():
                app.config.setdefault(key, getattr(default_config, key))

    db.init_app(app)
    login_manager.init_app(app)
    csrf_protect.init_app(app)


def register_context_processors(app: Flask) -> None:
    """Register the user loader and global template context."""

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import Teacher

        try:
            return db.session.get(Teacher, int(user_id))
        except ValueError:
            return None

    @app.context_processor
    def inject_user() -> dict[str, object]:
        from ..modules.auth.forms import LogoutForm

        return {"current_user": current_user, "logout_form": LogoutForm()}


def register_blueprints(app: Flask) -> None:
    """Register all default blueprints with the app."""

    register_default_modules(app)


def _log_signal(sender, **payload):
    current_app.logger.debug("Signal received from %s: %s", sender, payload)


def register_signal_handlers(app: Flask) -> None:
    """Log every domain signal the app emits."""

    for signal in ALL_SIGNALS:
        signal.connect(_log_signal)


def initialize_database(app: Flask) -> None:
    """Create database tables if they are missing."""

    from .. import models  # noqa: F401  register the mappers before create_all

    db.create_all()
    app.logger.info("Database tables ensured at %s", app.config["SQLALCHEMY_DATABASE_URI"])
