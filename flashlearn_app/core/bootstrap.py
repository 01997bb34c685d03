"""Steps ``create_app`` runs, in order, to assemble the FlashLearn app."""

from __future__ import annotations

import logging

from flask import Flask

from .error_handlers import register_error_handlers
from .extensions import db, login_manager
from .logging_config import setup_logging
from .module_registry import register_default_modules

APP_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(app: Flask) -> None:
    """Set up the ``flashlearn`` logger tree and give ``app.logger`` one stream handler."""

    setup_logging(
        app,
        log_level=app.config.get("LOG_LEVEL", "INFO"),
        log_dir=None if app.testing else app.config.get("LOG_DIR"),
        json_format=app.config.get("LOG_JSON", False),
    )

    # create_app may run many times per process (tests); attach once
    if any(getattr(h, "_flashlearn", False) for h in app.logger.handlers):
        return
    stream = logging.StreamHandler()
    stream.setFormatter(logging.Formatter(APP_LOG_FORMAT))
    stream._flashlearn = True
    app.logger.addHandler(stream)
    app.logger.setLevel(logging.DEBUG if app.debug or app.testing else logging.INFO)
    app.logger.propagate = False


def register_extensions(app: Flask) -> None:
    db.init_app(app)
    login_manager.init_app(app)


def register_auth_loaders(app: Flask) -> None:
    """Resolve ``current_user`` from ``Authorization: Bearer`` and answer 401 as JSON."""

    from ..modules.auth.services.token_service import load_user_from_request, unauthorized_response

    login_manager.request_loader(load_user_from_request)
    login_manager.unauthorized_handler(unauthorized_response)

    @login_manager.user_loader
    def load_user(user_id: str):
        from ..models import User

        return db.session.get(User, int(user_id))


def register_blueprints(app: Flask) -> None:
    modules = register_default_modules(app)
    register_error_handlers(app)
    app.logger.info("FlashLearn ready with %d modules", len(modules))


def _bootstrap_admin(app: Flask) -> None:
    from sqlalchemy import or_

    from ..models import User

    password = app.config.get("DEFAULT_ADMIN_PASSWORD")
    if not password:
        return

    username = app.config.get("DEFAULT_ADMIN_USERNAME", "admin")
    email = app.config.get("DEFAULT_ADMIN_EMAIL", "admin@example.com").strip().lower()
    clash = User.query.filter(
        or_(User.user_role == User.ROLE_ADMIN, User.username == username, User.email == email)
    ).first()
    if clash is not None:
        app.logger.debug("Admin bootstrap skipped: '%s' already exists", clash.username)
        return

    admin = User(username=username, email=email, user_role=User.ROLE_ADMIN, is_email_verified=True)
    admin.set_password(password)
    db.session.add(admin)
    db.session.commit()
    app.logger.info("Created admin account '%s'", username)


def initialize_database(app: Flask) -> None:
    """Create missing tables, then the admin account when one is configured."""

    from .. import models  # noqa: F401  registers every table on db.metadata

    db.create_all()
    _bootstrap_admin(app)
