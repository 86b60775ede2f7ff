import logging

from flask import Flask
from .config import config_by_name
from .extensions import db, migrate, jwt
from .api.v1 import v1_bp
from .api.public import public_bp
from .errors import register_error_handlers


def configure_logging(app: Flask) -> None:
    """
    The app logger is named after the package, so module loggers
    (``sitebuilder.application.cms.*``) propagate to its handlers.
    """
    level = logging.getLevelName(str(app.config.get("LOG_LEVEL", "INFO")).upper())
    app.logger.setLevel(level if isinstance(level, int) else logging.INFO)


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Register models with the metadata used by migrations
    from . import models  # noqa: F401

    # -------------------------------------------------
    # Blueprints
    # -------------------------------------------------
    # Tenant middleware is attached to v1_bp only; public sites have no tenant header
    app.register_blueprint(v1_bp, url_prefix="/api/v1")
    app.register_blueprint(public_bp)
    register_error_handlers(app)

    app.logger.debug("sitebuilder app created with %s config", config_name)
    return app
