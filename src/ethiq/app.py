"""Flask application factory."""

import logging
import logging.config
import os
from pathlib import Path

from flask import Flask, jsonify

from . import __version__
from .config import get_invites_config, get_value, load_config
from .database import db, init_database
from .services.errors import EthiqError


def setup_logging(config: dict, app_root: Path) -> None:
    """Configure structured logging to console and file."""
    log_level = get_value(config, "logging", "level", default="INFO")
    log_file = get_value(config, "logging", "file", default="logs/app.log")
    max_bytes = get_value(config, "logging", "max_bytes", default=10_000_000)  # 10MB
    backup_count = get_value(config, "logging", "backup_count", default=5)

    # Ensure logs directory exists
    log_path = app_root / log_file
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(levelname)s - %(name)s - %(message)s",
                "datefmt": "%Y-%m-%dT%H:%M:%S%z",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "standard",
                "stream": "ext://sys.stdout",
            },
            "file": {
                "class": "logging.handlers.RotatingFileHandler",
                "level": log_level,
                "formatter": "standard",
                "filename": str(log_path),
                "maxBytes": max_bytes,
                "backupCount": backup_count,
            },
        },
        "root": {
            "level": log_level,
            "handlers": ["console", "file"],
        },
    }

    logging.config.dictConfig(logging_config)


def create_app(config_path: str = "config.yaml", testing: bool = False) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_path: Path to the YAML configuration file
        testing: If True, mark the app as under test before services are built

    Returns:
        Configured Flask application instance
    """
    app_root = Path(config_path).parent.absolute()
    if not app_root.exists():
        app_root = Path.cwd()

    config = load_config(config_path)

    app = Flask(__name__)

    if testing:
        app.config["TESTING"] = True

    app.config["DEBUG"] = get_value(config, "server", "debug", default=False)
    app.config["APP_CONFIG"] = config
    app.config["APP_VERSION"] = __version__
    app.config["APP_ROOT"] = str(app_root)

    # Leave headroom over the CSV limit so the upload route can answer with
    # its own message; anything larger is rejected by Werkzeug with 413.
    max_csv_bytes = get_value(config, "uploads", "max_csv_bytes", default=5 * 1024 * 1024)
    app.config["MAX_CONTENT_LENGTH"] = max_csv_bytes * 2

    setup_logging(config, app_root)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting EthIQ Board v{__version__}")

    # Initialize database (continues even if connection fails)
    db_connected = init_database(app, config)
    app.config["DATABASE_CONNECTED"] = db_connected

    secret_key = get_value(config, "api", "secret_key", default="")
    if not secret_key:
        if app.config["DEBUG"] or testing:
            secret_key = "dev-secret-key"
        else:
            secret_key = os.urandom(32).hex()
            logger.warning(
                "No secret key configured, using a generated key "
                "(sessions will not survive a restart)"
            )
    app.config["SECRET_KEY"] = secret_key

    from .services.auth_provider import AuthProvider
    app.extensions["auth_provider"] = AuthProvider(
        secret_key,
        session_max_age=get_value(config, "api", "session_max_age_seconds", default=86400),
    )
    logger.info("Auth provider initialized")

    from .services.invite_mailer import InviteMailer, InvitePreferences
    app.extensions["invite_mailer"] = InviteMailer(
        InvitePreferences(**get_invites_config(config))
    )
    logger.info("Invite mailer initialized")

    from .services.api_auth import ApiAuth
    api_auth = ApiAuth(config=config)
    app.extensions["api_auth"] = api_auth
    app.before_request(api_auth.authenticate)

    register_error_handlers(app)
    register_blueprints(app)
    register_cli_commands(app)

    return app


def register_error_handlers(app: Flask) -> None:
    """Translate service errors and HTTP errors into JSON envelopes."""
    logger = logging.getLogger(__name__)

    @app.errorhandler(EthiqError)
    def service_error(error: EthiqError):
        if error.status_code >= 500:
            db.session.rollback()
            logger.error(f"Service failure: {error.message}")
        payload = {"success": False, "error": error.message}
        if getattr(error, "errors", None):
            payload["errors"] = error.errors
        return jsonify(payload), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(413)
    def too_large(error):
        return jsonify({"success": False, "error": "Upload too large"}), 413

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        original = getattr(error, "original_exception", None) or error
        logger.exception(f"Unhandled error: {original}")
        return jsonify({"success": False, "error": "Internal server error"}), 500


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""
    from .routes.admin import admin_bp
    from .routes.applications import applications_bp
    from .routes.auth import auth_bp
    from .routes.directory import directory_bp
    from .routes.engagement import engagement_bp
    from .routes.health import health_bp
    from .routes.users import users_bp

    app.register_blueprint(admin_bp)
    app.register_blueprint(applications_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(directory_bp)
    app.register_blueprint(engagement_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(users_bp)


def register_cli_commands(app: Flask) -> None:
    """Register Flask CLI command groups."""
    from .cli.user_cli import user_cli

    app.cli.add_command(user_cli)
