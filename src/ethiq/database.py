"""Flask-SQLAlchemy and Flask-Migrate wiring for the EthIQ Board store."""

import logging

from flask import Flask
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text

from .config import get_database_url, get_value, is_sqlite_url, mask_database_url

logger = logging.getLogger(__name__)

db = SQLAlchemy()
migrate = Migrate()

# Seconds before a pooled Postgres connection is replaced
POOL_RECYCLE = 3600


def _engine_options(config: dict, database_url: str) -> dict:
    """Pooling options for server databases; SQLite uses the driver defaults."""
    if is_sqlite_url(database_url):
        return {}

    return {
        "pool_size": get_value(config, "database", "pool_size", default=10),
        "pool_timeout": get_value(config, "database", "pool_timeout", default=30),
        "pool_recycle": POOL_RECYCLE,
        "pool_pre_ping": True,
        "connect_args": {"connect_timeout": 5},
    }


def _ping() -> None:
    db.session.execute(text("SELECT 1"))
    db.session.commit()


def init_database(app: Flask, config: dict) -> bool:
    """Bind the store to the app and report whether it answered a ping.

    An unreachable database does not stop the app from starting; /health
    reports it as degraded instead.
    """
    database_url = get_database_url(config)
    app.config["SQLALCHEMY_DATABASE_URI"] = database_url
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = False
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(config, database_url)

    db.init_app(app)
    migrate.init_app(app, db)

    with app.app_context():
        connected, error = check_database_health()

    if connected:
        logger.info(f"Database connected to {mask_database_url(database_url)}")
    else:
        logger.error(f"Database unreachable at {mask_database_url(database_url)}: {error}")
    return connected


def check_database_health() -> tuple[bool, str | None]:
    """Ping the store. Requires an app context; returns (connected, short error)."""
    try:
        _ping()
    except Exception as e:
        # Exception type plus a truncated message; connection strings stay out
        return False, f"{type(e).__name__}: {str(e)[:100]}"
    return True, None


def create_tables() -> None:
    """Create all tables for registered models. Requires an app context."""
    from . import models  # noqa: F401

    db.create_all()
