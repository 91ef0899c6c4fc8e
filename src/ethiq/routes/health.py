"""Health check endpoint."""

import logging

from flask import Blueprint, current_app

from ..database import check_database_health
from . import ok

logger = logging.getLogger(__name__)

health_bp = Blueprint("health", __name__)


@health_bp.route("/health")
def health_check():
    """
    Health check endpoint.

    Returns:
        JSON envelope with status, version and database connectivity
    """
    version = current_app.config.get("APP_VERSION", "unknown")
    db_connected, db_error = check_database_health()

    response = {
        "status": "healthy" if db_connected else "degraded",
        "version": version,
        "database": "connected" if db_connected else "disconnected",
    }
    if db_error:
        logger.warning(f"Health check database error: {db_error}")
        response["database_error"] = db_error

    return ok(**response)
