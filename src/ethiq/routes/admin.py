"""Bootstrap and diagnostic endpoints: table creation, first admin, user lookup."""

import logging

from flask import Blueprint

from ..database import create_tables, db
from ..models.auth_identity import AuthIdentity
from ..services.auth_provider import find_user_by_email
from ..services.credentials import normalize_email
from ..services.user_provisioning import create_first_admin
from . import field, json_body, ok

logger = logging.getLogger(__name__)

admin_bp = Blueprint("admin", __name__)


@admin_bp.route("/init-db", methods=["POST"])
def init_db():
    """Create any missing tables. Safe to call repeatedly."""
    create_tables()
    logger.info("Database tables initialized")
    return ok(message="Database initialized")


@admin_bp.route("/setup", methods=["POST"])
def first_time_setup():
    """Create the first admin account.

    Accepts JSON: email, name, password (min 8 characters)

    Returns:
        201: Admin created
        400: Validation error
        409: Setup already completed
    """
    data = json_body()
    result = create_first_admin(
        email=field(data, "email"),
        name=field(data, "name"),
        password=field(data, "password"),
    )
    return ok(http_status=201, user=result.user.to_dict(), message="Admin account created")


@admin_bp.route("/debug/user/<email>", methods=["GET"])
def debug_user(email: str):
    """Report whether an email exists in the user store and the auth provider."""
    user = find_user_by_email(email)
    identity = (
        db.session.query(AuthIdentity)
        .filter(AuthIdentity.email == normalize_email(email))
        .first()
    )
    return ok(
        email=email,
        in_user_store=user is not None,
        in_auth_provider=identity is not None,
        user=user.to_dict() if user else None,
        auth_user_id=identity.id if identity else None,
        linked=bool(user and identity and user.auth_user_id == identity.id),
    )
