"""Admin user management: add, list, delete, relationships, bulk upload, invites."""

import logging

from flask import Blueprint, current_app, request

from ..config import get_value
from ..services.csv_import import CSVImportError, import_users, parse_user_csv
from ..services.credentials import generate_temporary_password
from ..services.errors import DuplicateEmailError
from ..services.invite_mailer import get_invite_mailer
from ..services.user_provisioning import (
    add_company_relationship,
    add_user,
    delete_user,
    list_users,
    user_stats,
)
from . import fail, field, json_body, ok

logger = logging.getLogger(__name__)

users_bp = Blueprint("users", __name__)


@users_bp.route("/users", methods=["POST"])
def api_add_user():
    """Add a single user.

    Accepts JSON:
        - email, name, type (required)
        - company_relationship (required for advisor and company)
        - send_invite (optional, default true)

    Returns:
        201: User created, with the temporary password for the invite preview
        400: Validation error
        409: Email already exists; existing_user_id lets the caller add the
             company relationship to that user instead
        500: Auth identity or user record write failed
    """
    data = json_body()
    try:
        result = add_user(
            email=field(data, "email"),
            name=field(data, "name"),
            user_type=field(data, "type", "user_type", "userType"),
            company_relationship=field(data, "company_relationship", "companyRelationship"),
            send_invite=bool(field(data, "send_invite", "sendInvite", default=True)),
        )
    except DuplicateEmailError as e:
        return fail(e.message, http_status=409, duplicate=True, existing_user_id=e.existing_user_id)

    return ok(
        http_status=201,
        user=result.user.to_dict(),
        temporary_password=result.temporary_password,
        invite_sent=result.invite_sent,
    )


@users_bp.route("/users", methods=["GET"])
def api_list_users():
    """List users newest first. Query params: type, q."""
    users = list_users(user_type=request.args.get("type"), search=request.args.get("q"))
    return ok(users=[u.to_dict() for u in users], count=len(users))


@users_bp.route("/users/stats", methods=["GET"])
def api_user_stats():
    return ok(stats=user_stats())


@users_bp.route("/users/<user_id>", methods=["DELETE"])
def api_delete_user(user_id: str):
    email = delete_user(user_id)
    return ok(message=f"User {email} deleted")


@users_bp.route("/users/<user_id>/add-relationship", methods=["POST"])
def api_add_relationship(user_id: str):
    data = json_body()
    user = add_company_relationship(
        user_id, field(data, "company_relationship", "companyRelationship")
    )
    return ok(user=user.to_dict(), message="Company relationship added")


@users_bp.route("/users/bulk", methods=["POST"])
def api_bulk_upload():
    """Create users from an uploaded CSV (multipart field "file").

    Returns:
        200: Import ran; created/skipped counts and per-row errors
        400: File missing or unusable, with every error found
        413: File larger than the configured limit
    """
    uploaded = request.files.get("file")
    if uploaded is None or not uploaded.filename:
        return fail("No file uploaded", http_status=400)

    config = current_app.config.get("APP_CONFIG", {})
    max_bytes = get_value(config, "uploads", "max_csv_bytes", default=5 * 1024 * 1024)

    content = uploaded.read()
    if len(content) > max_bytes:
        message = f"File size exceeds {max_bytes // (1024 * 1024)}MB limit."
        return fail(message, http_status=413, errors=[message])

    try:
        parsed = parse_user_csv(uploaded.filename, content, max_bytes=max_bytes)
    except CSVImportError as e:
        return fail(e.message, http_status=400, errors=e.errors)

    result = import_users(parsed)
    return ok(
        created=result.created,
        skipped=result.skipped,
        errors=result.errors,
        message=result.message,
    )


@users_bp.route("/send-invite", methods=["POST"])
def api_send_invite():
    """Send an invitation email (logged in development).

    Accepts JSON: email, name, company_relationship, user_type, and
    optionally temporary_password, subject, body.
    """
    data = json_body()
    mailer = get_invite_mailer()
    message = mailer.build_message(
        recipient_email=field(data, "email"),
        recipient_name=field(data, "name"),
        company_relationship=field(data, "company_relationship", "companyRelationship"),
        user_type=field(data, "user_type", "userType", default="advisor"),
        temporary_password=field(
            data, "temporary_password", "temporaryPassword",
            default=generate_temporary_password(),
        ),
        custom_subject=field(data, "subject"),
        custom_body=field(data, "body"),
    )
    sent = mailer.send(message)
    return ok(sent=sent, subject=message.subject, message=f"Invitation sent to {message.recipient_email}")
