"""Advisor application intake and admin review."""

import logging
from datetime import datetime, timezone

from sqlalchemy import func

from ..database import db
from ..models.advisor_application import AdvisorApplication, ApplicationStatus
from .credentials import is_valid_email, normalize_email
from .errors import ConflictError, NotFoundError, ValidationError
from .workflow import require_valid, validate_application_transition

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "email", "executive_type", "years_experience", "interests", "bio")
TEXT_FIELDS = ("name", "email", "executive_type", "bio", "role", "linkedin_url")

# Review statuses accepted by the API, mapped to workflow actions
REVIEW_ACTIONS = {
    ApplicationStatus.APPROVED.value: "approve",
    ApplicationStatus.DENIED.value: "deny",
}


def _string_list(value, field: str) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of strings")
    return value


def submit_application(data: dict) -> AdvisorApplication:
    """
    Store a new Pending application.

    Raises:
        ValidationError: a required field is missing or malformed
        ConflictError: the email already has a Pending application
    """
    if any(not data.get(field) for field in REQUIRED_FIELDS):
        raise ValidationError("Missing required fields")
    for field in TEXT_FIELDS:
        value = data.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{field} must be text")

    email = data["email"].strip()
    if not is_valid_email(email):
        raise ValidationError("Please enter a valid email address")

    try:
        years = int(data["years_experience"])
    except (TypeError, ValueError):
        raise ValidationError("years_experience must be a whole number") from None

    interests = _string_list(data["interests"], "interests")
    special_domains = _string_list(data.get("special_domains") or [], "special_domains")

    pending = AdvisorApplication.query.filter(
        func.lower(AdvisorApplication.email) == normalize_email(email),
        AdvisorApplication.status == ApplicationStatus.PENDING,
    ).first()
    if pending is not None:
        raise ConflictError("An application with this email is already pending review")

    application = AdvisorApplication(
        name=data["name"].strip(),
        email=email,
        role=data.get("role") or "",
        executive_type=data["executive_type"],
        years_experience=years,
        interests=interests,
        special_domains=special_domains,
        bio=data["bio"],
        linkedin_url=data.get("linkedin_url") or "",
        profile_visibility=data.get("profile_visibility", True) is not False,
        status=ApplicationStatus.PENDING,
    )
    db.session.add(application)
    db.session.commit()

    logger.info(f"Advisor application submitted: {application.id} ({email})")
    return application


def list_applications(status: str | None = None) -> list[AdvisorApplication]:
    """Applications newest first, optionally filtered by status."""
    query = AdvisorApplication.query
    if status:
        try:
            query = query.filter(AdvisorApplication.status == ApplicationStatus(status))
        except ValueError:
            raise ValidationError(f"Invalid status: {status}") from None
    return query.order_by(AdvisorApplication.created_at.desc()).all()


def review_application(
    application_id: str, status: str | None, reviewed_by: str | None = None
) -> AdvisorApplication:
    """
    Approve or deny a Pending application.

    Raises:
        ValidationError: status is not Approved or Denied
        NotFoundError: unknown application id
        InvalidTransitionError: the application was already reviewed
    """
    action = REVIEW_ACTIONS.get(status or "")
    if action is None:
        raise ValidationError("Invalid status. Must be 'Approved' or 'Denied'")

    application = db.session.get(AdvisorApplication, application_id)
    if application is None:
        raise NotFoundError("Application not found")

    result = require_valid(validate_application_transition(application.status, action))

    now = datetime.now(timezone.utc)
    application.status = result.to_status
    application.reviewed_by = reviewed_by
    application.reviewed_at = now
    application.updated_at = now
    db.session.commit()

    logger.info(f"Advisor application {application.id} {result.to_status.value.lower()}")
    return application
