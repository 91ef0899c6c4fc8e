"""Engagement service: contacts, handshakes and nudges.

Creation checks eligibility through access_control before writing;
actions go through the workflow transition tables. Companies are
referenced by name on every engagement record and resolved to a Company
row here.
"""

import logging
from datetime import date, datetime, timezone

from ..database import db
from ..models.advisor import EXECUTIVE_TYPES, Advisor
from ..models.company import Company
from ..models.contact import Contact, ContactStatus
from ..models.handshake import (
    CHANNELS,
    ENGAGEMENT_STYLES,
    RESPONSE_EXPECTATIONS,
    Handshake,
    HandshakeStatus,
)
from ..models.nudge import MAX_TIME_OPTIONS, NUDGE_TAGS, Nudge, NudgeStatus
from ..models.relationship import Relationship, RelationshipStatus
from ..models.user import User
from . import access_control
from .errors import ConflictError, EligibilityError, NotFoundError, ValidationError
from .workflow import (
    require_valid,
    validate_contact_transition,
    validate_handshake_transition,
    validate_nudge_transition,
)

logger = logging.getLogger(__name__)

OPEN_HANDSHAKE_STATUSES = (
    HandshakeStatus.PROPOSED,
    HandshakeStatus.ACTIVE,
    HandshakeStatus.PAUSED,
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _require_text(value, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field} is required")
    return value.strip()


def _optional_text(value, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be text")
    return value.strip() or None


def _as_bool(value, field: str, default: bool) -> bool:
    if value is None:
        return default
    if not isinstance(value, bool):
        raise ValidationError(f"{field} must be true or false")
    return value


def _as_list(value, field: str) -> list:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{field} must be a list of strings")
    return [v.strip() for v in value if v.strip()]


def _as_int(value, field: str, default: int = 0) -> int:
    if value is None or value == "":
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be a whole number") from None
    if number < 0:
        raise ValidationError(f"{field} must not be negative")
    return number


def _as_date(value, field: str) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)") from None


def _parse_status(enum_cls, value):
    if not value:
        return None
    try:
        return enum_cls(value)
    except (TypeError, ValueError):
        allowed = ", ".join(s.value for s in enum_cls)
        raise ValidationError(f"Invalid status '{value}'. Must be one of: {allowed}") from None


def normalize_action(action: str) -> str:
    """URL actions use hyphens (mark-complete); the workflow uses underscores."""
    return (action or "").strip().lower().replace("-", "_")


# --- Companies and advisors ---


def get_company_by_name(name: str | None) -> Company:
    name = _require_text(name, "Company")
    company = Company.query.filter_by(name=name).first()
    if company is None:
        raise NotFoundError(f"Company not found: {name}")
    return company


def list_companies() -> list[Company]:
    return Company.query.order_by(Company.name).all()


def create_company(data: dict) -> Company:
    name = _require_text(data.get("name"), "Name")
    if Company.query.filter_by(name=name).first() is not None:
        raise ConflictError(f"Company already exists: {name}")

    company = Company(
        name=name,
        industry=_optional_text(data.get("industry"), "industry"),
        stage=_optional_text(data.get("stage"), "stage"),
        description=_optional_text(data.get("description"), "description"),
        tagline=_optional_text(data.get("tagline"), "tagline"),
        logo_url=_optional_text(data.get("logo_url"), "logo_url"),
        typical_nudge_types=_as_list(data.get("typical_nudge_types"), "typical_nudge_types"),
    )
    db.session.add(company)
    db.session.commit()
    logger.info(f"Created company: {company.name} (id={company.id})")
    return company


def get_advisor(advisor_id) -> Advisor:
    if advisor_id is None or advisor_id == "":
        raise ValidationError("advisor_id is required")
    advisor = db.session.get(Advisor, _as_int(advisor_id, "advisor_id"))
    if advisor is None:
        raise NotFoundError("Advisor not found")
    return advisor


def list_advisors() -> list[Advisor]:
    return Advisor.query.order_by(Advisor.name).all()


def create_advisor(data: dict) -> Advisor:
    """Create a directory profile, optionally linked to a User account.

    A linked profile without explicit relationships starts from the user's
    company relationships.
    """
    name = _require_text(data.get("name"), "Name")
    email = _require_text(data.get("email"), "Email")

    executive_type = data.get("executive_type")
    if executive_type and executive_type not in EXECUTIVE_TYPES:
        raise ValidationError(f"Invalid executive type: {executive_type}")

    relationships = _as_list(data.get("company_relationships"), "company_relationships")

    user = None
    if data.get("user_id"):
        user = db.session.get(User, data["user_id"])
        if user is None:
            raise NotFoundError("User not found")
        if not relationships:
            relationships = list(user.company_relationships or [])

    advisor = Advisor(
        name=name,
        email=email,
        role=_optional_text(data.get("role"), "role") or "",
        executive_type=executive_type,
        years_experience=_as_int(data.get("years_experience"), "years_experience"),
        interests=_as_list(data.get("interests"), "interests"),
        special_domains=_as_list(data.get("special_domains"), "special_domains"),
        expertise_tags=_as_list(data.get("expertise_tags"), "expertise_tags"),
        bio=_optional_text(data.get("bio"), "bio"),
        open_to_new_advisory_boards=_as_bool(
            data.get("open_to_new_advisory_boards"), "open_to_new_advisory_boards", default=True
        ),
        profile_photo_url=_optional_text(data.get("profile_photo_url"), "profile_photo_url"),
        company_relationships=relationships,
        user_id=user.id if user else None,
    )
    db.session.add(advisor)
    db.session.commit()
    logger.info(f"Created advisor: {advisor.name} (id={advisor.id})")
    return advisor


def directory(company_name: str) -> list[Advisor]:
    """Advisors the company can send an initial contact to."""
    company = _require_text(company_name, "Company")
    return access_control.directory_for(list_advisors(), company)


def handshake_eligible(company_name: str) -> list[Advisor]:
    company = _require_text(company_name, "Company")
    contacts = Contact.query.filter_by(
        company_relationship=company, status=ContactStatus.ACCEPTED
    ).all()
    return access_control.handshake_candidates(list_advisors(), company, contacts)


def nudge_eligible(company_name: str) -> list[Advisor]:
    company = _require_text(company_name, "Company")
    handshakes = Handshake.query.filter_by(
        company_relationship=company, status=HandshakeStatus.ACTIVE
    ).all()
    return access_control.nudge_candidates(list_advisors(), company, handshakes)


# --- Contacts ---


def create_contact(company_name: str, advisor_id, data: dict) -> Contact:
    """Send an initial contact from a company to a directory advisor.

    Raises:
        EligibilityError: the advisor already lists the company
        ConflictError: a contact for the pair is still awaiting a response
    """
    message = _require_text(data.get("message"), "Message")
    company = get_company_by_name(company_name)
    advisor = get_advisor(advisor_id)

    if not access_control.is_available_for_contact(advisor, company.name):
        raise EligibilityError(
            f"Advisor {advisor.name} is already associated with {company.name}"
        )

    pending = Contact.query.filter_by(
        company_relationship=company.name, advisor_id=advisor.id, status=ContactStatus.SENT
    ).first()
    if pending is not None:
        raise ConflictError("A contact request is already pending for this advisor")

    contact = Contact(
        company_id=company.id,
        advisor_id=advisor.id,
        company_relationship=company.name,
        message=message,
        cadence=_optional_text(data.get("cadence"), "cadence"),
        compensation=_optional_text(data.get("compensation"), "compensation"),
        support_type=_as_list(data.get("support_type"), "support_type"),
        status=ContactStatus.SENT,
    )
    db.session.add(contact)
    db.session.commit()
    logger.info(f"Contact {contact.id} sent: {company.name} -> advisor {advisor.id}")
    return contact


def get_contact(contact_id: int) -> Contact:
    contact = db.session.get(Contact, contact_id)
    if contact is None:
        raise NotFoundError("Contact not found")
    return contact


def transition_contact(contact_id: int, action: str) -> Contact:
    contact = get_contact(contact_id)
    result = require_valid(validate_contact_transition(contact.status, normalize_action(action)))

    contact.status = result.to_status
    contact.responded_at = _utcnow()
    db.session.commit()
    logger.info(
        f"Contact {contact.id}: {result.from_status.value} -> {result.to_status.value}"
    )
    return contact


def list_contacts(company: str | None = None, advisor_id=None, status: str | None = None) -> list[Contact]:
    query = Contact.query
    if company:
        query = query.filter(Contact.company_relationship == company)
    if advisor_id is not None:
        query = query.filter(Contact.advisor_id == _as_int(advisor_id, "advisor_id"))
    parsed = _parse_status(ContactStatus, status)
    if parsed is not None:
        query = query.filter(Contact.status == parsed)
    return query.order_by(Contact.created_at.desc()).all()


# --- Handshakes ---


def create_handshake(company_name: str, advisor_id, data: dict) -> Handshake:
    """Propose a handshake.

    Raises:
        EligibilityError: no relationship or no accepted contact for the pair
        ConflictError: the pair already has an open handshake
    """
    engagement_style = data.get("engagement_style") or "Ad hoc"
    if engagement_style not in ENGAGEMENT_STYLES:
        raise ValidationError(f"Invalid engagement style: {engagement_style}")

    channels = _as_list(data.get("channels"), "channels")
    unknown = [c for c in channels if c not in CHANNELS]
    if unknown:
        raise ValidationError(f"Invalid channel(s): {', '.join(unknown)}")

    response_expectation = data.get("response_expectation") or "48h"
    if response_expectation not in RESPONSE_EXPECTATIONS:
        raise ValidationError(f"Invalid response expectation: {response_expectation}")

    start_date = _as_date(data.get("start_date"), "start_date")
    review_date = _as_date(data.get("review_date"), "review_date")
    if start_date and review_date and review_date < start_date:
        raise ValidationError("review_date must not be before start_date")

    company = get_company_by_name(company_name)
    advisor = get_advisor(advisor_id)

    contacts = Contact.query.filter_by(
        company_relationship=company.name, advisor_id=advisor.id
    ).all()
    if not access_control.can_propose_handshake(advisor, company.name, contacts):
        raise EligibilityError(
            f"{company.name} cannot propose a handshake to advisor {advisor.name}: "
            "a company relationship and an accepted contact are required"
        )

    open_handshake = Handshake.query.filter(
        Handshake.company_relationship == company.name,
        Handshake.advisor_id == advisor.id,
        Handshake.status.in_(OPEN_HANDSHAKE_STATUSES),
    ).first()
    if open_handshake is not None:
        raise ConflictError(
            f"Handshake {open_handshake.id} is already {open_handshake.status.value} for this advisor"
        )

    handshake = Handshake(
        company_id=company.id,
        advisor_id=advisor.id,
        company_relationship=company.name,
        title=_optional_text(data.get("title"), "title"),
        engagement_style=engagement_style,
        channels=channels,
        response_expectation=response_expectation,
        capacity_hours_per_month=_as_int(
            data.get("capacity_hours_per_month"), "capacity_hours_per_month"
        ),
        focus_areas=_as_list(data.get("focus_areas"), "focus_areas"),
        start_date=start_date,
        review_date=review_date,
        notes=_optional_text(data.get("notes"), "notes"),
        status=HandshakeStatus.PROPOSED,
    )
    db.session.add(handshake)
    db.session.commit()
    logger.info(f"Handshake {handshake.id} proposed: {company.name} -> advisor {advisor.id}")
    return handshake


def get_handshake(handshake_id: int) -> Handshake:
    handshake = db.session.get(Handshake, handshake_id)
    if handshake is None:
        raise NotFoundError("Handshake not found")
    return handshake


def transition_handshake(handshake_id: int, action: str) -> Handshake:
    handshake = get_handshake(handshake_id)
    result = require_valid(
        validate_handshake_transition(handshake.status, normalize_action(action))
    )

    handshake.status = result.to_status
    handshake.updated_at = _utcnow()
    db.session.commit()
    logger.info(
        f"Handshake {handshake.id}: {result.from_status.value} -> {result.to_status.value}"
    )
    return handshake


def list_handshakes(company: str | None = None, advisor_id=None, status: str | None = None) -> list[Handshake]:
    query = Handshake.query
    if company:
        query = query.filter(Handshake.company_relationship == company)
    if advisor_id is not None:
        query = query.filter(Handshake.advisor_id == _as_int(advisor_id, "advisor_id"))
    parsed = _parse_status(HandshakeStatus, status)
    if parsed is not None:
        query = query.filter(Handshake.status == parsed)
    return query.order_by(Handshake.created_at.desc()).all()


# --- Nudges ---


def _record_interaction(company: Company, advisor: Advisor) -> Relationship:
    relationship = Relationship.query.filter_by(
        company_id=company.id, advisor_id=advisor.id
    ).first()
    if relationship is None:
        relationship = Relationship(
            company_id=company.id,
            advisor_id=advisor.id,
            status=RelationshipStatus.CONNECTED,
            interaction_count=0,
        )
        db.session.add(relationship)
    relationship.interaction_count = (relationship.interaction_count or 0) + 1
    return relationship


def create_nudge(company_name: str, advisor_id, data: dict) -> Nudge:
    """Send a nudge under an active handshake and count the interaction.

    Raises:
        EligibilityError: no relationship or no Active handshake for the pair
    """
    details = _require_text(data.get("details"), "Details")
    max_time = _require_text(data.get("max_time_requested"), "Max time requested")
    if max_time not in MAX_TIME_OPTIONS:
        raise ValidationError(f"Invalid max time requested: {max_time}")
    nudge_tag = data.get("nudge_tag") or "Other"
    if nudge_tag not in NUDGE_TAGS:
        raise ValidationError(f"Invalid nudge tag: {nudge_tag}")

    company = get_company_by_name(company_name)
    advisor = get_advisor(advisor_id)

    handshakes = Handshake.query.filter_by(
        company_relationship=company.name, advisor_id=advisor.id
    ).all()
    if not access_control.can_send_nudge(advisor, company.name, handshakes):
        raise EligibilityError(
            f"{company.name} cannot nudge advisor {advisor.name}: "
            "a company relationship and an active handshake are required"
        )

    nudge = Nudge(
        company_id=company.id,
        advisor_id=advisor.id,
        company_relationship=company.name,
        details=details,
        nudge_tag=nudge_tag,
        max_time_requested=max_time,
        status=NudgeStatus.SENT,
        advisor_completed=False,
        company_confirmed=False,
    )
    db.session.add(nudge)
    relationship = _record_interaction(company, advisor)
    db.session.commit()
    logger.info(
        f"Nudge {nudge.id} sent: {company.name} -> advisor {advisor.id} "
        f"(interactions={relationship.interaction_count})"
    )
    return nudge


def get_nudge(nudge_id: int) -> Nudge:
    nudge = db.session.get(Nudge, nudge_id)
    if nudge is None:
        raise NotFoundError("Nudge not found")
    return nudge


def transition_nudge(nudge_id: int, action: str) -> Nudge:
    """Apply a nudge action.

    mark_complete sets the advisor's flag and keeps the nudge Accepted;
    confirm_complete sets the company's flag and completes it.
    """
    nudge = get_nudge(nudge_id)
    action = normalize_action(action)
    result = require_valid(
        validate_nudge_transition(nudge.status, action, nudge.advisor_completed)
    )

    if action == "mark_complete":
        nudge.advisor_completed = True
    elif action == "confirm_complete":
        nudge.company_confirmed = True
    nudge.status = result.to_status
    nudge.updated_at = _utcnow()
    db.session.commit()
    logger.info(
        f"Nudge {nudge.id}: {action} ({result.from_status.value} -> {result.to_status.value})"
    )
    return nudge


def list_nudges(company: str | None = None, advisor_id=None, status: str | None = None) -> list[Nudge]:
    query = Nudge.query
    if company:
        query = query.filter(Nudge.company_relationship == company)
    if advisor_id is not None:
        query = query.filter(Nudge.advisor_id == _as_int(advisor_id, "advisor_id"))
    parsed = _parse_status(NudgeStatus, status)
    if parsed is not None:
        query = query.filter(Nudge.status == parsed)
    return query.order_by(Nudge.created_at.desc()).all()


def list_relationships(company_name: str | None = None) -> list[Relationship]:
    query = Relationship.query
    if company_name:
        query = query.filter(Relationship.company_id == get_company_by_name(company_name).id)
    return query.order_by(Relationship.interaction_count.desc()).all()
