"""User provisioning service.

Orchestrates account creation for the admin panel: input validation,
duplicate detection, temporary credentials, auth identity creation, user
record write and the optional invitation email. Callable without CLI or
HTTP context as long as an app context is active.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from sqlalchemy import func, or_

from ..database import db
from ..models.user import InviteStatus, User, UserType
from .auth_provider import AuthProvider, AuthProviderError, find_user_by_email, get_auth_provider
from .credentials import MIN_PASSWORD_LENGTH, generate_temporary_password, is_valid_email
from .errors import ConflictError, DuplicateEmailError, NotFoundError, ProvisioningError, ValidationError
from .invite_mailer import InviteMailer, get_invite_mailer

logger = logging.getLogger(__name__)


@dataclass
class ProvisionResult:
    """Result of a successful account creation."""

    user: User
    temporary_password: str
    invite_sent: bool = False


def parse_user_type(value) -> UserType:
    if isinstance(value, UserType):
        return value
    try:
        return UserType(value.strip().lower())
    except (AttributeError, ValueError):
        raise ValidationError(
            "Invalid user type. Must be 'company', 'advisor', or 'admin'"
        ) from None


def _is_text(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def validate_new_user(
    email: str | None,
    name: str | None,
    user_type,
    company_relationship: str | None,
) -> UserType:
    """Check the add-user form. Raises ValidationError; returns the parsed type."""
    if not _is_text(email) or not _is_text(name) or not user_type:
        raise ValidationError("Missing required fields: email, name, userType")
    if not is_valid_email(email):
        raise ValidationError("Please enter a valid email address")

    if company_relationship is not None and not isinstance(company_relationship, str):
        raise ValidationError("Company Relationship must be text")

    parsed = parse_user_type(user_type)
    if parsed != UserType.ADMIN and not (company_relationship or "").strip():
        raise ValidationError("Company Relationship is required for Advisors and Companies")
    return parsed


def _persist_user(user: User) -> None:
    db.session.add(user)
    db.session.commit()


def add_user(
    email: str,
    name: str,
    user_type,
    company_relationship: str | None = None,
    password: str | None = None,
    invite_status: InviteStatus = InviteStatus.PENDING,
    send_invite: bool = False,
    auth_provider: AuthProvider | None = None,
    mailer: InviteMailer | None = None,
) -> ProvisionResult:
    """Create a user end-to-end.

    1. Validate inputs and reject an email that already exists
    2. Generate a temporary password (unless one is given)
    3. Create the auth identity (committed by the provider)
    4. Write the user record; on failure delete the identity again
    5. Optionally send the invitation

    Raises:
        ValidationError: bad or missing fields
        DuplicateEmailError: email already registered (carries existing id)
        AuthProviderError: the identity could not be created
        ProvisioningError: the user record could not be written
    """
    parsed_type = validate_new_user(email, name, user_type, company_relationship)
    email = email.strip()
    name = name.strip()
    company_relationship = (company_relationship or "").strip() or None

    existing = find_user_by_email(email)
    if existing is not None:
        logger.info(f"Duplicate email on add user: {email} (existing id={existing.id})")
        raise DuplicateEmailError(email, existing.id)

    provider = auth_provider or get_auth_provider()
    temporary_password = password or generate_temporary_password()

    identity = provider.create_identity(
        email,
        temporary_password,
        metadata={
            "name": name,
            "user_type": parsed_type.value,
            "company_relationship": company_relationship,
        },
    )

    user = User(
        email=email,
        name=name,
        user_type=parsed_type,
        company_relationships=[company_relationship] if company_relationship else [],
        invite_status=invite_status,
        auth_user_id=identity.id,
    )
    try:
        _persist_user(user)
    except Exception as e:
        db.session.rollback()
        logger.error(f"User record write failed for {email}, removing auth identity: {e}")
        try:
            provider.delete_identity(identity.id)
        except AuthProviderError:
            logger.exception(f"Rollback of auth identity {identity.id} failed")
        raise ProvisioningError(f"Failed to create user record: {e}") from e

    logger.info(f"Created user: {user.email} (id={user.id}, type={parsed_type.value})")

    invite_sent = False
    if send_invite:
        mailer = mailer or get_invite_mailer()
        message = mailer.build_message(
            recipient_email=user.email,
            recipient_name=user.name,
            company_relationship=company_relationship or "EthIQ",
            user_type=parsed_type.value,
            temporary_password=temporary_password,
        )
        invite_sent = mailer.send(message)

    return ProvisionResult(
        user=user, temporary_password=temporary_password, invite_sent=invite_sent
    )


def create_first_admin(
    email: str,
    name: str,
    password: str,
    auth_provider: AuthProvider | None = None,
) -> ProvisionResult:
    """Create the initial admin account. Only allowed while no users exist."""
    if db.session.query(func.count(User.id)).scalar():
        raise ConflictError("Setup has already been completed")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    return add_user(
        email=email,
        name=name,
        user_type=UserType.ADMIN,
        password=password,
        invite_status=InviteStatus.ACCEPTED,
        auth_provider=auth_provider,
    )


def get_user(user_id: str) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(user_type=None, search: str | None = None) -> list[User]:
    """Users newest first, optionally filtered by type and name/email search."""
    query = User.query
    if user_type:
        query = query.filter(User.user_type == parse_user_type(user_type))
    if search:
        pattern = f"%{search.strip().lower()}%"
        query = query.filter(
            or_(func.lower(User.name).like(pattern), func.lower(User.email).like(pattern))
        )
    return query.order_by(User.created_at.desc()).all()


def delete_user(user_id: str, auth_provider: AuthProvider | None = None) -> str:
    """Delete the user record, then its auth identity. Returns the deleted email.

    A failure to delete the identity is logged and does not fail the call.
    """
    user = get_user(user_id)
    auth_user_id = user.auth_user_id
    email = user.email

    db.session.delete(user)
    db.session.commit()
    logger.info(f"Deleted user {user_id} ({email})")

    if auth_user_id:
        provider = auth_provider or get_auth_provider()
        try:
            provider.delete_identity(auth_user_id)
        except AuthProviderError:
            logger.exception(f"Error deleting auth identity {auth_user_id}")
    return email


def add_company_relationship(user_id: str, company_relationship: str | None) -> User:
    """Append a company to a user's relationships.

    The linked advisor profile, if any, receives the same company so the
    directory reflects it. Adding a company that is already present raises
    ConflictError and changes nothing.
    """
    company = company_relationship.strip() if isinstance(company_relationship, str) else ""
    if not company:
        raise ValidationError("Company relationship is required")

    user = get_user(user_id)
    if user.has_company_relationship(company):
        raise ConflictError("This advisor is already associated with this company")

    # Reassign rather than mutate so the JSON column is flagged dirty
    user.company_relationships = [*(user.company_relationships or []), company]
    user.updated_at = datetime.now(timezone.utc)

    advisor = user.advisor_profile
    if advisor is not None and company not in (advisor.company_relationships or []):
        advisor.company_relationships = [*(advisor.company_relationships or []), company]

    db.session.commit()
    logger.info(f"Added company relationship '{company}' to user {user_id}")
    return user


def user_stats() -> dict:
    counts = dict(
        db.session.query(User.user_type, func.count(User.id)).group_by(User.user_type).all()
    )
    return {
        "total": sum(counts.values()),
        "companies": counts.get(UserType.COMPANY, 0),
        "advisors": counts.get(UserType.ADVISOR, 0),
        "admins": counts.get(UserType.ADMIN, 0),
    }
