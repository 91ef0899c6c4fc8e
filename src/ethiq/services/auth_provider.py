"""Credential store and session tokens.

AuthProvider owns AuthIdentity records. It commits its own writes, so an
identity survives a later failure elsewhere in the same request; callers
that need all-or-nothing behaviour must delete the identity themselves.
"""

import logging
from datetime import datetime, timezone

from flask import current_app
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from ..database import db
from ..models.auth_identity import AuthIdentity
from ..models.user import InviteStatus, User
from .credentials import MIN_PASSWORD_LENGTH, normalize_email
from .errors import AuthenticationError, EthiqError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Invalid email or password"


class AuthProviderError(EthiqError):
    """The auth provider refused or failed an identity write."""


class AuthProvider:
    """Password identities plus signed, time-limited session tokens."""

    SESSION_SALT = "ethiq-session"

    def __init__(self, secret_key: str, session_max_age: int = 86400):
        self._serializer = URLSafeTimedSerializer(secret_key)
        self.session_max_age = session_max_age

    def create_identity(self, email: str, password: str, metadata: dict | None = None) -> AuthIdentity:
        """Create and commit a new identity."""
        identity = AuthIdentity(
            email=normalize_email(email),
            password_hash=generate_password_hash(password),
            user_metadata=metadata or {},
        )
        try:
            db.session.add(identity)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.error(f"Auth identity creation failed for {email}: {e}")
            raise AuthProviderError(f"Failed to create auth user: {e}") from e

        logger.info(f"Auth identity created: {identity.id}")
        return identity

    def get_identity(self, identity_id: str) -> AuthIdentity | None:
        return db.session.get(AuthIdentity, identity_id)

    def delete_identity(self, identity_id: str) -> bool:
        """Delete and commit. Returns False if no such identity exists."""
        identity = self.get_identity(identity_id)
        if identity is None:
            return False
        try:
            db.session.delete(identity)
            db.session.commit()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise AuthProviderError(f"Failed to delete auth user: {e}") from e
        logger.info(f"Auth identity deleted: {identity_id}")
        return True

    def verify_password(self, identity_id: str, password: str) -> bool:
        identity = self.get_identity(identity_id)
        if identity is None:
            return False
        return check_password_hash(identity.password_hash, password)

    def set_password(self, identity_id: str, new_password: str) -> None:
        identity = self.get_identity(identity_id)
        if identity is None:
            raise NotFoundError("User not found")
        identity.password_hash = generate_password_hash(new_password)

    def issue_session(self, user: User) -> dict:
        token = self._serializer.dumps(
            {"user_id": user.id, "auth_user_id": user.auth_user_id},
            salt=self.SESSION_SALT,
        )
        return {
            "access_token": token,
            "token_type": "bearer",
            "expires_in": self.session_max_age,
        }

    def load_session(self, token: str) -> dict | None:
        """Decode a session token; None if it is forged or expired."""
        try:
            return self._serializer.loads(
                token, salt=self.SESSION_SALT, max_age=self.session_max_age
            )
        except (BadSignature, SignatureExpired):
            return None


def get_auth_provider() -> AuthProvider:
    return current_app.extensions["auth_provider"]


def find_user_by_email(email: str) -> User | None:
    return User.query.filter(func.lower(User.email) == normalize_email(email)).first()


def login(email: str, password: str, provider: AuthProvider | None = None) -> tuple[User, dict]:
    """
    Authenticate a user by email and password.

    Returns:
        (user, session) where session holds the signed access token.

    Raises:
        ValidationError: email or password missing
        AuthenticationError: unknown email, missing identity or bad password
    """
    if not all(isinstance(v, str) and v for v in (email, password)):
        raise ValidationError("Email and password are required")

    provider = provider or get_auth_provider()
    user = find_user_by_email(email)
    if user is None:
        logger.warning(f"Login failed, no user record for {email}")
        raise AuthenticationError(INVALID_LOGIN_MESSAGE)

    if not user.auth_user_id or not provider.verify_password(user.auth_user_id, password):
        logger.warning(f"Login failed for {email}")
        raise AuthenticationError(INVALID_LOGIN_MESSAGE)

    logger.info(f"Login succeeded for {email} ({user.user_type.value})")
    return user, provider.issue_session(user)


def update_password(email: str, new_password: str, provider: AuthProvider | None = None) -> User:
    """
    Replace a user's password and mark their invitation accepted.

    Raises:
        ValidationError: missing fields or password too short
        NotFoundError: no user (or no identity) for the email
    """
    if not all(isinstance(v, str) and v for v in (email, new_password)):
        raise ValidationError("Email and new password are required")
    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
        )

    provider = provider or get_auth_provider()
    user = find_user_by_email(email)
    if user is None or not user.auth_user_id:
        raise NotFoundError("User not found")

    provider.set_password(user.auth_user_id, new_password)
    user.invite_status = InviteStatus.ACCEPTED
    user.updated_at = datetime.now(timezone.utc)
    db.session.commit()

    logger.info(f"Password updated for {user.email}")
    return user
