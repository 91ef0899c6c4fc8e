"""User model, UserType and InviteStatus enums."""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Enum, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .advisor import Advisor


class UserType(enum.Enum):
    """Kinds of account that can sign in."""

    COMPANY = "company"
    ADVISOR = "advisor"
    ADMIN = "admin"


class InviteStatus(enum.Enum):
    """Whether the invited user has completed first sign-in."""

    PENDING = "pending"
    ACCEPTED = "accepted"


def _new_id() -> str:
    return str(uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(db.Model):
    """
    Represents an application account.

    The credential itself lives in the auth provider (AuthIdentity); this
    record carries the profile, account type and company relationships.
    For company accounts the name is the company name used on contacts,
    handshakes and nudges.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    user_type: Mapped[UserType] = mapped_column(
        Enum(UserType, name="usertype", create_constraint=True),
        nullable=False,
        index=True,
    )
    company_relationships: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    invite_status: Mapped[InviteStatus] = mapped_column(
        Enum(InviteStatus, name="invitestatus", create_constraint=True),
        nullable=False,
        default=InviteStatus.PENDING,
    )
    auth_user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    # Relationships
    advisor_profile: Mapped["Advisor | None"] = relationship(
        "Advisor", back_populates="user", uselist=False
    )

    def has_company_relationship(self, company: str) -> bool:
        return company in (self.company_relationships or [])

    def to_dict(self) -> dict:
        relationships = list(self.company_relationships or [])
        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "user_type": self.user_type.value,
            # Legacy single-company field kept for older clients
            "company_relationship": relationships[0] if relationships else None,
            "company_relationships": relationships,
            "invite_status": self.invite_status.value,
            "auth_user_id": self.auth_user_id,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} type={self.user_type.value}>"
