"""AdvisorApplication model and ApplicationStatus enum."""

import enum
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..database import db


class ApplicationStatus(enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DENIED = "Denied"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AdvisorApplication(db.Model):
    """An intake request from a prospective advisor, reviewed by an admin."""

    __tablename__ = "advisor_applications"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    executive_type: Mapped[str] = mapped_column(String(64), nullable=False)
    years_experience: Mapped[int] = mapped_column(Integer, nullable=False)
    interests: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    special_domains: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str] = mapped_column(Text, nullable=False)
    linkedin_url: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    profile_visibility: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    status: Mapped[ApplicationStatus] = mapped_column(
        Enum(ApplicationStatus, name="applicationstatus", create_constraint=True),
        nullable=False,
        default=ApplicationStatus.PENDING,
        index=True,
    )
    reviewed_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "executive_type": self.executive_type,
            "years_experience": self.years_experience,
            "interests": list(self.interests or []),
            "special_domains": list(self.special_domains or []),
            "bio": self.bio,
            "linkedin_url": self.linkedin_url,
            "profile_visibility": self.profile_visibility,
            "status": self.status.value,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": self.reviewed_at.isoformat() if self.reviewed_at else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<AdvisorApplication id={self.id} email={self.email} status={self.status.value}>"
