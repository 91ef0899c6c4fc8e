"""Advisor model."""

from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .user import User


EXECUTIVE_TYPES = (
    "Current Executive - Public Company",
    "Former Executive - Public Company",
    "Current Executive - Private Company",
    "Former Executive - Private Company",
    "Founder or CEO",
    "Consultant",
    "Venture Capitalist",
)


class Advisor(db.Model):
    """
    Represents an advisor profile listed in the company directory.

    company_relationships holds the names of companies the advisor is
    associated with. Entries are appended by the admin "add relationship"
    action and never removed; membership gates which workflow stages a
    company may use with this advisor.
    """

    __tablename__ = "advisors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, index=True)
    role: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    executive_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    years_experience: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    interests: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    special_domains: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    expertise_tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    open_to_new_advisory_boards: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True
    )
    profile_photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    company_relationships: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    user_id: Mapped[str | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    user: Mapped["User | None"] = relationship("User", back_populates="advisor_profile")

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
            "expertise_tags": list(self.expertise_tags or []),
            "bio": self.bio,
            "open_to_new_advisory_boards": self.open_to_new_advisory_boards,
            "profile_photo_url": self.profile_photo_url,
            "company_relationships": list(self.company_relationships or []),
            "user_id": self.user_id,
        }

    def __repr__(self) -> str:
        return f"<Advisor id={self.id} name={self.name}>"
