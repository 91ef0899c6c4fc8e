"""Nudge model and NudgeStatus enum."""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .advisor import Advisor
    from .company import Company


class NudgeStatus(enum.Enum):
    """Lifecycle of a single bounded work request."""

    SENT = "Sent"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"
    COMPLETED = "Completed"


NUDGE_TAGS = (
    "Feedback Request",
    "Brainstorm",
    "Meeting",
    "Introduction",
    "Review",
    "Advice",
    "Other",
)

MAX_TIME_OPTIONS = ("15 minutes", "30 minutes", "45 minutes", "1 hour", "2 hours")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Nudge(db.Model):
    """
    A bounded work request sent under an active handshake.

    Completion takes both parties: the advisor marks it complete
    (advisor_completed), then the company confirms (company_confirmed) and
    only then does the status become Completed.
    """

    __tablename__ = "nudges"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    advisor_id: Mapped[int] = mapped_column(
        ForeignKey("advisors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_relationship: Mapped[str] = mapped_column(String(255), nullable=False)
    details: Mapped[str] = mapped_column(Text, nullable=False)
    nudge_tag: Mapped[str] = mapped_column(String(64), nullable=False, default="Other")
    max_time_requested: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[NudgeStatus] = mapped_column(
        Enum(NudgeStatus, name="nudgestatus", create_constraint=True),
        nullable=False,
        default=NudgeStatus.SENT,
        index=True,
    )
    advisor_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    company_confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow
    )

    company: Mapped["Company"] = relationship("Company")
    advisor: Mapped["Advisor"] = relationship("Advisor")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_id": self.company_id,
            "advisor_id": self.advisor_id,
            "company_relationship": self.company_relationship,
            "details": self.details,
            "nudge_tag": self.nudge_tag,
            "max_time_requested": self.max_time_requested,
            "status": self.status.value,
            "advisor_completed": self.advisor_completed,
            "company_confirmed": self.company_confirmed,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Nudge id={self.id} status={self.status.value} advisor_id={self.advisor_id}>"
