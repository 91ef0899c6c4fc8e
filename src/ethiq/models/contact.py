"""Contact model and ContactStatus enum."""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, DateTime, Enum, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .advisor import Advisor
    from .company import Company


class ContactStatus(enum.Enum):
    """Lifecycle of a company's first outreach to an advisor."""

    SENT = "Sent"
    ACCEPTED = "Accepted"
    DECLINED = "Declined"
    EXPIRED = "Expired"
    WITHDRAWN = "Withdrawn"


class Contact(db.Model):
    """
    A company's request for initial engagement with an advisor.

    Created as Sent by the company; the advisor accepts or declines, the
    company may withdraw, and unanswered contacts can expire.
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    advisor_id: Mapped[int] = mapped_column(
        ForeignKey("advisors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_relationship: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    cadence: Mapped[str | None] = mapped_column(String(64), nullable=True)
    compensation: Mapped[str | None] = mapped_column(String(255), nullable=True)
    support_type: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[ContactStatus] = mapped_column(
        Enum(ContactStatus, name="contactstatus", create_constraint=True),
        nullable=False,
        default=ContactStatus.SENT,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    company: Mapped["Company"] = relationship("Company")
    advisor: Mapped["Advisor"] = relationship("Advisor")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_id": self.company_id,
            "advisor_id": self.advisor_id,
            "company_relationship": self.company_relationship,
            "message": self.message,
            "cadence": self.cadence,
            "compensation": self.compensation,
            "support_type": list(self.support_type or []),
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "responded_at": self.responded_at.isoformat() if self.responded_at else None,
        }

    def __repr__(self) -> str:
        return f"<Contact id={self.id} status={self.status.value} advisor_id={self.advisor_id}>"


Index("ix_contacts_pair_status", Contact.company_relationship, Contact.advisor_id, Contact.status)
