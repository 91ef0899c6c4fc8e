"""Handshake model and HandshakeStatus enum."""

import enum
from datetime import date, datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import JSON, Date, DateTime, Enum, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .advisor import Advisor
    from .company import Company


class HandshakeStatus(enum.Enum):
    """Lifecycle of a formal engagement agreement."""

    PROPOSED = "Proposed"
    ACTIVE = "Active"
    DISMISSED = "Dismissed"
    PAUSED = "Paused"
    ENDED = "Ended"


ENGAGEMENT_STYLES = ("Ad hoc", "Weekly", "Biweekly", "Monthly")
CHANNELS = ("Email", "Calendar", "Slack", "Phone")
RESPONSE_EXPECTATIONS = ("24h", "48h", "72h", "1 week")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Handshake(db.Model):
    """
    A formal advisory agreement between a company and an advisor.

    Proposed by the company once the advisor has accepted a contact; the
    advisor accepts (Active) or dismisses it.
    """

    __tablename__ = "handshakes"

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    advisor_id: Mapped[int] = mapped_column(
        ForeignKey("advisors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    company_relationship: Mapped[str] = mapped_column(String(255), nullable=False)
    title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    engagement_style: Mapped[str] = mapped_column(String(32), nullable=False, default="Ad hoc")
    channels: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    response_expectation: Mapped[str] = mapped_column(String(16), nullable=False, default="48h")
    capacity_hours_per_month: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    focus_areas: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    review_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[HandshakeStatus] = mapped_column(
        Enum(HandshakeStatus, name="handshakestatus", create_constraint=True),
        nullable=False,
        default=HandshakeStatus.PROPOSED,
        index=True,
    )
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
            "title": self.title,
            "engagement_style": self.engagement_style,
            "channels": list(self.channels or []),
            "response_expectation": self.response_expectation,
            "capacity_hours_per_month": self.capacity_hours_per_month,
            "focus_areas": list(self.focus_areas or []),
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "review_date": self.review_date.isoformat() if self.review_date else None,
            "notes": self.notes,
            "status": self.status.value,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self) -> str:
        return f"<Handshake id={self.id} status={self.status.value} advisor_id={self.advisor_id}>"


Index(
    "ix_handshakes_pair_status",
    Handshake.company_relationship,
    Handshake.advisor_id,
    Handshake.status,
)
