"""Relationship model."""

import enum
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..database import db

if TYPE_CHECKING:
    from .advisor import Advisor
    from .company import Company


class RelationshipStatus(enum.Enum):
    CONNECTED = "connected"
    NOT_CONNECTED = "not_connected"


class Relationship(db.Model):
    """
    Tracks activity between one company and one advisor.

    interaction_count is bumped every time the company sends the advisor a
    nudge.
    """

    __tablename__ = "relationships"
    __table_args__ = (
        UniqueConstraint("company_id", "advisor_id", name="uq_relationships_pair"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    company_id: Mapped[int] = mapped_column(
        ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    advisor_id: Mapped[int] = mapped_column(
        ForeignKey("advisors.id", ondelete="CASCADE"), nullable=False, index=True
    )
    status: Mapped[RelationshipStatus] = mapped_column(
        Enum(RelationshipStatus, name="relationshipstatus", create_constraint=True),
        nullable=False,
        default=RelationshipStatus.NOT_CONNECTED,
    )
    interaction_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    company: Mapped["Company"] = relationship("Company")
    advisor: Mapped["Advisor"] = relationship("Advisor")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "company_id": self.company_id,
            "advisor_id": self.advisor_id,
            "status": self.status.value,
            "interaction_count": self.interaction_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:
        return (
            f"<Relationship id={self.id} company_id={self.company_id} "
            f"advisor_id={self.advisor_id} status={self.status.value}>"
        )
