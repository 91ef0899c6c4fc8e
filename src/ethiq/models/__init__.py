"""Database models package.

This package contains all SQLAlchemy model definitions for EthIQ Board.

Models:
    - User: Application account (company, advisor, admin)
    - AuthIdentity: Credential held by the auth provider
    - Advisor: Directory profile with company relationships
    - Company: Company profile
    - Relationship: Company/advisor activity record
    - Contact: Initial outreach from a company to an advisor
    - Handshake: Formal advisory engagement agreement
    - Nudge: Bounded work request under an active handshake
    - AdvisorApplication: Intake request reviewed by an admin

Enums:
    - UserType: company, advisor, admin
    - InviteStatus: pending, accepted
    - RelationshipStatus: connected, not_connected
    - ContactStatus: Sent, Accepted, Declined, Expired, Withdrawn
    - HandshakeStatus: Proposed, Active, Dismissed, Paused, Ended
    - NudgeStatus: Sent, Accepted, Declined, Completed
    - ApplicationStatus: Pending, Approved, Denied
"""

from .advisor import Advisor
from .advisor_application import AdvisorApplication, ApplicationStatus
from .auth_identity import AuthIdentity
from .company import Company
from .contact import Contact, ContactStatus
from .handshake import Handshake, HandshakeStatus
from .nudge import Nudge, NudgeStatus
from .relationship import Relationship, RelationshipStatus
from .user import InviteStatus, User, UserType

__all__ = [
    # Models
    "Advisor",
    "AdvisorApplication",
    "AuthIdentity",
    "Company",
    "Contact",
    "Handshake",
    "Nudge",
    "Relationship",
    "User",
    # Enums
    "ApplicationStatus",
    "ContactStatus",
    "HandshakeStatus",
    "InviteStatus",
    "NudgeStatus",
    "RelationshipStatus",
    "UserType",
]
