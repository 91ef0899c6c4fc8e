"""Factory Boy factory definitions for the domain models.

Each factory produces a valid, persistable model instance. The session
is bound by the db_session fixture.
"""

from datetime import datetime, timezone

import factory
from factory.alchemy import SQLAlchemyModelFactory

from ethiq.models import (
    Advisor,
    AdvisorApplication,
    ApplicationStatus,
    Company,
    Contact,
    ContactStatus,
    Handshake,
    HandshakeStatus,
    InviteStatus,
    Nudge,
    NudgeStatus,
    User,
    UserType,
)


class CompanyFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Company
        sqlalchemy_session = None  # Set via fixture
        sqlalchemy_session_persistence = "commit"

    name = factory.Sequence(lambda n: f"Company {n}")
    industry = "Software"
    stage = "Seed"
    typical_nudge_types = factory.LazyFunction(lambda: ["Feedback Request"])


class AdvisorFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Advisor
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    name = factory.Sequence(lambda n: f"Advisor {n}")
    email = factory.Sequence(lambda n: f"advisor{n}@example.com")
    role = "Former CFO"
    executive_type = "Consultant"
    years_experience = 15
    interests = factory.LazyFunction(lambda: ["Finance"])
    company_relationships = factory.LazyFunction(list)


class UserFactory(SQLAlchemyModelFactory):
    class Meta:
        model = User
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    email = factory.Sequence(lambda n: f"user{n}@example.com")
    name = factory.Sequence(lambda n: f"User {n}")
    user_type = UserType.ADVISOR
    company_relationships = factory.LazyFunction(lambda: ["Acme Corp"])
    invite_status = InviteStatus.PENDING


class ContactFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Contact
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    company = factory.SubFactory(CompanyFactory)
    advisor = factory.SubFactory(AdvisorFactory)
    company_relationship = factory.LazyAttribute(lambda o: o.company.name)
    message = "Would you be open to a short intro call?"
    status = ContactStatus.SENT


class HandshakeFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Handshake
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    company = factory.SubFactory(CompanyFactory)
    advisor = factory.SubFactory(AdvisorFactory)
    company_relationship = factory.LazyAttribute(lambda o: o.company.name)
    engagement_style = "Monthly"
    channels = factory.LazyFunction(lambda: ["Email"])
    response_expectation = "48h"
    capacity_hours_per_month = 4
    status = HandshakeStatus.PROPOSED


class NudgeFactory(SQLAlchemyModelFactory):
    class Meta:
        model = Nudge
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    company = factory.SubFactory(CompanyFactory)
    advisor = factory.SubFactory(AdvisorFactory)
    company_relationship = factory.LazyAttribute(lambda o: o.company.name)
    details = "Review our pricing page"
    nudge_tag = "Review"
    max_time_requested = "30 minutes"
    status = NudgeStatus.SENT
    advisor_completed = False
    company_confirmed = False


class AdvisorApplicationFactory(SQLAlchemyModelFactory):
    class Meta:
        model = AdvisorApplication
        sqlalchemy_session = None
        sqlalchemy_session_persistence = "commit"

    name = factory.Sequence(lambda n: f"Applicant {n}")
    email = factory.Sequence(lambda n: f"applicant{n}@example.com")
    executive_type = "Founder or CEO"
    years_experience = 12
    interests = factory.LazyFunction(lambda: ["Fintech"])
    bio = "Built and sold two companies."
    status = ApplicationStatus.PENDING
    created_at = factory.LazyFunction(lambda: datetime.now(timezone.utc))


ALL_FACTORIES = (
    CompanyFactory,
    AdvisorFactory,
    UserFactory,
    ContactFactory,
    HandshakeFactory,
    NudgeFactory,
    AdvisorApplicationFactory,
)
