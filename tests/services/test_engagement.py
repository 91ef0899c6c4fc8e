"""Tests for the engagement service (contacts, handshakes, nudges)."""

import pytest

from ethiq.models import (
    ContactStatus,
    HandshakeStatus,
    NudgeStatus,
    Relationship,
)
from ethiq.services import engagement
from ethiq.services.errors import (
    ConflictError,
    EligibilityError,
    NotFoundError,
    ValidationError,
)
from ethiq.services.workflow import InvalidTransitionError
from tests.factories import (
    AdvisorFactory,
    CompanyFactory,
    ContactFactory,
    HandshakeFactory,
    NudgeFactory,
)


@pytest.fixture
def acme(db_session):
    return CompanyFactory(name="Acme Corp")


def _nudge_data(**overrides):
    data = {"details": "Review our Q3 deck", "nudge_tag": "Review", "max_time_requested": "30 minutes"}
    data.update(overrides)
    return data


class TestDirectory:

    def test_excludes_advisors_listing_company(self, acme):
        free = AdvisorFactory()
        AdvisorFactory(company_relationships=["Acme Corp"])
        other = AdvisorFactory(company_relationships=["Globex"])

        ids = {a.id for a in engagement.directory("Acme Corp")}
        assert ids == {free.id, other.id}

    def test_company_required(self, db_session):
        with pytest.raises(ValidationError):
            engagement.directory("")


class TestContacts:

    def test_create_contact(self, acme):
        advisor = AdvisorFactory()
        contact = engagement.create_contact("Acme Corp", advisor.id, {
            "message": "Intro?", "cadence": "Monthly", "support_type": ["Strategy"],
        })
        assert contact.status == ContactStatus.SENT
        assert contact.company_id == acme.id
        assert contact.company_relationship == "Acme Corp"
        assert contact.support_type == ["Strategy"]

    def test_related_advisor_is_not_contactable(self, acme):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        with pytest.raises(EligibilityError) as exc_info:
            engagement.create_contact("Acme Corp", advisor.id, {"message": "Hi"})
        assert exc_info.value.status_code == 403

    def test_pending_contact_blocks_another(self, acme):
        advisor = AdvisorFactory()
        engagement.create_contact("Acme Corp", advisor.id, {"message": "Hi"})
        with pytest.raises(ConflictError):
            engagement.create_contact("Acme Corp", advisor.id, {"message": "Hi again"})

    def test_unknown_company(self, db_session):
        advisor = AdvisorFactory()
        with pytest.raises(NotFoundError, match="Company not found"):
            engagement.create_contact("Nope Inc", advisor.id, {"message": "Hi"})

    def test_unknown_advisor(self, acme):
        with pytest.raises(NotFoundError, match="Advisor not found"):
            engagement.create_contact("Acme Corp", 9999, {"message": "Hi"})

    def test_message_required(self, acme):
        advisor = AdvisorFactory()
        with pytest.raises(ValidationError, match="Message is required"):
            engagement.create_contact("Acme Corp", advisor.id, {"message": " "})

    def test_accept_sets_responded_at(self, acme):
        contact = ContactFactory(company=acme)
        updated = engagement.transition_contact(contact.id, "accept")
        assert updated.status == ContactStatus.ACCEPTED
        assert updated.responded_at is not None

    def test_terminal_contact_rejects_actions(self, acme):
        contact = ContactFactory(company=acme, status=ContactStatus.DECLINED)
        with pytest.raises(InvalidTransitionError):
            engagement.transition_contact(contact.id, "accept")
        assert engagement.get_contact(contact.id).status == ContactStatus.DECLINED

    def test_list_filters(self, acme):
        ContactFactory(company=acme, status=ContactStatus.ACCEPTED)
        ContactFactory(company=acme)
        ContactFactory(company=CompanyFactory(name="Globex"))

        assert len(engagement.list_contacts(company="Acme Corp")) == 2
        assert len(engagement.list_contacts(company="Acme Corp", status="Accepted")) == 1
        with pytest.raises(ValidationError):
            engagement.list_contacts(status="Bogus")


class TestHandshakes:

    def test_requires_relationship_and_accepted_contact(self, acme):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        with pytest.raises(EligibilityError):
            engagement.create_handshake("Acme Corp", advisor.id, {})

        ContactFactory(company=acme, advisor=advisor, status=ContactStatus.ACCEPTED)
        handshake = engagement.create_handshake("Acme Corp", advisor.id, {
            "title": "Finance advisor",
            "engagement_style": "Monthly",
            "channels": ["Email", "Slack"],
            "capacity_hours_per_month": "6",
            "start_date": "2026-01-01",
            "review_date": "2026-04-01",
        })
        assert handshake.status == HandshakeStatus.PROPOSED
        assert handshake.capacity_hours_per_month == 6
        assert handshake.start_date.isoformat() == "2026-01-01"

    def test_accepted_contact_without_relationship_refused(self, acme):
        advisor = AdvisorFactory()
        ContactFactory(company=acme, advisor=advisor, status=ContactStatus.ACCEPTED)
        with pytest.raises(EligibilityError):
            engagement.create_handshake("Acme Corp", advisor.id, {})

    def test_open_handshake_blocks_another(self, acme):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        ContactFactory(company=acme, advisor=advisor, status=ContactStatus.ACCEPTED)
        engagement.create_handshake("Acme Corp", advisor.id, {})
        with pytest.raises(ConflictError):
            engagement.create_handshake("Acme Corp", advisor.id, {})

    @pytest.mark.parametrize("data", [
        {"engagement_style": "Hourly"},
        {"channels": ["Carrier pigeon"]},
        {"response_expectation": "never"},
        {"capacity_hours_per_month": "lots"},
        {"start_date": "2026-13-01"},
        {"start_date": "2026-05-01", "review_date": "2026-04-01"},
    ])
    def test_invalid_fields(self, acme, data):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        ContactFactory(company=acme, advisor=advisor, status=ContactStatus.ACCEPTED)
        with pytest.raises(ValidationError):
            engagement.create_handshake("Acme Corp", advisor.id, data)

    def test_lifecycle(self, acme):
        handshake = HandshakeFactory(company=acme)
        assert engagement.transition_handshake(handshake.id, "accept").status == HandshakeStatus.ACTIVE
        assert engagement.transition_handshake(handshake.id, "pause").status == HandshakeStatus.PAUSED
        assert engagement.transition_handshake(handshake.id, "resume").status == HandshakeStatus.ACTIVE
        assert engagement.transition_handshake(handshake.id, "end").status == HandshakeStatus.ENDED
        with pytest.raises(InvalidTransitionError):
            engagement.transition_handshake(handshake.id, "resume")

    def test_eligible_list(self, acme):
        eligible = AdvisorFactory(company_relationships=["Acme Corp"])
        AdvisorFactory(company_relationships=["Acme Corp"])
        ContactFactory(company=acme, advisor=eligible, status=ContactStatus.ACCEPTED)

        assert [a.id for a in engagement.handshake_eligible("Acme Corp")] == [eligible.id]


class TestNudges:

    @pytest.fixture
    def active_pair(self, acme):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        HandshakeFactory(company=acme, advisor=advisor, status=HandshakeStatus.ACTIVE)
        return acme, advisor

    def test_requires_active_handshake(self, acme):
        advisor = AdvisorFactory(company_relationships=["Acme Corp"])
        HandshakeFactory(company=acme, advisor=advisor, status=HandshakeStatus.PAUSED)
        with pytest.raises(EligibilityError):
            engagement.create_nudge("Acme Corp", advisor.id, _nudge_data())

    def test_create_counts_interactions(self, active_pair):
        company, advisor = active_pair
        engagement.create_nudge("Acme Corp", advisor.id, _nudge_data())
        nudge = engagement.create_nudge("Acme Corp", advisor.id, _nudge_data(nudge_tag="Meeting"))

        assert nudge.status == NudgeStatus.SENT
        assert nudge.advisor_completed is False
        relationship = Relationship.query.filter_by(company_id=company.id, advisor_id=advisor.id).one()
        assert relationship.interaction_count == 2

    @pytest.mark.parametrize("data", [
        _nudge_data(details=""),
        _nudge_data(max_time_requested="3 days"),
        _nudge_data(nudge_tag="Gossip"),
    ])
    def test_invalid_fields(self, active_pair, data):
        _, advisor = active_pair
        with pytest.raises(ValidationError):
            engagement.create_nudge("Acme Corp", advisor.id, data)

    def test_two_party_completion(self, acme):
        nudge = NudgeFactory(company=acme)

        engagement.transition_nudge(nudge.id, "accept")
        with pytest.raises(InvalidTransitionError):
            engagement.transition_nudge(nudge.id, "confirm-complete")

        marked = engagement.transition_nudge(nudge.id, "mark-complete")
        assert marked.status == NudgeStatus.ACCEPTED
        assert marked.advisor_completed is True
        assert marked.company_confirmed is False

        done = engagement.transition_nudge(nudge.id, "confirm_complete")
        assert done.status == NudgeStatus.COMPLETED
        assert done.advisor_completed and done.company_confirmed

    def test_declined_nudge_is_final(self, acme):
        nudge = NudgeFactory(company=acme, status=NudgeStatus.DECLINED)
        with pytest.raises(InvalidTransitionError):
            engagement.transition_nudge(nudge.id, "accept")

    def test_eligible_list(self, active_pair):
        _, advisor = active_pair
        AdvisorFactory(company_relationships=["Acme Corp"])
        assert [a.id for a in engagement.nudge_eligible("Acme Corp")] == [advisor.id]


class TestCompaniesAndAdvisors:

    def test_create_company_unique(self, db_session):
        engagement.create_company({"name": "Acme Corp", "industry": "Fintech"})
        with pytest.raises(ConflictError):
            engagement.create_company({"name": "Acme Corp"})

    def test_create_advisor(self, db_session):
        advisor = engagement.create_advisor({
            "name": "Pat Lee",
            "email": "pat@example.com",
            "executive_type": "Consultant",
            "years_experience": 20,
            "company_relationships": ["Acme Corp"],
        })
        assert advisor.company_relationships == ["Acme Corp"]
        assert engagement.get_advisor(advisor.id).name == "Pat Lee"

    def test_invalid_executive_type(self, db_session):
        with pytest.raises(ValidationError):
            engagement.create_advisor({"name": "Pat", "email": "pat@example.com", "executive_type": "Wizard"})

    def test_open_to_boards_defaults_true(self, db_session):
        advisor = engagement.create_advisor({"name": "Pat", "email": "pat@example.com"})
        assert advisor.open_to_new_advisory_boards is True

    def test_open_to_boards_false(self, db_session):
        advisor = engagement.create_advisor({
            "name": "Pat", "email": "pat@example.com", "open_to_new_advisory_boards": False,
        })
        assert advisor.open_to_new_advisory_boards is False

    @pytest.mark.parametrize("value", ["false", 0, "no"])
    def test_open_to_boards_must_be_boolean(self, db_session, value):
        with pytest.raises(ValidationError, match="must be true or false"):
            engagement.create_advisor({
                "name": "Pat", "email": "pat@example.com", "open_to_new_advisory_boards": value,
            })

    def test_free_text_must_be_text(self, db_session):
        with pytest.raises(ValidationError, match="bio must be text"):
            engagement.create_advisor({"name": "Pat", "email": "pat@example.com", "bio": 5})
        with pytest.raises(ValidationError, match="industry must be text"):
            engagement.create_company({"name": "Acme Corp", "industry": ["Fintech"]})

    def test_relationships_listing(self, db_session, acme):
        other = CompanyFactory(name="Globex")
        advisor = AdvisorFactory()
        for company in (acme, acme, other):
            engagement._record_interaction(company, advisor)
        db_session.commit()

        rows = engagement.list_relationships("Acme Corp")
        assert len(rows) == 1
        assert rows[0].interaction_count == 2
        assert len(engagement.list_relationships()) == 2
