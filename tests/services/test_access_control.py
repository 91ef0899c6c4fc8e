"""Tests for the eligibility rules."""

from types import SimpleNamespace

import pytest

from ethiq.models.contact import ContactStatus
from ethiq.models.handshake import HandshakeStatus
from ethiq.services.access_control import (
    can_propose_handshake,
    can_send_nudge,
    directory_for,
    handshake_candidates,
    is_available_for_contact,
    nudge_candidates,
)


def _advisor(advisor_id, relationships=()):
    return SimpleNamespace(id=advisor_id, company_relationships=list(relationships))


def _contact(advisor_id, company, status):
    return SimpleNamespace(advisor_id=advisor_id, company_relationship=company, status=status)


def _handshake(advisor_id, company, status):
    return SimpleNamespace(advisor_id=advisor_id, company_relationship=company, status=status)


class TestDirectory:

    @pytest.mark.parametrize("relationships,expected", [
        ([], True),
        (["Other Co"], True),
        (["Acme Corp"], False),
        (["Other Co", "Acme Corp"], False),
    ])
    def test_available_iff_company_not_listed(self, relationships, expected):
        assert is_available_for_contact(_advisor(1, relationships), "Acme Corp") is expected

    def test_directory_filters_related_advisors(self):
        free = _advisor(1)
        related = _advisor(2, ["Acme Corp"])
        other = _advisor(3, ["Globex"])

        assert directory_for([free, related, other], "Acme Corp") == [free, other]

    def test_company_match_is_exact(self):
        assert is_available_for_contact(_advisor(1, ["acme corp"]), "Acme Corp") is True

    def test_none_relationships_treated_as_empty(self):
        advisor = SimpleNamespace(id=1, company_relationships=None)
        assert is_available_for_contact(advisor, "Acme Corp") is True


class TestHandshakeEligibility:

    def test_requires_relationship_and_accepted_contact(self):
        advisor = _advisor(1, ["Acme Corp"])
        contacts = [_contact(1, "Acme Corp", ContactStatus.ACCEPTED)]
        assert can_propose_handshake(advisor, "Acme Corp", contacts) is True

    def test_accepted_contact_without_relationship(self):
        advisor = _advisor(1)
        contacts = [_contact(1, "Acme Corp", ContactStatus.ACCEPTED)]
        assert can_propose_handshake(advisor, "Acme Corp", contacts) is False

    def test_relationship_with_only_sent_contact(self):
        advisor = _advisor(1, ["Acme Corp"])
        contacts = [_contact(1, "Acme Corp", ContactStatus.SENT)]
        assert can_propose_handshake(advisor, "Acme Corp", contacts) is False

    def test_contact_from_another_company_does_not_count(self):
        advisor = _advisor(1, ["Acme Corp"])
        contacts = [_contact(1, "Globex", ContactStatus.ACCEPTED)]
        assert can_propose_handshake(advisor, "Acme Corp", contacts) is False

    def test_candidates(self):
        eligible = _advisor(1, ["Acme Corp"])
        no_contact = _advisor(2, ["Acme Corp"])
        contacts = iter([_contact(1, "Acme Corp", ContactStatus.ACCEPTED)])
        assert handshake_candidates([eligible, no_contact], "Acme Corp", contacts) == [eligible]


class TestNudgeEligibility:

    def test_requires_active_handshake(self):
        advisor = _advisor(1, ["Acme Corp"])
        assert can_send_nudge(advisor, "Acme Corp", [_handshake(1, "Acme Corp", HandshakeStatus.ACTIVE)])

    @pytest.mark.parametrize("status", [
        HandshakeStatus.PROPOSED,
        HandshakeStatus.PAUSED,
        HandshakeStatus.ENDED,
        HandshakeStatus.DISMISSED,
    ])
    def test_other_handshake_statuses_refused(self, status):
        advisor = _advisor(1, ["Acme Corp"])
        assert not can_send_nudge(advisor, "Acme Corp", [_handshake(1, "Acme Corp", status)])

    def test_active_handshake_without_relationship(self):
        advisor = _advisor(1)
        assert not can_send_nudge(advisor, "Acme Corp", [_handshake(1, "Acme Corp", HandshakeStatus.ACTIVE)])

    def test_candidates(self):
        eligible = _advisor(1, ["Acme Corp"])
        paused = _advisor(2, ["Acme Corp"])
        handshakes = [
            _handshake(1, "Acme Corp", HandshakeStatus.ACTIVE),
            _handshake(2, "Acme Corp", HandshakeStatus.PAUSED),
        ]
        assert nudge_candidates([eligible, paused], "Acme Corp", handshakes) == [eligible]
