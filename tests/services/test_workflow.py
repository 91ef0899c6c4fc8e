"""Tests for the status workflow tables."""

import pytest

from ethiq.models.advisor_application import ApplicationStatus
from ethiq.models.contact import ContactStatus
from ethiq.models.handshake import HandshakeStatus
from ethiq.models.nudge import NudgeStatus
from ethiq.services.workflow import (
    CONTACT_TRANSITIONS,
    HANDSHAKE_TRANSITIONS,
    InvalidTransitionError,
    TransitionResult,
    is_nudge_complete,
    is_terminal_status,
    require_valid,
    validate_application_transition,
    validate_contact_transition,
    validate_handshake_transition,
    validate_nudge_transition,
)


class TestContactTransitions:
    """Contacts only move out of Sent."""

    @pytest.mark.parametrize("action,expected", [
        ("accept", ContactStatus.ACCEPTED),
        ("decline", ContactStatus.DECLINED),
        ("expire", ContactStatus.EXPIRED),
        ("withdraw", ContactStatus.WITHDRAWN),
    ])
    def test_sent_actions(self, action, expected):
        result = validate_contact_transition(ContactStatus.SENT, action)
        assert result.valid is True
        assert result.to_status == expected
        assert result.trigger == action

    def test_accepted_contact_cannot_be_declined(self):
        result = validate_contact_transition(ContactStatus.ACCEPTED, "decline")
        assert result.valid is False
        assert result.to_status == ContactStatus.ACCEPTED
        assert "Invalid transition" in result.reason

    def test_only_sent_has_outgoing_transitions(self):
        assert {from_status for from_status, _ in CONTACT_TRANSITIONS} == {ContactStatus.SENT}


class TestHandshakeTransitions:

    def test_proposed_to_active(self):
        result = validate_handshake_transition(HandshakeStatus.PROPOSED, "accept")
        assert result.valid
        assert result.to_status == HandshakeStatus.ACTIVE

    def test_proposed_to_dismissed(self):
        result = validate_handshake_transition(HandshakeStatus.PROPOSED, "dismiss")
        assert result.to_status == HandshakeStatus.DISMISSED

    def test_pause_and_resume(self):
        paused = validate_handshake_transition(HandshakeStatus.ACTIVE, "pause")
        assert paused.to_status == HandshakeStatus.PAUSED
        resumed = validate_handshake_transition(HandshakeStatus.PAUSED, "resume")
        assert resumed.to_status == HandshakeStatus.ACTIVE

    def test_end_from_active_or_paused(self):
        assert validate_handshake_transition(HandshakeStatus.ACTIVE, "end").to_status == HandshakeStatus.ENDED
        assert validate_handshake_transition(HandshakeStatus.PAUSED, "end").to_status == HandshakeStatus.ENDED

    def test_cannot_pause_a_proposal(self):
        assert validate_handshake_transition(HandshakeStatus.PROPOSED, "pause").valid is False

    def test_dismissed_and_ended_have_no_exits(self):
        sources = {from_status for from_status, _ in HANDSHAKE_TRANSITIONS}
        assert HandshakeStatus.DISMISSED not in sources
        assert HandshakeStatus.ENDED not in sources


class TestNudgeTransitions:
    """Nudge completion requires both parties."""

    def test_accept_and_decline(self):
        assert validate_nudge_transition(NudgeStatus.SENT, "accept").to_status == NudgeStatus.ACCEPTED
        assert validate_nudge_transition(NudgeStatus.SENT, "decline").to_status == NudgeStatus.DECLINED

    def test_mark_complete_keeps_accepted(self):
        result = validate_nudge_transition(NudgeStatus.ACCEPTED, "mark_complete")
        assert result.valid
        assert result.to_status == NudgeStatus.ACCEPTED

    def test_confirm_before_advisor_marks_is_rejected(self):
        result = validate_nudge_transition(NudgeStatus.ACCEPTED, "confirm_complete", advisor_completed=False)
        assert result.valid is False
        assert result.to_status == NudgeStatus.ACCEPTED
        assert "advisor" in result.reason

    def test_confirm_after_advisor_marks_completes(self):
        result = validate_nudge_transition(NudgeStatus.ACCEPTED, "confirm_complete", advisor_completed=True)
        assert result.valid
        assert result.to_status == NudgeStatus.COMPLETED

    def test_mark_complete_twice_is_rejected(self):
        result = validate_nudge_transition(NudgeStatus.ACCEPTED, "mark_complete", advisor_completed=True)
        assert result.valid is False

    def test_cannot_complete_a_sent_nudge(self):
        assert validate_nudge_transition(NudgeStatus.SENT, "mark_complete").valid is False

    def test_is_nudge_complete_needs_both_flags(self):
        assert is_nudge_complete(True, True) is True
        assert is_nudge_complete(True, False) is False
        assert is_nudge_complete(False, True) is False


class TestApplicationTransitions:

    def test_pending_can_be_approved_or_denied(self):
        assert validate_application_transition(ApplicationStatus.PENDING, "approve").to_status == ApplicationStatus.APPROVED
        assert validate_application_transition(ApplicationStatus.PENDING, "deny").to_status == ApplicationStatus.DENIED

    def test_reviewed_application_is_final(self):
        assert validate_application_transition(ApplicationStatus.APPROVED, "deny").valid is False


class TestHelpers:

    def test_require_valid_passes_through(self):
        result = validate_contact_transition(ContactStatus.SENT, "accept")
        assert require_valid(result) is result

    def test_require_valid_raises_conflict(self):
        result = TransitionResult(
            valid=False,
            from_status=ContactStatus.DECLINED,
            to_status=ContactStatus.DECLINED,
            reason="Invalid transition: Declined + accept",
        )
        with pytest.raises(InvalidTransitionError) as exc_info:
            require_valid(result)
        assert exc_info.value.status_code == 409
        assert exc_info.value.result is result

    @pytest.mark.parametrize("status", [
        ContactStatus.ACCEPTED,
        ContactStatus.WITHDRAWN,
        HandshakeStatus.DISMISSED,
        HandshakeStatus.ENDED,
        NudgeStatus.DECLINED,
        NudgeStatus.COMPLETED,
        ApplicationStatus.DENIED,
    ])
    def test_terminal_statuses(self, status):
        assert is_terminal_status(status) is True

    @pytest.mark.parametrize("status", [
        ContactStatus.SENT,
        HandshakeStatus.PAUSED,
        NudgeStatus.ACCEPTED,
        ApplicationStatus.PENDING,
    ])
    def test_non_terminal_statuses(self, status):
        assert is_terminal_status(status) is False
