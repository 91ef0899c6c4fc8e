"""Status workflow for contacts, handshakes, nudges and advisor applications."""

import logging
from dataclasses import dataclass
from typing import Optional

from ..models.advisor_application import ApplicationStatus
from ..models.contact import ContactStatus
from ..models.handshake import HandshakeStatus
from ..models.nudge import NudgeStatus
from .errors import ConflictError

logger = logging.getLogger(__name__)


class InvalidTransitionError(ConflictError):
    """Raised when a status transition violates the workflow rules."""

    def __init__(self, result: "TransitionResult"):
        self.result = result
        super().__init__(result.reason)


@dataclass
class TransitionResult:
    """Result of a status transition attempt."""

    valid: bool
    from_status: object
    to_status: object
    reason: str
    trigger: Optional[str] = None


# Format: {(from_status, action): to_status}
CONTACT_TRANSITIONS: dict[tuple[ContactStatus, str], ContactStatus] = {
    (ContactStatus.SENT, "accept"): ContactStatus.ACCEPTED,
    (ContactStatus.SENT, "decline"): ContactStatus.DECLINED,
    (ContactStatus.SENT, "expire"): ContactStatus.EXPIRED,
    (ContactStatus.SENT, "withdraw"): ContactStatus.WITHDRAWN,
}

HANDSHAKE_TRANSITIONS: dict[tuple[HandshakeStatus, str], HandshakeStatus] = {
    (HandshakeStatus.PROPOSED, "accept"): HandshakeStatus.ACTIVE,
    (HandshakeStatus.PROPOSED, "dismiss"): HandshakeStatus.DISMISSED,
    (HandshakeStatus.ACTIVE, "pause"): HandshakeStatus.PAUSED,
    (HandshakeStatus.ACTIVE, "end"): HandshakeStatus.ENDED,
    (HandshakeStatus.PAUSED, "resume"): HandshakeStatus.ACTIVE,
    (HandshakeStatus.PAUSED, "end"): HandshakeStatus.ENDED,
}

# mark_complete keeps the nudge Accepted and only flips advisor_completed;
# confirm_complete is gated on that flag in validate_nudge_transition().
NUDGE_TRANSITIONS: dict[tuple[NudgeStatus, str], NudgeStatus] = {
    (NudgeStatus.SENT, "accept"): NudgeStatus.ACCEPTED,
    (NudgeStatus.SENT, "decline"): NudgeStatus.DECLINED,
    (NudgeStatus.ACCEPTED, "mark_complete"): NudgeStatus.ACCEPTED,
    (NudgeStatus.ACCEPTED, "confirm_complete"): NudgeStatus.COMPLETED,
}

APPLICATION_TRANSITIONS: dict[tuple[ApplicationStatus, str], ApplicationStatus] = {
    (ApplicationStatus.PENDING, "approve"): ApplicationStatus.APPROVED,
    (ApplicationStatus.PENDING, "deny"): ApplicationStatus.DENIED,
}

CONTACT_ACTIONS = frozenset(action for _, action in CONTACT_TRANSITIONS)
HANDSHAKE_ACTIONS = frozenset(action for _, action in HANDSHAKE_TRANSITIONS)
NUDGE_ACTIONS = frozenset(action for _, action in NUDGE_TRANSITIONS)


def _lookup(table: dict, from_status, action: str) -> TransitionResult:
    key = (from_status, action)
    if key in table:
        return TransitionResult(
            valid=True,
            from_status=from_status,
            to_status=table[key],
            reason="Valid transition",
            trigger=action,
        )
    return TransitionResult(
        valid=False,
        from_status=from_status,
        to_status=from_status,  # Status unchanged
        reason=f"Invalid transition: {from_status.value} + {action}",
        trigger=action,
    )


def validate_contact_transition(from_status: ContactStatus, action: str) -> TransitionResult:
    """Validate a contact action. Pure; does not touch the record."""
    return _lookup(CONTACT_TRANSITIONS, from_status, action)


def validate_handshake_transition(
    from_status: HandshakeStatus, action: str
) -> TransitionResult:
    """Validate a handshake action. Pure; does not touch the record."""
    return _lookup(HANDSHAKE_TRANSITIONS, from_status, action)


def validate_nudge_transition(
    from_status: NudgeStatus,
    action: str,
    advisor_completed: bool = False,
) -> TransitionResult:
    """
    Validate a nudge action.

    Two-party completion: the company can only confirm once the advisor has
    marked the nudge complete, and the advisor can only mark it once.

    Args:
        from_status: Current nudge status
        action: accept, decline, mark_complete or confirm_complete
        advisor_completed: Current value of the advisor's completion flag

    Returns:
        TransitionResult indicating if the transition is valid and why
    """
    if from_status == NudgeStatus.ACCEPTED:
        if action == "confirm_complete" and not advisor_completed:
            return TransitionResult(
                valid=False,
                from_status=from_status,
                to_status=from_status,
                reason="Nudge cannot be confirmed before the advisor marks it complete",
                trigger=action,
            )
        if action == "mark_complete" and advisor_completed:
            return TransitionResult(
                valid=False,
                from_status=from_status,
                to_status=from_status,
                reason="Nudge is already marked complete by the advisor",
                trigger=action,
            )
    return _lookup(NUDGE_TRANSITIONS, from_status, action)


def validate_application_transition(
    from_status: ApplicationStatus, action: str
) -> TransitionResult:
    return _lookup(APPLICATION_TRANSITIONS, from_status, action)


def require_valid(result: TransitionResult) -> TransitionResult:
    """Return the result if valid, otherwise raise InvalidTransitionError."""
    if not result.valid:
        logger.info(f"Rejected transition: {result.reason}")
        raise InvalidTransitionError(result)
    return result


def is_terminal_status(status) -> bool:
    """
    Check if a status is terminal (no valid outgoing transitions).

    Works for any of the workflow status enums.
    """
    tables = (
        CONTACT_TRANSITIONS,
        HANDSHAKE_TRANSITIONS,
        NUDGE_TRANSITIONS,
        APPLICATION_TRANSITIONS,
    )
    for table in tables:
        if any(from_status == status for from_status, _ in table):
            return False
    return True


def is_nudge_complete(advisor_completed: bool, company_confirmed: bool) -> bool:
    """A nudge is complete only when both parties have confirmed."""
    return advisor_completed and company_confirmed
