"""Eligibility rules gating which workflow stage a company may use with an advisor.

All functions are pure: they take already-loaded advisors, contacts and
handshakes and filter them by company name and status. Nothing is cached;
callers re-evaluate on every request.

Rules:
    1. Directory: advisors that do NOT list the company in
       company_relationships are available for an initial contact.
    2. Handshake: the advisor lists the company AND has accepted a contact
       from that company.
    3. Nudge: the advisor lists the company AND has an Active handshake
       with that company.
"""

from typing import Iterable

from ..models.contact import ContactStatus
from ..models.handshake import HandshakeStatus


def has_relationship(advisor, company: str) -> bool:
    return company in (advisor.company_relationships or [])


def is_available_for_contact(advisor, company: str) -> bool:
    """True when the company is absent from the advisor's relationships."""
    return not has_relationship(advisor, company)


def directory_for(advisors: Iterable, company: str) -> list:
    """Advisors the company can send an initial contact to."""
    return [a for a in advisors if is_available_for_contact(a, company)]


def has_accepted_contact(advisor, company: str, contacts: Iterable) -> bool:
    return any(
        c.advisor_id == advisor.id
        and c.company_relationship == company
        and c.status == ContactStatus.ACCEPTED
        for c in contacts
    )


def has_active_handshake(advisor, company: str, handshakes: Iterable) -> bool:
    return any(
        h.advisor_id == advisor.id
        and h.company_relationship == company
        and h.status == HandshakeStatus.ACTIVE
        for h in handshakes
    )


def can_propose_handshake(advisor, company: str, contacts: Iterable) -> bool:
    return has_relationship(advisor, company) and has_accepted_contact(
        advisor, company, contacts
    )


def can_send_nudge(advisor, company: str, handshakes: Iterable) -> bool:
    return has_relationship(advisor, company) and has_active_handshake(
        advisor, company, handshakes
    )


def handshake_candidates(advisors: Iterable, company: str, contacts: Iterable) -> list:
    """Advisors the company may propose a handshake to."""
    contacts = list(contacts)
    return [a for a in advisors if can_propose_handshake(a, company, contacts)]


def nudge_candidates(advisors: Iterable, company: str, handshakes: Iterable) -> list:
    """Advisors the company may send a nudge to."""
    handshakes = list(handshakes)
    return [a for a in advisors if can_send_nudge(a, company, handshakes)]
