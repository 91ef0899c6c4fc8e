"""Invitation delivery for newly provisioned accounts.

There is no mail transport yet: delivery writes the message to the
application log, which is how invitations are read in development.
"""

import logging
from dataclasses import dataclass

from flask import current_app

from .errors import ValidationError

logger = logging.getLogger(__name__)


@dataclass
class InvitePreferences:
    """Invitation delivery configuration."""

    enabled: bool = True
    sender: str = "noreply@ethiq.com"
    login_url: str = "http://localhost:5060/login"
    learn_more_url: str = "http://localhost:5060/learn-more"


@dataclass
class InviteMessage:
    recipient_email: str
    recipient_name: str
    company_relationship: str
    user_type: str
    temporary_password: str
    subject: str
    body: str


class InviteError(ValidationError):
    """Raised when an invitation is missing what it needs to be sent."""


class InviteMailer:
    """Builds and delivers invitation emails."""

    def __init__(self, preferences: InvitePreferences | None = None):
        self.preferences = preferences or InvitePreferences()
        self.sent_count = 0

    def default_subject(self, company_relationship: str) -> str:
        return f"You've been invited to join {company_relationship} on EthIQ Board"

    def default_body(
        self,
        recipient_name: str,
        recipient_email: str,
        company_relationship: str,
        user_type: str,
        temporary_password: str,
    ) -> str:
        return (
            f"Hello {recipient_name},\n\n"
            f"You're receiving this message because {company_relationship} is now using "
            f"EthIQ Board to manage, engage, and support its advisors.\n\n"
            f"Your account has been created with the following details:\n\n"
            f"Email: {recipient_email}\n"
            f"Role: {user_type.capitalize()}\n"
            f"Temporary Password: {temporary_password}\n\n"
            f"To get started:\n"
            f"1. Visit {self.preferences.login_url}\n"
            f"2. Enter your email and temporary password\n"
            f"3. You'll be prompted to set a new password\n"
            f"4. Complete your profile setup\n\n"
            f"Learn more about EthIQ: {self.preferences.learn_more_url}\n\n"
            f"Best regards,\n"
            f"The EthIQ Board Team"
        )

    def build_message(
        self,
        recipient_email: str,
        recipient_name: str,
        company_relationship: str,
        user_type: str,
        temporary_password: str,
        custom_subject: str | None = None,
        custom_body: str | None = None,
    ) -> InviteMessage:
        """Validate the invitation fields and assemble the message."""
        if not isinstance(recipient_email, str) or "@" not in recipient_email:
            raise InviteError("Invalid email address")
        if not recipient_name:
            raise InviteError("Recipient name is required")
        if not company_relationship:
            raise InviteError("Company relationship is required")

        subject = custom_subject or self.default_subject(company_relationship)
        body = custom_body or self.default_body(
            recipient_name, recipient_email, company_relationship, user_type, temporary_password
        )
        return InviteMessage(
            recipient_email=recipient_email,
            recipient_name=recipient_name,
            company_relationship=company_relationship,
            user_type=user_type,
            temporary_password=temporary_password,
            subject=subject,
            body=body,
        )

    def send(self, message: InviteMessage) -> bool:
        """Deliver an invitation. Returns True if delivered or delivery is disabled."""
        if not self.preferences.enabled:
            logger.info(f"Invite delivery disabled, not sending to {message.recipient_email}")
            return True

        logger.info(
            "Invitation email\n"
            f"From: {self.preferences.sender}\n"
            f"To: {message.recipient_email}\n"
            f"Subject: {message.subject}\n\n"
            f"{message.body}"
        )
        self.sent_count += 1
        return True


def get_invite_mailer() -> InviteMailer:
    return current_app.extensions["invite_mailer"]
