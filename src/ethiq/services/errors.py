"""Service-layer exceptions.

Every service error carries the HTTP status the API should answer with, so
route handlers can translate them into response envelopes uniformly.
"""


class EthiqError(Exception):
    """Base class for expected, user-facing failures."""

    status_code = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(EthiqError):
    """Input failed validation before any store or auth write."""


class NotFoundError(EthiqError):
    status_code = 404


class DuplicateEmailError(EthiqError):
    """The email already belongs to a user; carries that user's id."""

    status_code = 409

    def __init__(self, email: str, existing_user_id: str):
        self.email = email
        self.existing_user_id = existing_user_id
        super().__init__(f"A user with email {email} already exists")


class EligibilityError(EthiqError):
    """The company may not engage this advisor at the requested stage."""

    status_code = 403


class ConflictError(EthiqError):
    status_code = 409


class AuthenticationError(EthiqError):
    status_code = 401


class ProvisioningError(EthiqError):
    """A store or auth-provider write failed while creating an account."""

    status_code = 500
