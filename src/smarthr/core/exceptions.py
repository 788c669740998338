class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    code = None


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the session cookie is missing, expired or revoked."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    status_code = 404


class QuotaExceededError(AuthorizationError):
    """Raised when a company has used all of its employee seats."""

    code = "seat_limit_reached"


class PaymentVerificationError(ValidationError):
    """Raised when a gateway signature does not match."""


class GatewayError(DomainError):
    """Raised when the payment gateway or identity provider call fails."""

    status_code = 502
