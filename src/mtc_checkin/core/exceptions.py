class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when the session carries no usable credentials."""


class AuthorizationError(DomainError):
    """Raised when a user's role cannot perform an action."""


class GatewayUnavailableError(DomainError):
    """Raised when the attendance backend cannot be reached."""
