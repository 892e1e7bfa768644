class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class UnauthenticatedError(DomainError):
    """Raised when a request carries no usable bearer token."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFoundError(DomainError):
    """Raised when a referenced resource does not exist."""


class ConflictError(DomainError):
    """Raised when a unique value (e.g. email) is already taken."""
