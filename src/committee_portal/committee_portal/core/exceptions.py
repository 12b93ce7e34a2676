class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidCredentials(DomainError):
    """Raised when login credentials are invalid."""


AuthenticationError = InvalidCredentials


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class NotFound(DomainError):
    """Raised when a member, team, participant or user does not exist."""


class ConstraintViolation(DomainError):
    """Raised when the store rejects a write on a unique or foreign key."""


class StorageUnavailable(DomainError):
    """Raised when the database or photo storage cannot be reached."""
