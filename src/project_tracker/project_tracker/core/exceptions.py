class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the underlying store rejects a read or write."""


class NotificationError(DomainError):
    """Raised when a notification channel fails to deliver."""
