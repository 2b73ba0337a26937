class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when a PIN does not match."""


class AuthorizationError(DomainError):
    """Raised when a session lacks permission for an action."""


class PersistenceError(DomainError):
    """Raised when the durable store cannot be read or written.

    The in-memory state handed to the store may already have changed.
    """


class StaleStateError(PersistenceError):
    """Raised when a worker state was saved by someone else in the meantime."""
