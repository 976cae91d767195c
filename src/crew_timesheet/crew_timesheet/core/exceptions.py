class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class DataSourceError(DomainError):
    """Raised when the backing store cannot answer a query."""


class SessionCacheError(DomainError):
    """Raised when the cached session profile cannot be decoded."""
