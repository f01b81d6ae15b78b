"""Domain-level exceptions.

Services raise these errors to express business rule violations.
Route handlers catch them and map to appropriate HTTP status codes.
"""


class DomainError(Exception):
    """Base class for all domain errors."""


class NotFoundError(DomainError):
    """Requested entity does not exist."""


class ValidationError(DomainError):
    """Input violates a business validation rule."""


class DuplicateError(ValidationError):
    """Entity with the same unique key already exists."""


class AuthenticationError(DomainError):
    """Caller could not be authenticated.

    The message is always generic; the reason is never exposed to clients.
    """


class InvalidTokenError(AuthenticationError):
    """Bearer token is malformed, badly signed or expired."""


class DecryptionError(DomainError):
    """Stored price ciphertext could not be decrypted."""
