"""Auth service: registration and credential checks.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging

import bcrypt

from domain.model.errors import AuthenticationError, DomainError, DuplicateError, ValidationError
from domain.model.lead_email import check_email
from domain.model.user import User
from port.user_repository import UserRepository

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10
MIN_PASSWORD_LENGTH = 6
# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

INVALID_CREDENTIALS = "Invalid credentials"


def _hash_password(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify_password(plain: str, hashed: str | None) -> bool:
    if not hashed:
        return False
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is malformed")
        return False


def _validate_password(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")


def register(
    repo: UserRepository,
    username: str,
    email: str,
    password: str,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """Register a new user.

    Raises:
        ValidationError: missing field, malformed email or short password
        DuplicateError: username or email (any case) already registered
    """
    if not username or not username.strip() or not email or not password:
        raise ValidationError("Please provide all required fields")

    username = username.strip()
    email = check_email(email).lower()
    _validate_password(password)

    if repo.get_by_email(email) or repo.get_by_username(username):
        raise DuplicateError("Username or email already registered")

    user = repo.create(username=username, email=email, password_hash=_hash_password(password, rounds))
    if not user:
        raise DomainError("Failed to create user")
    return user


def verify_credentials(repo: UserRepository, email: str, password: str) -> User | None:
    """Return the user owning these credentials, or None.

    Unknown email and wrong password are indistinguishable to the caller.
    """
    if not email or not password:
        return None
    user = repo.get_by_email(email.strip().lower())
    if not user or not _verify_password(password, user.password_hash):
        return None
    return user


def authenticate(repo: UserRepository, email: str, password: str) -> User:
    """Authenticate a user by email and password.

    Raises:
        AuthenticationError: invalid credentials (deliberately vague)
    """
    user = verify_credentials(repo, email, password)
    if user is None:
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user
