from typing import Protocol
from domain.model.user import User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, username: str, email: str, password_hash: str) -> User | None:
        """Create a new user. Return User or None if creation failed.

        Raises DuplicateError when username or email is already taken.
        """
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by (lowercased) email. Return User or None if not found."""
        ...

    def get_by_username(self, username: str) -> User | None:
        """Find a user by username. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...
