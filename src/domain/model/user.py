from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    username: str
    email: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None

    def to_public_dict(self) -> dict:
        """User fields safe to return to clients (never the password hash)."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'createdAt': self.created_at,
        }
