"""Lead email captured during the spec sheet download flow."""

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.errors import ValidationError

EMAIL_PATTERN = re.compile(r'^\S+@\S+\.\S+$')


def check_email(email: str | None) -> str:
    """Validate email shape and return it stripped.

    Raises:
        ValidationError: missing or malformed email
    """
    if not email or not isinstance(email, str):
        raise ValidationError("Email is required")
    email = email.strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("Please provide a valid email address")
    return email


@dataclass(frozen=True)
class LeadEmail:
    """Marketing contact. Unrelated to User and never modified after creation."""
    id: str
    email: str
    product_id: str
    downloaded_at: datetime
    ip_address: str = ''
    user_agent: str = ''

    @staticmethod
    def create(email: str, product_id: str, ip_address: str | None = None, user_agent: str | None = None) -> 'LeadEmail':
        return LeadEmail(
            id=uuid.uuid4().hex,
            email=check_email(email),
            product_id=product_id,
            downloaded_at=datetime.now(timezone.utc),
            ip_address=ip_address or '',
            user_agent=user_agent or '',
        )
