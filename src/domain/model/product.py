"""Product domain model."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from domain.model.errors import ValidationError
from domain.model.price import to_amount

if TYPE_CHECKING:
    from port.price_cipher import PriceCipher


REQUIRED_FIELDS = ('name', 'description', 'image_url')


@dataclass
class Product:
    """A catalog entry.

    ``price`` always holds ciphertext. ``original_price`` is only populated
    when the repository was asked for it explicitly, or right after the
    price was set in this process.
    """
    id: str
    name: str
    description: str
    image_url: str
    price: str
    created_at: datetime
    updated_at: datetime
    technical_details: dict[str, Any] = field(default_factory=dict)
    original_price: Decimal | None = None

    @staticmethod
    def create(
        name: str,
        description: str,
        image_url: str,
        price,
        cipher: PriceCipher,
        technical_details: dict[str, Any] | None = None,
    ) -> Product:
        """Factory method. Validates fields and encrypts the price."""
        now = datetime.now(timezone.utc)
        product = Product(
            id=uuid.uuid4().hex,
            name=_require_text('name', name),
            description=_require_text('description', description),
            image_url=_require_text('image_url', image_url),
            price='',
            created_at=now,
            updated_at=now,
            technical_details=_check_details(technical_details),
        )
        product.set_price(price, cipher)
        return product

    def set_price(self, value, cipher: PriceCipher) -> None:
        """Single entry point for price changes: keeps plaintext and ciphertext in step."""
        amount = to_amount(value)
        self.original_price = amount
        self.price = cipher.encrypt(amount)
        self.updated_at = datetime.now(timezone.utc)

    def apply_changes(self, changes: dict[str, Any], cipher: PriceCipher) -> None:
        """Apply a partial update. Keys absent from ``changes`` are left untouched."""
        for name in REQUIRED_FIELDS:
            if name in changes and changes[name] is not None:
                setattr(self, name, _require_text(name, changes[name]))
        if changes.get('technical_details') is not None:
            self.technical_details = _check_details(changes['technical_details'])
        if changes.get('price') is not None:
            self.set_price(changes['price'], cipher)
        self.updated_at = datetime.now(timezone.utc)


def _require_text(name: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Product {name} is required")
    return value.strip()


def _check_details(details) -> dict[str, Any]:
    if details is None:
        return {}
    if not isinstance(details, dict) or not all(isinstance(k, str) for k in details):
        raise ValidationError("Technical details must be an object with string keys")
    return dict(details)
