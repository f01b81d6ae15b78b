"""Port definition for rendering a product spec sheet document."""

from decimal import Decimal
from typing import Protocol

from domain.model.product import Product


class SpecSheetRenderer(Protocol):
    def render(self, product: Product, price: Decimal | None = None) -> bytes:
        """Render the sheet. The price line is printed only when ``price`` is given."""
        ...
