"""Port definition for ProductRepository."""

from typing import Protocol

from domain.model.product import Product


class ProductRepository(Protocol):
    def save(self, product: Product) -> bool:
        """Insert or update the whole product. Return True on success."""
        ...

    def get_by_id(self, product_id: str, include_original_price: bool = False) -> Product | None: ...

    def find_all(self) -> list[Product]: ...

    def delete(self, product_id: str) -> bool:
        """Hard delete. Return True if a product was removed."""
        ...
