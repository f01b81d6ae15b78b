"""In-memory implementation of ProductRepository for testing."""

from dataclasses import replace

from domain.model.product import Product


class FakeProductRepository:
    def __init__(self):
        self.store: dict[str, Product] = {}

    # ── write operations ─────────────────────────────────────

    def save(self, product: Product) -> bool:
        stored = self.store.get(product.id)
        original_price = product.original_price
        if original_price is None and stored is not None:
            original_price = stored.original_price
        created_at = stored.created_at if stored is not None else product.created_at
        self.store[product.id] = replace(
            product,
            technical_details=dict(product.technical_details),
            original_price=original_price,
            created_at=created_at,
        )
        return True

    def delete(self, product_id: str) -> bool:
        return self.store.pop(product_id, None) is not None

    # ── read operations ──────────────────────────────────────

    def get_by_id(self, product_id: str, include_original_price: bool = False) -> Product | None:
        stored = self.store.get(product_id)
        if stored is None:
            return None
        if include_original_price:
            return replace(stored, technical_details=dict(stored.technical_details))
        return replace(stored, technical_details=dict(stored.technical_details), original_price=None)

    def find_all(self) -> list[Product]:
        products = sorted(self.store.values(), key=lambda p: p.created_at, reverse=True)
        return [replace(p, technical_details=dict(p.technical_details), original_price=None) for p in products]
