"""Catalog service: product CRUD and price visibility.

The persisted ``price`` is always ciphertext. Readers see the decrypted
amount only when their AuthenticationContext is authenticated; anonymous
readers get no ``price`` key at all.
"""

import logging
from decimal import Decimal
from typing import Any

from domain.model.auth_context import AuthenticationContext
from domain.model.errors import DecryptionError, DomainError, NotFoundError, ValidationError
from domain.model.product import Product
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'description', 'image_url', 'price', 'technical_details')


def reveal_price(product: Product, cipher: PriceCipher, ctx: AuthenticationContext) -> Decimal | None:
    """Decrypted price for authenticated callers, None otherwise or when unreadable."""
    if not ctx.is_authenticated:
        return None
    try:
        return cipher.decrypt(product.price)
    except DecryptionError as e:
        logger.warning("Failed to decrypt product price", extra={"productId": product.id, "error": str(e)})
        return None


def present_product(product: Product, cipher: PriceCipher, ctx: AuthenticationContext) -> dict[str, Any]:
    """Client view of a product, keyed in camelCase.

    Authenticated callers always get a ``price`` key (None if the ciphertext is
    unreadable). Anonymous callers never get one.
    """
    view = {
        'id': product.id,
        'name': product.name,
        'description': product.description,
        'imageUrl': product.image_url,
        'technicalDetails': product.technical_details,
        'createdAt': product.created_at,
        'updatedAt': product.updated_at,
    }
    if ctx.is_authenticated:
        view['price'] = reveal_price(product, cipher, ctx)
    return view


def list_products(repo: ProductRepository, cipher: PriceCipher, ctx: AuthenticationContext) -> list[dict[str, Any]]:
    return [present_product(p, cipher, ctx) for p in repo.find_all()]


def find_product(repo: ProductRepository, product_id: str, include_original_price: bool = False) -> Product:
    """Load a product or raise NotFoundError."""
    product = repo.get_by_id(product_id, include_original_price=include_original_price) if product_id else None
    if product is None:
        raise NotFoundError("Product not found")
    return product


def get_product(
    repo: ProductRepository,
    cipher: PriceCipher,
    ctx: AuthenticationContext,
    product_id: str,
) -> dict[str, Any]:
    return present_product(find_product(repo, product_id), cipher, ctx)


def create_product(repo: ProductRepository, cipher: PriceCipher, fields: dict[str, Any]) -> Product:
    """Create and persist a product. Price is encrypted through Product.set_price.

    Raises:
        ValidationError: a required field is missing or the price is invalid
    """
    if fields.get('price') is None:
        raise ValidationError("Product price is required")

    product = Product.create(
        name=fields.get('name'),
        description=fields.get('description'),
        image_url=fields.get('image_url'),
        price=fields['price'],
        cipher=cipher,
        technical_details=fields.get('technical_details'),
    )
    if not repo.save(product):
        raise DomainError("Failed to save product")

    logger.info("Product created", extra={"productId": product.id})
    return product


def update_product(
    repo: ProductRepository,
    cipher: PriceCipher,
    product_id: str,
    fields: dict[str, Any],
) -> Product:
    """Apply a partial update. A new price goes through the same set_price path as create.

    Raises:
        NotFoundError: product does not exist
        ValidationError: a supplied field is invalid
    """
    product = find_product(repo, product_id)
    changes = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS}
    product.apply_changes(changes, cipher)

    if not repo.save(product):
        raise DomainError("Failed to save product")

    logger.info("Product updated", extra={"productId": product.id, "priceChanged": 'price' in changes})
    return product


def delete_product(repo: ProductRepository, product_id: str) -> None:
    """Permanently remove a product.

    Raises:
        NotFoundError: product does not exist
    """
    if not product_id or not repo.delete(product_id):
        raise NotFoundError("Product not found")
