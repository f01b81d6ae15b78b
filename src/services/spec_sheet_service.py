"""Spec sheet download flow: access check, lead capture and PDF building."""

import logging

from domain.model.auth_context import AuthenticationContext
from domain.model.errors import DomainError
from domain.model.lead_email import LeadEmail
from port.lead_email_repository import LeadEmailRepository
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository
from port.spec_sheet_renderer import SpecSheetRenderer
from services.catalog_service import find_product, reveal_price

logger = logging.getLogger(__name__)


def check_access(ctx: AuthenticationContext) -> dict:
    """Anonymous visitors must leave an email before downloading."""
    return {
        'requiresEmail': not ctx.is_authenticated,
        'isAuthenticated': ctx.is_authenticated,
    }


def store_lead_email(
    leads: LeadEmailRepository,
    products: ProductRepository,
    email: str,
    product_id: str,
    ip_address: str | None = None,
    user_agent: str | None = None,
) -> LeadEmail:
    """Record a lead for an existing product.

    Raises:
        ValidationError: malformed email
        NotFoundError: product does not exist
    """
    lead = LeadEmail.create(email=email, product_id=product_id, ip_address=ip_address, user_agent=user_agent)
    find_product(products, product_id)

    if not leads.save(lead):
        raise DomainError("Failed to store email")
    return lead


def build_spec_sheet(
    products: ProductRepository,
    cipher: PriceCipher,
    renderer: SpecSheetRenderer,
    ctx: AuthenticationContext,
    product_id: str,
) -> bytes:
    """Render the product's spec sheet. The price line appears only for authenticated callers.

    Raises:
        NotFoundError: product does not exist
    """
    product = find_product(products, product_id)
    price = reveal_price(product, cipher, ctx)
    logger.info("Rendering spec sheet", extra={"productId": product_id, "withPrice": price is not None})
    return renderer.render(product, price=price)
