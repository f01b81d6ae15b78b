"""Product catalog routes.

- GET /api/products, GET /api/products/{id}: optional auth, price only for authenticated callers
- POST/PUT/DELETE /api/products[/{id}]: authentication required
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_price_cipher, get_product_repo
from api.models import ProductCreateRequest, ProductUpdateRequest
from api.security import get_auth_context, require_auth
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import DomainError, NotFoundError, ValidationError
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository
from services import catalog_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["products"])


def _raise_for(error: DomainError):
    if isinstance(error, NotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(error))
    if isinstance(error, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(error))


@router.get("")
async def list_products(
    ctx: AuthenticationContext = Depends(get_auth_context),
    repo: ProductRepository = Depends(get_product_repo),
    cipher: PriceCipher = Depends(get_price_cipher),
):
    products = catalog_service.list_products(repo, cipher, ctx)
    return {
        "success": True,
        "count": len(products),
        "data": products,
        "isAuthenticated": ctx.is_authenticated,
    }


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    ctx: AuthenticationContext = Depends(get_auth_context),
    repo: ProductRepository = Depends(get_product_repo),
    cipher: PriceCipher = Depends(get_price_cipher),
):
    try:
        product = catalog_service.get_product(repo, cipher, ctx, product_id)
    except DomainError as e:
        _raise_for(e)
    return {"success": True, "data": product, "isAuthenticated": ctx.is_authenticated}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    request: ProductCreateRequest,
    ctx: AuthenticationContext = Depends(require_auth),
    repo: ProductRepository = Depends(get_product_repo),
    cipher: PriceCipher = Depends(get_price_cipher),
):
    try:
        product = catalog_service.create_product(repo, cipher, request.model_dump())
    except DomainError as e:
        _raise_for(e)
    return {
        "success": True,
        "message": "Product created successfully",
        "data": catalog_service.present_product(product, cipher, ctx),
    }


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    ctx: AuthenticationContext = Depends(require_auth),
    repo: ProductRepository = Depends(get_product_repo),
    cipher: PriceCipher = Depends(get_price_cipher),
):
    try:
        product = catalog_service.update_product(repo, cipher, product_id, request.model_dump(exclude_unset=True))
    except DomainError as e:
        _raise_for(e)
    return {
        "success": True,
        "message": "Product updated successfully",
        "data": catalog_service.present_product(product, cipher, ctx),
    }


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    ctx: AuthenticationContext = Depends(require_auth),
    repo: ProductRepository = Depends(get_product_repo),
):
    try:
        catalog_service.delete_product(repo, product_id)
    except DomainError as e:
        _raise_for(e)

    logger.info("Product deleted", extra={"productId": product_id, "userId": ctx.principal.id})
    return {"success": True, "message": "Product deleted successfully"}
