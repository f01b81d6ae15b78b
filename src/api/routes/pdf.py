"""Spec sheet PDF routes.

- GET /api/pdf/check-auth/{product_id}: whether an email is needed before download
- POST /api/pdf/store-email: record a lead email
- GET /api/pdf/download/{product_id}: PDF, price line only for authenticated callers
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import Response

from api.dependencies import get_lead_email_repo, get_price_cipher, get_product_repo, get_spec_sheet_renderer
from api.models import StoreEmailRequest
from api.security import get_auth_context
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import DomainError, NotFoundError, ValidationError
from port.lead_email_repository import LeadEmailRepository
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository
from port.spec_sheet_renderer import SpecSheetRenderer
from services import spec_sheet_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/pdf", tags=["pdf"])


@router.get("/check-auth/{product_id}")
async def check_pdf_access(product_id: str, ctx: AuthenticationContext = Depends(get_auth_context)):
    return {"success": True, **spec_sheet_service.check_access(ctx)}


@router.post("/store-email", status_code=status.HTTP_201_CREATED)
async def store_email(
    request: StoreEmailRequest,
    http_request: Request,
    leads: LeadEmailRepository = Depends(get_lead_email_repo),
    products: ProductRepository = Depends(get_product_repo),
):
    try:
        spec_sheet_service.store_lead_email(
            leads,
            products,
            email=request.email,
            product_id=request.product_id,
            ip_address=http_request.client.host if http_request.client else None,
            user_agent=http_request.headers.get("user-agent"),
        )
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    return {"success": True, "message": "Email stored successfully"}


@router.get("/download/{product_id}")
async def download_spec_sheet(
    product_id: str,
    ctx: AuthenticationContext = Depends(get_auth_context),
    products: ProductRepository = Depends(get_product_repo),
    cipher: PriceCipher = Depends(get_price_cipher),
    renderer: SpecSheetRenderer = Depends(get_spec_sheet_renderer),
):
    try:
        content = spec_sheet_service.build_spec_sheet(products, cipher, renderer, ctx, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename=spec_sheet_{product_id}.pdf"},
    )
