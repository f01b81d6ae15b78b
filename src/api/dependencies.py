from functools import lru_cache

from fastapi import HTTPException

from adapter.crypto.price_cipher import build_price_cipher
from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.lead_email_repository import MongoLeadEmailRepository
from adapter.mongodb.product_repository import MongoProductRepository
from adapter.mongodb.user_repository import MongoUserRepository
from adapter.pdf.spec_sheet import FpdfSpecSheetRenderer
from port.lead_email_repository import LeadEmailRepository
from port.price_cipher import PriceCipher
from port.product_repository import ProductRepository
from port.spec_sheet_renderer import SpecSheetRenderer
from port.user_repository import UserRepository
from services.token_service import TokenService
from utils.config import Settings, get_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_product_repo() -> ProductRepository:
    return MongoProductRepository(_get_db())


def get_lead_email_repo() -> LeadEmailRepository:
    return MongoLeadEmailRepository(_get_db())


def get_app_settings() -> Settings:
    return get_settings()


@lru_cache(maxsize=1)
def get_token_service() -> TokenService:
    settings = get_settings()
    return TokenService(
        secret_key=settings.jwt_secret_key,
        expires_in=settings.jwt_expires_in,
        algorithm=settings.jwt_algorithm,
    )


@lru_cache(maxsize=1)
def get_price_cipher() -> PriceCipher:
    settings = get_settings()
    return build_price_cipher(settings.price_cipher_mode, settings.price_encryption_key)


def get_spec_sheet_renderer() -> SpecSheetRenderer:
    return FpdfSpecSheetRenderer()
