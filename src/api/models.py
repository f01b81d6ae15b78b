"""Pydantic models for API requests.

Product and lead bodies use camelCase on the wire (``imageUrl``,
``technicalDetails``, ``productId``); snake_case names are accepted too.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


class RegisterRequest(BaseModel):
    """Request model for user registration."""
    username: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ProductCreateRequest(CamelModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    price: Decimal = Field(..., ge=0, description="Plain price; stored encrypted")
    technical_details: dict[str, Any] = Field(default_factory=dict)


class ProductUpdateRequest(CamelModel):
    """Partial update; only fields sent by the client are applied."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    image_url: Optional[str] = Field(None, min_length=1)
    price: Optional[Decimal] = Field(None, ge=0)
    technical_details: Optional[dict[str, Any]] = None


class StoreEmailRequest(CamelModel):
    email: EmailStr
    product_id: str = Field(..., min_length=1)
