"""Authentication routes (register, login, me)."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_app_settings, get_token_service, get_user_repo
from api.models import LoginRequest, RegisterRequest
from api.security import require_auth
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import AuthenticationError, DomainError, ValidationError
from port.user_repository import UserRepository
from services import auth_service
from services.token_service import TokenService
from utils.config import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_app_settings),
):
    """Register a new user and return a token.

    Raises:
        HTTPException: 400 on missing fields or duplicate username/email
    """
    try:
        user = auth_service.register(
            repo,
            username=request.username,
            email=request.email,
            password=request.password,
            rounds=settings.bcrypt_rounds,
        )
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))

    logger.info("User registered", extra={"userId": user.id})
    return {
        "success": True,
        "message": "User registered successfully",
        "token": tokens.issue(user),
        "user": user.to_public_dict(),
    }


@router.post("/login")
async def login(
    request: LoginRequest,
    repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
):
    """Login user and return a token. Unknown email and wrong password both give 401."""
    try:
        user = auth_service.authenticate(repo, email=request.email, password=request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))

    logger.info("User logged in", extra={"userId": user.id})
    return {
        "success": True,
        "message": "Login successful",
        "token": tokens.issue(user),
        "user": user.to_public_dict(),
    }


@router.get("/me")
async def get_me(ctx: AuthenticationContext = Depends(require_auth)):
    """Current authenticated user (without password hash)."""
    return {"success": True, "data": ctx.principal.to_public_dict()}
