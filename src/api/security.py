"""Bearer token authentication dependencies.

One resolver turns the Authorization header into an AuthenticationContext
and never rejects. Optional routes use the context as-is; mandatory routes
add a single is_authenticated check on top.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_token_service, get_user_repo
from domain.model.auth_context import AuthenticationContext
from domain.model.errors import InvalidTokenError
from port.user_repository import UserRepository
from services.token_service import TokenService

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Not authorized to access this resource"

security = HTTPBearer(auto_error=False)


def resolve_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials],
    user_repo: UserRepository,
    tokens: TokenService,
) -> AuthenticationContext:
    """Resolve the caller. Every failure path yields an anonymous context."""
    if not credentials or not credentials.credentials:
        return AuthenticationContext.anonymous()

    try:
        claims = tokens.verify(credentials.credentials)
    except InvalidTokenError:
        return AuthenticationContext.anonymous()

    user = user_repo.get_by_id(claims.subject)
    if not user:
        logger.debug("Token subject no longer exists", extra={"userId": claims.subject})
        return AuthenticationContext.anonymous()

    return AuthenticationContext.for_user(user)


def get_auth_context(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    user_repo: UserRepository = Depends(get_user_repo),
    tokens: TokenService = Depends(get_token_service),
) -> AuthenticationContext:
    """Optional authentication: anonymous callers proceed."""
    return resolve_auth_context(credentials, user_repo, tokens)


def require_auth(ctx: AuthenticationContext = Depends(get_auth_context)) -> AuthenticationContext:
    """Mandatory authentication. Raises 401 without saying why."""
    if not ctx.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=NOT_AUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
    return ctx
