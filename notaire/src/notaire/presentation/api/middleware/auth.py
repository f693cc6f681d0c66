"""
Authentication middleware for JWT token validation.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from notaire.application.use_cases.get_user import GetUser
from notaire.di.dependencies import get_get_user
from notaire.domain.entities.user import User
from notaire.domain.exceptions import (
    EntityNotFoundError,
    ExpiredTokenError,
    InvalidTokenError,
)
from notaire.infrastructure.auth.jwt_handler import decode_access_token

# Bearer token security scheme
security = HTTPBearer()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    get_user: GetUser = Depends(get_get_user),
) -> User:
    """
    Extract and load current authenticated user from JWT token.

    Args:
        credentials: HTTP Authorization header with Bearer token
        get_user: GetUser use case (injected)

    Returns:
        User domain entity

    Raises:
        HTTPException: 401 if token invalid, expired, or user not found
    """
    try:
        payload = decode_access_token(credentials.credentials)
        return await get_user.execute(payload["user_id"])
    except ExpiredTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except (InvalidTokenError, EntityNotFoundError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
