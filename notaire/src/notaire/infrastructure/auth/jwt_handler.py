"""
JWT token handler for authentication.
Provides token creation and validation.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from jose import JWTError, jwt

from notaire.config.settings import get_settings
from notaire.domain.exceptions.auth import ExpiredTokenError, InvalidTokenError


def create_access_token(user_id: str, owner_id: Optional[str] = None) -> str:
    """
    Create JWT access token for a user who passed OTP verification.

    Args:
        user_id: User identifier
        owner_id: Human-facing owner id, if the user has one

    Returns:
        Encoded JWT token string

    Example:
        >>> token = create_access_token("5f0c...", owner_id="OWN-1A2B3C4D")
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "owner": owner_id,
        "iat": now,
        "exp": now + timedelta(hours=settings.JWT_EXPIRATION_HOURS),
        "type": "access",
    }
    return jwt.encode(
        payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str) -> Dict[str, Optional[str]]:
    """
    Decode and validate JWT access token.

    Args:
        token: JWT token string

    Returns:
        Dictionary with user_id and owner_id

    Raises:
        ExpiredTokenError: If token has expired
        InvalidTokenError: If token is invalid or malformed
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.ExpiredSignatureError:
        raise ExpiredTokenError()
    except JWTError:
        raise InvalidTokenError()

    user_id = payload.get("sub")
    if not user_id or payload.get("type") != "access":
        raise InvalidTokenError()

    return {
        "user_id": user_id,
        "owner_id": payload.get("owner"),
    }


def verify_token(token: str) -> bool:
    """
    Verify if token is valid.

    Example:
        >>> if verify_token(token):
        ...     print("Valid token")
    """
    try:
        decode_access_token(token)
        return True
    except (ExpiredTokenError, InvalidTokenError):
        return False
