from typing import Annotated, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError

from libs.auth.models import AuthUser
from libs.common.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


def decode_token(token: str, secret: str, algorithm: str) -> AuthUser:
    """Decode and validate a bearer token into an AuthUser."""
    payload = jwt.decode(token, secret, algorithms=[algorithm])
    return AuthUser(**payload)


async def get_optional_user(
    request: Request,
    token: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> Optional[AuthUser]:
    """
    Return the caller if a valid bearer token is presented, else None.
    """
    if token is None:
        return None

    settings = request.app.state.settings
    try:
        return decode_token(
            token.credentials, settings.ADMIN_JWT_SECRET, settings.ADMIN_JWT_ALGORITHM
        )
    except (JWTError, ValidationError):
        logger.warning("Rejected bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_optional_admin(
    current_user: Annotated[Optional[AuthUser], Depends(get_optional_user)],
) -> Optional[AuthUser]:
    """Admin caller or None. Non-admin tokens are treated as anonymous."""
    if current_user is not None and current_user.is_admin:
        return current_user
    return None


async def require_admin(
    current_user: Annotated[Optional[AuthUser], Depends(get_optional_user)],
) -> AuthUser:
    """
    Ensure the caller presented a token carrying an admin role.
    """
    if current_user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return current_user
