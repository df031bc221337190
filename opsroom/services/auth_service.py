"""Identity gateway: resolves the bearer token on a request to a caller id.

Tokens are issued by the external identity provider and signed with the
shared secret in settings. The caller id is the token's ``sub`` claim and is
trusted as-is; nothing here touches the database.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel

from ..config import settings

logger = logging.getLogger(__name__)

# Opaque caller identifier issued by the identity provider
CallerId = str

CALLER_ID_MAX_LENGTH = 128

# Bearer scheme; the token URL belongs to the identity provider
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=settings.identity_token_url)


class TokenData(BaseModel):
    """Token payload data schema."""

    caller_id: Optional[str] = None


def create_access_token(
    caller_id: CallerId,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Create a signed access token for a caller.

    Used by development tooling and tests in place of the identity provider.

    Args:
        caller_id: Caller identifier to place in the ``sub`` claim
        expires_delta: Optional custom expiration time delta

    Returns:
        Encoded JWT token string
    """
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(
            minutes=settings.jwt_expiration_minutes
        )

    return jwt.encode(
        {"sub": caller_id, "exp": expire},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )


def decode_access_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate an access token.

    Args:
        token: The JWT token string to decode

    Returns:
        TokenData with the caller id, or None if the token is invalid,
        expired or carries no usable subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None

    caller_id = payload.get("sub")
    if not isinstance(caller_id, str) or not caller_id:
        return None
    if len(caller_id) > CALLER_ID_MAX_LENGTH:
        return None

    return TokenData(caller_id=caller_id)


async def get_current_caller(
    token: str = Depends(oauth2_scheme),
) -> CallerId:
    """
    Resolve the authenticated caller id from the Authorization header.

    This is a FastAPI dependency; every core endpoint takes the caller id
    from here and passes it explicitly into the services.

    Raises:
        HTTPException: 401 if the token is missing or invalid
    """
    token_data = decode_access_token(token)
    if token_data is None or token_data.caller_id is None:
        logger.debug("Rejected request with invalid bearer token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return token_data.caller_id
