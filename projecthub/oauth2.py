"""JWT utilities for auth.

Responsibilities:
- Create and verify HS256-signed access tokens with expirations.
- Resolve the current user from the bearer token for every protected route.
- Surface HTTP-friendly errors for missing/invalid/expired tokens.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from projecthub.core.config import settings
from projecthub.core.database import get_db
from projecthub.core.exceptions import InvalidTokenException
from projecthub.modules.users.models import User
from projecthub.modules.users.schemas import TokenData

logger = logging.getLogger(__name__)

# Tokens are issued by the JSON login route; the scheme only extracts the bearer header.
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.api_prefix}/auth/login", auto_error=False
)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token carrying ``user_id`` and an ``exp`` claim."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode.update({"exp": expire})

    if "user_id" in to_encode:
        try:
            to_encode["user_id"] = int(to_encode["user_id"])
        except (TypeError, ValueError):
            logger.error(f"Invalid user_id format: {to_encode['user_id']}")
            raise ValueError("Invalid user_id format")

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def verify_access_token(token: str) -> TokenData:
    """Verify JWT access token (signature/exp/user_id) and return TokenData."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.info(f"JWT Error: {str(e)}")
        raise InvalidTokenException()

    user_id = payload.get("user_id")
    if user_id is None:
        logger.warning("User ID not found in token payload")
        raise InvalidTokenException()
    try:
        return TokenData(id=int(user_id))
    except (TypeError, ValueError):
        raise InvalidTokenException()


def get_current_user(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user for the bearer token, or raise a 401."""
    if not token:
        raise InvalidTokenException("No token, authorization denied")

    token_data = verify_access_token(token)
    user = db.get(User, token_data.id)
    if user is None:
        raise InvalidTokenException()

    request.state.user = user
    return user
