"""Caller identity: bearer JWT issue and verification."""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from upfor.config import settings
from upfor.database import get_db
from upfor.errors import AuthError
from upfor.models.user import User

logger = logging.getLogger(__name__)


def create_access_token(user_id: str, now: Optional[datetime] = None) -> str:
    """Sign an access token whose ``sub`` claim is the user id."""
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": int(issued.timestamp()),
        "exp": int((issued + timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)).timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> str:
    """Return the user id carried by a valid token, else raise AuthError."""
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthError("Token expired")
    except jwt.InvalidTokenError:
        logger.warning("Rejected invalid bearer token")
        raise AuthError("Invalid or expired token")

    sub = payload.get("sub")
    if not sub:
        raise AuthError("Invalid token (no sub)")
    return str(sub)


def get_current_user_id(request: Request, db: Session = Depends(get_db)) -> str:
    """FastAPI dependency: verified caller id from the Authorization header."""
    auth = request.headers.get("authorization")
    if not auth or not auth.lower().startswith("bearer "):
        raise AuthError("Missing Authorization header")

    user_id = decode_access_token(auth.split(" ", 1)[1].strip())
    if db.query(User.user_id).filter(User.user_id == user_id).first() is None:
        raise AuthError("Unknown user")
    return user_id
