"""Shared dependencies: JWT auth, object ids, collaborator error mapping."""
import logging
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Annotated, Optional

import bcrypt
from beanie import PydanticObjectId
from botocore.exceptions import BotoCoreError, ClientError
from bson.errors import InvalidId
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pymongo.errors import PyMongoError

from app.config import settings
from app.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(subject: str) -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    to_encode = {"sub": subject, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(subject: str) -> str:
    expire = datetime.utcnow() + timedelta(days=settings.jwt_refresh_token_expire_days)
    to_encode = {"sub": subject, "exp": expire, "type": "refresh"}
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str, expected_type: str) -> str:
    """Return the user id carried by a token of the expected type."""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    if payload.get("type") != expected_type:
        raise HTTPException(status_code=401, detail="Invalid token type")
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user_id


def object_id(value: str, what: str) -> PydanticObjectId:
    """Parse a path id; malformed ids are reported as not found."""
    try:
        return PydanticObjectId(value)
    except (InvalidId, TypeError, ValueError):
        raise HTTPException(status_code=404, detail=f"{what} not found")


@contextmanager
def store_errors(action: str):
    """Map document-store / storage failures to a 503 naming the failed action."""
    try:
        yield
    except (PyMongoError, ClientError, BotoCoreError):
        logger.exception(f"Failed to {action}")
        raise HTTPException(status_code=503, detail=f"Failed to {action}")


async def get_current_user(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)],
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user_id = decode_token(credentials.credentials, "access")
    try:
        oid = PydanticObjectId(user_id)
    except (InvalidId, TypeError, ValueError):
        raise HTTPException(status_code=401, detail="Invalid token")
    with store_errors("load session"):
        user = await User.get(oid)
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user


# Type aliases for route injection
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminOnly = Annotated[User, Depends(get_current_user)]
TeacherOrAdmin = Annotated[User, Depends(get_current_user)]
