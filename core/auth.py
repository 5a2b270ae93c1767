from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from fastapi.security import HTTPBearer

from core.errors import AuthError
from core.settings import settings

bearer_scheme = HTTPBearer(auto_error=False)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)
    return encoded_jwt


def resolve_caller_identity(token: Optional[str]) -> int:
    """Return the user id carried in a bearer token or raise AuthError."""
    if not token or token.strip() == "":
        raise AuthError("Authentication required")

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        raise AuthError("Invalid authentication credentials")

    subject = payload.get("sub")
    if subject is None:
        raise AuthError("Invalid authentication credentials")

    try:
        return int(subject)
    except (TypeError, ValueError):
        raise AuthError("Invalid authentication credentials")
