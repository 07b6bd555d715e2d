# cloudhire/core/security.py
# Bearer-token handling. Tokens are issued by the external identity
# provider; this module only decodes them when AUTH_REQUIRED is on.
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from pydantic import BaseModel

from cloudhire.core.config import settings
from cloudhire.core.errors import UnauthorizedError

ACCESS_TOKEN_EXPIRE_MINUTES = 60


class TokenData(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None, **claims) -> str:
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    payload = {"sub": subject, "iat": now, "exp": exp, **claims}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> TokenData:
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        raise UnauthorizedError("Invalid token") from exc
    if not payload.get("sub"):
        raise UnauthorizedError("Invalid token")
    return TokenData(sub=payload.get("sub"), email=payload.get("email"))


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def authenticate(authorization: Optional[str]) -> Optional[TokenData]:
    """
    Check the Authorization header of a mutating request.
    Returns None when auth is delegated (AUTH_REQUIRED off).
    """
    if not settings.AUTH_REQUIRED:
        return None
    token = bearer_token(authorization)
    if not token:
        raise UnauthorizedError("Authentication token is required")
    return decode_access_token(token)
