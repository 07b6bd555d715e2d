# cloudhire/api/v1/auth.py
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cloudhire.core.security import TokenData, authenticate

# auto_error off: a missing header is only an error when AUTH_REQUIRED is on
security = HTTPBearer(auto_error=False)


async def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> Optional[TokenData]:
    """Dependency for mutating routes. Raises UnauthorizedError when a required token is missing or invalid."""
    header = f"{credentials.scheme} {credentials.credentials}" if credentials else None
    return authenticate(header)
