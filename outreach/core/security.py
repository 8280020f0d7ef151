from datetime import datetime, timedelta, timezone
from typing import List, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError

from outreach.core.config import get_settings
from outreach.core.rbac.principal import Principal


class TokenPayload(BaseModel):
    """Claims carried by an access token."""
    sub: str
    email: Optional[str] = None
    role: Optional[str] = None
    permissions: Optional[List[str]] = None
    type: str = "access"


def create_access_token(
    subject: str,
    role: Optional[str],
    permissions: Optional[List[str]] = None,
    email: Optional[str] = None,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create a signed JWT access token for a principal."""
    settings = get_settings()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode = {
        "sub": str(subject),
        "email": email,
        "role": role.value if hasattr(role, "value") else role,
        "permissions": list(permissions) if permissions is not None else None,
        "exp": expire,
        "type": "access",
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str) -> Optional[TokenPayload]:
    """Decode and validate a JWT access token. Returns None if it is not usable."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None

    try:
        claims = TokenPayload(**payload)
    except ValidationError:
        return None

    if claims.type != "access":
        return None
    return claims


oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def get_optional_principal(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
) -> Optional[Principal]:
    """Principal from the bearer token, or None when absent or invalid.

    Gates decide what a missing principal means; this dependency never raises.
    """
    if not token:
        return None

    claims = decode_token(token)
    if claims is None:
        return None

    principal = Principal(
        sub=claims.sub,
        email=claims.email,
        role=claims.role,
        permissions=claims.permissions,
    )
    request.state.user = principal
    return principal
