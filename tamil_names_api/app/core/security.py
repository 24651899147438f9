"""
Access control for the admin routes and session token issuing.

The site has no user accounts: visitors are identified only by an
opaque session token that the browser keeps.  Admin routes may be
protected by a single static bearer token configured through
``ADMIN_TOKEN``; when it is not configured the routes stay open.
"""

import hmac
import secrets
from typing import Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings


def generate_session_id() -> str:
    """Return a fresh, URL-safe session token."""
    return secrets.token_hex(13)


security = HTTPBearer(auto_error=False)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, str]:
    """Dependency that guards admin endpoints.

    Returns a small context dictionary describing the caller.  Raises
    HTTP 401 when an admin token is configured and the request does
    not carry it.
    """
    if not settings.admin_token:
        return {"sub": "admin", "auth": "open"}
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(
        credentials.credentials.encode("utf-8"), settings.admin_token.encode("utf-8")
    ):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return {"sub": "admin", "auth": "token"}
