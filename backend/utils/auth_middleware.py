"""
Realty Admin Auth Middleware
============================
JWT validation and admin gating for the JSON API.

Usage:
    from backend.utils.auth_middleware import require_admin

    @router.get("/admin-only")
    async def admin_endpoint(user: User = Depends(require_admin)):
        return {"message": f"Hello {user.email}"}
"""

import os
import logging
from typing import Optional

import jwt
from fastapi import HTTPException, Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import BaseModel

from config import AppConfig
from utils.database.models import ProfileModel

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


# =============================================================================
# MODELS
# =============================================================================

class User(BaseModel):
    """Authenticated user with role."""
    id: str
    email: str = ""
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == AppConfig.ADMIN_ROLE


class AuthError(HTTPException):
    """Authentication error."""
    def __init__(self, detail: str):
        super().__init__(status_code=401, detail=detail)


class ForbiddenError(HTTPException):
    """Authorization error - user lacks permission."""
    def __init__(self, detail: str = "You don't have permission to access the admin panel."):
        super().__init__(status_code=403, detail=detail)


# =============================================================================
# TOKEN VALIDATION
# =============================================================================

def decode_jwt(token: str) -> dict:
    """Decode and validate a Supabase access token."""
    secret = os.environ.get("SUPABASE_JWT_SECRET", "")
    try:
        # Supabase signs access tokens with HS256 and the project JWT secret
        if secret:
            return jwt.decode(
                token,
                secret,
                algorithms=["HS256"],
                audience="authenticated"
            )
        # Fallback: decode without verification (DEV ONLY)
        logger.warning("SUPABASE_JWT_SECRET not set - accepting unverified token")
        return jwt.decode(token, options={"verify_signature": False})
    except jwt.ExpiredSignatureError:
        raise AuthError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthError(f"Invalid token: {str(e)}")


# =============================================================================
# DEPENDENCIES
# =============================================================================

async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Optional[User]:
    """
    Get current authenticated user from JWT.
    Returns None if not authenticated.
    """
    token = credentials.credentials if credentials else None

    # Also check cookie (for browser requests)
    if not token:
        token = request.cookies.get("sb-access-token")

    if not token:
        return None

    try:
        payload = decode_jwt(token)
    except AuthError as e:
        logger.info(f"Rejected token: {e.detail}")
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    return User(
        id=user_id,
        email=payload.get("email", ""),
        role=ProfileModel.get_role(user_id),
    )


async def require_auth(
    user: Optional[User] = Depends(get_current_user)
) -> User:
    """Require authenticated user."""
    if not user:
        raise AuthError("Authentication required")
    return user


async def require_admin(user: User = Depends(require_auth)) -> User:
    """Require an admin profile. Nothing behind this dependency runs otherwise."""
    if not user.is_admin:
        logger.warning(f"Admin access denied for {user.email or user.id}")
        raise ForbiddenError()
    return user
