"""
Authentication context for the admin panel.

Supabase Auth identifies the user; the `profiles` table says whether that
user is an admin. Each sign-in happens on its own client, and that client
travels with the context so the session's table calls run as that user.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

from config import AppConfig
from utils.database.models import ProfileModel
from utils.database.supabase_client import create_session_client

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    """Signed-in Supabase user."""
    id: str
    email: str = ""


@dataclass(frozen=True)
class AuthContext:
    """Current identity as seen by the admin panel."""
    user: Optional[AuthUser] = None
    is_admin: bool = False
    # Supabase client holding this user's session; never the shared one
    client: Any = field(default=None, compare=False, repr=False)

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = AuthContext()


def resolve_auth_context(user: Optional[AuthUser], client: Any = None) -> AuthContext:
    """
    Build the context for a user by looking up their profile role.

    Any lookup failure resolves to a non-admin context.
    """
    if user is None:
        return ANONYMOUS

    role = ProfileModel.get_role(user.id, client)
    is_admin = role == AppConfig.ADMIN_ROLE
    logger.info(f"Resolved auth for {user.email or user.id}: role={role!r} admin={is_admin}")
    return AuthContext(user=user, is_admin=is_admin, client=client)


def sign_in(email: str, password: str) -> Tuple[AuthContext, Optional[str]]:
    """
    Sign in with email/password through Supabase Auth on a fresh client.

    Returns:
        (context, error message or None)
    """
    supabase = create_session_client()
    if not supabase:
        return ANONYMOUS, "Supabase is not configured"

    try:
        response = supabase.auth.sign_in_with_password({"email": email, "password": password})
    except Exception as e:
        logger.error(f"❌ Sign-in failed for {email}: {e}")
        return ANONYMOUS, str(e) or "Sign-in failed"

    if not response or not response.user:
        return ANONYMOUS, "Sign-in failed"

    user = AuthUser(id=str(response.user.id), email=response.user.email or email)
    return resolve_auth_context(user, supabase), None


def sign_out(auth: AuthContext) -> AuthContext:
    """End this context's Supabase session and return the anonymous context."""
    if auth.client is not None:
        try:
            auth.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign-out error (ignored, local session cleared): {e}")
    return ANONYMOUS
