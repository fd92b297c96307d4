"""
Supabase Client for Realty Admin

Two kinds of client:
- the process-wide service client used by the FastAPI backend (never signs in)
- one client per dashboard session, which carries that user's auth session

Supabase Auth rewrites the Authorization header of the client it signs in on,
so a signed-in identity must never live on the shared client.
"""

import os
import logging
from typing import Optional
from supabase import create_client, Client

logger = logging.getLogger(__name__)


def _credentials() -> tuple:
    return os.getenv('SUPABASE_URL'), os.getenv('SUPABASE_KEY')


class SupabaseClient:
    """Lazily created service client shared by the API."""

    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Optional[Client]:
        """
        Shared client, or None when SUPABASE_URL / SUPABASE_KEY are missing.

        Only use this where no user signs in (API requests, health checks).
        """
        if cls._instance is None:
            cls._instance = create_session_client()
        return cls._instance

    @classmethod
    def is_configured(cls) -> bool:
        url, key = _credentials()
        return bool(url and key)


def create_session_client() -> Optional[Client]:
    """
    Build a fresh, unshared client.

    Returns:
        Supabase client or None if credentials are missing or invalid
    """
    url, key = _credentials()
    if not url or not key:
        return None

    try:
        client = create_client(url, key)
        logger.info("Supabase client initialized")
        return client
    except Exception as e:
        logger.error(f"❌ Failed to create Supabase client: {e}")
        return None


def get_supabase() -> Optional[Client]:
    """Service client for code paths without a signed-in user."""
    return SupabaseClient.get_client()
