"""
Supabase client used by the Firstmakers repositories.

One service-role client is shared by the users, devices and sketches
repositories. Row Level Security is bypassed, so every repository query
must carry the owner's username; the service layer supplies it from the
verified access token.
"""

from typing import Optional
from supabase import create_client, Client

from .config import get_settings

_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the shared service-role client, creating it on first use.

    Token verification never calls this, so routes that only check the
    bearer token keep working when the store is not configured.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


def reset_client_cache() -> None:
    """Drop the cached client so the next call reads settings again."""
    global _service_client
    _service_client = None
