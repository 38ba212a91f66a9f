"""
Ludo - Supabase Client

Cached client for the optional profile-statistics backend. Games run fully
offline; only ProfileManager needs a client.
"""

import logging
from functools import lru_cache

from supabase import Client, create_client

from src.config.settings import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """
    Build the profile backend client from settings.

    Raises:
        RuntimeError: If SUPABASE_URL or SUPABASE_ANON_KEY is unset
    """
    settings = get_settings()
    if not settings.profiles_enabled:
        raise RuntimeError(
            "Supabase is not configured (set SUPABASE_URL and SUPABASE_ANON_KEY)."
        )
    logger.info("Connecting profile store at %s", settings.supabase_url)
    return create_client(settings.supabase_url, settings.supabase_anon_key)
