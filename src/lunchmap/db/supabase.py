"""Supabase client shared by the record stores and the database health check."""

import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, create_client

from ..config import settings

logger = logging.getLogger(__name__)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Return the process-wide Supabase client, or None when credentials are missing.

    Creating the client does not contact the server; the first table query does.
    """
    if not settings.supabase_url or not settings.supabase_key:
        logger.warning("Supabase credentials not configured (LUNCHMAP_SUPABASE_URL / LUNCHMAP_SUPABASE_KEY)")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client for {settings.supabase_url}: {e}")
        return None


def count_rows(client: Client, table: str) -> Optional[int]:
    """Exact row count of ``table``; raises whatever the client raises."""
    response = client.table(table).select("id", count="exact").limit(1).execute()
    return response.count
