"""Database clients and utilities."""

from .supabase import count_rows, get_supabase_client

__all__ = ["count_rows", "get_supabase_client"]
