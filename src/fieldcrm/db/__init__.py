"""Database clients and utilities."""

from .supabase import TABLES, get_supabase_client, is_supabase_configured

__all__ = ["TABLES", "get_supabase_client", "is_supabase_configured"]
