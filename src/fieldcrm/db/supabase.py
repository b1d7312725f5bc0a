"""Supabase client and table layout for the CRM backend."""

import logging
from functools import lru_cache

from supabase import Client, create_client

from ..config import settings

CUSTOMERS_TABLE = "customers"
CONTACTS_TABLE = "contacts"
VISITS_TABLE = "visits"
EXPOS_TABLE = "expos"
TEAM_TABLE = "marketing_team"

TABLES = (CUSTOMERS_TABLE, CONTACTS_TABLE, VISITS_TABLE, EXPOS_TABLE, TEAM_TABLE)

# Rows carry an ISO-8601 created_at so reloads keep collection order.
ORDER_COLUMN = "created_at"


def is_supabase_configured() -> bool:
    return bool(settings.supabase_url and settings.supabase_key)


@lru_cache()
def get_supabase_client() -> Client | None:
    """Cached client, or None when the service runs in memory only.

    Creating the client does not contact the server; failures surface on the first query.
    """
    if not is_supabase_configured():
        logging.info("Supabase credentials not configured; running with in-memory storage only")
        return None

    try:
        return create_client(settings.supabase_url, settings.supabase_key)
    except Exception as e:
        logging.error(f"Failed to create Supabase client for {settings.supabase_url}: {e}")
        return None
