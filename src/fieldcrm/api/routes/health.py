"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and table availability."""
    from ...db import TABLES, get_supabase_client, is_supabase_configured

    if not is_supabase_configured():
        return {
            "configured": False,
            "message": "Supabase not configured. Set FIELDCRM_SUPABASE_URL and FIELDCRM_SUPABASE_KEY environment variables.",
        }

    supabase = get_supabase_client()
    tables: dict[str, bool] = {}
    for table in TABLES:
        try:
            supabase.table(table).select("*", count="exact").limit(1).execute()
            tables[table] = True
        except Exception:
            tables[table] = False

    return {
        "configured": True,
        "connected": any(tables.values()),
        "tables": tables,
        "message": "Database connected." if all(tables.values()) else "Database connected but some tables are missing.",
    }
