"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings
from ...db.supabase import count_rows, get_supabase_client

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


def _get_directions_health_check():
    """Lazy import to avoid startup failures."""
    from ...services.routing.directions_client import check_health as directions_health_check
    return directions_health_check


@router.get("/health/directions", status_code=status.HTTP_200_OK)
def health_directions() -> dict:
    """Check directions provider health."""
    if not settings.google_maps_api_key:
        return {"service": "directions", "healthy": False, "error": "Google Maps API key is not configured."}
    directions_health_check = _get_directions_health_check()
    return {"service": "directions", "healthy": directions_health_check()}


@router.get("/health/database", status_code=status.HTTP_200_OK)
def check_database() -> dict:
    """Check database connection and restaurant table status."""
    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set LUNCHMAP_SUPABASE_URL and LUNCHMAP_SUPABASE_KEY environment variables.",
        }

    try:
        count = count_rows(supabase, settings.restaurants_table)
        return {
            "configured": True,
            "connected": True,
            "restaurants_count": count,
            "message": f"Database connected. Found {count} restaurants.",
        }
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
