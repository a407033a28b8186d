"""Application configuration and settings management."""

from typing import Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

TravelMode = Literal["driving", "walking", "bicycling", "transit"]


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="LUNCHMAP_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Lunch Map API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root log level applied when the app starts.")

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    restaurants_table: str = "restaurants"
    reviews_table: str = "reviews"
    users_table: str = "users"

    # Directions provider
    google_maps_api_key: Optional[str] = Field(
        default=None,
        description="API key for the Google Directions and Distance Matrix endpoints.",
    )
    directions_base_url: str = "https://maps.googleapis.com/maps/api/directions/json"
    distance_matrix_base_url: str = "https://maps.googleapis.com/maps/api/distancematrix/json"
    directions_timeout_seconds: float = Field(default=10.0, gt=0.0)
    directions_max_retries: int = Field(
        default=0,
        ge=0,
        description="Transport-level retries for failed directions requests. Zero disables retrying.",
    )
    directions_backoff_seconds: float = Field(default=1.0, ge=0.0)
    default_travel_mode: TravelMode = "driving"
    default_alternatives: int = Field(default=3, ge=1)

    # Search
    default_search_radius_m: float = Field(default=1000.0, gt=0.0)
    max_search_radius_m: float = Field(default=50_000.0, gt=0.0)
    id_batch_size: int = Field(
        default=10,
        ge=1,
        description="Maximum identifiers accepted by a single 'id in list' store query.",
    )
    max_parallel_requests: int = Field(default=4, ge=1)

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
