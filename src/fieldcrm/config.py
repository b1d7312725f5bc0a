"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_REFERENCE_ROOT = Path(__file__).parent / "data" / "reference"


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="FIELDCRM_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Field CRM API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Root logger level.")
    geo_reference_file: Path = Field(
        default=_REFERENCE_ROOT / "india_geo.json",
        description="State to zone/city reference table.",
    )
    postal_code_file: Path = Field(
        default=_REFERENCE_ROOT / "postal_codes.json",
        description="Six digit postal code to city/state lookup table.",
    )
    timezone: str = Field(default="Asia/Kolkata", description="Timezone used for provenance stamps.")
    default_country: str = "India"
    default_personnel: str = Field(default="Mr. Bharat", description="Acting personnel when none is supplied.")
    team_seed_file: Path = Field(
        default=_REFERENCE_ROOT / "marketing_team.json",
        description="Roster loaded when the store holds no marketing team.",
    )
    system_admins: tuple[str, ...] = Field(
        default=("Mr. Bharat", "Salil Anand"),
        description="Team members who can never be removed or renamed.",
    )
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
            "http://localhost:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )

    @field_validator("geo_reference_file", "postal_code_file", "team_seed_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "system_admins", mode="before")
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
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        # Return empty tuple if value is None or empty
        return tuple()


settings = Settings()
