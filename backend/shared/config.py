"""
Centralized configuration for the Celestia backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., SUPABASE_*, PERSONA_*).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Celestia API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Supabase (Google sign-in is configured as a Supabase Auth provider)
    supabase_url: str = ""
    supabase_anon_key: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""

    # Frontend URLs (for redirects)
    frontend_url: str = "http://localhost:3000"

    # Persona images
    persona_bucket: str = "persona-images"
    persona_max_upload_bytes: int = 5 * 1024 * 1024
    persona_max_dimension: int = 1024
    persona_jpeg_quality: int = 80

    # Profile resolution after sign-in
    profile_fetch_max_retries: int = 5
    profile_fetch_base_delay: float = 1.0  # seconds

    # Credits
    credits_poll_interval: float = 2.0  # seconds


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
