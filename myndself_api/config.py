"""
Application configuration for the MyndSelf API.

Settings are read from environment variables (or a local ``.env`` file) via
pydantic-settings. ``get_settings()`` is cached, so there is one instance per
process.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    reload: bool = False

    # CORS: "*" or a comma-separated list of origins
    cors_origin: str = "*"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def allowed_origins(self) -> list[str]:
        """The CORS allow-list as a list of origins."""
        origins = [o.strip() for o in self.cors_origin.split(",") if o.strip()]
        return origins or ["*"]


@lru_cache
def get_settings() -> Settings:
    return Settings()
